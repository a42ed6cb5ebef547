"""
Atomic file writer for generated output.

Ensures that an interrupted run never leaves a half-written file in the
output directory.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Writes files atomically.

    Each file is written to a temporary file in the target directory
    and then renamed over the destination. Rename is atomic when source
    and destination are on the same filesystem.
    """

    def write(self, path: Path, content: str) -> None:
        """Write content to a file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

        logger.debug("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))

    def write_all(self, directory: Path, files: dict[str, str]) -> list[Path]:
        """Write a file name -> content mapping into a directory.

        Returns:
            The written paths, in mapping order
        """
        written = []
        for name, content in files.items():
            path = directory / name
            self.write(path, content)
            written.append(path)
        return written
