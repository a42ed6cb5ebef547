"""
State threaded through one generation pass.

A GenerationContext is created per document and passed explicitly into
every call that needs it. Nothing here is module-level, so several
documents can be generated within one process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import CodeGeneratorConfig
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)


@dataclass
class InlineEnum:
    """An enum found inside a property and hoisted to a named declaration."""

    name: str = ""
    values: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class DiscriminatorInfo:
    """Discriminator property and literal value for one variant shape."""

    property_name: str
    literal_value: str


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem; generation continues with a fallback rendering."""

    shape: str
    message: str
    source_path: str = ""

    def __str__(self) -> str:
        location = f" ({self.source_path})" if self.source_path else ""
        return f"{self.shape}: {self.message}{location}"


@dataclass
class GenerationContext:
    """Context for one generation pass over one document."""

    document: dict[str, Any]
    config: CodeGeneratorConfig
    resolver: ReferenceResolver
    inline_enums: list[InlineEnum] = field(default_factory=list)
    discriminators: dict[str, DiscriminatorInfo] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def for_document(cls, document: dict[str, Any], config: CodeGeneratorConfig | None = None) -> GenerationContext:
        return cls(document=document, config=config or CodeGeneratorConfig(), resolver=ReferenceResolver(document))

    def warn(self, shape: str, message: str, source_path: str = "") -> None:
        """Record a diagnostic and log it."""
        diagnostic = Diagnostic(shape=shape, message=message, source_path=source_path)
        self.diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic)

    def hoist_enum(self, name: str, values: list[Any], source_path: str = "") -> None:
        """Register an inline enum unless one with the same name already exists."""
        for existing in self.inline_enums:
            if existing.name == name:
                if existing.values != values:
                    self.warn(name, f"inline enum values {values!r} conflict with earlier {existing.values!r}; keeping the first", source_path)
                return
        self.inline_enums.append(InlineEnum(name=name, values=list(values)))
