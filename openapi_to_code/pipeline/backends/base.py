"""
Base class for code generation backends.

Holds the configuration and the Jinja2 environment used to assemble
generated files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from ..config import CodeGeneratorConfig

GENERATION_COMMENT = "// Generated by openapi_to_code - do not edit manually"


class TemplateBackend:
    """Base class for backends that render files from templates."""

    # Template directory name
    TEMPLATE_LANG: str = "typescript"

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, **context: Any) -> str:
        """Render a template with the generation comment flag set."""
        template = self.jinja_env.get_template(template_name)
        return template.render(
            generation_comment=GENERATION_COMMENT if self.config.add_generation_comment else None,
            **context,
        )
