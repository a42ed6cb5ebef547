"""
Pipeline generator.

Drives one full generation pass over a document:

1. Parse components.schemas into named shapes
2. Collect discriminators
3. Emit types.ts (declarations and hoisted inline enums)
4. Emit base.ts (runtime base client)
5. Parse operations, group them by tag (folding tags that give the same
   client name) and emit one client file per tag
6. Emit index.ts re-exporting everything
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .analyzer.context import Diagnostic, GenerationContext
from .analyzer.discriminators import collect_discriminators
from .analyzer.operations import group_by_tag, parse_operations
from .backends.client_backend import ClientBackend, merge_tag_groups
from .backends.types_backend import TypesBackend
from .config import CodeGeneratorConfig

logger = logging.getLogger(__name__)

TYPES_FILE = "types.ts"
BASE_FILE = "base.ts"
INDEX_FILE = "index.ts"


@dataclass
class GenerationResult:
    """Output of one generation pass."""

    # File name -> contents, in emission order
    files: dict[str, str] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)


class PipelineGenerator:
    """Generates a TypeScript client package from an OpenAPI document."""

    def __init__(self, document: dict[str, Any], config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            document: Parsed and validated OpenAPI document
            config: Code generation configuration
        """
        self.document = document
        self.config = config or CodeGeneratorConfig()
        self.types_backend = TypesBackend(self.config)
        self.client_backend = ClientBackend(self.config)

    def generate(self) -> GenerationResult:
        """
        Run a generation pass.

        Each call uses a fresh context, so repeated calls give identical
        output.

        Returns:
            GenerationResult with the files and the diagnostics

        Raises:
            CodegenError: On fatal input problems (bad references,
                conflicting discriminators)
        """
        ctx = GenerationContext.for_document(self.document, self.config)
        files: dict[str, str] = {}

        shapes = ctx.resolver.parser.parse_shapes(self.document)
        ctx.discriminators = collect_discriminators(shapes, ctx.resolver)
        logger.info("Generating declarations for %d schemas", len(shapes))
        files[TYPES_FILE] = self.types_backend.generate(shapes, ctx)

        files[BASE_FILE] = self.client_backend.render(BASE_FILE + ".jinja2", base_class=self.client_backend.base_class)

        groups = merge_tag_groups(group_by_tag(parse_operations(self.document, ctx.resolver)), ctx)
        logger.info("Generating %d clients", len(groups))
        clients = [self.client_backend.emit_client(tag, operations, ctx) for tag, operations in groups.items()]
        for client in clients:
            files[client.file_name] = client.content

        files[INDEX_FILE] = self.client_backend.render(
            INDEX_FILE + ".jinja2",
            clients=sorted(clients, key=lambda c: c.class_name),
        )

        if ctx.diagnostics:
            logger.info("Generation finished with %d diagnostics", len(ctx.diagnostics))
        return GenerationResult(files=files, diagnostics=list(ctx.diagnostics))
