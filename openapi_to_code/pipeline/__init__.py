"""
Pipeline - OpenAPI to TypeScript client generator.

Generation runs in phases over one in-memory document:

1. Phase 1 (Parser): Parse components.schemas into the Schema AST
2. Phase 2 (Analyzer): Resolve references, collect discriminators, parse operations
3. Phase 3 (Backends): Emit declarations and clients through templates
4. Phase 4 (Writer): Write the generated files atomically
"""

from __future__ import annotations

from .analyzer.context import Diagnostic, GenerationContext
from .config import (
    ClientSuffix,
    CodeGeneratorConfig,
    DateType,
    EnumType,
    MethodNameStyle,
    NullableType,
    ProjectConfig,
    PropertyNameStyle,
    load_config,
)
from .errors import (
    CodegenError,
    ConfigError,
    DiscriminatorConflictError,
    InvalidPointerPathError,
    PointerNotFoundError,
    SpecLoadError,
    UnsupportedRefError,
)
from .generator import GenerationResult, PipelineGenerator
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "GenerationContext",
    "Diagnostic",
    "CodeGeneratorConfig",
    "ProjectConfig",
    "load_config",
    "DateType",
    "EnumType",
    "PropertyNameStyle",
    "NullableType",
    "ClientSuffix",
    "MethodNameStyle",
    "CodegenError",
    "ConfigError",
    "DiscriminatorConflictError",
    "InvalidPointerPathError",
    "PointerNotFoundError",
    "SpecLoadError",
    "UnsupportedRefError",
    "AtomicWriter",
]
