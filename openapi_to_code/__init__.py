"""OpenAPI to TypeScript Code Generator

A Python package for generating typed TypeScript clients from OpenAPI 3
documents: one declarations file for the component schemas and one
client class per operation tag.
"""

__version__ = "0.1.0"

from .pipeline import (
    AtomicWriter,
    CodegenError,
    CodeGeneratorConfig,
    Diagnostic,
    GenerationResult,
    PipelineGenerator,
    ProjectConfig,
    load_config,
)

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "ProjectConfig",
    "load_config",
    "Diagnostic",
    "CodegenError",
    "AtomicWriter",
]
