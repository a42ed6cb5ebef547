"""
Exceptions raised by the generator.

Every exception here is fatal: generation of the whole document stops.
Recoverable problems are reported as Diagnostic values instead (see
analyzer.context).
"""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for all generator errors."""

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint
        super().__init__(f"{message}. {hint}" if hint else message)


class UnsupportedRefError(CodegenError):
    """Raised for $ref forms the generator cannot follow.

    This covers URL references, references into other files, and
    internal pointers that do not target components.schemas where a
    shape name is required.
    """


class InvalidPointerPathError(CodegenError):
    """Raised when a pointer walks through something that is not a container."""


class PointerNotFoundError(CodegenError):
    """Raised when a pointer's target does not exist in the document."""


class DiscriminatorConflictError(CodegenError):
    """Raised when one shape is claimed by discriminated unions that disagree."""


class SpecLoadError(CodegenError):
    """Raised when the OpenAPI document cannot be loaded or is not valid."""


class ConfigError(CodegenError):
    """Raised when the configuration file or an option value is invalid."""
