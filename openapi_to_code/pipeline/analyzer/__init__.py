"""
Analyzer module.

Resolves references, collects discriminators, maps schema nodes to
TypeScript type expressions and parses operations.
"""

from __future__ import annotations

from .context import Diagnostic, DiscriminatorInfo, GenerationContext, InlineEnum
from .discriminators import collect_discriminators
from .operations import ParsedOperation, ParsedParameter, group_by_tag, parse_operations
from .reference_resolver import ReferenceResolver
from .type_mapper import to_type_expression

__all__ = [
    "GenerationContext",
    "Diagnostic",
    "DiscriminatorInfo",
    "InlineEnum",
    "ReferenceResolver",
    "collect_discriminators",
    "to_type_expression",
    "ParsedOperation",
    "ParsedParameter",
    "parse_operations",
    "group_by_tag",
]
