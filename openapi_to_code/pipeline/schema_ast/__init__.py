"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node definitions and parser for OpenAPI schemas.
"""

from __future__ import annotations

from .nodes import (
    ArrayNode,
    CompositionNode,
    Discriminator,
    EnumNode,
    NamedShape,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaNode,
    UnknownNode,
)
from .parser import SCHEMAS_PATH, SchemaParser

__all__ = [
    "SchemaNode",
    "ObjectNode",
    "ArrayNode",
    "RefNode",
    "PrimitiveNode",
    "EnumNode",
    "CompositionNode",
    "Discriminator",
    "PropertyDef",
    "NamedShape",
    "UnknownNode",
    "SchemaParser",
    "SCHEMAS_PATH",
]
