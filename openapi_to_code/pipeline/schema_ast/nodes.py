"""
AST (Abstract Syntax Tree) node definitions for OpenAPI schemas.

These nodes represent the parsed structure of a schema object before
any reference resolution or TypeScript-specific processing. The set of
node classes is closed: every schema parses to exactly one of them, and
anything the parser cannot classify becomes an UnknownNode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Location of the node in the document (for error messages)
    source_path: str = ""

    # OpenAPI 3.0 "nullable: true"
    nullable: bool = False


@dataclass
class PrimitiveNode(SchemaNode):
    """Represents a primitive type (string, integer, number, boolean, null)."""

    type_name: str = ""
    format: str | None = None


@dataclass
class EnumNode(SchemaNode):
    """Represents an enumeration of string or number values."""

    values: list[Any] = field(default_factory=list)


@dataclass
class RefNode(SchemaNode):
    """Represents a $ref (unresolved reference)."""

    ref_path: str = ""  # e.g., "#/components/schemas/Pet"


@dataclass
class ArrayNode(SchemaNode):
    """Represents an array type."""

    items: SchemaNode | None = None


@dataclass
class PropertyDef:
    """Represents a property in an object."""

    name: str = ""
    type_node: SchemaNode | None = None
    is_required: bool = False


@dataclass
class ObjectNode(SchemaNode):
    """Represents an object type.

    additional_properties is None when absent, a bool when given as
    true/false, or a SchemaNode for a typed free-form value.
    """

    properties: list[PropertyDef] = field(default_factory=list)
    required: list[str] = field(default_factory=list)
    additional_properties: SchemaNode | bool | None = None

    def has_free_form_values(self) -> bool:
        return self.additional_properties is not None and self.additional_properties is not False


@dataclass
class Discriminator:
    """Discriminator metadata attached to a oneOf/anyOf composition."""

    property_name: str = ""
    mapping: dict[str, str] = field(default_factory=dict)  # literal value -> target


@dataclass
class CompositionNode(SchemaNode):
    """Represents an allOf, oneOf or anyOf composition."""

    kind: str = "allOf"  # "allOf", "oneOf" or "anyOf"
    members: list[SchemaNode] = field(default_factory=list)
    discriminator: Discriminator | None = None

    @property
    def references(self) -> list[RefNode]:
        return [m for m in self.members if isinstance(m, RefNode)]

    @property
    def inline_members(self) -> list[SchemaNode]:
        return [m for m in self.members if not isinstance(m, RefNode)]


@dataclass
class UnknownNode(SchemaNode):
    """A schema that matches no other node kind (renders as unknown)."""

    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class NamedShape:
    """An entry of components.schemas."""

    name: str = ""
    node: SchemaNode | None = None
