"""
OpenAPI schema parser that builds an AST.

Phase 1 of the pipeline: parse raw schema objects into SchemaNode
variants without resolving references or doing TypeScript-specific
processing.
"""

from __future__ import annotations

from typing import Any

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

SCHEMAS_PATH = "#/components/schemas"


class SchemaParser:
    """Parses OpenAPI schema objects into an AST."""

    PRIMITIVE_TYPES = {"string", "integer", "number", "boolean", "null"}

    COMPOSITION_KINDS = ("allOf", "oneOf", "anyOf")

    def parse_shapes(self, document: dict[str, Any]) -> list[NamedShape]:
        """
        Parse every entry of components.schemas, in document order.

        Args:
            document: The OpenAPI document

        Returns:
            List of NamedShape
        """
        schemas = (document.get("components") or {}).get("schemas") or {}
        return [NamedShape(name=name, node=self.parse(schema, f"{SCHEMAS_PATH}/{name}")) for name, schema in schemas.items()]

    def parse(self, schema: Any, path: str = "#") -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in the document (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        if not isinstance(schema, dict):
            return UnknownNode(source_path=path)

        nullable = schema.get("nullable") is True

        # Handle $ref
        if "$ref" in schema and isinstance(schema["$ref"], str):
            return RefNode(ref_path=schema["$ref"], source_path=path, nullable=nullable)

        # Handle enum (takes priority over "type")
        if isinstance(schema.get("enum"), list):
            # A null value makes the enum nullable instead of becoming a member
            values = [v for v in schema["enum"] if v is not None]
            nullable = nullable or len(values) < len(schema["enum"])
            return EnumNode(values=values, source_path=path, nullable=nullable)

        # Handle allOf/oneOf/anyOf
        for kind in self.COMPOSITION_KINDS:
            if isinstance(schema.get(kind), list):
                return self._parse_composition_node(schema, kind, path, nullable)

        if "type" in schema:
            return self._parse_type_node(schema, path, nullable)

        # Handle object with properties but no type
        if "properties" in schema or "additionalProperties" in schema:
            return self._parse_object_node(schema, path, nullable)

        return UnknownNode(raw=schema, source_path=path, nullable=nullable)

    def _parse_composition_node(self, schema: dict[str, Any], kind: str, path: str, nullable: bool) -> CompositionNode:
        """Parse an allOf, oneOf or anyOf node."""
        members = [self.parse(member, f"{path}/{kind}/{i}") for i, member in enumerate(schema[kind])]

        discriminator = None
        raw_discriminator = schema.get("discriminator")
        if kind != "allOf" and isinstance(raw_discriminator, dict) and raw_discriminator.get("propertyName"):
            discriminator = Discriminator(
                property_name=raw_discriminator["propertyName"],
                mapping=dict(raw_discriminator.get("mapping") or {}),
            )

        return CompositionNode(
            kind=kind,
            members=members,
            discriminator=discriminator,
            source_path=path,
            nullable=nullable,
        )

    def _parse_type_node(self, schema: dict[str, Any], path: str, nullable: bool) -> SchemaNode:
        """Parse a type-based node."""
        type_value = schema["type"]

        # OpenAPI 3.1 type arrays, e.g. ["string", "null"]
        if isinstance(type_value, list):
            types = [t for t in type_value if t != "null"]
            if len(types) < len(type_value):
                nullable = True
            if len(types) == 1:
                type_value = types[0]
            elif not types:
                type_value = "null"
            else:
                variants = [self._parse_type_node({**schema, "type": t}, f"{path}/type/{t}", False) for t in types]
                return CompositionNode(kind="anyOf", members=variants, source_path=path, nullable=nullable)

        if type_value == "array":
            items = schema.get("items")
            return ArrayNode(
                items=self.parse(items, f"{path}/items") if items is not None else None,
                source_path=path,
                nullable=nullable,
            )

        if type_value == "object":
            return self._parse_object_node(schema, path, nullable)

        if type_value in self.PRIMITIVE_TYPES:
            return PrimitiveNode(
                type_name=type_value,
                format=schema.get("format"),
                source_path=path,
                nullable=nullable,
            )

        return UnknownNode(raw=schema, source_path=path, nullable=nullable)

    def _parse_object_node(self, schema: dict[str, Any], path: str, nullable: bool) -> ObjectNode:
        """Parse an object type node."""
        required_fields = list(schema.get("required") or [])

        properties = []
        for prop_name, prop_schema in (schema.get("properties") or {}).items():
            properties.append(
                PropertyDef(
                    name=prop_name,
                    type_node=self.parse(prop_schema, f"{path}/properties/{prop_name}"),
                    is_required=prop_name in required_fields,
                )
            )

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            # An empty schema accepts any value
            additional = self.parse(additional, f"{path}/additionalProperties") if additional else True
        elif not isinstance(additional, bool):
            additional = None

        return ObjectNode(
            properties=properties,
            required=required_fields,
            additional_properties=additional,
            source_path=path,
            nullable=nullable,
        )
