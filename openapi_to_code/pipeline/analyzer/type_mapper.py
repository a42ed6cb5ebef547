"""
Type expression generator.

Converts any schema node into a TypeScript type expression. References
render as the bare shape name (never the referenced body), which keeps
cyclic shape graphs finite. Inline enums found on properties are hoisted
into ctx.inline_enums.
"""

from __future__ import annotations

from ...utils import format_literal, format_property_name, to_camel_case, to_pascal_case
from ..config import PropertyNameStyle
from ..schema_ast.nodes import (
    ArrayNode,
    CompositionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaNode,
    UnknownNode,
)
from .context import DiscriminatorInfo, GenerationContext

UNKNOWN = "unknown"
OPEN_MAP = "Record<string, unknown>"
INDEX_SIGNATURE = "[key: string]: unknown"

DATE_FORMATS = {"date", "date-time"}

_OPENERS = {"(": ")", "{": "}", "[": "]", "<": ">"}
_CLOSERS = set(_OPENERS.values())


def split_top_level(expr: str, separator: str) -> list[str]:
    """
    Split a type expression on a one-character operator outside of any
    brackets or string literals.

    Example:
        split_top_level("{ a: 'x' | 'y' } | B", "|") -> ["{ a: 'x' | 'y' }", "B"]
    """
    members = []
    depth = 0
    in_string = False
    escaped = False
    start = 0
    for i, ch in enumerate(expr):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == "'":
                in_string = False
        elif ch == "'":
            in_string = True
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == separator and depth == 0:
            members.append(expr[start:i].strip())
            start = i + 1
    members.append(expr[start:].strip())
    return members


def _is_compound(expr: str) -> bool:
    return len(split_top_level(expr, "|")) > 1 or len(split_top_level(expr, "&")) > 1


def _parenthesize(expr: str) -> str:
    return f"({expr})" if _is_compound(expr) else expr


def to_type_expression(
    node: SchemaNode | None,
    ctx: GenerationContext,
    parent_name: str | None = None,
    property_name: str | None = None,
) -> str:
    """
    Convert a schema node to a TypeScript type expression.

    Args:
        node: The schema node
        ctx: Generation context (inline enums and diagnostics are appended to it)
        parent_name: Name of the enclosing shape, used to name hoisted enums
        property_name: Name of the property being typed, used to name hoisted enums

    Returns:
        The type expression
    """
    if node is None:
        return UNKNOWN

    if isinstance(node, RefNode):
        return ctx.resolver.ref_name(node.ref_path)

    if isinstance(node, EnumNode):
        if parent_name and property_name:
            enum_name = f"{parent_name}{to_pascal_case(property_name)}"
            ctx.hoist_enum(enum_name, node.values, node.source_path)
            return enum_name
        if not node.values:
            return "never"
        return " | ".join(format_literal(v) for v in node.values)

    if isinstance(node, PrimitiveNode):
        return _primitive_type(node, ctx)

    if isinstance(node, ArrayNode):
        if node.items is None:
            return f"{UNKNOWN}[]"
        item_type = to_type_expression(node.items, ctx, parent_name, property_name)
        return f"{_parenthesize(item_type)}[]"

    if isinstance(node, ObjectNode):
        return _object_type(node, ctx, parent_name, property_name)

    if isinstance(node, CompositionNode):
        member_types = [to_type_expression(m, ctx, parent_name, property_name) for m in node.members]
        if not member_types:
            return UNKNOWN
        if node.kind == "allOf":
            return " & ".join(_parenthesize(t) if len(split_top_level(t, "|")) > 1 else t for t in member_types)
        return " | ".join(member_types)

    if isinstance(node, UnknownNode):
        if node.raw:
            ctx.warn(parent_name or "(inline)", "schema has no recognised type; rendered as unknown", node.source_path)
        return UNKNOWN

    raise TypeError(f"Unhandled schema node: {type(node).__name__}")


def _primitive_type(node: PrimitiveNode, ctx: GenerationContext) -> str:
    if node.type_name == "string":
        if node.format in DATE_FORMATS:
            return ctx.config.date_type.value
        return "string"
    if node.type_name in ("number", "integer"):
        return "number"
    if node.type_name == "boolean":
        return "boolean"
    return "null"


def free_form_value_type(node: ObjectNode, ctx: GenerationContext, parent_name: str | None, property_name: str | None = None) -> str | None:
    """
    Type of an object's additionalProperties values.

    Returns None when there are none, UNKNOWN when any value is allowed,
    and the value type expression otherwise.
    """
    additional = node.additional_properties
    if additional is None or additional is False:
        return None
    if additional is True:
        return UNKNOWN
    return to_type_expression(additional, ctx, parent_name, property_name)


def _object_type(node: ObjectNode, ctx: GenerationContext, parent_name: str | None, property_name: str | None) -> str:
    value_type = free_form_value_type(node, ctx, parent_name, property_name)

    if not node.properties:
        if value_type is None:
            return OPEN_MAP
        return f"Record<string, {value_type}>"

    members = [f"{head}: {type_str}" for head, type_str in property_parts(node, ctx, parent_name)]
    if value_type == UNKNOWN:
        members.append(INDEX_SIGNATURE)
    structural = "{ " + "; ".join(members) + " }"

    if value_type is None or value_type == UNKNOWN:
        return structural

    ctx.warn(
        parent_name or "(inline)",
        f"fixed properties combined with typed additionalProperties; rendered as intersection with Record<string, {value_type}>",
        node.source_path,
    )
    return f"{structural} & Record<string, {value_type}>"


def property_name_for(name: str, ctx: GenerationContext) -> str:
    """Apply the configured naming style to a property or parameter name."""
    if ctx.config.property_name_style == PropertyNameStyle.CAMEL_CASE:
        return to_camel_case(name)
    return name


def render_property(
    prop: PropertyDef,
    ctx: GenerationContext,
    parent_name: str | None,
    discriminator: DiscriminatorInfo | None = None,
) -> tuple[str, str]:
    """
    Render one property.

    Returns:
        (head, type) where head is the possibly quoted name with its
        optional marker, e.g. ("'@type'?", "string")
    """
    name = format_property_name(property_name_for(prop.name, ctx))

    # Discriminator properties are always required and typed as their literal
    if discriminator is not None and prop.name == discriminator.property_name:
        return name, format_literal(discriminator.literal_value)

    type_str = to_type_expression(prop.type_node, ctx, parent_name, prop.name)
    nullable = _is_nullable(prop.type_node, ctx)

    # A literal null member (e.g. anyOf [A, {type: null}]) marks nullability
    members = split_top_level(type_str, "|")
    if len(members) > 1 and "null" in members:
        type_str = " | ".join(m for m in members if m != "null")
        nullable = True

    if nullable:
        null_type = ctx.config.nullable_type.value
        if null_type not in split_top_level(type_str, "|"):
            type_str = f"{type_str} | {null_type}"

    optional_mark = "" if prop.is_required else "?"
    return f"{name}{optional_mark}", type_str


def property_parts(
    node: ObjectNode,
    ctx: GenerationContext,
    parent_name: str | None,
    discriminator: DiscriminatorInfo | None = None,
) -> list[tuple[str, str]]:
    """Render every property of an object in document order."""
    return [render_property(prop, ctx, parent_name, discriminator) for prop in node.properties]


def _is_nullable(node: SchemaNode | None, ctx: GenerationContext) -> bool:
    if node is None:
        return False
    if node.nullable:
        return True
    return ctx.resolver.resolve_if_reference(node).nullable
