"""
TypeScript declaration backend.

Turns each named shape into a top-level declaration (type alias, enum,
interface or union) and assembles types.ts.
"""

from __future__ import annotations

import logging
from typing import Any

from ...utils import enum_value_to_key, format_literal
from ..analyzer.context import GenerationContext
from ..analyzer.type_mapper import INDEX_SIGNATURE, UNKNOWN, free_form_value_type, property_parts, to_type_expression
from ..config import EnumType
from ..schema_ast.nodes import CompositionNode, EnumNode, NamedShape, ObjectNode, RefNode, SchemaNode
from .base import TemplateBackend

logger = logging.getLogger(__name__)

NO_SCHEMAS = "// No schemas found in OpenAPI spec\n"


class TypesBackend(TemplateBackend):
    """Generates types.ts from the named shapes of a document."""

    def generate(self, shapes: list[NamedShape], ctx: GenerationContext) -> str:
        """
        Generate the declarations file.

        Inline enums discovered while emitting declarations are placed
        before the declarations, in discovery order.

        Args:
            shapes: Named shapes in document order
            ctx: Generation context (its discriminator map must be filled)

        Returns:
            The contents of types.ts
        """
        if not shapes:
            return NO_SCHEMAS

        declarations = [self.emit_declaration(shape.name, shape.node, ctx) for shape in shapes]

        shape_names = {shape.name for shape in shapes}
        for inline_enum in ctx.inline_enums:
            if inline_enum.name in shape_names:
                ctx.warn(inline_enum.name, "hoisted inline enum has the same name as a schema; the declarations will clash")

        inline_enums = [self.emit_enum(e.name, e.values) for e in ctx.inline_enums]
        logger.debug("Emitted %d declarations and %d inline enums", len(declarations), len(inline_enums))

        return self.render("types.ts.jinja2", inline_enums=inline_enums, declarations=declarations)

    def emit_declaration(self, name: str, node: SchemaNode, ctx: GenerationContext) -> str:
        """
        Emit the declaration for one named shape.

        Args:
            name: Shape name
            node: Parsed schema of the shape
            ctx: Generation context

        Returns:
            Declaration text (no trailing newline)
        """
        if isinstance(node, RefNode):
            return f"export type {name} = {to_type_expression(node, ctx)};"

        if isinstance(node, EnumNode):
            return self.emit_enum(name, node.values)

        if isinstance(node, CompositionNode):
            if node.kind == "allOf":
                return self._emit_all_of(name, node, ctx)
            return f"export type {name} = {to_type_expression(node, ctx, name)};"

        if isinstance(node, ObjectNode):
            return self._emit_object(name, node, ctx)

        return f"export type {name} = {to_type_expression(node, ctx, name)};"

    def _emit_all_of(self, name: str, node: CompositionNode, ctx: GenerationContext) -> str:
        """Emit an allOf as an extending interface when possible, else as an intersection."""
        references = node.references
        inline = node.inline_members

        if len(references) == 1 and (not inline or (len(inline) == 1 and isinstance(inline[0], ObjectNode))):
            base = ctx.resolver.ref_name(references[0].ref_path)
            extension = inline[0] if inline else ObjectNode()
            value_type = free_form_value_type(extension, ctx, name)
            if value_type is None or value_type == UNKNOWN:
                return self._interface(f"{name} extends {base}", extension, ctx, name, value_type)

        if len(references) > 1:
            bases = ", ".join(ctx.resolver.ref_name(r.ref_path) for r in references)
            ctx.warn(name, f"allOf combines multiple base references ({bases}); rendered as intersection type", node.source_path)

        return f"export type {name} = {to_type_expression(node, ctx, name)};"

    def _emit_object(self, name: str, node: ObjectNode, ctx: GenerationContext) -> str:
        value_type = free_form_value_type(node, ctx, name)

        if not node.properties and value_type is not None:
            return f"export type {name} = Record<string, {value_type}>;"

        if value_type is None or value_type == UNKNOWN:
            return self._interface(name, node, ctx, name, value_type)

        ctx.warn(
            name,
            f"fixed properties combined with typed additionalProperties; rendered as intersection with Record<string, {value_type}>",
            node.source_path,
        )
        lines = [f"  {head}: {type_str};" for head, type_str in property_parts(node, ctx, name, ctx.discriminators.get(name))]
        body = "\n".join(lines)
        return f"export type {name} = {{\n{body}\n}} & Record<string, {value_type}>;"

    def _interface(self, heading: str, node: ObjectNode, ctx: GenerationContext, name: str, value_type: str | None) -> str:
        lines = [f"  {head}: {type_str};" for head, type_str in property_parts(node, ctx, name, ctx.discriminators.get(name))]
        if value_type == UNKNOWN:
            lines.append(f"  {INDEX_SIGNATURE};")
        if not lines:
            return f"export interface {heading} {{}}"
        body = "\n".join(lines)
        return f"export interface {heading} {{\n{body}\n}}"

    def emit_enum(self, name: str, values: list[Any]) -> str:
        """
        Emit a named enumeration in the configured style.

        Args:
            name: Enum name
            values: String or number values

        Returns:
            Declaration text
        """
        if self.config.enum_type == EnumType.UNION:
            union = " | ".join(format_literal(v) for v in values) or "never"
            return f"export type {name} = {union};"

        if self.config.enum_type == EnumType.ENUM:
            if not values:
                return f"export enum {name} {{}}"
            entries = "\n".join(f"  {enum_value_to_key(v)} = {format_literal(v)}," for v in values)
            return f"export enum {name} {{\n{entries}\n}}"

        entries = "\n".join(f"  {enum_value_to_key(v)}: {format_literal(v)}," for v in values)
        body = f"{{\n{entries}\n}}" if values else "{}"
        return f"export const {name} = {body} as const;\n\nexport type {name} = typeof {name}[keyof typeof {name}];"
