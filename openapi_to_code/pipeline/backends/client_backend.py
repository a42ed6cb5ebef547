"""
TypeScript client backend.

Emits one client class per tag. Each operation becomes an async method
that delegates to the base client's request helper.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ...utils import format_property_name, quote_string, to_camel_case, to_pascal_case
from ..analyzer.context import GenerationContext
from ..analyzer.operations import ParsedOperation, ParsedParameter
from ..analyzer.type_mapper import property_name_for, to_type_expression
from ..schema_ast.nodes import ArrayNode, CompositionNode, ObjectNode, RefNode, SchemaNode
from .base import TemplateBackend

logger = logging.getLogger(__name__)

VOID = "void"

REQUEST_OPTIONS_ARG = "requestOptions?: { headers?: Record<string, string> }"

_TAG_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_FILE_NAME_CHARS = re.compile(r"[^a-z0-9]")
_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_$]")


@dataclass
class GeneratedClient:
    """A rendered client file."""

    tag: str
    class_name: str
    file_name: str
    content: str
    operations: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)

    @property
    def module(self) -> str:
        """Module path used in import statements (file name without .ts)."""
        return self.file_name[: -len(".ts")]


def client_class_name(tag: str, ctx: GenerationContext) -> str:
    """Class name for a tag, e.g. "pet-store" -> "PetStoreClient"."""
    words = _TAG_SEPARATORS.split(tag)
    return "".join(to_pascal_case(word) for word in words) + ctx.config.client_suffix.value


def client_file_name(tag: str) -> str:
    """File name for a tag, e.g. "Pet Store" -> "pet-store-client.ts"."""
    return f"{_FILE_NAME_CHARS.sub('-', tag.lower())}-client.ts"


def client_class_names(groups: dict[str, list[ParsedOperation]], ctx: GenerationContext) -> list[str]:
    return [client_class_name(tag, ctx) for tag in groups]


def client_file_names(groups: dict[str, list[ParsedOperation]]) -> list[str]:
    return [client_file_name(tag) for tag in groups]


def referenced_names(node: SchemaNode | None, ctx: GenerationContext) -> set[str]:
    """
    Names of the shapes a node references directly.

    Arrays, inline objects and compositions are walked; references are
    not followed, so cyclic graphs terminate.
    """
    if node is None:
        return set()
    if isinstance(node, RefNode):
        return {ctx.resolver.ref_name(node.ref_path)}
    if isinstance(node, ArrayNode):
        return referenced_names(node.items, ctx)
    if isinstance(node, ObjectNode):
        names = set()
        for prop in node.properties:
            names |= referenced_names(prop.type_node, ctx)
        if isinstance(node.additional_properties, SchemaNode):
            names |= referenced_names(node.additional_properties, ctx)
        return names
    if isinstance(node, CompositionNode):
        names = set()
        for member in node.members:
            names |= referenced_names(member, ctx)
        return names
    return set()


def merge_tag_groups(groups: dict[str, list[ParsedOperation]], ctx: GenerationContext) -> dict[str, list[ParsedOperation]]:
    """
    Fold tags that would produce the same client class or file into the
    first tag discovered, e.g. "Pets" and "pets" both give PetsClient.

    Each folded tag records a diagnostic. An operation carrying both
    tags is kept once.
    """
    merged: dict[str, list[ParsedOperation]] = {}
    owners: dict[str, str] = {}
    for tag, operations in groups.items():
        file_name = client_file_name(tag)
        class_name = client_class_name(tag, ctx)
        owner = owners.get(file_name) or owners.get(class_name)
        if owner is None:
            merged[tag] = list(operations)
            owners[file_name] = owners[class_name] = tag
            continue

        ctx.warn(class_name, f"tags '{owner}' and '{tag}' map to the same client; operations of '{tag}' are merged into '{owner}'")
        for operation in operations:
            if operation not in merged[owner]:
                merged[owner].append(operation)
    return merged


def _identifier(name: str) -> str:
    name = _IDENTIFIER_CHARS.sub("_", name)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name


def method_name(operation: ParsedOperation) -> str:
    """The method name of an operation: its camelCased operationId, made a valid identifier."""
    return _identifier(to_camel_case(operation.operation_id))


def _argument_name(param: ParsedParameter, ctx: GenerationContext) -> str:
    """A positional argument name: the styled parameter name, made a valid identifier."""
    return _identifier(property_name_for(param.name, ctx))


class ClientBackend(TemplateBackend):
    """Generates client files from parsed operations."""

    def emit_client(self, tag: str, operations: list[ParsedOperation], ctx: GenerationContext) -> GeneratedClient:
        """
        Emit the client class for one tag.

        Args:
            tag: The tag
            operations: Operations carrying the tag, in document order
            ctx: Generation context

        Returns:
            The rendered client with its sorted import list
        """
        class_name = client_class_name(tag, ctx)
        imports: set[str] = set()
        methods = []
        seen: dict[str, str] = {}
        for operation in operations:
            name = method_name(operation)
            if name in seen:
                ctx.warn(
                    class_name,
                    f"operations '{seen[name]}' and '{operation.operation_id}' both map to method '{name}'",
                )
            else:
                seen[name] = operation.operation_id
            methods.append(self.emit_method(operation, ctx))
            imports |= self._operation_references(operation, ctx)

        sorted_imports = sorted(imports)
        content = self.render(
            "client.ts.jinja2",
            base_class=self.base_class,
            class_name=class_name,
            imports=sorted_imports,
            methods=methods,
        )
        logger.debug("Emitted %s with %d methods", class_name, len(methods))

        return GeneratedClient(
            tag=tag,
            class_name=class_name,
            file_name=client_file_name(tag),
            content=content,
            operations=[op.operation_id for op in operations],
            imports=sorted_imports,
        )

    @property
    def base_class(self) -> str:
        return f"Base{self.config.client_suffix.value}"

    def emit_method(self, operation: ParsedOperation, ctx: GenerationContext) -> str:
        """Emit one async method, indented for the class body."""
        args = []
        path_expr = operation.path
        for param in operation.path_parameters:
            name = _argument_name(param, ctx)
            args.append(f"{name}: {to_type_expression(param.schema, ctx)}")
            path_expr = path_expr.replace(f"{{{param.name}}}", f"${{{name}}}")

        has_body = operation.has_body
        if has_body:
            args.append(f"body: {to_type_expression(operation.request_body, ctx)}")

        query_params = operation.query_parameters
        if query_params:
            members = []
            for param in query_params:
                # Query keys are sent as-is, so they keep their wire names
                head = format_property_name(param.name)
                optional_mark = "" if param.required else "?"
                members.append(f"{head}{optional_mark}: {to_type_expression(param.schema, ctx)}")
            args.append(f"params?: {{ {'; '.join(members)} }}")

        args.append(REQUEST_OPTIONS_ARG)

        if operation.path_parameters:
            path_literal = f"`{path_expr}`"
        else:
            path_literal = quote_string(operation.path)

        options = []
        if query_params:
            options.append("query: params")
        if has_body:
            options.append("body")
        options.append("headers: requestOptions?.headers")

        return_type = VOID if operation.response is None else to_type_expression(operation.response, ctx)
        method = operation.method.upper()

        return (
            f"  async {method_name(operation)}({', '.join(args)}): Promise<{return_type}> {{\n"
            f"    return this.request<{return_type}>('{method}', {path_literal}, {{ {', '.join(options)} }});\n"
            f"  }}"
        )

    def _operation_references(self, operation: ParsedOperation, ctx: GenerationContext) -> set[str]:
        names = referenced_names(operation.response, ctx) | referenced_names(operation.request_body, ctx)
        for param in operation.parameters:
            names |= referenced_names(param.schema, ctx)
        return names
