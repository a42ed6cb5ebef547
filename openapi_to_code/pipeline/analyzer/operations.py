"""
Operation parser.

Walks the document's paths table and extracts, per HTTP operation, the
information the client backend needs: name, tags, path and query
parameters, request body and response schemas.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from ..schema_ast.nodes import SchemaNode, UnknownNode
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

DEFAULT_TAG = "default"

JSON_MEDIA_TYPE = "application/json"

# Parameter locations the generated clients can express
SUPPORTED_LOCATIONS = ("path", "query")

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")
_SUCCESS_CODE = re.compile(r"2\d\d")


@dataclass
class ParsedParameter:
    """A path or query parameter of an operation."""

    name: str
    location: str
    required: bool = False
    schema: SchemaNode | None = None


@dataclass
class ParsedOperation:
    """One HTTP operation, ready for client generation."""

    method: str
    path: str
    operation_id: str
    tags: list[str] = field(default_factory=list)
    parameters: list[ParsedParameter] = field(default_factory=list)
    request_body: SchemaNode | None = None
    response: SchemaNode | None = None

    @property
    def path_parameters(self) -> list[ParsedParameter]:
        return [p for p in self.parameters if p.location == "path"]

    @property
    def query_parameters(self) -> list[ParsedParameter]:
        return [p for p in self.parameters if p.location == "query"]

    @property
    def has_body(self) -> bool:
        return self.request_body is not None


def parse_operations(document: dict[str, Any], resolver: ReferenceResolver) -> list[ParsedOperation]:
    """
    Parse every operation of the document.

    Paths are visited in document order and methods in HTTP_METHODS order.

    Args:
        document: The OpenAPI document
        resolver: Resolver for the same document

    Returns:
        List of parsed operations
    """
    operations = []
    paths = document.get("paths") or {}

    for path, path_item in paths.items():
        path_item = resolver.resolve_value(path_item)
        if not isinstance(path_item, dict):
            continue

        path_pointer = "#/paths/" + path.replace("~", "~0").replace("/", "~1")
        path_params = _parse_parameters(path_item.get("parameters"), resolver, path_pointer)

        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue

            source = f"{path_pointer}/{method}"
            operation_id = operation.get("operationId") or _synthesize_operation_id(method, path)
            tags = [str(tag) for tag in operation.get("tags") or []] or [DEFAULT_TAG]

            operations.append(
                ParsedOperation(
                    method=method,
                    path=path,
                    operation_id=operation_id,
                    tags=tags,
                    parameters=path_params + _parse_parameters(operation.get("parameters"), resolver, source),
                    request_body=_parse_request_body(operation.get("requestBody"), resolver, source),
                    response=_parse_response(operation.get("responses"), resolver, source),
                )
            )

    logger.debug("Parsed %d operations from %d paths", len(operations), len(paths))
    return operations


def group_by_tag(operations: list[ParsedOperation]) -> dict[str, list[ParsedOperation]]:
    """Group operations by tag, in tag discovery order. Multi-tag operations appear under each tag."""
    groups: dict[str, list[ParsedOperation]] = {}
    for operation in operations:
        for tag in operation.tags:
            groups.setdefault(tag, []).append(operation)
    return groups


def _synthesize_operation_id(method: str, path: str) -> str:
    return _NON_ALPHANUMERIC.sub("", f"{method}{path}")


def _parse_parameters(raw_parameters: Any, resolver: ReferenceResolver, source: str) -> list[ParsedParameter]:
    parameters = []
    for index, raw in enumerate(raw_parameters or []):
        param = resolver.resolve_value(raw)
        if not isinstance(param, dict) or param.get("in") not in SUPPORTED_LOCATIONS:
            continue
        schema = param.get("schema")
        parameters.append(
            ParsedParameter(
                name=str(param.get("name", "")),
                location=param["in"],
                # Path parameters are always required
                required=param["in"] == "path" or param.get("required") is True,
                schema=resolver.parser.parse(schema, f"{source}/parameters/{index}/schema") if schema is not None else None,
            )
        )
    return parameters


def _json_schema(content: Any, resolver: ReferenceResolver, source: str) -> tuple[bool, SchemaNode | None]:
    """
    Find the JSON media type in a content map.

    Returns:
        (found, schema node); the node is an empty UnknownNode when the
        media type declares no schema
    """
    if not isinstance(content, dict):
        return False, None

    media_type = JSON_MEDIA_TYPE if JSON_MEDIA_TYPE in content else None
    if media_type is None:
        media_type = next((key for key in content if str(key).endswith("+json")), None)
    if media_type is None:
        return False, None

    media = content[media_type] or {}
    schema = media.get("schema") if isinstance(media, dict) else None
    if schema is None:
        return True, UnknownNode(source_path=f"{source}/content/{media_type}")
    return True, resolver.parser.parse(schema, f"{source}/content/{media_type}/schema")


def _parse_request_body(raw_body: Any, resolver: ReferenceResolver, source: str) -> SchemaNode | None:
    body = resolver.resolve_value(raw_body)
    if not isinstance(body, dict):
        return None
    _, schema = _json_schema(body.get("content"), resolver, f"{source}/requestBody")
    return schema


def _parse_response(raw_responses: Any, resolver: ReferenceResolver, source: str) -> SchemaNode | None:
    if not isinstance(raw_responses, dict):
        return None

    # YAML documents may key responses by integer status code
    codes = sorted((str(code) for code in raw_responses if _SUCCESS_CODE.fullmatch(str(code))), key=int)
    by_code = {str(code): value for code, value in raw_responses.items()}

    for code in codes:
        response = resolver.resolve_value(by_code[code])
        if not isinstance(response, dict):
            continue
        found, schema = _json_schema(response.get("content"), resolver, f"{source}/responses/{code}")
        if found:
            return schema
    return None
