"""
Reference resolver for $ref resolution.

Resolves internal JSON pointers (``#/...``) against the in-memory
document. External files and URLs are rejected: cross-document
references are not supported.
"""

from __future__ import annotations

import re
from typing import Any

from ..errors import InvalidPointerPathError, PointerNotFoundError, UnsupportedRefError
from ..schema_ast.nodes import RefNode, SchemaNode
from ..schema_ast.parser import SCHEMAS_PATH, SchemaParser

_URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")

_MISSING = object()

_EXTERNAL_HINT = "Inline or merge the external content into this document (e.g. with a bundler) before generating"


def _unescape(segment: str) -> str:
    """Undo RFC 6901 escaping."""
    return segment.replace("~1", "/").replace("~0", "~")


class ReferenceResolver:
    """Resolves $ref pointers to their targets in one document."""

    def __init__(self, document: dict[str, Any], parser: SchemaParser | None = None):
        """
        Initialize the resolver.

        Args:
            document: The OpenAPI document
            parser: Parser used to turn resolved targets into nodes
        """
        self.document = document
        self.parser = parser or SchemaParser()

    @staticmethod
    def is_reference(value: Any) -> bool:
        """Check if a raw value is a reference object."""
        return isinstance(value, dict) and isinstance(value.get("$ref"), str)

    def resolve_pointer(self, pointer: str) -> Any:
        """
        Walk a pointer against the document and return the raw target.

        Args:
            pointer: The $ref string (e.g., "#/components/schemas/Pet")

        Returns:
            The raw value found at the pointer

        Raises:
            UnsupportedRefError: For URL or external file references
            InvalidPointerPathError: If a segment's parent is not traversable
            PointerNotFoundError: If the target does not exist
        """
        self._check_internal(pointer)

        segments = pointer[2:].split("/") if pointer != "#" else []

        current: Any = self.document
        for raw_segment in segments:
            segment = _unescape(raw_segment)
            if isinstance(current, dict):
                current = current.get(segment, _MISSING)
            elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
                current = current[int(segment)]
            elif isinstance(current, list):
                current = _MISSING
            else:
                parent = "a missing value" if current is _MISSING else f"a {type(current).__name__} value"
                raise InvalidPointerPathError(
                    f"Invalid $ref path: {pointer}",
                    f"Cannot look up '{segment}' inside {parent}",
                )

        if current is _MISSING:
            raise PointerNotFoundError(
                f"$ref not found: {pointer}",
                "Check the spelling of the pointer and that the target is defined in this document",
            )
        return current

    def resolve(self, pointer: str) -> SchemaNode:
        """Resolve a pointer and parse its target as a schema node."""
        return self.parser.parse(self.resolve_pointer(pointer), pointer)

    def resolve_if_reference(self, node: SchemaNode) -> SchemaNode:
        """Resolve a RefNode; any other node is returned unchanged."""
        if isinstance(node, RefNode):
            return self.resolve(node.ref_path)
        return node

    def resolve_value(self, value: Any) -> Any:
        """Resolve a raw reference object; other values are returned unchanged."""
        if self.is_reference(value):
            return self.resolve_pointer(value["$ref"])
        return value

    def ref_name(self, pointer: str) -> str:
        """
        Get the shape name a schema pointer refers to.

        The target must exist, so every emitted name is backed by a
        named shape.

        Raises:
            UnsupportedRefError: If the pointer does not target components.schemas
        """
        self._check_internal(pointer)
        prefix = f"{SCHEMAS_PATH}/"
        name = pointer[len(prefix) :] if pointer.startswith(prefix) else ""
        if not name or "/" in name:
            raise UnsupportedRefError(
                f"Unsupported $ref format: {pointer}",
                f"Schema references must point at {prefix}<Name>",
            )
        self.resolve_pointer(pointer)
        return _unescape(name)

    def _check_internal(self, pointer: str) -> None:
        if pointer.startswith("#/") or pointer == "#":
            return
        if _URL_PATTERN.match(pointer):
            raise UnsupportedRefError(f"URL $ref not supported: {pointer}", _EXTERNAL_HINT)
        raise UnsupportedRefError(f"External file $ref not supported: {pointer}", _EXTERNAL_HINT)
