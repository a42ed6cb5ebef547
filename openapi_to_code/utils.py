"""
Utility functions for the OpenAPI to TypeScript generator.
"""

import re
from typing import Any

# Separator followed by a lowercase letter, e.g. "_n" in "user_name"
_SEPARATOR_PATTERN = re.compile(r"[-_]([a-z])")

# Enum values made only of letters, underscores and hyphens
_WORD_VALUE_PATTERN = re.compile(r"[a-z_-]+", re.IGNORECASE)

_NON_IDENTIFIER_CHARS = re.compile(r"[^a-zA-Z0-9_]")

_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def to_camel_case(text: str) -> str:
    """Convert snake_case or kebab-case to camelCase.

    Examples:
        "user_name" -> "userName"
        "created-at" -> "createdAt"
        "user_first-name" -> "userFirstName"
        "userName" -> "userName"
    """
    return _SEPARATOR_PATTERN.sub(lambda m: m.group(1).upper(), text)


def to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case or camelCase to PascalCase.

    Examples:
        "user_name" -> "UserName"
        "userName" -> "UserName"
        "active" -> "Active"
    """
    camel = to_camel_case(text)
    return camel[:1].upper() + camel[1:]


def is_number(value: Any) -> bool:
    """True for int/float values, excluding bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def enum_value_to_key(value: Any) -> str:
    """Convert an enum value to an identifier usable as an object or enum key.

    Examples:
        "active" -> "Active"
        "in_progress" -> "InProgress"
        "200_ok" -> "_200_ok"
        404 -> "_404"
        -10 -> "_Neg10"
    """
    if is_number(value):
        digits = str(abs(value)).replace(".", "_")
        return f"_Neg{digits}" if value < 0 else f"_{digits}"

    text = str(value)
    if _WORD_VALUE_PATTERN.fullmatch(text):
        return to_pascal_case(text)

    cleaned = _NON_IDENTIFIER_CHARS.sub("_", text)
    if not cleaned:
        return "_"
    if cleaned[0].isdigit():
        return f"_{cleaned}"
    return to_pascal_case(cleaned)


def is_valid_identifier(name: str) -> bool:
    """Check whether a name can be used unquoted as a TypeScript property name."""
    return _IDENTIFIER_PATTERN.fullmatch(name) is not None


def quote_string(text: str) -> str:
    """Render a single-quoted TypeScript string literal."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def format_property_name(name: str) -> str:
    """Quote a property name unless it is a valid bare identifier."""
    if is_valid_identifier(name):
        return name
    return quote_string(name)


def format_literal(value: Any) -> str:
    """Render a JSON scalar as a TypeScript literal.

    Strings are single-quoted, numbers are bare.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if is_number(value):
        return str(value)
    return quote_string(str(value))
