import pytest

from openapi_to_code.utils import (
    enum_value_to_key,
    format_literal,
    format_property_name,
    is_valid_identifier,
    quote_string,
    to_camel_case,
    to_pascal_case,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("user_name", "userName"),
        ("created-at", "createdAt"),
        ("user_first-name", "userFirstName"),
        ("userName", "userName"),
        ("id", "id"),
    ],
)
def test_to_camel_case(text, expected):
    assert to_camel_case(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("user_name", "UserName"),
        ("userName", "UserName"),
        ("active", "Active"),
        ("in-progress", "InProgress"),
        ("", ""),
    ],
)
def test_to_pascal_case(text, expected):
    assert to_pascal_case(text) == expected


class TestEnumValueToKey:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("active", "Active"),
            ("in_progress", "InProgress"),
            ("in-progress", "InProgress"),
            ("ACTIVE", "ACTIVE"),
        ],
    )
    def test_word_values_are_pascal_cased(self, value, expected):
        assert enum_value_to_key(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (200, "_200"),
            (0, "_0"),
            (-10, "_Neg10"),
            (1.5, "_1_5"),
        ],
    )
    def test_numbers_are_prefixed(self, value, expected):
        assert enum_value_to_key(value) == expected

    def test_leading_digit_string_is_prefixed(self):
        assert enum_value_to_key("200_ok") == "_200_ok"

    def test_special_characters_are_replaced(self):
        key = enum_value_to_key("a.b c")
        assert is_valid_identifier(key)
        assert key == "ABC"

    def test_empty_string(self):
        assert enum_value_to_key("") == "_"

    @pytest.mark.parametrize("value", [1, 42, -3, "9lives", "1.0", 2.25])
    def test_never_a_bare_number(self, value):
        key = enum_value_to_key(value)
        assert not key[0].isdigit()
        assert is_valid_identifier(key)


@pytest.mark.parametrize(
    "name, valid",
    [
        ("name", True),
        ("_private", True),
        ("$ref", True),
        ("camelCase2", True),
        ("2fa", False),
        ("content-type", False),
        ("@type", False),
        ("with space", False),
        ("", False),
    ],
)
def test_is_valid_identifier(name, valid):
    assert is_valid_identifier(name) is valid


def test_quote_string_escapes_quotes_and_backslashes():
    assert quote_string("it's") == "'it\\'s'"
    assert quote_string("a\\b") == "'a\\\\b'"


def test_format_property_name():
    assert format_property_name("name") == "name"
    assert format_property_name("content-type") == "'content-type'"
    assert format_property_name("it's") == "'it\\'s'"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("cat", "'cat'"),
        (3, "3"),
        (-1.5, "-1.5"),
        (True, "true"),
        (False, "false"),
        (None, "null"),
    ],
)
def test_format_literal(value, expected):
    assert format_literal(value) == expected
