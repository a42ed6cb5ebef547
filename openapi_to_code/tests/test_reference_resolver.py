from unittest import TestCase

import pytest

from openapi_to_code.pipeline.analyzer.reference_resolver import ReferenceResolver
from openapi_to_code.pipeline.errors import (
    CodegenError,
    InvalidPointerPathError,
    PointerNotFoundError,
    UnsupportedRefError,
)
from openapi_to_code.pipeline.schema_ast import ObjectNode, PrimitiveNode, RefNode

DOCUMENT = {
    "openapi": "3.0.3",
    "paths": {},
    "components": {
        "schemas": {
            "Pet": {"type": "object", "properties": {"name": {"type": "string"}}},
            "a/b": {"type": "string"},
            "til~de": {"type": "integer"},
            "PetAlias": {"$ref": "#/components/schemas/Pet"},
        },
        "parameters": {
            "Limit": {"name": "limit", "in": "query", "schema": {"type": "integer"}},
        },
    },
    "servers": [{"url": "https://example.com"}],
}


class TestReferenceResolver(TestCase):
    def setUp(self):
        self.resolver = ReferenceResolver(DOCUMENT)

    def test_resolves_internal_pointer(self):
        target = self.resolver.resolve_pointer("#/components/schemas/Pet")
        self.assertEqual(target["type"], "object")

    def test_resolve_parses_target(self):
        node = self.resolver.resolve("#/components/schemas/Pet")
        self.assertIsInstance(node, ObjectNode)
        self.assertEqual([p.name for p in node.properties], ["name"])

    def test_unescapes_segments(self):
        self.assertEqual(self.resolver.resolve_pointer("#/components/schemas/a~1b"), {"type": "string"})
        self.assertEqual(self.resolver.resolve_pointer("#/components/schemas/til~0de"), {"type": "integer"})

    def test_list_index_segment(self):
        self.assertEqual(self.resolver.resolve_pointer("#/servers/0/url"), "https://example.com")

    def test_missing_target(self):
        with self.assertRaises(PointerNotFoundError) as cm:
            self.resolver.resolve_pointer("#/components/schemas/Missing")
        self.assertIn("$ref not found", str(cm.exception))
        self.assertIn("#/components/schemas/Missing", str(cm.exception))

    def test_invalid_path_through_missing_segment(self):
        with self.assertRaises(InvalidPointerPathError) as cm:
            self.resolver.resolve_pointer("#/components/nothing/Pet")
        self.assertIn("Invalid $ref path", str(cm.exception))

    def test_invalid_path_through_scalar(self):
        with self.assertRaises(InvalidPointerPathError):
            self.resolver.resolve_pointer("#/openapi/version")

    def test_url_reference_is_rejected(self):
        with self.assertRaises(UnsupportedRefError) as cm:
            self.resolver.resolve_pointer("https://example.com/schemas.json#/Pet")
        self.assertIn("URL $ref not supported", str(cm.exception))
        self.assertIsNotNone(cm.exception.hint)

    def test_external_file_reference_is_rejected(self):
        with self.assertRaises(UnsupportedRefError) as cm:
            self.resolver.resolve_pointer("./common.yaml#/components/schemas/Pet")
        self.assertIn("External file $ref not supported", str(cm.exception))

    def test_errors_share_base_class(self):
        with self.assertRaises(CodegenError):
            self.resolver.resolve_pointer("#/components/schemas/Missing")

    def test_ref_name(self):
        self.assertEqual(self.resolver.ref_name("#/components/schemas/Pet"), "Pet")
        self.assertEqual(self.resolver.ref_name("#/components/schemas/a~1b"), "a/b")

    def test_ref_name_requires_schema_pointer(self):
        with self.assertRaises(UnsupportedRefError):
            self.resolver.ref_name("#/components/parameters/Limit")

    def test_ref_name_requires_existing_target(self):
        with self.assertRaises(PointerNotFoundError):
            self.resolver.ref_name("#/components/schemas/Ghost")

    def test_resolve_if_reference(self):
        ref = RefNode(ref_path="#/components/schemas/a~1b")
        self.assertIsInstance(self.resolver.resolve_if_reference(ref), PrimitiveNode)

        primitive = PrimitiveNode(type_name="string")
        self.assertIs(self.resolver.resolve_if_reference(primitive), primitive)

    def test_resolve_value(self):
        resolved = self.resolver.resolve_value({"$ref": "#/components/parameters/Limit"})
        self.assertEqual(resolved["name"], "limit")

        inline = {"name": "offset", "in": "query"}
        self.assertIs(self.resolver.resolve_value(inline), inline)

    def test_ref_to_ref_resolves_one_level(self):
        node = self.resolver.resolve("#/components/schemas/PetAlias")
        self.assertIsInstance(node, RefNode)
        self.assertEqual(node.ref_path, "#/components/schemas/Pet")


@pytest.mark.parametrize(
    "value, expected",
    [
        ({"$ref": "#/components/schemas/Pet"}, True),
        ({"$ref": 3}, False),
        ({"type": "string"}, False),
        ("#/components/schemas/Pet", False),
    ],
)
def test_is_reference(value, expected):
    assert ReferenceResolver.is_reference(value) is expected
