import pytest

from openapi_to_code.pipeline.analyzer.context import DiscriminatorInfo
from openapi_to_code.pipeline.analyzer.discriminators import collect_discriminators
from openapi_to_code.pipeline.analyzer.reference_resolver import ReferenceResolver
from openapi_to_code.pipeline.errors import DiscriminatorConflictError
from openapi_to_code.pipeline.schema_ast import SchemaParser


def variant(extra_property="name"):
    return {"type": "object", "properties": {"petType": {"type": "string"}, extra_property: {"type": "string"}}}


def document(schemas):
    return {"openapi": "3.0.3", "paths": {}, "components": {"schemas": schemas}}


def collect(schemas):
    doc = document(schemas)
    return collect_discriminators(SchemaParser().parse_shapes(doc), ReferenceResolver(doc))


def union(kind="oneOf", mapping=None, members=("Cat", "Dog"), property_name="petType"):
    discriminator = {"propertyName": property_name}
    if mapping is not None:
        discriminator["mapping"] = mapping
    return {kind: [{"$ref": f"#/components/schemas/{m}"} for m in members], "discriminator": discriminator}


def test_mapping_with_pointers():
    result = collect(
        {
            "Cat": variant(),
            "Dog": variant(),
            "Pet": union(mapping={"cat": "#/components/schemas/Cat", "dog": "#/components/schemas/Dog"}),
        }
    )
    assert result == {
        "Cat": DiscriminatorInfo(property_name="petType", literal_value="cat"),
        "Dog": DiscriminatorInfo(property_name="petType", literal_value="dog"),
    }


def test_mapping_with_bare_names():
    result = collect({"Cat": variant(), "Dog": variant(), "Pet": union(mapping={"kitty": "Cat", "doggo": "Dog"})})
    assert result["Cat"].literal_value == "kitty"
    assert result["Dog"].literal_value == "doggo"


def test_unmapped_variant_defaults_to_lowercased_name():
    result = collect({"Cat": variant(), "Dog": variant(), "Pet": union(kind="anyOf", mapping={"kitty": "Cat"})})
    assert result["Cat"].literal_value == "kitty"
    assert result["Dog"].literal_value == "dog"


def test_first_mapping_key_wins_for_a_variant():
    result = collect({"Cat": variant(), "Dog": variant(), "Pet": union(mapping={"cat": "Cat", "feline": "Cat"})})
    assert result["Cat"].literal_value == "cat"


def test_compositions_without_discriminator_are_ignored():
    schemas = {"Cat": variant(), "Dog": variant(), "Pet": {"oneOf": [{"$ref": "#/components/schemas/Cat"}]}}
    assert collect(schemas) == {}


def test_identical_claims_are_accepted():
    schemas = {
        "Cat": variant(),
        "Dog": variant(),
        "Pet": union(mapping={"cat": "Cat"}),
        "Animal": union(mapping={"cat": "Cat"}),
    }
    assert collect(schemas)["Cat"].literal_value == "cat"


def test_conflicting_claims_are_rejected():
    schemas = {
        "Cat": variant(),
        "Dog": variant(),
        "Pet": union(mapping={"cat": "Cat"}),
        "Animal": union(mapping={"feline": "Cat"}),
    }
    with pytest.raises(DiscriminatorConflictError) as exc_info:
        collect(schemas)
    message = str(exc_info.value)
    assert "Cat" in message
    assert "Pet" in message
    assert "Animal" in message
