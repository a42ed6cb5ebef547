"""
End-to-end tests for PipelineGenerator using the petstore fixture.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from openapi_to_code.pipeline import CodeGeneratorConfig, PipelineGenerator
from openapi_to_code.pipeline.errors import DiscriminatorConflictError, UnsupportedRefError

TEST_DATA_DIR = Path(__file__).parent / "test_data"


@pytest.fixture
def petstore():
    with open(TEST_DATA_DIR / "petstore.json") as f:
        return json.load(f)


def test_file_set_and_order(petstore):
    result = PipelineGenerator(petstore).generate()
    assert list(result.files) == [
        "types.ts",
        "base.ts",
        "pets-client.ts",
        "store-client.ts",
        "default-client.ts",
        "index.ts",
    ]


def test_types_file(petstore):
    result = PipelineGenerator(petstore).generate()
    assert result.files["types.ts"] == (TEST_DATA_DIR / "petstore_types.ts").read_text()
    assert result.diagnostics == []


def test_pets_client_file(petstore):
    result = PipelineGenerator(petstore).generate()
    assert result.files["pets-client.ts"] == (TEST_DATA_DIR / "petstore_pets_client.ts").read_text()


def test_index_file(petstore):
    index = PipelineGenerator(petstore).generate().files["index.ts"]
    assert index == (
        "// Generated by openapi_to_code - do not edit manually\n"
        "\n"
        "export * from './types.js';\n"
        "export * from './base.js';\n"
        "export { DefaultClient } from './default-client.js';\n"
        "export { PetsClient } from './pets-client.js';\n"
        "export { StoreClient } from './store-client.js';\n"
    )


def test_base_file_uses_client_suffix(petstore):
    base = PipelineGenerator(petstore, CodeGeneratorConfig(client_suffix="Api")).generate().files["base.ts"]
    assert "export class BaseApi {" in base
    assert "export interface BaseApiOptions {" in base
    assert "protected async request<T>(method: string, path: string, options: RequestOptions = {}): Promise<T> {" in base
    assert "export class ApiError extends Error {" in base


def test_repeated_generation_is_identical(petstore):
    generator = PipelineGenerator(petstore)
    assert generator.generate().files == generator.generate().files


def test_independent_generators_do_not_share_state(petstore):
    other = {
        "openapi": "3.0.3",
        "paths": {},
        "components": {"schemas": {"Lamp": {"type": "object", "properties": {"state": {"enum": ["on", "off"]}}}}},
    }
    first = PipelineGenerator(petstore).generate()
    second = PipelineGenerator(other).generate()
    assert "LampState" not in first.files["types.ts"]
    assert "PetStatus" not in second.files["types.ts"]


def test_document_without_schemas_or_paths():
    result = PipelineGenerator({"openapi": "3.0.3", "paths": {}}).generate()
    assert result.files["types.ts"] == "// No schemas found in OpenAPI spec\n"
    assert list(result.files) == ["types.ts", "base.ts", "index.ts"]


def test_diagnostics_are_returned(petstore):
    petstore["components"]["schemas"]["Combined"] = {
        "allOf": [{"$ref": "#/components/schemas/Pet"}, {"$ref": "#/components/schemas/Category"}]
    }
    result = PipelineGenerator(petstore).generate()
    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].shape == "Combined"
    assert "multiple base references" in result.diagnostics[0].message
    assert "export type Combined = Pet & Category;" in result.files["types.ts"]


def test_diagnostics_are_logged(petstore, caplog):
    petstore["components"]["schemas"]["Vague"] = {"title": "vague"}
    with caplog.at_level("WARNING"):
        PipelineGenerator(petstore).generate()
    assert any("Vague" in record.getMessage() for record in caplog.records)


def test_external_reference_is_fatal(petstore):
    petstore["components"]["schemas"]["Remote"] = {
        "type": "object",
        "properties": {"owner": {"$ref": "https://example.com/schemas/Owner.json"}},
    }
    with pytest.raises(UnsupportedRefError) as exc_info:
        PipelineGenerator(petstore).generate()
    assert "https://example.com/schemas/Owner.json" in str(exc_info.value)


def test_conflicting_discriminators_are_fatal(petstore):
    schemas = petstore["components"]["schemas"]
    schemas["A"] = {
        "oneOf": [{"$ref": "#/components/schemas/Pet"}],
        "discriminator": {"propertyName": "kind", "mapping": {"pet": "Pet"}},
    }
    schemas["B"] = {
        "oneOf": [{"$ref": "#/components/schemas/Pet"}],
        "discriminator": {"propertyName": "kind", "mapping": {"animal": "Pet"}},
    }
    with pytest.raises(DiscriminatorConflictError):
        PipelineGenerator(petstore).generate()


def test_tags_mapping_to_one_client_keep_every_method():
    document = {
        "openapi": "3.0.3",
        "paths": {
            "/a": {"get": {"operationId": "a", "tags": ["Pets"], "responses": {}}},
            "/b": {"get": {"operationId": "b", "tags": ["pets"], "responses": {}}},
        },
    }
    result = PipelineGenerator(document).generate()

    assert list(result.files) == ["types.ts", "base.ts", "pets-client.ts", "index.ts"]
    assert "  async a(" in result.files["pets-client.ts"]
    assert "  async b(" in result.files["pets-client.ts"]
    assert result.files["index.ts"].count("export { PetsClient }") == 1
    assert len(result.diagnostics) == 1
    assert "'Pets' and 'pets'" in result.diagnostics[0].message
