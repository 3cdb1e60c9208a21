from default_code_samples.generator.examples import (
    Ambiguity,
    RequestShape,
    assemble_request,
    materialize_auth,
    placeholder_for,
    select_examples,
)
from default_code_samples.parser.openapi import ApiDefinition

API_KEY = {"type": "apiKey", "in": "header", "name": "X-API-Key"}


def _operation(operation: dict, schemes: dict | None = None):
    doc = {
        "openapi": "3.0.0",
        "info": {},
        "paths": {"/pets": {"post": operation}},
        "components": {"securitySchemes": schemes or {}},
    }
    return ApiDefinition(doc).get_paths()["/pets"]["post"]


def _json_body(**media) -> dict:
    return {"requestBody": {"content": {"application/json": media}}}


class TestSelectExamples:
    def test_body_and_parameters(self):
        op = _operation({
            **_json_body(example={"name": "doggie"}),
            "parameters": [
                {"name": "petId", "in": "path", "example": "123"},
                {"name": "limit", "in": "query", "example": 10},
                {"name": "X-Trace", "in": "header", "example": "abc"},
            ],
        })
        shape = select_examples(op)
        assert shape == RequestShape(
            body={"name": "doggie"},
            path={"petId": "123"},
            query={"limit": 10},
            header={"X-Trace": "abc"},
        )
        assert shape.cookie is None

    def test_no_body_is_not_an_error(self):
        shape = select_examples(_operation({"parameters": []}))
        assert isinstance(shape, RequestShape)
        assert shape.body is None

    def test_parameter_without_example_creates_no_bucket(self):
        shape = select_examples(_operation({"parameters": [{"name": "q", "in": "query"}]}))
        assert shape.query is None

    def test_multiple_body_sources(self):
        op = _operation({"requestBody": {"content": {
            "application/json": {"example": {"a": 1}},
            "text/plain": {"example": "a"},
        }}})
        assert select_examples(op) == Ambiguity(reason="Multiple requestBodyExamples are not supported")

    def test_multiple_named_body_examples(self):
        op = _operation(_json_body(examples={"one": {"value": 1}, "two": {"value": 2}}))
        assert select_examples(op) == Ambiguity(
            reason="Multiple requestBodyExamples[0].examples are not supported"
        )

    def test_single_named_body_example(self):
        op = _operation(_json_body(examples={"one": {"value": {"a": 1}}}))
        assert select_examples(op).body == {"a": 1}

    def test_parameter_examples_fatal_even_with_example(self):
        op = _operation({"parameters": [
            {"name": "limit", "in": "query", "example": 1, "examples": {"small": {"value": 1}}},
        ]})
        assert select_examples(op) == Ambiguity(reason="Multiple parameter examples are not supported")

    def test_example_groups_checked_first(self):
        op = _operation({
            **_json_body(examples={"a": {"value": 1}, "b": {"value": 2}}),
            "responses": {"200": {"content": {"application/json": {"examples": {"a": {"value": 3}}}}}},
        })
        assert select_examples(op) == Ambiguity(reason="Multiple example groups are not supported")


class TestMaterializeAuth:
    def test_placeholder_sanitized(self):
        assert placeholder_for("apiKey") == "MY_APIKEY"
        assert placeholder_for("petstore-auth.v2") == "MY_PETSTORE_AUTH_V2"

    def test_alternatives_collapse(self):
        op = _operation(
            {"security": [{"apiKey": []}, {"apiKey": [], "bearer": []}]},
            {"apiKey": API_KEY, "bearer": {"type": "http", "scheme": "bearer"}},
        )
        assert materialize_auth(op) == {"apiKey": "MY_APIKEY", "bearer": "MY_BEARER"}

    def test_encounter_order(self):
        op = _operation(
            {"security": [{"bearer": []}, {"apiKey": []}]},
            {"apiKey": API_KEY, "bearer": {"type": "http", "scheme": "bearer"}},
        )
        assert list(materialize_auth(op)) == ["bearer", "apiKey"]

    def test_undefined_scheme_skipped(self):
        op = _operation({"security": [{"missing": []}, {"apiKey": []}]}, {"apiKey": API_KEY})
        assert materialize_auth(op) == {"apiKey": "MY_APIKEY"}

    def test_no_security(self):
        assert materialize_auth(_operation({})) == {}


class TestAssembleRequest:
    def test_merges_shape_and_auth(self):
        shape = RequestShape(body={"a": 1})
        data = assemble_request(shape, {"apiKey": "MY_APIKEY"})
        assert data.shape == shape
        assert data.auth == {"apiKey": "MY_APIKEY"}
