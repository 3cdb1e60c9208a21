from default_code_samples.parser.sampler import sample_from_schema


class TestSampleFromSchema:
    def test_schema_example_wins(self):
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "example": {"name": "doggie"},
        }
        assert sample_from_schema(schema) == {"name": "doggie"}

    def test_object_placeholders(self):
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "integer"},
                "good": {"type": "boolean"},
                "tags": {"type": "array", "items": {"type": "string"}},
            },
        }
        assert sample_from_schema(schema) == {"name": "string", "age": 0, "good": True, "tags": ["string"]}

    def test_deep_leaf_example(self):
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "breed": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                    "example": {"name": "labrador"},
                },
            },
        }
        assert sample_from_schema(schema) == {"name": "string", "breed": {"name": "labrador"}}

    def test_read_only_skipped(self):
        schema = {"properties": {"id": {"type": "integer", "readOnly": True}, "name": {"type": "string"}}}
        assert sample_from_schema(schema) == {"name": "string"}

    def test_enum_and_default(self):
        assert sample_from_schema({"type": "string", "enum": ["available", "sold"]}) == "available"
        assert sample_from_schema({"type": "integer", "default": 5}) == 5

    def test_string_formats(self):
        assert sample_from_schema({"type": "string", "format": "email"}) == "user@example.com"
        assert sample_from_schema({"type": "string", "format": "date-time"}) == "2019-08-24T14:15:22Z"

    def test_all_of_merges(self):
        schema = {
            "allOf": [
                {"type": "object", "properties": {"a": {"type": "string"}}},
                {"type": "object", "properties": {"b": {"type": "integer"}}},
            ]
        }
        assert sample_from_schema(schema) == {"a": "string", "b": 0}

    def test_one_of_takes_first(self):
        schema = {"oneOf": [{"type": "string"}, {"type": "integer"}]}
        assert sample_from_schema(schema) == "string"

    def test_nullable_type_list(self):
        assert sample_from_schema({"type": ["null", "integer"]}) == 0

    def test_unresolved_ref_is_none(self):
        assert sample_from_schema({"$ref": "#/components/schemas/Node"}) is None

    def test_deterministic(self):
        schema = {"properties": {"when": {"type": "string", "format": "date"}}}
        assert sample_from_schema(schema) == sample_from_schema(schema)
