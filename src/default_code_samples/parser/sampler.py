"""Build a representative example value from a JSON schema.

Explicit ``example`` values win at any depth, so a schema with an example
on one nested property yields that example for the property and type
placeholders everywhere else.
"""

from typing import Any

MAX_DEPTH = 10

STRING_FORMATS = {
    "email": "user@example.com",
    "date": "2019-08-24",
    "date-time": "2019-08-24T14:15:22Z",
    "uuid": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
    "uri": "https://example.com",
    "url": "https://example.com",
    "hostname": "example.com",
    "ipv4": "198.51.100.42",
    "ipv6": "2001:0db8:5b96:0000:0000:426f:8e17:642a",
    "byte": "U3dhZ2dlciByb2Nrcw==",
    "binary": "",
    "password": "********",
}


def sample_from_schema(schema: Any, depth: int = 0) -> Any:
    """Return an example value for ``schema``.

    Unresolved ``$ref`` nodes (left behind by cyclic schemas) and
    anything past MAX_DEPTH sample to None.
    """
    if not isinstance(schema, dict) or depth > MAX_DEPTH or "$ref" in schema:
        return None

    for key in ("example", "default", "const"):
        if key in schema:
            return schema[key]
    if schema.get("enum"):
        return schema["enum"][0]

    if "allOf" in schema:
        return _sample_all_of(schema, depth)
    for key in ("oneOf", "anyOf"):
        if schema.get(key):
            return sample_from_schema(schema[key][0], depth + 1)

    schema_type = _schema_type(schema)
    if schema_type == "object":
        return _sample_object(schema, depth)
    if schema_type == "array":
        return [sample_from_schema(schema.get("items", {}), depth + 1)]
    if schema_type == "string":
        return STRING_FORMATS.get(schema.get("format", ""), "string")
    if schema_type in ("integer", "number"):
        return 0
    if schema_type == "boolean":
        return True
    return None


def _schema_type(schema: dict) -> str | None:
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        # OpenAPI 3.1 allows ["string", "null"]
        non_null = [t for t in schema_type if t != "null"]
        schema_type = non_null[0] if non_null else "null"
    if schema_type is None:
        if "properties" in schema or "additionalProperties" in schema:
            return "object"
        if "items" in schema:
            return "array"
    return schema_type


def _sample_object(schema: dict, depth: int) -> dict:
    result = {}
    for name, prop in (schema.get("properties") or {}).items():
        if isinstance(prop, dict) and prop.get("readOnly"):
            continue
        result[name] = sample_from_schema(prop, depth + 1)
    return result


def _sample_all_of(schema: dict, depth: int) -> Any:
    merged: Any = None
    for member in schema["allOf"]:
        value = sample_from_schema(member, depth + 1)
        if isinstance(merged, dict) and isinstance(value, dict):
            merged = {**merged, **value}
        elif value is not None:
            merged = value

    # Properties declared next to allOf extend the merged object.
    rest = {k: v for k, v in schema.items() if k != "allOf"}
    if rest.get("properties"):
        extra = _sample_object(rest, depth)
        merged = {**merged, **extra} if isinstance(merged, dict) else extra
    return merged
