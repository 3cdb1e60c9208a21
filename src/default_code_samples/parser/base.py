"""Data models for the slice of an OpenAPI document the pipeline reads.

The document model in ``openapi.py`` converts raw, dereferenced mappings
into these models so the example selector never touches raw dicts.
"""

from typing import Any

from pydantic import BaseModel


class Param(BaseModel):
    """A single operation parameter (query, path, header, or cookie)."""

    name: str
    location: str  # query / path / header / cookie
    required: bool = False
    example: Any = None
    examples: dict[str, Any] = {}  # named examples, {name: {value, summary}}


class ExampleValue(BaseModel):
    """One candidate example value, optionally named."""

    value: Any
    title: str | None = None


class MediaTypeExamples(BaseModel):
    """All example values one request-body media type offers."""

    media_type: str
    examples: list[ExampleValue]


class SecurityScheme(BaseModel):
    """A security scheme from components.securitySchemes, keyed by its name there."""

    key: str
    type: str  # apiKey / http / oauth2 / openIdConnect / mutualTLS
    scheme: str | None = None  # http auth scheme: basic / bearer / ...
    name: str | None = None  # apiKey header, query or cookie name
    location: str | None = None  # apiKey: header / query / cookie
