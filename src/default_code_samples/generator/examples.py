"""Pick one example per request field and synthesize placeholder credentials.

An operation either yields exactly one example for its body and for each
parameter that has one, or it is ambiguous and yields an ``Ambiguity``
describing why. Ambiguity is a normal outcome, so it is returned, not raised.
"""

import re
from typing import Any

from pydantic import BaseModel

from default_code_samples.parser.openapi import Operation

PLACEHOLDER_PREFIX = "MY_"

LOCATIONS = ("path", "query", "header", "cookie")

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


class RequestShape(BaseModel):
    """Example values keyed by location, the input snippet rendering works from.

    A location is None when no parameter there has an example; it is never
    an empty dict.
    """

    body: Any = None
    path: dict[str, Any] | None = None
    query: dict[str, Any] | None = None
    header: dict[str, Any] | None = None
    cookie: dict[str, Any] | None = None

    def bucket(self, location: str) -> dict[str, Any]:
        return getattr(self, location, None) or {}


class Ambiguity(BaseModel):
    """Why an operation has no single representative example."""

    reason: str


class RequestData(BaseModel):
    """Everything the snippet renderer needs besides the document itself."""

    shape: RequestShape
    auth: dict[str, str]


def select_examples(operation: Operation) -> RequestShape | Ambiguity:
    """Select the single example for the body and each parameter of ``operation``."""
    if operation.get_example_groups():
        return Ambiguity(reason="Multiple example groups are not supported")

    body_examples = operation.get_request_body_examples()
    if len(body_examples) > 1:
        return Ambiguity(reason="Multiple requestBodyExamples are not supported")
    if body_examples and len(body_examples[0].examples) > 1:
        return Ambiguity(reason="Multiple requestBodyExamples[0].examples are not supported")

    body = body_examples[0].examples[0].value if body_examples else None

    buckets: dict[str, dict[str, Any]] = {}
    for param in operation.get_parameters():
        if param.examples:
            return Ambiguity(reason="Multiple parameter examples are not supported")
        if param.example is None or param.location not in LOCATIONS:
            continue
        buckets.setdefault(param.location, {})[param.name] = param.example

    return RequestShape(body=body, **buckets)


def placeholder_for(scheme_key: str) -> str:
    """Deterministic placeholder credential for a security scheme key."""
    return PLACEHOLDER_PREFIX + _NON_ALNUM.sub("_", scheme_key).upper()


def materialize_auth(operation: Operation) -> dict[str, str]:
    """Return {scheme key: placeholder} for every scheme the operation may use."""
    auth: dict[str, str] = {}
    for requirement in operation.get_security_with_types():
        for scheme in requirement or []:
            if scheme is None:
                continue
            auth.setdefault(scheme.key, placeholder_for(scheme.key))
    return auth


def assemble_request(shape: RequestShape, auth: dict[str, str]) -> RequestData:
    return RequestData(shape=shape, auth=auth)
