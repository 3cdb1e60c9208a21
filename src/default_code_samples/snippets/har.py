"""Turn a request shape and auth placeholders into a concrete HTTP request."""

import base64
import json
from typing import Any
from urllib.parse import quote, urlencode

from pydantic import BaseModel

from default_code_samples.generator.examples import RequestData
from default_code_samples.parser.base import SecurityScheme
from default_code_samples.parser.openapi import ApiDefinition, Operation

FORM_MIME_TYPE = "application/x-www-form-urlencoded"


class HttpRequest(BaseModel):
    """A fully resolved request, independent of any target language."""

    method: str
    url: str  # without query string
    query: list[tuple[str, str]] = []
    headers: list[tuple[str, str]] = []
    cookies: list[tuple[str, str]] = []
    mime_type: str | None = None
    body_text: str | None = None
    body_json: Any = None  # set when body_text is JSON

    @property
    def full_url(self) -> str:
        if not self.query:
            return self.url
        return f"{self.url}?{urlencode(self.query)}"

    @property
    def has_json_body(self) -> bool:
        return self.body_text is not None and self.mime_type is not None and "json" in self.mime_type

    def all_headers(self) -> list[tuple[str, str]]:
        """Headers with cookies folded into a single Cookie header."""
        headers = list(self.headers)
        if self.cookies:
            headers.append(("Cookie", "; ".join(f"{k}={v}" for k, v in self.cookies)))
        return headers


def build_request(api: ApiDefinition, operation: Operation, data: RequestData) -> HttpRequest:
    """Resolve URL, parameters, auth and body for ``operation``."""
    shape = data.shape

    path = operation.path
    for name, value in shape.bucket("path").items():
        path = path.replace("{" + name + "}", quote(stringify(value), safe=""))

    query = _pairs(shape.bucket("query"))
    headers = _pairs(shape.bucket("header"))
    cookies = _pairs(shape.bucket("cookie"))

    accept = operation.get_response_media_type()
    if accept:
        _add_unique(headers, "Accept", accept)

    schemes = api.security_schemes()
    for key, value in data.auth.items():
        scheme = schemes.get(key)
        if scheme is not None:
            _apply_auth(scheme, value, query, headers, cookies)

    mime_type = None
    body_text = None
    body_json = None
    if shape.body is not None:
        mime_type = operation.get_request_body_media_type() or "application/json"
        body_text, body_json = _serialize_body(shape.body, mime_type)
        _add_unique(headers, "Content-Type", mime_type)

    return HttpRequest(
        method=operation.method.upper(),
        url=operation.get_server_url() + path,
        query=query,
        headers=headers,
        cookies=cookies,
        mime_type=mime_type,
        body_text=body_text,
        body_json=body_json,
    )


def stringify(value: Any) -> str:
    """Render an example value the way it appears on the wire."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    if value is None:
        return ""
    return str(value)


def _pairs(bucket: dict[str, Any]) -> list[tuple[str, str]]:
    pairs = []
    for name, value in bucket.items():
        if isinstance(value, list):
            pairs.extend((name, stringify(v)) for v in value)
        else:
            pairs.append((name, stringify(value)))
    return pairs


def _add_unique(pairs: list[tuple[str, str]], name: str, value: str) -> None:
    if not any(k.lower() == name.lower() for k, _ in pairs):
        pairs.append((name, value))


def _apply_auth(
    scheme: SecurityScheme,
    value: str,
    query: list[tuple[str, str]],
    headers: list[tuple[str, str]],
    cookies: list[tuple[str, str]],
) -> None:
    if scheme.type == "apiKey" and scheme.name:
        target = {"query": query, "cookie": cookies}.get(scheme.location or "header", headers)
        _add_unique(target, scheme.name, value)
    elif scheme.type == "http":
        http_scheme = (scheme.scheme or "bearer").lower()
        if http_scheme == "basic":
            token = base64.b64encode(f"{value}:".encode()).decode()
            _add_unique(headers, "Authorization", f"Basic {token}")
        else:
            _add_unique(headers, "Authorization", f"{http_scheme.capitalize()} {value}")
    elif scheme.type in ("oauth2", "openIdConnect"):
        _add_unique(headers, "Authorization", f"Bearer {value}")


def _serialize_body(body: Any, mime_type: str) -> tuple[str, Any]:
    if "json" in mime_type:
        return json.dumps(body, indent=2, ensure_ascii=False), body
    if mime_type == FORM_MIME_TYPE and isinstance(body, dict):
        return urlencode(_pairs(body)), None
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False), None
    return stringify(body), None
