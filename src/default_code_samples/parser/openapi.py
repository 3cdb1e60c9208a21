"""OpenAPI 3.x document model.

Wraps a dereferenced document mapping. ``ApiDefinition.get_paths`` only
yields ``Operation`` objects; structural path-item keys such as shared
``parameters`` or ``summary`` never reach the caller.
"""

from typing import Any

from .base import ExampleValue, MediaTypeExamples, Param, SecurityScheme
from .sampler import sample_from_schema

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

DEFAULT_SERVER_URL = "https://example.com"


class ApiDefinition:
    """A dereferenced OpenAPI document."""

    def __init__(self, doc: dict):
        self.doc = doc

    def get_paths(self) -> dict[str, dict[str, "Operation"]]:
        """Return {path: {method: Operation}} in document order."""
        paths: dict[str, dict[str, Operation]] = {}
        for path, path_item in (self.doc.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue
            operations = {}
            for method, schema in path_item.items():
                if method.lower() not in HTTP_METHODS or not isinstance(schema, dict):
                    continue
                operations[method] = Operation(self, path, method, schema, path_item)
            paths[path] = operations
        return paths

    def security_schemes(self) -> dict[str, SecurityScheme]:
        schemes = {}
        components = self.doc.get("components") or {}
        for key, scheme in (components.get("securitySchemes") or {}).items():
            if not isinstance(scheme, dict) or "type" not in scheme:
                continue
            schemes[key] = SecurityScheme(
                key=key,
                type=scheme["type"],
                scheme=scheme.get("scheme"),
                name=scheme.get("name"),
                location=scheme.get("in"),
            )
        return schemes

    def server_url(self, *candidates: list | None) -> str:
        """Return the first server URL among ``candidates`` and the document's servers."""
        for servers in (*candidates, self.doc.get("servers")):
            if servers:
                return _expand_server(servers[0])
        return DEFAULT_SERVER_URL


class Operation:
    """One HTTP method on one path template."""

    def __init__(self, api: ApiDefinition, path: str, method: str, schema: dict, path_item: dict):
        self.api = api
        self.path = path
        self.method = method
        self.schema = schema
        self.path_item = path_item

    def get_parameters(self) -> list[Param]:
        """Operation parameters plus inherited path-item parameters.

        An operation parameter overrides a path-item one with the same
        name and location.
        """
        own = [p for p in self.schema.get("parameters") or [] if _is_parameter(p)]
        seen = {(p["name"], p["in"]) for p in own}
        inherited = [
            p for p in self.path_item.get("parameters") or []
            if _is_parameter(p) and (p["name"], p["in"]) not in seen
        ]
        return [
            Param(
                name=p["name"],
                location=p["in"],
                required=p.get("required", False),
                example=p.get("example"),
                examples=p.get("examples") or {},
            )
            for p in own + inherited
        ]

    def get_request_body_examples(self) -> list[MediaTypeExamples]:
        """One entry per request-body media type that has at least one example."""
        request_body = self.schema.get("requestBody") or {}
        result = []
        for media_type, media in (request_body.get("content") or {}).items():
            if not isinstance(media, dict):
                continue
            examples = _media_type_examples(media_type, media)
            if examples:
                result.append(MediaTypeExamples(media_type=media_type, examples=examples))
        return result

    def get_request_body_media_type(self) -> str | None:
        """Media type of the first example source, else the first declared one."""
        examples = self.get_request_body_examples()
        if examples:
            return examples[0].media_type
        content = (self.schema.get("requestBody") or {}).get("content") or {}
        return next(iter(content), None)

    def get_response_media_type(self) -> str | None:
        """First media type of the first 2xx (or default) response."""
        responses = self.schema.get("responses") or {}
        for status, response in responses.items():
            if str(status).startswith("2") or str(status) == "default":
                content = (response or {}).get("content") or {}
                if content:
                    return next(iter(content))
        return None

    def get_example_groups(self) -> dict[str, dict]:
        """Named examples shared between the request and a response.

        Returns {example name: {"request": [...], "response": [...]}} for
        every name that appears on both sides.
        """
        request_names: dict[str, list[str]] = {}
        for param in self.get_parameters():
            for name in param.examples:
                request_names.setdefault(name, []).append(f"{param.location}:{param.name}")
        request_body = self.schema.get("requestBody") or {}
        for media_type, media in (request_body.get("content") or {}).items():
            for name in (media or {}).get("examples") or {}:
                request_names.setdefault(name, []).append(media_type)

        groups = {}
        for status, response in (self.schema.get("responses") or {}).items():
            for media_type, media in ((response or {}).get("content") or {}).items():
                for name in (media or {}).get("examples") or {}:
                    if name in request_names:
                        group = groups.setdefault(name, {"request": request_names[name], "response": []})
                        group["response"].append(f"{status}:{media_type}")
        return groups

    def get_security_with_types(self) -> list[list[SecurityScheme | None]]:
        """Resolve each alternative security requirement to its schemes.

        Scheme keys with no matching definition resolve to None.
        """
        requirements = self.schema.get("security")
        if requirements is None:
            requirements = self.api.doc.get("security") or []
        schemes = self.api.security_schemes()
        return [
            [schemes.get(key) for key in requirement]
            for requirement in requirements
            if isinstance(requirement, dict)
        ]

    def get_server_url(self) -> str:
        return self.api.server_url(self.schema.get("servers"), self.path_item.get("servers"))


def _is_parameter(p: Any) -> bool:
    return isinstance(p, dict) and "name" in p and "in" in p


def _media_type_examples(media_type: str, media: dict) -> list[ExampleValue]:
    if "example" in media:
        return [ExampleValue(value=media["example"])]

    named = media.get("examples") or {}
    if named:
        return [
            ExampleValue(value=ex.get("value") if isinstance(ex, dict) else ex, title=name)
            for name, ex in named.items()
        ]

    schema = media.get("schema")
    if isinstance(schema, dict) and "xml" not in media_type:
        return [ExampleValue(value=sample_from_schema(schema))]
    return []


def _expand_server(server: dict) -> str:
    url = server.get("url") or ""
    for name, variable in (server.get("variables") or {}).items():
        url = url.replace("{" + name + "}", str((variable or {}).get("default", "")))
    if url.startswith("/"):
        return DEFAULT_SERVER_URL + url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        return DEFAULT_SERVER_URL
    return url.rstrip("/")
