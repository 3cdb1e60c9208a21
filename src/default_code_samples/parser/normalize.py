"""Parse an OpenAPI document and dereference its internal $refs.

Dereferencing improves the examples the sampler can find: a request body
that points at ``#/components/schemas/Pet`` gets the component's inline
``example`` as if it had been written in place.
"""

import copy
from typing import Any
from urllib.parse import unquote

import yaml

from default_code_samples.errors import NormalizationError

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted dates and timestamps as strings.

    Example values like ``2017-07-21`` must reach the rendered snippet as
    written, not as ``datetime.date`` objects.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def normalize(text: str) -> dict:
    """Parse raw document text and return a fully dereferenced copy."""
    return dereference(load_document(text))


def load_document(text: str) -> dict:
    """Parse YAML or JSON text into an OpenAPI 3.x document mapping."""
    try:
        doc = yaml.load(text, Loader=DocumentLoader)
    except yaml.YAMLError as e:
        raise NormalizationError(f"Could not parse document: {e}") from e

    if not isinstance(doc, dict):
        raise NormalizationError("Document must be a YAML or JSON mapping")
    if "swagger" in doc:
        raise NormalizationError(
            f"Swagger {doc['swagger']} documents are not supported, convert to OpenAPI 3.x first"
        )
    version = str(doc.get("openapi", ""))
    if not version.startswith("3."):
        raise NormalizationError("Document is not an OpenAPI 3.x description (missing 'openapi' field)")
    return doc


def dereference(doc: dict) -> dict:
    """Return a deep copy of ``doc`` with every internal $ref expanded in place.

    A $ref that would re-enter a reference already being expanded is kept
    as-is, so cyclic schemas terminate. External refs are left untouched.
    """
    return _expand(doc, doc, ())


def _expand(node: Any, root: dict, stack: tuple[str, ...]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#"):
            if ref in stack:
                return copy.deepcopy(node)
            target = resolve_pointer(root, ref[1:])
            return _expand(target, root, stack + (ref,))
        return {key: _expand(value, root, stack) for key, value in node.items()}
    if isinstance(node, list):
        return [_expand(item, root, stack) for item in node]
    return node


def resolve_pointer(doc: Any, pointer: str) -> Any:
    """Resolve a JSON Pointer (the fragment after '#') against ``doc``."""
    if pointer == "":
        return doc
    if not pointer.startswith("/"):
        raise NormalizationError(f"Unsupported reference '#{pointer}'")

    cur = doc
    for raw in pointer[1:].split("/"):
        token = unquote(raw).replace("~1", "/").replace("~0", "~")
        if isinstance(cur, list):
            try:
                cur = cur[int(token)]
            except (ValueError, IndexError) as e:
                raise NormalizationError(f"Could not resolve reference '#{pointer}'") from e
        elif isinstance(cur, dict) and token in cur:
            cur = cur[token]
        else:
            raise NormalizationError(f"Could not resolve reference '#{pointer}'")
    return cur
