"""Code sample generator — walks every operation and builds the overlay."""

from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from pydantic import BaseModel

from default_code_samples.generator.examples import (
    Ambiguity,
    RequestData,
    assemble_request,
    materialize_auth,
    select_examples,
)
from default_code_samples.generator.overlay import (
    CodeSample,
    ExtractionError,
    Overlay,
    build_code_samples_overlay,
    format_target_selector,
)
from default_code_samples.parser.normalize import normalize
from default_code_samples.parser.openapi import ApiDefinition, Operation
from default_code_samples.snippets.renderer import Snippet, TemplateRenderer, check_language

SNIPPET_ERROR = "Could not generate code snippet"


class SnippetRenderer(Protocol):
    def render(self, api: ApiDefinition, operation: Operation, data: RequestData, language: str) -> Snippet:
        ...


class OverlayResult(BaseModel):
    """The overlay plus per-operation errors; ``errors`` is None when there are none."""

    overlay: Overlay
    errors: list[ExtractionError] | None = None


class CodeSampleGenerator:
    """Generates one code sample (or one error) per operation of a document."""

    def __init__(self, language: str, renderer: SnippetRenderer | None = None, workers: int = 1):
        check_language(language)
        self.language = language
        self.renderer = renderer or TemplateRenderer()
        self.workers = workers

    def generate(self, api: ApiDefinition) -> tuple[list[CodeSample], list[ExtractionError]]:
        """Process every operation, returning samples and errors in document order."""
        operations = [
            operation
            for methods in api.get_paths().values()
            for operation in methods.values()
        ]

        if self.workers > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(lambda op: self._generate_for_operation(api, op), operations))
        else:
            results = [self._generate_for_operation(api, op) for op in operations]

        samples = [r for r in results if isinstance(r, CodeSample)]
        errors = [r for r in results if isinstance(r, ExtractionError)]
        return samples, errors

    def _generate_for_operation(self, api: ApiDefinition, operation: Operation) -> CodeSample | ExtractionError:
        selector = format_target_selector(operation.path, operation.method)

        shape = select_examples(operation)
        if isinstance(shape, Ambiguity):
            return ExtractionError(json_path_selector=selector, error=shape.reason)

        data = assemble_request(shape, materialize_auth(operation))
        try:
            snippet = self.renderer.render(api, operation, data, self.language)
        except Exception as e:
            return ExtractionError(json_path_selector=selector, error=f"{SNIPPET_ERROR}: {e}")

        if not snippet.code or not snippet.highlight_mode:
            return ExtractionError(json_path_selector=selector, error=SNIPPET_ERROR)
        return CodeSample(lang=snippet.highlight_mode, source=snippet.code, json_path_selector=selector)


def generate_code_samples_overlay(
    file_content: str,
    language: str,
    renderer: SnippetRenderer | None = None,
    workers: int = 1,
) -> OverlayResult:
    """Normalize a raw document and build its code samples overlay.

    Normalization and language errors propagate; per-operation failures
    are collected into ``errors``.
    """
    generator = CodeSampleGenerator(language, renderer=renderer, workers=workers)
    api = ApiDefinition(normalize(file_content))

    samples, errors = generator.generate(api)
    overlay = build_code_samples_overlay(samples)
    return OverlayResult(overlay=overlay, errors=errors or None)
