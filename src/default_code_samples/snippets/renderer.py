"""Snippet renderers: turn one operation's request data into source code."""

import re
from pathlib import Path

from pydantic import BaseModel

from default_code_samples.errors import UnsupportedLanguageError
from default_code_samples.generator.examples import RequestData
from default_code_samples.llm import LlmClient
from default_code_samples.parser.openapi import ApiDefinition, Operation

from .har import build_request
from .targets import TARGETS, get_supported_languages

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class Snippet(BaseModel):
    """Rendered source text and the syntax highlighting mode for it."""

    code: str | None = None
    highlight_mode: str | None = None


def check_language(language: str) -> None:
    if language not in TARGETS:
        raise UnsupportedLanguageError(language, get_supported_languages())


class TemplateRenderer:
    """Deterministic renderer backed by the per-language templates."""

    def render(self, api: ApiDefinition, operation: Operation, data: RequestData, language: str) -> Snippet:
        check_language(language)
        target = TARGETS[language]
        request = build_request(api, operation, data)
        return Snippet(code=target.render(request), highlight_mode=target.highlight_mode)


class LlmSnippetRenderer:
    """Asks an LLM to write the snippet from the resolved HTTP request."""

    def __init__(self, model: str | None = None, timeout: float | None = None):
        self.client = LlmClient(model=model, timeout=timeout)

    def render(self, api: ApiDefinition, operation: Operation, data: RequestData, language: str) -> Snippet:
        check_language(language)
        target = TARGETS[language]
        request = build_request(api, operation, data)

        prompt_template = (PROMPTS_DIR / "snippet.md").read_text(encoding="utf-8")
        response = self.client.call(
            system=prompt_template,
            user=(
                f"Write a {language} code sample for the following HTTP request.\n\n"
                f"```json\n{request.model_dump_json(indent=2)}\n```"
            ),
        )
        return Snippet(code=self._extract_code(response), highlight_mode=target.highlight_mode)

    def _extract_code(self, response: str | None) -> str | None:
        """Extract the first fenced code block, or the whole response."""
        if not response:
            return None
        match = re.search(r"```[\w+#-]*\s*\n(.*?)```", response, re.DOTALL)
        if match:
            return match.group(1).strip()
        return response.strip()
