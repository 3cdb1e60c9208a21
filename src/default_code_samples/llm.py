"""Chat-completion client behind the LLM snippet renderer.

Only ``LlmSnippetRenderer`` talks to this module. Each call sends the
snippet prompt plus one operation's request description and returns the raw
reply text; pulling the code block out of it is the renderer's job.
Provider credentials come from litellm's usual environment variables.
"""

from litellm import completion

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_TIMEOUT = 60


class LlmClient:
    def __init__(self, model: str | None = None, timeout: float | None = None):
        self.model = model or DEFAULT_MODEL
        self.timeout = timeout or DEFAULT_TIMEOUT

    def call(self, system: str, user: str) -> str:
        """Return the model's reply, or an empty string when it sent no text.

        Snippets must be reproducible, so sampling is pinned to temperature 0.
        Provider errors propagate and become that operation's error.
        """
        response = completion(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=0,
            timeout=self.timeout,
        )
        return response.choices[0].message.content or ""
