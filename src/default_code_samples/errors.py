"""Invocation-fatal errors.

Per-operation problems are reported as values, never raised; anything
raised from here aborts the whole run before an overlay is produced.
"""


class CodeSamplesError(Exception):
    """Base class for errors that abort a code sample run."""


class SourceError(CodeSamplesError):
    """The document source could not be read or fetched."""


class NormalizationError(CodeSamplesError):
    """The document could not be parsed or dereferenced."""


class UnsupportedLanguageError(CodeSamplesError):
    """The requested snippet language is not in the supported set."""

    def __init__(self, language: str, supported: list[str]):
        self.language = language
        self.supported = supported
        super().__init__(
            f"Language not supported: {language}. "
            f"Supported languages: {', '.join(supported)}"
        )
