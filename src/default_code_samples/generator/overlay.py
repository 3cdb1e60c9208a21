"""Overlay document models and assembly.

An overlay is a patch document: each action targets one operation in the
original description by JSONPath and merges an ``x-codeSamples`` list into it.
"""

from pydantic import BaseModel, ConfigDict, Field

OVERLAY_VERSION = "1.0.0"
OVERLAY_TITLE = "Code Samples"
OVERLAY_INFO_VERSION = "0.0.0"


class CodeSample(BaseModel):
    """A generated snippet for one operation."""

    lang: str
    label: str | None = None
    source: str
    json_path_selector: str


class ExtractionError(BaseModel):
    """Why no snippet could be generated for one operation."""

    json_path_selector: str
    error: str


class CodeSampleEntry(BaseModel):
    """One entry of an operation's x-codeSamples list."""

    lang: str
    label: str | None = None
    source: str


class ActionUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code_samples: list[CodeSampleEntry] = Field(alias="x-codeSamples")


class OverlayAction(BaseModel):
    target: str
    update: ActionUpdate


class OverlayInfo(BaseModel):
    title: str = OVERLAY_TITLE
    version: str = OVERLAY_INFO_VERSION


class Overlay(BaseModel):
    overlay: str = OVERLAY_VERSION
    info: OverlayInfo = Field(default_factory=OverlayInfo)
    actions: list[OverlayAction] = []

    def to_dict(self) -> dict:
        """Plain-data form for serialization; unset labels are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


def format_target_selector(path_name: str, method: str) -> str:
    """JSONPath selecting one operation in the original document.

    ``path_name`` and ``method`` are substituted verbatim; a path template
    containing ``"`` or ``]`` yields a selector that does not parse.
    """
    return f'$["paths"]["{path_name}"]["{method}"]'


def build_code_samples_overlay(code_samples: list[CodeSample]) -> Overlay:
    """One action per code sample, in the order given."""
    return Overlay(
        actions=[
            OverlayAction(
                target=sample.json_path_selector,
                update=ActionUpdate(
                    code_samples=[
                        CodeSampleEntry(lang=sample.lang, label=sample.label, source=sample.source)
                    ]
                ),
            )
            for sample in code_samples
        ]
    )
