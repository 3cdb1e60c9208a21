from default_code_samples.generator.overlay import (
    CodeSample,
    Overlay,
    build_code_samples_overlay,
    format_target_selector,
)
from default_code_samples.parser.base import Param, SecurityScheme


class TestParam:
    def test_create_minimal_param(self):
        p = Param(name="id", location="path")
        assert p.required is False
        assert p.example is None
        assert p.examples == {}

    def test_param_with_example(self):
        p = Param(name="limit", location="query", example=10)
        assert p.example == 10


class TestSecurityScheme:
    def test_api_key_scheme(self):
        s = SecurityScheme(key="apiKey", type="apiKey", name="X-API-Key", location="header")
        assert s.scheme is None
        assert s.location == "header"


class TestTargetSelector:
    def test_selector_format(self):
        assert format_target_selector("/pets/{petId}", "get") == '$["paths"]["/pets/{petId}"]["get"]'

    def test_selector_is_verbatim(self):
        assert format_target_selector("/a", "POST") == '$["paths"]["/a"]["POST"]'


class TestOverlay:
    def test_empty_overlay(self):
        overlay = build_code_samples_overlay([])
        assert overlay.to_dict() == {
            "overlay": "1.0.0",
            "info": {"title": "Code Samples", "version": "0.0.0"},
            "actions": [],
        }

    def test_one_action_per_sample_in_order(self):
        samples = [
            CodeSample(lang="shell", source="curl a", json_path_selector='$["paths"]["/a"]["get"]'),
            CodeSample(lang="shell", source="curl b", json_path_selector='$["paths"]["/b"]["get"]'),
        ]
        data = build_code_samples_overlay(samples).to_dict()
        assert [a["target"] for a in data["actions"]] == [s.json_path_selector for s in samples]
        assert data["actions"][0]["update"] == {"x-codeSamples": [{"lang": "shell", "source": "curl a"}]}

    def test_label_kept_when_set(self):
        sample = CodeSample(lang="python", label="Python", source="x", json_path_selector="t")
        entry = build_code_samples_overlay([sample]).to_dict()["actions"][0]["update"]["x-codeSamples"][0]
        assert entry == {"lang": "python", "label": "Python", "source": "x"}

    def test_overlay_defaults(self):
        overlay = Overlay()
        assert overlay.overlay == "1.0.0"
        assert overlay.info.title == "Code Samples"
