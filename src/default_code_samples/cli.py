"""CLI entry point for default-code-samples."""

import json
from pathlib import Path

import click
import yaml

from default_code_samples.errors import CodeSamplesError
from default_code_samples.generator.codesamples import OverlayResult, generate_code_samples_overlay
from default_code_samples.parser.source import DEFAULT_TIMEOUT, read_file_path_or_url
from default_code_samples.snippets.renderer import LlmSnippetRenderer, TemplateRenderer
from default_code_samples.snippets.targets import TARGETS, get_supported_languages


def _dump_overlay(result: OverlayResult, fmt: str) -> str:
    data = result.overlay.to_dict()
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


@click.group()
def main():
    """Default Code Samples — generate an x-codeSamples overlay for an OpenAPI document."""
    pass


@main.command()
@click.option("-s", "--schema", required=True, help="Path or http(s) URL of the OpenAPI document.")
@click.option("-l", "--language", required=True, type=click.Choice(get_supported_languages()), help="Language to generate code samples for.")
@click.option("-o", "--out", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output file for the overlay (default: stdout).")
@click.option("--format", "fmt", default="yaml", type=click.Choice(["yaml", "json"]), help="Overlay output format.")
@click.option("--model", default=None, envvar="DEFAULT_CODE_SAMPLES_MODEL", help="LLM model to write snippets with instead of the built-in templates.")
@click.option("--workers", default=1, type=click.IntRange(min=1), help="Operations processed in parallel.")
@click.option("--timeout", default=DEFAULT_TIMEOUT, type=click.FloatRange(min=0, min_open=True), help="Timeout in seconds when fetching a URL.")
@click.option("--llm-timeout", default=None, type=click.FloatRange(min=0, min_open=True), help="Timeout in seconds for each LLM request (with --model).")
def generate(schema: str, language: str, out: Path | None, fmt: str, model: str | None, workers: int, timeout: float, llm_timeout: float | None):
    """Generate a code samples overlay for every operation in SCHEMA."""
    click.echo(f"Reading {schema}...", err=True)
    renderer = LlmSnippetRenderer(model=model, timeout=llm_timeout) if model else TemplateRenderer()
    try:
        file_content = read_file_path_or_url(schema, timeout=timeout)
        result = generate_code_samples_overlay(file_content, language, renderer=renderer, workers=workers)
    except CodeSamplesError as e:
        raise click.ClickException(str(e)) from e

    errors = result.errors or []
    click.echo(f"Generated {len(result.overlay.actions)} code samples ({len(errors)} errors).", err=True)
    for error in errors:
        click.echo(f"Error generating code sample for {error.json_path_selector}: {error.error}", err=True)

    content = _dump_overlay(result, fmt)
    if out is None:
        click.echo(content, nl=False)
    else:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
        click.echo(f"Overlay saved to {out}", err=True)


@main.command()
def languages():
    """List supported snippet languages and their highlight modes."""
    for name, target in TARGETS.items():
        click.echo(f"{name}\t{target.highlight_mode}")
