"""Read an API document from a local path or an http(s) URL."""

from pathlib import Path

import requests

from default_code_samples.errors import SourceError

DEFAULT_TIMEOUT = 30


def is_url(file_path_or_url: str) -> bool:
    return file_path_or_url.startswith(("https://", "http://"))


def read_file_path_or_url(file_path_or_url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the raw text of the document at the given path or URL."""
    if is_url(file_path_or_url):
        return _fetch(file_path_or_url, timeout)

    path = Path(file_path_or_url)
    if not path.is_file():
        raise SourceError(f"File does not exist: {file_path_or_url}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Could not read {file_path_or_url}: {e}") from e


def _fetch(url: str, timeout: float) -> str:
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SourceError(f"Could not fetch {url}: {e}") from e
    return resp.text
