"""Load specification documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw spec documents and converting
them into Python dictionaries. It supports both JSON and YAML formats with
automatic format detection.

The public function is :func:`load_spec`. After loading, the raw dict
should be passed to :func:`~specbind.parser.validate.validate_spec` to obtain
a :class:`~specbind.models.Specification`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specbind.exceptions import SpecLoadError


def load_spec(source: str | Path) -> dict[str, Any]:
    """Load a spec document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecLoadError: If the source cannot be loaded or parsed.
    """
    if isinstance(source, Path):
        return _load_from_file(source)
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a spec document from stdin.

    Raises:
        SpecLoadError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecLoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a spec document from URL. Supports JSON and YAML responses.

    Raises:
        SpecLoadError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecLoadError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecLoadError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str | Path) -> dict[str, Any]:
    """Load a spec document from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        SpecLoadError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecLoadError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecLoadError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecLoadError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecLoadError: If the content cannot be parsed as either format, or
            does not decode to an object.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            # An explicit .json file gets no second chance as YAML.
            if hint == "json":
                raise SpecLoadError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_object(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_object(result)

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecLoadError(msg)


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecLoadError(f"Spec must be a JSON/YAML object (got {kind})")
    return result
