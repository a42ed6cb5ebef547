"""Load OpenAPI documents from a URL or a local file.

The document format (JSON or YAML) is taken from the response content
type when fetching a URL, otherwise from the file extension. Loaded
documents are checked to be OpenAPI 3.x with a ``paths`` table before
they are handed to the generator.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

import httpx
import yaml

from .pipeline.analyzer.operations import HTTP_METHODS
from .pipeline.errors import SpecLoadError

logger = logging.getLogger(__name__)

_FORMAT_HINT = "Expected .json, .yaml, or .yml extension"


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_spec(source: str) -> dict[str, Any]:
    """Load and validate an OpenAPI document.

    Args:
        source: A URL (http/https) or a file path

    Returns:
        The parsed document

    Raises:
        SpecLoadError: If the source cannot be read, parsed or is not an
            OpenAPI 3.x document
    """
    if is_url(source):
        content, content_type = _fetch(source)
        fmt = _detect_format(urlparse(source).path, content_type)
    else:
        path = Path(source)
        fmt = _detect_format(path.name)
        if not path.is_file():
            raise SpecLoadError(f"Spec file not found: {source}")
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SpecLoadError(f"Failed to read spec file {source}: {exc}") from exc

    logger.debug("Parsing %s as %s", source, fmt)
    document = _parse_content(content, fmt, source)
    validate_document(document)
    return document


def _fetch(url: str) -> tuple[str, str]:
    """Fetch a document. Returns (text, content type)."""
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecLoadError(f"Failed to fetch {url}: HTTP {exc.response.status_code}") from exc
    except httpx.RequestError as exc:
        raise SpecLoadError(f"Failed to fetch {url}: {exc}") from exc

    return response.text, response.headers.get("content-type", "")


def _detect_format(name: str, content_type: str = "") -> str:
    """Pick "json" or "yaml" from a content type, falling back to the extension."""
    if "json" in content_type:
        return "json"
    if "yaml" in content_type or "yml" in content_type:
        return "yaml"

    suffix = PurePosixPath(name).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"

    raise SpecLoadError(f"Unsupported file format: {name or '(none)'}", _FORMAT_HINT)


def _parse_content(content: str, fmt: str, source: str) -> Any:
    try:
        if fmt == "json":
            return json.loads(content)
        return yaml.safe_load(content)
    except json.JSONDecodeError as exc:
        raise SpecLoadError(f"Invalid JSON in {source}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SpecLoadError(f"Invalid YAML in {source}: {exc}") from exc


def validate_document(document: Any) -> None:
    """Check that a parsed document is an OpenAPI 3.x document with paths.

    Raises:
        SpecLoadError: If the document is not valid
    """
    if not isinstance(document, dict):
        raise SpecLoadError("Invalid OpenAPI document: expected an object at the top level")

    version = document.get("openapi")
    if not isinstance(version, str) or not version.startswith("3."):
        found = f"found {version!r}" if version is not None else "missing"
        raise SpecLoadError(
            f"Invalid OpenAPI document: 'openapi' must be a 3.x version string ({found})",
            "Swagger 2.0 documents must be converted to OpenAPI 3 first",
        )

    if not isinstance(document.get("paths"), dict):
        raise SpecLoadError("Invalid OpenAPI document: missing paths", "Add a 'paths' object (it may be empty)")


def get_spec_summary(document: dict[str, Any]) -> dict[str, Any]:
    """Summarize a document for display."""
    info = document.get("info") or {}
    paths = document.get("paths") or {}
    schemas = (document.get("components") or {}).get("schemas") or {}
    tags = [tag["name"] for tag in document.get("tags") or [] if isinstance(tag, dict) and "name" in tag]

    return {
        "title": info.get("title", "Untitled"),
        "version": str(info.get("version", "unknown")),
        "openapi_version": document.get("openapi"),
        "path_count": len(paths),
        "operation_count": sum(1 for item in paths.values() if isinstance(item, dict) for method in HTTP_METHODS if method in item),
        "schema_count": len(schemas),
        "tags": tags,
    }
