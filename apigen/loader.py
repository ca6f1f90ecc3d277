"""Load and parse an OpenAPI document.

Fetches the document over HTTP(S) or reads it from disk, then extracts
paths and component schemas.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from .errors import FetchError, InputError, MalformedDocument

logger = logging.getLogger(__name__)

_URL_PREFIXES = ("http://", "https://")


def is_url(source: str) -> bool:
    """Check if a document source is a remote URL."""
    return source.startswith(_URL_PREFIXES)


def _parse_document(text: str, source: str) -> dict[str, Any]:
    """Parse JSON text into a document mapping."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDocument(f"Invalid JSON in {source}: {exc}") from exc
    if not isinstance(document, dict):
        raise MalformedDocument(f"Document root in {source} must be a JSON object")
    return document


def fetch_document(url: str) -> dict[str, Any]:
    """Download an OpenAPI document. Blocks until the response is complete."""
    logger.debug("Fetching OpenAPI document from %s", url)
    try:
        response = httpx.get(url, follow_redirects=True, timeout=None)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
    return _parse_document(response.text, url)


def read_document(path: Path | str) -> dict[str, Any]:
    """Read an OpenAPI document from disk."""
    spec_file = Path(path).resolve()
    if not spec_file.is_file():
        raise InputError(f"File not found: {spec_file}")
    logger.debug("Reading OpenAPI document from %s", spec_file)
    try:
        text = spec_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Cannot read {spec_file}: {exc}") from exc
    return _parse_document(text, str(spec_file))


def load_document(source: str) -> dict[str, Any]:
    """Load the OpenAPI document from a URL or a local file path."""
    if is_url(source):
        return fetch_document(source)
    return read_document(source)


def get_paths(document: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the document."""
    paths = document.get("paths")
    if paths is None:
        return {}
    if not isinstance(paths, dict):
        raise MalformedDocument("'paths' must be a JSON object")
    return paths


def get_schemas(document: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the document."""
    components = document.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    if schemas is None:
        raise MalformedDocument("Document has no 'components.schemas' section")
    if not isinstance(schemas, dict):
        raise MalformedDocument("'components.schemas' must be a JSON object")
    return schemas


def ref_name(ref: str) -> str:
    """Return the schema name a $ref pointer ends in."""
    return ref.rsplit("/", 1)[-1]
