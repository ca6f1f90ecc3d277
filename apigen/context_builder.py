"""Extract operations and their request/response schemas from the document.

Walks paths and methods in document order, keeping every operation that
has an operationId, and picks out the JSON request body schema and the
200 response payload schema (unwrapped from its 'data' envelope).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .loader import get_paths
from .naming import normalize_operation_id
from .schema_parser import (
    Field,
    ResolutionContext,
    SchemaKind,
    classify_schema,
    resolve_fields,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch")

REQUEST_CONTENT_TYPE = "application/json"

# Checked in order; the first content type present wins
_RESPONSE_CONTENT_TYPES = ("*/*", "application/json")

# Envelope property wrapping the actual response payload
ENVELOPE_PROPERTY = "data"


@dataclass(frozen=True)
class Operation:
    """A single path + method with the schemas it declares."""

    path: str
    method: str
    raw_operation_id: str
    operation_id: str
    request_schema: dict[str, Any] | None = None
    response_schema: dict[str, Any] | None = None

    @property
    def label(self) -> str:
        return f"{self.method.upper()} {self.path}"


def _content_schema(content: Any, media_type: str) -> dict[str, Any] | None:
    if not isinstance(content, dict):
        return None
    media = content.get(media_type)
    if not isinstance(media, dict):
        return None
    schema = media.get("schema")
    return schema if isinstance(schema, dict) else None


def get_request_schema(operation: dict[str, Any]) -> dict[str, Any] | None:
    """Return the application/json request body schema, if any."""
    request_body = operation.get("requestBody") or {}
    return _content_schema(request_body.get("content"), REQUEST_CONTENT_TYPE)


def get_response_schema(operation: dict[str, Any]) -> dict[str, Any] | None:
    """Return the 200 response schema, preferring */* over application/json."""
    responses = operation.get("responses") or {}
    success = responses.get("200") or {}
    content = success.get("content")
    for media_type in _RESPONSE_CONTENT_TYPES:
        schema = _content_schema(content, media_type)
        if schema is not None:
            return schema
    return None


def unwrap_envelope(context: ResolutionContext, schema: dict[str, Any]) -> Any:
    """Return the payload schema, unwrapping a 'data' envelope if present."""
    resolved = context.dereference(schema)
    if classify_schema(resolved) is SchemaKind.OBJECT:
        properties = resolved.get("properties")
        if isinstance(properties, dict) and ENVELOPE_PROPERTY in properties:
            return properties[ENVELOPE_PROPERTY]
    return resolved


def iter_operations(document: dict[str, Any]) -> Iterator[Operation]:
    """Yield every named operation in document order."""
    for path, path_item in get_paths(document).items():
        if not isinstance(path_item, dict):
            continue

        for method, operation in path_item.items():
            if method not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict) or not operation.get("operationId"):
                logger.debug("Skipping %s %s: no operationId", method.upper(), path)
                continue

            raw_id = str(operation["operationId"])
            yield Operation(
                path=path,
                method=method,
                raw_operation_id=raw_id,
                operation_id=normalize_operation_id(raw_id),
                request_schema=get_request_schema(operation),
                response_schema=get_response_schema(operation),
            )


def build_fields(
    context: ResolutionContext, operation: Operation,
) -> tuple[list[Field], list[Field]]:
    """Resolve the request body and response payload fields of an operation."""
    request_fields: list[Field] = []
    if operation.request_schema is not None:
        request_fields = resolve_fields(context, operation.request_schema)

    response_fields: list[Field] = []
    if operation.response_schema is not None:
        payload = unwrap_envelope(context, operation.response_schema)
        response_fields = resolve_fields(context, payload)

    return request_fields, response_fields
