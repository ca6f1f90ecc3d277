"""Resolve OpenAPI schemas into TypeScript type expressions.

Handles:
- $ref resolution (inlined at every use site, cycles detected)
- string enums as literal unions, in declared order
- string / integer / number / boolean primitives
- arrays, nested to any depth
- objects with properties as inline structural types
- objects without properties as an open map
- anything else as an unsupported shape (placeholder or error)
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from .errors import CyclicReference, UnsupportedSchema
from .loader import ref_name
from .registry import SchemaRegistry

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES: dict[str, str] = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
}

_COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf", "not")

OPEN_MAP_TYPE = "Record<string, any>"
UNTYPED_TYPE = "any"


class SchemaKind(str, enum.Enum):
    """The schema shapes the resolver recognizes."""

    REFERENCE = "reference"
    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"
    UNSUPPORTED = "unsupported"


def is_reference(schema: Any) -> bool:
    return isinstance(schema, dict) and isinstance(schema.get("$ref"), str)


def classify_schema(schema: Any) -> SchemaKind:
    """Determine which shape a schema node has.

    Only mappings with a single string 'type' (or 'properties') are
    recognized; boolean schemas and type lists are unsupported.
    """
    if not isinstance(schema, dict):
        return SchemaKind.UNSUPPORTED
    if is_reference(schema):
        return SchemaKind.REFERENCE
    schema_type = schema.get("type")
    if schema_type is not None and not isinstance(schema_type, str):
        return SchemaKind.UNSUPPORTED
    if schema_type in _PRIMITIVE_TYPES:
        return SchemaKind.PRIMITIVE
    if schema_type == "array":
        return SchemaKind.ARRAY
    if schema_type == "object" or "properties" in schema:
        return SchemaKind.OBJECT
    return SchemaKind.UNSUPPORTED


def describe_unsupported(schema: Any) -> str:
    """Explain why a schema was classified as unsupported."""
    if not isinstance(schema, dict):
        return f"non-object schema {schema!r}"
    for keyword in _COMPOSITION_KEYWORDS:
        if keyword in schema:
            return f"'{keyword}' composition"
    if "type" in schema:
        return f"type {schema['type']!r}"
    if not schema:
        return "empty schema"
    return "schema without a type"


@dataclass
class ResolutionContext:
    """Everything a resolution call needs: the registry and the policy.

    Tracks the reference names currently being expanded so that a schema
    reaching itself again raises CyclicReference instead of recursing forever.
    strict=True makes unsupported shapes raise UnsupportedSchema instead of
    resolving to 'any'.
    """

    registry: SchemaRegistry
    strict: bool = False
    _expanding: list[str] = field(default_factory=list, repr=False)

    @contextmanager
    def expanding(self, name: str) -> Iterator[None]:
        if name in self._expanding:
            start = self._expanding.index(name)
            raise CyclicReference([*self._expanding[start:], name])
        self._expanding.append(name)
        try:
            yield
        finally:
            self._expanding.pop()

    def dereference(self, schema: Any) -> Any:
        """Follow $ref pointers until a concrete schema is reached."""
        seen: list[str] = []
        while is_reference(schema):
            name = ref_name(schema["$ref"])
            if name in seen:
                raise CyclicReference([*seen, name])
            seen.append(name)
            schema = self.registry.resolve(name)
        return schema


@dataclass(frozen=True)
class Field:
    """One property of an object schema."""

    name: str
    optional: bool
    type: str
    description: str | None = None

    @property
    def rendered(self) -> str:
        """Render as an interface member, preceded by its doc comment."""
        lines = ""
        if self.description:
            body = self.description.replace("\n", "\n   * ")
            lines = f"  /**\n   * @description {body}\n   */\n"
        marker = "?" if self.optional else ""
        return f"{lines}  {self.name}{marker}: {self.type};"


def _resolve_unsupported(context: ResolutionContext, schema: Any) -> str:
    reason = describe_unsupported(schema)
    if context.strict:
        raise UnsupportedSchema(reason)
    logger.debug("Unsupported schema (%s), using '%s'", reason, UNTYPED_TYPE)
    return UNTYPED_TYPE


def _is_literal_union(context: ResolutionContext, schema: Any) -> bool:
    """Check if a schema resolves to a string enum, rendered as a union."""
    resolved = context.dereference(schema)
    return (
        classify_schema(resolved) is SchemaKind.PRIMITIVE
        and resolved["type"] == "string"
        and bool(resolved.get("enum"))
    )


def resolve_schema_type(context: ResolutionContext, schema: Any) -> str:
    """Resolve an OpenAPI schema to a TypeScript type expression."""
    kind = classify_schema(schema)

    if kind is SchemaKind.REFERENCE:
        name = ref_name(schema["$ref"])
        with context.expanding(name):
            return resolve_schema_type(context, context.registry.resolve(name))

    if kind is SchemaKind.PRIMITIVE:
        values = schema.get("enum")
        if schema["type"] == "string" and values:
            return " | ".join(f"'{value}'" for value in values)
        return _PRIMITIVE_TYPES[schema["type"]]

    if kind is SchemaKind.ARRAY:
        # No items: elements are unconstrained, an open array in either mode
        if "items" not in schema:
            return f"{UNTYPED_TYPE}[]"
        items = schema["items"]
        item_type = resolve_schema_type(context, items)
        if _is_literal_union(context, items):
            item_type = f"({item_type})"
        return f"{item_type}[]"

    if kind is SchemaKind.OBJECT:
        properties = schema.get("properties")
        if isinstance(properties, dict) and properties:
            return "{\n" + render_fields(resolve_fields(context, schema)) + "\n}"
        return OPEN_MAP_TYPE

    return _resolve_unsupported(context, schema)


def _field_description(schema: Any) -> str | None:
    if not isinstance(schema, dict):
        return None
    description = schema.get("description")
    if not isinstance(description, str):
        return None
    return description.strip() or None


def resolve_fields(context: ResolutionContext, schema: Any) -> list[Field]:
    """Synthesize the ordered field list of an object schema.

    A top-level $ref is followed first. Schemas without properties
    (including non-object schemas) yield no fields.
    """
    if is_reference(schema):
        name = ref_name(schema["$ref"])
        with context.expanding(name):
            return resolve_fields(context, context.registry.resolve(name))

    if not isinstance(schema, dict):
        return []
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return []
    required = schema.get("required")
    required_fields = set()
    if isinstance(required, list):
        required_fields = {name for name in required if isinstance(name, str)}

    fields = []
    for prop_name, prop_schema in properties.items():
        fields.append(Field(
            name=prop_name,
            optional=prop_name not in required_fields,
            type=resolve_schema_type(context, prop_schema),
            description=_field_description(prop_schema),
        ))
    return fields


def render_fields(fields: list[Field]) -> str:
    """Render fields as interface body lines, one member after another."""
    return "\n".join(f.rendered for f in fields)
