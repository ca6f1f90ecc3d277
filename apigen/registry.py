"""Named schema lookup for $ref resolution."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .errors import UnknownReference
from .loader import get_schemas, ref_name


class SchemaRegistry:
    """Read-only mapping of component schema names to their definitions."""

    def __init__(self, schemas: Mapping[str, Any]) -> None:
        self._schemas = MappingProxyType(dict(schemas))

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> SchemaRegistry:
        """Build the registry from a document's components.schemas section."""
        return cls(get_schemas(document))

    def resolve(self, name: str) -> dict[str, Any]:
        """Return the schema registered under name."""
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownReference(name) from None

    def resolve_ref(self, ref: str) -> dict[str, Any]:
        """Resolve a $ref pointer such as '#/components/schemas/User'."""
        return self.resolve(ref_name(ref))

    def names(self) -> Iterator[str]:
        return iter(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
