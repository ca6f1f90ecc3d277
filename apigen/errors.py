"""Exception hierarchy for apigen.

Acquisition, parsing and configuration errors are fatal for a run.
SchemaResolutionError subclasses are raised while resolving a single
operation and only fail that operation.
"""

from __future__ import annotations


class ApigenError(Exception):
    """Base class for all apigen errors."""


class InputError(ApigenError):
    """Raised when no document source is given or a local file is unusable."""


class FetchError(ApigenError):
    """Raised when a remote document cannot be retrieved."""


class MalformedDocument(ApigenError):
    """Raised when the document is not valid JSON or lacks required sections."""


class ConfigurationError(ApigenError):
    """Raised when a discovered configuration file is invalid."""


class SchemaResolutionError(ApigenError):
    """Base class for faults raised while resolving one operation's schemas."""


class UnknownReference(SchemaResolutionError):
    """Raised when a $ref names a schema missing from components.schemas."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown schema reference: {name!r}")
        self.name = name


class CyclicReference(SchemaResolutionError):
    """Raised when a schema refers back to itself through $ref."""

    def __init__(self, chain: list[str]) -> None:
        super().__init__("Cyclic schema reference: " + " -> ".join(chain))
        self.chain = chain


class UnsupportedSchema(SchemaResolutionError):
    """Raised in strict mode for schema shapes the resolver does not handle."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Unsupported schema: {reason}")
        self.reason = reason
