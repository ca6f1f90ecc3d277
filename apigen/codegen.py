"""Render templates and write generated type files.

Each operation becomes one .ts file holding its RequestBody and Response
interfaces. Operations are resolved and written one at a time; a failing
operation is reported and the rest still get generated.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from .context_builder import Operation, build_fields, iter_operations
from .errors import SchemaResolutionError
from .naming import artifact_path
from .registry import SchemaRegistry
from .schema_parser import Field, ResolutionContext

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "operation.ts.j2"


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_artifact(request_fields: list[Field], response_fields: list[Field]) -> str:
    """Render the RequestBody and Response interfaces of one operation."""
    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(request_fields=request_fields, response_fields=response_fields)


def emit(
    operation: Operation,
    request_fields: list[Field],
    response_fields: list[Field],
    output_root: Path,
) -> Path:
    """Write an operation's types, replacing any earlier file."""
    output_path = artifact_path(output_root, operation.path, operation.method, operation.operation_id)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_artifact(request_fields, response_fields), encoding="utf-8")
    return output_path


@dataclass(frozen=True)
class OperationResult:
    """Outcome of generating one operation: a written path or an error."""

    operation: Operation
    output_path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def generate(
    document: dict[str, Any],
    output_root: Path,
    strict: bool = False,
) -> Iterator[OperationResult]:
    """Generate type files for every operation, yielding as each finishes.

    Raises MalformedDocument before the first result if the document has no
    usable components.schemas or paths section.
    """
    registry = SchemaRegistry.from_document(document)
    operations = list(iter_operations(document))

    for operation in operations:
        context = ResolutionContext(registry, strict=strict)
        try:
            request_fields, response_fields = build_fields(context, operation)
            output_path = emit(operation, request_fields, response_fields, output_root)
        except (SchemaResolutionError, OSError) as exc:
            yield OperationResult(operation, error=exc)
            continue
        yield OperationResult(operation, output_path=output_path)


@dataclass
class GenerationSummary:
    """Counts of generated and failed operations in a run."""

    generated: int = 0
    failed: int = 0

    def record(self, result: OperationResult) -> None:
        if result.ok:
            self.generated += 1
        else:
            self.failed += 1

    def __str__(self) -> str:
        return f"{self.generated} generated, {self.failed} failed"
