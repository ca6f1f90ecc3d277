"""Entry point: apigen SOURCE / python -m apigen SOURCE

Reads an OpenAPI document (URL or file) and writes one TypeScript file of
request/response interfaces per operation under output.path.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .codegen import GenerationSummary, generate
from .config import load_config
from .errors import ApigenError, InputError
from .loader import load_document


def _display_path(path: Path) -> str:
    """Show a path relative to the working directory when it lies below it."""
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("source", required=False)
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for generated files (overrides output.path).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail operations using unsupported schema shapes instead of typing them as 'any'.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    source: str | None,
    output_dir: Path | None,
    strict: bool,
    verbose: bool,
) -> int:
    """Generate TypeScript request/response types from an OpenAPI document.

    SOURCE is an http(s) URL or a path to a JSON OpenAPI document.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not source:
        click.echo(ctx.get_usage(), err=True)
        raise InputError("Provide the URL or file path of an OpenAPI document.")

    config = load_config()
    output_root = output_dir or config.output_path
    document = load_document(source)

    click.echo("Starting API type generation...")
    summary = GenerationSummary()
    for result in generate(document, output_root, strict=strict):
        summary.record(result)
        if result.ok:
            click.echo(f"Generated: {_display_path(result.output_path)}")
        else:
            click.echo(f"Failed: {result.operation.label}: {result.error}", err=True)

    if summary.failed:
        click.echo(f"Type generation finished with errors ({summary}).", err=True)
        return 1
    click.echo(f"Type generation finished ({summary}).")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        return cli.main(args=list(argv), prog_name="apigen", standalone_mode=False) or 0
    except ApigenError as exc:
        click.echo(f"Failed to generate API types: {exc}", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
