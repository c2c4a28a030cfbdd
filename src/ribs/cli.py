"""CLI entry point for the ribs IPS patcher."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from pydantic import ValidationError

from .applier import OverflowPolicy
from .config import PatchOptions, load_config, patch_defaults
from .errors import RibsError
from .pipeline import run_patch

APP_HELP = "ribs is a basic IPS patcher. Because we needed one more."

app = typer.Typer(help=APP_HELP, no_args_is_help=True)


def _configure_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric, format="%(levelname)s %(name)s: %(message)s")


def _build_options(config_path: Optional[Path], **overrides: Any) -> PatchOptions:
    """Merge config-file defaults with command-line values."""
    values: Dict[str, Any] = {}
    if config_path is not None:
        values.update(patch_defaults(load_config(config_path)))
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return PatchOptions(**values)
    except ValidationError as error:
        raise typer.BadParameter(str(error)) from error


def _run(options: PatchOptions) -> None:
    try:
        outcome = run_patch(options, sink=typer.echo)
    except (RibsError, OSError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    if outcome.applied:
        typer.echo(
            f"Applied {len(outcome.records)} record(s); wrote {outcome.output_bytes:,} bytes to {outcome.output_path}."
        )


@app.command("apply")
def apply_command(
    base: Path = typer.Option(..., "--base", "-b", metavar="ROM", help="Base ROM."),
    patch: Path = typer.Option(..., "--patch", "-p", metavar="IPS", help="IPS patch to apply."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", metavar="OUTPUT", help="Patched ROM to output."),
    verbose: Optional[bool] = typer.Option(
        None,
        "--verbose/--quiet",
        "-v/-q",
        help="List each record while decoding.",
        show_default=False,
    ),
    grow: Optional[bool] = typer.Option(
        None,
        "--grow/--strict",
        help="Extend the output when a record writes past the end of the base ROM.",
        show_default=False,
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML configuration file."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for diagnostics."),
) -> None:
    """Decode an IPS patch and optionally write a patched copy of ROM."""
    _configure_logging(log_level)
    overflow = None if grow is None else (OverflowPolicy.GROW if grow else OverflowPolicy.ERROR)
    try:
        options = _build_options(config, base=base, patch=patch, out=out, verbose=verbose, overflow=overflow)
    except RibsError as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error
    _run(options)


@app.command("inspect")
def inspect_command(
    patch: Path = typer.Option(..., "--patch", "-p", metavar="IPS", help="IPS patch to list."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for diagnostics."),
) -> None:
    """List the records of an IPS patch without applying it."""
    _configure_logging(log_level)
    _run(PatchOptions(patch=patch, verbose=True))


if __name__ == "__main__":
    app()
