"""Validate command for checking job files.

This module provides the `validate` command that checks a JSON job file for
syntax and schema errors without running an optimization.
"""

from pathlib import Path
from typing import Annotated

import typer

from stockcut.application.config import ConfigError, error_location, load_config


def validate_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate an optimization job file.

    Checks the job file for:
    - JSON syntax errors
    - Schema validation errors (missing required fields, invalid values, etc.)
    - Duplicate piece or stock identifiers

    Exit codes:
        0 - Job file is valid
        1 - Job file has errors

    Example:
        stockcut validate kitchen.json
    """
    typer.echo(f"Validating {job_file}...")
    typer.echo()

    try:
        config = load_config(job_file)
    except ConfigError as e:
        display_config_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    piece_count = sum(piece.quantity for piece in config.pieces)
    typer.echo(
        f"Validation passed: {len(config.pieces)} piece type(s), "
        f"{piece_count} piece(s), {len(config.stock)} stock sheet(s)."
    )


def display_config_error(error: ConfigError) -> None:
    """Display a job file loading error.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {error_location(detail)}: {message}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)
