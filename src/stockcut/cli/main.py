"""Typer CLI for cut optimization."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from stockcut.application import (
    check_sufficiency,
    estimate_material_needed,
    get_factory,
    run_optimization,
)
from stockcut.application.config import (
    ConfigError,
    JobConfiguration,
    config_to_demand,
    config_to_options,
    config_to_supply,
    load_config,
)
from stockcut.cli.commands import display_config_error, validate_command
from stockcut.domain import OptimizationMode
from stockcut.infrastructure import (
    JsonExporter,
    OptimizationReportFormatter,
    SufficiencyReportFormatter,
)

OUTPUT_FORMATS = ("text", "json")

# Exit code when some pieces could not be placed or stock is short
EXIT_INCOMPLETE = 2

app = typer.Typer(
    name="stockcut",
    help="Lay out rectangular pieces on stock sheets and plan the cuts.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _load_job(job_file: Path) -> JobConfiguration:
    try:
        return load_config(job_file)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)


def _parse_mode(mode: str) -> OptimizationMode:
    try:
        return OptimizationMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in OptimizationMode)
        typer.echo(f"Error: Unknown mode '{mode}'. Valid modes: {valid}", err=True)
        raise typer.Exit(code=1)


@app.command()
def optimize(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    mode: Annotated[
        str | None,
        typer.Option(
            "--mode",
            "-m",
            help="Optimization mode: minimize-waste, simplify-cuts, grain-direction, "
            "minimize-sheets, largest-first, edge-alignment",
        ),
    ] = None,
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Never rotate pieces, whatever the mode"),
    ] = False,
    algorithm: Annotated[
        str | None,
        typer.Option("--algorithm", "-a", help="Packing algorithm: maxrects, guillotine"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file instead of stdout"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log optimization progress to stderr"),
    ] = False,
) -> None:
    """Optimize the cutting layout of a job file.

    Settings given on the command line override the job file's
    optimization section.

    Exit codes:
        0 - All pieces placed
        1 - Invalid job file or options
        2 - Some pieces could not be placed
    """
    _configure_logging(verbose)

    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown format '{output_format}'. "
            f"Valid formats: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    config = _load_job(job_file)
    options = config_to_options(config)

    if mode is not None:
        options = replace(options, mode=_parse_mode(mode))
    if no_rotation:
        options = replace(options, allow_rotation=False)
    if algorithm is not None:
        if algorithm not in get_factory().available_algorithms():
            typer.echo(
                f"Error: Unknown algorithm '{algorithm}'. Valid algorithms: "
                f"{', '.join(get_factory().available_algorithms())}",
                err=True,
            )
            raise typer.Exit(code=1)
        options = replace(options, algorithm=algorithm)

    result = run_optimization(config_to_demand(config), config_to_supply(config), options)

    if output_format == "json":
        output = JsonExporter().export(result)
    else:
        output = OptimizationReportFormatter().format(result)

    if output_file is not None:
        output_file.write_text(output)
        typer.echo(f"Output written to {output_file}")
    else:
        typer.echo(output)

    if not result.is_complete:
        typer.echo(
            f"Warning: {result.unmatched_count} piece(s) could not be placed.",
            err=True,
        )
        raise typer.Exit(code=EXIT_INCOMPLETE)


@app.command()
def check(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
) -> None:
    """Compare the job's demand area with its available stock area.

    This is a quick area check and does not run the packer.

    Exit codes:
        0 - Stock area is sufficient
        1 - Invalid job file
        2 - Stock area is insufficient
    """
    config = _load_job(job_file)
    demand = config_to_demand(config)
    supply = config_to_supply(config)

    estimate = estimate_material_needed(demand)
    report = check_sufficiency(demand, supply)
    typer.echo(SufficiencyReportFormatter().format(estimate, report))

    if not report.is_sufficient:
        raise typer.Exit(code=EXIT_INCOMPLETE)


if __name__ == "__main__":
    app()
