"""Typer CLI for sheet nesting and cut optimization."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from sheetnest.application import OptimizationError, optimize
from sheetnest.application.config import (
    ConfigError,
    config_to_options,
    config_to_panels,
    load_job,
)
from sheetnest.cli.commands import display_load_error, validate_command
from sheetnest.domain.value_objects import OptimizationMode
from sheetnest.infrastructure import (
    CutListFormatter,
    JsonExporter,
    ResultSummaryFormatter,
)

OUTPUT_FORMATS = ("text", "json", "cuts")

app = typer.Typer(
    name="sheetnest",
    help="Nest rectangular panels onto stock sheets and plan the cuts.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _parse_mode(value: str | None) -> OptimizationMode | None:
    if value is None:
        return None
    try:
        return OptimizationMode(value.strip().upper())
    except ValueError:
        typer.echo(
            f"Unknown mode: {value}. Use estimation or production.", err=True
        )
        raise typer.Exit(code=1)


@app.command(name="optimize")
def optimize_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    mode: Annotated[
        str | None,
        typer.Option("--mode", "-m", help="Run mode: estimation or production"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", help="Saw blade kerf in mm (overrides job file)"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json, cuts"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file instead of stdout"),
    ] = None,
    parallel: Annotated[
        bool | None,
        typer.Option("--parallel/--sequential", help="Pack material groups concurrently"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress to stderr"),
    ] = False,
) -> None:
    """Optimize a cut list from a job file.

    Exit codes:
        0 - Every panel was placed (or sized, in estimation mode)
        1 - The job could not be loaded or optimized
        2 - Result produced, but some panels were rejected or unplaceable

    Example:
        sheetnest optimize kitchen.json --format json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    parsed_mode = _parse_mode(mode)

    try:
        job = load_job(job_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        options = config_to_options(
            job, mode=parsed_mode, blade_kerf=kerf, parallel=parallel
        )
        result = optimize(config_to_panels(job), options)
    except (OptimizationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        output = JsonExporter().export(result)
    elif output_format == "cuts":
        output = CutListFormatter().format(result)
    else:
        output = ResultSummaryFormatter().format(result)

    if output_file is not None:
        output_file.write_text(output + "\n", encoding="utf-8")
        typer.echo(f"Wrote {output_format} output to {output_file}")
    else:
        typer.echo(output)

    if not result.is_complete:
        typer.echo(
            f"{len(result.rejected_panels)} rejected, "
            f"{len(result.unplaceable)} unplaceable",
            err=True,
        )
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
