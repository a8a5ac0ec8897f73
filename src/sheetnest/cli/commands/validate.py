"""Validate command for checking job files.

This module provides the `validate` command that checks a JSON job file for
errors and reports panels the engine would reject or could not place on
their stock sheet.
"""

from pathlib import Path
from typing import Annotated

import typer

from sheetnest.application.config import (
    ConfigError,
    config_to_options,
    config_to_panels,
    load_job,
)
from sheetnest.domain.services import MaterialGrouper, PanelNormalizer


def validate_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate an optimization job file.

    Checks the job file for:
    - JSON syntax errors
    - Schema validation errors (missing required fields, invalid types, etc.)
    - Panel rows the engine would reject (bad dimensions, quantity, grain)
    - Panels that do not fit their stock sheet

    Exit codes:
        0 - Job is valid with no warnings
        1 - Job has errors (cannot be used)
        2 - Job is valid but some panels would be rejected or unplaceable

    Example:
        sheetnest validate kitchen.json
    """
    typer.echo(f"Validating {job_file}...")
    typer.echo()

    try:
        job = load_job(job_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    if not job.panels:
        typer.echo("Errors:", err=True)
        typer.echo("  panels: Panel list is empty; nothing to optimize", err=True)
        raise typer.Exit(code=1)

    try:
        options = config_to_options(job)
    except ValueError as e:
        typer.echo("Errors:", err=True)
        typer.echo(f"  {e}", err=True)
        raise typer.Exit(code=1)

    normalized = PanelNormalizer().normalize(config_to_panels(job))
    defaults = options.defaults
    grouping = MaterialGrouper(
        default_length=defaults.sheet_length,
        default_width=defaults.sheet_width,
        default_cost=defaults.sheet_cost,
    ).group(normalized.units, options.stock_sheets, kerf=options.blade_kerf)

    warnings: list[str] = []
    for rejected in normalized.rejected:
        warnings.append(f"panels[{rejected.panel_id}]: {rejected.message}")
    for unit in grouping.unplaceable:
        warnings.append(f"panels[{unit.panel_id}] ({unit.unit_id}): {unit.message}")

    if warnings:
        typer.echo("Warnings:")
        for warning in warnings:
            typer.echo(f"  {warning}")
        typer.echo()
        typer.echo(f"Validation passed with {len(warnings)} warning(s)")
        raise typer.Exit(code=2)

    typer.echo(
        f"Validation passed. {normalized.expanded_quantity} pieces in "
        f"{len(grouping.groups)} material group(s)."
    )
    raise typer.Exit(code=0)


def display_load_error(error: ConfigError) -> None:
    """Display a job loading error.

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
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)
