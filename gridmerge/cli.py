"""Typer CLI interface for gridmerge."""

import json
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gridmerge.engines.columns import infer_columns
from gridmerge.exceptions import GridMergeError
from gridmerge.ingestion import load_sources
from gridmerge.models.columns import ColumnOptions
from gridmerge.models.enums import ColumnScan, ExportFormat
from gridmerge.models.merge import MergeConfig, NormalizedTable
from gridmerge.normalization.detection import detect_merge_fields
from gridmerge.normalization.pipeline import TableNormalizer
from gridmerge.reports.export import export_rows
from gridmerge.reports.merge_summary import MergeSummaryReport

LOG_LEVEL_ENV = "GRIDMERGE_LOG_LEVEL"

app = typer.Typer(
    name="gridmerge",
    help="gridmerge: merge row sources by key and infer data-grid columns.",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """gridmerge: merge row sources by key and infer data-grid columns."""
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(files: list[Path]) -> dict:
    """Load source files, turning load failures into a clean CLI exit."""
    try:
        return load_sources(files)
    except (GridMergeError, FileNotFoundError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)


def _load_data(files: list[Path]) -> dict | list:
    """Loaded sources ready for normalization; a lone source stays a flat row list."""
    sources = _load(files)
    if len(sources) == 1:
        return next(iter(sources.values()))
    return sources


def _build_config(
    config: Path | None,
    by: list[str] | None,
    preserve: list[str] | None,
    identity: str | None,
    no_auto_detect: bool,
) -> MergeConfig:
    """Merge config from file, with command-line flags taking precedence."""
    try:
        merge_config = MergeConfig.from_file(config) if config else MergeConfig()
    except GridMergeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    updates: dict = {}
    if by:
        updates["by"] = by
    if preserve:
        updates["preserve"] = preserve
    if identity:
        updates["identity_field"] = identity
    if no_auto_detect:
        updates["auto_detect"] = False
    return merge_config.model_copy(update=updates)


def _normalize(
    files: list[Path],
    merge_config: MergeConfig,
    options: ColumnOptions,
) -> NormalizedTable:
    return TableNormalizer(merge_config).normalize(_load_data(files), options)


@app.command()
def merge(
    files: list[Path] = typer.Argument(..., help="Source files (.csv, .json)"),
    by: list[str] | None = typer.Option(None, "--by", "-b", help="Merge key field (repeatable)"),
    preserve: list[str] | None = typer.Option(
        None, "--preserve", "-p", help="Field whose first non-empty value sticks (repeatable)"
    ),
    identity: str | None = typer.Option(
        None,
        "--identity",
        help="Field identifying rows for preserved values (default: first preserve field that is a merge key)",
    ),
    no_auto_detect: bool = typer.Option(
        False, "--no-auto-detect", help="Do not guess merge keys from shared fields"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Merge config JSON file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write result to this file"),
    fmt: ExportFormat = typer.Option(ExportFormat.JSON, "--format", "-f", help="Output format"),
) -> None:
    """Merge source files into one row set."""
    merge_config = _build_config(config, by, preserve, identity, no_auto_detect)
    table = _normalize(files, merge_config, ColumnOptions(scan=ColumnScan.FULL))

    content = export_rows(table.rows, table.columns, fmt, output)
    if output is None:
        typer.echo(content)
    else:
        typer.echo(
            f"Wrote {table.outcome.output_rows} rows ({table.outcome.strategy.value}) to {output}",
            err=True,
        )


@app.command()
def detect(
    files: list[Path] = typer.Argument(..., help="Source files (.csv, .json)"),
) -> None:
    """Print the merge keys and preserved fields that auto-detection would use."""
    sources = _load(files)
    detected = detect_merge_fields(sources)
    typer.echo(json.dumps(detected.model_dump(), indent=2))


@app.command()
def columns(
    files: list[Path] = typer.Argument(..., help="Source files (.csv, .json)"),
    order: list[str] | None = typer.Option(None, "--order", help="Column order (repeatable)"),
    hide: list[str] | None = typer.Option(None, "--hide", help="Hidden column (repeatable)"),
    field: list[str] | None = typer.Option(None, "--field", help="Allowed column (repeatable)"),
    full_scan: bool = typer.Option(False, "--full-scan", help="Infer from every row, not just the first"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Merge config JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the columns inferred for the merged rows."""
    merge_config = _build_config(config, None, None, None, False)
    rows, _ = TableNormalizer(merge_config).process(_load_data(files))
    inferred = infer_columns(
        rows,
        fields=field,
        hidden_columns=hide,
        column_order=order,
        scan=ColumnScan.FULL if full_scan else ColumnScan.SAMPLE,
    )

    if json_output:
        typer.echo(json.dumps([column.model_dump(mode="json") for column in inferred], indent=2))
        return

    table = Table(title=f"Columns ({len(rows)} rows)")
    table.add_column("Key")
    table.add_column("Title")
    table.add_column("Type")
    for column in inferred:
        table.add_row(column.key, column.title, column.type.value)
    Console().print(table)


@app.command()
def report(
    files: list[Path] = typer.Argument(..., help="Source files (.csv, .json)"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Merge config JSON file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write report to this file"),
) -> None:
    """Render a plain-text summary of the merge."""
    merge_config = _build_config(config, None, None, None, False)
    table = _normalize(files, merge_config, ColumnOptions())
    text = MergeSummaryReport().render(table)
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text)
        typer.echo(f"Report written to {output}", err=True)


if __name__ == "__main__":
    app()
