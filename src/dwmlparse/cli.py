"""Command-line interface for dwmlparse."""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from dwmlparse.config.settings import ParserOptions
    from dwmlparse.models import ParseResult

app = typer.Typer(
    name="dwmlparse",
    help="Turn DWML forecast documents into location-keyed time series.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

DocumentArg = Annotated[
    Path,
    typer.Argument(help="Path to a DWML document.", exists=True, dir_okay=False),
]
ConfigOpt = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to a parser options YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
SkipMismatchedOpt = Annotated[
    bool,
    typer.Option(
        "--skip-mismatched",
        help="Drop parameters whose value count does not match their time layout.",
    ),
]
SkipOpt = Annotated[
    list[str] | None,
    typer.Option(
        "--skip",
        "-s",
        help="Parameter key or attribute name to leave out (repeatable).",
    ),
]
AllConditionsOpt = Annotated[
    bool,
    typer.Option(
        "--all-weather-conditions",
        help="Decode every nested weather sub-condition, not only the first.",
    ),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON."),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    from dwmlparse.utils.logging import configure_logging

    configure_logging(level=log_level, json_output=json_logs)


def _build_options(
    config: Path | None,
    skip_mismatched: bool,
    skip: list[str] | None,
    all_weather_conditions: bool,
) -> "ParserOptions":
    """Merge the options file with command-line flags (flags win)."""
    from dwmlparse.config import ParserOptions, load_options

    base = load_options(config) if config is not None else ParserOptions()
    return base.model_copy(
        update={
            "skip_properties_with_non_matching_entry_count": (
                skip_mismatched or base.skip_properties_with_non_matching_entry_count
            ),
            "skipped_attributes": base.skipped_attributes | frozenset(skip or ()),
            "decode_all_weather_conditions": (
                all_weather_conditions or base.decode_all_weather_conditions
            ),
        }
    )


def _load(
    document: Path,
    config: Path | None,
    skip_mismatched: bool,
    skip: list[str] | None,
    all_weather_conditions: bool,
) -> "ParseResult":
    """Parse a document, reporting parser errors and exiting with code 1."""
    from dwmlparse.document import parse_file
    from dwmlparse.errors import DwmlError

    try:
        options = _build_options(config, skip_mismatched, skip, all_weather_conditions)
        return parse_file(document, options)
    except (DwmlError, FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def parse(
    document: DocumentArg,
    config: ConfigOpt = None,
    skip_mismatched: SkipMismatchedOpt = False,
    skip: SkipOpt = None,
    all_weather_conditions: AllConditionsOpt = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write JSON here instead of stdout."),
    ] = None,
) -> None:
    """Parse a DWML document and print the result as JSON."""
    from dwmlparse.export import to_json_dict

    result = _load(document, config, skip_mismatched, skip, all_weather_conditions)
    text = json.dumps(to_json_dict(result), indent=2)

    if output is None:
        typer.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    err_console.print(f"[green]Saved to: {output}[/green]")


@app.command()
def summary(
    document: DocumentArg,
    config: ConfigOpt = None,
    skip_mismatched: SkipMismatchedOpt = False,
    skip: SkipOpt = None,
) -> None:
    """Show the parameters found per location."""
    result = _load(document, config, skip_mismatched, skip, False)

    if not result:
        console.print("[yellow]No locations found[/yellow]")
        return

    for location_key, point in result.items():
        table = Table(
            title=(
                f"{location_key} "
                f"({point.location.latitude}, {point.location.longitude})"
            )
        )
        table.add_column("Parameter", style="cyan", no_wrap=True)
        table.add_column("Type")
        table.add_column("Units")
        table.add_column("Time layout", style="blue")
        table.add_column("Values", justify="right", style="green")
        table.add_column("First start", style="dim")
        table.add_column("Last end", style="dim")

        for key, record in point.values.items():
            table.add_row(
                key,
                record.type or "-",
                record.units or "-",
                record.time_layout or "-",
                str(len(record.values)),
                record.values[0].start if record.values else "-",
                record.values[-1].end if record.values else "-",
            )

        console.print(table)


@app.command()
def export(
    document: DocumentArg,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output path for the CSV file."),
    ],
    config: ConfigOpt = None,
    skip_mismatched: SkipMismatchedOpt = False,
    skip: SkipOpt = None,
) -> None:
    """Export a DWML document as a flat CSV (one row per value)."""
    from pandera.errors import SchemaError

    from dwmlparse.export import write_csv

    result = _load(document, config, skip_mismatched, skip, False)
    try:
        path = write_csv(result, output)
    except SchemaError as e:
        err_console.print(f"[red]Error: export does not match schema: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Saved to: {path}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from dwmlparse import __version__

    console.print(f"dwmlparse version {__version__}")


if __name__ == "__main__":
    app()
