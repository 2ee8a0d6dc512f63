"""Coordinate CLI commands.

Points are given as text in any supported format. Quote them, and put a
point that starts with a minus sign after `--` (and after every option) so
it is not read as an option:

    geoc convert --kind mgrs -- "-33.8568, 151.2153"
"""

import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from geocoords.cli.main import app
from geocoords.config import CoordinateConfig, get_default_config, parse_format_kind
from geocoords.errors import CoordinateError
from geocoords.formatter import get_formatter
from geocoords.geometry import bearing, distance, distance_km, format_bearing
from geocoords.models import GeographicPoint
from geocoords.parser import get_parser


class OutputFormat(str, Enum):
    """Output format options."""

    HUMAN = "human"
    JSON = "json"


def _load_config(config_path: Optional[Path]) -> CoordinateConfig:
    if config_path is None:
        return get_default_config()
    try:
        return CoordinateConfig.from_yaml(str(config_path))
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _parse_point(text: str) -> GeographicPoint:
    result = get_parser().parse(text)
    if not result.is_ok():
        typer.echo(f"Error: {result.kind.value}: {result.message}", err=True)
        raise typer.Exit(1)
    return result.unwrap()


@app.command("convert")
def convert_command(
    point: str = typer.Argument(..., help="Coordinate in any supported format"),
    kind: Optional[str] = typer.Option(
        None, "--kind", "-k", help="Target format: dd, dms, ddm, utm or mgrs"
    ),
    compact: Optional[bool] = typer.Option(
        None, "--compact/--spaced", help="Compact output (default from config)"
    ),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", help="Format precision"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
) -> None:
    """
    Convert a coordinate to another format.

    Example:
        geoc convert "37.4215, -119.1892" --kind mgrs
        geoc convert "11S LB 18234 43234" --kind dms --compact
    """
    cfg = _load_config(config)
    try:
        options = cfg.options(parse_format_kind(kind) if kind else None)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    parsed = _parse_point(point)
    try:
        text = get_formatter().format(
            parsed,
            options.kind,
            compact=options.compact if compact is None else compact,
            precision=options.precision if precision is None else precision,
        )
    except (CoordinateError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(text)


@app.command("parse")
def parse_command(
    point: str = typer.Argument(..., help="Coordinate in any supported format"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.HUMAN, "--format", "-f", help="Output format"
    ),
) -> None:
    """
    Parse a coordinate and print decimal latitude/longitude.

    Exits with status 1 and the failure kind when the text is not a coordinate.

    Example:
        geoc parse "37° 25' 17.4\\" N, 119° 11' 21.1\\" W"
        geoc parse "11SLB1823443234" --format json
    """
    parsed = _parse_point(point)
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps({"latitude": parsed.latitude, "longitude": parsed.longitude}))
    else:
        typer.echo(f"{parsed.latitude:.6f}, {parsed.longitude:.6f}")


@app.command("distance")
def distance_command(
    start: str = typer.Argument(..., help="Start coordinate"),
    end: str = typer.Argument(..., help="End coordinate"),
    km: bool = typer.Option(False, "--km", help="Report kilometers instead of miles"),
) -> None:
    """
    Great-circle distance between two coordinates.

    Example:
        geoc distance "37.7749, -122.4194" "34.0522, -118.2437"
    """
    p1 = _parse_point(start)
    p2 = _parse_point(end)
    if km:
        typer.echo(f"{distance_km(p1, p2):.2f} km")
    else:
        typer.echo(f"{distance(p1, p2):.2f} mi")


@app.command("bearing")
def bearing_command(
    start: str = typer.Argument(..., help="Start coordinate"),
    end: str = typer.Argument(..., help="End coordinate"),
) -> None:
    """
    Initial bearing from the first coordinate to the second.

    Example:
        geoc bearing "37.7749, -122.4194" "34.0522, -118.2437"
    """
    p1 = _parse_point(start)
    p2 = _parse_point(end)
    typer.echo(format_bearing(bearing(p1, p2)))
