#!/usr/bin/env python3
"""
Tests for the geoc command line interface.

Run with: python -m pytest tests/test_cli.py -v
"""

import json
import os
import sys

import pytest
from typer.testing import CliRunner

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from geocoords.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestConvert:
    """Tests for `geoc convert`."""

    def test_default_format_is_dd(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "37° 25.290' N, 119° 11.352' W"])

        assert result.exit_code == 0
        assert result.output.strip() == "37.4215° N, 119.1892° W"

    def test_to_dms(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "37.4215, -119.1892", "--kind", "dms"])

        assert result.exit_code == 0
        assert result.output.strip() == "37° 25' 17.4\" N, 119° 11' 21.1\" W"

    def test_compact_and_precision(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["convert", "37.4215, -119.1892", "-k", "ddm", "--compact", "-p", "1"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "37°25.3'N 119°11.4'W"

    def test_to_mgrs(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "38.8895, -77.0353", "--kind", "mgrs", "-p", "3"])

        assert result.exit_code == 0
        assert result.output.strip() == "18S UJ 234 064"

    def test_negative_point_after_double_dash(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "--kind", "dd", "--", "-33.8568, 151.2153"])

        assert result.exit_code == 0
        assert result.output.strip() == "33.8568° S, 151.2153° E"

    def test_config_file_sets_defaults(self, runner: CliRunner, tmp_path) -> None:
        config_file = tmp_path / "coords.yaml"
        config_file.write_text(
            "coordinates:\n"
            "  default_format: dd\n"
            "  compact: true\n"
            "  precision:\n"
            "    dd: 2\n"
        )

        result = runner.invoke(app, ["convert", "37.4215, -119.1892", "--config", str(config_file)])

        assert result.exit_code == 0
        assert result.output.strip() == "37.42°N 119.19°W"

    def test_flags_override_config(self, runner: CliRunner, tmp_path) -> None:
        config_file = tmp_path / "coords.yaml"
        config_file.write_text("coordinates:\n  compact: true\n")

        result = runner.invoke(
            app, ["convert", "37.4215, -119.1892", "-c", str(config_file), "--spaced"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "37.4215° N, 119.1892° W"

    def test_missing_config_file(self, runner: CliRunner, tmp_path) -> None:
        result = runner.invoke(
            app, ["convert", "37.4215, -119.1892", "--config", str(tmp_path / "missing.yaml")]
        )

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_unknown_kind(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "37.4215, -119.1892", "--kind", "geohash"])

        assert result.exit_code == 1
        assert "Invalid coordinate format" in result.output

    def test_polar_point_to_utm(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "85.0, 10.0", "--kind", "utm"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_negative_precision(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["convert", "37.4215, -119.1892", "--precision=-1"])

        assert result.exit_code == 1
        assert "non-negative" in result.output


class TestParse:
    """Tests for `geoc parse`."""

    def test_human_output(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parse", "37.4215° N, 119.1892° W"])

        assert result.exit_code == 0
        assert result.output.strip() == "37.421500, -119.189200"

    def test_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parse", "37.4215° N, 119.1892° W", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["latitude"] == pytest.approx(37.4215)
        assert data["longitude"] == pytest.approx(-119.1892)

    def test_mgrs(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["parse", "18SUJ2348706483", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["latitude"] == pytest.approx(38.8895, abs=1e-3)
        assert data["longitude"] == pytest.approx(-77.0353, abs=1e-3)

    @pytest.mark.parametrize(
        "text,kind",
        [
            ("not a coordinate", "parse_failure"),
            ("91.0, 0.0", "out_of_range"),
            ("11SLB123", "malformed_grid_reference"),
        ],
    )
    def test_failures_exit_with_kind(self, runner: CliRunner, text: str, kind: str) -> None:
        result = runner.invoke(app, ["parse", text])

        assert result.exit_code == 1
        assert f"Error: {kind}:" in result.output

    def test_verbose_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--verbose", "parse", "37.4215, -119.1892"])
        assert result.exit_code == 0


class TestDistanceAndBearing:
    """Tests for `geoc distance` and `geoc bearing`."""

    def test_distance_miles(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["distance", "37.7749, -122.4194", "34.0522, -118.2437"])

        assert result.exit_code == 0
        value, unit = result.output.split()
        assert unit == "mi"
        assert float(value) == pytest.approx(347, abs=5)

    def test_distance_km(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["distance", "37.7749, -122.4194", "34.0522, -118.2437", "--km"]
        )

        assert result.exit_code == 0
        value, unit = result.output.split()
        assert unit == "km"
        assert float(value) == pytest.approx(559, abs=8)

    def test_distance_mixed_formats(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["distance", "37° 46' 29.6\" N, 122° 25' 9.8\" W", "34.0522° N, 118.2437° W"]
        )
        assert result.exit_code == 0

    def test_bearing(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["bearing", "37.7749, -122.4194", "34.0522, -118.2437"])

        assert result.exit_code == 0
        assert result.output.strip().endswith("(SE)")

    def test_bad_point(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["bearing", "somewhere", "34.0522, -118.2437"])

        assert result.exit_code == 1
        assert "parse_failure" in result.output


def test_no_args_shows_help(runner: CliRunner) -> None:
    result = runner.invoke(app, [])
    assert "convert" in result.output
