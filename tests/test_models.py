#!/usr/bin/env python3
"""
Tests for the shared value types and the error taxonomy.

Run with: python -m pytest tests/test_models.py -v
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from geocoords.errors import (
    CoordinateError,
    CoordinateParseError,
    ErrorKind,
    InvalidLatitudeError,
    InvalidLongitudeError,
    InvalidZoneError,
    MalformedGridReferenceError,
)
from geocoords.models import (
    BAND_LETTERS,
    FormatKind,
    GeographicPoint,
    ParseErr,
    ParseOk,
    UtmCoordinate,
)


class TestGeographicPoint:
    """Tests for GeographicPoint validation."""

    @pytest.mark.parametrize("lat,lon", [(0.0, 0.0), (90.0, 180.0), (-90.0, -180.0)])
    def test_valid(self, lat: float, lon: float) -> None:
        point = GeographicPoint(lat, lon)
        assert (point.latitude, point.longitude) == (lat, lon)

    @pytest.mark.parametrize("lat", [90.0001, -91.0, float('nan')])
    def test_invalid_latitude(self, lat: float) -> None:
        with pytest.raises(InvalidLatitudeError):
            GeographicPoint(lat, 0.0)

    @pytest.mark.parametrize("lon", [180.0001, -181.0, float('inf')])
    def test_invalid_longitude(self, lon: float) -> None:
        with pytest.raises(InvalidLongitudeError):
            GeographicPoint(0.0, lon)

    def test_frozen(self) -> None:
        point = GeographicPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.latitude = 3.0

    def test_hashable(self) -> None:
        assert len({GeographicPoint(1.0, 2.0), GeographicPoint(1.0, 2.0)}) == 1


class TestUtmCoordinate:
    """Tests for UtmCoordinate."""

    def test_to_string(self) -> None:
        utm = UtmCoordinate(zone=11, band='S', easting=318234.4, northing=4143234.6)
        assert utm.to_string() == "11S 318234 4143235"
        assert utm.to_string(decimals=1) == "11S 318234.4 4143234.6"

    @pytest.mark.parametrize("band", list(BAND_LETTERS))
    def test_hemisphere_from_band(self, band: str) -> None:
        utm = UtmCoordinate(zone=31, band=band, easting=500000.0, northing=0.0)
        assert utm.is_northern == (BAND_LETTERS.index(band) >= BAND_LETTERS.index('N'))

    def test_band_uppercased(self) -> None:
        assert UtmCoordinate(zone=31, band='n', easting=500000.0, northing=0.0).band == 'N'

    @pytest.mark.parametrize("zone", [0, 61])
    def test_invalid_zone(self, zone: int) -> None:
        with pytest.raises(InvalidZoneError):
            UtmCoordinate(zone=zone, band='N', easting=500000.0, northing=0.0)


class TestParseResult:
    """Tests for ParseOk / ParseErr."""

    def test_ok(self) -> None:
        point = GeographicPoint(1.0, 2.0)
        result = ParseOk(point)

        assert result.is_ok()
        assert result.unwrap() is point

    def test_err(self) -> None:
        result = ParseErr(ErrorKind.PARSE_FAILURE, "nothing matched")

        assert not result.is_ok()
        with pytest.raises(CoordinateParseError, match="nothing matched") as exc_info:
            result.unwrap()
        assert exc_info.value.kind is ErrorKind.PARSE_FAILURE

    def test_err_without_message_uses_kind(self) -> None:
        with pytest.raises(CoordinateParseError, match="out_of_range"):
            ParseErr(ErrorKind.OUT_OF_RANGE).unwrap()


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize(
        "error_class,kind",
        [
            (InvalidLatitudeError, ErrorKind.INVALID_LATITUDE),
            (InvalidLongitudeError, ErrorKind.INVALID_LONGITUDE),
            (InvalidZoneError, ErrorKind.INVALID_ZONE),
            (MalformedGridReferenceError, ErrorKind.MALFORMED_GRID_REFERENCE),
            (CoordinateParseError, ErrorKind.PARSE_FAILURE),
        ],
    )
    def test_kind_per_class(self, error_class, kind: ErrorKind) -> None:
        error = error_class("boom")

        assert error.kind is kind
        assert isinstance(error, CoordinateError)
        assert isinstance(error, ValueError)
        assert str(error) == "boom"

    def test_kind_override(self) -> None:
        error = CoordinateParseError("too far north", kind=ErrorKind.OUT_OF_RANGE)
        assert error.kind is ErrorKind.OUT_OF_RANGE
        assert CoordinateParseError("x").kind is ErrorKind.PARSE_FAILURE

    def test_format_kind_values(self) -> None:
        assert [k.value for k in FormatKind] == ["dd", "dms", "ddm", "utm", "mgrs"]
