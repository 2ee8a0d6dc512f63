"""
Error taxonomy for coordinate conversion and parsing.

Two tiers are used:

1. Contract violations (a projector or encoder called with an out-of-domain
   zone, latitude or grid reference) raise a ``CoordinateError`` subclass.
   These indicate a caller bug and are never silently clamped.
2. User-input-facing parsing never raises; it returns a ``ParseErr`` carrying
   one of the ``ErrorKind`` members below (see ``geocoords.models``).

Every exception carries its ``kind`` so callers can map either tier onto the
same set of messages.
"""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of failure kinds."""

    INVALID_LATITUDE = "invalid_latitude"
    INVALID_LONGITUDE = "invalid_longitude"
    INVALID_ZONE = "invalid_zone"
    MALFORMED_GRID_REFERENCE = "malformed_grid_reference"
    PARSE_FAILURE = "parse_failure"
    OUT_OF_RANGE = "out_of_range"


class CoordinateError(ValueError):
    """Base class for all coordinate errors.

    Subclasses ValueError so callers that already guard numeric conversions
    with ``except ValueError`` keep working.
    """

    kind: ErrorKind = ErrorKind.PARSE_FAILURE

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class InvalidLatitudeError(CoordinateError):
    """Latitude (or latitude band) outside the domain of the operation."""

    kind = ErrorKind.INVALID_LATITUDE


class InvalidLongitudeError(CoordinateError):
    """Longitude outside [-180, 180]."""

    kind = ErrorKind.INVALID_LONGITUDE


class InvalidZoneError(CoordinateError):
    """UTM zone number outside [1, 60]."""

    kind = ErrorKind.INVALID_ZONE


class MalformedGridReferenceError(CoordinateError):
    """MGRS reference with bad letters, digits or an unencodable square."""

    kind = ErrorKind.MALFORMED_GRID_REFERENCE


class CoordinateParseError(CoordinateError):
    """Raised by ``ParseErr.unwrap()``; kind mirrors the parse failure."""
