"""
Value types shared by the projector, grid encoder, formatter and parser.

All types are frozen dataclasses created per call; nothing here is persisted
or mutated after construction.

Coordinate Conventions:
    - Latitude in decimal degrees, positive North, range [-90, 90]
    - Longitude in decimal degrees, positive East, range [-180, 180]
    - UTM easting carries the +500,000 m false easting
    - UTM northing carries the +10,000,000 m false northing south of the equator
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from geocoords.errors import (
    CoordinateParseError,
    ErrorKind,
    InvalidLatitudeError,
    InvalidLongitudeError,
    InvalidZoneError,
    MalformedGridReferenceError,
)

# UTM latitude band letters, 8 degrees each from -80. I and O are skipped to
# avoid confusion with 1 and 0.
BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"

MIN_ZONE = 1
MAX_ZONE = 60
MAX_PRECISION = 5


class FormatKind(Enum):
    """Supported textual coordinate formats.

    The values are the identifiers a host application stores as the user's
    preferred format.
    """

    DD = "dd"
    """Decimal Degrees: 37.4215° N, 119.1892° W"""

    DMS = "dms"
    """Degrees Minutes Seconds: 37° 25' 17.4" N, 119° 11' 21.1" W"""

    DDM = "ddm"
    """Degrees Decimal Minutes: 37° 25.290' N, 119° 11.352' W"""

    UTM = "utm"
    """Universal Transverse Mercator: 11S 318234 4143234"""

    MGRS = "mgrs"
    """Military Grid Reference System: 11S LB 18234 43234"""


@dataclass(frozen=True)
class GeographicPoint:
    """A WGS84 latitude/longitude pair in decimal degrees.

    Raises:
        InvalidLatitudeError: If latitude is outside [-90, 90]
        InvalidLongitudeError: If longitude is outside [-180, 180]
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidLatitudeError(
                f"Latitude must be in range [-90, 90], got {self.latitude}"
            )
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidLongitudeError(
                f"Longitude must be in range [-180, 180], got {self.longitude}"
            )


@dataclass(frozen=True)
class UtmCoordinate:
    """A position in a UTM zone.

    Attributes:
        zone: Zone number, 1-60
        band: Latitude band letter, C-X without I and O
        easting: Meters, including the 500,000 m false easting
        northing: Meters, including the 10,000,000 m false northing in the south
    """

    zone: int
    band: str
    easting: float
    northing: float

    def __post_init__(self):
        if not MIN_ZONE <= self.zone <= MAX_ZONE:
            raise InvalidZoneError(f"UTM zone must be in range [1, 60], got {self.zone}")
        if len(self.band) != 1 or self.band.upper() not in BAND_LETTERS:
            raise InvalidLatitudeError(
                f"Invalid latitude band '{self.band}'. Must be one of: {BAND_LETTERS}"
            )
        object.__setattr__(self, 'band', self.band.upper())

    @property
    def is_northern(self) -> bool:
        """Hemisphere derived from the band letter: N and above are northern."""
        return self.band >= 'N'

    def to_string(self, decimals: int = 0) -> str:
        """Render as ``11S 318234 4143234``."""
        return f"{self.zone}{self.band} {self.easting:.{decimals}f} {self.northing:.{decimals}f}"


@dataclass(frozen=True)
class MgrsCoordinate:
    """An MGRS grid reference.

    The easting/northing digit strings are truncated offsets inside the 100 km
    square; both have ``precision`` digits and resolve to 10^(5 - precision) m.

    Raises:
        InvalidZoneError: If zone is outside [1, 60]
        MalformedGridReferenceError: On bad letters or digit strings
    """

    zone: int
    band: str
    column_letter: str
    row_letter: str
    easting: str
    northing: str

    def __post_init__(self):
        if not MIN_ZONE <= self.zone <= MAX_ZONE:
            raise InvalidZoneError(f"UTM zone must be in range [1, 60], got {self.zone}")
        for name in ('band', 'column_letter', 'row_letter'):
            value = getattr(self, name)
            if len(value) != 1 or not value.isalpha() or not value.isascii():
                raise MalformedGridReferenceError(
                    f"MGRS {name.replace('_', ' ')} must be a single letter, got '{value}'"
                )
            object.__setattr__(self, name, value.upper())
        if self.band not in BAND_LETTERS:
            raise MalformedGridReferenceError(
                f"Invalid latitude band '{self.band}'. Must be one of: {BAND_LETTERS}"
            )
        if len(self.easting) != len(self.northing):
            raise MalformedGridReferenceError(
                f"MGRS easting and northing must have the same number of digits, "
                f"got '{self.easting}' and '{self.northing}'"
            )
        if len(self.easting) > MAX_PRECISION:
            raise MalformedGridReferenceError(
                f"MGRS precision is at most {MAX_PRECISION} digits, got {len(self.easting)}"
            )
        digits = self.easting + self.northing
        if digits and not (digits.isdigit() and digits.isascii()):
            raise MalformedGridReferenceError(
                f"MGRS easting/northing must be digits, got '{self.easting}' '{self.northing}'"
            )

    @property
    def precision(self) -> int:
        return len(self.easting)

    @property
    def resolution(self) -> float:
        """Size in meters of the square one reference designates."""
        return 10.0 ** (MAX_PRECISION - self.precision)

    def to_string(self, compact: bool = False) -> str:
        """Render as ``11S LB 18234 43234`` or ``11SLB1823443234``."""
        square = f"{self.zone}{self.band}"
        letters = f"{self.column_letter}{self.row_letter}"
        if compact:
            return f"{square}{letters}{self.easting}{self.northing}"
        if self.precision == 0:
            return f"{square} {letters}"
        return f"{square} {letters} {self.easting} {self.northing}"


@dataclass(frozen=True)
class ParseOk:
    """Successful parse result."""

    point: GeographicPoint

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> GeographicPoint:
        return self.point


@dataclass(frozen=True)
class ParseErr:
    """Failed parse result.

    Attributes:
        kind: Why the text was rejected
        message: Human-readable detail suitable for a UI hint
    """

    kind: ErrorKind
    message: str = ""

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> GeographicPoint:
        raise CoordinateParseError(self.message or self.kind.value, kind=self.kind)


ParseResult = ParseOk | ParseErr
