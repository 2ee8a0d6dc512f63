"""
MGRS 100 km grid-square encoding over UTM.

Grid Square Lettering:
    - Column letters cycle through three 8-letter sets, selected by
      (zone - 1) mod 6, so adjacent zones never share a column designator
    - Row letters cycle through 20 letters every 2,000,000 m of northing; odd
      zones start at A, even zones are offset by five letters (start at F)

The row letter only pins northing modulo 2,000,000 m. Decoding relies on the
band letter carried in the reference to pick the right cycle, so an MGRS
reference without its zone/band prefix cannot be decoded.
"""

import math
import re
from typing import Optional

from geocoords.errors import MalformedGridReferenceError
from geocoords.models import MAX_PRECISION, MgrsCoordinate, UtmCoordinate
from geocoords.projector import (
    ZONE_WIDTH_DEG,
    GeodeticProjector,
    band_southern_latitude,
    central_meridian,
)

COLUMN_LETTER_SETS = ('ABCDEFGH', 'JKLMNPQR', 'STUVWXYZ')
ROW_LETTER_SETS = ('ABCDEFGHJKLMNPQRSTUV', 'FGHJKLMNPQRSTUVABCDE')

SQUARE_SIZE_M = 100000
ROW_CYCLE_M = 2000000

# Zone/band prefix, two square letters, then the digit run
_MGRS_PATTERN = re.compile(r'^(\d{1,2})([A-Z])([A-Z])([A-Z])(\d*)$')


def column_letters(zone: int) -> str:
    """Column alphabet used by a zone."""
    return COLUMN_LETTER_SETS[(zone - 1) % 6 % 3]


def row_letters(zone: int) -> str:
    """Row alphabet used by a zone."""
    return ROW_LETTER_SETS[(zone - 1) % 2]


def clamp_precision(precision: int) -> int:
    return max(0, min(MAX_PRECISION, int(precision)))


def parse_grid_reference(text: str) -> MgrsCoordinate:
    """
    Parse MGRS text into an MgrsCoordinate.

    Supports formats like:
    - "11S LB 18234 43234"
    - "11SLB1823443234"
    - "11S LB" (100 km precision)

    Raises:
        MalformedGridReferenceError: If the text is not MGRS or the digit run
            has odd length
        InvalidZoneError: If the zone number is outside [1, 60]
    """
    clean = re.sub(r'\s+', '', text).upper()
    match = _MGRS_PATTERN.match(clean)
    if not match:
        raise MalformedGridReferenceError(f"Invalid MGRS format: {text!r}")

    zone_str, band, column, row, digits = match.groups()
    # "11S LB 1823 432" splits evenly but the groups disagree
    groups = re.findall(r'\d+', text)[1:]
    if len(groups) == 2 and len(groups[0]) != len(groups[1]):
        raise MalformedGridReferenceError(
            f"MGRS easting and northing must have the same number of digits, got {groups}"
        )
    if len(digits) % 2 != 0:
        raise MalformedGridReferenceError(
            f"MGRS coordinates must have an even number of digits, got {len(digits)}"
        )
    half = len(digits) // 2
    return MgrsCoordinate(
        zone=int(zone_str),
        band=band,
        column_letter=column,
        row_letter=row,
        easting=digits[:half],
        northing=digits[half:],
    )


class GridReferenceEncoder:
    """
    UTM <-> MGRS encoder.

    Usage:
        >>> encoder = GridReferenceEncoder()
        >>> utm = GeodeticProjector().forward(37.4215, -119.1892)
        >>> encoder.encode(utm, 5).to_string()
        '11S LB ...'
    """

    def __init__(self, projector: Optional[GeodeticProjector] = None):
        self.projector = projector or GeodeticProjector()

    def encode(self, utm: UtmCoordinate, precision: int = MAX_PRECISION) -> MgrsCoordinate:
        """
        Encode a UTM coordinate as an MGRS reference.

        Offsets within the square are truncated, never rounded, so the
        reference always names the square that contains the point.

        Args:
            utm: Source coordinate
            precision: Digits per axis, clamped to [0, 5]

        Raises:
            MalformedGridReferenceError: If the easting falls outside the eight
                100 km columns a zone can letter
        """
        precision = clamp_precision(precision)

        # Whole meters first, so the square and the offset inside it agree
        east_square, east_m = divmod(math.floor(utm.easting), SQUARE_SIZE_M)
        north_square, north_m = divmod(math.floor(utm.northing), SQUARE_SIZE_M)

        column_index = east_square - 1
        columns = column_letters(utm.zone)
        if not 0 <= column_index < len(columns):
            raise MalformedGridReferenceError(
                f"Easting {utm.easting:.0f} in zone {utm.zone} has no 100 km column letter"
            )
        row_index = north_square % len(ROW_LETTER_SETS[0])

        divisor = 10 ** (MAX_PRECISION - precision)
        if precision:
            east_offset = east_m // divisor
            north_offset = north_m // divisor
            easting = str(east_offset).zfill(precision)
            northing = str(north_offset).zfill(precision)
        else:
            easting = northing = ''

        return MgrsCoordinate(
            zone=utm.zone,
            band=utm.band,
            column_letter=columns[column_index],
            row_letter=row_letters(utm.zone)[row_index],
            easting=easting,
            northing=northing,
        )

    def decode(self, mgrs: MgrsCoordinate) -> UtmCoordinate:
        """
        Decode an MGRS reference to the UTM coordinate of its south-west corner.

        Raises:
            MalformedGridReferenceError: If a square letter is not in the zone's
                alphabet
        """
        columns = column_letters(mgrs.zone)
        rows = row_letters(mgrs.zone)
        if mgrs.column_letter not in columns:
            raise MalformedGridReferenceError(
                f"Column letter '{mgrs.column_letter}' is not valid in zone {mgrs.zone}; "
                f"expected one of {columns}"
            )
        if mgrs.row_letter not in rows:
            raise MalformedGridReferenceError(
                f"Row letter '{mgrs.row_letter}' is not valid in zone {mgrs.zone}; "
                f"expected one of {rows}"
            )

        square_easting = (columns.index(mgrs.column_letter) + 1) * SQUARE_SIZE_M
        square_northing = rows.index(mgrs.row_letter) * SQUARE_SIZE_M

        min_northing = self.band_min_northing(mgrs.band)
        while square_northing < min_northing:
            square_northing += ROW_CYCLE_M

        multiplier = 10 ** (MAX_PRECISION - mgrs.precision)
        east_offset = int(mgrs.easting) * multiplier if mgrs.precision else 0
        north_offset = int(mgrs.northing) * multiplier if mgrs.precision else 0

        return UtmCoordinate(
            zone=mgrs.zone,
            band=mgrs.band,
            easting=float(square_easting + east_offset),
            northing=float(square_northing + north_offset),
        )

    def band_min_northing(self, band: str) -> int:
        """
        Lowest 100 km northing line a band can reach.

        Parallels bow towards the pole in transverse Mercator, so the band's
        southern edge is evaluated both on the central meridian and at the zone
        edge, and the lower value is floored to the 100 km grid.
        """
        lat = band_southern_latitude(band)
        zone = 31
        cm = central_meridian(zone)
        _, on_meridian = self.projector.project(lat, cm, zone)
        _, at_edge = self.projector.project(lat, cm + ZONE_WIDTH_DEG / 2, zone)
        lowest = min(on_meridian, at_edge)
        return int(lowest // SQUARE_SIZE_M) * SQUARE_SIZE_M
