"""
Render latitude/longitude pairs in the five supported textual formats.

Each FormatKind has exactly one stringifier; the dispatch table is checked
for exhaustiveness when a formatter is constructed, so adding a FormatKind
member without a stringifier fails on first use.

Output shapes:
    DD    37.4215° N, 119.1892° W         compact: 37.4215°N 119.1892°W
    DMS   37° 25' 17.4" N, 119° 11' 21.1" W compact: 37°25'17.4"N 119°11'21.1"W
    DDM   37° 25.290' N, 119° 11.352' W   compact: 37°25.290'N 119°11.352'W
    UTM   11S 318234 4143234
    MGRS  11S LB 18234 43234              compact: 11SLB1823443234

Hemisphere letters follow the sign of the displayed value; a value that reads
as zero at the requested precision is labelled N or E.
"""

from typing import Callable, Optional

from geocoords.config import DEFAULT_PRECISION, FormatOptions
from geocoords.grid_reference import GridReferenceEncoder, clamp_precision
from geocoords.models import FormatKind, GeographicPoint
from geocoords.projector import GeodeticProjector

SHORT_FORMS = {
    FormatKind.DD: (True, 4),
    FormatKind.DMS: (True, 0),
    FormatKind.DDM: (True, 2),
    FormatKind.UTM: (False, 0),
    FormatKind.MGRS: (False, 4),
}


def _hemisphere(is_zero_or_positive: bool, positive: str, negative: str) -> str:
    return positive if is_zero_or_positive else negative


def split_dms(value: float, precision: int = 1) -> tuple[int, int, float, int]:
    """
    Split an angle into whole degrees, whole minutes and seconds.

    Rounding happens on the total number of second units so carries propagate
    (59.96" at one decimal becomes the next whole minute, never 60.0").

    Returns:
        Tuple of (degrees, minutes, seconds, sign) where sign is 1 or -1 and
        is 1 whenever the rounded value is zero
    """
    scale = 10 ** precision
    units = round(abs(value) * 3600 * scale)
    degrees, rem = divmod(units, 3600 * scale)
    minutes, second_units = divmod(rem, 60 * scale)
    sign = -1 if value < 0 and units else 1
    return degrees, minutes, second_units / scale, sign


def split_ddm(value: float, precision: int = 3) -> tuple[int, float, int]:
    """
    Split an angle into whole degrees and decimal minutes.

    Returns:
        Tuple of (degrees, minutes, sign)
    """
    scale = 10 ** precision
    units = round(abs(value) * 60 * scale)
    degrees, minute_units = divmod(units, 60 * scale)
    sign = -1 if value < 0 and units else 1
    return degrees, minute_units / scale, sign


class CoordinateFormatter:
    """
    Stateless coordinate stringifier.

    Usage:
        >>> formatter = CoordinateFormatter()
        >>> point = GeographicPoint(37.4215, -119.1892)
        >>> formatter.format(point, FormatKind.DD)
        '37.4215° N, 119.1892° W'
        >>> formatter.format(point, FormatKind.MGRS, compact=True, precision=3)
    """

    def __init__(
        self,
        projector: Optional[GeodeticProjector] = None,
        encoder: Optional[GridReferenceEncoder] = None,
    ):
        self.projector = projector or GeodeticProjector()
        self.encoder = encoder or GridReferenceEncoder(self.projector)
        self._formatters: dict[FormatKind, Callable[[GeographicPoint, bool, int], str]] = {
            FormatKind.DD: self._format_dd,
            FormatKind.DMS: self._format_dms,
            FormatKind.DDM: self._format_ddm,
            FormatKind.UTM: self._format_utm,
            FormatKind.MGRS: self._format_mgrs,
        }
        missing = set(FormatKind) - set(self._formatters)
        if missing:
            raise TypeError(f"No formatter registered for: {sorted(k.value for k in missing)}")

    def format(
        self,
        point: GeographicPoint,
        kind: FormatKind = FormatKind.DD,
        compact: bool = False,
        precision: Optional[int] = None,
    ) -> str:
        """
        Format a point.

        Args:
            point: Point to render
            kind: Target format
            compact: Drop the spaces and comma between tokens
            precision: Decimal places for DD degrees, DMS seconds, DDM minutes
                and UTM meters; digit count for MGRS. Defaults per format.

        Raises:
            InvalidLatitudeError: For UTM/MGRS outside [-80, 84]
        """
        if precision is None:
            precision = DEFAULT_PRECISION[kind]
        if precision < 0:
            raise ValueError(f"Precision must be non-negative, got {precision}")
        return self._formatters[kind](point, compact, precision)

    def format_with(self, point: GeographicPoint, options: FormatOptions) -> str:
        """Format using an immutable options value."""
        return self.format(point, options.kind, options.compact, options.precision)

    def format_short(self, point: GeographicPoint, kind: FormatKind = FormatKind.DD) -> str:
        """Shorter rendering for space-constrained displays."""
        compact, precision = SHORT_FORMS[kind]
        return self.format(point, kind, compact=compact, precision=precision)

    def _format_dd(self, point: GeographicPoint, compact: bool, precision: int) -> str:
        lat = f"{abs(point.latitude):.{precision}f}"
        lon = f"{abs(point.longitude):.{precision}f}"
        lat_dir = _hemisphere(point.latitude >= 0 or float(lat) == 0, 'N', 'S')
        lon_dir = _hemisphere(point.longitude >= 0 or float(lon) == 0, 'E', 'W')
        if compact:
            return f"{lat}°{lat_dir} {lon}°{lon_dir}"
        return f"{lat}° {lat_dir}, {lon}° {lon_dir}"

    def _format_dms(self, point: GeographicPoint, compact: bool, precision: int) -> str:
        lat_d, lat_m, lat_s, lat_sign = split_dms(point.latitude, precision)
        lon_d, lon_m, lon_s, lon_sign = split_dms(point.longitude, precision)
        lat_dir = _hemisphere(lat_sign > 0, 'N', 'S')
        lon_dir = _hemisphere(lon_sign > 0, 'E', 'W')
        if compact:
            return (f"{lat_d}°{lat_m}'{lat_s:.{precision}f}\"{lat_dir} "
                    f"{lon_d}°{lon_m}'{lon_s:.{precision}f}\"{lon_dir}")
        return (f"{lat_d}° {lat_m}' {lat_s:.{precision}f}\" {lat_dir}, "
                f"{lon_d}° {lon_m}' {lon_s:.{precision}f}\" {lon_dir}")

    def _format_ddm(self, point: GeographicPoint, compact: bool, precision: int) -> str:
        lat_d, lat_m, lat_sign = split_ddm(point.latitude, precision)
        lon_d, lon_m, lon_sign = split_ddm(point.longitude, precision)
        lat_dir = _hemisphere(lat_sign > 0, 'N', 'S')
        lon_dir = _hemisphere(lon_sign > 0, 'E', 'W')
        if compact:
            return (f"{lat_d}°{lat_m:.{precision}f}'{lat_dir} "
                    f"{lon_d}°{lon_m:.{precision}f}'{lon_dir}")
        return (f"{lat_d}° {lat_m:.{precision}f}' {lat_dir}, "
                f"{lon_d}° {lon_m:.{precision}f}' {lon_dir}")

    def _format_utm(self, point: GeographicPoint, compact: bool, precision: int) -> str:
        # UTM has a single layout; compact is accepted for a uniform signature
        utm = self.projector.forward(point.latitude, point.longitude)
        return utm.to_string(decimals=precision)

    def _format_mgrs(self, point: GeographicPoint, compact: bool, precision: int) -> str:
        utm = self.projector.forward(point.latitude, point.longitude)
        mgrs = self.encoder.encode(utm, clamp_precision(precision))
        return mgrs.to_string(compact=compact)


_default_formatter: Optional[CoordinateFormatter] = None


def get_formatter() -> CoordinateFormatter:
    """Get or create the shared formatter instance."""
    global _default_formatter
    if _default_formatter is None:
        _default_formatter = CoordinateFormatter()
    return _default_formatter


def format_coordinate(
    point: GeographicPoint,
    kind: FormatKind = FormatKind.DD,
    compact: bool = False,
    precision: Optional[int] = None,
) -> str:
    """
    Format a point with the shared formatter.

    Example:
        >>> format_coordinate(GeographicPoint(37.4215, -119.1892), FormatKind.DD)
        '37.4215° N, 119.1892° W'
    """
    return get_formatter().format(point, kind, compact=compact, precision=precision)
