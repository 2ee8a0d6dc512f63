"""
Free-text coordinate recognition.

Recognizers are tried from the most structured format to the least:

    1. MGRS                 11S LB 18234 43234 / 11SLB1823443234
    2. UTM                  11S 318234 4143234
    3. DMS                  37° 25' 17.4" N, 119° 11' 21.1" W
    4. DDM                  37° 25.290' N, 119° 11.352' W
    5. Hemisphere-tagged DD 37.4215° N, 119.1892° W
    6. Bare decimal pair    37.4215, -119.1892

The first recognizer whose pattern matches owns the outcome; a later
recognizer is never consulted to rescue a failed conversion. Parsing never
raises for string input: failures come back as ParseErr with an ErrorKind.
"""

import logging
import re
from typing import Callable, Optional

from geocoords.errors import CoordinateError, ErrorKind
from geocoords.grid_reference import GridReferenceEncoder, parse_grid_reference
from geocoords.models import (
    BAND_LETTERS,
    GeographicPoint,
    ParseErr,
    ParseOk,
    ParseResult,
    UtmCoordinate,
)
from geocoords.projector import MAX_UTM_LATITUDE, MIN_UTM_LATITUDE, GeodeticProjector

logger = logging.getLogger(__name__)

_DEG = r'\s*[°º]\s*'
_MIN = r"\s*['′]\s*"
_SEC = r'\s*(?:["″]|\'\')?\s*'
_SEP = r'\s*[,;\s]\s*'
_NUM = r'\d+(?:\.\d+)?'
_UTM_NUM = r'\d{1,8}(?:\.\d+)?'

_MGRS_SHAPE = re.compile(r'^\d{1,2}\s*[A-Z]\s*[A-Z]{2}\s*(?:\d+(?:\s+\d+)?)?$', re.IGNORECASE)
_UTM = re.compile(
    rf'^(\d{{1,2}})\s*([{BAND_LETTERS}])\s+({_UTM_NUM})\s*m?E?\s+({_UTM_NUM})\s*m?N?$',
    re.IGNORECASE,
)
_DMS = re.compile(
    rf'(\d+){_DEG}(\d+){_MIN}({_NUM}){_SEC}([NS]){_SEP}(\d+){_DEG}(\d+){_MIN}({_NUM}){_SEC}([EW])',
    re.IGNORECASE,
)
_DDM = re.compile(
    rf"(\d+){_DEG}({_NUM})\s*['′]?\s*([NS]){_SEP}(\d+){_DEG}({_NUM})\s*['′]?\s*([EW])",
    re.IGNORECASE,
)
_DD_TAGGED = re.compile(
    rf'({_NUM})\s*[°º]?\s*([NS]){_SEP}({_NUM})\s*[°º]?\s*([EW])',
    re.IGNORECASE,
)
_DD_BARE = re.compile(rf'^([-+]?{_NUM})\s*[,;\s]\s*([-+]?{_NUM})$')


class _OutOfRange(Exception):
    """Internal signal for a matched but out-of-range component."""


def _signed(value: float, hemisphere: str, negative: str) -> float:
    return -value if hemisphere.upper() == negative else value


def _sexagesimal(degrees: str, minutes: str, seconds: str = '0') -> float:
    minutes_value = float(minutes)
    seconds_value = float(seconds)
    if minutes_value >= 60 or seconds_value >= 60:
        raise _OutOfRange(f"Minutes and seconds must be below 60, got {minutes}' {seconds}\"")
    return float(degrees) + minutes_value / 60 + seconds_value / 3600


def _check_range(lat: float, lon: float) -> GeographicPoint:
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        raise _OutOfRange(f"Coordinate ({lat}, {lon}) is outside lat [-90, 90], lon [-180, 180]")
    return GeographicPoint(latitude=lat, longitude=lon)


def _clamp_to_band(point: GeographicPoint, band: str) -> GeographicPoint:
    """
    Keep a decoded grid position inside the UTM domain when its band is X or C.

    Rounded UTM meters and MGRS square centres can sit just past 84° or
    -80°; the band the text names pins the point to that edge.
    """
    band = band.upper()
    if band == BAND_LETTERS[-1] and point.latitude > MAX_UTM_LATITUDE:
        return GeographicPoint(latitude=MAX_UTM_LATITUDE, longitude=point.longitude)
    if band == BAND_LETTERS[0] and point.latitude < MIN_UTM_LATITUDE:
        return GeographicPoint(latitude=MIN_UTM_LATITUDE, longitude=point.longitude)
    return point


class CoordinateParser:
    """
    Priority-ordered coordinate recognizer.

    Usage:
        >>> parser = CoordinateParser()
        >>> result = parser.parse("37.4215° N, 119.1892° W")
        >>> result.is_ok()
        True
        >>> result.unwrap().longitude
        -119.1892
        >>> parser.parse("not a coordinate")
        ParseErr(kind=<ErrorKind.PARSE_FAILURE: 'parse_failure'>, message=...)
    """

    def __init__(
        self,
        projector: Optional[GeodeticProjector] = None,
        encoder: Optional[GridReferenceEncoder] = None,
    ):
        self.projector = projector or GeodeticProjector()
        self.encoder = encoder or GridReferenceEncoder(self.projector)
        self._recognizers: list[tuple[str, Callable[[str], Optional[GeographicPoint]]]] = [
            ('mgrs', self._match_mgrs),
            ('utm', self._match_utm),
            ('dms', self._match_dms),
            ('ddm', self._match_ddm),
            ('dd', self._match_dd_tagged),
            ('decimal', self._match_dd_bare),
        ]

    def parse(self, text: str) -> ParseResult:
        """
        Parse a coordinate string in any supported format.

        Returns:
            ParseOk with the point, or ParseErr with PARSE_FAILURE when nothing
            matches, OUT_OF_RANGE when a match has impossible values, and the
            conversion's own kind (e.g. MALFORMED_GRID_REFERENCE) when an
            MGRS/UTM match cannot be converted
        """
        if not isinstance(text, str):
            return ParseErr(ErrorKind.PARSE_FAILURE, f"Expected a string, got {type(text).__name__}")

        clean = text.strip()
        if not clean:
            return ParseErr(ErrorKind.PARSE_FAILURE, "Empty coordinate string")

        for name, recognizer in self._recognizers:
            try:
                point = recognizer(clean)
            except _OutOfRange as e:
                logger.debug("%s recognizer matched %r but it is out of range: %s", name, clean, e)
                return ParseErr(ErrorKind.OUT_OF_RANGE, str(e))
            except CoordinateError as e:
                kind = e.kind
                if kind in (ErrorKind.INVALID_LATITUDE, ErrorKind.INVALID_LONGITUDE):
                    kind = ErrorKind.OUT_OF_RANGE
                logger.debug("%s recognizer matched %r but conversion failed: %s", name, clean, e)
                return ParseErr(kind, str(e))
            if point is not None:
                logger.debug("Parsed %r as %s: %s", clean, name, point)
                return ParseOk(point)

        return ParseErr(ErrorKind.PARSE_FAILURE, f"Not a recognized coordinate: {text!r}")

    def is_valid(self, text: str) -> bool:
        """True if text parses to a coordinate."""
        return self.parse(text).is_ok()

    def _match_mgrs(self, text: str) -> Optional[GeographicPoint]:
        if not _MGRS_SHAPE.match(text):
            return None
        mgrs = parse_grid_reference(text)
        corner = self.encoder.decode(mgrs)
        # Centre of the designated square, so re-encoding names the same square
        half = mgrs.resolution / 2
        point = self.projector.inverse(
            corner.zone, corner.band, corner.easting + half, corner.northing + half
        )
        return _clamp_to_band(point, corner.band)

    def _match_utm(self, text: str) -> Optional[GeographicPoint]:
        match = _UTM.match(text)
        if not match:
            return None
        utm = UtmCoordinate(
            zone=int(match.group(1)),
            band=match.group(2),
            easting=float(match.group(3)),
            northing=float(match.group(4)),
        )
        point = self.projector.inverse(utm.zone, utm.band, utm.easting, utm.northing)
        return _clamp_to_band(_check_range(point.latitude, point.longitude), utm.band)

    def _match_dms(self, text: str) -> Optional[GeographicPoint]:
        match = _DMS.search(text)
        if not match:
            return None
        lat = _signed(_sexagesimal(match.group(1), match.group(2), match.group(3)), match.group(4), 'S')
        lon = _signed(_sexagesimal(match.group(5), match.group(6), match.group(7)), match.group(8), 'W')
        return _check_range(lat, lon)

    def _match_ddm(self, text: str) -> Optional[GeographicPoint]:
        match = _DDM.search(text)
        if not match:
            return None
        lat = _signed(_sexagesimal(match.group(1), match.group(2)), match.group(3), 'S')
        lon = _signed(_sexagesimal(match.group(4), match.group(5)), match.group(6), 'W')
        return _check_range(lat, lon)

    def _match_dd_tagged(self, text: str) -> Optional[GeographicPoint]:
        match = _DD_TAGGED.search(text)
        if not match:
            return None
        lat = _signed(float(match.group(1)), match.group(2), 'S')
        lon = _signed(float(match.group(3)), match.group(4), 'W')
        return _check_range(lat, lon)

    def _match_dd_bare(self, text: str) -> Optional[GeographicPoint]:
        match = _DD_BARE.match(text)
        if not match:
            return None
        return _check_range(float(match.group(1)), float(match.group(2)))


_default_parser: Optional[CoordinateParser] = None


def get_parser() -> CoordinateParser:
    """Get or create the shared parser instance."""
    global _default_parser
    if _default_parser is None:
        _default_parser = CoordinateParser()
    return _default_parser


def parse_coordinate(text: str) -> ParseResult:
    """Parse text with the shared parser."""
    return get_parser().parse(text)


def is_valid_coordinate(text: str) -> bool:
    """True if text is a coordinate in any supported format."""
    return get_parser().is_valid(text)
