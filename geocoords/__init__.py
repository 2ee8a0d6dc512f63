"""
Geodetic coordinate conversion and formatting.

This package converts WGS84 latitude/longitude to and from the formats people
read and type:

    - DD: Decimal Degrees (37.4215° N, 119.1892° W)
    - DMS: Degrees Minutes Seconds (37° 25' 17.4" N, 119° 11' 21.1" W)
    - DDM: Degrees Decimal Minutes (37° 25.290' N, 119° 11.352' W)
    - UTM: Universal Transverse Mercator (11S 318234 4143234)
    - MGRS: Military Grid Reference System (11S LB 18234 43234)

and computes great-circle distance and bearing between points.

Example Usage:
    >>> from geocoords import (
    ...     FormatKind,
    ...     GeographicPoint,
    ...     format_coordinate,
    ...     parse_coordinate,
    ... )
    >>>
    >>> point = GeographicPoint(37.4215, -119.1892)
    >>> format_coordinate(point, FormatKind.MGRS)
    >>>
    >>> result = parse_coordinate("11S LB 18234 43234")
    >>> if result.is_ok():
    ...     print(result.unwrap())

Available Classes:
    Value types:
        - GeographicPoint, UtmCoordinate, MgrsCoordinate
        - FormatKind: Closed set of textual formats
        - ParseOk / ParseErr: Parse outcome

    Engines:
        - GeodeticProjector: lat/lon <-> UTM
        - GridReferenceEncoder: UTM <-> MGRS
        - CoordinateFormatter: point -> text
        - CoordinateParser: text -> point

    Configuration:
        - FormatOptions, CoordinateConfig
        - FormatPreference: host-side preference persistence
"""

# Value types and errors
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
    FormatKind,
    GeographicPoint,
    MgrsCoordinate,
    ParseErr,
    ParseOk,
    ParseResult,
    UtmCoordinate,
)

# Conversion engines
from geocoords.projector import GeodeticProjector, WGS84
from geocoords.grid_reference import GridReferenceEncoder, parse_grid_reference
from geocoords.formatter import CoordinateFormatter, format_coordinate
from geocoords.parser import CoordinateParser, is_valid_coordinate, parse_coordinate
from geocoords.geometry import (
    bearing,
    bearing_to_compass,
    distance,
    distance_km,
    format_bearing,
)

# Configuration
from geocoords.config import CoordinateConfig, FormatOptions, get_default_config
from geocoords.preferences import FormatPreference

# Define public API
__all__ = [
    # Errors
    'CoordinateError',
    'CoordinateParseError',
    'ErrorKind',
    'InvalidLatitudeError',
    'InvalidLongitudeError',
    'InvalidZoneError',
    'MalformedGridReferenceError',

    # Value types
    'FormatKind',
    'GeographicPoint',
    'MgrsCoordinate',
    'ParseErr',
    'ParseOk',
    'ParseResult',
    'UtmCoordinate',

    # Engines
    'GeodeticProjector',
    'WGS84',
    'GridReferenceEncoder',
    'parse_grid_reference',
    'CoordinateFormatter',
    'format_coordinate',
    'CoordinateParser',
    'parse_coordinate',
    'is_valid_coordinate',

    # Geometry
    'bearing',
    'bearing_to_compass',
    'distance',
    'distance_km',
    'format_bearing',

    # Configuration
    'CoordinateConfig',
    'FormatOptions',
    'FormatPreference',
    'get_default_config',
]

# Package metadata
__version__ = '0.1.0'
__description__ = 'Coordinate conversion between lat/lon, DMS, DDM, UTM and MGRS'
