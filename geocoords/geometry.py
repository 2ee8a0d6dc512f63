#!/usr/bin/env python3
"""
Great-circle distance and bearing between geographic points.

Spherical Earth model:
    a = sin²(Δφ/2) + cos(φ1)×cos(φ2)×sin²(Δλ/2)
    distance = 2 × R × atan2(√a, √(1-a))
    bearing = atan2(sin(Δλ)×cos(φ2), cos(φ1)×sin(φ2) - sin(φ1)×cos(φ2)×cos(Δλ))
"""

import math

from geocoords.models import GeographicPoint
from geocoords.types import Degrees, Kilometers, Miles, Radians

# Earth's mean radius (spherical approximation)
EARTH_RADIUS_MI = 3959.0
EARTH_RADIUS_KM = 6371.0

COMPASS_POINTS = ("N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
                  "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW")
COMPASS_SECTOR_DEG = 360.0 / len(COMPASS_POINTS)


def _central_angle(p1: GeographicPoint, p2: GeographicPoint) -> Radians:
    lat1_rad = math.radians(p1.latitude)
    lat2_rad = math.radians(p2.latitude)
    delta_lat = math.radians(p2.latitude - p1.latitude)
    delta_lon = math.radians(p2.longitude - p1.longitude)

    a = math.sin(delta_lat / 2) ** 2 + \
        math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    return Radians(2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)))


def distance(p1: GeographicPoint, p2: GeographicPoint) -> Miles:
    """
    Calculate distance between two points using the Haversine formula.

    Returns:
        Distance in statute miles
    """
    return Miles(EARTH_RADIUS_MI * _central_angle(p1, p2))


def distance_km(p1: GeographicPoint, p2: GeographicPoint) -> Kilometers:
    """Haversine distance in kilometers."""
    return Kilometers(EARTH_RADIUS_KM * _central_angle(p1, p2))


def bearing(p1: GeographicPoint, p2: GeographicPoint) -> Degrees:
    """
    Calculate initial bearing from point 1 to point 2.

    Returns:
        Bearing in degrees [0, 360) (0° = North, 90° = East, 180° = South, 270° = West)
    """
    lat1_rad = math.radians(p1.latitude)
    lat2_rad = math.radians(p2.latitude)
    delta_lon = math.radians(p2.longitude - p1.longitude)

    x = math.sin(delta_lon) * math.cos(lat2_rad)
    y = math.cos(lat1_rad) * math.sin(lat2_rad) - \
        math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(delta_lon)

    bearing_deg = math.degrees(math.atan2(x, y))

    # Normalize to 0-360
    return Degrees((bearing_deg + 360) % 360)


def bearing_to_compass(deg: float) -> str:
    """Convert bearing to the nearest of 16 compass points."""
    # Half-up rounding: 11.25° is NNE, not N
    index = math.floor((deg % 360) / COMPASS_SECTOR_DEG + 0.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def format_bearing(deg: float) -> str:
    """Format a bearing as zero-padded degrees plus compass point, e.g. "045° (NE)"."""
    return f"{math.floor(deg + 0.5):03d}° ({bearing_to_compass(deg)})"
