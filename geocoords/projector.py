"""
Forward and inverse Universal Transverse Mercator projection on WGS84.

The transverse Mercator series used here are the classic closed-form
expansions (Snyder, "Map Projections: A Working Manual", USGS PP 1395,
pp. 60-64):

Forward:
    N = a / sqrt(1 - e² sin²φ)
    T = tan²φ,  C = e'² cos²φ,  A = (λ - λ0) cos φ
    M = a[(1 - e²/4 - 3e⁴/64 - 5e⁶/256)φ - (3e²/8 + 3e⁴/32 + 45e⁶/1024) sin 2φ
          + (15e⁴/256 + 45e⁶/1024) sin 4φ - (35e⁶/3072) sin 6φ]
    x = k0 N [A + (1 - T + C)A³/6 + (5 - 18T + T² + 72C - 58e'²)A⁵/120]
    y = k0 {M + N tan φ [A²/2 + (5 - T + 9C + 4C²)A⁴/24
                         + (61 - 58T + T² + 600C - 330e'²)A⁶/720]}

Inverse:
    footpoint latitude φ1 from the rectifying latitude μ with
    e1 = (1 - sqrt(1 - e²)) / (1 + sqrt(1 - e²)), then latitude and longitude
    corrections in D = x / (N1 k0) up to D⁶ and D⁵ respectively.

Accuracy Notes:
    - Sub-centimeter versus an exact ellipsoidal transverse Mercator within
      3° of the central meridian
    - Error grows towards the zone edges but stays well under a meter for the
      widened Norway and Svalbard zones
    - Defined only for -80° <= lat <= 84°; polar regions need UPS, which is
      not provided
"""

import math
from dataclasses import dataclass

from geocoords.errors import InvalidLatitudeError, InvalidLongitudeError
from geocoords.models import BAND_LETTERS, GeographicPoint, UtmCoordinate
from geocoords.types import Degrees, Meters, Radians

MIN_UTM_LATITUDE = -80.0
MAX_UTM_LATITUDE = 84.0

UTM_SCALE_FACTOR = 0.9996
FALSE_EASTING = 500000.0
FALSE_NORTHING_SOUTH = 10000000.0

ZONE_WIDTH_DEG = 6.0
BAND_HEIGHT_DEG = 8.0


@dataclass(frozen=True)
class Ellipsoid:
    """Reference ellipsoid defined by semi-major axis and flattening."""

    semi_major_axis: float
    flattening: float

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return 2 * self.flattening - self.flattening ** 2

    @property
    def eccentricity(self) -> float:
        return math.sqrt(self.e2)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)


WGS84 = Ellipsoid(semi_major_axis=6378137.0, flattening=1 / 298.257223563)


def _normalize_longitude(lon: float) -> float:
    """Wrap longitude into [-180, 180)."""
    wrapped = (lon + 180.0) % 360.0 - 180.0
    # Float modulo of a tiny negative value can return exactly 360
    return wrapped - 360.0 if wrapped >= 180.0 else wrapped


def central_meridian(zone: int) -> Degrees:
    """Return the central meridian of a UTM zone in degrees."""
    return Degrees((zone - 1) * ZONE_WIDTH_DEG - 180.0 + ZONE_WIDTH_DEG / 2)


def band_for(lat: float) -> str:
    """
    Return the UTM latitude band letter for a latitude.

    Bands are 8° tall from -80°, except X which covers 72°..84° inclusive.

    Raises:
        InvalidLatitudeError: If lat is outside [-80, 84]
    """
    if not MIN_UTM_LATITUDE <= lat <= MAX_UTM_LATITUDE:
        raise InvalidLatitudeError(
            f"UTM is defined for latitudes in [-80, 84], got {lat}"
        )
    index = int((lat - MIN_UTM_LATITUDE) // BAND_HEIGHT_DEG)
    return BAND_LETTERS[min(index, len(BAND_LETTERS) - 1)]


def band_southern_latitude(band: str) -> Degrees:
    """Return the southern boundary latitude of a band letter."""
    return Degrees(MIN_UTM_LATITUDE + BAND_LETTERS.index(band) * BAND_HEIGHT_DEG)


def zone_for(lat: float, lon: float) -> int:
    """
    Return the UTM zone number for a point, applying the Norway and Svalbard
    exceptions.

    Longitude 180 is treated as -180 so both resolve to zone 1.
    """
    lon = _normalize_longitude(lon)
    zone = int((lon + 180.0) // ZONE_WIDTH_DEG) + 1

    # Norway: zone 32V widened westwards over 31V
    if 56.0 <= lat < 64.0 and 3.0 <= lon < 12.0:
        zone = 32

    # Svalbard: zones 32X, 34X and 36X are not used
    if 72.0 <= lat < 84.0:
        if 0.0 <= lon < 9.0:
            zone = 31
        elif 9.0 <= lon < 21.0:
            zone = 33
        elif 21.0 <= lon < 33.0:
            zone = 35
        elif 33.0 <= lon < 42.0:
            zone = 37

    return zone


class GeodeticProjector:
    """
    Lat/lon <-> UTM projector.

    Instances only hold immutable ellipsoid constants, so one projector can be
    shared freely between threads.

    Usage:
        >>> projector = GeodeticProjector()
        >>> utm = projector.forward(37.4215, -119.1892)
        >>> utm.zone, utm.band
        (11, 'S')
        >>> point = projector.inverse(utm.zone, utm.band, utm.easting, utm.northing)
    """

    def __init__(self, ellipsoid: Ellipsoid = WGS84, scale_factor: float = UTM_SCALE_FACTOR):
        self.ellipsoid = ellipsoid
        self.k0 = scale_factor

        e2 = ellipsoid.e2
        # Meridian arc coefficients
        self._m0 = 1 - e2 / 4 - 3 * e2 ** 2 / 64 - 5 * e2 ** 3 / 256
        self._m2 = 3 * e2 / 8 + 3 * e2 ** 2 / 32 + 45 * e2 ** 3 / 1024
        self._m4 = 15 * e2 ** 2 / 256 + 45 * e2 ** 3 / 1024
        self._m6 = 35 * e2 ** 3 / 3072

        sqrt_1_e2 = math.sqrt(1 - e2)
        self._e1 = (1 - sqrt_1_e2) / (1 + sqrt_1_e2)

    def meridian_arc(self, lat_rad: Radians) -> Meters:
        """Distance along the meridian from the equator to lat_rad."""
        a = self.ellipsoid.semi_major_axis
        return Meters(a * (
            self._m0 * lat_rad
            - self._m2 * math.sin(2 * lat_rad)
            + self._m4 * math.sin(4 * lat_rad)
            - self._m6 * math.sin(6 * lat_rad)
        ))

    def project(self, lat: float, lon: float, zone: int) -> tuple[float, float]:
        """
        Project a point into the given zone without zone selection.

        Returns:
            Tuple of (easting, northing) in meters, false offsets applied
        """
        a = self.ellipsoid.semi_major_axis
        e2 = self.ellipsoid.e2
        ep2 = self.ellipsoid.ep2

        lat_rad = Radians(math.radians(lat))
        # Longitude offset from the central meridian, wrapped across the antimeridian
        dlon = _normalize_longitude(lon - central_meridian(zone))
        dlon_rad = math.radians(dlon)

        sin_lat = math.sin(lat_rad)
        cos_lat = math.cos(lat_rad)
        tan_lat = math.tan(lat_rad)

        n = a / math.sqrt(1 - e2 * sin_lat ** 2)
        t = tan_lat ** 2
        c = ep2 * cos_lat ** 2
        big_a = cos_lat * dlon_rad
        m = self.meridian_arc(lat_rad)

        easting = self.k0 * n * (
            big_a
            + (1 - t + c) * big_a ** 3 / 6
            + (5 - 18 * t + t ** 2 + 72 * c - 58 * ep2) * big_a ** 5 / 120
        ) + FALSE_EASTING

        northing = self.k0 * (m + n * tan_lat * (
            big_a ** 2 / 2
            + (5 - t + 9 * c + 4 * c ** 2) * big_a ** 4 / 24
            + (61 - 58 * t + t ** 2 + 600 * c - 330 * ep2) * big_a ** 6 / 720
        ))
        if lat < 0:
            northing += FALSE_NORTHING_SOUTH

        return easting, northing

    def forward(self, lat: float, lon: float) -> UtmCoordinate:
        """
        Convert latitude/longitude to UTM.

        Args:
            lat: Latitude in decimal degrees, within [-80, 84]
            lon: Longitude in decimal degrees, within [-180, 180]

        Returns:
            UtmCoordinate with unrounded easting/northing

        Raises:
            InvalidLatitudeError: If lat is outside the UTM domain
            InvalidLongitudeError: If lon is outside [-180, 180]
        """
        if not -180.0 <= lon <= 180.0:
            raise InvalidLongitudeError(f"Longitude must be in range [-180, 180], got {lon}")
        band = band_for(lat)
        zone = zone_for(lat, lon)
        easting, northing = self.project(lat, lon, zone)
        return UtmCoordinate(zone=zone, band=band, easting=easting, northing=northing)

    def inverse(self, zone: int, band: str, easting: float, northing: float) -> GeographicPoint:
        """
        Convert a UTM position back to latitude/longitude.

        The hemisphere comes from the band letter: bands N and above are
        northern, so a northing near the equator must be paired with the band
        it was produced with.

        Args:
            zone: UTM zone, 1-60
            band: Latitude band letter
            easting: Meters including false easting
            northing: Meters including false northing (southern bands)

        Returns:
            GeographicPoint with longitude wrapped to [-180, 180)

        Raises:
            InvalidZoneError: If zone is outside [1, 60]
            InvalidLatitudeError: If band is not a UTM band letter
        """
        utm = UtmCoordinate(zone=zone, band=band, easting=easting, northing=northing)

        a = self.ellipsoid.semi_major_axis
        e2 = self.ellipsoid.e2
        ep2 = self.ellipsoid.ep2
        e1 = self._e1

        x = utm.easting - FALSE_EASTING
        y = utm.northing if utm.is_northern else utm.northing - FALSE_NORTHING_SOUTH

        # Footpoint latitude from the rectifying latitude
        mu = (y / self.k0) / (a * self._m0)
        phi1 = (
            mu
            + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
            + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
            + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
            + (1097 * e1 ** 4 / 512) * math.sin(8 * mu)
        )

        sin_phi1 = math.sin(phi1)
        cos_phi1 = math.cos(phi1)
        tan_phi1 = math.tan(phi1)

        n1 = a / math.sqrt(1 - e2 * sin_phi1 ** 2)
        t1 = tan_phi1 ** 2
        c1 = ep2 * cos_phi1 ** 2
        r1 = a * (1 - e2) / (1 - e2 * sin_phi1 ** 2) ** 1.5
        d = x / (n1 * self.k0)

        lat_rad = phi1 - (n1 * tan_phi1 / r1) * (
            d ** 2 / 2
            - (5 + 3 * t1 + 10 * c1 - 4 * c1 ** 2 - 9 * ep2) * d ** 4 / 24
            + (61 + 90 * t1 + 298 * c1 + 45 * t1 ** 2 - 252 * ep2 - 3 * c1 ** 2) * d ** 6 / 720
        )
        dlon_rad = (
            d
            - (1 + 2 * t1 + c1) * d ** 3 / 6
            + (5 - 2 * c1 + 28 * t1 - 3 * c1 ** 2 + 8 * ep2 + 24 * t1 ** 2) * d ** 5 / 120
        ) / cos_phi1

        lat = math.degrees(lat_rad)
        lon = _normalize_longitude(central_meridian(utm.zone) + math.degrees(dlon_rad))
        return GeographicPoint(latitude=lat, longitude=lon)
