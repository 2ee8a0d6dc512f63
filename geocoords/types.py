"""
Unit type annotations for type-safe numeric parameters.

This module defines NewType aliases for the physical units used across the
geocoords package. They are zero-overhead type hints that document which unit
a function expects and returns, and let static type checkers catch unit
mismatches while remaining transparent at runtime.

Usage Example:
    >>> from geocoords.types import Degrees, Miles
    >>>
    >>> def great_circle(lat1: Degrees, lon1: Degrees) -> Miles:
    ...     pass
"""

from typing import NewType

# Angular units
Degrees = NewType('Degrees', float)
"""Angle in degrees (e.g., latitude, longitude, bearing)"""

Radians = NewType('Radians', float)
"""Angle in radians (e.g., intermediate trigonometric calculations)"""

# Distance/position units
Meters = NewType('Meters', float)
"""Distance or projected position in meters (e.g., UTM easting/northing)"""

Miles = NewType('Miles', float)
"""Great-circle distance in statute miles"""

Kilometers = NewType('Kilometers', float)
"""Great-circle distance in kilometers"""
