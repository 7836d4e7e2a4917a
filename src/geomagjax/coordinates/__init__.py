"""Coordinate transformations.

- **Geocentric**: spherical ``[lon, lat, radius]`` ↔ ECEF
- **Geodetic**: WGS84 ellipsoid ``[lon, lat, alt]`` ↔ ECEF
"""

from .geocentric import (
    position_ecef_to_geocentric,
    position_geocentric_to_ecef,
    position_geodetic_to_geocentric,
)
from .geodetic import (
    ellipsoid_normal_intercept,
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
)

__all__ = [
    "ellipsoid_normal_intercept",
    "position_geocentric_to_ecef",
    "position_ecef_to_geocentric",
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "position_geodetic_to_geocentric",
]
