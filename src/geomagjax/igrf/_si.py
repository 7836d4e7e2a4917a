"""SI-unit convenience wrappers around :func:`synthesize`.

Positions are given in metres and radians (or degrees for :func:`igrfd`)
with latitudes rather than colatitudes, and the field is returned as a
``(3,)`` array ``[north, east, down]`` [nT].

Geodetic inputs are converted to geocentric coordinates with the WGS84
functions in :mod:`geomagjax.coordinates`, the field is synthesized on the
geocentric sphere and then rotated about the east axis into the geodetic
frame.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array

from geomagjax.coefficients import CoefficientTable
from geomagjax.coordinates import position_geodetic_to_geocentric
from geomagjax.errors import InvalidInputError
from geomagjax.igrf._api import synthesize
from geomagjax.igrf._types import PointType
from geomagjax.rotations import Ry


def _geocentric_field(
    date: float,
    radius: float,
    latitude: float,
    longitude: float,
    show_warnings: bool | None,
    table: CoefficientTable | None,
) -> Array:
    colat = min(max(90.0 - math.degrees(latitude), 0.0), 180.0)
    elong = math.degrees(longitude)
    if elong < 0.0:
        elong += 360.0
    b = synthesize(
        "value",
        date,
        PointType.GEOCENTRIC,
        radius / 1000.0,
        colat,
        elong,
        show_warnings=show_warnings,
        table=table,
    )
    return jnp.array([b.north, b.east, b.vertical])


def igrf(
    date: float,
    r: float,
    lat: float,
    lon: float,
    point_type: PointType | str = PointType.GEOCENTRIC,
    *,
    show_warnings: bool | None = None,
    table: CoefficientTable | None = None,
) -> Array:
    """Geomagnetic field vector [nT] from SI-unit coordinates.

    Args:
        date: Decimal year.
        r: Distance from the Earth's centre [m] (geocentric) or altitude
            above the WGS84 ellipsoid [m] (geodetic).
        lat: Geocentric or geodetic latitude [rad], ``[-pi/2, pi/2]``.
        lon: Longitude [rad], ``[-pi, pi]``.
        point_type: ``"geocentric"`` (default) or ``"geodetic"``; selects
            both the input coordinates and the output frame.
        show_warnings: Extrapolation advisory override.
        table: Coefficient table.  Defaults to the bundled IGRF table.

    Returns:
        Array: ``[north, east, down]`` [nT] in the chosen local frame.

    Raises:
        InvalidInputError: If latitude or longitude is out of range.
        OutOfRangeError: If *date* is outside the table window.

    Examples:
        ```python
        import math
        from geomagjax.igrf import igrf
        b = igrf(2020.0, 400e3, math.radians(-22.0), math.radians(-45.0), "geodetic")
        ```
    """
    point_type = PointType.coerce(point_type)
    lat = float(lat)
    lon = float(lon)
    if not -math.pi / 2 <= lat <= math.pi / 2:
        raise InvalidInputError(f"Latitude {lat} rad is outside [-pi/2, pi/2].")
    if not -math.pi <= lon <= math.pi:
        raise InvalidInputError(f"Longitude {lon} rad is outside [-pi, pi].")

    if point_type is PointType.GEOCENTRIC:
        return _geocentric_field(date, float(r), lat, lon, show_warnings, table)

    geoc = position_geodetic_to_geocentric(jnp.array([lon, lat, float(r)]))
    lat_gc = float(geoc[1])
    b_gc = _geocentric_field(date, float(geoc[2]), lat_gc, lon, show_warnings, table)
    return Ry(lat_gc - lat) @ b_gc


def igrfd(
    date: float,
    r: float,
    lat: float,
    lon: float,
    point_type: PointType | str = PointType.GEOCENTRIC,
    *,
    show_warnings: bool | None = None,
    table: CoefficientTable | None = None,
) -> Array:
    """Same as :func:`igrf` with latitude and longitude in degrees.

    Args:
        date: Decimal year.
        r: Radius [m] (geocentric) or altitude [m] (geodetic).
        lat: Latitude [deg], ``[-90, 90]``.
        lon: Longitude [deg], ``[-180, 180]``.
        point_type: ``"geocentric"`` (default) or ``"geodetic"``.
        show_warnings: Extrapolation advisory override.
        table: Coefficient table.

    Returns:
        Array: ``[north, east, down]`` [nT].
    """
    lat = float(lat)
    lon = float(lon)
    if not -90.0 <= lat <= 90.0:
        raise InvalidInputError(f"Latitude {lat} deg is outside [-90, 90].")
    if not -180.0 <= lon <= 180.0:
        raise InvalidInputError(f"Longitude {lon} deg is outside [-180, 180].")
    return igrf(
        date,
        r,
        math.radians(lat),
        math.radians(lon),
        point_type,
        show_warnings=show_warnings,
        table=table,
    )
