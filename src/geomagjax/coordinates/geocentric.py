"""Geocentric spherical coordinate transformations.

Converts between geocentric spherical coordinates
``[longitude, latitude, radius]`` and Earth-Centered Earth-Fixed (ECEF)
Cartesian coordinates ``[x, y, z]``.  Geomagnetic field models are
expanded about the Earth's centre, so positions here are described by
their radius rather than an altitude above a reference surface.

All inputs and outputs use SI base units (metres, radians).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geomagjax.config import get_dtype
from geomagjax.coordinates.geodetic import position_geodetic_to_ecef


def position_geocentric_to_ecef(
    x_geoc: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert a geocentric spherical position to ECEF.

    Args:
        x_geoc: Geocentric coordinates ``[lon, lat, radius]``.
            Longitude and latitude in *rad* (or *deg* if ``use_degrees=True``),
            radius in *m*.
        use_degrees: If ``True``, interpret longitude and latitude as degrees.

    Returns:
        jax.Array: ECEF position ``[x, y, z]`` in *m*.
    """
    x_geoc = jnp.asarray(x_geoc, dtype=get_dtype())
    lon, lat, r = x_geoc[0], x_geoc[1], x_geoc[2]

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)

    return jnp.array(
        [
            r * jnp.cos(lat) * jnp.cos(lon),
            r * jnp.cos(lat) * jnp.sin(lon),
            r * jnp.sin(lat),
        ]
    )


def position_ecef_to_geocentric(
    x_ecef: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert ECEF Cartesian coordinates to a geocentric spherical position.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m*.
        use_degrees: If ``True``, return longitude and latitude in degrees.

    Returns:
        jax.Array: Geocentric coordinates ``[lon, lat, radius]``.
            Longitude and latitude in *rad* (or *deg*), radius in *m*.
    """
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())
    x, y, z = x_ecef[0], x_ecef[1], x_ecef[2]

    rho = jnp.sqrt(x * x + y * y)
    lon = jnp.arctan2(y, x)
    lat = jnp.arctan2(z, rho)
    r = jnp.sqrt(rho * rho + z * z)

    if use_degrees:
        lon = jnp.rad2deg(lon)
        lat = jnp.rad2deg(lat)

    return jnp.array([lon, lat, r])


def position_geodetic_to_geocentric(
    x_geod: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert a WGS84 geodetic position to geocentric spherical coordinates.

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, alt]``, angles in *rad*
            (or *deg*), altitude in *m*.
        use_degrees: If ``True``, angles are degrees on input and output.

    Returns:
        jax.Array: Geocentric coordinates ``[lon, lat, radius]``.

    Example:
        >>> import jax.numpy as jnp
        >>> from geomagjax.coordinates import position_geodetic_to_geocentric
        >>> geoc = position_geodetic_to_geocentric(jnp.array([0.0, 90.0, 0.0]), use_degrees=True)
        >>> round(float(geoc[2]))  # polar radius [m]
        6356752
    """
    return position_ecef_to_geocentric(
        position_geodetic_to_ecef(x_geod, use_degrees=use_degrees),
        use_degrees=use_degrees,
    )
