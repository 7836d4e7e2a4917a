"""Geodetic and geocentric frames for field synthesis.

The spherical harmonic expansion is evaluated on geocentric spheres.  A
geodetic point (altitude above the ellipsoid, geodetic colatitude) is
first mapped to its geocentric radius and colatitude; the resulting field
is then rotated back by the angle between the two verticals so that the
components refer to the local geodetic horizon.

Lengths are in kilometres.  The ellipsoid is WGS84 with squared semi-axes
``a^2 = 40680631.6`` and ``b^2 = 40408296.0`` km^2.

References:
    1. IAGA Working Group V-MOD, *igrf13.f* synthesis program, 2019.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geomagjax.config import get_dtype
from geomagjax.constants import IGRF_A2, IGRF_B2
from geomagjax.coordinates import ellipsoid_normal_intercept
from geomagjax.igrf._types import FieldVector, GeocentricPosition

_IGRF_A = math.sqrt(IGRF_A2)
_IGRF_ECC2 = 1.0 - IGRF_B2 / IGRF_A2


def geodetic_to_geocentric(
    altitude: ArrayLike,
    cos_colat: ArrayLike,
    sin_colat: ArrayLike,
) -> GeocentricPosition:
    """Map a geodetic point onto its geocentric sphere.

    Args:
        altitude: Height above the ellipsoid [km].
        cos_colat: Cosine of the geodetic colatitude.
        sin_colat: Sine of the geodetic colatitude.

    Returns:
        GeocentricPosition with the geocentric radius and colatitude and
        the rotation ``(cos_rot, sin_rot)`` from geocentric to geodetic
        axes.
    """
    dtype = get_dtype()
    alt = jnp.asarray(altitude, dtype=dtype)
    ct = jnp.asarray(cos_colat, dtype=dtype)
    st = jnp.asarray(sin_colat, dtype=dtype)

    one = IGRF_A2 * st * st
    two = IGRF_B2 * ct * ct
    three = one + two
    rho = jnp.sqrt(three)
    r = jnp.sqrt(alt * (alt + 2.0 * rho) + (IGRF_A2 * one + IGRF_B2 * two) / three)
    cd = (alt + rho) / r
    sd = (IGRF_A2 - IGRF_B2) / rho * ct * st / r

    return GeocentricPosition(
        radius=r,
        cos_colat=ct * cd - st * sd,
        sin_colat=st * cd + ct * sd,
        cos_rot=cd,
        sin_rot=sd,
    )


def geocentric_position(
    radius: ArrayLike,
    cos_colat: ArrayLike,
    sin_colat: ArrayLike,
) -> GeocentricPosition:
    """Wrap a geocentric point; no rotation is needed afterwards."""
    dtype = get_dtype()
    return GeocentricPosition(
        radius=jnp.asarray(radius, dtype=dtype),
        cos_colat=jnp.asarray(cos_colat, dtype=dtype),
        sin_colat=jnp.asarray(sin_colat, dtype=dtype),
        cos_rot=jnp.ones((), dtype=dtype),
        sin_rot=jnp.zeros((), dtype=dtype),
    )


def geocentric_to_geodetic(
    radius: ArrayLike,
    colatitude: ArrayLike,
    use_degrees: bool = True,
) -> tuple[Array, Array]:
    """Inverse of :func:`geodetic_to_geocentric`.

    Args:
        radius: Distance from the Earth's centre [km].
        colatitude: Geocentric colatitude.
        use_degrees: Colatitudes in degrees (default) or radians.

    Returns:
        Tuple ``(altitude, geodetic_colatitude)`` with altitude in km.

    Examples:
        ```python
        from geomagjax.igrf import geocentric_to_geodetic
        alt, colat = geocentric_to_geodetic(6371.2, 45.0)
        ```
    """
    dtype = get_dtype()
    r = jnp.asarray(radius, dtype=dtype)
    theta = jnp.asarray(colatitude, dtype=dtype)
    if use_degrees:
        theta = jnp.deg2rad(theta)

    p = r * jnp.sin(theta)
    z = r * jnp.cos(theta)
    zdz, n_radius = ellipsoid_normal_intercept(p * p, z, _IGRF_A, _IGRF_ECC2)

    altitude = jnp.sqrt(p * p + zdz * zdz) - n_radius
    colat = jnp.arctan2(p, zdz)
    if use_degrees:
        colat = jnp.rad2deg(colat)
    return altitude, colat


def rotate_to_point_frame(
    x: ArrayLike,
    y: ArrayLike,
    z: ArrayLike,
    cos_rot: ArrayLike,
    sin_rot: ArrayLike,
) -> FieldVector:
    """Rotate geocentric components into the point's local frame.

    The east component is unchanged; total intensity is computed from the
    rotated components.

    Args:
        x: Geocentric north component.
        y: East component.
        z: Geocentric vertical (down) component.
        cos_rot: Cosine of the geocentric-to-local rotation.
        sin_rot: Sine of the geocentric-to-local rotation.

    Returns:
        FieldVector in the local frame.
    """
    north = x * cos_rot + z * sin_rot
    vertical = z * cos_rot - x * sin_rot
    total = jnp.sqrt(north * north + y * y + vertical * vertical)
    return FieldVector(north=north, east=jnp.asarray(y), vertical=vertical, total_intensity=total)
