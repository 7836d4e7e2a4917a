"""Geodetic (ellipsoidal Earth) coordinate transformations.

Converts between geodetic coordinates ``[longitude, latitude, altitude]``
and Earth-Centered Earth-Fixed (ECEF) Cartesian coordinates ``[x, y, z]``
on the WGS84 ellipsoid.

The forward transformation is closed-form.  The inverse uses Bowring's
fixed-point iteration on the height of the ellipsoid normal's intercept
with the polar axis, implemented with ``jax.lax.while_loop`` so that it
stays traceable.  :func:`ellipsoid_normal_intercept` is exposed separately
because the field synthesis uses the same iteration on its own
(kilometre) ellipsoid.

All inputs and outputs of the position functions use SI base units
(metres, radians).

References:
    1. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 5.3.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geomagjax.config import get_dtype
from geomagjax.constants import WGS84_a, WGS84_f

# First eccentricity squared of the WGS84 ellipsoid
ECC2 = WGS84_f * (2.0 - WGS84_f)

_MAX_ITERATIONS = 10


def ellipsoid_normal_intercept(
    rho2: ArrayLike,
    z: ArrayLike,
    semi_major_axis: float,
    ecc2: float,
) -> tuple[Array, Array]:
    """Solve for the ellipsoid normal through a Cartesian point.

    Iterates ``dz = N e^2 sin(phi)`` until successive corrections agree to
    ``1e-3 * a * eps`` (at most 10 iterations), where ``phi`` is the
    geodetic latitude of the normal through the point and ``N`` the prime
    vertical radius of curvature.

    Args:
        rho2: Squared distance from the polar axis, ``x^2 + y^2``.
        z: Height above the equatorial plane (same length unit as
            *semi_major_axis*).
        semi_major_axis: Equatorial radius of the ellipsoid.
        ecc2: First eccentricity squared of the ellipsoid.

    Returns:
        Tuple ``(z + dz, N)``: the axial coordinate of the point measured
        from the normal's intercept with the polar axis, and the prime
        vertical radius of curvature at the solution.
    """
    dtype = get_dtype()
    rho2 = jnp.asarray(rho2, dtype=dtype)
    z = jnp.asarray(z, dtype=dtype)

    eps = 1.0e-3 * semi_major_axis * jnp.finfo(dtype).eps

    def cond(state):
        dz, dz_prev, i = state
        return (jnp.abs(dz - dz_prev) > eps) & (i < _MAX_ITERATIONS)

    def body(state):
        dz, _, i = state
        zdz = z + dz
        sinphi = zdz / jnp.sqrt(rho2 + zdz * zdz)
        n_radius = semi_major_axis / jnp.sqrt(1.0 - ecc2 * sinphi * sinphi)
        return (n_radius * ecc2 * sinphi, dz, i + 1)

    dz0 = ecc2 * z
    # dz_prev far from dz0 forces at least one iteration
    dz_final, _, _ = jax.lax.while_loop(cond, body, (dz0, dz0 + 1e10, jnp.int32(0)))

    zdz = z + dz_final
    sinphi = zdz / jnp.sqrt(rho2 + zdz * zdz)
    n_radius = semi_major_axis / jnp.sqrt(1.0 - ecc2 * sinphi * sinphi)
    return zdz, n_radius


def position_geodetic_to_ecef(
    x_geod: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert a WGS84 geodetic position to ECEF Cartesian coordinates.

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, alt]``.
            Longitude and latitude in *rad* (or *deg* if ``use_degrees=True``),
            altitude in *m* above the WGS84 ellipsoid.
        use_degrees: If ``True``, interpret longitude and latitude as degrees.

    Returns:
        jax.Array: ECEF position ``[x, y, z]`` in *m*.

    Example:
        >>> import jax.numpy as jnp
        >>> from geomagjax.coordinates import position_geodetic_to_ecef
        >>> x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        >>> float(x_ecef[0])  # WGS84_a on the equator
        6378137.0
    """
    x_geod = jnp.asarray(x_geod, dtype=get_dtype())
    lon, lat, alt = x_geod[0], x_geod[1], x_geod[2]

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)
    n_radius = WGS84_a / jnp.sqrt(1.0 - ECC2 * sin_lat * sin_lat)

    return jnp.array(
        [
            (n_radius + alt) * cos_lat * jnp.cos(lon),
            (n_radius + alt) * cos_lat * jnp.sin(lon),
            ((1.0 - ECC2) * n_radius + alt) * sin_lat,
        ]
    )


def position_ecef_to_geodetic(
    x_ecef: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert ECEF Cartesian coordinates to a WGS84 geodetic position.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m*.
        use_degrees: If ``True``, return longitude and latitude in degrees.

    Returns:
        jax.Array: Geodetic coordinates ``[lon, lat, alt]``.
            Longitude and latitude in *rad* (or *deg*), altitude in *m*
            above the WGS84 ellipsoid.

    Example:
        >>> import jax.numpy as jnp
        >>> from geomagjax.constants import WGS84_a
        >>> from geomagjax.coordinates import position_ecef_to_geodetic
        >>> geod = position_ecef_to_geodetic(jnp.array([WGS84_a, 0.0, 0.0]))
        >>> round(float(geod[2]), 6)
        0.0
    """
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())
    x, y, z = x_ecef[0], x_ecef[1], x_ecef[2]

    rho2 = x * x + y * y
    zdz, n_radius = ellipsoid_normal_intercept(rho2, z, WGS84_a, ECC2)

    lon = jnp.arctan2(y, x)
    lat = jnp.arctan2(zdz, jnp.sqrt(rho2))
    alt = jnp.sqrt(rho2 + zdz * zdz) - n_radius

    if use_degrees:
        lon = jnp.rad2deg(lon)
        lat = jnp.rad2deg(lat)

    return jnp.array([lon, lat, alt])
