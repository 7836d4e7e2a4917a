"""Tilted dipole model of the geomagnetic field.

Approximates the main field by a centred dipole whose axis passes through
the geomagnetic poles.  The pole position and dipole moment for a given
year are linearly interpolated from the tabulated values below and held
constant outside 1900-2020.

All positions are ECEF in metres; fields are returned in ECEF [nT].

References:
    1. World Data Center for Geomagnetism, Kyoto, *Magnetic North,
       Geomagnetic and Magnetic Poles*,
       http://wdc.kugi.kyoto-u.ac.jp/poles/polesexp.html
    2. K. Kauristie, *Geomagnetism*, lecture notes, ch. 3 (dipole field).
"""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from geomagjax.config import get_dtype
from geomagjax.constants import DEG2RAD, MU0_4PI
from geomagjax.rotations import Ry, Rz

# Year, latitude [deg], longitude [deg] of the geomagnetic pole in the
# northern hemisphere (the dipole's south pole).
_POLE_TABLE = np.array(
    [
        [1900.0, 78.7, -68.8],
        [1905.0, 78.7, -68.7],
        [1910.0, 78.7, -68.7],
        [1915.0, 78.6, -68.6],
        [1920.0, 78.6, -68.4],
        [1925.0, 78.6, -68.3],
        [1930.0, 78.6, -68.3],
        [1935.0, 78.6, -68.4],
        [1940.0, 78.5, -68.5],
        [1945.0, 78.5, -68.5],
        [1950.0, 78.5, -68.8],
        [1955.0, 78.5, -69.2],
        [1960.0, 78.6, -69.5],
        [1965.0, 78.6, -69.9],
        [1970.0, 78.7, -70.2],
        [1975.0, 78.8, -70.5],
        [1980.0, 78.9, -70.8],
        [1985.0, 79.0, -70.9],
        [1990.0, 79.2, -71.1],
        [1995.0, 79.4, -71.4],
        [2000.0, 79.6, -71.6],
        [2005.0, 79.8, -71.8],
        [2010.0, 80.1, -72.2],
        [2011.0, 80.1, -72.3],
        [2012.0, 80.2, -72.4],
        [2013.0, 80.3, -72.5],
        [2014.0, 80.3, -72.5],
        [2015.0, 80.4, -72.6],
        [2016.0, 80.4, -72.7],
        [2017.0, 80.5, -72.8],
        [2018.0, 80.5, -73.0],
        [2019.0, 80.6, -73.1],
        [2020.0, 80.6, -73.2],
    ]
)

# Dipole moment [1e22 A m^2] at the same years.
_MOMENT_TABLE = np.array(
    [
        8.32, 8.30, 8.27, 8.24, 8.20, 8.16, 8.13, 8.11, 8.09, 8.08, 8.06,
        8.05, 8.03, 8.00, 7.97, 7.94, 7.91, 7.87, 7.84, 7.81, 7.79, 7.77,
        7.75, 7.74, 7.74, 7.73, 7.73, 7.72, 7.72, 7.72, 7.71, 7.71, 7.70,
    ]
)


def dipole_parameters(year: ArrayLike) -> tuple[Array, Array, Array]:
    """Geomagnetic pole position and dipole moment for *year*.

    Args:
        year: Decimal year.  Values outside 1900-2020 are clamped to the
            nearest tabulated year.

    Returns:
        Tuple ``(pole_lat, pole_lon, moment)``: latitude and longitude of
        the northern geomagnetic pole [rad] and the dipole moment [A m^2].
    """
    dtype = get_dtype()
    year = jnp.asarray(year, dtype=dtype)
    years = jnp.asarray(_POLE_TABLE[:, 0], dtype=dtype)

    pole_lat = jnp.interp(year, years, jnp.asarray(_POLE_TABLE[:, 1], dtype=dtype))
    pole_lon = jnp.interp(year, years, jnp.asarray(_POLE_TABLE[:, 2], dtype=dtype))
    moment = jnp.interp(year, years, jnp.asarray(_MOMENT_TABLE, dtype=dtype))

    return pole_lat * DEG2RAD, pole_lon * DEG2RAD, moment * 1e22


def geomag_dipole_from_pole(
    r_ecef: ArrayLike,
    pole_lat: ArrayLike,
    pole_lon: ArrayLike,
    moment: ArrayLike,
) -> Array:
    """Dipole field at *r_ecef* for an explicit pole and moment.

    .. math::

        \\mathbf{B} = \\frac{1}{r^3} (3 \\hat{e}_r \\hat{e}_r^T - I) \\mathbf{k}_0,
        \\quad \\mathbf{k}_0 = \\frac{\\mu_0}{4\\pi} m \\hat{k}

    where ``k_hat`` points from the northern geomagnetic pole towards the
    Earth's centre.

    Args:
        r_ecef: ECEF position [m], shape ``(3,)``.
        pole_lat: Latitude of the northern geomagnetic pole [rad].
        pole_lon: Longitude of the northern geomagnetic pole [rad].
        moment: Dipole moment [A m^2].

    Returns:
        Array: Field in ECEF [nT], shape ``(3,)``.
    """
    dtype = get_dtype()
    r_ecef = jnp.asarray(r_ecef, dtype=dtype)

    # ECEF to geomagnetic axes: z' along the pole
    dcm = Ry(jnp.pi / 2 - pole_lat) @ Rz(pole_lon)
    k0 = MU0_4PI * moment * (dcm.T @ jnp.array([0.0, 0.0, -1.0], dtype=dtype))

    r = jnp.linalg.norm(r_ecef)
    e_r = r_ecef / r
    b = (3.0 * jnp.outer(e_r, e_r) - jnp.eye(3, dtype=dtype)) @ k0 / r**3

    return b * 1e9


def geomag_dipole(r_ecef: ArrayLike, year: ArrayLike = 2019.0) -> Array:
    """Dipole field at *r_ecef* using the tabulated pole and moment for *year*.

    Args:
        r_ecef: ECEF position [m], shape ``(3,)``.
        year: Decimal year. Default: 2019.

    Returns:
        Array: Field in ECEF [nT], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from geomagjax.dipole import geomag_dipole
        b = geomag_dipole(jnp.array([6378137.0, 0.0, 0.0]), 2020.0)
        ```
    """
    pole_lat, pole_lon, moment = dipole_parameters(year)
    return geomag_dipole_from_pole(r_ecef, pole_lat, pole_lon, moment)
