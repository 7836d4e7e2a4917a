"""Spherical harmonic summation of the internal field.

Accumulates the geocentric north (X), east (Y) and down (Z) components

.. math::

    X = \\sum_n (a/r)^{n+2} \\sum_m (g_n^m \\cos m\\lambda + h_n^m \\sin m\\lambda)
        \\, dP_n^m / d\\theta

    Y = \\sum_n (a/r)^{n+2} \\sum_m m (g_n^m \\sin m\\lambda - h_n^m \\cos m\\lambda)
        \\, P_n^m / \\sin\\theta

    Z = -\\sum_n (n+1) (a/r)^{n+2} \\sum_m (g_n^m \\cos m\\lambda + h_n^m \\sin m\\lambda)
        \\, P_n^m

in canonical coefficient order, with the coefficients blended from two
table rows on the fly.  At the geographic poles ``P_n^m / sin(theta)`` is
replaced by its limit ``dP_n^m/dtheta * cos(theta)`` (non-zero only for
``m = 1``).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geomagjax.config import get_dtype


def blend_coefficients(
    low: ArrayLike,
    high: ArrayLike,
    weight_low: ArrayLike,
    weight_high: ArrayLike,
) -> Array:
    """Weighted sum of two coefficient rows, ``weight_low*low + weight_high*high``."""
    dtype = get_dtype()
    return (
        jnp.asarray(weight_low, dtype=dtype) * jnp.asarray(low, dtype=dtype)
        + jnp.asarray(weight_high, dtype=dtype) * jnp.asarray(high, dtype=dtype)
    )


def accumulate_field(
    low: ArrayLike,
    high: ArrayLike,
    weight_low: ArrayLike,
    weight_high: ArrayLike,
    P: ArrayLike,
    dP: ArrayLike,
    cos_m: ArrayLike,
    sin_m: ArrayLike,
    cos_colat: ArrayLike,
    sin_colat: ArrayLike,
    ratio: ArrayLike,
    n_max: int,
) -> tuple[Array, Array, Array]:
    """Sum the expansion to degree *n_max* in the geocentric frame.

    Args:
        low: Lower coefficient row, at least ``n_max(n_max + 2)`` long.
        high: Upper coefficient row (next epoch or secular variation).
        weight_low: Weight of *low*.
        weight_high: Weight of *high*.
        P: Legendre functions from :func:`legendre_schmidt`.
        dP: Their colatitude derivatives.
        cos_m: ``cos(m lambda)`` for ``m = 0..n_max``.
        sin_m: ``sin(m lambda)`` for ``m = 0..n_max``.
        cos_colat: Cosine of the geocentric colatitude.
        sin_colat: Sine of the geocentric colatitude.
        ratio: Reference radius over geocentric radius, ``a / r``.
        n_max: Maximum degree (static).

    Returns:
        Tuple ``(x, y, z)``: geocentric north, east and down components.
    """
    dtype = get_dtype()
    coef = blend_coefficients(low, high, weight_low, weight_high)
    ct = jnp.asarray(cos_colat, dtype=dtype)
    st = jnp.asarray(sin_colat, dtype=dtype)
    ratio = jnp.asarray(ratio, dtype=dtype)

    at_pole = st == 0.0
    safe_st = jnp.where(at_pole, 1.0, st)

    x = jnp.zeros((), dtype=dtype)
    y = jnp.zeros((), dtype=dtype)
    z = jnp.zeros((), dtype=dtype)

    # (a/r)^(n+2)
    rr = ratio * ratio
    idx = 0
    for n in range(1, n_max + 1):
        rr = rr * ratio
        fn1 = float(n + 1)
        for m in range(n + 1):
            g = coef[idx] * rr
            if m == 0:
                x = x + g * dP[n, 0]
                z = z - fn1 * g * P[n, 0]
                idx += 1
                continue
            h = coef[idx + 1] * rr
            cos_part = g * cos_m[m] + h * sin_m[m]
            sin_part = g * sin_m[m] - h * cos_m[m]
            x = x + cos_part * dP[n, m]
            z = z - fn1 * cos_part * P[n, m]
            y = y + jnp.where(
                at_pole,
                sin_part * dP[n, m] * ct,
                sin_part * m * P[n, m] / safe_st,
            )
            idx += 2

    return x, y, z
