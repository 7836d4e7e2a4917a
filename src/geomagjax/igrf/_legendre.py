"""Schmidt quasi-normalised associated Legendre functions.

Functions are generated degree by degree (order varying fastest) with the
recurrences used by the IGRF synthesis programs:

- diagonal terms from the previous diagonal,
  ``P(n, n) = sqrt(1 - 1/(2n)) sin(theta) P(n-1, n-1)``;
- off-diagonal terms from the two previous degrees of the same order,
  ``P(n, m) = (2n-1)/sqrt(n^2-m^2) cos(theta) P(n-1, m)
  - sqrt((n-1)^2-m^2)/sqrt(n^2-m^2) P(n-2, m)``.

Derivatives are taken with respect to colatitude and obey the
differentiated recurrences.  Both sets are returned as lower-triangular
``(n_max + 1, n_max + 1)`` arrays indexed ``[n, m]``.

The degree loop is unrolled in Python, so *n_max* must be static under
``jax.jit``.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geomagjax.config import get_dtype


def legendre_index(n: int, m: int) -> int:
    """Position of ``(n, m)`` in the degree-major traversal, ``n(n+1)/2 + m``."""
    return n * (n + 1) // 2 + m


def legendre_schmidt(
    cos_colat: ArrayLike,
    sin_colat: ArrayLike,
    n_max: int,
) -> tuple[Array, Array]:
    """Evaluate ``P(n, m)`` and ``dP(n, m)/dtheta`` for ``0 <= m <= n <= n_max``.

    Args:
        cos_colat: Cosine of the colatitude.
        sin_colat: Sine of the colatitude (``>= 0``).
        n_max: Maximum degree.

    Returns:
        Tuple ``(P, dP)`` of ``(n_max + 1, n_max + 1)`` arrays; entries with
        ``m > n`` are zero.

    Examples:
        ```python
        from geomagjax.igrf import legendre_schmidt
        P, dP = legendre_schmidt(0.0, 1.0, 2)
        float(P[1, 0]), float(dP[1, 0])  # (0.0, -1.0)
        ```
    """
    dtype = get_dtype()
    ct = jnp.asarray(cos_colat, dtype=dtype)
    st = jnp.asarray(sin_colat, dtype=dtype)

    size = n_max + 1
    P = jnp.zeros((size, size), dtype=dtype).at[0, 0].set(1.0)
    dP = jnp.zeros((size, size), dtype=dtype)

    if n_max == 0:
        return P, dP

    P = P.at[1, 1].set(st)
    dP = dP.at[1, 1].set(ct)

    for n in range(1, size):
        for m in range(n + 1):
            if m == n:
                if n == 1:
                    continue
                scale = math.sqrt(1.0 - 0.5 / m)
                p_prev = P[n - 1, n - 1]
                P = P.at[n, n].set(scale * st * p_prev)
                dP = dP.at[n, n].set(scale * (st * dP[n - 1, n - 1] + ct * p_prev))
            else:
                root = math.sqrt(n * n - m * m)
                two = math.sqrt((n - 1) * (n - 1) - m * m) / root
                three = (2 * n - 1) / root
                p1, dp1 = P[n - 1, m], dP[n - 1, m]
                # P(n-2, m) is zero when n - 2 < m
                if n - 2 >= m:
                    p2, dp2 = P[n - 2, m], dP[n - 2, m]
                else:
                    p2 = dp2 = 0.0
                P = P.at[n, m].set(three * ct * p1 - two * p2)
                dP = dP.at[n, m].set(three * (ct * dp1 - st * p1) - two * dp2)

    return P, dP


def longitude_harmonics(
    cos_lon: ArrayLike,
    sin_lon: ArrayLike,
    n_max: int,
) -> tuple[Array, Array]:
    """Evaluate ``cos(m lambda)`` and ``sin(m lambda)`` for ``m = 0..n_max``.

    Uses angle addition from the first harmonic, so only one ``sin``/``cos``
    pair is evaluated.

    Args:
        cos_lon: Cosine of the east longitude.
        sin_lon: Sine of the east longitude.
        n_max: Highest order.

    Returns:
        Tuple ``(cos_m, sin_m)`` of arrays with shape ``(n_max + 1,)``.
    """
    dtype = get_dtype()
    cl = jnp.asarray(cos_lon, dtype=dtype)
    sl = jnp.asarray(sin_lon, dtype=dtype)

    cos_terms = [jnp.ones((), dtype=dtype)]
    sin_terms = [jnp.zeros((), dtype=dtype)]
    if n_max >= 1:
        cos_terms.append(cl)
        sin_terms.append(sl)
    for _ in range(2, n_max + 1):
        c_prev, s_prev = cos_terms[-1], sin_terms[-1]
        cos_terms.append(c_prev * cl - s_prev * sl)
        sin_terms.append(s_prev * cl + c_prev * sl)

    return jnp.stack(cos_terms), jnp.stack(sin_terms)
