"""Elementary frame rotations.

The matrices rotate the *frame*, not the vector: ``Ry(a) @ v`` expresses a
fixed vector ``v`` in axes turned by ``a`` about y.

References:

    1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geomagjax.config import get_dtype
from geomagjax.utils import to_radians


def Ry(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Frame rotation about the y-axis.

    Args:
        angle: Counter-clockwise rotation of the axes, viewed looking back
            along the positive y-axis.
        use_degrees: Interpret *angle* in degrees. Default: ``False``

    Returns:
        Array: ``(3, 3)`` rotation matrix.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    zero = jnp.zeros_like(c)
    one = jnp.ones_like(c)

    return jnp.array([[c, zero, -s],
                      [zero, one, zero],
                      [s, zero, c]])


def Rz(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Frame rotation about the z-axis.

    Args:
        angle: Counter-clockwise rotation of the axes, viewed looking back
            along the positive z-axis.
        use_degrees: Interpret *angle* in degrees. Default: ``False``

    Returns:
        Array: ``(3, 3)`` rotation matrix.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    zero = jnp.zeros_like(c)
    one = jnp.ones_like(c)

    return jnp.array([[c, s, zero],
                      [-s, c, zero],
                      [zero, zero, one]])
