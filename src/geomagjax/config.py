"""Module-wide numerical and reporting configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
by the synthesis kernels, and ``set_show_warnings`` / ``get_show_warnings``
to control the accuracy advisory emitted for dates beyond the reliable
extrapolation horizon.

The default dtype is ``jnp.float64``: field synthesis accumulates up to
105 terms whose magnitudes span five orders of magnitude, and single
precision loses the sub-nanotesla agreement expected of the model.
Selecting ``jnp.float64`` (including the default, at import time) enables
JAX's 64-bit mode (``jax_enable_x64``).

Call ``set_dtype`` **before** any JIT compilation.  Under JIT,
``get_dtype()`` runs during tracing and its result is baked into the
compiled program.

:class:`SynthesisConfig` bundles a coefficient table, advisory policy and
synthesis mode for callers that evaluate many points with the same
settings.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp

if TYPE_CHECKING:
    from geomagjax.coefficients import CoefficientTable
    from geomagjax.igrf import FieldVector, PointType, SynthesisMode

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float64
jax.config.update("jax_enable_x64", True)

_show_warnings = True


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for geomagjax.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def set_show_warnings(enabled: bool) -> None:
    """Globally enable or disable the extrapolation accuracy advisory.

    A per-call ``show_warnings`` argument always takes precedence over this
    setting.

    Args:
        enabled: ``False`` silences the advisory for every call that does
            not pass ``show_warnings`` explicitly.
    """
    global _show_warnings
    _show_warnings = bool(enabled)


def get_show_warnings() -> bool:
    """Return whether the extrapolation accuracy advisory is enabled.

    Returns:
        ``True`` unless disabled with :func:`set_show_warnings`.
    """
    return _show_warnings


def resolve_show_warnings(show_warnings: bool | None) -> bool:
    """Combine a per-call advisory flag with the global setting.

    Args:
        show_warnings: Per-call override, or ``None`` to defer to the
            global setting.

    Returns:
        The effective advisory flag.
    """
    if show_warnings is None:
        return _show_warnings
    return bool(show_warnings)


@dataclasses.dataclass(frozen=True)
class SynthesisConfig:
    """Reusable settings for repeated field evaluations.

    Attributes:
        table: Coefficient table to evaluate.  ``None`` uses the bundled
            IGRF table.
        show_warnings: Advisory policy.  ``None`` defers to
            :func:`get_show_warnings`.
        mode: Default synthesis mode (``"value"`` or ``"rate"``).

    Examples:
        ```python
        from geomagjax.config import SynthesisConfig
        cfg = SynthesisConfig(show_warnings=False)
        b = cfg.synthesize(2026.0, "geodetic", 0.0, 45.0, 10.0)
        ```
    """

    table: CoefficientTable | None = None
    show_warnings: bool | None = None
    mode: SynthesisMode | str = "value"

    def synthesize(
        self,
        date: float,
        point_type: PointType | str,
        altitude_or_radius: float,
        colatitude: float,
        longitude: float,
    ) -> FieldVector:
        """Evaluate the field at one point using these settings.

        Args:
            date: Decimal year.
            point_type: ``"geodetic"`` or ``"geocentric"``.
            altitude_or_radius: Altitude above the ellipsoid [km] for
                geodetic points, geocentric radius [km] otherwise.
            colatitude: Colatitude [deg], ``0 <= colatitude <= 180``.
            longitude: East longitude [deg], ``0 <= longitude <= 360``.

        Returns:
            FieldVector for the point.
        """
        from geomagjax.igrf import synthesize

        return synthesize(
            self.mode,
            date,
            point_type,
            altitude_or_radius,
            colatitude,
            longitude,
            show_warnings=self.show_warnings,
            table=self.table,
        )
