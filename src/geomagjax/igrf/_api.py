"""Public entry points for geomagnetic field synthesis.

:func:`synthesize` validates its inputs on the host, selects and blends
coefficient sets for the date, and evaluates the spherical harmonic
expansion with JAX.  :func:`evaluate_field` is the pure numerical kernel
behind it; with ``n_max`` and ``geodetic`` static it can be wrapped in
``jax.jit`` or ``jax.vmap`` by callers evaluating many points.

Units: dates are decimal years, lengths kilometres, angles degrees, field
components nT (value mode) or nT/yr (rate mode).
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax.typing import ArrayLike

from geomagjax.coefficients import CoefficientTable, load_default_coefficients
from geomagjax.config import get_dtype, resolve_show_warnings
from geomagjax.constants import MIN_GEOCENTRIC_RADIUS
from geomagjax.errors import InvalidInputError
from geomagjax.igrf._epoch import check_date, select_epoch, warn_if_degraded
from geomagjax.igrf._frames import (
    geocentric_position,
    geodetic_to_geocentric,
    rotate_to_point_frame,
)
from geomagjax.igrf._legendre import legendre_schmidt, longitude_harmonics
from geomagjax.igrf._synthesis import accumulate_field
from geomagjax.igrf._types import (
    FieldVector,
    ObservationPoint,
    PointType,
    SynthesisMode,
)


def _finite(name: str, value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as err:
        raise InvalidInputError(f"{name} must be a real number, got {value!r}.") from err
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value}.")
    return value


def evaluate_field(
    low: ArrayLike,
    high: ArrayLike,
    weight_low: ArrayLike,
    weight_high: ArrayLike,
    altitude_or_radius: ArrayLike,
    cos_colat: ArrayLike,
    sin_colat: ArrayLike,
    cos_lon: ArrayLike,
    sin_lon: ArrayLike,
    reference_radius: float,
    n_max: int,
    geodetic: bool,
) -> FieldVector:
    """Evaluate the blended expansion at one point.

    No validation is performed; see :func:`synthesize`.

    Args:
        low: Lower coefficient row.
        high: Upper coefficient row.
        weight_low: Weight of *low*.
        weight_high: Weight of *high*.
        altitude_or_radius: Altitude [km] when *geodetic*, radius [km]
            otherwise.
        cos_colat: Cosine of the input colatitude.
        sin_colat: Sine of the input colatitude.
        cos_lon: Cosine of the east longitude.
        sin_lon: Sine of the east longitude.
        reference_radius: Reference radius of the expansion [km].
        n_max: Maximum degree (static).
        geodetic: Whether the point is geodetic (static).

    Returns:
        FieldVector in the point's local frame.
    """
    if geodetic:
        pos = geodetic_to_geocentric(altitude_or_radius, cos_colat, sin_colat)
    else:
        pos = geocentric_position(altitude_or_radius, cos_colat, sin_colat)

    P, dP = legendre_schmidt(pos.cos_colat, pos.sin_colat, n_max)
    cos_m, sin_m = longitude_harmonics(cos_lon, sin_lon, n_max)
    x, y, z = accumulate_field(
        low,
        high,
        weight_low,
        weight_high,
        P,
        dP,
        cos_m,
        sin_m,
        pos.cos_colat,
        pos.sin_colat,
        reference_radius / pos.radius,
        n_max,
    )
    return rotate_to_point_frame(x, y, z, pos.cos_rot, pos.sin_rot)


def synthesize(
    mode: SynthesisMode | str | int,
    date: float,
    point_type: PointType | str | int,
    altitude_or_radius: float,
    colatitude: float,
    longitude: float,
    *,
    show_warnings: bool | None = None,
    table: CoefficientTable | None = None,
) -> FieldVector:
    """Compute the geomagnetic field, or its secular variation, at a point.

    Args:
        mode: ``"value"`` for the main field [nT] or ``"rate"`` for its
            secular variation [nT/yr].
        date: Decimal year, within the table window (``[1900, 2030)`` for
            the bundled table).
        point_type: ``"geodetic"`` or ``"geocentric"``.
        altitude_or_radius: Geodetic altitude above the WGS84 ellipsoid
            [km], or geocentric radius [km] (must exceed 3485 km).
        colatitude: Colatitude [deg], ``0 <= colatitude <= 180``.
        longitude: East longitude [deg], ``0 <= longitude <= 360``.
        show_warnings: Emit the advisory for dates beyond the reliable
            extrapolation horizon.  ``None`` uses the global setting from
            :func:`geomagjax.config.set_show_warnings`.
        table: Coefficient table.  Defaults to the bundled IGRF table.

    Returns:
        FieldVector ``(north, east, vertical, total_intensity)`` in the
        local geodetic or geocentric frame of the point.

    Raises:
        OutOfRangeError: If *date* is outside the table window.
        InvalidInputError: If a coordinate is out of range or not finite,
            the radius is inside the core, or *mode*/*point_type* is
            unknown.

    Examples:
        ```python
        from geomagjax.igrf import synthesize
        b = synthesize("value", 2020.0, "geodetic", 0.0, 40.0, 255.0)
        float(b.total_intensity)
        ```
    """
    mode = SynthesisMode.coerce(mode)
    point_type = PointType.coerce(point_type)
    if table is None:
        table = load_default_coefficients()

    date = check_date(table, date)
    alt_or_r = _finite("altitude_or_radius", altitude_or_radius)
    colat = _finite("colatitude", colatitude)
    elong = _finite("longitude", longitude)

    if not 0.0 <= colat <= 180.0:
        raise InvalidInputError(f"Colatitude {colat} is outside [0, 180] degrees.")
    if not 0.0 <= elong <= 360.0:
        raise InvalidInputError(f"East longitude {elong} is outside [0, 360] degrees.")
    geodetic = point_type is PointType.GEODETIC
    if not geodetic and alt_or_r <= MIN_GEOCENTRIC_RADIUS:
        raise InvalidInputError(
            f"Geocentric radius {alt_or_r} km must exceed {MIN_GEOCENTRIC_RADIUS} km."
        )

    theta = math.radians(colat)
    lam = math.radians(elong)
    ct, st = math.cos(theta), math.sin(theta)
    if geodetic:
        pos = geodetic_to_geocentric(alt_or_r, ct, st)
        radius = float(pos.radius)
        # cos_rot <= 0 means the altitude reaches past the ellipsoid's centre
        if not (radius > MIN_GEOCENTRIC_RADIUS and float(pos.cos_rot) > 0.0):
            raise InvalidInputError(
                f"Altitude {alt_or_r} km puts the point inside the core "
                f"(geocentric radius {radius:.1f} km)."
            )

    selection = select_epoch(table, date, mode)
    if resolve_show_warnings(show_warnings):
        warn_if_degraded(table, date)

    n_coef = selection.n_coefficients
    dtype = get_dtype()
    return evaluate_field(
        jnp.asarray(table.data[selection.index_low, :n_coef], dtype=dtype),
        jnp.asarray(table.data[selection.index_high, :n_coef], dtype=dtype),
        selection.weight_low,
        selection.weight_high,
        alt_or_r,
        ct,
        st,
        math.cos(lam),
        math.sin(lam),
        table.reference_radius,
        selection.max_degree,
        geodetic,
    )


def synthesize_point(
    point: ObservationPoint,
    mode: SynthesisMode | str | int = SynthesisMode.VALUE,
    *,
    show_warnings: bool | None = None,
    table: CoefficientTable | None = None,
) -> FieldVector:
    """Evaluate :func:`synthesize` at an :class:`ObservationPoint`."""
    return synthesize(
        mode,
        point.date,
        point.point_type,
        point.altitude_or_radius,
        point.colatitude,
        point.east_longitude,
        show_warnings=show_warnings,
        table=table,
    )


def valid_date_range(table: CoefficientTable | None = None) -> tuple[float, float]:
    """Accepted dates as ``(first, end)``; *end* itself is rejected.

    Args:
        table: Coefficient table.  Defaults to the bundled IGRF table.

    Returns:
        ``(1900.0, 2030.0)`` for the bundled table.
    """
    if table is None:
        table = load_default_coefficients()
    return table.date_range


def max_supported_degree(table: CoefficientTable | None = None) -> int:
    """Highest spherical harmonic degree in the table (13 for the bundled table)."""
    if table is None:
        table = load_default_coefficients()
    return table.max_degree


def igrf13syn(
    isv: int,
    date: float,
    itype: int,
    alt: float,
    colat: float,
    elong: float,
    show_warns: bool = True,
) -> FieldVector:
    """Field synthesis with the integer flags of the IAGA ``igrf13syn`` routine.

    Args:
        isv: ``0`` for main-field values, ``1`` for secular variation.
        date: Decimal year.
        itype: ``1`` for geodetic, ``2`` for geocentric.
        alt: Altitude [km] (``itype=1``) or radius [km] (``itype=2``).
        colat: Colatitude [deg].
        elong: East longitude [deg].
        show_warns: Emit the extrapolation advisory.

    Returns:
        FieldVector; unpacks as ``x, y, z, f``.

    Raises:
        InvalidInputError: If *isv* or *itype* is not a recognised flag, or
            the position is invalid.
        OutOfRangeError: If *date* is outside the table window.
    """
    if isv not in (0, 1):
        raise InvalidInputError(f"isv must be 0 or 1, got {isv!r}.")
    if itype not in (1, 2):
        raise InvalidInputError(f"itype must be 1 or 2, got {itype!r}.")
    return synthesize(isv, date, itype, alt, colat, elong, show_warnings=show_warns)
