"""Type definitions for geomagnetic field synthesis.

- :class:`SynthesisMode`: main-field value or secular-variation rate.
- :class:`PointType`: geodetic or geocentric observation point.
- :class:`ObservationPoint`: a date and position to evaluate.
- :class:`EpochSelection`: rows and blending weights chosen for a date.
- :class:`GeocentricPosition`: position on the expansion sphere plus the
  rotation back to the caller's frame.
- :class:`FieldVector`: synthesized field components.

The NamedTuples holding arrays are pytrees, so they pass through
``jax.jit`` and ``jax.vmap`` unchanged.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

from jax import Array

from geomagjax.errors import InvalidInputError


class SynthesisMode(enum.Enum):
    """Quantity returned by the synthesis.

    Attributes:
        VALUE: Main-field components [nT].
        RATE: Secular variation of the components [nT/yr].
    """

    VALUE = "value"
    RATE = "rate"

    @classmethod
    def coerce(cls, mode: SynthesisMode | str | int) -> SynthesisMode:
        """Accept an enum member, its string value, or the integer flag ``0``/``1``.

        Raises:
            InvalidInputError: If *mode* names no member.
        """
        if isinstance(mode, cls):
            return mode
        if isinstance(mode, int) and not isinstance(mode, bool):
            if mode == 0:
                return cls.VALUE
            if mode == 1:
                return cls.RATE
        if isinstance(mode, str):
            try:
                return cls(mode.lower())
            except ValueError:
                pass
        raise InvalidInputError(
            f"Invalid synthesis mode {mode!r}; expected 'value' (0) or 'rate' (1)."
        )


class PointType(enum.Enum):
    """Kind of position supplied to the synthesis.

    Attributes:
        GEODETIC: Altitude above the WGS84 ellipsoid [km] and geodetic
            colatitude.  Components are returned in the local geodetic
            frame.
        GEOCENTRIC: Distance from the Earth's centre [km] and geocentric
            colatitude.  Components are returned in the local geocentric
            frame.
    """

    GEODETIC = "geodetic"
    GEOCENTRIC = "geocentric"

    @classmethod
    def coerce(cls, point_type: PointType | str | int) -> PointType:
        """Accept an enum member, its string value, or the integer flag ``1``/``2``.

        Raises:
            InvalidInputError: If *point_type* names no member.
        """
        if isinstance(point_type, cls):
            return point_type
        if isinstance(point_type, int) and not isinstance(point_type, bool):
            if point_type == 1:
                return cls.GEODETIC
            if point_type == 2:
                return cls.GEOCENTRIC
        if isinstance(point_type, str):
            try:
                return cls(point_type.lower())
            except ValueError:
                pass
        raise InvalidInputError(
            f"Invalid point type {point_type!r}; expected 'geodetic' (1) or "
            f"'geocentric' (2)."
        )


class ObservationPoint(NamedTuple):
    """A date and position at which to evaluate the field.

    Attributes:
        date: Decimal year.
        point_type: Interpretation of *altitude_or_radius* and
            *colatitude*.
        altitude_or_radius: Altitude above the ellipsoid [km] (geodetic) or
            radius from the Earth's centre [km] (geocentric).
        colatitude: Colatitude [deg].
        east_longitude: East longitude [deg].
    """

    date: float
    point_type: PointType
    altitude_or_radius: float
    colatitude: float
    east_longitude: float


class EpochSelection(NamedTuple):
    """Coefficient rows and weights selected for one date.

    The blended coefficient set is
    ``weight_low * data[index_low] + weight_high * data[index_high]``.

    Attributes:
        index_low: Row of the lower epoch in ``CoefficientTable.data``.
        index_high: Row of the upper epoch, or of the secular variation
            when extrapolating.
        weight_low: Weight applied to ``index_low``.
        weight_high: Weight applied to ``index_high``.
        max_degree: Maximum degree to evaluate.
        n_coefficients: Number of coefficients consumed, ``N(N + 2)``.
    """

    index_low: int
    index_high: int
    weight_low: float
    weight_high: float
    max_degree: int
    n_coefficients: int


class GeocentricPosition(NamedTuple):
    """Position on the expansion sphere.

    Attributes:
        radius: Distance from the Earth's centre [km].
        cos_colat: Cosine of the geocentric colatitude.
        sin_colat: Sine of the geocentric colatitude.
        cos_rot: Cosine of the angle from the geocentric to the caller's
            local frame (1 for geocentric input).
        sin_rot: Sine of that angle (0 for geocentric input).
    """

    radius: Array
    cos_colat: Array
    sin_colat: Array
    cos_rot: Array
    sin_rot: Array


class FieldVector(NamedTuple):
    """Geomagnetic field components in the local frame of the point.

    Units are nT for :attr:`SynthesisMode.VALUE` and nT/yr for
    :attr:`SynthesisMode.RATE`.  In rate mode :attr:`total_intensity` is the
    norm of the rate vector, not the rate of change of the intensity.

    Attributes:
        north: Northward component (X).
        east: Eastward component (Y).
        vertical: Vertical component, positive down (Z).
        total_intensity: ``sqrt(X^2 + Y^2 + Z^2)`` (F).
    """

    north: Array
    east: Array
    vertical: Array
    total_intensity: Array
