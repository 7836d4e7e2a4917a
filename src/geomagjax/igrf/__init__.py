"""International Geomagnetic Reference Field synthesis.

Evaluates the internal geomagnetic field, or its secular variation, from
a table of spherical harmonic coefficients at any date in the table's
window and any point outside the core.

Typical usage::

    from geomagjax.igrf import synthesize
    x, y, z, f = synthesize("value", 2020.0, "geodetic", 0.0, 40.0, 255.0)
"""

from geomagjax.igrf._api import (
    evaluate_field,
    igrf13syn,
    max_supported_degree,
    synthesize,
    synthesize_point,
    valid_date_range,
)
from geomagjax.igrf._epoch import is_extrapolation_degraded, select_epoch
from geomagjax.igrf._frames import (
    geocentric_position,
    geocentric_to_geodetic,
    geodetic_to_geocentric,
    rotate_to_point_frame,
)
from geomagjax.igrf._legendre import (
    legendre_index,
    legendre_schmidt,
    longitude_harmonics,
)
from geomagjax.igrf._si import igrf, igrfd
from geomagjax.igrf._synthesis import accumulate_field, blend_coefficients
from geomagjax.igrf._types import (
    EpochSelection,
    FieldVector,
    GeocentricPosition,
    ObservationPoint,
    PointType,
    SynthesisMode,
)

__all__ = [
    "EpochSelection",
    "FieldVector",
    "GeocentricPosition",
    "ObservationPoint",
    "PointType",
    "SynthesisMode",
    "accumulate_field",
    "blend_coefficients",
    "evaluate_field",
    "geocentric_position",
    "geocentric_to_geodetic",
    "geodetic_to_geocentric",
    "igrf",
    "igrf13syn",
    "igrfd",
    "is_extrapolation_degraded",
    "legendre_index",
    "legendre_schmidt",
    "longitude_harmonics",
    "max_supported_degree",
    "rotate_to_point_frame",
    "select_epoch",
    "synthesize",
    "synthesize_point",
    "valid_date_range",
]
