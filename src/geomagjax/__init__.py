"""
geomagjax synthesizes the International Geomagnetic Reference Field (IGRF)
and a tilted dipole approximation of the Earth's magnetic field in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    WGS84_a,
    WGS84_f,
    IGRF_REFERENCE_RADIUS,
    MIN_GEOCENTRIC_RADIUS,
)

from .config import (
    SynthesisConfig,
    get_dtype,
    get_show_warnings,
    set_dtype,
    set_show_warnings,
)
from .errors import GeomagError, InvalidInputError, OutOfRangeError
from .rotations import Ry, Rz

from .coefficients import (
    CoefficientTable,
    load_coefficients_from_file,
    load_default_coefficients,
)
from .igrf import (
    FieldVector,
    ObservationPoint,
    PointType,
    SynthesisMode,
    igrf,
    igrf13syn,
    igrfd,
    max_supported_degree,
    synthesize,
    synthesize_point,
    valid_date_range,
)
from .dipole import geomag_dipole

__version__ = "0.1.0"
