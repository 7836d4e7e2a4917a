"""Spherical harmonic coefficient tables for geomagnetic reference models.

Typical usage::

    from geomagjax.coefficients import load_default_coefficients
    table = load_default_coefficients()
    table.epochs[-1]  # 2020.0
"""

from geomagjax.coefficients._download import download_igrf_file
from geomagjax.coefficients._parsers import parse_igrf_coefficients
from geomagjax.coefficients._providers import (
    coefficient_table_from_arrays,
    load_cached_coefficients,
    load_coefficients_from_file,
    load_default_coefficients,
)
from geomagjax.coefficients._types import (
    CoefficientSet,
    CoefficientTable,
    coefficient_count,
    coefficient_index,
    effective_degree,
    legendre_count,
)

__all__ = [
    "CoefficientSet",
    "CoefficientTable",
    "coefficient_count",
    "coefficient_index",
    "coefficient_table_from_arrays",
    "download_igrf_file",
    "effective_degree",
    "legendre_count",
    "load_cached_coefficients",
    "load_coefficients_from_file",
    "load_default_coefficients",
    "parse_igrf_coefficients",
]
