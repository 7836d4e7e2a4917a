"""Factory functions for creating CoefficientTable instances.

- :func:`coefficient_table_from_arrays`: Build a table from in-memory
  coefficient sets (custom or truncated models, tests).
- :func:`load_coefficients_from_file`: Load an IAGA coefficient file.
- :func:`load_default_coefficients`: Load the bundled IGRF table.
- :func:`load_cached_coefficients`: Load from a local cache, downloading a
  fresh file when stale.
"""

from __future__ import annotations

import functools
import importlib.resources
import logging
from pathlib import Path

import numpy as np
from jax.typing import ArrayLike

from geomagjax.coefficients._download import _IGRF_FILENAME, download_igrf_file
from geomagjax.coefficients._parsers import parse_igrf_coefficients
from geomagjax.coefficients._types import (
    CoefficientTable,
    coefficient_count,
    degree_from_count,
    effective_degree,
)
from geomagjax.constants import IGRF_REFERENCE_RADIUS
from geomagjax.utils.caching import get_igrf_cache_dir, is_file_stale

logger = logging.getLogger(__name__)

_DEFAULT_VALIDITY_YEARS: float = 10.0
"""Default extrapolation window after the last epoch in years."""

_DEFAULT_RELIABILITY_YEARS: float = 5.0
"""Default reliable-extrapolation horizon after the last epoch in years."""

_DEFAULT_MAX_AGE_DAYS: float = 30.0
"""Default maximum age for a cached coefficient file in days."""

_BUNDLED_FILENAME: str = "igrf13coeffs.txt"


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def coefficient_table_from_arrays(
    epochs: ArrayLike,
    coefficients: ArrayLike,
    secular_variation: ArrayLike,
    *,
    model_name: str = "custom",
    reference_radius: float = IGRF_REFERENCE_RADIUS,
    validity_years: float = _DEFAULT_VALIDITY_YEARS,
    reliability_years: float = _DEFAULT_RELIABILITY_YEARS,
) -> CoefficientTable:
    """Build a CoefficientTable from in-memory coefficient sets.

    Args:
        epochs: Strictly increasing epoch years, shape ``(n_epochs,)``.
        coefficients: Coefficient sets in canonical order, shape
            ``(n_epochs, N(N + 2))`` [nT].
        secular_variation: Secular variation after the last epoch, shape
            ``(N(N + 2),)`` [nT/yr].
        model_name: Identifier stored on the table.
        reference_radius: Reference radius of the expansion [km].
        validity_years: Extrapolation window after the last epoch.
        reliability_years: Reliable-extrapolation horizon after the last
            epoch.  Must not exceed *validity_years*.

    Returns:
        An immutable CoefficientTable.

    Raises:
        ValueError: If shapes are inconsistent, epochs are not strictly
            increasing, values are not finite, or the windows are invalid.

    Examples:
        ```python
        from geomagjax.coefficients import coefficient_table_from_arrays
        # dipole-only model: g10, g11, h11
        table = coefficient_table_from_arrays(
            [2000.0, 2005.0],
            [[-29600.0, -1700.0, 5100.0], [-29550.0, -1670.0, 5080.0]],
            [10.0, 8.0, -20.0],
        )
        ```
    """
    epochs_arr = np.array(epochs, dtype=np.float64).reshape(-1)
    coef_arr = np.array(coefficients, dtype=np.float64)
    sv_arr = np.array(secular_variation, dtype=np.float64).reshape(-1)

    if epochs_arr.size == 0:
        raise ValueError("At least one epoch is required.")
    if coef_arr.ndim != 2 or coef_arr.shape[0] != epochs_arr.size:
        raise ValueError(
            f"Coefficients must have shape (n_epochs, n_coefficients) with "
            f"n_epochs={epochs_arr.size}, got {coef_arr.shape}."
        )
    max_degree = degree_from_count(coef_arr.shape[1])
    if sv_arr.size != coefficient_count(max_degree):
        raise ValueError(
            f"Secular variation must have {coefficient_count(max_degree)} "
            f"coefficients, got {sv_arr.size}."
        )
    if np.any(np.diff(epochs_arr) <= 0.0):
        raise ValueError("Epochs must be strictly increasing.")
    if not (
        np.all(np.isfinite(epochs_arr))
        and np.all(np.isfinite(coef_arr))
        and np.all(np.isfinite(sv_arr))
    ):
        raise ValueError("Epochs and coefficients must be finite.")
    if not 0.0 < reliability_years <= validity_years:
        raise ValueError(
            f"Require 0 < reliability_years <= validity_years, got "
            f"{reliability_years} and {validity_years}."
        )
    if reference_radius <= 0.0:
        raise ValueError(f"Reference radius must be positive, got {reference_radius}.")

    data = np.vstack([coef_arr, sv_arr[np.newaxis, :]])
    max_degrees = np.array([effective_degree(row) for row in coef_arr], dtype=np.int64)

    return CoefficientTable(
        model_name=model_name,
        epochs=_frozen(epochs_arr),
        max_degrees=_frozen(max_degrees),
        data=_frozen(data),
        max_degree=max_degree,
        reference_radius=float(reference_radius),
        validity_years=float(validity_years),
        reliability_years=float(reliability_years),
    )


def load_coefficients_from_file(
    filepath: str | Path,
    *,
    model_name: str | None = None,
    validity_years: float = _DEFAULT_VALIDITY_YEARS,
) -> CoefficientTable:
    """Load a coefficient table from an IAGA format file.

    The reliable-extrapolation horizon is taken from the secular variation
    column header (``2020-25`` gives five years).

    Args:
        filepath: Path to the coefficient file (e.g. ``igrf13coeffs.txt``).
        model_name: Identifier stored on the table.  Defaults to the file
            stem.
        validity_years: Extrapolation window after the last epoch.

    Returns:
        CoefficientTable holding every epoch in the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is malformed.

    Examples:
        ```python
        from geomagjax.coefficients import load_coefficients_from_file
        table = load_coefficients_from_file("igrf13coeffs.txt")
        table.date_range  # (1900.0, 2030.0)
        ```
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Coefficient file not found: {filepath}")

    parsed = parse_igrf_coefficients(filepath.read_text(encoding="utf-8"))
    data = parsed["data"]

    return coefficient_table_from_arrays(
        parsed["epochs"],
        data[:-1],
        data[-1],
        model_name=model_name if model_name is not None else filepath.stem,
        validity_years=validity_years,
        reliability_years=parsed["reliability_years"],
    )


@functools.lru_cache(maxsize=1)
def load_default_coefficients() -> CoefficientTable:
    """Load the bundled IGRF coefficient table.

    The table is parsed once per process and shared; its arrays are
    read-only.

    Returns:
        CoefficientTable for epochs 1900-2020 with the 2020-25 secular
        variation (valid for dates in ``[1900, 2030)``).

    Examples:
        ```python
        from geomagjax.coefficients import load_default_coefficients
        table = load_default_coefficients()
        table.max_degree  # 13
        ```
    """
    data_pkg = importlib.resources.files("geomagjax.data.igrf")
    resource = data_pkg.joinpath(_BUNDLED_FILENAME)
    with importlib.resources.as_file(resource) as path:
        return load_coefficients_from_file(path, model_name="IGRF-13")


def load_cached_coefficients(
    filepath: str | Path | None = None,
    *,
    max_age_days: float = _DEFAULT_MAX_AGE_DAYS,
) -> CoefficientTable:
    """Load a coefficient table from a local cache, downloading when stale.

    If the cached file is missing or older than *max_age_days*, a fresh copy
    is downloaded.  If the download fails or the file cannot be parsed, the
    bundled table is returned so this function never raises on network
    issues.

    Args:
        filepath: Path to the cached file. When ``None`` (the default),
            uses ``<cache_dir>/igrf/igrf13coeffs.txt``.
        max_age_days: Maximum acceptable age of the cached file in days.
            Defaults to 30.

    Returns:
        CoefficientTable loaded from the cached (or freshly downloaded)
        file, or the bundled table as a fallback.
    """
    if filepath is None:
        filepath = get_igrf_cache_dir() / _IGRF_FILENAME
    else:
        filepath = Path(filepath)

    max_age_seconds = max_age_days * 86400.0

    if is_file_stale(filepath, max_age_seconds):
        try:
            download_igrf_file(filepath)
        except Exception:
            logger.warning(
                "Failed to download IGRF coefficients; falling back to bundled data.",
                exc_info=True,
            )
            return load_default_coefficients()

    try:
        return load_coefficients_from_file(filepath, model_name="IGRF-13")
    except Exception:
        logger.warning(
            "Failed to parse cached coefficient file %s; falling back to bundled data.",
            filepath,
            exc_info=True,
        )
        return load_default_coefficients()
