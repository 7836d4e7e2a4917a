"""Epoch selection and time blending of coefficient sets.

Given a decimal-year date, picks the two rows of a
:class:`~geomagjax.coefficients.CoefficientTable` whose weighted sum gives
the coefficients (or their rate of change) at that date:

- Between tabulated epochs the neighbouring sets are interpolated
  linearly.
- From the last epoch onward the last set is extrapolated with the
  secular variation.

Selection runs on the host with concrete floats; only the chosen rows
reach the JAX kernels.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from geomagjax.coefficients import CoefficientTable, coefficient_count
from geomagjax.errors import OutOfRangeError
from geomagjax.igrf._types import EpochSelection, SynthesisMode

logger = logging.getLogger(__name__)


def check_date(table: CoefficientTable, date: float) -> float:
    """Validate *date* against the table's window.

    Args:
        table: Coefficient table.
        date: Decimal year.

    Returns:
        *date* as a Python float.

    Raises:
        OutOfRangeError: If *date* is not finite, earlier than the first
            epoch, or at or beyond ``last_epoch + validity_years``.
    """
    date = float(date)
    first, end = table.date_range
    if not math.isfinite(date) or date < first or date >= end:
        raise OutOfRangeError(
            f"Date {date} is outside the {table.model_name} window "
            f"[{first}, {end}); this model is not defined there."
        )
    return date


def is_extrapolation_degraded(table: CoefficientTable, date: float) -> bool:
    """Whether *date* lies beyond the reliable extrapolation horizon.

    Args:
        table: Coefficient table.
        date: Decimal year.

    Returns:
        ``True`` when ``date > last_epoch + reliability_years``.
    """
    return float(date) > table.last_epoch + table.reliability_years


def warn_if_degraded(table: CoefficientTable, date: float) -> bool:
    """Log the accuracy advisory for *date* when it applies.

    Returns:
        ``True`` if the advisory was emitted.
    """
    if not is_extrapolation_degraded(table, date):
        return False
    horizon = table.last_epoch + table.reliability_years
    logger.warning(
        "Date %.4f is beyond %.1f: %s values are extrapolated from the %.1f "
        "secular variation and will be of reduced accuracy.",
        date,
        horizon,
        table.model_name,
        table.last_epoch,
    )
    return True


def select_epoch(
    table: CoefficientTable,
    date: float,
    mode: SynthesisMode = SynthesisMode.VALUE,
) -> EpochSelection:
    """Choose coefficient rows and weights for *date*.

    Value mode blends ``(1 - t, t)`` between epochs ``e_i <= date < e_{i+1}``
    with ``t = (date - e_i) / (e_{i+1} - e_i)``, and ``(1, date - last)``
    between the last set and the secular variation.  Rate mode returns
    the time derivative of the same blend: ``(-1/step, 1/step)`` between
    epochs and ``(0, 1)`` after the last epoch.

    Args:
        table: Coefficient table.
        date: Decimal year.
        mode: Value or rate.

    Returns:
        EpochSelection for the date.

    Raises:
        OutOfRangeError: If *date* is outside the table window.

    Examples:
        ```python
        from geomagjax.coefficients import load_default_coefficients
        from geomagjax.igrf._epoch import select_epoch
        sel = select_epoch(load_default_coefficients(), 1967.5)
        sel.weight_low, sel.weight_high  # (0.5, 0.5)
        ```
    """
    date = check_date(table, date)
    last = table.n_epochs - 1

    if date >= table.last_epoch:
        low, high = last, table.n_epochs
        if mode is SynthesisMode.VALUE:
            weights = (1.0, date - table.last_epoch)
        else:
            weights = (0.0, 1.0)
    else:
        low = int(np.searchsorted(table.epochs, date, side="right")) - 1
        high = low + 1
        step = float(table.epochs[high] - table.epochs[low])
        if mode is SynthesisMode.VALUE:
            t = (date - float(table.epochs[low])) / step
            weights = (1.0 - t, t)
        else:
            weights = (-1.0 / step, 1.0 / step)

    max_degree = max(table.row_degree(low), table.row_degree(high))
    return EpochSelection(
        index_low=low,
        index_high=high,
        weight_low=weights[0],
        weight_high=weights[1],
        max_degree=max_degree,
        n_coefficients=coefficient_count(max_degree),
    )
