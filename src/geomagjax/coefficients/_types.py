"""Type definitions for spherical harmonic coefficient tables.

Provides the containers used by the field synthesis:

- :class:`CoefficientSet`: one epoch's Gauss coefficients.
- :class:`CoefficientTable`: every epoch of a model plus its secular
  variation, stored as a single immutable matrix.

Coefficients are laid out in the canonical order used by the IGRF
distribution files: for each degree ``n = 1..N``, ``g(n, 0)`` followed by
``g(n, m), h(n, m)`` pairs for ``m = 1..n``.  A table of degree ``N`` therefore
carries ``N(N + 2)`` coefficients per epoch.

Tables hold ``numpy`` arrays because they are static data: they are sliced
on the host by the epoch selector and only the selected rows are moved to
JAX arrays for synthesis.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np


def coefficient_count(max_degree: int) -> int:
    """Number of Gauss coefficients of a degree-``max_degree`` expansion.

    Args:
        max_degree: Maximum spherical harmonic degree ``N``.

    Returns:
        ``N * (N + 2)``.

    Examples:
        ```python
        coefficient_count(13)  # 195
        coefficient_count(10)  # 120
        ```
    """
    return max_degree * (max_degree + 2)


def legendre_count(max_degree: int) -> int:
    """Number of ``(n, m)`` Legendre terms for ``0 <= m <= n <= N``.

    Args:
        max_degree: Maximum spherical harmonic degree ``N``.

    Returns:
        ``(N + 1) * (N + 2) / 2``.
    """
    return (max_degree + 1) * (max_degree + 2) // 2


def degree_from_count(n_coefficients: int) -> int:
    """Invert :func:`coefficient_count`.

    Args:
        n_coefficients: Number of coefficients in one set.

    Returns:
        The degree ``N`` with ``N * (N + 2) == n_coefficients``.

    Raises:
        ValueError: If no integer degree matches.
    """
    degree = math.isqrt(n_coefficients + 1) - 1
    if degree < 1 or coefficient_count(degree) != n_coefficients:
        raise ValueError(
            f"{n_coefficients} coefficients do not form a complete expansion; "
            f"expected N(N+2) for some degree N >= 1."
        )
    return degree


def coefficient_index(n: int, m: int, kind: str = "g") -> int:
    """Flat index of ``g(n, m)`` or ``h(n, m)`` in canonical order.

    Args:
        n: Degree, ``n >= 1``.
        m: Order, ``0 <= m <= n``.
        kind: ``"g"`` or ``"h"``.  ``h(n, 0)`` does not exist.

    Returns:
        Zero-based position in a coefficient set.

    Raises:
        ValueError: If ``(n, m, kind)`` does not name a coefficient.
    """
    if n < 1 or m < 0 or m > n:
        raise ValueError(f"Invalid degree/order ({n}, {m}).")
    if kind not in ("g", "h"):
        raise ValueError(f"Coefficient kind must be 'g' or 'h', got '{kind}'.")
    if kind == "h" and m == 0:
        raise ValueError(f"h({n}, 0) is not a coefficient.")
    base = coefficient_count(n - 1)
    if m == 0:
        return base
    return base + 2 * m - 1 + (1 if kind == "h" else 0)


def effective_degree(coefficients: np.ndarray) -> int:
    """Highest degree carrying a non-zero coefficient.

    Args:
        coefficients: One coefficient set in canonical order.

    Returns:
        The effective degree, or 0 when every coefficient is zero.
    """
    nonzero = np.flatnonzero(np.asarray(coefficients))
    if nonzero.size == 0:
        return 0
    last = int(nonzero[-1])
    # the degree owning flat index ``last`` is the smallest n with n(n+2) > last
    return math.isqrt(last + 1)


class CoefficientSet(NamedTuple):
    """Gauss coefficients of one model epoch.

    Attributes:
        epoch: Decimal year of the set.  ``nan`` for a secular-variation set.
        max_degree: Highest degree with non-zero coefficients.
        coefficients: Coefficients [nT] (or [nT/yr] for secular variation),
            shape ``(n_coefficients,)``.
    """

    epoch: float
    max_degree: int
    coefficients: np.ndarray


class CoefficientTable(NamedTuple):
    """All epochs of a geomagnetic reference model.

    Attributes:
        model_name: Human-readable model identifier (e.g. ``"IGRF-13"``).
        epochs: Strictly increasing epoch years, shape ``(n_epochs,)``.
        max_degrees: Effective degree of each epoch set, shape
            ``(n_epochs,)``.
        data: Coefficient matrix, shape ``(n_epochs + 1, N(N + 2))``.  Row
            ``i < n_epochs`` holds epoch ``epochs[i]``; the final row holds
            the secular variation [nT/yr] valid after the last epoch.
        max_degree: Table degree ``N``; also the degree of the secular
            variation set.
        reference_radius: Reference radius of the expansion [km].
        validity_years: Length of the extrapolation window after the last
            epoch.  Dates at or beyond ``last_epoch + validity_years`` are
            rejected.
        reliability_years: Length of the window after the last epoch within
            which linear extrapolation is considered reliable.
    """

    model_name: str
    epochs: np.ndarray
    max_degrees: np.ndarray
    data: np.ndarray
    max_degree: int
    reference_radius: float
    validity_years: float
    reliability_years: float

    @property
    def n_epochs(self) -> int:
        """Number of tabulated epochs (excluding secular variation)."""
        return int(self.epochs.shape[0])

    @property
    def first_epoch(self) -> float:
        return float(self.epochs[0])

    @property
    def last_epoch(self) -> float:
        return float(self.epochs[-1])

    @property
    def date_range(self) -> tuple[float, float]:
        """Accepted dates as ``(first, end)`` with ``end`` exclusive."""
        return self.first_epoch, self.last_epoch + self.validity_years

    @property
    def secular_variation(self) -> CoefficientSet:
        return CoefficientSet(
            epoch=math.nan,
            max_degree=self.max_degree,
            coefficients=self.data[self.n_epochs],
        )

    def coefficient_set(self, index: int) -> CoefficientSet:
        """Return the coefficient set of epoch *index*.

        Args:
            index: Epoch index, ``0 <= index < n_epochs``.

        Returns:
            The epoch's CoefficientSet.

        Raises:
            IndexError: If *index* is out of range.
        """
        if not 0 <= index < self.n_epochs:
            raise IndexError(
                f"Epoch index {index} out of range for {self.n_epochs} epochs."
            )
        return CoefficientSet(
            epoch=float(self.epochs[index]),
            max_degree=int(self.max_degrees[index]),
            coefficients=self.data[index],
        )

    def row_degree(self, row: int) -> int:
        """Effective degree of a row of :attr:`data`, secular variation included."""
        if row == self.n_epochs:
            return self.max_degree
        return int(self.max_degrees[row])
