"""Parser for IAGA spherical harmonic coefficient files.

Supports the column layout in which the IGRF coefficients are distributed
(e.g. ``igrf13coeffs.txt``)::

    # comment lines
    c/s deg ord IGRF IGRF ... DGRF IGRF SV
    g/h n m 1900.0 1905.0 ... 2020.0 2020-25
    g 1 0 -31543 -31464 ... -29404.8 5.7
    g 1 1 -2298 -2298 ... -1450.9 7.4
    h 1 1 5922 5909 ... 4652.5 -25.9
    ...

Each data row carries one coefficient for every epoch column followed by
its secular variation.  The final header column names the secular
variation interval (``2020-25``), from which the reliable extrapolation
horizon is derived.
"""

from __future__ import annotations

import math
import re

import numpy as np

from geomagjax.coefficients._types import coefficient_count, coefficient_index

_SV_COLUMN = re.compile(r"^(\d{4})(?:\.\d*)?-(\d{2,4})$")


def _parse_sv_column(token: str, last_epoch: float) -> float:
    """Return the reliability horizon in years encoded by an SV column name.

    Args:
        token: Final header token, e.g. ``"2020-25"``.
        last_epoch: Final tabulated epoch.

    Returns:
        Years after *last_epoch* covered by the secular variation.

    Raises:
        ValueError: If *token* is not an SV interval.
    """
    match = _SV_COLUMN.match(token)
    if match is None:
        raise ValueError(
            f"Last column '{token}' is not a secular-variation interval "
            f"(expected e.g. '2020-25')."
        )
    start = int(match.group(1))
    end_text = match.group(2)
    if len(end_text) == 4:
        end = int(end_text)
    else:
        end = (start // 100) * 100 + int(end_text)
        if end <= start:
            end += 100
    if start != int(last_epoch):
        raise ValueError(
            f"Secular variation interval '{token}' does not start at the last "
            f"epoch {last_epoch}."
        )
    return float(end - start)


def parse_igrf_coefficients(text: str) -> dict:
    """Parse the text of an IAGA coefficient file.

    Args:
        text: Full file contents.

    Returns:
        Dictionary with keys ``epochs`` (list of floats), ``max_degree``
        (int), ``data`` (``np.ndarray`` of shape
        ``(n_epochs + 1, N(N + 2))``, final row secular variation) and
        ``reliability_years`` (float).

    Raises:
        ValueError: If the header is missing, epochs are not strictly
            increasing, a row has the wrong width, a coefficient is
            duplicated or missing, or a value is not a finite number.
    """
    epochs: list[float] | None = None
    reliability_years = math.nan
    rows: list[tuple[str, int, int, list[float], int]] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        tokens = line.split()
        head = tokens[0].lower()

        if head == "c/s":
            continue

        if head == "g/h":
            if len(tokens) < 5:
                raise ValueError(
                    f"Line {lineno}: header needs at least one epoch and an SV column."
                )
            try:
                epochs = [float(tok) for tok in tokens[3:-1]]
            except ValueError as err:
                raise ValueError(f"Line {lineno}: invalid epoch in header.") from err
            if any(b <= a for a, b in zip(epochs, epochs[1:])):
                raise ValueError(f"Line {lineno}: epochs are not strictly increasing.")
            reliability_years = _parse_sv_column(tokens[-1], epochs[-1])
            continue

        if head not in ("g", "h"):
            raise ValueError(f"Line {lineno}: unrecognised row type '{tokens[0]}'.")
        if epochs is None:
            raise ValueError(f"Line {lineno}: coefficient row before 'g/h' header.")
        expected = 3 + len(epochs) + 1
        if len(tokens) != expected:
            raise ValueError(
                f"Line {lineno}: expected {expected} columns, found {len(tokens)}."
            )
        try:
            n = int(tokens[1])
            m = int(tokens[2])
            values = [float(tok) for tok in tokens[3:]]
        except ValueError as err:
            raise ValueError(f"Line {lineno}: malformed coefficient row.") from err
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"Line {lineno}: non-finite coefficient value.")
        rows.append((head, n, m, values, lineno))

    if epochs is None:
        raise ValueError("No 'g/h n m <epochs>' header found.")
    if not rows:
        raise ValueError("No coefficient rows found.")

    max_degree = max(n for _, n, _, _, _ in rows)
    n_coef = coefficient_count(max_degree)
    data = np.zeros((len(epochs) + 1, n_coef), dtype=np.float64)
    seen = np.zeros(n_coef, dtype=bool)

    for kind, n, m, values, lineno in rows:
        try:
            idx = coefficient_index(n, m, kind)
        except ValueError as err:
            raise ValueError(f"Line {lineno}: {err}") from err
        if seen[idx]:
            raise ValueError(f"Line {lineno}: duplicate coefficient {kind}({n}, {m}).")
        seen[idx] = True
        data[:, idx] = values

    if not seen.all():
        raise ValueError(
            f"Coefficient file is incomplete: {int((~seen).sum())} of {n_coef} "
            f"coefficients up to degree {max_degree} are missing."
        )

    return {
        "epochs": epochs,
        "max_degree": max_degree,
        "data": data,
        "reliability_years": reliability_years,
    }
