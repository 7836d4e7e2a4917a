"""Fetch the IGRF-13 coefficient table published by IAGA Working Group V-MOD.

The server returns ``igrf13coeffs.txt`` as plain text: ``#`` comment lines,
a ``c/s`` row naming each column as a main-field (``IGRF``/``DGRF``) or
secular-variation (``SV``) set, the ``g/h n m 1900.0 ... 2020.0 2020-25``
header and one ``g``/``h`` row per Gauss coefficient (195 rows, degree 1
to 13).  A response that does not parse as that table is rejected before
anything is written, so a good cached copy is never replaced by an error
page.

Network errors are propagated to the caller so that
:func:`load_cached_coefficients` can fall back to the bundled table.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from geomagjax.coefficients._parsers import parse_igrf_coefficients

logger = logging.getLogger(__name__)

IGRF_COEFFICIENTS_URL: str = "https://www.ngdc.noaa.gov/IAGA/vmod/coeffs/igrf13coeffs.txt"
"""IAGA distribution URL of the IGRF-13 coefficient table."""

_IGRF_FILENAME: str = "igrf13coeffs.txt"
"""Name of the cached table, matching the IAGA file name."""

_DEFAULT_TIMEOUT: float = 60.0
"""Default HTTP timeout in seconds."""


def download_igrf_file(
    filepath: str | Path,
    *,
    url: str = IGRF_COEFFICIENTS_URL,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Path:
    """Download the IAGA IGRF coefficient table to *filepath*.

    The response body must be an IAGA column-format table (a ``g/h n m``
    header followed by ``g``/``h`` coefficient rows); it is parsed with
    :func:`parse_igrf_coefficients` and written unchanged only when that
    succeeds.  Parent directories are created as needed.

    Args:
        filepath: Destination of the cached table.
        url: URL to fetch. Defaults to :data:`IGRF_COEFFICIENTS_URL`.
        timeout: HTTP timeout in seconds. Defaults to 60.

    Returns:
        Resolved :class:`~pathlib.Path` to the written file.

    Raises:
        httpx.HTTPStatusError: If the server returns a non-2xx status.
        httpx.TransportError: On network-level failures (DNS, timeout, etc.).
        ValueError: If the body is not an IAGA coefficient table.
    """
    filepath = Path(filepath)

    logger.info("Downloading IGRF coefficients from %s", url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()

    text = response.text
    try:
        parsed = parse_igrf_coefficients(text)
    except ValueError as err:
        raise ValueError(f"Response from {url} is not an IGRF coefficient table: {err}") from err

    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(text, encoding="utf-8")
    logger.info(
        "IGRF coefficients (%d epochs, degree %d) written to %s",
        len(parsed["epochs"]),
        parsed["max_degree"],
        filepath,
    )
    return filepath.resolve()
