"""Exception types raised by geomagjax.

All errors derive from :class:`ValueError` so that callers treating bad
inputs generically keep working; the subclasses let callers tell a date
outside the model window apart from a malformed coordinate.
"""

from __future__ import annotations


class GeomagError(ValueError):
    """Base class for geomagjax input errors."""


class OutOfRangeError(GeomagError):
    """Raised when a date lies outside the coefficient table's window."""


class InvalidInputError(GeomagError):
    """Raised for out-of-domain coordinates, radii or synthesis options."""
