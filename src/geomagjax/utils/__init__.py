"""Shared utility functions for geomagjax.

Provides angle conversion helpers and filesystem cache management.
"""

from geomagjax.utils._angle import from_radians, to_radians
from geomagjax.utils.caching import (
    file_age_seconds,
    get_cache_dir,
    get_igrf_cache_dir,
    is_file_stale,
)

__all__ = [
    "file_age_seconds",
    "from_radians",
    "get_cache_dir",
    "get_igrf_cache_dir",
    "is_file_stale",
    "to_radians",
]
