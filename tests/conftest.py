import jax.numpy as jnp
import pytest

from geomagjax.config import set_dtype, set_show_warnings


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision and the default advisory policy before every test.

    test_config.py changes both module-wide settings; this keeps every other
    test independent of execution order (including under pytest-xdist).
    """
    set_dtype(jnp.float64)
    set_show_warnings(True)
