"""Tests for geomagjax.coordinates and geomagjax.rotations.

Covers cardinal points, round trips through ECEF, the use_degrees flag,
the geodetic-to-geocentric shortcut, and JAX compatibility (jit, vmap).
"""

import math

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from geomagjax.constants import WGS84_a, WGS84_f
from geomagjax.coordinates import (
    ellipsoid_normal_intercept,
    position_ecef_to_geocentric,
    position_ecef_to_geodetic,
    position_geocentric_to_ecef,
    position_geodetic_to_ecef,
    position_geodetic_to_geocentric,
)
from geomagjax.rotations import Ry, Rz

_POS_TOL = 1e-6  # metres
_ANGLE_TOL = 1e-12  # radians
_WGS84_b = WGS84_a * (1.0 - WGS84_f)


# ──────────────────────────────────────────────
# Geocentric transformations
# ──────────────────────────────────────────────


class TestGeocentric:
    def test_origin_equator(self):
        x_ecef = position_geocentric_to_ecef(jnp.array([0.0, 0.0, WGS84_a]))
        np.testing.assert_allclose(x_ecef, [WGS84_a, 0.0, 0.0], atol=_POS_TOL)

    def test_90deg_lon(self):
        x_ecef = position_geocentric_to_ecef(jnp.array([90.0, 0.0, 7.0e6]), use_degrees=True)
        np.testing.assert_allclose(x_ecef, [0.0, 7.0e6, 0.0], atol=_POS_TOL)

    def test_north_pole(self):
        x_ecef = position_geocentric_to_ecef(jnp.array([0.0, 90.0, 7.0e6]), use_degrees=True)
        np.testing.assert_allclose(x_ecef, [0.0, 0.0, 7.0e6], atol=_POS_TOL)

    def test_roundtrip(self):
        x_geoc = jnp.array([-2.1, 0.7, 6.9e6])
        back = position_ecef_to_geocentric(position_geocentric_to_ecef(x_geoc))
        np.testing.assert_allclose(back[:2], x_geoc[:2], atol=_ANGLE_TOL)
        assert float(back[2]) == pytest.approx(6.9e6, abs=_POS_TOL)

    def test_degrees_output(self):
        geoc = position_ecef_to_geocentric(jnp.array([0.0, -7.0e6, 0.0]), use_degrees=True)
        np.testing.assert_allclose(geoc, [-90.0, 0.0, 7.0e6], atol=1e-9)


# ──────────────────────────────────────────────
# Geodetic transformations
# ──────────────────────────────────────────────


class TestGeodetic:
    def test_equator(self):
        x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        np.testing.assert_allclose(x_ecef, [WGS84_a, 0.0, 0.0], atol=_POS_TOL)

    def test_north_pole_is_semi_minor_axis(self):
        x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 90.0, 0.0]), use_degrees=True)
        assert float(x_ecef[2]) == pytest.approx(_WGS84_b, abs=1e-3)

    def test_altitude_along_normal(self):
        base = position_geodetic_to_ecef(jnp.array([0.3, 0.8, 0.0]))
        high = position_geodetic_to_ecef(jnp.array([0.3, 0.8, 1000.0]))
        assert float(jnp.linalg.norm(high - base)) == pytest.approx(1000.0, abs=1e-6)

    @pytest.mark.parametrize(
        "lon, lat, alt",
        [(0.0, 0.0, 0.0), (45.0, 30.0, 400e3), (-120.0, -60.0, 10.0), (170.0, 89.9, -50.0)],
    )
    def test_roundtrip(self, lon, lat, alt):
        x_geod = jnp.array([lon, lat, alt])
        back = position_ecef_to_geodetic(
            position_geodetic_to_ecef(x_geod, use_degrees=True), use_degrees=True
        )
        np.testing.assert_allclose(back[:2], x_geod[:2], atol=1e-9)
        assert float(back[2]) == pytest.approx(alt, abs=1e-5)

    def test_normal_intercept_on_axis(self):
        e2 = WGS84_f * (2.0 - WGS84_f)
        zdz, n_radius = ellipsoid_normal_intercept(0.0, _WGS84_b, WGS84_a, e2)
        assert float(n_radius) == pytest.approx(WGS84_a / math.sqrt(1.0 - e2), rel=1e-12)
        assert float(zdz) > _WGS84_b

    def test_geodetic_to_geocentric(self):
        geoc = position_geodetic_to_geocentric(jnp.array([10.0, 45.0, 0.0]), use_degrees=True)
        assert float(geoc[0]) == pytest.approx(10.0, abs=1e-12)
        # geocentric latitude is smaller away from the equator and poles
        assert 44.7 < float(geoc[1]) < 45.0
        assert _WGS84_b < float(geoc[2]) < WGS84_a

    def test_geodetic_to_geocentric_equator(self):
        geoc = position_geodetic_to_geocentric(jnp.array([0.0, 0.0, 500.0]))
        np.testing.assert_allclose(geoc, [0.0, 0.0, WGS84_a + 500.0], atol=_POS_TOL)


# ──────────────────────────────────────────────
# Rotations
# ──────────────────────────────────────────────


class TestRotations:
    def test_rz_90deg(self):
        v = Rz(90.0, use_degrees=True) @ jnp.array([1.0, 0.0, 0.0])
        np.testing.assert_allclose(v, [0.0, -1.0, 0.0], atol=1e-15)

    def test_ry_90deg(self):
        v = Ry(90.0, use_degrees=True) @ jnp.array([1.0, 0.0, 0.0])
        np.testing.assert_allclose(v, [0.0, 0.0, 1.0], atol=1e-15)

    @pytest.mark.parametrize("rot", [Ry, Rz])
    def test_orthonormal(self, rot):
        m = rot(0.7)
        np.testing.assert_allclose(m @ m.T, jnp.eye(3), atol=1e-15)
        assert float(jnp.linalg.det(m)) == pytest.approx(1.0, abs=1e-15)

    @pytest.mark.parametrize("rot", [Ry, Rz])
    def test_inverse_is_negative_angle(self, rot):
        np.testing.assert_allclose(rot(-0.4), rot(0.4).T, atol=1e-15)


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestJAX:
    def test_jit_geodetic(self):
        x_geod = jnp.array([0.5, -0.3, 1234.0])
        np.testing.assert_allclose(
            jax.jit(position_ecef_to_geodetic)(position_geodetic_to_ecef(x_geod)),
            position_ecef_to_geodetic(position_geodetic_to_ecef(x_geod)),
            atol=1e-9,
        )

    def test_vmap_geodetic_to_geocentric(self):
        batch = jnp.array([[0.0, 0.0, 0.0], [1.0, 0.5, 100.0], [-1.0, -0.5, 200.0]])
        out = jax.vmap(position_geodetic_to_geocentric)(batch)
        assert out.shape == (3, 3)
        np.testing.assert_allclose(out[1], position_geodetic_to_geocentric(batch[1]), atol=1e-9)
