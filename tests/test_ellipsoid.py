"""Tests for the ellipsoidal reference-body kernels.

Covers the reference table, cardinal points, round-trip validation of the
single-pass Bowring inverse, sphere/ellipsoid divergence, degenerate
inputs, and JAX compatibility (jit, vmap).
"""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from terrajax.bodies import Ellipsoid, Sphere
from terrajax.config import get_roundtrip_tolerance
from terrajax.coordinates import (
    ellipsoid_ecef_to_geodetic,
    ellipsoid_geodetic_to_ecef,
    sphere_geodetic_to_ecef,
)

from reference_data import REF_ELLIPSOID_ECEF, REF_SPHERE_ECEF, ref_geodetic_rad

_POS_TOL = 1e-5  # metres
_ANGLE_TOL = 1e-9  # radians

A = 6378137.0
B = 6356752.314245
ELLIPSOID = Ellipsoid(A, B)


class TestEllipsoidGeodeticToECEF:
    def test_origin_equator(self):
        """lon=0, lat=0, alt=0 → [a, 0, 0]."""
        x, y, z = ellipsoid_geodetic_to_ecef(0.0, 0.0, 0.0, ELLIPSOID)

        assert jnp.abs(x - A) < _POS_TOL
        assert jnp.abs(y) < _POS_TOL
        assert jnp.abs(z) < _POS_TOL

    def test_north_pole(self):
        """lat=90° → [0, 0, b] (semi-minor axis)."""
        x, y, z = ellipsoid_geodetic_to_ecef(0.0, jnp.pi / 2, 0.0, ELLIPSOID)

        assert jnp.abs(x) < _POS_TOL
        assert jnp.abs(y) < _POS_TOL
        assert jnp.abs(z - B) < _POS_TOL

    def test_south_pole_with_altitude(self):
        """lat=-90°, alt=h → [0, 0, -(b + h)]."""
        x, y, z = ellipsoid_geodetic_to_ecef(1.0, -jnp.pi / 2, 1000.0, ELLIPSOID)

        assert jnp.abs(z + (B + 1000.0)) < _POS_TOL

    @pytest.mark.parametrize(
        "geod, expected", list(zip(ref_geodetic_rad(), REF_ELLIPSOID_ECEF))
    )
    def test_reference_table(self, geod, expected):
        """Matches the tabulated ECEF coordinates to 1e-5 m."""
        actual = np.array(ellipsoid_geodetic_to_ecef(*geod, ELLIPSOID))

        np.testing.assert_allclose(actual, expected, atol=_POS_TOL, rtol=0.0)

    def test_diverges_from_sphere(self):
        """Identical geodetic input maps to different points on the two models."""
        geod = ref_geodetic_rad()[1]
        on_ellipsoid = np.array(ellipsoid_geodetic_to_ecef(*geod, ELLIPSOID))
        on_sphere = np.array(sphere_geodetic_to_ecef(*geod, Sphere(A)))

        np.testing.assert_allclose(on_ellipsoid, REF_ELLIPSOID_ECEF[1], atol=_POS_TOL)
        np.testing.assert_allclose(on_sphere, REF_SPHERE_ECEF[1], atol=_POS_TOL)
        assert np.linalg.norm(on_ellipsoid - on_sphere) > 1e3

    def test_zero_flattening_matches_sphere(self):
        """An ellipsoid with equal axes reproduces the sphere."""
        geod = (0.7, -0.3, 250.0)
        on_ellipsoid = np.array(ellipsoid_geodetic_to_ecef(*geod, Ellipsoid(A, A)))
        on_sphere = np.array(sphere_geodetic_to_ecef(*geod, Sphere(A)))

        np.testing.assert_allclose(on_ellipsoid, on_sphere, atol=_POS_TOL, rtol=0.0)


class TestEllipsoidECEFToGeodetic:
    def test_origin_equator(self):
        """[a, 0, 0] → lon=0, lat=0, alt=0."""
        lon, lat, alt = ellipsoid_ecef_to_geodetic(A, 0.0, 0.0, ELLIPSOID)

        assert jnp.abs(lon) < _ANGLE_TOL
        assert jnp.abs(lat) < _ANGLE_TOL
        assert jnp.abs(alt) < _POS_TOL

    def test_polar_axis_latitude(self):
        """[0, 0, b] → lat=90°, finite longitude."""
        lon, lat, _ = ellipsoid_ecef_to_geodetic(0.0, 0.0, B, ELLIPSOID)

        assert jnp.abs(lat - jnp.pi / 2) < _ANGLE_TOL
        assert jnp.isfinite(lon)

    def test_centre(self):
        """The body centre maps to lat=180° and sits one major axis below the surface."""
        lon, lat, alt = ellipsoid_ecef_to_geodetic(0.0, 0.0, 0.0, ELLIPSOID)

        assert jnp.isfinite(lon)
        assert jnp.abs(lat - jnp.pi) < _ANGLE_TOL
        assert jnp.abs(alt + A) < _POS_TOL

    @pytest.mark.parametrize(
        "ecef, geod", list(zip(REF_ELLIPSOID_ECEF, ref_geodetic_rad()))
    )
    def test_reference_table(self, ecef, geod):
        """Recovers the tabulated geodetic coordinates."""
        lon, lat, alt = ellipsoid_ecef_to_geodetic(*ecef, ELLIPSOID)

        assert jnp.abs(lon - geod[0]) < _ANGLE_TOL
        assert jnp.abs(lat - geod[1]) < _ANGLE_TOL
        assert jnp.abs(alt - geod[2]) < _POS_TOL


class TestEllipsoidRoundTrip:
    def test_reference_points(self):
        """Forward → inverse ≈ identity for the reference table."""
        ang_tol, len_tol = get_roundtrip_tolerance()
        for geod in ref_geodetic_rad():
            back = ellipsoid_ecef_to_geodetic(
                *ellipsoid_geodetic_to_ecef(*geod, ELLIPSOID), ELLIPSOID
            )

            assert jnp.abs(back[0] - geod[0]) < ang_tol
            assert jnp.abs(back[1] - geod[1]) < ang_tol
            assert jnp.abs(back[2] - geod[2]) < len_tol

    def test_roundtrip_pole(self):
        """Pole roundtrip: latitude and altitude recover, longitude is undefined."""
        back = ellipsoid_ecef_to_geodetic(
            *ellipsoid_geodetic_to_ecef(0.0, jnp.pi / 2, 0.0, ELLIPSOID), ELLIPSOID
        )

        assert jnp.abs(back[1] - jnp.pi / 2) < _ANGLE_TOL
        assert jnp.abs(back[2]) < 1e-3

    @pytest.mark.parametrize("lat_deg", [-85.0, -60.0, -30.0, 0.0, 30.0, 60.0, 85.0])
    def test_latitude_sweep(self, lat_deg):
        """Round trip holds across latitudes at low altitude."""
        geod = (0.3, float(jnp.deg2rad(lat_deg)), 800.0)
        back = ellipsoid_ecef_to_geodetic(
            *ellipsoid_geodetic_to_ecef(*geod, ELLIPSOID), ELLIPSOID
        )

        assert jnp.abs(back[1] - geod[1]) < _ANGLE_TOL
        assert jnp.abs(back[2] - geod[2]) < _POS_TOL

    def test_single_pass_degrades_with_altitude(self):
        """The inverse is not iterated: error grows with altitude but stays small."""
        geod = (0.3, 0.8, 500e3)
        back = ellipsoid_ecef_to_geodetic(
            *ellipsoid_geodetic_to_ecef(*geod, ELLIPSOID), ELLIPSOID
        )

        assert jnp.abs(back[1] - geod[1]) < 1e-6
        assert jnp.abs(back[2] - geod[2]) < 1.0


class TestEllipsoidShape:
    def test_wgs84_eccentricity(self):
        """Eccentricity derived from the axes matches the WGS84 value."""
        assert ELLIPSOID.eccentricity_squared == pytest.approx(6.69437999014e-3, rel=1e-9)
        assert ELLIPSOID.second_eccentricity_squared == pytest.approx(
            6.73949674228e-3, rel=1e-9
        )


class TestEllipsoidDegenerateInputs:
    def test_zero_axes_yield_nan(self):
        """Zero axes divide zero by zero; the result is NaN, not an exception."""
        x, y, z = ellipsoid_geodetic_to_ecef(0.0, 0.0, 0.0, Ellipsoid(0.0, 0.0))

        assert jnp.isnan(x)

    def test_prolate_axes_accepted(self):
        """major < minor is not rejected."""
        prolate = Ellipsoid(B, A)
        x, y, z = ellipsoid_geodetic_to_ecef(0.0, 0.0, 0.0, prolate)

        assert jnp.abs(x - B) < _POS_TOL


class TestEllipsoidJAXCompatibility:
    def test_jit_forward(self):
        """ellipsoid_geodetic_to_ecef is JIT-compilable with the body as argument."""
        eager = jnp.array(ellipsoid_geodetic_to_ecef(0.5, 0.3, 100e3, ELLIPSOID))
        jitted = jnp.array(
            jax.jit(ellipsoid_geodetic_to_ecef)(0.5, 0.3, 100e3, ELLIPSOID)
        )

        assert jnp.allclose(eager, jitted, atol=1e-6)

    def test_jit_inverse(self):
        """ellipsoid_ecef_to_geodetic is JIT-compilable."""
        eager = jnp.array(ellipsoid_ecef_to_geodetic(A, 1e6, 0.5e6, ELLIPSOID))
        jitted = jnp.array(jax.jit(ellipsoid_ecef_to_geodetic)(A, 1e6, 0.5e6, ELLIPSOID))

        assert jnp.allclose(eager, jitted, atol=1e-9)

    def test_vmap_over_bodies(self):
        """vmap across a batch of ellipsoids with the point held fixed."""
        bodies = Ellipsoid(jnp.array([A, A, 1737400.0]), jnp.array([B, A, 1737400.0]))
        xs, _, _ = jax.vmap(ellipsoid_geodetic_to_ecef, in_axes=(None, None, None, 0))(
            0.0, 0.0, 0.0, bodies
        )

        assert jnp.allclose(xs, jnp.array([A, A, 1737400.0]), atol=_POS_TOL)

    def test_grad_forward(self):
        """Forward transform is differentiable: d|r|/dh = 1 on the equator."""
        def radius(alt):
            x, y, z = ellipsoid_geodetic_to_ecef(0.0, 0.0, alt, ELLIPSOID)
            return jnp.sqrt(x * x + y * y + z * z)

        assert jnp.abs(jax.grad(radius)(100.0) - 1.0) < 1e-9
