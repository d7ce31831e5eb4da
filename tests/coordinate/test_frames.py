"""Tests for frames and kinematic transforms."""

import numpy as np
import pytest

from pyodm.autodiff import Gradient
from pyodm.autodiff import vector as vec
from pyodm.coordinate.dcm import eci2ecef_dcm, earth_rotation_angle
from pyodm.coordinate.frames import ECLIPTIC_J2000, EME2000, GCRF, ITRF, Frame, Transform
from pyodm.core.constants import AS2R, OBLIQUITY_J2000, OMGE


class TestTransform:

    def test_identity(self):
        t = Transform.identity()
        assert t.is_identity()
        assert not t.has_rate()
        np.testing.assert_array_equal(t.transform_vector([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])

    def test_inverse_composition_is_identity(self):
        t = GCRF.get_transform_to(ITRF, 1234.5)
        back = t.compose(t.inverse())
        np.testing.assert_allclose(np.asarray(back.rotation, dtype=float), np.eye(3), atol=1e-15)
        np.testing.assert_allclose(vec.values(back.rotation_rate), np.zeros(3), atol=1e-20)

    def test_pv_round_trip(self):
        t = GCRF.get_transform_to(ITRF, 500.0)
        p, v, a = [7.0e6, 1.0e5, -2.0e5], [10.0, 7.5e3, 1.0], [-8.0, 0.0, 0.1]
        p1, v1, a1 = t.transform_pv(p, v, a)
        p2, v2, a2 = t.inverse().transform_pv(p1, v1, a1)
        np.testing.assert_allclose(p2, p, rtol=1e-14)
        np.testing.assert_allclose(v2, v, rtol=1e-12, atol=1e-9)
        np.testing.assert_allclose(a2, a, rtol=1e-10, atol=1e-12)

    def test_static_drops_rate(self):
        t = GCRF.get_transform_to(ITRF, 0.0)
        assert t.has_rate()
        assert not t.static().has_rate()


class TestFrameTree:

    def test_pseudo_inertial_flags(self):
        assert GCRF.is_pseudo_inertial()
        assert EME2000.is_pseudo_inertial()
        assert ECLIPTIC_J2000.is_pseudo_inertial()
        assert not ITRF.is_pseudo_inertial()

    def test_same_frame_is_identity(self):
        assert GCRF.get_transform_to(GCRF, 0.0).is_identity()

    def test_unconnected_frames(self):
        orphan = Frame("orphan")
        with pytest.raises(ValueError):
            GCRF.get_transform_to(orphan, 0.0)

    def test_child_needs_provider(self):
        with pytest.raises(ValueError):
            Frame("child", GCRF)

    def test_itrf_rotation(self):
        date = 3600.0
        t = GCRF.get_transform_to(ITRF, date)
        np.testing.assert_allclose(np.asarray(t.rotation, dtype=float), eci2ecef_dcm(date))

    def test_point_fixed_in_itrf_moves_in_gcrf(self):
        # a point at rest on the equator moves east at omega * r
        r = 6.378e6
        t = ITRF.get_transform_to(GCRF, 0.0)
        p, v, _ = t.transform_pv([r, 0.0, 0.0], np.zeros(3), np.zeros(3))
        assert np.linalg.norm(v) == pytest.approx(OMGE * r, rel=1e-12)
        assert np.dot(p, v) == pytest.approx(0.0, abs=1e-3)
        # counterclockwise about +z
        assert np.cross(p, v)[2] > 0.0

    def test_itrf_velocity_matches_finite_difference(self):
        p_itrf = np.array([4.0e6, 3.0e6, 3.5e6])
        h = 0.5
        positions = [ITRF.get_transform_to(GCRF, d).transform_position(p_itrf)
                     for d in (100.0 - h, 100.0 + h)]
        _, v, _ = ITRF.get_transform_to(GCRF, 100.0).transform_pv(p_itrf, np.zeros(3), np.zeros(3))
        np.testing.assert_allclose(v, (positions[1] - positions[0]) / (2.0 * h), rtol=1e-8)

    def test_frame_bias_is_small(self):
        r = np.asarray(GCRF.get_transform_to(EME2000, 0.0).rotation, dtype=float)
        np.testing.assert_allclose(r, np.eye(3), atol=0.1 * AS2R)
        assert not np.array_equal(r, np.eye(3))

    def test_ecliptic_pole(self):
        # the ecliptic pole is tilted towards -y in equatorial coordinates
        t = ECLIPTIC_J2000.get_transform_to(EME2000, 0.0)
        pole = t.transform_vector([0.0, 0.0, 1.0])
        np.testing.assert_allclose(pole, [0.0, -np.sin(OBLIQUITY_J2000), np.cos(OBLIQUITY_J2000)],
                                   atol=1e-15)

    def test_gradient_date(self):
        date = Gradient.variable(1, 0, 100.0)
        t = GCRF.get_transform_to(ITRF, date)
        theta = earth_rotation_angle(date)
        assert theta.get_partial_derivative(0) == OMGE
        # d R00 / dt = -sin(theta) * omega
        np.testing.assert_allclose(t.rotation[0][0].get_partial_derivative(0),
                                   -np.sin(theta.value) * OMGE)
