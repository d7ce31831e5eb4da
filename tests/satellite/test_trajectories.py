"""Tests for PV coordinates, providers and spacecraft states."""

import numpy as np
import pytest

from pyodm.autodiff import Gradient
from pyodm.autodiff import vector as vec
from pyodm.coordinate.frames import GCRF, ITRF
from pyodm.core.constants import GME
from pyodm.core.exceptions import MissingSatelliteError
from pyodm.satellite import (
    AbsolutePVCoordinates,
    GradientPVProvider,
    ObservableSatellite,
    PVCoordinates,
    PVCoordinatesProvider,
    SpacecraftState,
    kepler_acceleration,
)


class _LinearProvider(PVCoordinatesProvider):
    """Float-only provider moving along x at 2 m/s."""

    def get_pv_coordinates(self, date, frame):
        return PVCoordinates(float(date), [2.0 * float(date), 0.0, 0.0], [2.0, 0.0, 0.0])


class TestPVCoordinates:

    def test_defaults(self):
        pv = PVCoordinates(0.0, [1.0, 2.0, 3.0])
        assert not pv.velocity.any()
        assert not pv.acceleration.any()
        assert not pv.is_gradient()

    def test_taylor_shift(self):
        pv = PVCoordinates(10.0, [0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 2.0, 0.0])
        shifted = pv.shifted_by(3.0)
        assert shifted.date == 13.0
        np.testing.assert_allclose(shifted.position, [3.0, 9.0, 0.0])
        np.testing.assert_allclose(shifted.velocity, [1.0, 6.0, 0.0])

    def test_to_values_and_gradient(self):
        pv = PVCoordinates(0.0, [1.0, 2.0, 3.0]).to_gradient(4)
        assert pv.is_gradient()
        np.testing.assert_array_equal(pv.to_values().position, [1.0, 2.0, 3.0])


class TestProviders:

    def test_absolute_pv_extrapolation(self):
        provider = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]))
        assert not provider.is_static()
        np.testing.assert_allclose(provider.get_position(2.0, GCRF), [1.0, 2.0, 0.0])

    def test_static_provider(self):
        provider = AbsolutePVCoordinates(GCRF, PVCoordinates(5.0, [1.0, 2.0, 3.0]))
        assert provider.is_static()
        pv = provider.get_pv_coordinates(100.0, GCRF)
        assert pv.date == 100.0
        np.testing.assert_array_equal(pv.position, [1.0, 2.0, 3.0])

    def test_frame_conversion(self):
        provider = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [7.0e6, 0.0, 0.0]))
        itrf = provider.get_pv_coordinates(0.0, ITRF)
        expected = GCRF.get_transform_to(ITRF, 0.0).transform_position([7.0e6, 0.0, 0.0])
        np.testing.assert_allclose(itrf.position, expected)
        # static in GCRF, moving in ITRF
        assert np.linalg.norm(itrf.velocity) > 0.0

    def test_gradient_provider_zero_shift(self):
        provider = GradientPVProvider(_LinearProvider(), 2)
        date = Gradient.variable(2, 1, 3.0)
        pv = provider.get_pv_coordinates(date, GCRF)
        assert pv.position[0].value == 6.0
        np.testing.assert_allclose(pv.position[0].get_gradient(), [0.0, 2.0])
        # float dates go straight through
        np.testing.assert_array_equal(provider.get_position(3.0, GCRF), [6.0, 0.0, 0.0])


class TestSpacecraftState:

    def test_kepler_acceleration(self):
        r = np.array([7.0e6, 0.0, 0.0])
        np.testing.assert_allclose(kepler_acceleration(r), [-GME / 7.0e6 ** 2, 0.0, 0.0])

    def test_vector_round_trip(self):
        vector = np.array([7.0e6, 1.0, 2.0, 3.0, 7.5e3, 4.0])
        state = SpacecraftState.from_vector(10.0, vector)
        np.testing.assert_array_equal(state.to_vector(), vector)
        assert state.frame is GCRF

    def test_shift_preserves_frame(self, leo_state):
        shifted = leo_state.shifted_by(-0.004)
        assert shifted.frame is leo_state.frame
        assert shifted.date == pytest.approx(leo_state.date - 0.004)

    def test_gradient_pv_seeding(self, leo_state):
        pv = leo_state.to_gradient_pv(13, 6)
        np.testing.assert_array_equal(vec.values(pv.position), vec.values(leo_state.position))
        assert pv.position[0].get_partial_derivative(6) == 1.0
        assert pv.velocity[2].get_partial_derivative(11) == 1.0
        # two-body acceleration depends on the position only
        assert not pv.acceleration[0].get_gradient()[9:12].any()
        assert pv.acceleration[0].get_gradient()[6:9].any()

    def test_gradient_pv_slots_out_of_range(self, leo_state):
        with pytest.raises(ValueError):
            leo_state.to_gradient_pv(6, 3)


class TestObservableSatellite:

    def test_default_name_and_clock(self):
        satellite = ObservableSatellite(2)
        assert satellite.name == "sat-2"
        assert [d.name for d in satellite.parameter_drivers][0] == "sat-2-clock"

    def test_select_state(self, leo_state):
        assert ObservableSatellite(0).select_state([leo_state]) is leo_state
        with pytest.raises(MissingSatelliteError):
            ObservableSatellite(1).select_state([leo_state])

    def test_negative_index(self):
        with pytest.raises(ValueError):
            ObservableSatellite(-1)
