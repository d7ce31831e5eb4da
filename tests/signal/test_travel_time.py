"""Tests for the signal travel time solvers."""

import logging

import numpy as np
import pytest

from pyodm.autodiff import Gradient
from pyodm.autodiff import vector as vec
from pyodm.config import SignalTravelTimeConfig
from pyodm.coordinate.frames import GCRF
from pyodm.core.constants import CLIGHT
from pyodm.core.exceptions import DegenerateGeometryError
from pyodm.satellite import AbsolutePVCoordinates, PVCoordinates
from pyodm.signal import (
    SignalTravelTimeAdjustableEmitter,
    SignalTravelTimeAdjustableReceiver,
    SignalTravelTimeModel,
    solve_signal_travel_time,
)

EMITTER_POSITION = np.array([1e2, 1e3, 1e4])
# 1e4 + 1e6 + 1e8 is exactly representable
EXPECTED_STATIC_DELAY = np.sqrt(101010000.0) / CLIGHT


class TestAdjustableReceiver:

    def test_static_receiver(self):
        receiver = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, np.zeros(3)))
        computer = SignalTravelTimeAdjustableReceiver(receiver)
        assert computer.compute(EMITTER_POSITION, 0.0, GCRF) == EXPECTED_STATIC_DELAY

    @pytest.mark.parametrize("speed_factor", [-1e3, -1e1, 0.0, 1e1, 1e2, 1e4])
    def test_self_consistency(self, speed_factor):
        velocity = np.array([1.0, -2.0, 3.0]) * speed_factor
        receiver = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [-1.0, 0.0, 0.0], velocity))
        computer = SignalTravelTimeAdjustableReceiver(receiver)

        actual = computer.compute(EMITTER_POSITION, 0.0, GCRF)
        reception_date = 0.0 + actual
        expected = computer.compute(EMITTER_POSITION, 0.0, GCRF, reception_date)
        assert actual == pytest.approx(expected, rel=1e-12)

    def test_delay_solves_light_time_equation(self):
        velocity = np.array([3.0e3, -1.0e3, 2.0e3])
        receiver = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [7.0e6, 0.0, 0.0], velocity))
        tau = SignalTravelTimeAdjustableReceiver(receiver).compute([0.0, 2.0e7, 0.0], 0.0, GCRF)
        reception_position = receiver.get_position(tau, GCRF)
        distance = np.linalg.norm(reception_position - np.array([0.0, 2.0e7, 0.0]))
        assert tau * CLIGHT == pytest.approx(distance, rel=1e-12)

    def test_receiver_faster_than_signal(self):
        config = SignalTravelTimeConfig(signal_speed=10.0)
        receiver = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [0.0, 0.0, 0.0], [20.0, 0.0, 0.0]))
        with pytest.raises(DegenerateGeometryError):
            SignalTravelTimeAdjustableReceiver(receiver, config).compute(EMITTER_POSITION, 0.0, GCRF)

    def test_non_finite_emitter(self):
        receiver = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, np.zeros(3)))
        with pytest.raises(DegenerateGeometryError):
            SignalTravelTimeAdjustableReceiver(receiver).compute([np.nan, 0.0, 0.0], 0.0, GCRF)


class TestAdjustableEmitter:

    def test_static_emitter(self):
        emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, EMITTER_POSITION))
        tau = solve_signal_travel_time(np.zeros(3), 0.0, emitter, 0.0, GCRF)
        assert tau == EXPECTED_STATIC_DELAY

    def test_moving_emitter_fixed_point(self):
        emitter = AbsolutePVCoordinates(
            GCRF, PVCoordinates(0.0, [7.0e6, 0.0, 0.0], [0.0, 7.5e3, 0.0], [-8.0, 0.0, 0.0]))
        receiver_position = np.array([6.4e6, 0.0, 0.0])
        tau = SignalTravelTimeAdjustableEmitter(emitter).compute_delay(0.0, receiver_position, 0.0, GCRF)
        emission_position = emitter.get_position(-tau, GCRF)
        assert tau * CLIGHT == pytest.approx(np.linalg.norm(receiver_position - emission_position),
                                             rel=1e-13)

    def test_iteration_bound_keeps_last_iterate(self, caplog):
        emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [7.0e6, 0.0, 0.0], [0.0, 7.5e3, 0.0]))
        config = SignalTravelTimeConfig(max_iterations=1, convergence_ulps=0.0)
        with caplog.at_level(logging.DEBUG, logger="pyodm.signal.travel_time"):
            tau = SignalTravelTimeAdjustableEmitter(emitter, config).compute_delay(
                0.0, np.zeros(3), 0.0, GCRF)
        assert np.isfinite(tau)
        assert "iteration bound" in caplog.text

    def test_gradient_delay_matches_finite_difference(self):
        emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [7.0e6, 0.0, 0.0], [0.0, 7.5e3, 0.0]))
        receiver = [6.4e6, 1.0e5, 0.0]
        computer = SignalTravelTimeAdjustableEmitter(emitter)

        receiver_gradient = vec.gradient_vector(receiver, 3, 0)
        tau = computer.compute_delay(0.0, receiver_gradient, 0.0, GCRF)
        assert tau.value == computer.compute_delay(0.0, np.array(receiver), 0.0, GCRF)

        h = 1.0
        for i in range(3):
            plus, minus = np.array(receiver), np.array(receiver)
            plus[i] += h
            minus[i] -= h
            fd = (computer.compute_delay(0.0, plus, 0.0, GCRF)
                  - computer.compute_delay(0.0, minus, 0.0, GCRF)) / (2.0 * h)
            assert tau.get_partial_derivative(i) == pytest.approx(fd, rel=1e-6, abs=1e-15)

    def test_gradient_reception_date(self):
        emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [7.0e6, 0.0, 0.0], [0.0, 7.5e3, 0.0]))
        date = Gradient.variable(1, 0, 0.0)
        tau = SignalTravelTimeAdjustableEmitter(emitter).compute_delay(date, np.zeros(3), date, GCRF)
        # radial distance grows as the emitter moves tangentially, slowly
        assert abs(tau.get_partial_derivative(0)) < 1e-6

    def test_instantaneous(self):
        model = SignalTravelTimeModel.instantaneous()
        emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, EMITTER_POSITION))
        assert model.is_instantaneous()
        assert model.get_adjustable_emitter_computer(emitter).compute_delay(
            0.0, np.zeros(3), 0.0, GCRF) == 0.0

    def test_non_finite_receiver(self):
        emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, EMITTER_POSITION))
        with pytest.raises(DegenerateGeometryError):
            solve_signal_travel_time([np.inf, 0.0, 0.0], 0.0, emitter, 0.0, GCRF)

    def test_custom_speed(self):
        model = SignalTravelTimeModel(SignalTravelTimeConfig(signal_speed=1.0e3))
        emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [1.0e3, 0.0, 0.0]))
        assert model.signal_speed == 1.0e3
        assert model.get_adjustable_emitter_computer(emitter).compute_delay(
            0.0, np.zeros(3), 0.0, GCRF) == 1.0
