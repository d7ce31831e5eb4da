# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Signal travel time (light time) between a moving emitter and a receiver.

Two formulations are provided:

- :class:`SignalTravelTimeAdjustableEmitter`: the reception event is known,
  the emission date is found by fixed point iteration on the emitter
  trajectory ``tau = |r(t_r) - p(t_r - tau)| / c``
- :class:`SignalTravelTimeAdjustableReceiver`: the emission event is known,
  the receiver is extrapolated linearly and the delay is the positive root
  of ``|d + v tau| = c tau``

Both work on floats and on gradients (positions, dates and the results);
the iteration stopping test only looks at real parts so the two lanes
perform the same number of iterations.
"""

import logging
from typing import Optional

import numpy as np

from ..autodiff import ops
from ..autodiff import vector as vec
from ..autodiff.gradient import Gradient
from ..config import SignalTravelTimeConfig
from ..core.exceptions import DegenerateGeometryError
from ..logger import TRACE
from ..satellite.providers import AbsolutePVCoordinates, PVCoordinatesProvider

logger = logging.getLogger(__name__)


def _zero_like(*args):
    n = ops.free_parameters_of(*args)
    return 0.0 if n is None else Gradient.constant(n, 0.0)


def _check_finite(position, what: str):
    if not vec.is_finite(position):
        raise DegenerateGeometryError(f"Non-finite {what} position {vec.values(position)}")


def _is_static(provider: PVCoordinatesProvider, frame) -> bool:
    return isinstance(provider, AbsolutePVCoordinates) and provider.frame is frame \
        and provider.is_static()


class SignalTravelTimeAdjustableEmitter:
    """
    Delay of a signal received at a known event, emitted along a trajectory.

    Parameters
    ----------
    emitter : PVCoordinatesProvider
        Emitter trajectory
    config : SignalTravelTimeConfig, optional
        Signal speed and iteration settings
    """

    def __init__(self, emitter: PVCoordinatesProvider,
                 config: Optional[SignalTravelTimeConfig] = None):
        self.emitter = emitter
        self.config = config if config is not None else SignalTravelTimeConfig()

    def _threshold(self, tau: float) -> float:
        return max(self.config.convergence_ulps * np.spacing(abs(tau)),
                   self.config.absolute_tolerance)

    def compute_delay(self, approx_emission_date, receiver_position, reception_date, frame):
        """
        Solve the light time equation.

        Parameters
        ----------
        approx_emission_date : float or Gradient
            Date used for the initial guess
        receiver_position : array_like
            Receiver position at reception, in ``frame``
        reception_date : float or Gradient
            Signal reception date
        frame : Frame
            Pseudo-inertial frame of the computation

        Returns
        -------
        float or Gradient
            Delay (s), non-negative. If the iteration bound is reached the
            last iterate is returned.

        Raises
        ------
        DegenerateGeometryError
            If a position is not finite
        """
        _check_finite(receiver_position, "receiver")
        if self.config.is_instantaneous:
            return _zero_like(reception_date, *receiver_position)

        c = self.config.signal_speed

        if _is_static(self.emitter, frame):
            emitter_position = self.emitter.get_position(approx_emission_date, frame)
            _check_finite(emitter_position, "emitter")
            logger.log(TRACE, "Static emitter, one-shot delay")
            return vec.norm(vec.subtract(receiver_position, emitter_position)) / c

        # initial guess from the straight line distance at the approximate date
        emitter_position = self.emitter.get_position(approx_emission_date, frame)
        _check_finite(emitter_position, "emitter")
        tau = vec.norm(vec.subtract(receiver_position, emitter_position)) / c

        for _ in range(self.config.max_iterations):
            emitter_position = self.emitter.get_position(reception_date - tau, frame)
            _check_finite(emitter_position, "emitter")
            new_tau = vec.norm(vec.subtract(receiver_position, emitter_position)) / c
            delta = abs(ops.value_of(new_tau) - ops.value_of(tau))
            tau = new_tau
            if delta < self._threshold(ops.value_of(tau)):
                break
        else:
            logger.debug(f"Light time iteration bound ({self.config.max_iterations}) reached, "
                         f"last correction {delta:.3e} s kept")

        return tau


class SignalTravelTimeAdjustableReceiver:
    """
    Delay of a signal emitted at a known event, received by a moving receiver.

    The receiver is taken at ``approx_reception_date`` and moved linearly
    back to the emission date; the delay is then the positive root of
    ``(c^2 - v.v) tau^2 - 2 (d.v) tau - d.d = 0`` where ``d`` is the
    emitter to receiver vector at emission. The root is computed in the form
    that avoids cancellation for either sign of ``d.v``.

    Parameters
    ----------
    receiver : PVCoordinatesProvider
        Receiver trajectory
    config : SignalTravelTimeConfig, optional
        Signal speed (iteration settings are unused)
    """

    def __init__(self, receiver: PVCoordinatesProvider,
                 config: Optional[SignalTravelTimeConfig] = None):
        self.receiver = receiver
        self.config = config if config is not None else SignalTravelTimeConfig()

    def compute(self, emitter_position, emission_date, frame, approx_reception_date=None):
        """
        Parameters
        ----------
        emitter_position : array_like
            Emitter position at emission, in ``frame``
        emission_date : float or Gradient
            Signal emission date
        frame : Frame
            Pseudo-inertial frame of the computation
        approx_reception_date : float or Gradient, optional
            Date at which the receiver state is taken, ``emission_date`` if
            omitted

        Returns
        -------
        float or Gradient
            Delay (s)
        """
        _check_finite(emitter_position, "emitter")
        if approx_reception_date is None:
            approx_reception_date = emission_date
        if self.config.is_instantaneous:
            return _zero_like(emission_date, *emitter_position)

        c = self.config.signal_speed
        pv = self.receiver.get_pv_coordinates(approx_reception_date, frame)
        _check_finite(pv.position, "receiver")

        if all(ops.is_zero(v) for v in pv.velocity):
            logger.log(TRACE, "Static receiver, one-shot delay")
            return vec.norm(vec.subtract(pv.position, emitter_position)) / c

        velocity = pv.velocity
        offset = emission_date - approx_reception_date
        receiver_at_emission = vec.linear_combination(1.0, pv.position, offset, velocity)
        d = vec.subtract(receiver_at_emission, emitter_position)

        a = c * c - vec.dot(velocity, velocity)
        if ops.value_of(a) <= 0.0:
            raise DegenerateGeometryError(
                f"Receiver speed {np.sqrt(c * c - ops.value_of(a)):.3e} m/s not below signal speed")
        b = vec.dot(d, velocity)
        dd = vec.dot(d, d)
        disc = ops.sqrt(b * b + a * dd)
        if ops.value_of(b) >= 0.0:
            return (b + disc) / a
        return dd / (disc - b)


def solve_signal_travel_time(receiver_position, reception_date, emitter: PVCoordinatesProvider,
                             approx_emission_date, frame,
                             config: Optional[SignalTravelTimeConfig] = None):
    """
    Light time delay between an emitter trajectory and a reception event.

    Functional shortcut for
    ``SignalTravelTimeAdjustableEmitter(emitter, config).compute_delay(...)``.

    Examples
    --------
    >>> from pyodm.coordinate.frames import GCRF
    >>> from pyodm.satellite import AbsolutePVCoordinates, PVCoordinates
    >>> emitter = AbsolutePVCoordinates(GCRF, PVCoordinates(0.0, [1e2, 1e3, 1e4]))
    >>> tau = solve_signal_travel_time([0.0, 0.0, 0.0], 0.0, emitter, 0.0, GCRF)
    """
    return SignalTravelTimeAdjustableEmitter(emitter, config).compute_delay(
        approx_emission_date, receiver_position, reception_date, frame)
