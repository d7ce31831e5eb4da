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

"""Two-way (emitter -> relay -> receiver) range model"""

import logging

import numpy as np

from ...autodiff import ops
from ...coordinate.frames import GCRF
from ...core.exceptions import ConfigurationError, PreconditionError
from ...signal.travel_time_model import SignalTravelTimeModel

logger = logging.getLogger(__name__)


class TwoWayRangeModel:
    """
    Ranges of the two legs of a relayed signal.

    The legs are resolved backwards from the reception: first the relay to
    receiver leg, which gives the relay date, then the emitter to relay leg.

    Parameters
    ----------
    travel_time_model : SignalTravelTimeModel
        Light time model, must have a finite signal speed
    inertial_frame : Frame
        Pseudo-inertial frame of the computation, GCRF by default

    Raises
    ------
    ConfigurationError
        If ``inertial_frame`` is not pseudo-inertial
    PreconditionError
        If the travel time model is instantaneous
    """

    def __init__(self, travel_time_model: SignalTravelTimeModel, inertial_frame=GCRF):
        if not inertial_frame.is_pseudo_inertial():
            logger.error(f"Two-way range requested in non pseudo-inertial frame {inertial_frame.name}")
            raise ConfigurationError(f"Frame {inertial_frame.name} is not pseudo-inertial")
        if travel_time_model.is_instantaneous():
            logger.error("Two-way range requested with an instantaneous travel time model")
            raise PreconditionError("Two-way range needs a finite signal speed")
        self.inertial_frame = inertial_frame
        self.travel_time_model = travel_time_model

    def _travel_time(self, receiver, reception_date, emitter, approx_emission_date):
        receiver_position = receiver.get_position(reception_date, self.inertial_frame)
        return self.travel_time_model.get_adjustable_emitter_computer(emitter).compute_delay(
            approx_emission_date, receiver_position, reception_date, self.inertial_frame)

    def value(self, receiver, reception_date, relay, approx_relay_date,
              emitter, approx_emission_date) -> np.ndarray:
        """
        Parameters
        ----------
        receiver, relay, emitter : PVCoordinatesProvider
            Participants
        reception_date : float or Gradient
            Reception date at the receiver
        approx_relay_date, approx_emission_date : float or Gradient
            Initial guesses of the relay and emission dates

        Returns
        -------
        np.ndarray
            [first leg range, second leg range] (m), chronological order
        """
        speed = self.travel_time_model.signal_speed
        second_leg = self._travel_time(receiver, reception_date, relay, approx_relay_date)
        relay_date = reception_date - second_leg
        first_leg = self._travel_time(relay, relay_date, emitter, approx_emission_date)

        ranges = [first_leg * speed, second_leg * speed]
        if any(ops.is_gradient(r) for r in ranges):
            return np.array(ranges, dtype=object)
        return np.array(ranges, dtype=np.float64)
