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

"""Passive right ascension / declination model"""

from typing import Optional

import numpy as np

from ...autodiff import ops
from ...autodiff import vector as vec
from ...signal.travel_time_model import SignalTravelTimeModel


class RaDecMeasurementModel:
    """
    Apparent direction of an emitter seen by a receiver.

    The emitter is taken at the emission date given by the light time, so
    the angles describe the apparent (not geometric) line of sight. Works
    on floats and on gradients.

    Parameters
    ----------
    reference_frame : Frame
        Frame of the output angles
    travel_time_model : SignalTravelTimeModel, optional
        Light time model
    """

    def __init__(self, reference_frame, travel_time_model: Optional[SignalTravelTimeModel] = None):
        self.reference_frame = reference_frame
        self.travel_time_model = travel_time_model if travel_time_model is not None \
            else SignalTravelTimeModel()

    def value(self, frame, receiver_position, reception_date, emitter, approx_emission_date) -> np.ndarray:
        """
        Parameters
        ----------
        frame : Frame
            Frame of ``receiver_position``, used for the light time
        receiver_position : array_like
            Receiver position at reception
        reception_date : float or Gradient
            Reception date
        emitter : PVCoordinatesProvider
            Emitter trajectory
        approx_emission_date : float or Gradient
            Initial guess of the emission date

        Returns
        -------
        np.ndarray
            [right ascension, declination] (rad), object dtype in the
            derivative lane
        """
        tau = self.travel_time_model.get_adjustable_emitter_computer(emitter).compute_delay(
            approx_emission_date, receiver_position, reception_date, frame)
        emission_date = reception_date - tau

        observed_position = emitter.get_position(emission_date, frame)
        line_of_sight = vec.subtract(observed_position, receiver_position)
        apparent = frame.get_static_transform_to(self.reference_frame, reception_date) \
            .transform_vector(line_of_sight)

        right_ascension = vec.alpha(apparent)
        declination = vec.delta(apparent)
        if ops.is_gradient(right_ascension) or ops.is_gradient(declination):
            return np.array([right_ascension, declination], dtype=object)
        return np.array([right_ascension, declination], dtype=np.float64)
