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

"""Right ascension and declination of a spacecraft seen from a ground station"""

from typing import Optional

import numpy as np

from ..autodiff import ops
from ..autodiff import vector as vec
from ..core.wrap import two_pi_wrap
from ..satellite.observable_satellite import ObservableSatellite
from ..signal.travel_time_model import SignalTravelTimeModel
from .common_parameters import compute_remote_parameters_with, compute_remote_parameters_without
from .estimated import EstimatedMeasurement, EstimatedMeasurementBase, fill_derivatives
from .measurement import ObservedMeasurement
from .observers import GroundStation


class AngularRaDec(ObservedMeasurement):
    """
    Right ascension and declination of the station to satellite direction.

    Angles are expressed in ``reference_frame``, which need not be the frame
    of the spacecraft states.

    Parameters
    ----------
    station : GroundStation
        Observing station
    reference_frame : Frame
        Frame of the angles (EME2000, GCRF, ...)
    date : float
        Reception date
    angular : array_like
        Observed [right ascension, declination] (rad)
    sigma : array_like
        Standard deviations (rad)
    base_weight : array_like
        Base weights
    satellite : ObservableSatellite
        Observed satellite
    travel_time_model : SignalTravelTimeModel, optional
        Downlink light time model
    """

    measurement_type = "AngularRaDec"

    def __init__(self, station: GroundStation, reference_frame, date: float, angular, sigma,
                 base_weight, satellite: ObservableSatellite,
                 travel_time_model: Optional[SignalTravelTimeModel] = None):
        super().__init__(date, angular, sigma, base_weight, [satellite])
        self.station = station
        self.reference_frame = reference_frame
        self.travel_time_model = travel_time_model
        self.add_parameter_drivers(station.parameter_drivers)

    def _angles(self, common):
        sta_sat = vec.subtract(common.transit_pv.position, common.remote_pv.position)

        # inertial to reference frame at the reception date
        to_reference = common.state.frame.get_static_transform_to(self.reference_frame,
                                                                  common.remote_pv.date)
        sta_sat_reference = to_reference.transform_vector(sta_sat)

        base_right_ascension = vec.alpha(sta_sat_reference)
        right_ascension = base_right_ascension + two_pi_wrap(ops.value_of(base_right_ascension),
                                                             self.observed_value[0])
        declination = vec.delta(sta_sat_reference)
        return right_ascension, declination

    def evaluate_value(self, iteration, evaluation, states) -> EstimatedMeasurementBase:
        common = compute_remote_parameters_without(self.station, states, self.satellite, self.date,
                                                   False, self.travel_time_model)
        right_ascension, declination = self._angles(common)

        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [common.transit_state],
                                             [common.transit_pv, common.remote_pv])
        estimated.set_estimated_value(right_ascension, declination)
        return estimated

    def evaluate_with_derivatives(self, iteration, evaluation, states) -> EstimatedMeasurement:
        common = compute_remote_parameters_with(self.station, states, self.satellite, self.date,
                                                False, self.parameter_drivers, self.travel_time_model)
        right_ascension, declination = self._angles(common)

        estimated = EstimatedMeasurement(self, iteration, evaluation, [common.transit_state],
                                         [common.transit_pv.to_values(), common.remote_pv.to_values()])
        estimated.set_estimated_value(right_ascension.value, declination.value)
        fill_derivatives(estimated, [right_ascension, declination], self.satellites,
                         common.indices, self.parameter_drivers)
        return estimated

    def get_observed_line_of_sight(self, output_frame) -> np.ndarray:
        """Unit vector along the observed direction, in ``output_frame``"""
        direction = vec.from_angles(self.observed_value[0], self.observed_value[1])
        return self.reference_frame.get_static_transform_to(output_frame, self.date) \
            .transform_vector(direction)
