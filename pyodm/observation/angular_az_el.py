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

"""Azimuth and elevation of a spacecraft seen from a ground station"""

from typing import Optional

import numpy as np

from ..autodiff import ops
from ..autodiff import vector as vec
from ..core.constants import HALF_PI
from ..core.wrap import two_pi_wrap
from ..satellite.observable_satellite import ObservableSatellite
from ..signal.travel_time_model import SignalTravelTimeModel
from .common_parameters import compute_remote_parameters_with, compute_remote_parameters_without
from .estimated import EstimatedMeasurement, EstimatedMeasurementBase, fill_derivatives
from .measurement import ObservedMeasurement
from .observers import GroundStation


class AngularAzEl(ObservedMeasurement):
    """
    Azimuth (from north, towards east) and elevation of the satellite.

    Parameters
    ----------
    station : GroundStation
        Observing station
    date : float
        Reception date
    angular : array_like
        Observed [azimuth, elevation] (rad)
    sigma : array_like
        Standard deviations (rad)
    base_weight : array_like
        Base weights
    satellite : ObservableSatellite
        Observed satellite
    travel_time_model : SignalTravelTimeModel, optional
        Downlink light time model
    """

    measurement_type = "AngularAzEl"

    def __init__(self, station: GroundStation, date: float, angular, sigma, base_weight,
                 satellite: ObservableSatellite,
                 travel_time_model: Optional[SignalTravelTimeModel] = None):
        super().__init__(date, angular, sigma, base_weight, [satellite])
        self.station = station
        self.travel_time_model = travel_time_model
        self.add_parameter_drivers(station.parameter_drivers)

    def _angles(self, common):
        frame = common.state.frame
        east, north, zenith = self.station.get_topocentric_axes(frame, common.remote_pv.date)

        # station to satellite vector in the inertial frame
        sta_sat = vec.subtract(common.transit_pv.position, common.remote_pv.position)

        base_azimuth = ops.atan2(vec.dot(sta_sat, east), vec.dot(sta_sat, north))
        azimuth = base_azimuth + two_pi_wrap(ops.value_of(base_azimuth), self.observed_value[0])
        elevation = ops.asin(vec.dot(sta_sat, zenith) / vec.norm(sta_sat))
        return azimuth, elevation

    def evaluate_value(self, iteration, evaluation, states) -> EstimatedMeasurementBase:
        common = compute_remote_parameters_without(self.station, states, self.satellite, self.date,
                                                   False, self.travel_time_model)
        azimuth, elevation = self._angles(common)

        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [common.transit_state],
                                             [common.transit_pv, common.remote_pv])
        estimated.set_estimated_value(azimuth, elevation)
        return estimated

    def evaluate_with_derivatives(self, iteration, evaluation, states) -> EstimatedMeasurement:
        # Gradient layout: 6 state slots per spacecraft, then the active
        # station spans (clock, east/north/zenith displacements)
        common = compute_remote_parameters_with(self.station, states, self.satellite, self.date,
                                                False, self.parameter_drivers, self.travel_time_model)
        azimuth, elevation = self._angles(common)

        estimated = EstimatedMeasurement(self, iteration, evaluation, [common.transit_state],
                                         [common.transit_pv.to_values(), common.remote_pv.to_values()])
        estimated.set_estimated_value(azimuth.value, elevation.value)
        fill_derivatives(estimated, [azimuth, elevation], self.satellites,
                         common.indices, self.parameter_drivers)
        return estimated

    def get_observed_line_of_sight(self, output_frame) -> np.ndarray:
        """Unit vector along the observed direction, in ``output_frame``"""
        # topocentric (east, north, zenith) direction; pi/2 - az turns azimuth into an x-y angle
        topocentric = vec.from_angles(HALF_PI - self.observed_value[0], self.observed_value[1])
        return self.station.topocentric_to_frame(topocentric, output_frame, self.date)
