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

"""One-way carrier phase measurement"""

from typing import Optional

from ..core.constants import CLIGHT
from ..core.exceptions import ConfigurationError
from ..observation.common_parameters import (
    compute_remote_parameters_with,
    compute_remote_parameters_without,
)
from ..observation.estimated import EstimatedMeasurement, EstimatedMeasurementBase, fill_derivatives
from ..observation.measurement import ObservedMeasurement
from ..observation.observers import GroundStation
from ..satellite.observable_satellite import ObservableSatellite
from ..signal.travel_time_model import SignalTravelTimeModel
from .ambiguity import AmbiguityCache


class Phase(ObservedMeasurement):
    """
    Carrier phase (cycles) received by a station.

    phase = (tau_d + dt_station - dt_satellite) * c / lambda + N

    where ``tau_d`` is the downlink light time and ``N`` the ambiguity
    shared through the cache.

    Parameters
    ----------
    station : GroundStation
        Receiving station
    date : float
        Reception date
    phase : float
        Observed phase (cycles)
    wavelength : float
        Carrier wavelength (m)
    sigma : float
        Standard deviation (cycles)
    base_weight : float
        Base weight
    satellite : ObservableSatellite
        Emitting satellite
    cache : AmbiguityCache
        Ambiguity registry of the run
    travel_time_model : SignalTravelTimeModel, optional
        Downlink light time model
    """

    measurement_type = "Phase"

    def __init__(self, station: GroundStation, date: float, phase: float, wavelength: float,
                 sigma: float, base_weight: float, satellite: ObservableSatellite,
                 cache: AmbiguityCache, travel_time_model: Optional[SignalTravelTimeModel] = None):
        if not wavelength > 0.0:
            raise ConfigurationError(f"Invalid wavelength {wavelength}")
        super().__init__(date, phase, sigma, base_weight, [satellite])
        self.station = station
        self.wavelength = float(wavelength)
        self.travel_time_model = travel_time_model
        self.ambiguity_driver = cache.get_ambiguity(satellite.name, station.name, wavelength)
        self.add_parameter_drivers(station.parameter_drivers)
        self.add_parameter_driver(self.ambiguity_driver)

    def evaluate_value(self, iteration, evaluation, states) -> EstimatedMeasurementBase:
        common = compute_remote_parameters_without(self.station, states, self.satellite, self.date,
                                                   False, self.travel_time_model)

        c_over_lambda = CLIGHT / self.wavelength
        ambiguity = self.ambiguity_driver.get_value(common.state.date)
        phase = (common.tau_d + common.remote_offset.offset - common.local_offset.offset) \
            * c_over_lambda + ambiguity

        estimated = EstimatedMeasurementBase(self, iteration, evaluation, [common.transit_state],
                                             [common.transit_pv, common.remote_pv])
        estimated.set_estimated_value(phase)
        return estimated

    def evaluate_with_derivatives(self, iteration, evaluation, states) -> EstimatedMeasurement:
        common = compute_remote_parameters_with(self.station, states, self.satellite, self.date,
                                                False, self.parameter_drivers, self.travel_time_model)

        c_over_lambda = CLIGHT / self.wavelength
        ambiguity = self.ambiguity_driver.get_gradient(common.free_parameters, common.indices,
                                                       common.state.date)
        phase = (common.tau_d + common.remote_offset.offset - common.local_offset.offset) \
            * c_over_lambda + ambiguity

        estimated = EstimatedMeasurement(self, iteration, evaluation, [common.transit_state],
                                         [common.transit_pv.to_values(), common.remote_pv.to_values()])
        estimated.set_estimated_value(phase.value)
        fill_derivatives(estimated, [phase], self.satellites, common.indices, self.parameter_drivers)
        return estimated
