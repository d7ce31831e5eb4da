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

"""Observed measurement interface"""

from abc import ABC, abstractmethod
from typing import ClassVar, List, Sequence

import numpy as np

from ..core.exceptions import ConfigurationError
from ..estimation.parameter_driver import ParameterDriver
from ..satellite.observable_satellite import ObservableSatellite
from .estimated import EstimatedMeasurement, EstimatedMeasurementBase


class ObservedMeasurement(ABC):
    """
    Measurement with its observed value and the means to evaluate it.

    Subclasses implement the two evaluation lanes. Both obtain their
    geometry from the common parameters functions and apply the observable
    formula; the derivative lane additionally fills the Jacobian.

    Parameters
    ----------
    date : float
        Measurement date (s since reference epoch)
    observed : float or array_like
        Observed value(s)
    sigma : float or array_like
        Theoretical standard deviation(s)
    base_weight : float or array_like
        Base weight(s)
    satellites : sequence of ObservableSatellite
        Satellites involved
    """

    measurement_type: ClassVar[str] = "Measurement"

    def __init__(self, date: float, observed, sigma, base_weight,
                 satellites: Sequence[ObservableSatellite]):
        self.date = float(date)
        self.observed_value = np.atleast_1d(np.asarray(observed, dtype=np.float64)).copy()
        self.sigma = np.broadcast_to(np.asarray(sigma, dtype=np.float64), self.observed_value.shape).copy()
        self.base_weight = np.broadcast_to(np.asarray(base_weight, dtype=np.float64),
                                           self.observed_value.shape).copy()
        if np.any(self.sigma <= 0.0):
            raise ConfigurationError(f"{self.measurement_type}: sigma must be positive")
        self.satellites = list(satellites)
        self.enabled = True
        self._drivers: List[ParameterDriver] = []
        for satellite in self.satellites:
            self.add_parameter_drivers(satellite.parameter_drivers)

    @property
    def dimension(self) -> int:
        return self.observed_value.shape[0]

    @property
    def satellite(self) -> ObservableSatellite:
        """First (often single) satellite of the measurement"""
        return self.satellites[0]

    @property
    def parameter_drivers(self) -> List[ParameterDriver]:
        """Drivers in declaration order: satellites, observer, measurement specific"""
        return list(self._drivers)

    def add_parameter_driver(self, driver: ParameterDriver):
        for existing in self._drivers:
            if existing is driver:
                return
            if existing.name == driver.name:
                raise ConfigurationError(f"Two different drivers share the name {driver.name}")
        self._drivers.append(driver)

    def add_parameter_drivers(self, drivers: Sequence[ParameterDriver]):
        for driver in drivers:
            self.add_parameter_driver(driver)

    def is_enabled(self) -> bool:
        return self.enabled

    def set_enabled(self, enabled: bool):
        self.enabled = bool(enabled)

    @abstractmethod
    def evaluate_value(self, iteration: int, evaluation: int, states) -> EstimatedMeasurementBase:
        """Theoretical value only"""

    @abstractmethod
    def evaluate_with_derivatives(self, iteration: int, evaluation: int, states) -> EstimatedMeasurement:
        """Theoretical value with state and parameter derivatives"""

    def residuals(self, states) -> np.ndarray:
        """Observed minus theoretical value for the given states"""
        return self.evaluate_value(0, 0, states).residuals()

    def __repr__(self):
        return f"{type(self).__name__}(date={self.date}, observed={self.observed_value})"
