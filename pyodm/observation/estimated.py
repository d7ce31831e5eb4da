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

"""Theoretical values of measurements and their partial derivatives"""

from enum import Enum
from typing import Dict, List, Mapping, Sequence

import numpy as np

from ..autodiff.gradient import Gradient
from ..core.constants import STATE_DIMENSION
from ..estimation.parameter_driver import ParameterDriver


class EstimationStatus(Enum):
    """Outcome of the outlier filters applied by the estimation loop"""
    PROCESSED = "processed"
    REJECTED = "rejected"


class EstimatedMeasurementBase:
    """
    Theoretical value of a measurement.

    Parameters
    ----------
    observed_measurement : ObservedMeasurement
        Measurement that was evaluated
    iteration : int
        Outer estimation loop iteration
    count : int
        Evaluation counter within the iteration
    states : sequence of SpacecraftState
        Spacecraft states at signal transit
    participants : sequence of PVCoordinates
        Participants in signal path order, emitter first
    """

    def __init__(self, observed_measurement, iteration: int, count: int,
                 states: Sequence, participants: Sequence):
        self.observed_measurement = observed_measurement
        self.iteration = iteration
        self.count = count
        self.states = list(states)
        self.participants = list(participants)
        self.estimated_value = None
        self.status = EstimationStatus.PROCESSED

    @property
    def date(self) -> float:
        return self.observed_measurement.date

    @property
    def observed_value(self) -> np.ndarray:
        return self.observed_measurement.observed_value

    @property
    def time_offset(self) -> float:
        """Transit date of the first state minus measurement date (s)"""
        return float(self.states[0].date - self.date)

    def set_estimated_value(self, *values):
        self.estimated_value = np.array([float(v) for v in values], dtype=np.float64)

    def residuals(self) -> np.ndarray:
        """Observed minus estimated values"""
        if self.estimated_value is None:
            raise ValueError("Estimated value not set")
        return self.observed_value - self.estimated_value

    def __repr__(self):
        return (f"{type(self).__name__}({self.observed_measurement.measurement_type}, "
                f"date={self.date}, value={self.estimated_value})")


class EstimatedMeasurement(EstimatedMeasurementBase):
    """Theoretical value with derivatives with respect to states and parameters"""

    def __init__(self, observed_measurement, iteration: int, count: int,
                 states: Sequence, participants: Sequence):
        super().__init__(observed_measurement, iteration, count, states, participants)
        self._state_derivatives: Dict[int, np.ndarray] = {}
        self._parameter_derivatives: Dict[ParameterDriver, Dict[float, np.ndarray]] = {}

    def set_state_derivatives(self, index: int, *rows):
        """
        Derivatives of each measurement component with respect to the state
        of the satellite of rank ``index`` in the measurement.
        """
        self._state_derivatives[index] = np.array(rows, dtype=np.float64).reshape(len(rows), STATE_DIMENSION)

    def get_state_derivatives(self, index: int) -> np.ndarray:
        """(dimension, 6) Jacobian block, zero if never set"""
        if index in self._state_derivatives:
            return self._state_derivatives[index].copy()
        return np.zeros((self.observed_measurement.dimension, STATE_DIMENSION))

    def set_parameter_derivatives(self, driver: ParameterDriver, span_start: float, *values):
        self._parameter_derivatives.setdefault(driver, {})[span_start] = \
            np.array(values, dtype=np.float64)

    def get_parameter_derivatives(self, driver: ParameterDriver, date=None) -> np.ndarray:
        """
        Derivatives with respect to the span of ``driver`` valid at ``date``.

        Returns zeros for a driver (or span) that was not active.
        """
        spans = self._parameter_derivatives.get(driver)
        if spans:
            if date is None:
                if len(spans) == 1:
                    return next(iter(spans.values())).copy()
                raise ValueError(f"Driver {driver.name} has several spans, a date is required")
            for span in driver.spans:
                if span.contains(date) and span.start in spans:
                    return spans[span.start].copy()
        return np.zeros(self.observed_measurement.dimension)

    @property
    def derivatives_drivers(self) -> List[ParameterDriver]:
        return list(self._parameter_derivatives)


def fill_derivatives(estimated: EstimatedMeasurement, components: Sequence[Gradient],
                     satellites: Sequence, indices: Mapping[str, int],
                     drivers: Sequence[ParameterDriver]):
    """
    Split gradients into state and parameter derivatives.

    Parameters
    ----------
    estimated : EstimatedMeasurement
        Record to fill
    components : sequence of Gradient
        One gradient per measurement component
    satellites : sequence of ObservableSatellite
        Satellites of the measurement; the state block of the one at rank
        ``k`` lands in ``estimated.get_state_derivatives(k)``
    indices : ParameterIndexMap
        Span name to slot mapping used for the evaluation
    drivers : sequence of ParameterDriver
        Drivers of the measurement
    """
    gradients = [c.get_gradient() for c in components]
    for k, satellite in enumerate(satellites):
        first = STATE_DIMENSION * satellite.propagator_index
        estimated.set_state_derivatives(k, *(g[first:first + STATE_DIMENSION] for g in gradients))
    for driver in drivers:
        for span in driver.spans:
            index = indices.get(span.name)
            if index is not None:
                estimated.set_parameter_derivatives(driver, span.start, *(g[index] for g in gradients))
