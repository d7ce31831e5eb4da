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

"""Participant clock models"""

from dataclasses import dataclass
from typing import Any, List, Mapping

from ..autodiff.ops import value_of
from ..estimation.parameter_driver import ParameterDriver

# Driver name suffixes
CLOCK_OFFSET_SUFFIX = "-clock"
CLOCK_DRIFT_SUFFIX = "-clock-drift"
CLOCK_ACCELERATION_SUFFIX = "-clock-acceleration"


@dataclass(frozen=True)
class ClockOffset:
    """
    Clock error at a date.

    Attributes
    ----------
    date : float or Gradient
        Epoch (s since reference epoch)
    offset : float or Gradient
        Clock bias (s)
    rate : float or Gradient
        Clock drift (s/s)
    acceleration : float or Gradient
        Clock drift rate (s/s^2)
    """
    date: Any
    offset: Any
    rate: Any
    acceleration: Any


def _quadratic(date, reference_date, a0, a1, a2) -> ClockOffset:
    # Time from clock reference epoch
    dt = date - reference_date

    # Clock bias, drift and drift rate (polynomial model)
    offset = a0 + a1 * dt + a2 * dt * dt
    rate = a1 + 2.0 * a2 * dt
    acceleration = 2.0 * a2
    return ClockOffset(date, offset, rate, acceleration)


class QuadraticClockModel:
    """
    Clock bias polynomial a0 + a1 dt + a2 dt^2 with estimable coefficients.

    Parameters
    ----------
    name : str
        Participant name, prefix of the driver names
    a0 : float
        Bias at the reference date (s)
    a1 : float
        Drift (s/s)
    a2 : float
        Drift rate (s/s^2)
    reference_date : float
        Expansion epoch (s since reference epoch)

    Examples
    --------
    >>> clock = QuadraticClockModel("ground", a0=1.0e-6)
    >>> clock.get_offset(100.0).offset
    1e-06
    """

    def __init__(self, name: str, a0: float = 0.0, a1: float = 0.0, a2: float = 0.0,
                 reference_date: float = 0.0):
        self.name = name
        self.reference_date = float(reference_date)
        self.offset_driver = ParameterDriver(name + CLOCK_OFFSET_SUFFIX, a0, scale=1.0e-6)
        self.drift_driver = ParameterDriver(name + CLOCK_DRIFT_SUFFIX, a1, scale=1.0e-12)
        self.acceleration_driver = ParameterDriver(name + CLOCK_ACCELERATION_SUFFIX, a2, scale=1.0e-18)

    @property
    def parameter_drivers(self) -> List[ParameterDriver]:
        return [self.offset_driver, self.drift_driver, self.acceleration_driver]

    def get_offset(self, date) -> ClockOffset:
        """
        Clock offset in the value lane.

        Parameters
        ----------
        date : float
            Date (s since reference epoch)
        """
        return _quadratic(date, self.reference_date,
                          self.offset_driver.get_value(date),
                          self.drift_driver.get_value(date),
                          self.acceleration_driver.get_value(date))

    def get_offset_gradient(self, date, free_parameters: int, indices: Mapping[str, int]) -> ClockOffset:
        """
        Clock offset in the derivative lane.

        Coefficients whose driver span is in ``indices`` are seeded, the
        others are constants. ``date`` may be a float or a gradient.
        """
        span_date = value_of(date)
        return _quadratic(date, self.reference_date,
                          self.offset_driver.get_gradient(free_parameters, indices, span_date),
                          self.drift_driver.get_gradient(free_parameters, indices, span_date),
                          self.acceleration_driver.get_gradient(free_parameters, indices, span_date))
