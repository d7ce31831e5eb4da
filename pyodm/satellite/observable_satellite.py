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

"""Spacecraft tracked by measurements"""

from typing import List, Optional, Sequence

from ..core.exceptions import MissingSatelliteError
from ..estimation.parameter_driver import ParameterDriver
from .clock import QuadraticClockModel


class ObservableSatellite:
    """
    Measured spacecraft.

    Parameters
    ----------
    propagator_index : int
        Position of the spacecraft state in the states array handed to
        measurement evaluation
    name : str, optional
        Satellite name, ``sat-<index>`` by default
    clock : QuadraticClockModel, optional
        Onboard clock, zero offset by default
    """

    def __init__(self, propagator_index: int, name: Optional[str] = None,
                 clock: Optional[QuadraticClockModel] = None):
        if propagator_index < 0:
            raise ValueError(f"Negative propagator index {propagator_index}")
        self.propagator_index = propagator_index
        self.name = name if name is not None else f"sat-{propagator_index}"
        self.clock = clock if clock is not None else QuadraticClockModel(self.name)

    @property
    def parameter_drivers(self) -> List[ParameterDriver]:
        return self.clock.parameter_drivers

    def select_state(self, states: Sequence):
        """State of this satellite in the states array"""
        if self.propagator_index >= len(states):
            raise MissingSatelliteError(
                f"Satellite {self.name} expects state #{self.propagator_index}, "
                f"only {len(states)} state(s) provided")
        return states[self.propagator_index]

    def __repr__(self):
        return f"ObservableSatellite({self.propagator_index}, {self.name!r})"
