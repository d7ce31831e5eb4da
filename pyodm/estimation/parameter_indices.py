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

"""Derivative slot allocation for the active estimated parameters"""

import logging
from collections.abc import Mapping
from typing import Iterable, Iterator

from ..core.constants import STATE_DIMENSION
from ..logger import TRACE
from .parameter_driver import ParameterDriver

logger = logging.getLogger(__name__)


class ParameterIndexMap(Mapping):
    """
    Span name to derivative slot mapping for one evaluation.

    The gradient layout is::

        [ x y z vx vy vz ] * n_states  |  active spans ...

    Slots after the state block are given in the order of the supplied
    drivers, then by span chronology. Drivers that are not selected are
    skipped and a span name seen twice keeps its first slot, so the same
    active set always produces the same map.

    Parameters
    ----------
    drivers : iterable of ParameterDriver
        Drivers of the measurement, in their declaration order
    n_states : int
        Number of spacecraft states in the evaluation
    """

    def __init__(self, drivers: Iterable[ParameterDriver], n_states: int):
        self.n_states = n_states
        self._indices = {}
        index = STATE_DIMENSION * n_states
        for driver in drivers:
            if not driver.selected:
                continue
            for span in driver.spans:
                if span.name not in self._indices:
                    self._indices[span.name] = index
                    index += 1
        logger.log(TRACE, f"Index map: {n_states} state(s), {len(self._indices)} parameter slot(s)")

    @property
    def free_parameters(self) -> int:
        """Total gradient dimension"""
        return STATE_DIMENSION * self.n_states + len(self._indices)

    @staticmethod
    def state_index(propagator_index: int) -> int:
        """First slot of the state block of a spacecraft"""
        return STATE_DIMENSION * propagator_index

    def __getitem__(self, name: str) -> int:
        return self._indices[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __repr__(self):
        return f"ParameterIndexMap(n_states={self.n_states}, {self._indices!r})"
