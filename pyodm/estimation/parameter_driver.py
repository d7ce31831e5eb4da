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

"""
Parameter drivers: named scalar unknowns with time validity spans.

A driver holds one value per validity span. Initially a driver has a single
span covering all dates and named after the driver itself; splitting it with
:meth:`ParameterDriver.add_span_at_date` gives each span its own name and
value, so a piecewise constant parameter (a clock offset re-estimated every
day, for instance) gets one derivative slot per span.

The estimation loop owns the drivers: it toggles ``selected`` and writes the
values between iterations. Measurements only read them.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from ..autodiff import Gradient
from ..autodiff.ops import value_of
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Span:
    """Validity interval [start, end) of one driver value"""
    name: str
    start: float
    end: float
    value: float

    def contains(self, date: float) -> bool:
        return self.start <= date < self.end


def _date_label(date: float) -> str:
    if np.isneginf(date):
        return "Start"
    return f"{date:+.6f}"


class ParameterDriver:
    """
    Named scalar unknown.

    Parameters
    ----------
    name : str
        Driver name, must be unique among the drivers of one estimation
    reference_value : float
        Initial value of every span
    scale : float
        Typical magnitude used to normalize the parameter
    min_value, max_value : float
        Bounds enforced by :meth:`set_value`
    """

    def __init__(self, name: str, reference_value: float = 0.0, scale: float = 1.0,
                 min_value: float = -np.inf, max_value: float = np.inf):
        if scale == 0.0:
            raise ConfigurationError(f"Parameter driver {name} has a zero scale")
        if min_value > max_value:
            raise ConfigurationError(
                f"Parameter driver {name}: min {min_value} larger than max {max_value}")
        self.name = name
        self.reference_value = float(reference_value)
        self.scale = float(scale)
        self.min_value = float(min_value)
        self.max_value = float(max_value)
        self.selected = False
        self._spans: List[Span] = [Span(name, -np.inf, np.inf, self._clamp(reference_value))]

    # Span management

    @property
    def spans(self) -> List[Span]:
        """Spans in chronological order"""
        return list(self._spans)

    def get_nb_of_values(self) -> int:
        return len(self._spans)

    def _span_index(self, date: float) -> int:
        starts = [s.start for s in self._spans]
        return max(bisect.bisect_right(starts, date) - 1, 0)

    def _find_span(self, date) -> Span:
        return self._spans[self._span_index(value_of(date))]

    def _rename_spans(self):
        if len(self._spans) == 1:
            self._spans[0].name = self.name
        else:
            for span in self._spans:
                span.name = f"Span{self.name}{_date_label(span.start)}"

    def add_span_at_date(self, date: float):
        """
        Split the span containing ``date`` at that date.

        Both halves keep the current value. Splitting at an existing
        boundary does nothing.
        """
        date = float(date)
        if not np.isfinite(date):
            raise ConfigurationError(f"Cannot split driver {self.name} at {date}")
        index = self._span_index(date)
        span = self._spans[index]
        if span.start == date:
            return
        self._spans.insert(index + 1, Span("", date, span.end, span.value))
        span.end = date
        self._rename_spans()
        logger.debug(f"Driver {self.name} split at {date}, {len(self._spans)} spans")

    def add_spans(self, start: float, end: float, step: float):
        """Split the driver every ``step`` seconds between ``start`` and ``end``"""
        if step <= 0.0:
            raise ConfigurationError(f"Span step must be positive, got {step}")
        date = start + step
        k = 1
        while date < end:
            self.add_span_at_date(date)
            k += 1
            date = start + k * step

    def get_span_name(self, date) -> str:
        return self._find_span(date).name

    def get_span_names(self) -> List[str]:
        return [s.name for s in self._spans]

    # Values

    def _clamp(self, value: float) -> float:
        return float(min(max(value, self.min_value), self.max_value))

    def get_value(self, date=None) -> float:
        """
        Value valid at a date.

        Parameters
        ----------
        date : float or Gradient, optional
            Date in seconds since reference epoch; may be omitted only for
            single span drivers
        """
        if date is None:
            if len(self._spans) > 1:
                raise ConfigurationError(
                    f"Driver {self.name} has {len(self._spans)} spans, a date is required")
            return self._spans[0].value
        return self._find_span(date).value

    def set_value(self, value: float, date=None):
        """Set the value of the span at ``date`` (all spans if None), clamped to the bounds"""
        clamped = self._clamp(value)
        if date is None:
            for span in self._spans:
                span.value = clamped
        else:
            self._find_span(date).value = clamped

    def get_normalized_value(self, date=None) -> float:
        return (self.get_value(date) - self.reference_value) / self.scale

    def set_normalized_value(self, normalized: float, date=None):
        self.set_value(self.reference_value + self.scale * normalized, date)

    def reset_to_reference(self):
        self.set_value(self.reference_value)

    def is_selected(self) -> bool:
        return self.selected

    def set_selected(self, selected: bool):
        self.selected = bool(selected)

    def get_gradient(self, free_parameters: int, indices: Dict[str, int], date=None) -> Gradient:
        """
        Value as a gradient, seeded at the slot of the span if it is active.

        Parameters
        ----------
        free_parameters : int
            Gradient dimension
        indices : Mapping[str, int]
            Span name to derivative slot
        date : float or Gradient, optional
            Date selecting the span
        """
        span = self._find_span(date) if date is not None else self._spans[0]
        index: Optional[int] = indices.get(span.name)
        if index is None:
            return Gradient.constant(free_parameters, span.value)
        return Gradient.variable(free_parameters, index, span.value)

    def __repr__(self):
        flag = "selected" if self.selected else "fixed"
        return f"ParameterDriver({self.name!r}, {len(self._spans)} span(s), {flag})"
