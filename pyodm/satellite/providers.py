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
Position/velocity providers.

A provider answers ``get_pv_coordinates(date, frame)`` and
``get_position(date, frame)``. Providers built on :class:`PVCoordinates`
arithmetic accept gradient dates directly; :class:`GradientPVProvider`
gives the same ability to providers that only work on floats.
"""

from abc import ABC, abstractmethod

from ..autodiff import ops
from .pv_coordinates import PVCoordinates


class PVCoordinatesProvider(ABC):
    """Trajectory of a point, in any frame"""

    @abstractmethod
    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        """PV at a date (float or gradient) expressed in ``frame``"""

    def get_position(self, date, frame):
        return self.get_pv_coordinates(date, frame).position


class AbsolutePVCoordinates(PVCoordinatesProvider):
    """
    PV sample extrapolated with a second order Taylor expansion.

    Parameters
    ----------
    frame : Frame
        Frame of the sample
    pv : PVCoordinates
        Sample, its date is the expansion point
    """

    def __init__(self, frame, pv: PVCoordinates):
        self.frame = frame
        self.pv = pv

    @property
    def date(self):
        return self.pv.date

    def is_static(self) -> bool:
        """True if velocity and acceleration both vanish, derivatives included"""
        return all(ops.is_zero(c) for c in self.pv.velocity) and \
            all(ops.is_zero(c) for c in self.pv.acceleration)

    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        if self.is_static():
            pv = PVCoordinates(date, self.pv.position, self.pv.velocity, self.pv.acceleration)
        else:
            pv = self.pv.shifted_by(date - self.pv.date)
        if frame is self.frame:
            return pv
        return pv.transformed(self.frame.get_transform_to(frame, date))


class GradientPVProvider(PVCoordinatesProvider):
    """
    Derivative lane view of a float-only provider.

    The wrapped provider is evaluated at the real part of the date and the
    result is shifted by ``date - date.value``: a zero length shift whose
    derivatives carry the dependency on the date.
    """

    def __init__(self, provider: PVCoordinatesProvider, free_parameters: int):
        self.provider = provider
        self.free_parameters = free_parameters

    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        if not ops.is_gradient(date):
            return self.provider.get_pv_coordinates(date, frame)
        base = self.provider.get_pv_coordinates(date.value, frame).to_values()
        zero_with_derivatives = date - date.value
        return base.to_gradient(self.free_parameters).shifted_by(zero_with_derivatives)
