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

"""Spacecraft state under two-body dynamics"""

import numpy as np

from ..autodiff import ops
from ..autodiff import vector as vec
from ..autodiff.gradient import Gradient
from ..coordinate.frames import GCRF
from ..core.constants import GME, STATE_DIMENSION
from .providers import PVCoordinatesProvider
from .pv_coordinates import PVCoordinates


def kepler_acceleration(position, mu: float = GME):
    """
    Central body acceleration -mu r / |r|^3.

    Parameters
    ----------
    position : array_like
        Position vector (m), floats or gradients
    mu : float
        Gravitational parameter (m^3/s^2)
    """
    r2 = vec.dot(position, position)
    r = ops.sqrt(r2)
    return vec.scale(-mu / (r2 * r), position)


class SpacecraftState(PVCoordinatesProvider):
    """
    Position and velocity of a spacecraft at a date.

    The acceleration is the two-body acceleration of the position, so the
    state is self-consistent under :meth:`shifted_by`.

    Parameters
    ----------
    date : float
        Seconds since reference epoch
    position : array_like
        Position (m)
    velocity : array_like
        Velocity (m/s)
    frame : Frame
        Frame of definition, GCRF by default
    mu : float
        Central body gravitational parameter (m^3/s^2)
    """

    def __init__(self, date, position, velocity, frame=GCRF, mu: float = GME):
        self.frame = frame
        self.mu = mu
        self.pv = PVCoordinates(date, position, velocity, kepler_acceleration(position, mu))

    @classmethod
    def from_vector(cls, date, state_vector, frame=GCRF, mu: float = GME) -> "SpacecraftState":
        """Build from a 6 element [x, y, z, vx, vy, vz] vector"""
        state_vector = np.asarray(state_vector, dtype=np.float64)
        return cls(date, state_vector[:3], state_vector[3:6], frame, mu)

    @property
    def date(self):
        return self.pv.date

    @property
    def position(self):
        return self.pv.position

    @property
    def velocity(self):
        return self.pv.velocity

    def to_vector(self) -> np.ndarray:
        return np.concatenate([vec.values(self.pv.position), vec.values(self.pv.velocity)])

    def shifted_by(self, dt) -> "SpacecraftState":
        """State propagated by a Taylor expansion over ``dt`` seconds"""
        shifted = self.pv.shifted_by(dt)
        return SpacecraftState(shifted.date, shifted.position, shifted.velocity, self.frame, self.mu)

    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        pv = self.pv.shifted_by(date - self.pv.date)
        if frame is self.frame:
            return pv
        return pv.transformed(self.frame.get_transform_to(frame, date))

    def to_gradient_pv(self, free_parameters: int, first_index: int) -> PVCoordinates:
        """
        PV whose position and velocity are seeded variables.

        Position components take slots ``first_index .. first_index + 2`` and
        velocity components the next three.
        """
        if first_index + STATE_DIMENSION > free_parameters:
            raise ValueError(f"State slots {first_index}..{first_index + 5} "
                             f"exceed {free_parameters} free parameters")
        position = vec.gradient_vector(self.pv.position, free_parameters, first_index)
        velocity = vec.gradient_vector(self.pv.velocity, free_parameters, first_index + 3)
        return PVCoordinates(Gradient.constant(free_parameters, ops.value_of(self.date)),
                             position, velocity, kepler_acceleration(position, self.mu))

    def __repr__(self):
        return (f"SpacecraftState(date={ops.value_of(self.date)!r}, frame={self.frame.name}, "
                f"position={vec.values(self.position)!r})")
