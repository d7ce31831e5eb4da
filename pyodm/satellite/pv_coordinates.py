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

"""Time stamped position, velocity and acceleration"""

import numpy as np

from ..autodiff import ops
from ..autodiff import vector as vec


class PVCoordinates:
    """
    Kinematic state of a point at a date.

    Components are floats in the value lane and gradients in the derivative
    lane; the date may be a float or a gradient too.

    Parameters
    ----------
    date : float or Gradient
        Seconds since reference epoch
    position : array_like
        Position (m)
    velocity : array_like, optional
        Velocity (m/s), zero if omitted
    acceleration : array_like, optional
        Acceleration (m/s^2), zero if omitted
    """

    def __init__(self, date, position, velocity=None, acceleration=None):
        self.date = date
        self.position = vec.as_vector(position)
        self.velocity = vec.as_vector(np.zeros(3) if velocity is None else velocity)
        self.acceleration = vec.as_vector(np.zeros(3) if acceleration is None else acceleration)

    def shifted_by(self, dt) -> "PVCoordinates":
        """
        Second order Taylor shift.

        Parameters
        ----------
        dt : float or Gradient
            Time shift (s)

        Returns
        -------
        PVCoordinates
            p + v dt + a dt^2 / 2, v + a dt, a at ``date + dt``
        """
        position = vec.linear_combination(1.0, self.position, dt, self.velocity,
                                          0.5 * dt * dt, self.acceleration)
        velocity = vec.linear_combination(1.0, self.velocity, dt, self.acceleration)
        return PVCoordinates(self.date + dt, position, velocity, self.acceleration)

    def transformed(self, transform) -> "PVCoordinates":
        """Apply a :class:`~pyodm.coordinate.frames.Transform`"""
        p, v, a = transform.transform_pv(self.position, self.velocity, self.acceleration)
        return PVCoordinates(self.date, p, v, a)

    def is_gradient(self) -> bool:
        return any(ops.is_gradient(c) for c in self.position)

    def to_values(self) -> "PVCoordinates":
        """Real parts only"""
        return PVCoordinates(ops.value_of(self.date), vec.values(self.position),
                             vec.values(self.velocity), vec.values(self.acceleration))

    def to_gradient(self, free_parameters: int) -> "PVCoordinates":
        """Constant gradient copy, derivatives added by later operations"""
        return PVCoordinates(self.date,
                             vec.constant_vector(self.position, free_parameters),
                             vec.constant_vector(self.velocity, free_parameters),
                             vec.constant_vector(self.acceleration, free_parameters))

    def __repr__(self):
        return (f"PVCoordinates(date={ops.value_of(self.date)!r}, "
                f"position={vec.values(self.position)!r}, velocity={vec.values(self.velocity)!r})")
