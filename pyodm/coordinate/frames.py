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
Reference frames and time dependent transforms between them.

All frames share the Earth center as origin, so a transform is a rotation
plus the angular rate of that rotation. Frames form a tree rooted at GCRF;
each frame knows the transform from its parent at any date.

Example Usage:
    >>> from pyodm.coordinate.frames import GCRF, ITRF
    >>> t = GCRF.get_transform_to(ITRF, 3600.0)
    >>> r_itrf = t.transform_position([7.0e6, 0.0, 0.0])
"""

from typing import Callable, Optional

import numpy as np

from ..autodiff import vector as vec
from ..core.constants import OMGE
from .dcm import ecliptic_dcm, eci2ecef_dcm, frame_bias_dcm


_ZERO = np.zeros(3)


class Transform:
    """
    Rotation with angular rate mapping coordinates from a source frame
    to a destination frame.

    Positions map as ``p' = R p``; velocities pick up the transport term
    ``v' = R v + w x p'`` where ``w`` is the rate of the transform expressed
    in the destination frame.

    Parameters
    ----------
    rotation : np.ndarray
        3x3 rotation matrix (float or object dtype)
    rotation_rate : array_like, optional
        Angular rate vector in the destination frame (rad/s), zero if omitted
    """

    def __init__(self, rotation: np.ndarray, rotation_rate=None):
        self.rotation = rotation
        self.rotation_rate = vec.as_vector(_ZERO if rotation_rate is None else rotation_rate)
        self._identity = False

    @classmethod
    def identity(cls) -> "Transform":
        t = cls(np.eye(3))
        t._identity = True
        return t

    def is_identity(self) -> bool:
        return self._identity

    def has_rate(self) -> bool:
        return any(v != 0.0 for v in vec.values(self.rotation_rate))

    def transform_vector(self, v) -> np.ndarray:
        if self._identity:
            return vec.as_vector(v)
        return vec.rotate(self.rotation, v)

    def transform_position(self, p) -> np.ndarray:
        return self.transform_vector(p)

    def transform_pv(self, position, velocity, acceleration):
        """
        Transform position, velocity and acceleration.

        Returns
        -------
        tuple
            (position, velocity, acceleration) in the destination frame
        """
        if self._identity:
            return vec.as_vector(position), vec.as_vector(velocity), vec.as_vector(acceleration)
        p = vec.rotate(self.rotation, position)
        rv = vec.rotate(self.rotation, velocity)
        ra = vec.rotate(self.rotation, acceleration)
        if not self.has_rate():
            return p, rv, ra
        w = self.rotation_rate
        w_x_p = vec.cross(w, p)
        v = vec.add(rv, w_x_p)
        a = vec.linear_combination(1.0, ra, 2.0, vec.cross(w, rv), 1.0, vec.cross(w, w_x_p))
        return p, v, a

    def compose(self, after: "Transform") -> "Transform":
        """Transform applying ``self`` first, then ``after``"""
        if self._identity:
            return after
        if after._identity:
            return self
        rotation = vec.matmul(after.rotation, self.rotation)
        rate = vec.add(vec.rotate(after.rotation, self.rotation_rate), after.rotation_rate)
        return Transform(rotation, rate)

    def inverse(self) -> "Transform":
        if self._identity:
            return self
        rt = vec.transpose(self.rotation)
        return Transform(rt, vec.negate(vec.rotate(rt, self.rotation_rate)))

    def static(self) -> "Transform":
        """Same rotation without angular rate"""
        if self._identity:
            return self
        return Transform(self.rotation)


class Frame:
    """
    Node of the frame tree.

    Parameters
    ----------
    name : str
        Frame name
    parent : Frame, optional
        Parent frame, None only for the root
    transform_provider : callable, optional
        ``provider(date) -> Transform`` from the parent to this frame
    pseudo_inertial : bool
        True if Newtonian dynamics can be written in this frame
    """

    def __init__(self, name: str, parent: Optional["Frame"] = None,
                 transform_provider: Optional[Callable] = None,
                 pseudo_inertial: bool = False):
        if parent is not None and transform_provider is None:
            raise ValueError(f"Frame {name} needs a transform from its parent {parent.name}")
        self.name = name
        self.parent = parent
        self.transform_provider = transform_provider
        self.pseudo_inertial = pseudo_inertial
        self.depth = 0 if parent is None else parent.depth + 1

    def is_pseudo_inertial(self) -> bool:
        return self.pseudo_inertial

    def get_root(self) -> "Frame":
        frame = self
        while frame.parent is not None:
            frame = frame.parent
        return frame

    def _transform_from_root(self, date) -> Transform:
        chain = []
        frame = self
        while frame.parent is not None:
            chain.append(frame)
            frame = frame.parent
        transform = Transform.identity()
        for frame in reversed(chain):
            transform = transform.compose(frame.transform_provider(date))
        return transform

    def get_transform_to(self, destination: "Frame", date) -> Transform:
        """
        Transform from this frame to the destination frame at a date.

        Parameters
        ----------
        destination : Frame
            Target frame
        date : float or Gradient
            Date in seconds since reference epoch

        Returns
        -------
        Transform
            Kinematic transform (rotation and rotation rate)
        """
        if destination is self:
            return Transform.identity()
        if destination.get_root() is not self.get_root():
            raise ValueError(f"Frames {self.name} and {destination.name} are not connected")
        to_root = self._transform_from_root(date).inverse()
        return to_root.compose(destination._transform_from_root(date))

    def get_static_transform_to(self, destination: "Frame", date) -> Transform:
        """Rotation part only of :meth:`get_transform_to`"""
        return self.get_transform_to(destination, date).static()

    def __repr__(self):
        return f"Frame({self.name!r})"

    def __str__(self):
        return self.name


def _constant_provider(rotation: np.ndarray) -> Callable:
    transform = Transform(rotation)
    return lambda date: transform


def _earth_rotation_provider(date) -> Transform:
    return Transform(eci2ecef_dcm(date), (0.0, 0.0, -OMGE))


# Predefined frames
GCRF = Frame("GCRF", pseudo_inertial=True)
EME2000 = Frame("EME2000", GCRF, _constant_provider(frame_bias_dcm()), pseudo_inertial=True)
ECLIPTIC_J2000 = Frame("ECLIPTIC_J2000", EME2000, _constant_provider(ecliptic_dcm()),
                       pseudo_inertial=True)
ITRF = Frame("ITRF", GCRF, _earth_rotation_provider, pseudo_inertial=False)
