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
Remote observers: ground stations and observing spacecraft.

An observer is the remote end of a measurement. It exposes its trajectory
in the value lane (:meth:`Observer.get_pv_coordinates`) and a provider for
the derivative lane (:meth:`Observer.get_gradient_provider`) in which its
own estimated parameters are seeded.
"""

from abc import ABC, abstractmethod
from typing import List, Mapping, Optional

import numpy as np

from ..autodiff import ops
from ..autodiff import vector as vec
from ..coordinate.dcm import ecef2enu_dcm
from ..coordinate.frames import ITRF
from ..coordinate.transforms import ecef2llh, llh2ecef
from ..estimation.parameter_driver import ParameterDriver
from ..satellite.clock import QuadraticClockModel
from ..satellite.providers import (
    AbsolutePVCoordinates,
    GradientPVProvider,
    PVCoordinatesProvider,
)
from ..satellite.pv_coordinates import PVCoordinates
from ..satellite.spacecraft_state import SpacecraftState

# Station displacement driver suffixes
EAST_SUFFIX = "-East"
NORTH_SUFFIX = "-North"
ZENITH_SUFFIX = "-Zenith"


class Observer(ABC):
    """Remote participant of a measurement"""

    def __init__(self, name: str, clock: Optional[QuadraticClockModel] = None):
        self.name = name
        self.clock = clock if clock is not None else QuadraticClockModel(name)

    @property
    def parameter_drivers(self) -> List[ParameterDriver]:
        """Clock drivers followed by the observer specific drivers"""
        return self.clock.parameter_drivers + self._own_drivers()

    def _own_drivers(self) -> List[ParameterDriver]:
        return []

    @abstractmethod
    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        """Observer PV at a float date, in ``frame``"""

    @abstractmethod
    def get_gradient_provider(self, free_parameters: int,
                              indices: Mapping[str, int]) -> PVCoordinatesProvider:
        """Provider accepting gradient dates, with the observer drivers seeded"""


class _StationProvider(PVCoordinatesProvider):

    def __init__(self, station: "GroundStation", free_parameters: int, indices: Mapping[str, int]):
        self.station = station
        self.free_parameters = free_parameters
        self.indices = indices

    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        span_date = ops.value_of(date)
        offsets = [d.get_gradient(self.free_parameters, self.indices, span_date)
                   for d in self.station.displacement_drivers]
        return self.station._pv_from_offsets(date, frame, offsets)


class GroundStation(Observer):
    """
    Station fixed on the Earth, with estimable east/north/zenith displacement.

    Parameters
    ----------
    name : str
        Station name, prefix of the driver names
    llh : array_like
        Geodetic coordinates [lat, lon, height] (rad, rad, m)
    body_frame : Frame
        Earth fixed frame, ITRF by default
    clock : QuadraticClockModel, optional
        Station clock, zero offset by default

    Examples
    --------
    >>> station = GroundStation("tokyo", np.radians([35.68, 139.77, 0.0]))
    >>> pv = station.get_pv_coordinates(0.0, GCRF)
    """

    def __init__(self, name: str, llh, body_frame=ITRF,
                 clock: Optional[QuadraticClockModel] = None):
        super().__init__(name, clock)
        self.llh = np.asarray(llh, dtype=np.float64)
        self.body_frame = body_frame
        self.reference_position = llh2ecef(self.llh)
        # rows: east, north, zenith axes in the body frame
        self._enu = ecef2enu_dcm(self.llh)
        self.east_driver = ParameterDriver(name + EAST_SUFFIX, 0.0, scale=1.0)
        self.north_driver = ParameterDriver(name + NORTH_SUFFIX, 0.0, scale=1.0)
        self.zenith_driver = ParameterDriver(name + ZENITH_SUFFIX, 0.0, scale=1.0)

    @classmethod
    def from_position(cls, name: str, position, body_frame=ITRF,
                      clock: Optional[QuadraticClockModel] = None) -> "GroundStation":
        """Station at a Cartesian position of the body frame (m)"""
        return cls(name, ecef2llh(np.asarray(position, dtype=np.float64)), body_frame, clock)

    @property
    def displacement_drivers(self) -> List[ParameterDriver]:
        return [self.east_driver, self.north_driver, self.zenith_driver]

    def _own_drivers(self) -> List[ParameterDriver]:
        return self.displacement_drivers

    def _pv_from_offsets(self, date, frame, offsets) -> PVCoordinates:
        east, north, zenith = self._enu
        position = vec.linear_combination(1.0, self.reference_position,
                                          offsets[0], east, offsets[1], north, offsets[2], zenith)
        pv = PVCoordinates(date, position)
        if frame is self.body_frame:
            return pv
        return pv.transformed(self.body_frame.get_transform_to(frame, date))

    def get_position_in_body_frame(self, date=None) -> np.ndarray:
        """Displaced station position (m) in the body frame"""
        east, north, zenith = self._enu
        offsets = [d.get_value(date) for d in self.displacement_drivers]
        return vec.linear_combination(1.0, self.reference_position,
                                      offsets[0], east, offsets[1], north, offsets[2], zenith)

    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        offsets = [d.get_value(date) for d in self.displacement_drivers]
        return self._pv_from_offsets(date, frame, offsets)

    def get_gradient_provider(self, free_parameters: int,
                              indices: Mapping[str, int]) -> PVCoordinatesProvider:
        return _StationProvider(self, free_parameters, indices)

    def get_topocentric_axes(self, frame, date):
        """
        East, north and zenith unit vectors expressed in ``frame``.

        Parameters
        ----------
        frame : Frame
            Output frame
        date : float or Gradient
            Date of the body frame orientation

        Returns
        -------
        tuple of np.ndarray
            (east, north, zenith)
        """
        transform = self.body_frame.get_static_transform_to(frame, date)
        return tuple(transform.transform_vector(axis) for axis in self._enu)

    def topocentric_to_frame(self, direction, frame, date) -> np.ndarray:
        """Rotate a direction given in (east, north, zenith) components into ``frame``"""
        east, north, zenith = self.get_topocentric_axes(frame, date)
        return vec.linear_combination(direction[0], east, direction[1], north, direction[2], zenith)

    def __repr__(self):
        return f"GroundStation({self.name!r}, llh={self.llh!r})"


class ObserverSatellite(Observer):
    """
    Spacecraft acting as the remote end of a measurement.

    Parameters
    ----------
    name : str
        Observer name
    provider : PVCoordinatesProvider
        Observer trajectory
    clock : QuadraticClockModel, optional
        Onboard clock, zero offset by default
    """

    def __init__(self, name: str, provider: PVCoordinatesProvider,
                 clock: Optional[QuadraticClockModel] = None):
        super().__init__(name, clock)
        self.provider = provider

    def get_pv_coordinates(self, date, frame) -> PVCoordinates:
        return self.provider.get_pv_coordinates(date, frame)

    def get_gradient_provider(self, free_parameters: int,
                              indices: Mapping[str, int]) -> PVCoordinatesProvider:
        # these providers are written with generic arithmetic already
        if isinstance(self.provider, (AbsolutePVCoordinates, SpacecraftState)):
            return self.provider
        return GradientPVProvider(self.provider, free_parameters)

    def __repr__(self):
        return f"ObserverSatellite({self.name!r})"
