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

"""Geodetic coordinate conversions on the WGS84 ellipsoid"""


import numpy as np

from ..core.constants import FE_WGS84, RE_WGS84

# First eccentricity squared
E2_WGS84 = FE_WGS84 * (2.0 - FE_WGS84)


def ecef2llh(xyz: np.ndarray) -> np.ndarray:
    """Convert ECEF coordinates to geodetic coordinates

    Parameters
    ----------
    xyz : np.ndarray
        ECEF coordinates [x, y, z] in meters

    Returns
    -------
    np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m)

    Notes
    -----
    Fixed point iteration on the latitude, stopped once the update falls
    below 1e-12 rad or after 10 passes.
    """
    x, y, z = xyz[0], xyz[1], xyz[2]

    lon = np.arctan2(y, x)
    p = np.hypot(x, y)
    lat = np.arctan2(z, p * (1.0 - E2_WGS84))

    for _ in range(10):
        N = RE_WGS84 / np.sqrt(1.0 - E2_WGS84 * np.sin(lat)**2)
        h = p / np.cos(lat) - N
        new_lat = np.arctan2(z, p * (1.0 - E2_WGS84 * N / (N + h)))
        converged = abs(new_lat - lat) < 1e-12
        lat = new_lat
        if converged:
            break

    # height consistent with the returned latitude
    N = RE_WGS84 / np.sqrt(1.0 - E2_WGS84 * np.sin(lat)**2)
    h = p / np.cos(lat) - N

    return np.array([lat, lon, h])


def llh2ecef(llh: np.ndarray) -> np.ndarray:
    """Convert geodetic coordinates to ECEF coordinates

    Parameters
    ----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m)

    Returns
    -------
    np.ndarray
        ECEF coordinates [x, y, z] in meters

    Examples
    --------
    >>> llh = np.array([np.radians(35.3606), np.radians(138.7274), 3776.0])
    >>> ecef = llh2ecef(llh)
    """
    lat, lon, h = llh[0], llh[1], llh[2]

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)

    N = RE_WGS84 / np.sqrt(1.0 - E2_WGS84 * sin_lat**2)

    x = (N + h) * cos_lat * np.cos(lon)
    y = (N + h) * cos_lat * np.sin(lon)
    z = (N * (1.0 - E2_WGS84) + h) * sin_lat

    return np.array([x, y, z])

