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

"""Direction Cosine Matrix (DCM) transformations between reference frames

Earth rotation matrices accept the date either as a float or as a
:class:`~pyodm.autodiff.Gradient`, in which case the returned matrix has
object dtype and carries the date derivatives.
"""

import numpy as np
from scipy.spatial.transform import Rotation

from ..autodiff import ops
from ..autodiff.vector import matrix
from ..core.constants import (
    ERA0,
    FRAME_BIAS_DALPHA0,
    FRAME_BIAS_ETA0,
    FRAME_BIAS_XI0,
    OBLIQUITY_J2000,
    OMGE,
)


def earth_rotation_angle(t):
    """
    Earth rotation angle under a uniform rotation model

    Parameters:
    -----------
    t : float or Gradient
        Time since reference epoch (s)

    Returns:
    --------
    float or Gradient
        Rotation angle of the terrestrial frame about the z axis (rad)
    """
    return ERA0 + OMGE * t


def eci2ecef_dcm(t) -> np.ndarray:
    """
    Earth-Centered-Inertial to Earth-Centered-Earth-Fixed direction cosine matrix

    Parameters:
    -----------
    t : float or Gradient
        Time since reference epoch (s)

    Returns:
    --------
    C_i_e : np.ndarray
        ECI->ECEF direction cosine matrix (3x3)
    """
    theta = earth_rotation_angle(t)
    sin_wie = ops.sin(theta)
    cos_wie = ops.cos(theta)

    return matrix([
        [cos_wie, sin_wie, 0.0],
        [-sin_wie, cos_wie, 0.0],
        [0.0, 0.0, 1.0]
    ])


def ecef2enu_dcm(llh: np.ndarray) -> np.ndarray:
    """
    Earth-Centered-Earth-Fixed to East-North-Up direction cosine matrix

    Parameters:
    -----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m)

    Returns:
    --------
    C_e_n : np.ndarray
        ECEF->ENU direction cosine matrix (3x3), rows are the east, north
        and up axes expressed in ECEF
    """
    sin_lat = np.sin(llh[0])
    cos_lat = np.cos(llh[0])
    sin_lon = np.sin(llh[1])
    cos_lon = np.cos(llh[1])

    return np.array([
        [-sin_lon, cos_lon, 0.0],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat]
    ], dtype=np.float64)


def frame_bias_dcm() -> np.ndarray:
    """
    GCRF to EME2000 frame bias matrix

    Returns:
    --------
    np.ndarray
        Constant rotation R1(-eta0) R2(xi0) R3(dalpha0) (3x3)
    """
    # frame rotations are the transposes of scipy's active rotations
    return Rotation.from_euler(
        'XYZ', [FRAME_BIAS_ETA0, -FRAME_BIAS_XI0, -FRAME_BIAS_DALPHA0]
    ).as_matrix()


def ecliptic_dcm(obliquity: float = OBLIQUITY_J2000) -> np.ndarray:
    """
    Equatorial to ecliptic direction cosine matrix

    Parameters:
    -----------
    obliquity : float
        Mean obliquity of the ecliptic (rad)

    Returns:
    --------
    np.ndarray
        Frame rotation about the x axis by the obliquity (3x3)
    """
    return Rotation.from_euler('x', -obliquity).as_matrix()
