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

"""Physical Constants and Tracking Model Parameters"""

import numpy as np

# Physical Constants
CLIGHT = 299792458.0  # speed of light (m/s)

# GPS frequencies (carrier phase wavelengths are CLIGHT / FREQ)
FREQ_L1 = 1.57542E9   # L1 frequency (Hz)
FREQ_L2 = 1.22760E9   # L2 frequency (Hz)
FREQ_L5 = 1.17645E9   # L5 frequency (Hz)

# Earth Parameters (WGS84)
RE_WGS84 = 6378137.0           # earth semimajor axis (m)
FE_WGS84 = 1.0 / 298.257223563 # earth flattening
OMGE = 7.2921151467E-5         # earth angular velocity (rad/s)
GME = 3.986004418E14           # earth gravitational constant (m^3/s^2)

# Earth rotation angle at the reference epoch (rad)
ERA0 = 2.0 * np.pi * 0.7790572732640

# Frame bias between GCRF and EME2000 (IERS 2003, rad)
AS2R = np.pi / (180.0 * 3600.0)  # arcseconds to radians
FRAME_BIAS_DALPHA0 = -0.0146 * AS2R
FRAME_BIAS_XI0 = -0.016617 * AS2R
FRAME_BIAS_ETA0 = -0.0068192 * AS2R

# Mean obliquity of the ecliptic at J2000 (rad)
OBLIQUITY_J2000 = 84381.406 * AS2R

# Angles
TWO_PI = 2.0 * np.pi
HALF_PI = 0.5 * np.pi

# Signal travel time iteration
MAX_LIGHT_TIME_ITER = 10       # fixed iteration bound for light-time loops
LIGHT_TIME_ULPS = 2.0          # convergence threshold in ulps of the delay

# State layout: position (3) + velocity (3) per spacecraft
STATE_DIMENSION = 6
