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

"""Coordinate transformation module"""

from .dcm import (
    earth_rotation_angle,
    ecef2enu_dcm,
    eci2ecef_dcm,
    ecliptic_dcm,
    frame_bias_dcm,
)
from .frames import ECLIPTIC_J2000, EME2000, GCRF, ITRF, Frame, Transform
from .transforms import ecef2llh, llh2ecef
