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

"""Core Module.

This module provides the foundation shared by every other pyodm module:

- **Constants**: physical constants, Earth parameters, frame angles and the
  light-time iteration settings
- **Exceptions**: the error taxonomy used by measurement evaluation
- **Angle wrapping**: whole-turn corrections applied to periodic observables

Example Usage:
    >>> from pyodm.core import CLIGHT, normalize_angle
    >>> wrapped = normalize_angle(-3.0, 3.0)  # close to 3.28 rad
"""

from .constants import *
from .exceptions import (
    ConfigurationError,
    DegenerateGeometryError,
    MissingSatelliteError,
    PreconditionError,
    PyodmError,
)
from .wrap import normalize_angle, two_pi_wrap
