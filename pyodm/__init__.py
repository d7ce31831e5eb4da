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
PyODM - Orbit Determination Measurement Library

Light-time aware tracking observables (angles, carrier phase, two-way range)
with exact first order derivatives from forward-mode dual numbers, for use
inside batch least squares and Kalman orbit determination.
"""

__version__ = "1.0.0"
__author__ = "PyODM Development Team"
__title__ = "pyodm"
__description__ = "Light-time aware tracking measurement models with derivatives"

from . import logger
from .core import *
from .autodiff import Gradient
from .coordinate import *
from .config import EstimationConfig, SignalTravelTimeConfig
from .estimation import ParameterDriver, ParameterIndexMap, Span
from .satellite import *
from .signal import *
from .observation import *
from .gnss import *
