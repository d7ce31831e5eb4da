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
Observation Module.

Tracking observables and the machinery they share:

- **Observers**: ground stations and observing spacecraft
- **Common parameters**: clock offsets, downlink light time and transit state
- **Measurements**: azimuth/elevation, right ascension/declination
- **Models**: passive RA/Dec and two-way range on raw trajectories
"""

from .angular_az_el import AngularAzEl
from .angular_ra_dec import AngularRaDec
from .common_parameters import (
    CommonParametersWithDerivatives,
    CommonParametersWithoutDerivatives,
    compute_remote_parameters_with,
    compute_remote_parameters_without,
)
from .estimated import EstimatedMeasurement, EstimatedMeasurementBase, EstimationStatus
from .measurement import ObservedMeasurement
from .model import RaDecMeasurementModel, TwoWayRangeModel
from .observers import GroundStation, Observer, ObserverSatellite
