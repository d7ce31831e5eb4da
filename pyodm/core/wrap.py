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
Angle wrapping utilities.

Azimuth and right ascension are periodic observables: the principal value
returned by atan2 may sit one turn away from the observed value. These
helpers move a computed angle by whole turns so that residuals stay small.
"""

import numpy as np
from numba import njit

from .constants import TWO_PI


@njit(cache=True)
def normalize_angle(angle, center):
    """
    Normalize an angle in a 2π wide interval around a center value.

    Parameters
    ----------
    angle : float
        Angle to normalize (rad)
    center : float
        Center of the desired interval (rad)

    Returns
    -------
    float
        Angle equal to ``angle`` modulo 2π, in [center - π, center + π)
    """
    return angle - TWO_PI * np.floor((angle + np.pi - center) / TWO_PI)


@njit(cache=True)
def two_pi_wrap(angle, reference):
    """
    Whole-turn shift bringing ``angle`` closest to ``reference``.

    Parameters
    ----------
    angle : float
        Principal value of the computed angle (rad)
    reference : float
        Observed value the result should stay close to (rad)

    Returns
    -------
    float
        Integer multiple of 2π to add to ``angle``
    """
    return normalize_angle(angle, reference) - angle
