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
Scalar functions working on floats and gradients alike.

Algorithms written with these functions run unchanged in the value lane
(plain floats) and in the derivative lane (:class:`Gradient`), which keeps
the two lanes bit-identical on their values.
"""

import numpy as np

from .gradient import Gradient


def is_gradient(x) -> bool:
    return isinstance(x, Gradient)


def value_of(x) -> float:
    """Real part of a float or gradient"""
    if isinstance(x, Gradient):
        return x.value
    return float(x)


def free_parameters_of(*args):
    """Gradient dimension shared by the arguments, None when all are floats"""
    for x in args:
        if isinstance(x, Gradient):
            return x.free_parameters
    return None


def promote(x, free_parameters: int) -> Gradient:
    """Convert a float to a constant gradient, leave gradients untouched"""
    if isinstance(x, Gradient):
        return x
    return Gradient.constant(free_parameters, x)


def is_zero(x) -> bool:
    """True when both value and derivatives vanish"""
    if isinstance(x, Gradient):
        return x.value == 0.0 and not x.grad.any()
    return x == 0.0


def is_finite(x) -> bool:
    if isinstance(x, Gradient):
        return bool(np.isfinite(x.value) and np.all(np.isfinite(x.grad)))
    return bool(np.isfinite(x))


def sqrt(x):
    return x.sqrt() if isinstance(x, Gradient) else np.sqrt(x)


def exp(x):
    return x.exp() if isinstance(x, Gradient) else np.exp(x)


def log(x):
    return x.log() if isinstance(x, Gradient) else np.log(x)


def sin(x):
    return x.sin() if isinstance(x, Gradient) else np.sin(x)


def cos(x):
    return x.cos() if isinstance(x, Gradient) else np.cos(x)


def tan(x):
    return x.tan() if isinstance(x, Gradient) else np.tan(x)


def asin(x):
    return x.arcsin() if isinstance(x, Gradient) else np.arcsin(x)


def acos(x):
    return x.arccos() if isinstance(x, Gradient) else np.arccos(x)


def atan(x):
    return x.arctan() if isinstance(x, Gradient) else np.arctan(x)


def atan2(y, x):
    """Two-argument arc tangent, promoting a float argument when mixed"""
    n = free_parameters_of(y, x)
    if n is None:
        return np.arctan2(y, x)
    return promote(y, n).arctan2(promote(x, n))


def hypot(a, b):
    n = free_parameters_of(a, b)
    if n is None:
        return np.hypot(a, b)
    return promote(a, n).hypot(promote(b, n))
