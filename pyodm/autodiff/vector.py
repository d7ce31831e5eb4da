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
Three-component vectors and 3x3 matrices over floats or gradients.

Vectors are numpy arrays of shape (3,): ``float64`` in the value lane and
``object`` dtype as soon as one component is a :class:`Gradient`. All
operations are written component by component so that the value lane and
the derivative lane evaluate exactly the same floating point expressions.
"""

from typing import Sequence

import numpy as np

from . import ops
from .gradient import Gradient


def _has_gradient(items) -> bool:
    return any(isinstance(c, Gradient) for c in items)


def vector(x, y, z) -> np.ndarray:
    """Build a vector from its three components"""
    if _has_gradient((x, y, z)):
        return np.array([x, y, z], dtype=object)
    return np.array([x, y, z], dtype=np.float64)


def as_vector(v: Sequence) -> np.ndarray:
    return vector(v[0], v[1], v[2])


def matrix(rows: Sequence[Sequence]) -> np.ndarray:
    """Build a 3x3 matrix, object dtype if any element is a gradient"""
    flat = [c for row in rows for c in row]
    dtype = object if _has_gradient(flat) else np.float64
    out = np.empty((3, 3), dtype=dtype)
    for i in range(3):
        for j in range(3):
            out[i, j] = rows[i][j]
    return out


def values(v: Sequence) -> np.ndarray:
    """Real parts of a vector"""
    return np.array([ops.value_of(c) for c in v], dtype=np.float64)


def is_finite(v: Sequence) -> bool:
    return all(ops.is_finite(c) for c in v)


def constant_vector(v: Sequence, free_parameters: int) -> np.ndarray:
    return vector(*(ops.promote(c, free_parameters) for c in v))


def gradient_vector(v: Sequence, free_parameters: int, first_index: int) -> np.ndarray:
    """Seed the three components as variables ``first_index .. first_index + 2``"""
    return vector(*(Gradient.variable(free_parameters, first_index + i, float(v[i]))
                    for i in range(3)))


def add(a: Sequence, b: Sequence) -> np.ndarray:
    return vector(a[0] + b[0], a[1] + b[1], a[2] + b[2])


def subtract(a: Sequence, b: Sequence) -> np.ndarray:
    return vector(a[0] - b[0], a[1] - b[1], a[2] - b[2])


def negate(a: Sequence) -> np.ndarray:
    return vector(-a[0], -a[1], -a[2])


def scale(s, a: Sequence) -> np.ndarray:
    return vector(s * a[0], s * a[1], s * a[2])


def linear_combination(*pairs) -> np.ndarray:
    """Sum of ``s_i * v_i`` given as ``s1, v1, s2, v2, ...``"""
    if len(pairs) < 2 or len(pairs) % 2:
        raise ValueError("linear_combination expects (scale, vector) pairs")
    out = scale(pairs[0], pairs[1])
    for k in range(2, len(pairs), 2):
        out = add(out, scale(pairs[k], pairs[k + 1]))
    return out


def dot(a: Sequence, b: Sequence):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Sequence, b: Sequence) -> np.ndarray:
    return vector(a[1] * b[2] - a[2] * b[1],
                  a[2] * b[0] - a[0] * b[2],
                  a[0] * b[1] - a[1] * b[0])


def norm(a: Sequence):
    return ops.sqrt(dot(a, a))


def normalize(a: Sequence) -> np.ndarray:
    n = norm(a)
    if ops.value_of(n) == 0.0:
        raise ArithmeticError("cannot normalize a zero vector")
    return vector(a[0] / n, a[1] / n, a[2] / n)


def rotate(m: np.ndarray, v: Sequence) -> np.ndarray:
    """Apply a 3x3 matrix to a vector"""
    return vector(dot(m[0], v), dot(m[1], v), dot(m[2], v))


def transpose(m: np.ndarray) -> np.ndarray:
    return matrix([[m[j][i] for j in range(3)] for i in range(3)])


def matmul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Product of two 3x3 matrices"""
    return matrix([[a[i][0] * b[0][j] + a[i][1] * b[1][j] + a[i][2] * b[2][j]
                    for j in range(3)] for i in range(3)])


def alpha(v: Sequence):
    """Azimuth of the vector in the xy plane, in (-pi, pi]"""
    return ops.atan2(v[1], v[0])


def delta(v: Sequence):
    """Elevation of the vector above the xy plane, in [-pi/2, pi/2]"""
    return ops.asin(v[2] / norm(v))


def from_angles(alpha_angle, delta_angle) -> np.ndarray:
    """Unit vector with the given azimuth and elevation"""
    cos_delta = ops.cos(delta_angle)
    return vector(ops.cos(alpha_angle) * cos_delta,
                  ops.sin(alpha_angle) * cos_delta,
                  ops.sin(delta_angle))
