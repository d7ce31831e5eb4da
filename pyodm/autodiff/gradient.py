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

"""Forward-mode dual numbers carrying first order partial derivatives"""

import math
import numbers

import numpy as np


def _is_real(x) -> bool:
    return isinstance(x, numbers.Real)


class Gradient:
    """Real value with its gradient over a fixed set of free parameters

    A ``Gradient`` holds a value ``f`` and the vector of partial derivatives
    ``df/dx_i`` with respect to ``n`` seeded variables. Every arithmetic and
    elementary function propagates the gradient with the chain rule, so any
    algorithm written with these operations produces exact first order
    derivatives alongside its value.

    Seeding is done with :meth:`variable`: the variable of index ``i`` has
    gradient ``e_i``. Quantities that do not depend on the free parameters
    are built with :meth:`constant` or simply left as floats, which combine
    transparently with gradients.

    Instances are treated as immutable: operations always return new
    objects and never modify ``grad`` in place.

    Examples
    --------
    >>> x = Gradient.variable(2, 0, 3.0)
    >>> y = Gradient.variable(2, 1, 4.0)
    >>> r = (x * x + y * y).sqrt()
    >>> r.value, r.get_gradient()
    (5.0, array([0.6, 0.8]))
    """

    __slots__ = ("value", "grad")

    # numpy defers binary operators to the reflected methods below
    __array_ufunc__ = None

    def __init__(self, value, grad):
        self.value = float(value)
        self.grad = np.asarray(grad, dtype=np.float64)

    @classmethod
    def constant(cls, free_parameters: int, value: float) -> "Gradient":
        """Build a gradient with all partial derivatives equal to zero"""
        return cls(value, np.zeros(free_parameters))

    @classmethod
    def variable(cls, free_parameters: int, index: int, value: float) -> "Gradient":
        """Build the seeded variable of the given index"""
        grad = np.zeros(free_parameters)
        grad[index] = 1.0
        return cls(value, grad)

    @property
    def free_parameters(self) -> int:
        """Number of free parameters (length of the gradient)"""
        return self.grad.shape[0]

    def get_value(self) -> float:
        return self.value

    def get_gradient(self) -> np.ndarray:
        """Copy of the partial derivatives vector"""
        return self.grad.copy()

    def get_partial_derivative(self, index: int) -> float:
        return float(self.grad[index])

    def _check(self, other: "Gradient"):
        if other.grad.shape != self.grad.shape:
            raise ValueError(
                f"Gradient dimension mismatch: {self.free_parameters} != {other.free_parameters}")

    def _compose(self, f0: float, f1: float) -> "Gradient":
        """Apply a univariate function given its value f0 and derivative f1"""
        return Gradient(f0, f1 * self.grad)

    # Arithmetic

    def __add__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            return Gradient(self.value + other.value, self.grad + other.grad)
        if _is_real(other):
            return Gradient(self.value + other, self.grad)
        return NotImplemented

    def __radd__(self, other):
        if _is_real(other):
            return Gradient(other + self.value, self.grad)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            return Gradient(self.value - other.value, self.grad - other.grad)
        if _is_real(other):
            return Gradient(self.value - other, self.grad)
        return NotImplemented

    def __rsub__(self, other):
        if _is_real(other):
            return Gradient(other - self.value, -self.grad)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            return Gradient(self.value * other.value,
                            other.value * self.grad + self.value * other.grad)
        if _is_real(other):
            return Gradient(self.value * other, other * self.grad)
        return NotImplemented

    def __rmul__(self, other):
        if _is_real(other):
            return Gradient(other * self.value, other * self.grad)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Gradient):
            self._check(other)
            value = self.value / other.value
            return Gradient(value, (self.grad - value * other.grad) / other.value)
        if _is_real(other):
            return Gradient(self.value / other, self.grad / other)
        return NotImplemented

    def __rtruediv__(self, other):
        if _is_real(other):
            value = other / self.value
            return Gradient(value, (-value / self.value) * self.grad)
        return NotImplemented

    def __pow__(self, exponent):
        if isinstance(exponent, Gradient):
            self._check(exponent)
            return (exponent * self.log()).exp()
        if _is_real(exponent):
            if exponent == 0:
                return Gradient(1.0, np.zeros_like(self.grad))
            return self._compose(self.value ** exponent,
                                 exponent * self.value ** (exponent - 1))
        return NotImplemented

    def __rpow__(self, base):
        if _is_real(base):
            value = base ** self.value
            return self._compose(value, value * math.log(base))
        return NotImplemented

    def __neg__(self):
        return Gradient(-self.value, -self.grad)

    def __pos__(self):
        return self

    def __abs__(self):
        if math.copysign(1.0, self.value) < 0:
            return -self
        return self

    # Ordering compares values only

    def __lt__(self, other):
        return self.value < (other.value if isinstance(other, Gradient) else other)

    def __le__(self, other):
        return self.value <= (other.value if isinstance(other, Gradient) else other)

    def __gt__(self, other):
        return self.value > (other.value if isinstance(other, Gradient) else other)

    def __ge__(self, other):
        return self.value >= (other.value if isinstance(other, Gradient) else other)

    def __float__(self):
        return self.value

    # Elementary functions, named after their numpy counterparts

    def sqrt(self) -> "Gradient":
        s = np.sqrt(self.value)
        return self._compose(s, 0.5 / s)

    def exp(self) -> "Gradient":
        e = np.exp(self.value)
        return self._compose(e, e)

    def log(self) -> "Gradient":
        return self._compose(np.log(self.value), 1.0 / self.value)

    def sin(self) -> "Gradient":
        return self._compose(np.sin(self.value), np.cos(self.value))

    def cos(self) -> "Gradient":
        return self._compose(np.cos(self.value), -np.sin(self.value))

    def tan(self) -> "Gradient":
        t = np.tan(self.value)
        return self._compose(t, 1.0 + t * t)

    def arcsin(self) -> "Gradient":
        return self._compose(np.arcsin(self.value),
                             1.0 / np.sqrt(1.0 - self.value * self.value))

    def arccos(self) -> "Gradient":
        return self._compose(np.arccos(self.value),
                             -1.0 / np.sqrt(1.0 - self.value * self.value))

    def arctan(self) -> "Gradient":
        return self._compose(np.arctan(self.value),
                             1.0 / (1.0 + self.value * self.value))

    def arctan2(self, x: "Gradient") -> "Gradient":
        """Two-argument arc tangent with ``self`` as the ordinate"""
        self._check(x)
        r2 = x.value * x.value + self.value * self.value
        return Gradient(np.arctan2(self.value, x.value),
                        (x.value * self.grad - self.value * x.grad) / r2)

    def hypot(self, other: "Gradient") -> "Gradient":
        self._check(other)
        h = np.hypot(self.value, other.value)
        if h == 0.0:
            return Gradient(h, np.zeros_like(self.grad))
        return Gradient(h, (self.value * self.grad + other.value * other.grad) / h)

    def __repr__(self):
        return f"Gradient(value={self.value!r}, grad={self.grad!r})"
