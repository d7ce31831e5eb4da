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

"""Exceptions raised by measurement evaluation

Configuration problems derive from ``ValueError`` so callers that already
guard model setup with ``except ValueError`` keep working.
"""


class PyodmError(Exception):
    """Base class for all pyodm errors"""


class ConfigurationError(PyodmError, ValueError):
    """Invalid model setup (non-inertial frame, conflicting ambiguity, ...)"""


class MissingSatelliteError(ConfigurationError, IndexError):
    """Measured satellite absent from the supplied states array"""


class PreconditionError(ConfigurationError):
    """Model composition that cannot produce meaningful values"""


class DegenerateGeometryError(PyodmError, ArithmeticError):
    """Non-finite positions or physically impossible geometry"""
