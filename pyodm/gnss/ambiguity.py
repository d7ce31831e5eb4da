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

"""Carrier phase ambiguities shared between measurements"""

import logging
import threading
from typing import Dict, List, Tuple

import numpy as np

from ..core.exceptions import ConfigurationError
from ..estimation.parameter_driver import ParameterDriver

logger = logging.getLogger(__name__)

AMBIGUITY_PREFIX = "ambiguity"


class AmbiguityDriver(ParameterDriver):
    """
    Ambiguity (cycles) of one emitter/receiver/wavelength combination.

    Parameters
    ----------
    emitter : str
        Emitter name (satellite)
    receiver : str
        Receiver name (station)
    wavelength : float
        Carrier wavelength (m)
    """

    def __init__(self, emitter: str, receiver: str, wavelength: float):
        super().__init__(self.build_name(emitter, receiver, wavelength), 0.0, scale=1.0)
        self.emitter = emitter
        self.receiver = receiver
        self.wavelength = float(wavelength)

    @staticmethod
    def build_name(emitter: str, receiver: str, wavelength: float) -> str:
        return f"{AMBIGUITY_PREFIX}-{emitter}-{receiver}-{wavelength:.6f}"


class AmbiguityCache:
    """
    Registry of ambiguity drivers for one estimation run.

    The same (emitter, receiver, wavelength) key always gives the same
    driver, so all phase measurements of a pass share one unknown.
    Lookups are serialized by a lock and only happen when measurements are
    built; evaluation reads the drivers directly.

    Examples
    --------
    >>> cache = AmbiguityCache()
    >>> a = cache.get_ambiguity("sat-0", "station", 0.19029)
    >>> a is cache.get_ambiguity("sat-0", "station", 0.19029)
    True
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._drivers: Dict[Tuple[str, str, float], AmbiguityDriver] = {}
        self._names: Dict[str, AmbiguityDriver] = {}

    def get_ambiguity(self, emitter: str, receiver: str, wavelength: float) -> AmbiguityDriver:
        """
        Driver for a key, created on first request.

        Raises
        ------
        ConfigurationError
            If the wavelength is not positive, or if it differs from the one
            of an existing driver with the same name (wavelengths closer than
            the driver name resolution)
        """
        wavelength = float(wavelength)
        if not (np.isfinite(wavelength) and wavelength > 0.0):
            raise ConfigurationError(f"Invalid wavelength {wavelength}")
        key = (emitter, receiver, wavelength)
        with self._lock:
            driver = self._drivers.get(key)
            if driver is not None:
                return driver
            name = AmbiguityDriver.build_name(emitter, receiver, wavelength)
            existing = self._names.get(name)
            if existing is not None:
                logger.error(f"Ambiguity {name} requested with wavelength {wavelength!r}, "
                             f"cached with {existing.wavelength!r}")
                raise ConfigurationError(
                    f"Wavelength {wavelength!r} conflicts with cached ambiguity {name}")
            driver = AmbiguityDriver(emitter, receiver, wavelength)
            self._drivers[key] = driver
            self._names[name] = driver
            logger.debug(f"Created ambiguity driver {name}")
            return driver

    @property
    def drivers(self) -> List[AmbiguityDriver]:
        with self._lock:
            return list(self._drivers.values())

    def clear(self):
        with self._lock:
            self._drivers.clear()
            self._names.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._drivers)
