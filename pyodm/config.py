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

"""Configuration of measurement evaluation"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict

import numpy as np

from .core.constants import CLIGHT, LIGHT_TIME_ULPS, MAX_LIGHT_TIME_ITER
from .core.exceptions import ConfigurationError
from .logger import LoggerConfig, setup_logger_from_config

logger = logging.getLogger(__name__)


@dataclass
class SignalTravelTimeConfig:
    """Configuration of the signal travel time computation"""
    # Propagation speed (m/s), infinite for instantaneous transmission
    signal_speed: float = CLIGHT

    # Fixed point iteration bound, the last iterate is kept when reached
    max_iterations: int = MAX_LIGHT_TIME_ITER

    # Convergence when |delta tau| < convergence_ulps * ulp(tau) ...
    convergence_ulps: float = LIGHT_TIME_ULPS
    # ... or below this absolute threshold (s), 0 to disable
    absolute_tolerance: float = 0.0

    def __post_init__(self):
        if not self.signal_speed > 0.0:
            raise ConfigurationError(f"Signal speed must be positive, got {self.signal_speed}")
        if self.max_iterations < 1:
            raise ConfigurationError(f"At least one iteration required, got {self.max_iterations}")
        if self.convergence_ulps < 0.0 or self.absolute_tolerance < 0.0:
            raise ConfigurationError("Convergence thresholds must be non-negative")

    @property
    def is_instantaneous(self) -> bool:
        return bool(np.isinf(self.signal_speed))

    @classmethod
    def instantaneous(cls) -> "SignalTravelTimeConfig":
        return cls(signal_speed=np.inf)


def _from_mapping(cls, values: Dict[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigurationError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**values)


@dataclass
class EstimationConfig:
    """
    Top level configuration.

    Examples
    --------
    >>> config = EstimationConfig.from_dict({
    ...     'travel_time': {'max_iterations': 20},
    ...     'logging': {'default_level': 'DEBUG'},
    ... })
    >>> config.travel_time.max_iterations
    20
    """
    travel_time: SignalTravelTimeConfig = field(default_factory=SignalTravelTimeConfig)
    logging: LoggerConfig = field(default_factory=LoggerConfig)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "EstimationConfig":
        unknown = set(config) - {'travel_time', 'logging'}
        if unknown:
            raise ConfigurationError(f"Unknown configuration sections: {sorted(unknown)}")
        travel_time = _from_mapping(SignalTravelTimeConfig, config.get('travel_time', {}))
        logger_config = LoggerConfig()
        logger_config.configure_from_dict(config.get('logging', {}))
        return cls(travel_time=travel_time, logging=logger_config)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'travel_time': {f.name: getattr(self.travel_time, f.name)
                            for f in fields(SignalTravelTimeConfig)},
            'logging': {
                'default_level': self.logging.default_level,
                'log_file': self.logging.log_file,
                'console': self.logging.console,
                'module_levels': dict(self.logging.module_levels),
            },
        }

    def configure_logging(self) -> LoggerConfig:
        """Install the logging section on the pyodm loggers"""
        logger_config = setup_logger_from_config(self.to_dict()['logging'])
        logger.debug(f"Logging configured, default level {logger_config.default_level}")
        return logger_config
