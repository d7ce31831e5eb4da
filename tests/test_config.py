"""Tests for the estimation configuration."""

import logging

import numpy as np
import pytest

from pyodm.config import EstimationConfig, SignalTravelTimeConfig
from pyodm.core.constants import CLIGHT, LIGHT_TIME_ULPS, MAX_LIGHT_TIME_ITER
from pyodm.core.exceptions import ConfigurationError
from pyodm.signal import SignalTravelTimeModel


@pytest.fixture
def restore_package_logger():
    log = logging.getLogger("pyodm")
    handlers, level, propagate = list(log.handlers), log.level, log.propagate
    yield
    for handler in list(log.handlers):
        log.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(level)
    log.propagate = propagate


class TestSignalTravelTimeConfig:

    def test_defaults(self):
        config = SignalTravelTimeConfig()
        assert config.signal_speed == CLIGHT
        assert config.max_iterations == MAX_LIGHT_TIME_ITER
        assert config.convergence_ulps == LIGHT_TIME_ULPS
        assert config.absolute_tolerance == 0.0
        assert not config.is_instantaneous

    def test_instantaneous(self):
        config = SignalTravelTimeConfig.instantaneous()
        assert config.is_instantaneous
        assert np.isinf(config.signal_speed)

    @pytest.mark.parametrize("kwargs", [
        {'signal_speed': 0.0},
        {'signal_speed': -CLIGHT},
        {'signal_speed': np.nan},
        {'max_iterations': 0},
        {'convergence_ulps': -1.0},
        {'absolute_tolerance': -1e-12},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            SignalTravelTimeConfig(**kwargs)


class TestEstimationConfig:

    def test_from_dict(self):
        config = EstimationConfig.from_dict({
            'travel_time': {'max_iterations': 20, 'absolute_tolerance': 1e-12},
            'logging': {'default_level': 'DEBUG', 'module_levels': {'pyodm.signal': 'TRACE'}},
        })
        assert config.travel_time.max_iterations == 20
        assert config.travel_time.absolute_tolerance == 1e-12
        assert config.travel_time.signal_speed == CLIGHT
        assert config.logging.default_level == 'DEBUG'
        assert config.logging.module_levels == {'pyodm.signal': 'TRACE'}

    def test_empty_dict(self):
        config = EstimationConfig.from_dict({})
        assert config.travel_time == SignalTravelTimeConfig()
        assert config.logging.default_level == 'WARNING'

    def test_to_dict_round_trip(self):
        config = EstimationConfig.from_dict({
            'travel_time': {'convergence_ulps': 4.0},
            'logging': {'console': False},
        })
        assert EstimationConfig.from_dict(config.to_dict()) == config

    def test_unknown_section(self):
        with pytest.raises(ConfigurationError):
            EstimationConfig.from_dict({'filters': {}})

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            EstimationConfig.from_dict({'travel_time': {'speed': CLIGHT}})

    def test_model_from_config(self):
        config = EstimationConfig.from_dict({'travel_time': {'max_iterations': 3}})
        model = SignalTravelTimeModel(config.travel_time)
        assert model.config.max_iterations == 3
        assert not model.is_instantaneous()

    def test_configure_logging(self, restore_package_logger):
        config = EstimationConfig.from_dict({'logging': {'default_level': 'INFO', 'console': True}})
        config.configure_logging()
        log = logging.getLogger("pyodm")
        assert log.level == logging.INFO
        assert len(log.handlers) == 1
