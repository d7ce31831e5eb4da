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

"""Logging configuration for measurement evaluation

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``pyodm`` namespace; handlers are attached by applications through
:func:`setup_logger` or :func:`setup_logger_from_config`.
"""

import copy
import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

ROOT_LOGGER_NAME = "pyodm"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LogLevel(Enum):
    """Log levels, with TRACE below DEBUG for per-iteration details"""
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


logging.addLevelName(LogLevel.TRACE.value, "TRACE")

TRACE = LogLevel.TRACE.value


def _trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = _trace


def resolve_level(level: Union[str, int, LogLevel]) -> int:
    """Numeric logging level from a name, a number or a LogLevel"""
    if isinstance(level, LogLevel):
        return level.value
    if isinstance(level, int):
        return level
    try:
        return LogLevel[level.upper()].value
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


class ColoredFormatter(logging.Formatter):
    """Console formatter coloring the level name"""

    COLORS = {
        'TRACE': '\033[36m',     # Cyan
        'DEBUG': '\033[34m',     # Blue
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # other handlers share the record
        record = copy.copy(record)
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logger(name: str = ROOT_LOGGER_NAME,
                 level: Union[str, int] = "INFO",
                 log_file: Optional[str] = None,
                 console: bool = True) -> logging.Logger:
    """
    Attach handlers to a logger of the pyodm hierarchy

    Parameters:
    -----------
    name : str
        Logger name, ``pyodm`` configures every module at once
    level : str or int
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_file : Optional[str]
        Log file path (if None, no file logging)
    console : bool
        Enable colored console output

    Returns:
    --------
    logging.Logger
        Configured logger
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    # handlers attached above, avoid duplicates through the root logger
    logger.propagate = not (console or log_file)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger by name"""
    return logging.getLogger(name)


class LogContext:
    """Context manager for temporary log level change

    Examples
    --------
    >>> with LogContext(logging.getLogger("pyodm.signal"), "TRACE"):
    ...     pass
    """

    def __init__(self, logger: logging.Logger, level: Union[str, int]):
        self.logger = logger
        self.new_level = resolve_level(level)
        self.old_level = None

    def __enter__(self):
        self.old_level = self.logger.level
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.old_level)


@dataclass
class LoggerConfig:
    """Default level plus per-module overrides"""
    default_level: str = "WARNING"
    log_file: Optional[str] = None
    console: bool = True
    module_levels: Dict[str, str] = field(default_factory=dict)

    def set_module_level(self, module_name: str, level: str):
        """Set log level for a specific module, e.g. ``pyodm.signal``"""
        resolve_level(level)
        self.module_levels[module_name] = level

    def get_level_for_module(self, module_name: str) -> str:
        """Most specific configured level for a dotted module name"""
        parts = module_name.split('.')
        for i in range(len(parts), 0, -1):
            candidate = '.'.join(parts[:i])
            if candidate in self.module_levels:
                return self.module_levels[candidate]
        return self.default_level

    def configure_from_dict(self, config: dict):
        """Update from a dictionary with the dataclass field names"""
        if 'default_level' in config:
            self.default_level = config['default_level']
        if 'log_file' in config:
            self.log_file = config['log_file']
        if 'console' in config:
            self.console = config['console']
        for module, level in config.get('module_levels', {}).items():
            self.set_module_level(module, level)

    def setup_all_loggers(self) -> logging.Logger:
        """Install handlers on the package logger, levels on the modules"""
        root = setup_logger(ROOT_LOGGER_NAME, self.default_level, self.log_file, self.console)
        for module, level in self.module_levels.items():
            logging.getLogger(module).setLevel(resolve_level(level))
            # package handlers filter by level too
            for handler in root.handlers:
                handler.setLevel(min(handler.level, resolve_level(level)))
        return root


def setup_logger_from_config(config: dict) -> LoggerConfig:
    """Setup loggers from a configuration dictionary

    Example config:
    {
        'default_level': 'INFO',
        'log_file': 'odm.log',
        'console': True,
        'module_levels': {
            'pyodm.signal.travel_time': 'TRACE',
            'pyodm.gnss.ambiguity': 'DEBUG',
        }
    }
    """
    logger_config = LoggerConfig()
    logger_config.configure_from_dict(config)
    logger_config.setup_all_loggers()
    return logger_config
