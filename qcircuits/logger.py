# Copyright 2020 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
This module contains functions for creating the loggers used in QCircuits.

A logger is only configured if the user has not configured it (or one of its
ancestors) already. Its level and an optional log file are taken from the
``[logging]`` section of the active configuration.

The approach follows the solution for logging used in
the Flask web application framework:
https://github.com/pallets/flask/blob/master/src/flask/logging.py
"""

import logging
import sys

from qcircuits import configuration


LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
"""dict[str, int]: logging levels accepted in the configuration"""


def logging_handler_defined(logger):
    """Checks if the logger or any of its ancestors has a handler defined.

    The output depends on whether or not propagation was set for the logger.

    Args:
        logger (logging.Logger): the logger to check

    Returns:
        bool: whether or not a handler was defined
    """
    current = logger

    while current:
        if current.handlers:
            return True

        if not current.propagate:
            break

        current = current.parent

    return False


formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
default_handler = logging.StreamHandler(sys.stderr)
default_handler.setFormatter(formatter)


def configured_level(config=None):
    """Logging level requested by the configuration.

    Args:
        config (dict): configuration to read, the session configuration by default

    Returns:
        int: the logging level

    Raises:
        ConfigurationError: if the configured level is not recognized
    """
    config = config or configuration.SESSION_CONFIG
    name = config["logging"]["level"].lower()

    if name not in LEVELS:
        raise configuration.ConfigurationError(
            "Unknown logging level '{}', expected one of {}.".format(name, ", ".join(LEVELS))
        )
    return LEVELS[name]


def create_logger(name, level=None):
    """Get the QCircuits module specific logger and configure it if needed.

    Configuration only takes place if no user configuration was applied to the
    logger. Therefore, the logger is configured if and only if the following
    are true:

    - the logger has WARNING as effective level,
    - the level of the logger was not explicitly set,
    - no handlers were added to the logger.

    The default handler writes to the standard error stream. If the configuration
    names a ``logfile``, a file handler using the same format is added as well.

    Args:
        name (str): the name of the module for which the logger is being created
        level (int): the logging level to set for the logger, by default the one
            given in the configuration

    Returns:
        logging.Logger: the logger
    """
    logger = logging.getLogger(name)

    effective_level_inherited = logger.getEffectiveLevel() == logging.WARNING
    level_not_set = not logger.level
    no_handlers = not logging_handler_defined(logger)

    if effective_level_inherited and level_not_set and no_handlers:
        logger.setLevel(configured_level() if level is None else level)
        logger.addHandler(default_handler)

        logfile = configuration.SESSION_CONFIG["logging"].get("logfile")
        if logfile:
            file_handler = logging.FileHandler(logfile)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
