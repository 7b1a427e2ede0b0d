# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

import logging


__all__ = [
    "log_debug",
    "log_warning",
    "get_logger",
    "create_logger_name",
]


ROOT_LOGGER_NAME = "scriptcache"


def create_logger_name(instance) -> str:
    """Logger name of an instance: `scriptcache.<ClassName>` optionally
    followed by the instance's `name` attribute.
    """
    parts = [ROOT_LOGGER_NAME, type(instance).__name__]
    name = getattr(instance, "name", None)
    if isinstance(name, str) and name:
        parts.append(name.replace(".", "_"))
    return ".".join(parts)


def get_logger(instance):
    """
    Provides a way to retrieve the logger for a give instance.

    Loggers are children of the `scriptcache` logger so that the level
    set by `scriptcache.logging_startup` applies to all of them.

    Returns:
        logging.Logger instance for the specific instance
    """
    return logging.getLogger(create_logger_name(instance))


LOG_DOCSTRING = """
Print a log message associated to a specific instance.

Normally instance is self if we are inside a class, but could
be any instance that you would like to log.\n\n

Args:
    msg: string containing the log message
"""


def log_debug(instance, msg, *args):
    __doc__ = LOG_DOCSTRING + "Log level: DEBUG"
    logger = get_logger(instance)
    logger.debug(msg, *args)


def log_warning(instance, msg, *args):
    __doc__ = LOG_DOCSTRING + "Log level: WARNING"
    logger = get_logger(instance)
    logger.warning(msg, *args)
