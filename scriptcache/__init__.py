# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Cached Lua scripts on a Redis server

.. autosummary::
    :toctree:

    cache
    registry
    store
    script_files
    redis_connection
    config
    errors
    logtools
"""
from . import release

__version__ = release.version
__author__ = release.author
__license__ = release.license
version_info = release.version_info

from gevent import monkey as _monkey

_monkey.patch_all(thread=False)

from scriptcache.cache import ScriptCache
from scriptcache.registry import ScriptRegistry
from scriptcache.store import ScriptStore, RedisScriptStore, NO_ARGS
from scriptcache.errors import (
    ScriptCacheError,
    InvalidArgument,
    UnknownScript,
    RemoteLoadFailed,
    RemoteInvokeFailed,
    FileReadFailed,
    WrongThread,
)


def logging_startup(
    log_level="WARNING", fmt="%(levelname)s %(asctime)-15s %(name)s: %(message)s"
):
    """
    Provides basicConfig functionality to scriptcache activating at proper level the root loggers
    """
    import logging  # this is not to pollute the global namespace

    logger = logging.getLogger("scriptcache")
    logger.setLevel(log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
