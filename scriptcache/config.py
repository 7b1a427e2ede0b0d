# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Configuration of a script cache from the environment:

    SCRIPTCACHE_REDIS_URL: Redis server (default: redis://localhost:6379)
    SCRIPTCACHE_REDIS_DB: Redis database (default: 0)
    SCRIPTCACHE_SCRIPT_DIR: directory of the script files (default: none)
    SCRIPTCACHE_SCRIPT_EXTENSION: script file extension (default: .lua)
"""

import os
from collections import namedtuple

from scriptcache.cache import ScriptCache
from scriptcache.errors import InvalidArgument
from scriptcache.redis_connection import create_connection_pool
from scriptcache.script_files import DEFAULT_EXTENSION


DEFAULT_REDIS_URL = "redis://localhost:6379"

CacheConfig = namedtuple(
    "CacheConfig", ["redis_url", "redis_db", "script_dir", "extension"]
)


def get_config(environ=None, **overrides) -> CacheConfig:
    """Configuration from environment variables. Keyword arguments
    which are not `None` take precedence.
    """
    if environ is None:
        environ = os.environ
    db = environ.get("SCRIPTCACHE_REDIS_DB", "0")
    try:
        db = int(db)
    except ValueError:
        raise InvalidArgument(f"SCRIPTCACHE_REDIS_DB is not an integer: {repr(db)}")
    config = CacheConfig(
        redis_url=environ.get("SCRIPTCACHE_REDIS_URL", DEFAULT_REDIS_URL),
        redis_db=db,
        script_dir=environ.get("SCRIPTCACHE_SCRIPT_DIR") or None,
        extension=environ.get("SCRIPTCACHE_SCRIPT_EXTENSION", DEFAULT_EXTENSION),
    )
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return config._replace(**overrides)


def create_script_cache(config: CacheConfig = None):
    """Script cache talking to the configured Redis server. Nothing is
    sent to the server before the first registration.
    """
    if config is None:
        config = get_config()
    pool = create_connection_pool(config.redis_url, db=config.redis_db)
    return ScriptCache.from_redis(
        pool.create_proxy(), script_dir=config.script_dir, extension=config.extension
    )
