# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

import pytest

from scriptcache.config import get_config, create_script_cache, DEFAULT_REDIS_URL
from scriptcache.cache import ScriptCache
from scriptcache.errors import InvalidArgument
from scriptcache.redis_connection import RedisDbConnectionPool


def test_default_config():
    config = get_config(environ={})
    assert config.redis_url == DEFAULT_REDIS_URL
    assert config.redis_db == 0
    assert config.script_dir is None
    assert config.extension == ".lua"


def test_config_from_environment():
    environ = {
        "SCRIPTCACHE_REDIS_URL": "redis://otherhost:25002",
        "SCRIPTCACHE_REDIS_DB": "1",
        "SCRIPTCACHE_SCRIPT_DIR": "/tmp/scripts",
        "SCRIPTCACHE_SCRIPT_EXTENSION": ".redis",
    }
    config = get_config(environ=environ)
    assert config.redis_url == "redis://otherhost:25002"
    assert config.redis_db == 1
    assert config.script_dir == "/tmp/scripts"
    assert config.extension == ".redis"


def test_config_overrides():
    environ = {"SCRIPTCACHE_REDIS_DB": "1", "SCRIPTCACHE_SCRIPT_DIR": "/tmp/scripts"}
    config = get_config(environ=environ, redis_db=2, script_dir=None)
    assert config.redis_db == 2
    assert config.script_dir == "/tmp/scripts"


def test_config_invalid_db():
    with pytest.raises(InvalidArgument):
        get_config(environ={"SCRIPTCACHE_REDIS_DB": "one"})


def test_create_script_cache(tmpdir):
    # no connection is made before the first command
    config = get_config(environ={}, script_dir=str(tmpdir), extension="redis")
    cache = create_script_cache(config)
    assert isinstance(cache, ScriptCache)
    assert cache.script_dir == str(tmpdir)
    assert cache.extension == ".redis"
    pool = cache.store.proxy.connection_pool
    assert isinstance(pool, RedisDbConnectionPool)
    assert pool.connection_kwargs["db"] == 0
    assert pool.connection_kwargs["port"] == 6379
