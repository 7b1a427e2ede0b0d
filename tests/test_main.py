# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

import logging
import pytest
from unittest import mock

from scriptcache import main as scriptcache_main
from scriptcache.cache import ScriptCache
from scriptcache.store import script_sha


@pytest.fixture
def cli(store, monkeypatch):
    """Runs the console script with a fake store
    """
    created = list()

    def create_script_cache(config):
        cache = ScriptCache(
            store, script_dir=config.script_dir, extension=config.extension
        )
        created.append((config, cache))
        return cache

    monkeypatch.setattr(scriptcache_main, "create_script_cache", create_script_cache)
    logger = logging.getLogger("scriptcache")
    level = logger.level
    handlers = list(logger.handlers)
    yield created
    logger.setLevel(level)
    logger.handlers = handlers


def test_main(cli, store, script_dir, capsys):
    incr_id = script_sha("return redis.call('incr', KEYS[1])")
    store.results[incr_id] = b"3"
    ret = scriptcache_main.main(
        ["--script-dir", str(script_dir), "--db", "2", "incr", "1", "counter"]
    )
    assert ret == 0
    assert capsys.readouterr().out == "3\n"
    assert store.invoke_calls == [(incr_id, ("1", "counter"))]
    config, cache = cli[0]
    assert config.redis_db == 2
    assert cache.list_registered_names() == {"incr", "decr"}


def test_main_list_result(cli, store, script_dir, capsys):
    store.results[script_sha("return redis.call('decr', KEYS[1])")] = [b"a", 1]
    assert scriptcache_main.main(["--script-dir", str(script_dir), "decr"]) == 0
    assert capsys.readouterr().out == "a\n1\n"


def test_main_unknown_script(cli, store, script_dir, capsys):
    assert scriptcache_main.main(["--script-dir", str(script_dir), "other"]) == 1
    assert "UnknownScript" in capsys.readouterr().err
    assert not store.invoke_calls


def test_main_without_script_dir(cli, store, capsys):
    with mock.patch.dict("os.environ", {}, clear=True):
        assert scriptcache_main.main(["incr"]) == 1
    assert "InvalidArgument" in capsys.readouterr().err
    assert not store.calls
