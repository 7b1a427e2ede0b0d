# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

import gevent
import pytest

from scriptcache.cache import ScriptCache
from scriptcache.store import ScriptStore, script_sha


class FakeScriptStore(ScriptStore):
    """Records the calls instead of talking to a Redis server.

    :param content_ids: content identifier returned for a script source
                        (SHA-1 of the source by default)
    :param results: result returned for a content identifier
    :param load_delay: seconds to sleep in `load_script` (lets other
                       greenlets run)
    """

    def __init__(self, content_ids=None, results=None, load_delay=0):
        self.content_ids = dict(content_ids or {})
        self.results = dict(results or {})
        self.load_delay = load_delay
        self.load_error = None
        self.invoke_error = None
        self.load_calls = list()
        self.invoke_calls = list()
        self.loaded = set()

    @property
    def calls(self):
        return self.load_calls + self.invoke_calls

    def load_script(self, source):
        self.load_calls.append(source)
        if self.load_delay:
            gevent.sleep(self.load_delay)
        if self.load_error is not None:
            raise self.load_error
        content_id = self.content_ids.get(source, script_sha(source))
        self.loaded.add(content_id)
        return content_id

    def invoke_by_content_id(self, content_id, args=()):
        self.invoke_calls.append((content_id, args))
        if self.invoke_error is not None:
            raise self.invoke_error
        result = self.results.get(content_id)
        if callable(result):
            return result(*args)
        return result


@pytest.fixture
def store_factory():
    yield FakeScriptStore


@pytest.fixture
def store():
    yield FakeScriptStore()


@pytest.fixture
def cache(store):
    yield ScriptCache(store)


@pytest.fixture
def script_dir(tmpdir):
    tmpdir.join("incr.lua").write("return redis.call('incr', KEYS[1])")
    tmpdir.join("decr.lua").write("return redis.call('decr', KEYS[1])")
    tmpdir.join("README.txt").write("not a script")
    tmpdir.mkdir("subdir").join("nested.lua").write("return 1")
    yield tmpdir
