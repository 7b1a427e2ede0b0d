# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""The two server primitives the script cache needs:

    content_id = store.load_script(source)
    result = store.invoke_by_content_id(content_id, args)

`RedisScriptStore` implements them with SCRIPT LOAD and EVALSHA on a
redis-py client (for example a proxy from
`scriptcache.redis_connection.RedisDbConnectionPool.create_proxy`).
"""

import abc
import hashlib
from typing import Sequence


NO_ARGS = tuple()


def script_sha(source: str) -> str:
    """SHA-1 hex digest of a script, as computed by the Redis server
    """
    if isinstance(source, str):
        source = source.encode()
    return hashlib.sha1(source).hexdigest()


class ScriptStore(abc.ABC):
    """Server that executes scripts by content identifier
    """

    @abc.abstractmethod
    def load_script(self, source: str) -> str:
        """Upload the script and return its content identifier
        """
        pass

    @abc.abstractmethod
    def invoke_by_content_id(self, content_id: str, args: Sequence = NO_ARGS):
        """Execute a script previously loaded. `args` is a tuple,
        empty when there are no arguments.
        """
        pass


class RedisScriptStore(ScriptStore):
    """Redis server-side Lua scripts.

    The arguments of `invoke_by_content_id` are the tail of the EVALSHA
    command: `numkeys`, the keys and then the script arguments. An empty
    argument tuple is sent as a call with zero keys:

        store.invoke_by_content_id(sha, (1, "somekey"))  # EVALSHA sha 1 somekey
        store.invoke_by_content_id(sha, ())  # EVALSHA sha 0
    """

    def __init__(self, redisproxy):
        self._proxy = redisproxy

    def __repr__(self):
        return f"{type(self).__name__}({self._proxy!r})"

    @property
    def proxy(self):
        return self._proxy

    def load_script(self, source: str) -> str:
        content_id = self._proxy.script_load(source)
        if isinstance(content_id, bytes):
            content_id = content_id.decode()
        return content_id

    def invoke_by_content_id(self, content_id: str, args: Sequence = NO_ARGS):
        if not args:
            return self._proxy.evalsha(content_id, 0)
        return self._proxy.evalsha(content_id, *args)

