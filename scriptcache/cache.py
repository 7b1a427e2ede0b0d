# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Cached Lua scripts on a Redis server.

Redis can execute Lua scripts server-side and, to avoid re-transmitting
(and compiling) a script on every request, execute a script it has seen
before by its SHA-1 (EVALSHA). This module loads each script once and
afterwards only sends its SHA-1, without asking the server whether the
script exists before every call:

    cache = ScriptCache.from_redis(proxy)
    cache.register_script("getset", '''
        local x = redis.call('get', KEYS[1]);
        redis.call('set', 'temp', x);
        return x;
    ''')
    value = cache.invoke("getset", [1, "somekey"])

Do not use a cache when all scripts can be flushed from the Redis server
(SCRIPT FLUSH) during its lifetime. Create a new cache instead.
"""

import os
import gevent
import gevent.lock
from contextlib import contextmanager
from functools import wraps
from typing import Optional, Sequence, Set

from scriptcache.errors import (
    InvalidArgument,
    UnknownScript,
    RemoteLoadFailed,
    RemoteInvokeFailed,
    WrongThread,
)
from scriptcache.logtools import log_debug, log_warning
from scriptcache.registry import ScriptRegistry
from scriptcache.store import NO_ARGS, RedisScriptStore
from scriptcache import script_files


def owner_thread_only(func):
    """Greenlets of other threads have another gevent hub: they could never
    be woken up by the locks of the cache.
    """

    @wraps(func)
    def f(self, *args, **kwargs):
        if gevent.get_hub() is not self._hub:
            raise WrongThread(
                f"{type(self).__name__} can only be used from the thread that created it"
            )
        return func(self, *args, **kwargs)

    return f


def _as_arguments(args) -> tuple:
    if not args:
        return NO_ARGS
    if isinstance(args, (str, bytes)):
        raise InvalidArgument(
            f"Script arguments must be a sequence of arguments, not {repr(args)}"
        )
    return tuple(args)


class ScriptCache:
    """Registers scripts by name and executes them by content identifier.

    Each name is loaded on the server at most once, also when several
    greenlets register the same name concurrently: the first one loads
    the script, the others wait and get its identifier.

    A cache belongs to the thread that created it: greenlets of that
    thread may share it, other threads get `WrongThread`.

    A name is never unregistered. Registering a name again returns the
    identifier it is bound to and ignores the script text passed.

    :param store: `scriptcache.store.ScriptStore` instance
    :param script_dir: default directory for `register_file` and
                       `register_all_scripts`
    :param extension: file extension of the script files
    """

    def __init__(
        self,
        store,
        script_dir: Optional[str] = None,
        extension: str = script_files.DEFAULT_EXTENSION,
    ):
        if store is None:
            raise InvalidArgument("Need a script store")
        self._store = store
        self._hub = gevent.get_hub()
        self._registry = ScriptRegistry()
        self._lock = gevent.lock.RLock()
        self._registration_locks = dict()
        self._extension = script_files.normalize_extension(extension)
        self._script_dir = None
        self.script_dir = script_dir

    @classmethod
    def from_redis(cls, redisproxy, **kw):
        """Cache for the scripts of a Redis client (redis-py API)
        """
        return cls(RedisScriptStore(redisproxy), **kw)

    def __repr__(self):
        return f"{type(self).__name__}({self._store!r}, {len(self._registry)} scripts)"

    @owner_thread_only
    def __contains__(self, name):
        return name in self._registry

    @property
    def store(self):
        return self._store

    @property
    def registry(self):
        return self._registry

    @property
    def extension(self):
        return self._extension

    @property
    def script_dir(self):
        return self._script_dir

    @script_dir.setter
    def script_dir(self, value):
        if value:
            value = os.path.normpath(value)
        else:
            value = None
        self._script_dir = value

    @owner_thread_only
    def resolve(self, name: str) -> Optional[str]:
        return self._registry.resolve(name)

    @owner_thread_only
    def is_loaded(self, content_id: str) -> bool:
        return self._registry.is_loaded(content_id)

    @owner_thread_only
    def list_registered_names(self) -> Set[str]:
        return self._registry.names()

    scripts = list_registered_names

    # Registration

    @contextmanager
    def _registration_lock(self, name):
        """One semaphore per name being registered. The entry is removed when
        its last user leaves, whether the registration succeeded or not.
        """
        with self._lock:
            entry = self._registration_locks.get(name)
            if entry is None:
                entry = self._registration_locks[name] = [gevent.lock.Semaphore(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._lock:
                entry[1] -= 1
                if not entry[1]:
                    del self._registration_locks[name]

    def _load(self, source):
        try:
            return self._store.load_script(source)
        except Exception as e:
            raise RemoteLoadFailed(f"Loading script failed: {e}") from e

    @owner_thread_only
    def register_script(self, name: str, source: str) -> str:
        """Make sure the script is loaded on the server and bind it to `name`.

        Returns the script's content identifier (SHA-1).
        """
        if not name:
            raise InvalidArgument("Script name cannot be empty")
        if not source:
            raise InvalidArgument(f"Script {repr(name)} is empty")
        content_id = self._registry.resolve(name)
        if content_id is not None:
            log_debug(self, "script %r already registered as %s", name, content_id)
            return content_id
        with self._registration_lock(name):
            # Another greenlet may have loaded it while we were waiting
            content_id = self._registry.resolve(name)
            if content_id is not None:
                return content_id
            content_id = self._load(source)
            self._registry.record_loaded(name, content_id)
        log_debug(self, "script %r loaded as %s", name, content_id)
        return content_id

    @owner_thread_only
    def register_file(self, path: str) -> str:
        """Register a script file under its base name without extension.
        A relative path is relative to `script_dir` when there is one.
        """
        if not path:
            raise InvalidArgument("Script file path cannot be empty")
        if self._script_dir and not os.path.isabs(path):
            path = os.path.join(self._script_dir, path)
        source = script_files.read_script(path)
        name = script_files.script_name(path, self._extension)
        return self.register_script(name, source)

    @owner_thread_only
    def register_all_scripts(self, script_dir: Optional[str] = None) -> Set[str]:
        """Register all script files of a directory (not recursive).

        When `script_dir` is given it becomes the default directory of
        the cache. Stops at the first file that fails; the files before
        it stay registered.

        Returns the names of all registered scripts.
        """
        directory = script_dir or self._script_dir
        if not directory:
            raise InvalidArgument("No script directory specified")
        paths = script_files.list_script_files(directory, self._extension)
        if script_dir:
            self.script_dir = script_dir
        for path in paths:
            try:
                self.register_file(path)
            except Exception:
                log_warning(
                    self, "registration of %s failed, skip remaining files", path
                )
                raise
        return self._registry.names()

    # Execution

    def _invoke(self, content_id, args, name=None):
        args = _as_arguments(args)
        log_debug(self, "evaluate %s %s", name or content_id, args)
        try:
            return self._store.invoke_by_content_id(content_id, args)
        except Exception as e:
            if name is None:
                name = content_id
            raise RemoteInvokeFailed(f"Script {repr(name)} failed: {e}") from e

    @owner_thread_only
    def invoke(self, name: str, args: Optional[Sequence] = None):
        """Execute a registered script. No arguments (`None`) and an empty
        sequence result in the same server call.
        """
        content_id = self._registry.resolve(name)
        if content_id is None:
            raise UnknownScript(name)
        return self._invoke(content_id, args, name=name)

    def call(self, name: str, *args):
        return self.invoke(name, args)

    def invoke_with_keys(self, name: str, keys: Sequence = (), args: Sequence = ()):
        """Execute a registered script with the KEYS and ARGV arrays
        of the Lua script.
        """
        keys = _as_arguments(keys)
        return self.invoke(name, (len(keys),) + keys + _as_arguments(args))

    @owner_thread_only
    def run_script(
        self,
        content_id: str,
        args: Optional[Sequence] = None,
        source: Optional[str] = None,
    ):
        """Execute a script by content identifier.

        When the script `source` is given and the identifier was not
        loaded by this cache, the script is loaded first.
        """
        if not content_id:
            raise InvalidArgument("Script content identifier cannot be empty")
        if source is not None and not self._registry.is_loaded(content_id):
            loaded_id = self._load(source)
            if loaded_id != content_id:
                raise RemoteLoadFailed(
                    f"Script loaded as {loaded_id} instead of {content_id}"
                )
            self._registry.mark_loaded(content_id)
        return self._invoke(content_id, args)
