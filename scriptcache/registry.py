# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Local bookkeeping of the scripts loaded on a Redis server.

No I/O happens here: `ScriptRegistry` only remembers which script name
maps to which SHA-1 and which SHA-1's were confirmed loaded.
"""

import gevent.lock
from functools import wraps
from typing import Optional, Set


def synchronized(func):
    @wraps(func)
    def f(self, *args, **kwargs):
        with self._lock:
            return func(self, *args, **kwargs)

    return f


class ScriptRegistry:
    """Mapping from script name to content identifier (SHA-1) and the
    set of identifiers already loaded on the server.

    Every identifier a name is bound to is in the loaded set. Entries are
    never removed: the server is assumed not to forget scripts.

    Greenlet-safe: all access goes through one lock, so readers never see
    a name bound to an identifier that is not marked as loaded yet.
    """

    def __init__(self):
        self._lock = gevent.lock.RLock()
        self._name_to_id = dict()
        self._loaded_ids = set()

    def __repr__(self):
        return f"{type(self).__name__}({len(self)} scripts)"

    @synchronized
    def __len__(self):
        return len(self._name_to_id)

    @synchronized
    def __contains__(self, name):
        return name in self._name_to_id

    @synchronized
    def is_loaded(self, content_id: str) -> bool:
        return content_id in self._loaded_ids

    @synchronized
    def resolve(self, name: str) -> Optional[str]:
        return self._name_to_id.get(name)

    @synchronized
    def mark_loaded(self, content_id: str) -> None:
        """Loaded on the server but not bound to a name.
        """
        self._loaded_ids.add(content_id)

    @synchronized
    def record_loaded(self, name: str, content_id: str) -> None:
        """Mark `content_id` as loaded and bind `name` to it.

        Binding a name that is already bound to another identifier
        replaces the binding. The previous identifier stays loaded on the
        server but can no longer be reached by name.
        """
        self._loaded_ids.add(content_id)
        self._name_to_id[name] = content_id

    @synchronized
    def names(self) -> Set[str]:
        return set(self._name_to_id)
