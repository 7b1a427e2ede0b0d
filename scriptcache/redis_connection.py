# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.


"""Redis connections on top of py-redis.

Creating a Redis connection is typically done like this:

    pool = create_connection_pool("redis://localhost:6379", db=0)
    proxy = pool.create_proxy()

The proxies provide an API to the Redis commands. They are greenlet-safe
and get a connection from the pool to execute each command. They release
the connection back to the pool after receiving the result. Closing all
connections can be done by disconnecting the pool (also called on garbage
collection):

    pool.disconnect()
"""


import os
import socket
import gevent.lock
import redis


class RedisDbConnectionPool(redis.ConnectionPool):
    """Manages the connections to a particular Redis server and database.
    Instantiate this pool with the factory method `create_connection_pool`.
    Use a different pool for each database, even when on the same server.

    A `redis.connection.Connection` instance is not greenlet-safe but it
    can be reused in different greenlets.
    """

    CLIENT_NAME = f"{socket.gethostname()}:{os.getpid()}"

    def __init__(self, *args, **kw):
        kw.setdefault("client_name", self.CLIENT_NAME)
        super().__init__(*args, **kw)
        # Replace thread safety with greenlet safety
        self._fork_lock = gevent.lock.RLock()

    def reset(self):
        super().reset()
        # Replace thread safety with greenlet safety
        self._lock = gevent.lock.RLock()

    @property
    def nconnections(self):
        return len(self._in_use_connections) + len(self._available_connections)

    def release(self, connection):
        with self._lock:
            # The connection might have been removed on disconnect already
            try:
                super().release(connection)
            except KeyError:
                pass

    def create_proxy(self):
        """The pool itself does not keep a reference to this proxy
        """
        return redis.Redis(connection_pool=self)


def create_connection_pool(redis_url: str, db: int, **kw) -> RedisDbConnectionPool:
    """This is the starting point to create Redis connections.
    """
    return RedisDbConnectionPool.from_url(redis_url, db=db, **kw)
