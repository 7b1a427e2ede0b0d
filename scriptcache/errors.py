# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Exceptions raised by the script cache.

Callers must be able to tell a script that was never registered
(`UnknownScript`, registering it may help) from a registered script
whose execution failed (`RemoteInvokeFailed`).
"""


class ScriptCacheError(RuntimeError):
    pass


class InvalidArgument(ScriptCacheError, ValueError):
    pass


class UnknownScript(ScriptCacheError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown script {repr(name)}")


class RemoteLoadFailed(ScriptCacheError):
    pass


class RemoteInvokeFailed(ScriptCacheError):
    pass


class FileReadFailed(ScriptCacheError):
    def __init__(self, path, reason=""):
        self.path = path
        msg = f"error opening {repr(path)}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class WrongThread(ScriptCacheError):
    pass
