# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Single source of truth for the version number and the like"""

name = "scriptcache"
author = "BCU (ESRF)"
author_email = ""
license = "LGPLv3"
copyright = "2015-2020 Beamline Control Unit, ESRF"
description = "Cached server-side Lua scripts on a Redis server"
url = ""

_version_major = 0
_version_minor = 1
_version_patch = 0
_version_extra = ".dev0"
# _version_extra = ''  # uncomment this for full releases

# Construct full version string from these.
_ver = [_version_major, _version_minor, _version_patch]

version = ".".join(map(str, _ver))
if _version_extra:
    version += _version_extra

version_info = _ver
