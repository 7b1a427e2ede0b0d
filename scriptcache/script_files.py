# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Script source files on the local filesystem
"""

import os

from scriptcache.errors import InvalidArgument, FileReadFailed


DEFAULT_EXTENSION = ".lua"


def normalize_extension(extension: str) -> str:
    if not extension:
        raise InvalidArgument("Script file extension cannot be empty")
    if not extension.startswith("."):
        extension = "." + extension
    return extension


def script_name(path: str, extension: str = DEFAULT_EXTENSION) -> str:
    """File base name without the script extension
    """
    name = os.path.basename(path)
    if name.endswith(extension):
        name = name[: -len(extension)]
    return name


def list_script_files(directory: str, extension: str = DEFAULT_EXTENSION):
    """Sorted paths of the script files in `directory` (not recursive)
    """
    if not directory or not os.path.isdir(directory):
        raise InvalidArgument(f"Script directory {repr(directory)} does not exist")
    directory = os.path.abspath(directory)
    paths = list()
    for filename in sorted(os.listdir(directory)):
        if not filename.endswith(extension):
            continue
        path = os.path.join(directory, filename)
        if os.path.isfile(path):
            paths.append(path)
    return paths


def read_script(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadFailed(path, str(e)) from e
