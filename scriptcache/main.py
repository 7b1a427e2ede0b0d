# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

"""Register the Lua scripts of a directory on a Redis server and execute one

    $ scriptcache --script-dir ./scripts incr 1 counter
"""

import sys
import logging
import argparse

import scriptcache
from scriptcache.config import get_config, create_script_cache
from scriptcache.errors import ScriptCacheError


_log = logging.getLogger("scriptcache.main")


def _format_result(result):
    if isinstance(result, bytes):
        return result.decode(errors="replace")
    if isinstance(result, list):
        return "\n".join(_format_result(item) for item in result)
    return str(result)


def main(args=None):
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("name", help="name of the script to execute")
    parser.add_argument(
        "args",
        nargs="*",
        help="EVALSHA arguments: number of keys, keys and script arguments",
    )
    parser.add_argument(
        "--script_dir",
        "--script-dir",
        dest="script_dir",
        default=None,
        help="directory of the script files "
        "(default to SCRIPTCACHE_SCRIPT_DIR environment variable)",
    )
    parser.add_argument(
        "--redis",
        dest="redis_url",
        default=None,
        help="Redis server URL (default to SCRIPTCACHE_REDIS_URL environment "
        "variable, otherwise redis://localhost:6379)",
    )
    parser.add_argument(
        "--db", dest="redis_db", type=int, default=None, help="Redis database"
    )
    parser.add_argument(
        "--extension", dest="extension", default=None, help="script file extension"
    )
    parser.add_argument("--log-level", default="WARNING", help="log level")
    options = parser.parse_args(args)

    scriptcache.logging_startup(options.log_level.upper())

    try:
        config = get_config(
            redis_url=options.redis_url,
            redis_db=options.redis_db,
            script_dir=options.script_dir,
            extension=options.extension,
        )
        cache = create_script_cache(config)
        names = cache.register_all_scripts()
        _log.info("registered scripts: %s", ", ".join(sorted(names)))
        result = cache.invoke(options.name, options.args)
    except ScriptCacheError as e:
        _log.debug("script execution failed", exc_info=True)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    print(_format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
