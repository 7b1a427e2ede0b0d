# -*- coding: utf-8 -*-
#
# This file is part of the scriptcache project
#
# Copyright (c) 2015-2020 Beamline Control Unit, ESRF
# Distributed under the GNU LGPLv3. See LICENSE for more info.

import os
import sys

from setuptools import setup, find_packages

TESTING = any(x in sys.argv for x in ["test", "pytest"])


def abspath(*path):
    """A method to determine absolute path for a given relative path to the
    directory where this setup.py script is located"""
    setup_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(setup_dir, *path)


def get_release_info():
    meta = dict()
    with open(abspath("scriptcache", "release.py")) as f:
        exec(f.read(), meta)
    return meta


console_script_entry_points = ["scriptcache = scriptcache.main:main"]


def main():
    """run setup"""

    py = sys.version_info
    py_str = ".".join(map(str, py))

    if py < (3,):
        print(("Incompatible python version ({0}). Needs python 3.x ".format(py_str)))
        sys.exit(1)

    meta = get_release_info()

    packages = find_packages(where=abspath(), exclude=("tests*",))

    install_requires = ["redis >= 3", "hiredis", "gevent >= 1.4"]

    tests_require = ["pytest >= 4.1.1", "pytest-cov >= 2.6.1"]

    setup_requires = []

    if TESTING:
        setup_requires += ["pytest-runner"]

    setup(
        name=meta["name"],
        author=meta["author"],
        version=meta["version"],
        description=meta["description"],
        license=meta["license"],
        url=meta["url"],
        packages=packages,
        entry_points={"console_scripts": console_script_entry_points},
        install_requires=install_requires,
        tests_require=tests_require,
        extras_require={"tests": tests_require},
        setup_requires=setup_requires,
    )


if __name__ == "__main__":
    main()
