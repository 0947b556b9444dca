#! /usr/bin/python
"""Compress files and directories into zip files and extract them again

This package provides tools for packing a set of files and directory
trees into a single zip archive and for unpacking a zip archive into a
directory tree, preserving the relative paths and the unix file
permissions.

The package provides a command line tool to enable the following
tasks:

+ Create a zip archive, takes a list of files and directories to
  include in the archive as input.  The compression method (store,
  deflate, bzip2, or zstd) and level can be selected.

+ Extract a zip archive into a directory, refusing entries that would
  end up outside of that directory.

+ List the contents of a zip archive.
"""

import logging
from pathlib import Path
import setuptools
from setuptools import setup
import setuptools.command.build_py
try:
    import setuptools_scm
    version = setuptools_scm.get_version()
except (ImportError, LookupError):
    try:
        import _meta
        version = _meta.version
    except ImportError:
        version = "0.1.0"

log = logging.getLogger(__name__)
docstring = __doc__


class meta(setuptools.Command):

    description = "generate meta files"
    user_options = []
    meta_template = '''
version = "%(version)s"
'''

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        version = self.distribution.get_version()
        log.info("version: %s", version)
        values = {
            'version': version,
        }
        with Path("src", "zippy", "_meta.py").open("wt") as f:
            print(self.meta_template % values, file=f)
        with Path("_meta.py").open("wt") as f:
            print(self.meta_template % values, file=f)


class build_py(setuptools.command.build_py.build_py):
    def run(self):
        self.run_command('meta')
        super().run()


with Path("README.rst").open("rt", encoding="utf8") as f:
    readme = f.read()

setup(
    name = "zippy",
    version = version,
    description = docstring.split("\n")[0],
    long_description = readme,
    long_description_content_type = "text/x-rst",
    license = "Apache-2.0",
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: 3.14",
        "Topic :: System :: Archiving",
        "Topic :: System :: Archiving :: Compression",
    ],
    package_dir = {"": "src"},
    packages = ["zippy", "zippy.cli"],
    python_requires = ">=3.7",
    install_requires = ["PyYAML"],
    extras_require = {
        "test": ["pytest", "pytest-dependency"],
    },
    scripts = ["scripts/zippy-tool.py"],
    cmdclass = dict(build_py=build_py, meta=meta),
)
