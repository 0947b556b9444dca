"""Compress files and directories into zip files and extract them again

This package provides tools for packing a set of files and directory
trees into a single zip archive and for unpacking a zip archive into a
directory tree, preserving the relative paths and the unix file
permissions.
"""

from ._meta import version as __version__
from .archive import Archive, CompressionOptions, Method
from .exception import *
