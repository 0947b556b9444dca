#! /usr/bin/python

from zippy.cli import zippy_tool

zippy_tool()
