"""Manage configuration.

.. note::
   This module is intended as a helper for the internal use in the
   command line tool.  It is not considered to be part of the API of
   zippy.  Most users will not need to use it directly or even care
   about it.
"""

from collections import ChainMap
import configparser
import os
from pathlib import Path
from zippy.archive import Method
from zippy.exception import ConfigError


def get_config_file():
    try:
        return os.environ['ZIPPY_CFG']
    except KeyError:
        return str(Path.home() / ".config" / "zippy.cfg")

def _octal(value):
    return int(value, 8)

class Config(ChainMap):
    """Lookup settings in the command line arguments first, then in
    the configuration file, and finally in the defaults.

    Command line arguments that have not been given (are None) are
    skipped.  A missing configuration file is not an error.
    """

    defaults = {
        'method': 'deflate',
        'level': None,
        'mode': '755',
    }
    args_options = ('method', 'level', 'mode')

    def __init__(self, args, config_section=None):
        args_cfg = { k:vars(args)[k]
                     for k in self.args_options
                     if vars(args).get(k) is not None }
        super().__init__({}, args_cfg)
        self.config_file = get_config_file()
        self.config_section = []
        if config_section:
            cp = configparser.ConfigParser(comment_prefixes=('#', '!'),
                                           interpolation=None)
            try:
                self.config_file = cp.read(self.config_file)
            except configparser.Error as e:
                raise ConfigError(str(e))
            if isinstance(config_section, str):
                config_section = (config_section,)
            for section in config_section:
                try:
                    self.maps.append(cp[section])
                    self.config_section.append(section)
                except KeyError:
                    pass
        self.maps.append(self.defaults)

    def get(self, key, required=False, type=None):
        value = super().get(key)
        if value is None:
            if required:
                raise ConfigError("%s not specified" % key)
        elif type:
            try:
                value = type(value)
            except ValueError:
                raise ConfigError("invalid value for %s: '%s'" % (key, value))
        return value

    @property
    def method(self):
        return self.get('method', required=True, type=Method)

    @property
    def level(self):
        return self.get('level', type=int)

    @property
    def mode(self):
        return self.get('mode', required=True, type=_octal)
