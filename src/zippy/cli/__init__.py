"""Provide the subcommands of the zippy-tool command line tool.
"""

import argparse
import importlib
import logging
import os.path
import sys
import warnings
from zippy.exception import *

log = logging.getLogger(__name__)
subcmds = ( "zip", "unzip", "ls", )
verbosity_levels = {
    0: (logging.WARNING, None),
    1: (logging.INFO, "verbose mode"),
    2: (logging.DEBUG, "very verbose mode"),
}

def showwarning(message, category, filename, lineno, file=None, line=None):
    """Display ArchiveWarning in a somewhat more user friendly manner.
    All other warnings are formatted the standard way.
    """
    # This is a modified version of the function of the same name from
    # the Python standard library warnings module.
    if file is None:
        file = sys.stderr
        if file is None:
            # sys.stderr is None when run with pythonw.exe - warnings get lost
            return
    try:
        if issubclass(category, ArchiveWarning):
            s = "%s: %s\n" % (os.path.basename(sys.argv[0]), message)
        else:
            s = warnings.formatwarning(message, category,
                                       filename, lineno, line)
        file.write(s)
    except OSError:
        pass # the file (probably stderr) is invalid - this warning gets lost.

def zippy_tool():
    warnings.showwarning = showwarning
    logging.basicConfig(level=logging.WARNING,
                        format="%(levelname)s: %(message)s")

    argparser = argparse.ArgumentParser(description="Compress files and "
                                        "directories into zip files and "
                                        "extract them again.")
    argparser.add_argument('-v', '--verbose', action='count', default=0,
                           help=("verbose diagnostic output, "
                                 "repeat for more"))
    subparsers = argparser.add_subparsers(title='subcommands', dest='subcmd')
    for sc in subcmds:
        m = importlib.import_module('zippy.cli.%s' % sc)
        m.add_parser(subparsers)
    args = argparser.parse_args()

    vflag = "-" + "v" * args.verbose
    try:
        level, msg = verbosity_levels[args.verbose]
    except KeyError:
        argparser.error("%s: why do you even want so much information?"
                        % vflag)
    logging.getLogger().setLevel(level)
    if msg:
        log.info("%s: %s", vflag, msg)
    if not hasattr(args, "func"):
        argparser.error("subcommand is required")

    try:
        sys.exit(args.func(args))
    except ArgError as e:
        argparser.error(str(e))
    except ConfigError as e:
        print("%s: configuration error: %s" % (argparser.prog, e),
              file=sys.stderr)
        sys.exit(2)
    except ArchiveError as e:
        if isinstance(e, ArchiveExistsError):
            status = 4
        elif isinstance(e, ArchiveCreateError):
            status = 1
        elif isinstance(e, ArchiveReadError):
            status = 1
        elif isinstance(e, ArchiveIntegrityError):
            status = 3
        else:
            raise
        print("%s %s: error: %s" % (argparser.prog, args.subcmd, e),
              file=sys.stderr)
        sys.exit(status)
