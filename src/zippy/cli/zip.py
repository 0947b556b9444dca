"""Implement the zip subcommand.
"""

from pathlib import Path
from zippy.archive import Archive, CompressionOptions, Method
from zippy.config import Config
from zippy.exception import ArchiveCreateError


def create(args):
    config = Config(args, config_section="zip")
    options = CompressionOptions(config.method, config.level, config.mode)
    if not args.output.exists():
        try:
            args.output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveCreateError(str(e))
    Archive().create(args.output, args.input, options)
    return 0

def add_parser(subparsers):
    parser = subparsers.add_parser('zip',
                                   help=("compress files and directories "
                                         "into a zip file"))
    parser.add_argument('-i', '--input', type=Path, nargs='+', required=True,
                        help=("files and directories to be archived"))
    parser.add_argument('-o', '--output', type=Path, required=True,
                        help=("path of the output zip archive"))
    parser.add_argument('-m', '--method', choices=[m.value for m in Method],
                        help=("compression method"))
    parser.add_argument('-l', '--level', type=int,
                        help=("compression level, the valid range "
                              "depends on the method"))
    parser.add_argument('--mode',
                        help=("unix permissions to record for the "
                              "files, in octal"))
    parser.set_defaults(func=create)
