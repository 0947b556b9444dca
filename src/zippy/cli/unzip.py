"""Implement the unzip subcommand.
"""

from pathlib import Path
from zippy.archive import Archive


def extract(args):
    with Archive().open(args.input) as archive:
        archive.extract(args.output)
    return 0

def add_parser(subparsers):
    parser = subparsers.add_parser('unzip', help="extract a zip file")
    parser.add_argument('-i', '--input', type=Path, required=True,
                        help=("path of the input zip archive"))
    parser.add_argument('-o', '--output', type=Path, required=True,
                        help=("path of the output directory"))
    parser.set_defaults(func=extract)
