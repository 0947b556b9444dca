"""Implement the ls subcommand.
"""

import datetime
from pathlib import Path
import stat
import sys
import yaml
from zippy.archive import Archive, entry_method, entry_mode


def _method_name(zinfo):
    method = entry_method(zinfo)
    return method.value if method else str(zinfo.compress_type)

def _filemode(zinfo):
    mode = entry_mode(zinfo)
    if mode:
        return stat.filemode(mode)
    else:
        return ("d" if zinfo.is_dir() else "-") + "?" * 9

def ls_ls_format(archive):
    items = []
    l_s = 0
    l_c = 0
    l_m = 0
    for zinfo in archive:
        d = datetime.datetime(*zinfo.date_time).strftime("%Y-%m-%d %H:%M")
        elems = (_filemode(zinfo), str(zinfo.file_size),
                 str(zinfo.compress_size), _method_name(zinfo),
                 d, zinfo.filename)
        l_s = max(l_s, len(elems[1]))
        l_c = max(l_c, len(elems[2]))
        l_m = max(l_m, len(elems[3]))
        items.append(elems)
    format_str = "%%s  %%%ds  %%%ds  %%-%ds  %%s  %%s" % (l_s, l_c, l_m)
    for i in items:
        print(format_str % i)

def ls_yaml_format(archive):
    items = []
    for zinfo in archive:
        d = {
            'name': zinfo.filename,
            'type': 'd' if zinfo.is_dir() else 'f',
            'mode': entry_mode(zinfo),
            'size': zinfo.file_size,
            'compressed_size': zinfo.compress_size,
            'method': _method_name(zinfo),
            'date': datetime.datetime(*zinfo.date_time).isoformat(),
        }
        if zinfo.comment:
            d['comment'] = zinfo.comment.decode("utf-8", "replace")
        items.append(d)
    yaml.safe_dump(items, stream=sys.stdout,
                   default_flow_style=False, explicit_start=True)

def ls(args):
    with Archive().open(args.archive) as archive:
        if args.format == 'ls':
            ls_ls_format(archive)
        elif args.format == 'yaml':
            ls_yaml_format(archive)
        else:
            raise ValueError("invalid format '%s'" % args.format)
    return 0

def add_parser(subparsers):
    parser = subparsers.add_parser('ls', help="list entries in the archive")
    parser.add_argument('--format', choices=['ls', 'yaml'], default='ls',
                        help=("output style"))
    parser.add_argument('archive', type=Path,
                        help=("path to the archive file"))
    parser.set_defaults(func=ls)
