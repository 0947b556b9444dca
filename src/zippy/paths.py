"""Map between paths in the filesystem and entry names in the archive.
"""

import logging
import os
from pathlib import Path, PurePath
import re
import stat
import warnings
from zippy.exception import *

log = logging.getLogger(__name__)

_drive_re = re.compile(r'^[A-Za-z]:$')


def _invalid_type(path):
    try:
        ftype = stat.S_IFMT(path.lstat().st_mode)
    except OSError:
        ftype = None
    return ArchiveInvalidTypeError(path, ftype)


def iterfiles(path):
    """Iterate over the regular files in path.

    If path is a regular file, yield path.  If it is a directory,
    descend into its canonical path and yield every regular file
    found below it.  The entries of each directory are visited in
    sorted order.  Symbolic links to directories are not followed,
    symbolic links to files are yielded under the name of the link.

    Raise :exc:`ArchiveInvalidTypeError` if path is neither a regular
    file nor a directory.  Other file types found in a directory are
    ignored with a warning.
    """
    if path.is_file():
        yield path
    elif path.is_dir():
        yield from _walk(path.resolve())
    else:
        raise _invalid_type(path)


def _walk(dirpath):
    try:
        entries = sorted(dirpath.iterdir())
    except OSError as e:
        raise ArchiveCreateError("cannot read directory %s: %s"
                                 % (dirpath, e))
    for p in entries:
        if p.is_dir():
            if p.is_symlink():
                log.debug("%s: not following symbolic link", p)
                continue
            yield from _walk(p)
        elif p.is_file():
            yield p
        else:
            warnings.warn(ArchiveWarning("%s ignored" % _invalid_type(p)))


def arcname(path, workdir):
    """Return the entry name for path.

    A relative path is taken relative to workdir.  If the path lies
    within workdir, the name is relative to it, otherwise the name is
    the absolute path with the drive, if any, removed.  The name
    always uses forward slashes.
    """
    workdir = PurePath(os.path.normpath(str(workdir)))
    p = PurePath(os.path.normpath(os.path.join(str(workdir), str(path))))
    try:
        return p.relative_to(workdir).as_posix()
    except ValueError:
        return "/" + "/".join(p.parts[1:])


def entry_path(name):
    """Convert the name of an archive entry into a relative path.

    Raise :exc:`ArchiveUnsafePathError` if the name has a parent
    directory segment.  Absolute names are made relative by dropping
    the leading slash or drive.  A name without any path component,
    such as ``./``, yields ``Path(".")``, the target directory itself.
    """
    if not name:
        raise ArchiveReadError("invalid empty entry name")
    parts = [ s for s in name.replace("\\", "/").split("/")
              if s and s != "." ]
    if ".." in parts:
        raise ArchiveUnsafePathError(name)
    if parts and _drive_re.match(parts[0]):
        parts.pop(0)
        absolute = True
    else:
        absolute = name.startswith(("/", "\\"))
    if absolute:
        warnings.warn(ArchiveWarning("%s: absolute entry name, "
                                     "extracting relative to the target "
                                     "directory" % name))
    return Path(*parts)
