"""Provide the Archive class.
"""

from enum import Enum
import logging
import os
from pathlib import Path
import stat
import warnings
import zipfile
import zlib
from zippy.exception import *
from zippy.paths import iterfiles, arcname, entry_path
from zippy.tools import humanize, zip_date_time
import zippy.tools

log = logging.getLogger(__name__)


class Method(Enum):
    STORE = 'store'
    DEFLATE = 'deflate'
    BZIP2 = 'bzip2'
    ZSTD = 'zstd'
    def __repr__(self):
        return '<%s.%s>' % (self.__class__.__name__, self.name)
    @property
    def compress_type(self):
        return compress_type_map[self]


compress_type_map = {
    Method.STORE: zipfile.ZIP_STORED,
    Method.DEFLATE: zipfile.ZIP_DEFLATED,
    Method.BZIP2: zipfile.ZIP_BZIP2,
    # Python 3.14 and newer
    Method.ZSTD: getattr(zipfile, 'ZIP_ZSTANDARD', None),
}
"""Map compression method to zipfile compression type.
The value is :const:`None` if zipfile does not support the method."""

level_range_map = {
    Method.DEFLATE: (0, 9),
    Method.BZIP2: (1, 9),
    Method.ZSTD: (-7, 22),
}
"""Map compression method to the range of valid compression levels."""

decompress_errors = [zipfile.BadZipFile, zlib.error, EOFError, OSError]
try:
    import lzma
    decompress_errors.append(lzma.LZMAError)
except ImportError:
    pass
try:
    # Python 3.14 and newer
    from compression.zstd import ZstdError
    decompress_errors.append(ZstdError)
except ImportError:
    pass
decompress_errors = tuple(decompress_errors)
"""Errors raised by zipfile while reading a damaged payload."""


def entry_method(zinfo):
    """Return the compression method of an entry.

    Return :const:`None` if the entry has been compressed with a
    method not in :class:`Method`.
    """
    for method, ctype in compress_type_map.items():
        if ctype is not None and ctype == zinfo.compress_type:
            return method
    return None

def entry_mode(zinfo):
    """Return the unix mode recorded for an entry or :const:`None`.
    """
    if zinfo.create_system != 3:
        return None
    return (zinfo.external_attr >> 16) or None


class CompressionOptions:
    """The compression settings that apply to all entries of an archive.
    """

    def __init__(self, method=Method.DEFLATE, level=None, mode=0o755):
        try:
            method = Method(method)
        except ValueError:
            raise ArchiveCreateError("invalid compression method '%s'"
                                     % method)
        if method.compress_type is None:
            raise ArchiveCreateError("%s compression is not supported "
                                     "by this Python version" % method.value)
        if level is not None:
            try:
                lmin, lmax = level_range_map[method]
            except KeyError:
                raise ArchiveCreateError("compression method %s does not "
                                         "take a level" % method.value)
            if not lmin <= level <= lmax:
                raise ArchiveCreateError("invalid %s compression level %d: "
                                         "must be between %d and %d"
                                         % (method.value, level, lmin, lmax))
        if not 0 <= mode <= 0o7777:
            raise ArchiveCreateError("invalid mode %o" % mode)
        self._method = method
        self._level = level
        self._mode = mode

    @property
    def method(self):
        return self._method

    @property
    def level(self):
        return self._level

    @property
    def mode(self):
        return self._mode

    def zipinfo(self, name, date_time=None):
        """Prepare a ZipInfo for a regular file entry.
        """
        zinfo = zipfile.ZipInfo(name, date_time or (1980, 1, 1, 0, 0, 0))
        zinfo.compress_type = self.method.compress_type
        if hasattr(zinfo, 'compress_level'):
            zinfo.compress_level = self.level
        else:
            # Python 3.12 and older
            zinfo._compresslevel = self.level
        zinfo.create_system = 3
        zinfo.external_attr = (stat.S_IFREG | self.mode) << 16
        return zinfo

    def __repr__(self):
        return ('%s(method=%r, level=%r, mode=0o%o)'
                % (self.__class__.__name__,
                   self.method, self.level, self.mode))


class Archive:

    chunksize = 64 * 1024

    def __init__(self, unix_perms=None):
        self.path = None
        self.options = None
        if unix_perms is None:
            unix_perms = zippy.tools.unix_perms
        self.unix_perms = unix_perms
        self._file = None
        self._names = None
        self._buffer = bytearray(self.chunksize)

    def create(self, path, paths, options=None, workdir=None):
        if options is None:
            options = CompressionOptions()
        if workdir is None:
            try:
                workdir = Path.cwd()
            except OSError as e:
                raise ArchiveCreateError("cannot determine the working "
                                         "directory: %s" % e)
        workdir = Path(workdir).resolve()
        path = workdir / path
        if path.exists() or path.is_symlink():
            raise ArchiveExistsError(path)
        self.options = options
        self._names = set()
        try:
            compression = options.method.compress_type
            self._file = zipfile.ZipFile(str(path), 'x',
                                         compression=compression,
                                         compresslevel=options.level)
        except FileExistsError:
            raise ArchiveExistsError(path)
        except OSError as e:
            raise ArchiveCreateError(str(e))
        self.path = path.resolve()
        log.info("zip to file %s", path)
        try:
            try:
                for p in paths:
                    for fp in iterfiles(workdir / p):
                        self._add_file(fp, arcname(fp, workdir))
            finally:
                self.close()
        except OSError as e:
            raise ArchiveCreateError(str(e))
        log.info("zipped %d files into %s", len(self._names), path)
        return self

    def _add_file(self, path, name):
        if name in self._names:
            warnings.warn(ArchiveWarning("%s: duplicate entry name, "
                                         "file skipped" % name))
            return
        if path.resolve() == self.path:
            warnings.warn(ArchiveWarning("%s: not adding the archive "
                                         "to itself" % path))
            return
        fstat = path.stat()
        with path.open("rb") as f:
            self.add_entry(name, f, size=fstat.st_size,
                           date_time=zip_date_time(fstat.st_mtime))

    def add_entry(self, name, fileobj, size=None, date_time=None):
        """Add a regular file entry, reading the content from fileobj.

        The content is copied in chunks through a buffer that is
        reused for all entries.  If the size is known in advance, it
        should be passed, so that large files get properly recorded.
        """
        if not self._file:
            raise ValueError("archive is closed.")
        zinfo = self.options.zipinfo(name, date_time)
        if size is not None:
            zinfo.file_size = size
        view = memoryview(self._buffer)
        with self._file.open(zinfo, mode='w') as dst:
            while True:
                n = fileobj.readinto(self._buffer)
                if not n:
                    break
                dst.write(view[:n])
        self._names.add(name)
        log.info("zip %s", name)
        log.debug("%s: %s, %s compressed", name,
                  humanize(zinfo.file_size), humanize(zinfo.compress_size))

    def open(self, path):
        try:
            self._file = zipfile.ZipFile(str(path), 'r')
        except zipfile.BadZipFile as e:
            raise ArchiveIntegrityError("%s: %s" % (path, e))
        except OSError as e:
            raise ArchiveReadError(str(e))
        self.path = Path(path).resolve()
        return self

    def close(self):
        if self._file:
            try:
                self._file.close()
            finally:
                self._file = None

    def __enter__(self):
        return self

    def __exit__(self, type, value, tb):
        self.close()

    def __del__(self):
        self.close()

    def __iter__(self):
        if not self._file:
            raise ValueError("archive is closed.")
        return iter(self._file.infolist())

    def _target_path(self, basedir, name):
        path = basedir / entry_path(name)
        # The entry name is clean at this point, but a symbolic link
        # already present in basedir might still lead us astray.
        try:
            resolved = path.resolve()
        except (OSError, RuntimeError) as e:
            raise ArchiveReadError("%s: %s" % (name, e))
        if resolved != basedir and basedir not in resolved.parents:
            raise ArchiveUnsafePathError(name)
        return path

    def _copy_payload(self, zinfo, dst):
        view = memoryview(self._buffer)
        with self._file.open(zinfo) as src:
            while True:
                try:
                    n = src.readinto(self._buffer)
                except decompress_errors as e:
                    raise ArchiveIntegrityError("%s: %s"
                                                % (zinfo.filename, e))
                if not n:
                    break
                dst.write(view[:n])

    def _extract_entry(self, idx, zinfo, path):
        if zinfo.is_dir():
            path.mkdir(parents=True, exist_ok=True)
            log.info("[%d] extracted dir %s", idx, path)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as dst:
                self._copy_payload(zinfo, dst)
            log.info("[%d] extracted file %s (%s)",
                     idx, path, humanize(zinfo.file_size))
            mode = entry_mode(zinfo)
            if self.unix_perms and mode:
                os.chmod(str(path), stat.S_IMODE(mode))
        if zinfo.comment:
            log.info("[%d] comment: %s",
                     idx, zinfo.comment.decode("utf-8", "replace"))

    def extract(self, targetdir):
        """Extract all entries into targetdir.

        The target directory is created if needed, but its parent must
        exist.  Return the number of entries extracted.
        """
        if not self._file:
            raise ValueError("archive is closed.")
        targetdir = Path(targetdir)
        try:
            if not targetdir.is_dir():
                targetdir.mkdir()
                log.info("created %s", targetdir)
            basedir = targetdir.resolve()
        except OSError as e:
            raise ArchiveReadError(str(e))
        # We set the mode of the directories last, deepest first.
        # This way, a directory without write permission does not
        # prevent extracting its content.
        dirstack = []
        count = 0
        for idx, zinfo in enumerate(self._file.infolist()):
            path = self._target_path(basedir, zinfo.filename)
            if path == basedir:
                if not zinfo.is_dir():
                    raise ArchiveReadError("%s: invalid entry name"
                                           % zinfo.filename)
                log.debug("[%d] %s is the target directory itself",
                          idx, zinfo.filename)
                count += 1
                continue
            try:
                self._extract_entry(idx, zinfo, path)
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                raise ArchiveIntegrityError("%s: %s" % (zinfo.filename, e))
            except NotImplementedError as e:
                raise ArchiveReadError("%s: %s" % (zinfo.filename, e))
            except OSError as e:
                raise ArchiveReadError(str(e))
            if zinfo.is_dir() and entry_mode(zinfo):
                dirstack.append((path, entry_mode(zinfo)))
            count += 1
        if self.unix_perms:
            dirstack.sort(key=lambda d: len(d[0].parts), reverse=True)
            for path, mode in dirstack:
                try:
                    os.chmod(str(path), stat.S_IMODE(mode))
                except OSError as e:
                    raise ArchiveReadError(str(e))
        log.info("extracted %d entries from %s", count, self.path)
        return count
