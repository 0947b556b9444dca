"""Exception handling.
"""

import stat

class _BaseException(Exception):
    """An exception that tries to suppress misleading context.

    `Exception Chaining and Embedded Tracebacks`_ has been introduced
    with Python 3.  Unfortunately the result is completely misleading
    most of the times.  This class supresses the context in
    :meth:`__init__`.

    .. _Exception Chaining and Embedded Tracebacks: https://www.python.org/dev/peps/pep-3134/

    """
    def __init__(self, *args):
        super().__init__(*args)
        if hasattr(self, '__cause__'):
            self.__cause__ = None

class ArgError(_BaseException):
    pass

class ConfigError(_BaseException):
    pass

class ArchiveError(_BaseException):
    pass

class ArchiveCreateError(ArchiveError):
    pass

class ArchiveExistsError(ArchiveCreateError):
    def __init__(self, path):
        self.path = path
        super().__init__("%s: archive file exists" % path)

class ArchiveReadError(ArchiveError):
    pass

class ArchiveUnsafePathError(ArchiveReadError):
    def __init__(self, name):
        self.name = name
        super().__init__("%s: refusing to extract entry outside of "
                         "the target directory" % name)

class ArchiveIntegrityError(ArchiveError):
    pass

class ArchiveInvalidTypeError(ArchiveCreateError):
    """The path to add is neither a regular file nor a directory.

    `ftype` is the file type bits from :func:`os.lstat` or
    :const:`None` if the path does not exist at all.
    """
    def __init__(self, path, ftype):
        self.path = path
        self.ftype = ftype
        if ftype is None:
            tstr = "no such file or directory"
        elif stat.S_ISLNK(ftype):
            tstr = "broken symbolic link"
        elif stat.S_ISFIFO(ftype):
            tstr = "FIFO"
        elif stat.S_ISCHR(ftype):
            tstr = "character device file"
        elif stat.S_ISBLK(ftype):
            tstr = "block device file"
        elif stat.S_ISSOCK(ftype):
            tstr = "socket"
        else:
            tstr = "unsuported type %x" % ftype
        super().__init__("%s: %s" % (str(path), tstr))

class ArchiveWarning(Warning):
    pass
