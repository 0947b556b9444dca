"""A collection of internal helper routines.

.. note::
   This module is intended for the internal use in zippy and is not
   considered to be part of the API.  No effort will be made to keep
   anything in here compatible between different versions.
"""

import os
import time


unix_perms = (os.name == "posix")
"""Whether the host applies unix permission modes to files."""

size_units = ("bytes", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")
"""Binary prefixed size units, in steps of 1024."""


def humanize(size):
    """Render a size in bytes in binary prefixed units.

    The value is truncated to the largest unit not exceeding it:

    >>> humanize(1023)
    '1023 bytes'
    >>> humanize(1536)
    '1 KiB'
    >>> humanize(5 * 1024**3)
    '5 GiB'
    """
    exp = 0
    while exp < len(size_units) - 1 and size >= 1024 ** (exp + 1):
        exp += 1
    return "%d %s" % (size // 1024 ** exp, size_units[exp])


def zip_date_time(mtime):
    """Convert a timestamp into a date_time tuple for a ZIP entry.

    The ZIP format can only store dates between 1980 and 2107,
    timestamps outside this range are clamped.
    """
    date_time = time.localtime(mtime)[0:6]
    if date_time[0] < 1980:
        return (1980, 1, 1, 0, 0, 0)
    elif date_time[0] > 2107:
        return (2107, 12, 31, 23, 59, 59)
    else:
        return date_time
