"""pytest configuration.
"""

import os
from pathlib import Path
from random import getrandbits
import shutil
import stat
import subprocess
import sys
import tempfile
import pytest
import zippy
from zippy.archive import Method


__all__ = [
    'DataDir', 'DataContentFile', 'DataRandomFile', 'DataSymLink',
    'archive_name', 'callscript', 'check_tree', 'get_output',
    'require_compression', 'setup_testdata',
]

_cleanup = True
testdir = Path(__file__).parent

def pytest_addoption(parser):
    parser.addoption("--no-cleanup", action="store_true", default=False,
                     help="do not clean up temporary data after the test.")

def pytest_configure(config):
    global _cleanup
    _cleanup = not config.getoption("--no-cleanup")

def require_compression(method):
    """Check if the library module needed for the compression method
    is available.  Skip if this is not the case.
    """
    msg = "%s module needed for '%s' compression is not available"
    method = Method(method)
    if method == Method.DEFLATE:
        try:
            import zlib
        except ImportError:
            pytest.skip(msg % ("zlib", method.value))
    elif method == Method.BZIP2:
        try:
            import bz2
        except ImportError:
            pytest.skip(msg % ("bz2", method.value))
    elif method == Method.ZSTD:
        if method.compress_type is None:
            pytest.skip("zipfile does not support '%s' compression"
                        % method.value)

class TmpDir(object):
    """Provide a temporary directory.
    """
    def __init__(self):
        self.dir = Path(tempfile.mkdtemp(prefix="zippy-test-"))
    def cleanup(self):
        if self.dir and _cleanup:
            shutil.rmtree(self.dir)
        self.dir = None
    def __enter__(self):
        return self.dir
    def __exit__(self, type, value, tb):
        self.cleanup()
    def __del__(self):
        self.cleanup()

@pytest.fixture(scope="module")
def tmpdir(request):
    with TmpDir() as td:
        yield td

@pytest.fixture(scope="function")
def testname(request):
    return request.function.__name__

@pytest.fixture(autouse=True)
def no_user_config(monkeypatch):
    """Make sure the configuration file of the user does not interfere.
    """
    monkeypatch.setenv("ZIPPY_CFG", os.devnull)

_counter = {}
def archive_name(ext="zip", tags=(), counter=None):
    l = ["archive"]
    l.extend(tags)
    if counter:
        _counter.setdefault(counter, 0)
        _counter[counter] += 1
        l.append(str(_counter[counter]))
    name = "-".join(l)
    return ".".join((name, ext))

def _set_fs_attrs(path, mode, mtime):
    if mode is not None:
        path.chmod(mode)
    if mtime is not None:
        os.utime(path, (mtime, mtime), follow_symlinks=False)

class DataItem:

    def __init__(self, path, mtime):
        self.path = path
        self.mtime = mtime

    @property
    def type(self):
        raise NotImplementedError

    def create(self, main_dir):
        raise NotImplementedError

class DataDir(DataItem):

    def __init__(self, path, mode, *, mtime=None):
        super().__init__(path, mtime)
        self.mode = mode

    @property
    def type(self):
        return 'd'

    def create(self, main_dir):
        path = main_dir / self.path
        path.mkdir(parents=True, exist_ok=True)
        _set_fs_attrs(path, self.mode, self.mtime)

class DataContentFile(DataItem):

    def __init__(self, path, data, mode, *, mtime=None):
        super().__init__(path, mtime)
        self.data = data
        self.mode = mode

    @property
    def type(self):
        return 'f'

    def create(self, main_dir):
        path = main_dir / self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            f.write(self.data)
        _set_fs_attrs(path, self.mode, self.mtime)

class DataRandomFile(DataContentFile):

    def __init__(self, path, mode, *, mtime=None, size=1024):
        data = bytes(getrandbits(8) for _ in range(size))
        super().__init__(path, data, mode, mtime=mtime)

class DataSymLink(DataItem):

    def __init__(self, path, target, *, mtime=None):
        super().__init__(path, mtime)
        self.target = target

    @property
    def type(self):
        return 'l'

    def create(self, main_dir):
        path = main_dir / self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.symlink_to(self.target)
        _set_fs_attrs(path, None, self.mtime)

def setup_testdata(main_dir, items):
    for item in sorted(items, key=lambda i: i.path, reverse=True):
        item.create(main_dir)

def check_tree(main_dir, items, prefix_dir=Path("."), mode=None):
    """Check that main_dir contains exactly the regular files in items.

    Directories in items are only required to exist.  If mode is not
    None, it is the expected mode for all files.
    """
    files = { Path(prefix_dir, i.path): i for i in items if i.type == 'f' }
    dirs = [ Path(prefix_dir, i.path) for i in items if i.type == 'd' ]
    found = set()
    for root, dirnames, filenames in os.walk(str(main_dir)):
        for fn in filenames:
            found.add(Path(root, fn).relative_to(main_dir))
    assert found == set(files.keys())
    for p, item in files.items():
        path = main_dir / p
        assert path.read_bytes() == item.data
        if mode is not None:
            assert stat.S_IMODE(path.stat().st_mode) == mode
    for p in dirs:
        assert (main_dir / p).is_dir()

def callscript(scriptname, args, returncode=0,
               stdin=None, stdout=None, stderr=None):
    try:
        script_dir = os.environ['BUILD_SCRIPTS_DIR']
    except KeyError:
        script_dir = testdir.parent / "scripts"
    script = Path(script_dir, scriptname)
    cmd = [sys.executable, str(script)] + args
    print("\n>", *cmd)
    retcode = subprocess.call(cmd, stdin=stdin, stdout=stdout, stderr=stderr)
    assert retcode == returncode

def get_output(fileobj):
    while True:
        line = fileobj.readline()
        if not line:
            break
        line = line.strip()
        print("< %s" % line)
        yield line

def pytest_report_header(config):
    """Add information on the package version used in the tests.
    """
    modpath = Path(zippy.__file__).resolve().parent
    return [ "zippy: %s" % (zippy.__version__),
             "       %s" % (modpath)]
