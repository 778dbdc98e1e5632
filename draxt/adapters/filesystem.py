"""Filesystem adapter for draxt.

Nodes never touch ``os``/``shutil`` directly: every filesystem call goes
through a ``FileSystemAdapter`` (blocking) or an ``AsyncFileSystemAdapter``
(the same calls run in a worker thread). Errors raised by the operating
system are propagated unchanged.
"""

import asyncio
import errno
import functools
import logging
import os
import shutil
import stat as stat_module  # To avoid name collision with the stat() method
from datetime import datetime
from typing import Any, List, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _timestamp(value: Union[int, float, datetime]) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)


def _same_entry(src: PathLike, dest: PathLike) -> bool:
    # Only the parent is resolved, so a link is not confused with its target
    def entry_path(path):
        parent, name = os.path.split(os.path.abspath(os.fspath(path)))
        return os.path.join(os.path.realpath(parent), name)

    if entry_path(src) == entry_path(dest):
        return True
    try:
        src_stats, dest_stats = os.lstat(src), os.lstat(dest)
    except FileNotFoundError:
        return False
    return (src_stats.st_dev, src_stats.st_ino) == (dest_stats.st_dev, dest_stats.st_ino)


def _to_bytes(data: Union[str, bytes], encoding: str) -> bytes:
    if isinstance(data, str):
        return data.encode(encoding)
    return bytes(data)


class FileSystemAdapter:
    """Blocking filesystem service.

    Thin layer over ``os``, ``shutil`` and ``stat``. Compound operations
    (``copy``, ``move``, ``remove``, ``ensure_*``, ``empty_dir``) behave like
    their ``cp -r``, ``mv``, ``rm -rf`` and ``mkdir -p`` counterparts.
    """

    # Existence and metadata

    def exists(self, path: PathLike) -> bool:
        """Check whether ``path`` exists, following symbolic links."""
        return os.path.exists(path)

    def access(self, path: PathLike, mode: int = os.F_OK) -> None:
        """Test the caller's permissions for ``path``.

        Raises:
            FileNotFoundError: if the path does not exist
            PermissionError: if the requested access is not granted
        """
        if os.access(path, mode):
            return
        if not os.path.lexists(path):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path))
        raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), os.fspath(path))

    def stat(self, path: PathLike) -> os.stat_result:
        return os.stat(path)

    def lstat(self, path: PathLike) -> os.stat_result:
        """Stat ``path`` without dereferencing a final symbolic link."""
        return os.lstat(path)

    # Permissions, ownership and timestamps

    def chmod(self, path: PathLike, mode: int) -> None:
        logger.debug("chmod %s %o", path, mode)
        os.chmod(path, mode)

    def lchmod(self, path: PathLike, mode: int) -> None:
        # Not supported by every platform (Linux raises NotImplementedError)
        logger.debug("lchmod %s %o", path, mode)
        os.chmod(path, mode, follow_symlinks=False)

    def chown(self, path: PathLike, uid: int, gid: int) -> None:
        logger.debug("chown %s %s:%s", path, uid, gid)
        os.chown(path, uid, gid)

    def lchown(self, path: PathLike, uid: int, gid: int) -> None:
        logger.debug("lchown %s %s:%s", path, uid, gid)
        os.lchown(path, uid, gid)

    def utimes(self, path: PathLike, atime, mtime) -> None:
        os.utime(path, (_timestamp(atime), _timestamp(mtime)))

    # Creation, removal and relocation

    def link(self, src: PathLike, dest: PathLike) -> None:
        logger.debug("link %s -> %s", src, dest)
        os.link(src, dest)

    def rename(self, src: PathLike, dest: PathLike) -> None:
        logger.debug("rename %s -> %s", src, dest)
        os.rename(src, dest)

    def copy(self, src: PathLike, dest: PathLike, overwrite: bool = True) -> None:
        """Copy a file or a whole directory tree, creating missing parents.

        Args:
            src: Source path
            dest: Destination path
            overwrite: Replace existing destination files
        """
        logger.debug("copy %s -> %s", src, dest)
        if not overwrite and os.path.lexists(dest):
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), os.fspath(dest))
        parent = os.path.dirname(os.fspath(dest))
        if parent:
            os.makedirs(parent, exist_ok=True)
        if os.path.isdir(src) and not os.path.islink(src):
            shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=overwrite)
        else:
            shutil.copy2(src, dest, follow_symlinks=False)

    def move(self, src: PathLike, dest: PathLike, overwrite: bool = False) -> None:
        """Move ``src`` to ``dest``, creating the destination's parents.

        Raises:
            shutil.SameFileError: if ``src`` and ``dest`` name the same entry
            FileExistsError: if ``dest`` exists and ``overwrite`` is False
        """
        logger.debug("move %s -> %s", src, dest)
        if _same_entry(src, dest):
            raise shutil.SameFileError(
                errno.EINVAL, "Source and destination must not be the same", os.fspath(src))
        if os.path.lexists(dest):
            if not overwrite:
                raise FileExistsError(errno.EEXIST, "dest already exists", os.fspath(dest))
            self.remove(dest)
        parent = os.path.dirname(os.fspath(dest))
        if parent:
            os.makedirs(parent, exist_ok=True)
        shutil.move(os.fspath(src), os.fspath(dest))

    def remove(self, path: PathLike) -> None:
        """Remove a file, link or directory tree. Missing paths are ignored."""
        logger.debug("remove %s", path)
        try:
            mode = os.lstat(path).st_mode
        except FileNotFoundError:
            return
        if stat_module.S_ISDIR(mode):
            shutil.rmtree(path)
        else:
            os.unlink(path)

    def ensure_dir(self, path: PathLike) -> None:
        os.makedirs(path, exist_ok=True)

    def ensure_file(self, path: PathLike) -> None:
        """Create an empty file (and its parents) unless it already exists."""
        if os.path.isfile(path):
            return
        parent = os.path.dirname(os.fspath(path))
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'ab'):
            pass

    def empty_dir(self, path: PathLike) -> None:
        """Make sure ``path`` is an existing directory with no entries.

        The directory itself is never removed.
        """
        if not os.path.exists(path):
            os.makedirs(path)
            return
        for entry in os.listdir(path):
            self.remove(os.path.join(path, entry))

    def rmdir(self, path: PathLike) -> None:
        """Remove an empty directory."""
        logger.debug("rmdir %s", path)
        os.rmdir(path)

    # Listing and links

    def readdir(self, path: PathLike) -> List[str]:
        """Return the entry names of a directory, sorted."""
        return sorted(os.listdir(path))

    def readlink(self, path: PathLike) -> str:
        return os.readlink(path)

    # File content

    def read_file(self, path: PathLike, encoding: Optional[str] = None) -> Union[str, bytes]:
        """Read a whole file; bytes unless an encoding is given."""
        if encoding is None:
            with open(path, 'rb') as f:
                return f.read()
        with open(path, 'r', encoding=encoding) as f:
            return f.read()

    def write_file(self, path: PathLike, data: Union[str, bytes], encoding: str = 'utf-8') -> None:
        with open(path, 'wb') as f:
            f.write(_to_bytes(data, encoding))

    def append_file(self, path: PathLike, data: Union[str, bytes], encoding: str = 'utf-8') -> None:
        with open(path, 'ab') as f:
            f.write(_to_bytes(data, encoding))

    def truncate(self, path: PathLike, length: int = 0) -> None:
        os.truncate(path, length)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class AsyncFileSystemAdapter:
    """Async view of a FileSystemAdapter.

    Uses the dynamic proxy pattern: every callable attribute of the wrapped
    adapter is exposed as a coroutine function that runs the blocking call
    in a worker thread with ``asyncio.to_thread``. Non-callable attributes
    are returned as-is.
    """

    def __init__(self, base_adapter: Optional[FileSystemAdapter] = None):
        """Initialize the async adapter.

        Args:
            base_adapter: Blocking adapter to wrap (creates default if None)
        """
        self._base_adapter = base_adapter or FileSystemAdapter()

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._base_adapter, name)

        if not callable(attr):
            return attr

        @functools.wraps(attr)
        async def wrapper(*args, **kwargs):
            return await asyncio.to_thread(attr, *args, **kwargs)

        return wrapper

    def get_base_adapter(self) -> FileSystemAdapter:
        """Get the wrapped blocking adapter."""
        return self._base_adapter

    def __repr__(self) -> str:
        return f"AsyncFileSystemAdapter({self._base_adapter!r})"
