"""Filesystem node abstraction.

``Node`` represents one path on disk plus an optional cached stats
snapshot. ``File``, ``Directory`` and ``SymbolicLink`` extend it with
kind-specific operations and register themselves by ``NodeKind`` so that
``classify`` can map raw stats to the right class without importing them.

The query engine (``raw_query``, ``to_nodes``, ``query`` and their
blocking twins) lives here as class methods.
"""

import asyncio
import glob as glob_module
import os
import stat as stat_module  # To avoid name collision with Node.stat()
from datetime import datetime
from pathlib import PurePath
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, Union

from .._common import mode_to_octal, mode_to_permissions, parse_mode
from ..adapters import AsyncFileSystemAdapter, FileSystemAdapter, GlobAdapter
from ..config import GlobOptions, NodeKind
from ..errors import (
    InvalidOptionsError,
    InvalidParameterError,
    StatsNotCachedError,
)


OptionsArg = Union[None, str, os.PathLike, Mapping[str, Any], GlobOptions]

_filesystem = FileSystemAdapter()


class Node:
    """A filesystem path with an optional cached stats snapshot.

    Attributes:
        path_name: Path of the node, the identity key inside collections
        base_name: Last path segment, e.g. ``'readme.md'``
        name: Base name without extension, e.g. ``'readme'``
        extension: Extension without the dot, ``''`` when there is none
        parent_path: Path of the containing directory
        root_path: Root of the path (``'/'`` for absolute POSIX paths)

    Path attributes are only ever changed together, by ``rename`` and
    ``move_to``. Neither refreshes the cached stats; call ``renew_stats``
    afterwards when fresh metadata is needed.
    """

    KIND: ClassVar[NodeKind] = NodeKind.GENERIC
    NODE_TYPE: ClassVar[int] = NodeKind.GENERIC.value
    node_name: ClassVar[str] = 'Node'

    # Services shared by every node; replace on a subclass to plug in another implementation
    fs: ClassVar[FileSystemAdapter] = _filesystem
    afs: ClassVar[AsyncFileSystemAdapter] = AsyncFileSystemAdapter(_filesystem)
    globber: ClassVar[GlobAdapter] = GlobAdapter()

    _kinds: ClassVar[Dict[NodeKind, Type['Node']]] = {}

    def __init_subclass__(cls, **kwargs):
        """Register concrete node classes by the kind they declare."""
        super().__init_subclass__(**kwargs)
        if 'KIND' in cls.__dict__:
            cls.NODE_TYPE = cls.KIND.value
            cls.node_name = cls.__name__
            Node._kinds[cls.KIND] = cls

    def __init__(self, path_name: Union[str, os.PathLike], stats: Optional[Any] = None):
        """Construct a new node.

        Args:
            path_name: Absolute path of the node
            stats: Optional ``os.stat_result`` for the path
        """
        self._stats = stats
        self._set_path_params(path_name)

    def _set_path_params(self, path_name: Union[str, os.PathLike]) -> None:
        """Parse ``path_name`` and set every path-derived attribute at once."""
        path_name = os.fspath(path_name)
        stripped = path_name.rstrip('/' + os.sep) or path_name
        base_name = os.path.basename(stripped)
        name, ext = os.path.splitext(base_name)
        parent_path = os.path.dirname(stripped)
        root_path = PurePath(path_name).anchor

        self.path_name = path_name
        self.base_name = base_name
        self.name = name
        self.extension = ext[1:]
        self.parent_path = parent_path
        self.root_path = root_path

    @property
    def kind(self) -> NodeKind:
        return type(self).KIND

    # Path accessors

    def get_path_name(self) -> str:
        return self.path_name

    def get_base_name(self) -> str:
        return self.base_name

    def get_name(self) -> str:
        return self.name

    def get_extension(self) -> str:
        return self.extension

    def get_parent_path(self) -> str:
        return self.parent_path

    # Cached stats

    def get_cached_stats(self) -> Optional[Any]:
        """Get the cached stats snapshot.

        Returns None when the node was created manually without stats
        and ``renew_stats`` has not been called yet.
        """
        return self._stats

    def get_stat_prop(self, prop_name: str) -> Any:
        """Get a property of the cached stats, or None when not cached.

        Both ``'size'`` and ``'st_size'`` spellings are accepted.
        """
        if self._stats is None:
            return None
        if hasattr(self._stats, prop_name):
            return getattr(self._stats, prop_name)
        return getattr(self._stats, f'st_{prop_name}', None)

    def _get_stat_time(self, prop_name: str) -> Optional[datetime]:
        value = self.get_stat_prop(prop_name)
        if value is None:
            return None
        return datetime.fromtimestamp(value)

    def get_access_time(self) -> Optional[datetime]:
        return self._get_stat_time('atime')

    def get_modified_time(self) -> Optional[datetime]:
        return self._get_stat_time('mtime')

    def get_change_time(self) -> Optional[datetime]:
        return self._get_stat_time('ctime')

    def get_birth_time(self) -> Optional[datetime]:
        """Creation time; None where the platform does not record it."""
        return self._get_stat_time('birthtime')

    def get_size(self) -> Optional[int]:
        return self.get_stat_prop('size')

    def _require_mode(self) -> int:
        mode = self.get_stat_prop('mode')
        if mode is None:
            raise StatsNotCachedError(self.path_name)
        return mode

    def get_permissions(self) -> Dict[str, Dict[str, bool]]:
        """Get permissions for owner, group and others from the cached mode.

        Returns:
            ``{'read': {...}, 'write': {...}, 'execute': {...}}`` where each
            value maps ``'owner'``, ``'group'`` and ``'others'`` to a bool

        Raises:
            StatsNotCachedError: if no stats have been fetched yet
        """
        return mode_to_permissions(self._require_mode())

    def get_octal_permissions(self) -> str:
        """Get the permission bits as an octal string, e.g. ``'755'``."""
        return mode_to_octal(self._require_mode())

    async def renew_stats(self) -> os.stat_result:
        """Fetch fresh stats (lstat) and cache them.

        Returns:
            The new stats snapshot
        """
        stats = await self.afs.lstat(self.path_name)
        self._stats = stats
        return stats

    def renew_stats_sync(self) -> 'Node':
        self._stats = self.fs.lstat(self.path_name)
        return self

    # Identity

    def is_directory(self) -> bool:
        return self.KIND is NodeKind.DIRECTORY

    def is_file(self) -> bool:
        return self.KIND is NodeKind.FILE

    def is_symbolic_link(self) -> bool:
        return self.KIND is NodeKind.SYMBOLIC_LINK

    def is_dot_file(self) -> bool:
        return self.base_name.startswith('.')

    # Filesystem wrappers

    async def access(self, mode: int = os.F_OK) -> None:
        """Test the user's permissions for the node; raises OSError on failure."""
        await self.afs.access(self.path_name, mode)

    def access_sync(self, mode: int = os.F_OK) -> 'Node':
        self.fs.access(self.path_name, mode)
        return self

    async def chmod(self, mode: Union[int, str]) -> None:
        await self.afs.chmod(self.path_name, parse_mode(mode))

    def chmod_sync(self, mode: Union[int, str]) -> 'Node':
        self.fs.chmod(self.path_name, parse_mode(mode))
        return self

    async def lchmod(self, mode: Union[int, str]) -> None:
        await self.afs.lchmod(self.path_name, parse_mode(mode))

    def lchmod_sync(self, mode: Union[int, str]) -> 'Node':
        self.fs.lchmod(self.path_name, parse_mode(mode))
        return self

    async def chown(self, uid: int, gid: int) -> None:
        await self.afs.chown(self.path_name, uid, gid)

    def chown_sync(self, uid: int, gid: int) -> 'Node':
        self.fs.chown(self.path_name, uid, gid)
        return self

    async def lchown(self, uid: int, gid: int) -> None:
        await self.afs.lchown(self.path_name, uid, gid)

    def lchown_sync(self, uid: int, gid: int) -> 'Node':
        self.fs.lchown(self.path_name, uid, gid)
        return self

    async def exists(self) -> bool:
        """Does the node exist on the filesystem?"""
        return await self.afs.exists(self.path_name)

    def exists_sync(self) -> bool:
        return self.fs.exists(self.path_name)

    async def stat(self) -> os.stat_result:
        return await self.afs.stat(self.path_name)

    def stat_sync(self) -> os.stat_result:
        return self.fs.stat(self.path_name)

    async def lstat(self) -> os.stat_result:
        return await self.afs.lstat(self.path_name)

    def lstat_sync(self) -> os.stat_result:
        return self.fs.lstat(self.path_name)

    async def link(self, new_path: Union[str, os.PathLike]) -> None:
        """Create a hard link to the node at ``new_path``."""
        await self.afs.link(self.path_name, new_path)

    def link_sync(self, new_path: Union[str, os.PathLike]) -> 'Node':
        self.fs.link(self.path_name, new_path)
        return self

    async def rename(self, new_path: Union[str, os.PathLike]) -> None:
        """Rename the node; an existing ``new_path`` is overwritten.

        Path attributes are updated, cached stats are not.
        """
        await self.afs.rename(self.path_name, new_path)
        self._set_path_params(new_path)

    def rename_sync(self, new_path: Union[str, os.PathLike]) -> 'Node':
        self.fs.rename(self.path_name, new_path)
        self._set_path_params(new_path)
        return self

    async def utimes(self, atime, mtime) -> None:
        """Set access and modification times (numbers or datetimes)."""
        await self.afs.utimes(self.path_name, atime, mtime)

    def utimes_sync(self, atime, mtime) -> 'Node':
        self.fs.utimes(self.path_name, atime, mtime)
        return self

    async def copy(self, dest_path: Union[str, os.PathLike], overwrite: bool = True) -> None:
        """Copy the node to ``dest_path``, like ``cp -r``.

        Missing parent directories of the destination are created.
        """
        await self.afs.copy(self.path_name, dest_path, overwrite=overwrite)

    def copy_sync(self, dest_path: Union[str, os.PathLike], overwrite: bool = True) -> 'Node':
        self.fs.copy(self.path_name, dest_path, overwrite=overwrite)
        return self

    async def move_to(self, target_dir: Any, options: Optional[Mapping[str, Any]] = None) -> 'Node':
        """Move the node into another directory.

        The node's ``base_name`` is joined with ``target_dir`` to build the
        new path. On success the path attributes are updated; cached stats
        are not refreshed.

        Args:
            target_dir: ``Directory`` node or absolute path of the target directory
            options: Optional ``{'overwrite': bool}``

        Returns:
            The node itself

        Raises:
            InvalidParameterError: for a bad target or a callback passed as ``options``
            FileExistsError: if the destination exists and overwrite is off
            shutil.SameFileError: if the node already lives in ``target_dir``
        """
        target_path = self._resolve_path(target_dir)
        overwrite = _move_overwrite(options)
        await self.afs.move(self.path_name, target_path, overwrite=overwrite)
        self._set_path_params(target_path)
        return self

    def move_to_sync(self, target_dir: Any, options: Optional[Mapping[str, Any]] = None) -> 'Node':
        target_path = self._resolve_path(target_dir)
        overwrite = _move_overwrite(options)
        self.fs.move(self.path_name, target_path, overwrite=overwrite)
        self._set_path_params(target_path)
        return self

    async def append_to(self, target_dir: Any, options: Optional[Mapping[str, Any]] = None) -> 'Node':
        """Alias for ``move_to``."""
        return await self.move_to(target_dir, options)

    def append_to_sync(self, target_dir: Any, options: Optional[Mapping[str, Any]] = None) -> 'Node':
        return self.move_to_sync(target_dir, options)

    async def remove(self) -> None:
        """Remove the node from the filesystem, like ``rm -rf``."""
        await self.afs.remove(self.path_name)

    def remove_sync(self) -> 'Node':
        self.fs.remove(self.path_name)
        return self

    async def parent(self) -> 'Node':
        """Get the parent directory as a ``Directory`` with fresh stats."""
        stats = await self.afs.lstat(self.parent_path)
        return Node._kinds[NodeKind.DIRECTORY](self.parent_path, stats)

    def parent_sync(self) -> 'Node':
        stats = self.fs.lstat(self.parent_path)
        return Node._kinds[NodeKind.DIRECTORY](self.parent_path, stats)

    async def siblings(self, pattern: Any = None, options: OptionsArg = None):
        """Select the other entries of the node's parent directory.

        Args:
            pattern: Optional pattern matched against sibling base names
            options: Optional glob options (``dot``, ``ignore``, ...)

        Returns:
            A ``Draxt`` collection, never containing the node itself
        """
        from .collection import Draxt

        glob_options, filter_fn = self.normalize_relative_glob_options(pattern, options)
        glob_options.ignore.append(glob_module.escape(self.path_name))
        items = await self.raw_query('*', glob_options)
        if filter_fn:
            items = [item for item in items if filter_fn(item)]
        return Draxt(await self.to_nodes(items))

    def siblings_sync(self, pattern: Any = None, options: OptionsArg = None):
        from .collection import Draxt

        glob_options, filter_fn = self.normalize_relative_glob_options(pattern, options)
        glob_options.ignore.append(glob_module.escape(self.path_name))
        items = self.raw_query_sync('*', glob_options)
        if filter_fn:
            items = [item for item in items if filter_fn(item)]
        return Draxt(self.to_nodes_sync(items))

    # Query engine

    @staticmethod
    def normalize_glob_options(options: OptionsArg = None) -> GlobOptions:
        """Normalize glob options.

        A string (or path-like) is shorthand for ``{'cwd': options}``, the
        ``query(selector, context)`` calling convention. ``absolute`` is
        always forced to True, whatever the caller passed.

        Args:
            options: None, a cwd string, a mapping or a GlobOptions instance

        Returns:
            A new GlobOptions; the caller's object is not modified

        Raises:
            InvalidOptionsError: for any other type
        """
        if options is None:
            normalized = GlobOptions()
        elif isinstance(options, (str, os.PathLike)):
            normalized = GlobOptions(cwd=os.fspath(options))
        elif isinstance(options, GlobOptions):
            normalized = options.copy()
        elif isinstance(options, Mapping):
            normalized = GlobOptions.from_mapping(options)
        else:
            raise InvalidOptionsError(
                "Optional `options` parameter must be either a string or a mapping! "
                f"Got {type(options).__name__}."
            )
        normalized.absolute = True
        return normalized

    def normalize_relative_glob_options(
        self,
        pattern: Any = None,
        options: OptionsArg = None,
    ) -> Tuple[GlobOptions, Optional[Callable[[str], bool]]]:
        """Normalize options for ``siblings`` and ``children`` queries.

        Relative queries always expand ``*`` in the reference directory
        (the node itself for directories, its parent otherwise) and then
        refine the results with ``pattern``, matched against base names.

        A single mapping argument is treated as options, not as a pattern.

        Returns:
            Tuple of (options with ``cwd`` set, filter function or None)
        """
        if options is None and isinstance(pattern, (Mapping, GlobOptions)):
            pattern, options = None, pattern
        if pattern is not None and not isinstance(pattern, str):
            raise InvalidParameterError("`pattern` parameter should be a string!")
        if isinstance(options, (str, os.PathLike)):
            raise InvalidParameterError("Relational queries do not accept `context` parameter!")
        if options is not None and not isinstance(options, (Mapping, GlobOptions)):
            raise InvalidOptionsError(
                f"Invalid type for `options` parameter: {type(options).__name__}"
            )

        if isinstance(options, GlobOptions):
            glob_options = options.copy()
        else:
            glob_options = GlobOptions.from_mapping(options or {})

        filter_fn = None
        if pattern:
            filter_fn = self.globber.make_filter(pattern, dot=glob_options.dot)

        glob_options.cwd = self.path_name if self.is_directory() else self.parent_path
        return glob_options, filter_fn

    @classmethod
    async def raw_query(cls, pattern: Union[str, os.PathLike], options: OptionsArg = None) -> List[str]:
        """Expand a glob pattern into absolute path names.

        Returns:
            Path names in the order the glob adapter produced them
        """
        glob_options = cls.normalize_glob_options(options)
        return await cls.globber.glob(os.fspath(pattern), glob_options)

    @classmethod
    def raw_query_sync(cls, pattern: Union[str, os.PathLike], options: OptionsArg = None) -> List[str]:
        glob_options = cls.normalize_glob_options(options)
        return cls.globber.glob_sync(os.fspath(pattern), glob_options)

    @classmethod
    async def to_nodes(cls, path_names: List[str]) -> List['Node']:
        """Convert path names into classified nodes.

        Stats are fetched concurrently with lstat (a final symlink is not
        followed, so links are detected). Output index ``i`` always
        corresponds to input path ``i``.
        """
        stats_list = await asyncio.gather(*(cls.afs.lstat(path_name) for path_name in path_names))
        return [classify(path_name, stats) for path_name, stats in zip(path_names, stats_list)]

    @classmethod
    def to_nodes_sync(cls, path_names: List[str]) -> List['Node']:
        return [classify(path_name, cls.fs.lstat(path_name)) for path_name in path_names]

    @classmethod
    async def query(cls, pattern: Union[str, os.PathLike], options: OptionsArg = None) -> List['Node']:
        """Expand a glob pattern into a list of classified nodes."""
        return await cls.to_nodes(await cls.raw_query(pattern, options))

    @classmethod
    def query_sync(cls, pattern: Union[str, os.PathLike], options: OptionsArg = None) -> List['Node']:
        return cls.to_nodes_sync(cls.raw_query_sync(pattern, options))

    def _resolve_path(self, target_dir: Any) -> str:
        """Join a target directory with the node's base name."""
        if target_dir is None:
            raise InvalidParameterError("`dir` parameter is required!")
        if isinstance(target_dir, Node):
            if not target_dir.is_directory():
                raise InvalidParameterError(
                    "`dir` parameter must be a string or instance of Directory class!"
                )
            dir_path = target_dir.path_name
        elif isinstance(target_dir, (str, os.PathLike)):
            dir_path = os.fspath(target_dir)
        else:
            raise InvalidParameterError(
                "`dir` parameter must be a string or instance of Directory class!"
            )
        if not os.path.isabs(dir_path):
            raise InvalidParameterError("`dir` must be an absolute path!")
        return os.path.join(dir_path, self.base_name)

    def __fspath__(self) -> str:
        return self.path_name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path_name!r})"


def _move_overwrite(options: Any) -> bool:
    if callable(options):
        raise InvalidParameterError("`node.move_to` does not accept a callback function!")
    if options is None:
        return False
    if not isinstance(options, Mapping):
        raise InvalidParameterError(
            f"Invalid type for `options` parameter: {type(options).__name__}"
        )
    return bool(options.get('overwrite', False))


def _check(stats: Any, predicate_name: str, mode_test: Callable[[int], bool]) -> bool:
    predicate = getattr(stats, predicate_name, None)
    if callable(predicate):
        return bool(predicate())
    mode = getattr(stats, 'st_mode', None)
    if mode is None:
        return False
    return mode_test(mode)


def classify(path_name: Union[str, os.PathLike], stats: Any) -> Node:
    """Create a node of the matching kind from raw stats.

    ``stats`` may expose ``is_file()``/``is_dir()``/``is_symlink()``
    predicates or an ``st_mode``. Checks run in file, directory, symbolic
    link order; anything else (including no match at all) becomes a
    generic ``Node``. No I/O is performed.

    Args:
        path_name: Path of the node
        stats: Stats snapshot, cached on the returned node

    Returns:
        ``File``, ``Directory``, ``SymbolicLink`` or ``Node`` instance
    """
    if _check(stats, 'is_file', stat_module.S_ISREG):
        kind = NodeKind.FILE
    elif _check(stats, 'is_dir', stat_module.S_ISDIR):
        kind = NodeKind.DIRECTORY
    elif _check(stats, 'is_symlink', stat_module.S_ISLNK):
        kind = NodeKind.SYMBOLIC_LINK
    else:
        kind = NodeKind.GENERIC
    node_class = Node._kinds.get(kind, Node)
    return node_class(path_name, stats)


Node.classify = staticmethod(classify)
