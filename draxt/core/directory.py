"""Directory nodes."""

import asyncio
import os
from typing import Any, List, Mapping, Optional

from ..config import NodeKind
from ..errors import InvalidParameterError
from .node import Node, OptionsArg


class Directory(Node):
    """A path whose stats report a directory.

    Besides the filesystem wrappers, directories run relative queries
    (``children``, ``find``) and can receive other nodes (``append``).
    """

    KIND = NodeKind.DIRECTORY

    async def append(self, nodes: Any, options: Optional[Mapping[str, Any]] = None) -> 'Directory':
        """Move nodes into this directory.

        Args:
            nodes: A ``Draxt`` collection, a node, a path string, or a list
                mixing nodes and path strings
            options: Options for ``Node.move_to`` (``{'overwrite': bool}``)

        Returns:
            The directory itself, once every move has completed
        """
        items = self._normalize_append_nodes(nodes)
        await asyncio.gather(*(item.move_to(self, options) for item in items))
        return self

    def append_sync(self, nodes: Any, options: Optional[Mapping[str, Any]] = None) -> 'Directory':
        for item in self._normalize_append_nodes(nodes):
            item.move_to_sync(self, options)
        return self

    async def children(self, pattern: Any = None, options: OptionsArg = None):
        """Select the entries of this directory.

        Args:
            pattern: Optional pattern matched against the children's base names
            options: Optional glob options (``dot``, ``ignore``, ...)

        Returns:
            A ``Draxt`` collection
        """
        from .collection import Draxt

        glob_options, filter_fn = self.normalize_relative_glob_options(pattern, options)
        items = await self.raw_query('*', glob_options)
        if filter_fn:
            items = [item for item in items if filter_fn(item)]
        return Draxt(await self.to_nodes(items))

    def children_sync(self, pattern: Any = None, options: OptionsArg = None):
        from .collection import Draxt

        glob_options, filter_fn = self.normalize_relative_glob_options(pattern, options)
        items = self.raw_query_sync('*', glob_options)
        if filter_fn:
            items = [item for item in items if filter_fn(item)]
        return Draxt(self.to_nodes_sync(items))

    async def find(self, pattern: str, options: OptionsArg = None):
        """Find descendants matching ``pattern`` (relative to this directory)."""
        from .collection import Draxt

        glob_options = self.normalize_glob_options(options)
        glob_options.cwd = self.path_name
        return Draxt(await self.query(pattern, glob_options))

    def find_sync(self, pattern: str, options: OptionsArg = None):
        from .collection import Draxt

        glob_options = self.normalize_glob_options(options)
        glob_options.cwd = self.path_name
        return Draxt(self.query_sync(pattern, glob_options))

    async def empty(self) -> None:
        """Make sure the directory exists and has no entries.

        Contents are removed recursively; the directory itself is kept
        (and created when missing).
        """
        await self.afs.empty_dir(self.path_name)

    def empty_sync(self) -> 'Directory':
        self.fs.empty_dir(self.path_name)
        return self

    async def ensure(self) -> None:
        """Make sure the directory (and any missing parents) exists."""
        await self.afs.ensure_dir(self.path_name)

    def ensure_sync(self) -> 'Directory':
        self.fs.ensure_dir(self.path_name)
        return self

    async def is_empty(self) -> bool:
        return len(await self.readdir()) == 0

    def is_empty_sync(self) -> bool:
        return len(self.readdir_sync()) == 0

    async def readdir(self) -> List[str]:
        """List entry names, sorted."""
        return await self.afs.readdir(self.path_name)

    def readdir_sync(self) -> List[str]:
        return self.fs.readdir(self.path_name)

    async def read(self) -> List[str]:
        """Alias for ``readdir``."""
        return await self.readdir()

    def read_sync(self) -> List[str]:
        return self.readdir_sync()

    async def rmdir(self) -> None:
        """Delete the directory, which must be empty."""
        await self.afs.rmdir(self.path_name)

    def rmdir_sync(self) -> 'Directory':
        self.fs.rmdir(self.path_name)
        return self

    @staticmethod
    def _normalize_append_nodes(nodes: Any) -> List[Node]:
        """Turn the accepted ``append`` inputs into a list of nodes."""
        from .collection import Draxt

        if isinstance(nodes, Draxt):
            items = list(nodes.get())
        elif isinstance(nodes, Node):
            items = [nodes]
        elif isinstance(nodes, (str, os.PathLike)):
            items = [nodes]
        elif isinstance(nodes, (list, tuple)):
            items = list(nodes)
        else:
            raise InvalidParameterError(
                f"Invalid parameter for `nodes` parameter: {nodes!r}"
            )

        resolved = []
        for item in items:
            if isinstance(item, Node):
                resolved.append(item)
            elif isinstance(item, (str, os.PathLike)):
                resolved.append(Node(item))
            else:
                raise InvalidParameterError(
                    f"Invalid item in `nodes` parameter: {type(item).__name__}"
                )
        return resolved
