"""Draxt collections.

A ``Draxt`` collection is an ordered list of nodes without duplicate path
names. It works, to some extent, like a jQuery collection: most methods
either return a new collection (``slice``, ``filter``, ``files``, ...) or
mutate the collection in place and return it for chaining (``add``,
``sort``, ``reverse``, ``empty``, ``drop``).

Collections never touch the filesystem themselves. Structural changes are
not synchronized: mutating a collection while a ``map_async`` over it is
in flight is undefined.
"""

import asyncio
import os
from typing import Any, Awaitable, Callable, Iterator, List, Mapping, Optional, Union

from ..errors import InvalidItemError, InvalidParameterError
from .directory import Directory
from .file import File
from .node import Node, OptionsArg
from .symlink import SymbolicLink


class Draxt:
    """Ordered, path-deduplicated collection of nodes.

    Attributes:
        items: The collection's nodes (also returned by ``get()``)
    """

    def __init__(self, items: Any = None):
        """Create a collection.

        Args:
            items: Nothing (empty collection), a node, a list of nodes or
                another collection (shallow clone). Anything else is handed
                to ``add``, which rejects it with ``InvalidItemError``.
        """
        self.items: List[Node] = []

        if items is None:
            return
        if isinstance(items, Draxt):
            self.items = list(items.get())
            return
        self.add(items)

    @classmethod
    async def query(cls, pattern: Union[str, os.PathLike], options: OptionsArg = None) -> 'Draxt':
        """Query the filesystem and build a collection from the results.

        Args:
            pattern: Glob pattern
            options: Glob options, or a cwd string used as query context

        Returns:
            New collection holding the classified nodes
        """
        return cls(await Node.query(pattern, options))

    @classmethod
    def sync(cls, pattern: Union[str, os.PathLike], options: OptionsArg = None) -> 'Draxt':
        """Blocking version of ``query``."""
        return cls(Node.query_sync(pattern, options))

    @classmethod
    def extend(cls, methods: Mapping[str, Callable]) -> None:
        """Add methods to every collection, like ``jQuery.fn.extend``.

        Example:
            Draxt.extend({'base_names': lambda self: self.map(lambda n: n.base_name)})
        """
        for name, method in methods.items():
            setattr(cls, name, method)

    @property
    def length(self) -> int:
        return len(self.items)

    def add(self, items: Any) -> 'Draxt':
        """Add node(s), skipping path names already in the collection.

        Args:
            items: A node, a list of nodes or a collection

        Returns:
            The collection itself

        Raises:
            InvalidItemError: if any candidate is not a Node; nothing is
                added in that case
        """
        if isinstance(items, Draxt):
            items = items.get()
        candidates = list(items) if isinstance(items, (list, tuple)) else [items]

        for candidate in candidates:
            if not isinstance(candidate, Node):
                raise InvalidItemError(
                    "Invalid value for `items` parameter. `draxt` collection can only "
                    f"have Node instances. The given value is a(n) {type(candidate).__name__}!"
                )

        known = {node.path_name for node in self.items}
        for node in candidates:
            if node.path_name not in known:
                known.add(node.path_name)
                self.items.append(node)
        return self

    def get(self, index: Optional[int] = None) -> Union[List[Node], Node, None]:
        """Get one node or all of them.

        Without ``index`` the live list of nodes is returned (not a copy).
        Negative indexes do not count from the end: like any other index
        outside the collection they return None. Use ``last()`` instead.
        """
        if index is None:
            return self.items
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def first(self) -> Optional[Node]:
        return self.items[0] if self.items else None

    def last(self) -> Optional[Node]:
        return self.items[-1] if self.items else None

    def has(self, item: Union[Node, str, os.PathLike]) -> bool:
        """Does the collection hold a node with this path name?

        Membership is decided by ``path_name``, not by object identity, so
        ``has('/app/a.js')`` and ``has(Node('/app/a.js'))`` agree.
        """
        path_name = _path_name(item)
        return any(node.path_name == path_name for node in self.items)

    def slice(self, start: Optional[int] = None, stop: Optional[int] = None) -> 'Draxt':
        """Slice the nodes into a new collection."""
        return Draxt(self.items[start:stop])

    def filter(self, fn: Callable[[Node], Any]) -> 'Draxt':
        """Keep nodes for which ``fn`` is truthy, in a new collection."""
        return Draxt([node for node in self.items if fn(node)])

    def for_each(self, fn: Callable[[Node], Any]) -> 'Draxt':
        for node in self.items:
            fn(node)
        return self

    each = for_each

    def map(self, fn: Callable[[Node], Any]) -> List[Any]:
        return [fn(node) for node in self.items]

    async def map_async(self, fn: Callable[[Node], Awaitable[Any]]) -> List[Any]:
        """Run ``fn`` for every node concurrently.

        Results come back in collection order, whatever order the
        operations finished in. The first failure is raised.
        """
        return list(await asyncio.gather(*(fn(node) for node in self.items)))

    def some(self, fn: Callable[[Node], Any]) -> bool:
        return any(fn(node) for node in self.items)

    def sort(self, key: Optional[Callable[[Node], Any]] = None, reverse: bool = False) -> 'Draxt':
        """Sort the nodes in place (by path name unless ``key`` is given)."""
        self.items.sort(key=key or _path_key, reverse=reverse)
        return self

    def reverse(self) -> 'Draxt':
        """Reverse the nodes in place."""
        self.items.reverse()
        return self

    def directories(self) -> 'Draxt':
        return self.filter(lambda node: node.is_directory())

    def files(self) -> 'Draxt':
        return self.filter(lambda node: node.is_file())

    def symlinks(self) -> 'Draxt':
        return self.filter(lambda node: node.is_symbolic_link())

    def empty(self) -> 'Draxt':
        """Remove every node from the collection. The filesystem is untouched."""
        self.items = []
        return self

    def drop(self, selector: Any) -> 'Draxt':
        """Remove nodes by path name.

        Args:
            selector: A node, a path (string or path-like), a collection,
                or a list mixing nodes and paths. Paths not in the
                collection are ignored.

        Returns:
            The collection itself

        Raises:
            InvalidParameterError: for any other selector type
        """
        if isinstance(selector, (Node, str, os.PathLike)):
            selected = [selector]
        elif isinstance(selector, Draxt):
            selected = selector.get()
        elif isinstance(selector, (list, tuple)):
            selected = selector
        else:
            raise InvalidParameterError(
                f"Invalid parameter passed to `.drop()` method: {type(selector).__name__}"
            )

        path_names = set()
        for item in selected:
            if not isinstance(item, (Node, str, os.PathLike)):
                raise InvalidParameterError(
                    f"Invalid item passed to `.drop()` method: {type(item).__name__}"
                )
            path_names.add(_path_name(item))

        self.items = [node for node in self.items if node.path_name not in path_names]
        return self

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __contains__(self, item: Any) -> bool:
        return self.has(item)

    def __repr__(self) -> str:
        return f"Draxt(length={len(self.items)}, items={self.items!r})"


def _path_key(node: Node) -> str:
    return node.path_name


def _path_name(item: Union[Node, str, os.PathLike]) -> Any:
    if isinstance(item, Node):
        return item.path_name
    if isinstance(item, os.PathLike):
        return os.fspath(item)
    return item


# jQuery-style alias: ``Draxt.fn.extend`` / ``Draxt.fn.some_method``
Draxt.fn = Draxt

# Node classes reachable from the collection class
Draxt.Node = Node
Draxt.File = File
Draxt.Directory = Directory
Draxt.SymbolicLink = SymbolicLink
