"""draxt - jQuery-like collections of filesystem nodes.

draxt wraps paths into typed nodes (``File``, ``Directory``,
``SymbolicLink`` or a generic ``Node``) and groups them into chainable
``Draxt`` collections built from glob queries.

Usage:
━━━━━━
Asynchronous:
    collection = await draxt('/app/**')

Synchronous:
    collection = draxt_sync('/app/**')
━━━━━━

Every filesystem operation has an ``async`` form and a blocking ``_sync``
twin; pick the one that fits your application.
"""

import logging
import os
from typing import Any

from .config import GlobOptions, NodeKind
from .errors import (
    DraxtError,
    InvalidItemError,
    InvalidOptionsError,
    InvalidParameterError,
    StatsNotCachedError,
)
from .core import (
    Node,
    File,
    Directory,
    SymbolicLink,
    Draxt,
    classify,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def draxt(pattern: Any = None, options: Any = None):
    """Create a ``Draxt`` collection.

    Args:
        pattern: One of
            - a glob pattern (string or path-like): returns a coroutine
              resolving to the collection of matching nodes
            - a node, a list of nodes, or a collection to clone (shallow)
            - None for an empty collection
        options: Glob options for the pattern case; a string is used as
            the query context (working directory)

    Returns:
        A ``Draxt`` collection, or an awaitable of one for a pattern
    """
    if isinstance(pattern, (str, os.PathLike)) and not isinstance(pattern, Node):
        return Draxt.query(pattern, options)
    return Draxt(pattern)


draxt_sync = Draxt.sync

__all__ = [
    "__version__",
    # Entry points
    "draxt",
    "draxt_sync",
    # Collection and nodes
    "Draxt",
    "Node",
    "File",
    "Directory",
    "SymbolicLink",
    "classify",
    # Configuration
    "GlobOptions",
    "NodeKind",
    # Errors
    "DraxtError",
    "InvalidItemError",
    "InvalidOptionsError",
    "InvalidParameterError",
    "StatsNotCachedError",
]
