"""Core abstractions: the node hierarchy and the collection.

Importing this package registers every concrete node class, which
``classify`` relies on.
"""

from .node import Node, classify
from .file import File
from .directory import Directory
from .symlink import SymbolicLink
from .collection import Draxt

__all__ = [
    # Nodes
    'Node',
    'File',
    'Directory',
    'SymbolicLink',
    'classify',
    # Collection
    'Draxt',
]
