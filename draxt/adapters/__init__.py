"""Adapters for the services nodes depend on.

This module contains the filesystem and glob services that bridge the
node hierarchy to the operating system.
"""

from .filesystem import (
    FileSystemAdapter,
    AsyncFileSystemAdapter,
)
from .globbing import GlobAdapter

__all__ = [
    'FileSystemAdapter',
    'AsyncFileSystemAdapter',
    'GlobAdapter',
]
