"""Symbolic link nodes."""

import os

from ..config import NodeKind
from .node import Node


class SymbolicLink(Node):
    """A path whose (non-dereferenced) stats report a symbolic link."""

    KIND = NodeKind.SYMBOLIC_LINK

    def _target_path(self, link_path: str) -> str:
        # Relative targets are relative to the directory holding the link
        return os.path.join(self.parent_path, link_path)

    async def is_broken(self) -> bool:
        """Is the link's target missing?"""
        link_path = await self.readlink()
        return not await self.afs.exists(self._target_path(link_path))

    def is_broken_sync(self) -> bool:
        return not self.fs.exists(self._target_path(self.readlink_sync()))

    async def readlink(self) -> str:
        """Read the value (target path) of the link."""
        return await self.afs.readlink(self.path_name)

    def readlink_sync(self) -> str:
        return self.fs.readlink(self.path_name)
