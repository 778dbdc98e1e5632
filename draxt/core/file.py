"""File nodes."""

from typing import Optional, Union

from ..config import NodeKind
from .node import Node


class File(Node):
    """A path whose stats report a regular file."""

    KIND = NodeKind.FILE

    async def ensure(self) -> None:
        """Make sure the file exists, creating an empty one if needed."""
        await self.afs.ensure_file(self.path_name)

    def ensure_sync(self) -> 'File':
        self.fs.ensure_file(self.path_name)
        return self

    async def append(self, data: Union[str, bytes], encoding: str = 'utf-8') -> None:
        """Append data to the file, creating it if it does not exist yet."""
        await self.afs.append_file(self.path_name, data, encoding)

    def append_sync(self, data: Union[str, bytes], encoding: str = 'utf-8') -> 'File':
        self.fs.append_file(self.path_name, data, encoding)
        return self

    async def read(self, encoding: Optional[str] = None) -> Union[str, bytes]:
        """Read the file's contents; bytes unless an encoding is given."""
        return await self.afs.read_file(self.path_name, encoding)

    def read_sync(self, encoding: Optional[str] = None) -> Union[str, bytes]:
        return self.fs.read_file(self.path_name, encoding)

    async def truncate(self, length: int = 0) -> None:
        await self.afs.truncate(self.path_name, length)

    def truncate_sync(self, length: int = 0) -> 'File':
        self.fs.truncate(self.path_name, length)
        return self

    async def write(self, data: Union[str, bytes], encoding: str = 'utf-8') -> None:
        """Replace the file's contents with ``data``."""
        await self.afs.write_file(self.path_name, data, encoding)

    def write_sync(self, data: Union[str, bytes], encoding: str = 'utf-8') -> 'File':
        self.fs.write_file(self.path_name, data, encoding)
        return self
