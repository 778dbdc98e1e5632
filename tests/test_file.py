"""Tests for File nodes."""

import os

import pytest

from draxt import File


class TestFile:
    """Test file content operations."""

    def test_ensure_creates_parents(self, tmp_path):
        node = File(str(tmp_path / 'a' / 'b' / 'new.txt'))
        assert node.ensure_sync() is node
        assert os.path.isfile(node.path_name)
        assert node.read_sync() == b''

    def test_ensure_keeps_content(self, tmp_path):
        path = tmp_path / 'keep.txt'
        path.write_text('content')
        File(str(path)).ensure_sync()
        assert path.read_text() == 'content'

    def test_write_read_append_truncate(self, tmp_path):
        node = File(str(tmp_path / 'notes.txt'))

        node.write_sync('hello')
        assert node.read_sync('utf-8') == 'hello'

        node.append_sync(' world')
        assert node.read_sync() == b'hello world'

        node.truncate_sync(5)
        assert node.read_sync() == b'hello'

        node.truncate_sync()
        assert node.read_sync() == b''

    def test_write_replaces(self, tmp_path):
        node = File(str(tmp_path / 'data.bin'))
        node.write_sync(b'\x00\x01\x02')
        node.write_sync(b'\x03')
        assert node.read_sync() == b'\x03'

    def test_encoding(self, tmp_path):
        node = File(str(tmp_path / 'latin.txt'))
        node.write_sync('café', encoding='latin-1')
        assert node.read_sync() == 'café'.encode('latin-1')
        assert node.read_sync('latin-1') == 'café'

    def test_read_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            File(str(tmp_path / 'missing.txt')).read_sync()

    @pytest.mark.asyncio
    async def test_async_operations(self, tmp_path):
        node = File(str(tmp_path / 'async' / 'log.txt'))

        await node.ensure()
        await node.append('line 1\n')
        await node.append(b'line 2\n')
        assert await node.read('utf-8') == 'line 1\nline 2\n'

        await node.write('reset')
        await node.truncate(3)
        assert await node.read() == b'res'

    @pytest.mark.asyncio
    async def test_append_creates_file(self, tmp_path):
        node = File(str(tmp_path / 'created.txt'))
        await node.append('x')
        assert await node.exists()
