"""Tests for SymbolicLink nodes."""

import pytest

from draxt import SymbolicLink, draxt_sync
from draxt.testing import build_tree, link


@pytest.fixture
def links(tmp_path):
    build_tree(tmp_path, {
        'target.txt': 'target',
        'sub': {
            'relative.txt': link('../target.txt'),
            'dangling.txt': link('gone.txt'),
        },
        'absolute.txt': link(str(tmp_path / 'target.txt')),
        'missing.txt': link(str(tmp_path / 'nowhere.txt')),
    })
    return tmp_path


class TestSymbolicLink:
    """Test link inspection."""

    def test_readlink(self, links):
        assert SymbolicLink(str(links / 'sub' / 'relative.txt')).readlink_sync() == '../target.txt'
        assert SymbolicLink(str(links / 'absolute.txt')).readlink_sync() == str(links / 'target.txt')

    @pytest.mark.asyncio
    async def test_readlink_async(self, links):
        assert await SymbolicLink(str(links / 'sub' / 'dangling.txt')).readlink() == 'gone.txt'

    @pytest.mark.parametrize('name, broken', [
        ('absolute.txt', False),
        ('missing.txt', True),
        ('sub/relative.txt', False),
        ('sub/dangling.txt', True),
    ])
    def test_is_broken_sync(self, links, name, broken):
        assert SymbolicLink(str(links / name)).is_broken_sync() is broken

    @pytest.mark.asyncio
    async def test_is_broken(self, links):
        assert await SymbolicLink(str(links / 'sub' / 'relative.txt')).is_broken() is False
        assert await SymbolicLink(str(links / 'missing.txt')).is_broken() is True

    def test_query_classifies_links(self, links):
        found = draxt_sync('**/*.txt', str(links))
        assert sorted(node.base_name for node in found.symlinks()) == [
            'absolute.txt', 'dangling.txt', 'missing.txt', 'relative.txt',
        ]
        broken = found.symlinks().filter(lambda node: node.is_broken_sync())
        assert sorted(node.base_name for node in broken) == ['dangling.txt', 'missing.txt']

    def test_readlink_on_regular_file(self, links):
        with pytest.raises(OSError):
            SymbolicLink(str(links / 'target.txt')).readlink_sync()
