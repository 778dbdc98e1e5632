"""Contract tests ensuring sync and async operations have identical behavior.

These tests verify that the blocking ``_sync`` twin of every query:
1. Selects the same path names, in the same order
2. Classifies nodes identically
3. Raises the same errors for invalid input
"""

import shutil
import tempfile
from pathlib import Path
from typing import List, Tuple

import pytest

from draxt import (
    Directory,
    File,
    InvalidOptionsError,
    InvalidParameterError,
    Node,
    draxt,
    draxt_sync,
)


def _paths(nodes) -> List[str]:
    return [node.path_name for node in nodes]


def _kinds(nodes) -> List[str]:
    return [type(node).__name__ for node in nodes]


class QueryContract:
    """Base contract shared by the sync/async comparisons."""

    def create_standard_tree(self) -> Tuple[Path, List[str]]:
        """Create a standard test tree and return (root, top_level_paths).

        Tree structure:
        test_root/
        ├── dir1/
        │   ├── file1.txt
        │   └── file2.txt
        ├── dir2/
        │   ├── subdir/
        │   │   └── deep.txt
        │   └── file3.txt
        ├── .hidden
        ├── link.txt -> root_file.txt
        └── root_file.txt
        """
        root = Path(tempfile.mkdtemp(prefix="draxt_contract_"))

        (root / "dir1").mkdir()
        (root / "dir1" / "file1.txt").write_text("content1")
        (root / "dir1" / "file2.txt").write_text("content2")

        (root / "dir2").mkdir()
        (root / "dir2" / "subdir").mkdir()
        (root / "dir2" / "subdir" / "deep.txt").write_text("deep content")
        (root / "dir2" / "file3.txt").write_text("content3")

        (root / ".hidden").write_text("")
        (root / "root_file.txt").write_text("root content")
        (root / "link.txt").symlink_to("root_file.txt")

        top_level = [
            str(root / "dir1"),
            str(root / "dir2"),
            str(root / "link.txt"),
            str(root / "root_file.txt"),
        ]
        return root, top_level

    def teardown_test_tree(self, root: Path):
        shutil.rmtree(root)


class TestQueryContract(QueryContract):
    """Collection queries return the same nodes either way."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pattern", ["*", "**", "**/*.txt", "dir2/*", "nothing-*"])
    async def test_query(self, pattern):
        root, _ = self.create_standard_tree()

        try:
            sync_result = draxt_sync(pattern, str(root))
            async_result = await draxt(pattern, str(root))

            assert _paths(async_result) == _paths(sync_result)
            assert _kinds(async_result) == _kinds(sync_result)
        finally:
            self.teardown_test_tree(root)

    @pytest.mark.asyncio
    async def test_top_level(self):
        root, top_level = self.create_standard_tree()

        try:
            sync_result = draxt_sync(f"{root}/*")
            async_result = await draxt(f"{root}/*")

            assert sorted(_paths(sync_result)) == top_level
            assert sorted(_paths(async_result)) == top_level
        finally:
            self.teardown_test_tree(root)

    @pytest.mark.asyncio
    async def test_node_query(self):
        root, _ = self.create_standard_tree()

        try:
            options = {"cwd": str(root), "dot": True}
            assert _paths(await Node.query("**", options)) == _paths(Node.query_sync("**", options))
            assert await Node.raw_query("*", options) == Node.raw_query_sync("*", options)
        finally:
            self.teardown_test_tree(root)


class TestRelativeQueryContract(QueryContract):
    """Relative queries return the same nodes either way."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [
        (),
        ("*.txt",),
        ({"dot": True},),
        ("*", {"ignore": "dir*"}),
    ])
    async def test_children(self, args):
        root, _ = self.create_standard_tree()

        try:
            directory = Directory(str(root))
            assert _paths(await directory.children(*args)) == _paths(directory.children_sync(*args))
        finally:
            self.teardown_test_tree(root)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [(), ("dir*",), ({"dot": True},)])
    async def test_siblings(self, args):
        root, _ = self.create_standard_tree()

        try:
            node = File(str(root / "root_file.txt"))
            sync_result = node.siblings_sync(*args)
            async_result = await node.siblings(*args)

            assert _paths(async_result) == _paths(sync_result)
            assert not sync_result.has(node)
        finally:
            self.teardown_test_tree(root)

    @pytest.mark.asyncio
    async def test_find(self):
        root, _ = self.create_standard_tree()

        try:
            directory = Directory(str(root / "dir2"))
            sync_result = directory.find_sync("**/*.txt")
            async_result = await directory.find("**/*.txt")

            assert _paths(async_result) == _paths(sync_result)
            assert sorted(node.base_name for node in sync_result) == ["deep.txt", "file3.txt"]
        finally:
            self.teardown_test_tree(root)


class TestErrorContract(QueryContract):
    """Invalid input fails the same way in both forms."""

    @pytest.mark.asyncio
    async def test_invalid_options(self):
        with pytest.raises(InvalidOptionsError):
            draxt_sync("*", 42)
        with pytest.raises(InvalidOptionsError):
            await draxt("*", 42)

    @pytest.mark.asyncio
    async def test_invalid_relative_pattern(self):
        node = Directory("/tmp")
        with pytest.raises(InvalidParameterError):
            node.children_sync(42)
        with pytest.raises(InvalidParameterError):
            await node.children(42)

    @pytest.mark.asyncio
    async def test_missing_file(self):
        root, _ = self.create_standard_tree()

        try:
            node = File(str(root / "missing.txt"))
            with pytest.raises(FileNotFoundError):
                node.read_sync()
            with pytest.raises(FileNotFoundError):
                await node.read()
        finally:
            self.teardown_test_tree(root)
