"""Test fixtures for draxt consumers.

Helpers that materialize small directory trees on disk, so test suites
(ours and those of projects using draxt) can query real filesystems
without repeating setup code.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Union


class Link(NamedTuple):
    """Marker for a symbolic link inside a tree layout.

    ``target`` is written as-is, so it may be absolute or relative to the
    directory holding the link.
    """
    target: str


def link(target: Union[str, os.PathLike]) -> Link:
    return Link(os.fspath(target))


def build_tree(root: Union[str, Path], layout: Dict[str, Any]) -> List[Path]:
    """Create files, directories and symlinks under ``root``.

    Example:
        build_tree(tmp_path, {
            'a.md': 'content',
            'c': {'nested.txt': ''},
            'to-a': link('a.md'),
        })

    Args:
        root: Existing or new directory to populate
        layout: Mapping of entry names to ``str``/``bytes`` (file content),
            ``dict`` (sub-directory layout) or ``Link`` (symbolic link)

    Returns:
        Created paths in creation order
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    created = []

    for name, value in layout.items():
        path = root / name
        if isinstance(value, Link):
            os.symlink(value.target, path)
        elif isinstance(value, dict):
            path.mkdir(exist_ok=True)
            created.append(path)
            created.extend(build_tree(path, value))
            continue
        elif isinstance(value, bytes):
            path.write_bytes(value)
        else:
            path.write_text(value)
        created.append(path)

    return created
