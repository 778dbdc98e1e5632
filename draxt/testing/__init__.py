"""Testing helpers for draxt and projects built on it."""

from .fixtures import Link, build_tree, link

__all__ = [
    'Link',
    'build_tree',
    'link',
]
