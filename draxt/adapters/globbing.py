"""Glob adapter for draxt.

Expands glob patterns into path names using the standard library ``glob``
module, and builds single-segment match predicates with ``fnmatch``.

Result order is whatever ``glob`` yields (directory listing order). It is
never re-sorted here, so collection order built on top of it is platform
dependent.
"""

import asyncio
import fnmatch
import glob as glob_module
import logging
import os
from typing import Callable, Iterable, List, Optional

from ..config import GlobOptions

logger = logging.getLogger(__name__)


class GlobAdapter:
    """Pattern expansion service used by the query engine."""

    def glob_sync(self, pattern: str, options: Optional[GlobOptions] = None) -> List[str]:
        """Expand ``pattern`` into a list of path names.

        Args:
            pattern: Glob pattern, absolute or relative to ``options.cwd``
            options: Normalized glob options

        Returns:
            Path names in the order produced by ``glob``
        """
        options = options or GlobOptions()
        cwd = os.path.abspath(options.cwd) if options.cwd else os.getcwd()

        if os.path.isabs(pattern):
            matches = glob_module.glob(
                pattern,
                recursive=options.recursive,
                include_hidden=options.dot,
            )
        else:
            matches = [
                os.path.join(cwd, match)
                for match in glob_module.glob(
                    pattern,
                    root_dir=cwd,
                    recursive=options.recursive,
                    include_hidden=options.dot,
                )
                if match
            ]

        # ``dir/**`` yields ``dir/`` for the directory itself
        paths = list(dict.fromkeys(os.path.normpath(match) for match in matches))

        if options.ignore:
            paths = [p for p in paths if not self._is_ignored(p, cwd, options.ignore)]
        if options.nodir:
            paths = [p for p in paths if not os.path.isdir(p)]
        if not options.absolute:
            paths = [os.path.relpath(p, cwd) for p in paths]

        logger.debug("glob %r in %s matched %d path(s)", pattern, cwd, len(paths))
        return paths

    async def glob(self, pattern: str, options: Optional[GlobOptions] = None) -> List[str]:
        """Async version of ``glob_sync``; runs in a worker thread."""
        return await asyncio.to_thread(self.glob_sync, pattern, options)

    def make_filter(self, pattern: str, dot: bool = False) -> Callable[[str], bool]:
        """Create a predicate matching a path's base name against ``pattern``.

        Patterns containing a path separator are matched against the whole
        path instead. Dot-entries only match when ``dot`` is set or the
        pattern itself starts with a dot.

        Args:
            pattern: Single-segment glob pattern (e.g. ``'*.md'``)
            dot: Whether wildcards may match a leading dot

        Returns:
            Function taking a path name and returning True on match
        """
        match_base = os.sep not in pattern and '/' not in pattern
        pattern_is_dotted = pattern.startswith('.')

        def predicate(path_name: str) -> bool:
            base_name = os.path.basename(path_name.rstrip(os.sep)) or path_name
            if not dot and not pattern_is_dotted and base_name.startswith('.'):
                return False
            subject = base_name if match_base else path_name
            return fnmatch.fnmatchcase(subject, pattern)

        return predicate

    @staticmethod
    def _is_ignored(path_name: str, cwd: str, patterns: Iterable[str]) -> bool:
        relative = os.path.relpath(path_name, cwd)
        for pattern in patterns:
            if fnmatch.fnmatchcase(relative, pattern) or fnmatch.fnmatchcase(path_name, pattern):
                return True
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
