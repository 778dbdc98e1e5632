"""Configuration system for draxt.

This module defines how callers describe a glob query (working directory,
dot-file visibility, ignore patterns) and the small set of node kinds a
queried path can be classified into.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Kind of filesystem node.

    The integer values are the node type codes exposed as ``NODE_TYPE``
    on every node class.
    """
    GENERIC = 0          # Anything that is not one of the kinds below
    DIRECTORY = 1
    FILE = 2
    SYMBOLIC_LINK = 3


@dataclass
class GlobOptions:
    """Options passed to the glob adapter.

    ``absolute`` exists so callers can pass their usual glob option
    dictionaries through, but normalization always forces it to True:
    node identity is the absolute path name. Keys the adapter does not
    know are kept in ``extra`` and otherwise ignored.
    """

    cwd: Optional[str] = None                       # None means the process cwd
    absolute: bool = True
    dot: bool = False                               # Wildcards match dot-entries
    ignore: List[str] = field(default_factory=list)  # Patterns dropped from results
    nodir: bool = False                             # Only non-directories
    recursive: bool = True                          # ``**`` spans segments
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.ignore = _as_list(self.ignore)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "GlobOptions":
        """Build options from a plain mapping.

        Args:
            options: Mapping of option names to values

        Returns:
            New GlobOptions instance
        """
        known = {f.name for f in fields(cls)} - {'extra'}
        values = {key: value for key, value in options.items() if key in known}
        extra = {key: value for key, value in options.items() if key not in known}
        if extra:
            logger.debug("Ignoring unsupported glob options: %s", sorted(extra))
        return cls(extra=extra, **values)

    def copy(self, **changes) -> "GlobOptions":
        """Return a copy with its own ``ignore`` list and ``extra`` dict."""
        changes.setdefault('ignore', _as_list(self.ignore))
        changes.setdefault('extra', dict(self.extra))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _as_list(value: Any) -> List[str]:
    # A scalar ignore pattern is shorthand for a one-item list
    if value is None or value == '':
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
