"""Common components shared by nodes, adapters and the collection.

This internal package contains non-I/O code only. It should NOT be
imported directly by users.

Important: This package must NEVER import from core or adapters to avoid
circular dependencies.
"""

from .permissions import (
    PERMISSION_MASK,
    mode_to_permissions,
    mode_to_octal,
    parse_mode,
)

__all__ = [
    'PERMISSION_MASK',
    'mode_to_permissions',
    'mode_to_octal',
    'parse_mode',
]
