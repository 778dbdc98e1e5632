"""Permission bit decoding.

Pure computation on a POSIX mode bitmask; no I/O.
"""

from typing import Dict

PERMISSION_MASK = 0o777

# Bit offset of each permission class inside the low 9 bits
_CLASS_SHIFTS = (
    ('owner', 6),
    ('group', 3),
    ('others', 0),
)

_ACCESS_BITS = (
    ('read', 4),
    ('write', 2),
    ('execute', 1),
)


def mode_to_permissions(mode: int) -> Dict[str, Dict[str, bool]]:
    """Convert a mode bitmask into read/write/execute triples.

    Args:
        mode: Raw ``st_mode`` value (file type bits are ignored)

    Returns:
        Mapping of access type to ``{'owner', 'group', 'others'}`` flags,
        e.g. ``0o755`` gives ``{'read': {'owner': True, 'group': True,
        'others': True}, 'write': {'owner': True, 'group': False,
        'others': False}, 'execute': {...all True}}``
    """
    return {
        access: {
            who: bool((mode >> shift) & bit)
            for who, shift in _CLASS_SHIFTS
        }
        for access, bit in _ACCESS_BITS
    }


def mode_to_octal(mode: int) -> str:
    """Return the low 9 permission bits as a 3-digit octal string."""
    return format(mode & PERMISSION_MASK, '03o')


def parse_mode(mode) -> int:
    """Accept an int mode or an octal string like ``'755'``."""
    if isinstance(mode, str):
        return int(mode, 8)
    return mode
