"""Exceptions raised by draxt.

Errors coming from the filesystem or glob adapters are never wrapped:
they reach the caller as the original ``OSError``. The classes here cover
programmer errors (invalid input) and the cached-metadata precondition.
"""


class DraxtError(Exception):
    """Base class for all draxt errors."""
    pass


class InvalidItemError(DraxtError, TypeError):
    """Raised when a collection is given something that is not a node."""
    pass


class InvalidParameterError(DraxtError, TypeError):
    """Raised when an operation receives a parameter of an unsupported shape."""
    pass


class InvalidOptionsError(DraxtError, TypeError):
    """Raised when glob options are neither a string nor a mapping."""
    pass


class StatsNotCachedError(DraxtError, RuntimeError):
    """Raised when an operation needs cached stats and the node has none."""

    def __init__(self, path_name: str = ''):
        self.path_name = path_name
        super().__init__(
            f"No valid cached stats for this node ({path_name}). "
            "Run `.renew_stats()` before calling this method!"
        )
