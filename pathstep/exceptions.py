"""Custom exception types used across :mod:`pathstep`."""

from __future__ import annotations


class PathStepError(Exception):
    """Base class for all package-specific errors."""


class InputError(PathStepError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class GraphFormatError(InputError):
    """Raised when an edge carries a negative or non-numeric weight."""


class ConfigError(PathStepError, ValueError):
    """Raised for invalid configuration options."""


class NotFoundError(PathStepError, LookupError):
    """Raised when a vertex id is not present in the graph."""


class InvalidQueryError(PathStepError, RuntimeError):
    """Raised when a path is requested before termination or for an unreachable vertex."""


__all__ = [
    "PathStepError",
    "InputError",
    "GraphFormatError",
    "ConfigError",
    "NotFoundError",
    "InvalidQueryError",
]
