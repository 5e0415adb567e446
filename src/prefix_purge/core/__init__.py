"""Core utilities and shared components for prefix-purge."""

from .cancellation import CancellationToken
from .config import settings
from .exceptions import CommandExecutionError, PrefixPurgeError, ValidationError
from .observability import get_logger, get_tracer

__all__ = [
    "CancellationToken",
    "settings",
    "CommandExecutionError",
    "PrefixPurgeError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
