"""Exception hierarchy for prefix-purge."""


class PrefixPurgeError(Exception):
    """Base exception for all prefix-purge errors."""

    pass


class ValidationError(PrefixPurgeError):
    """Raised when validation fails."""

    pass


class CommandExecutionError(PrefixPurgeError):
    """Raised when a store operation cannot produce a usable result."""

    pass
