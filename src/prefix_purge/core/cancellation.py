"""Cooperative cancellation signal shared between a caller and the pipeline."""

import threading


class CancellationToken:
    """A one-way flag that a caller sets to ask running work to stop.

    The pipeline only reads the flag, immediately before each remote call.
    Setting it is safe from another thread or from a signal handler.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"

    @classmethod
    def none(cls) -> "CancellationToken":
        """Return a fresh token that nobody will cancel."""
        return cls()
