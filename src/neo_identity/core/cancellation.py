"""Explicit cancellation and deadline propagation for store operations.

A CancellationToken is passed through every public store call down to the
connection layer. Stores check it before doing any work and the connection
factory uses its remaining time to bound connect and statement timeouts.
"""

import time
from typing import Optional

from .exceptions import OperationCancelledError


class CancellationToken:
    """Cooperative cancellation flag with an optional monotonic deadline."""

    def __init__(self, timeout: Optional[float] = None):
        """Initialize token.

        Args:
            timeout: Seconds from now after which the token counts as cancelled
        """
        self._cancelled = False
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Create a token that expires after the given number of seconds."""
        return cls(timeout=seconds)

    @classmethod
    def cancelled(cls) -> "CancellationToken":
        """Create a token that is already cancelled."""
        token = cls()
        token.cancel()
        return token

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def is_cancellation_requested(self) -> bool:
        """True once cancel() was called or the deadline has passed."""
        if self._cancelled:
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self, operation: Optional[str] = None) -> None:
        """Raise OperationCancelledError if cancellation was requested."""
        if self._cancelled:
            raise OperationCancelledError(operation)
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise OperationCancelledError(operation, reason="deadline exceeded")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled}, remaining={self.remaining()})"


def ensure_not_cancelled(cancellation: Optional[CancellationToken], operation: Optional[str] = None) -> None:
    """Check an optional token; a missing token never cancels."""
    if cancellation is not None:
        cancellation.raise_if_cancelled(operation)


def bounded_timeout(
    cancellation: Optional[CancellationToken],
    default: Optional[float] = None
) -> Optional[float]:
    """Smallest of the configured timeout and the token's remaining time."""
    remaining = cancellation.remaining() if cancellation is not None else None
    if remaining is None:
        return default
    if default is None:
        return remaining
    return min(default, remaining)
