"""Cancellation error type.

Raised when a caller touches a stream receiver after closing it, so use after
close is distinguishable from transport failures.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request."""


__all__ = ["CancelledError"]
