"""Cooperative cancellation primitives (public facade).

``CancellationToken`` signals a stream producer to stop; ``CancelledError``
is raised by operations that observe the signal. Implementations live in
``cancellation_parts``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
