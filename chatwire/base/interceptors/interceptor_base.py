"""Base class for request/response/error interceptors.

Provides no-op implementations of all three hooks so subclasses override only
what they need. Hooks must be fast and must not perform blocking I/O beyond
what the caller explicitly expects (they run inline on the calling thread).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from ..errors import TransportError
from .priority import InterceptorPriority

if TYPE_CHECKING:  # pragma: no cover
    from ..request import RequestDescriptor


class Interceptor:
    """Pluggable hook set with a priority.

    Failure modes:
    - ``on_request`` and ``on_response`` abort the call by raising a
      :class:`TransportError`; later interceptors are skipped and the error
      goes through the error hooks.
    - ``on_error`` receives the terminal error and returns the error to pass
      on (the same one or a replacement). Raising a ``TransportError``
      short-circuits the remaining error hooks with the raised error.
    """

    priority: int = InterceptorPriority.MEDIUM

    @property
    def name(self) -> str:
        return type(self).__name__

    def on_request(self, request: "RequestDescriptor") -> "RequestDescriptor":
        """Called once per logical call, before the first send attempt."""
        return request

    def on_response(self, response: httpx.Response) -> httpx.Response:
        """Called with the successful (2xx) response."""
        return response

    def on_error(self, error: TransportError) -> TransportError:
        """Called with the terminal error before it reaches the caller."""
        return error

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{self.name}(priority={int(self.priority)})"


__all__ = ["Interceptor"]
