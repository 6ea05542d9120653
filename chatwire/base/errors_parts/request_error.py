"""
Request-level transport failure.

Raised when no usable HTTP response was obtained: the connection could not be
opened, a timeout elapsed, the request could not be built, or an event stream
broke its framing contract.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_kinds import RequestErrorKind
from .transport_error import TransportError

_RETRYABLE = frozenset({RequestErrorKind.TIMEOUT, RequestErrorKind.CONNECTION})


@dataclass(eq=False)
class RequestError(TransportError):
    """A failure that happened before or while reading a response.

    Attributes:
        kind: Classification of the failure.
        message: Human-readable description.
        raw: Underlying exception (usually an ``httpx`` error), if any.
    """

    kind: RequestErrorKind
    message: str
    raw: Optional[BaseException] = None

    @property
    def error_code(self) -> str:
        return f"request.{self.kind.value}"

    def is_retryable(self) -> bool:
        return self.kind in _RETRYABLE

    def is_timeout(self) -> bool:
        return self.kind is RequestErrorKind.TIMEOUT

    def is_connection(self) -> bool:
        return self.kind is RequestErrorKind.CONNECTION


__all__ = ["RequestError"]
