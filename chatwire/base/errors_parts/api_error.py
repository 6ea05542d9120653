"""
API-level failure built from a non-2xx response.

Carries the HTTP status, the service's error message and optional machine
readable ``code``/``type`` fields, plus any ``Retry-After`` delay the server
asked for.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_kinds import ApiErrorKind
from .transport_error import TransportError

_RETRYABLE = frozenset({ApiErrorKind.RATE_LIMIT, ApiErrorKind.INTERNAL_SERVER})


@dataclass(eq=False)
class ApiError(TransportError):
    """Structured error reported by the remote service.

    Attributes:
        kind: Status-code classification.
        status: HTTP status code of the response.
        message: Error message from the body, or the reason phrase.
        code: Optional machine-readable error code from the body.
        type: Optional error type from the body.
        retry_after: Delay in seconds requested by the server, if any.
    """

    kind: ApiErrorKind
    status: int
    message: str
    code: Optional[str] = None
    type: Optional[str] = None
    retry_after: Optional[float] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        suffix = f" ({self.code})" if self.code else ""
        return f"{self.error_code} [{self.status}]: {self.message}{suffix}"

    @property
    def error_code(self) -> str:
        return f"api.{self.kind.value}"

    @property
    def status_code(self) -> Optional[int]:
        return self.status

    def is_retryable(self) -> bool:
        return self.kind in _RETRYABLE

    def is_authentication(self) -> bool:
        return self.kind is ApiErrorKind.AUTHENTICATION

    def is_rate_limit(self) -> bool:
        return self.kind is ApiErrorKind.RATE_LIMIT

    def is_server_error(self) -> bool:
        return self.kind is ApiErrorKind.INTERNAL_SERVER

    def is_bad_request(self) -> bool:
        return self.kind is ApiErrorKind.BAD_REQUEST


__all__ = ["ApiError"]
