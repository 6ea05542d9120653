"""
Root of the transport error hierarchy.

Every failure surfaced by the executor, the stream decoder or the module
wrappers is a :class:`TransportError`. Callers can handle all of them in one
``except`` clause and use the predicate helpers to decide what to do next.
"""
from __future__ import annotations

from typing import Optional


class TransportError(Exception):
    """Base class for classified transport failures.

    Subclasses set ``message`` and override the predicates that apply to
    them. Retryability is a pure function of the error kind.
    """

    message: str = ""

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.error_code}: {self.message}"

    @property
    def error_code(self) -> str:
        """Stable ``family.kind`` identifier used in structured logs."""
        return "transport.unknown"

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status associated with the failure, when there is one."""
        return None

    def is_retryable(self) -> bool:
        return False

    def is_timeout(self) -> bool:
        return False

    def is_connection(self) -> bool:
        return False

    def is_authentication(self) -> bool:
        return False

    def is_rate_limit(self) -> bool:
        return False

    def is_server_error(self) -> bool:
        return False

    def is_bad_request(self) -> bool:
        return False

    def is_deserialization(self) -> bool:
        return False


__all__ = ["TransportError"]
