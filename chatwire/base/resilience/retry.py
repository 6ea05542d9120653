"""Retry budget and backoff policy for the resilient executor.

The executor asks :class:`RetryConfig` two questions after a failed attempt:
how many attempts the call may make in total (:func:`max_attempts`) and how
long to sleep before the next one (:meth:`RetryConfig.delay_for`).

Backoff rules:
- A server-supplied ``Retry-After`` wins: that delay plus up to
  ``retry_after_jitter_ms`` of jitter.
- Otherwise ``base * 2 ** (attempt - 1)`` where the base depends on the
  error kind, capped per family, plus up to ``jitter_ratio`` of the delay.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Protocol

from ..errors import ApiError, ApiErrorKind, RequestError, RequestErrorKind, TransportError


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: TransportError | None,
    ) -> None: ...


def max_attempts(override: Optional[int], default: int) -> int:
    """Effective attempt budget: a positive override, else the default, at least 1."""
    budget = override if override else default
    return max(budget or 0, 1)


@dataclass(frozen=True)
class RetryConfig:
    """Backoff seeds (milliseconds) and jitter settings.

    Rate limits back off slowest, server errors next, other API errors
    fastest; connection failures back off slower than timeouts.
    """

    rate_limit_base_ms: float = 5000
    server_error_base_ms: float = 1000
    api_default_base_ms: float = 500
    api_cap_ms: float = 30_000
    connection_base_ms: float = 200
    timeout_base_ms: float = 100
    request_default_base_ms: float = 100
    request_cap_ms: float = 10_000
    jitter_ratio: float = 0.1
    retry_after_jitter_ms: float = 1000
    attempt_logger: AttemptLogger | None = None

    def _api_base(self, kind: ApiErrorKind) -> float:
        if kind is ApiErrorKind.RATE_LIMIT:
            return self.rate_limit_base_ms
        if kind is ApiErrorKind.INTERNAL_SERVER:
            return self.server_error_base_ms
        return self.api_default_base_ms

    def _request_base(self, kind: RequestErrorKind) -> float:
        if kind is RequestErrorKind.TIMEOUT:
            return self.timeout_base_ms
        if kind is RequestErrorKind.CONNECTION:
            return self.connection_base_ms
        return self.request_default_base_ms

    def base_delay_ms(self, error: TransportError, attempt: int) -> float:
        """Capped exponential delay before jitter, in milliseconds."""
        exponent = max(attempt - 1, 0)
        if isinstance(error, ApiError):
            return min(self._api_base(error.kind) * 2**exponent, self.api_cap_ms)
        if isinstance(error, RequestError):
            return min(self._request_base(error.kind) * 2**exponent, self.request_cap_ms)
        return min(self.request_default_base_ms * 2**exponent, self.request_cap_ms)

    def delay_for(self, error: TransportError, attempt: int) -> float:
        """Seconds to sleep after ``attempt`` (1-based) failed with ``error``."""
        retry_after = getattr(error, "retry_after", None)
        if retry_after is not None:
            return retry_after + random.uniform(0, self.retry_after_jitter_ms) / 1000.0  # nosec B311 - jitter only
        delay_ms = self.base_delay_ms(error, attempt)
        delay_ms += delay_ms * random.uniform(0, self.jitter_ratio)  # nosec B311 - jitter only
        return delay_ms / 1000.0


DEFAULT_RETRY_CONFIG = RetryConfig()


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "max_attempts",
]
