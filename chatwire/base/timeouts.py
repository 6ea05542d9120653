"""Process-wide timeout defaults.

Centralizes the timeout values used when no explicit configuration is given:
the overall HTTP timeout, the connect timeout, and the poll interval a
stream producer uses while waiting for room in a full channel.

Environment overrides (all optional, positive floats):
    CHATWIRE_TIMEOUT_SECONDS
    CHATWIRE_CONNECT_TIMEOUT_SECONDS
    CHATWIRE_CHANNEL_POLL_SECONDS

Values are parsed once and cached; the cache refreshes when any of the
variables changes so tests can adjust them with ``monkeypatch.setenv``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.defaults import (
    DEFAULT_CHANNEL_POLL_SECONDS,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
)

_ENV_NAMES = (
    "CHATWIRE_TIMEOUT_SECONDS",
    "CHATWIRE_CONNECT_TIMEOUT_SECONDS",
    "CHATWIRE_CHANNEL_POLL_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values in seconds.

    Attributes:
        request_timeout_seconds: Overall per-request HTTP timeout.
        connect_timeout_seconds: Timeout for establishing a connection.
        channel_poll_seconds: How long a stream producer blocks on a full
            channel before re-checking for cancellation.
    """

    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    channel_poll_seconds: float = DEFAULT_CHANNEL_POLL_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached :class:`TimeoutConfig`, re-reading changed env vars."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        request_timeout_seconds=_parse_env_float("CHATWIRE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float(
            "CHATWIRE_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS
        ),
        channel_poll_seconds=_parse_env_float("CHATWIRE_CHANNEL_POLL_SECONDS", DEFAULT_CHANNEL_POLL_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
