"""Client configuration layer.

Goals
-----
* Hold everything a call needs besides the request itself: credentials, the
  base URL, the retry budget, HTTP client settings, global header/query/body
  maps and the global interceptor chain.
* Merge sources in a predictable order:
    1. Built-in defaults (``chatwire.config.defaults``)
    2. Optional JSON file named by ``CHATWIRE_CONFIG_FILE``
    3. Environment variables (``OPENAI_API_KEY``, ``OPENAI_BASE_URL``, ...)
    4. In-code overrides passed to :func:`config_from_env`

Public API
----------
* :class:`HttpConfig` - settings that require rebuilding the HTTP client.
* :class:`Config` - the full configuration snapshot.
* :func:`config_from_env` - build a ``Config`` from the sources above.

``Config`` objects are treated as read-only once handed to an executor;
changes go through ``ResilientExecutor.update_config``, which works on a copy.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ..base.errors import ConfigError
from ..base.interceptors import InterceptorChain
from ..base.logging import get_logger, log_event
from .defaults import DEFAULT_BASE_URL, DEFAULT_RETRY_COUNT, DEFAULT_USER_AGENT
from .env import is_placeholder, read_env_settings, read_file_settings

_logger = get_logger("chatwire.config")


def _default_timeout() -> float:
    from ..base.timeouts import get_timeout_config

    return get_timeout_config().request_timeout_seconds


def _default_connect_timeout() -> float:
    from ..base.timeouts import get_timeout_config

    return get_timeout_config().connect_timeout_seconds


@dataclass
class HttpConfig:
    """HTTP client settings plus request-wide extras.

    Attributes:
        timeout_seconds: Overall request timeout.
        connect_timeout_seconds: Connection establishment timeout.
        proxy: Proxy URL applied to every request.
        user_agent: ``User-Agent`` header value.
        headers: Headers added to every request unless already set.
        query: Query parameters added to every request unless already set.
        body: Body fields added to every JSON request unless already set.
        transport: Optional custom ``httpx`` transport (mock transports in
            tests, custom connection handling in applications). When set,
            ``proxy`` is ignored.
    """

    timeout_seconds: float = field(default_factory=_default_timeout)
    connect_timeout_seconds: float = field(default_factory=_default_connect_timeout)
    proxy: Optional[str] = None
    user_agent: Optional[str] = DEFAULT_USER_AGENT
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)
    transport: Optional[httpx.BaseTransport] = None

    def client_signature(self) -> Tuple[Any, ...]:
        """Values that, when changed, require a new ``httpx.Client``."""
        return (
            self.timeout_seconds,
            self.connect_timeout_seconds,
            self.proxy,
            self.user_agent,
            id(self.transport) if self.transport is not None else None,
        )

    def build_client(self) -> httpx.Client:
        """Create a client reflecting the current settings."""
        kwargs: Dict[str, Any] = {
            "timeout": httpx.Timeout(self.timeout_seconds, connect=self.connect_timeout_seconds),
        }
        if self.user_agent:
            kwargs["headers"] = {"User-Agent": self.user_agent}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        elif self.proxy:
            kwargs["proxy"] = self.proxy
        return httpx.Client(**kwargs)

    def copy(self) -> "HttpConfig":
        return replace(self, headers=dict(self.headers), query=dict(self.query), body=dict(self.body))


@dataclass
class Config:
    """Configuration snapshot shared by every call of one client.

    Attributes:
        api_key: Bearer token sent as ``Authorization: Bearer <api_key>``.
        base_url: Service root; module paths are joined onto it.
        retry_count: Default retry budget (total attempts, minimum 1).
        http: HTTP client settings and global request extras.
        interceptors: Global interceptor chain.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    retry_count: int = DEFAULT_RETRY_COUNT
    http: HttpConfig = field(default_factory=HttpConfig)
    interceptors: InterceptorChain = field(default_factory=InterceptorChain)

    def __post_init__(self) -> None:
        if self.retry_count < 0:
            raise ConfigError(f"retry_count must be >= 0, got {self.retry_count}")

    @property
    def timeout(self) -> float:
        return self.http.timeout_seconds

    def endpoint(self, path: str) -> str:
        """Join ``path`` onto ``base_url`` with exactly one slash."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def copy(self) -> "Config":
        """Copy with independent HTTP maps and chain list (interceptors shared)."""
        return replace(self, http=self.http.copy(), interceptors=self.interceptors.copy())

    def with_base_url(self, base_url: str) -> "Config":
        return replace(self.copy(), base_url=base_url)

    def with_api_key(self, api_key: str) -> "Config":
        return replace(self.copy(), api_key=api_key)

    def with_retry_count(self, retry_count: int) -> "Config":
        return replace(self.copy(), retry_count=retry_count)

    def with_http(self, **changes: Any) -> "Config":
        """Copy with ``HttpConfig`` fields replaced (e.g. ``timeout_seconds``)."""
        cfg = self.copy()
        cfg.http = replace(cfg.http, **changes)
        return cfg


_HTTP_FIELDS = ("timeout_seconds", "connect_timeout_seconds", "proxy", "user_agent")


def config_from_env(
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Build a :class:`Config` from file, environment and ``overrides``.

    Raises:
        ConfigError: when no API key is available from any source or a value
            cannot be parsed.
    """
    settings: Dict[str, Any] = {}
    settings.update(read_file_settings(environ))
    settings.update(read_env_settings(environ))
    settings.update({k: v for k, v in (overrides or {}).items() if v is not None})

    api_key = settings.pop("api_key", None)
    if not api_key:
        raise ConfigError("OPENAI_API_KEY is not set")
    if is_placeholder(api_key):
        log_event(_logger, "config.placeholder_key", source="env")

    http = HttpConfig(**{k: settings.pop(k) for k in _HTTP_FIELDS if k in settings})
    return Config(
        api_key=api_key,
        base_url=settings.get("base_url", DEFAULT_BASE_URL),
        retry_count=settings.get("retry_count", DEFAULT_RETRY_COUNT),
        http=http,
    )


__all__ = ["Config", "HttpConfig", "config_from_env"]
