"""Top-level client facade.

``ChatwireClient`` wires one :class:`ResilientExecutor` (and therefore one
connection pool) into the four service modules. It is safe to share across
threads; configuration changes made through it rebuild the pool only when
HTTP settings change and never interrupt in-flight calls.

Example::

    from chatwire import ChatwireClient, ChatParams, messages

    with ChatwireClient.from_env() as client:
        params = ChatParams("gpt-4o-mini", [messages.user("Hello")])
        print(client.chat.create(params).content())
"""
from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from .base.executor import ResilientExecutor
from .base.interceptors import Interceptor
from .base.resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig
from .config import Config, config_from_env
from .modules import Chat, Completions, Embeddings, Models
from .transport import Transport


class ChatwireClient:
    """Client for an OpenAI-compatible HTTP service."""

    def __init__(self, config: Config, *, retry_config: RetryConfig = DEFAULT_RETRY_CONFIG) -> None:
        self._executor = ResilientExecutor(config, retry_config)
        self._transport = Transport(self._executor)
        self.chat = Chat(self._transport)
        self.completions = Completions(self._transport)
        self.embeddings = Embeddings(self._transport)
        self.models = Models(self._transport)

    @classmethod
    def from_env(cls, overrides: Optional[Mapping[str, Any]] = None) -> "ChatwireClient":
        """Build a client from ``OPENAI_*`` environment variables."""
        return cls(config_from_env(overrides))

    @property
    def config(self) -> Config:
        return self._executor.config

    @property
    def transport(self) -> Transport:
        return self._transport

    def update_config(self, fn: Callable[[Config], Optional[Config]]) -> Config:
        """Change configuration; see :meth:`ResilientExecutor.update_config`."""
        return self._executor.update_config(fn)

    def with_base_url(self, base_url: str) -> "ChatwireClient":
        self.update_config(lambda c: c.with_base_url(base_url))
        return self

    def with_api_key(self, api_key: str) -> "ChatwireClient":
        self.update_config(lambda c: c.with_api_key(api_key))
        return self

    def with_retry_count(self, retry_count: int) -> "ChatwireClient":
        self.update_config(lambda c: c.with_retry_count(retry_count))
        return self

    def with_timeout(self, seconds: float) -> "ChatwireClient":
        self.update_config(lambda c: c.with_http(timeout_seconds=seconds))
        return self

    def with_connect_timeout(self, seconds: float) -> "ChatwireClient":
        self.update_config(lambda c: c.with_http(connect_timeout_seconds=seconds))
        return self

    def with_proxy(self, proxy: Optional[str]) -> "ChatwireClient":
        self.update_config(lambda c: c.with_http(proxy=proxy))
        return self

    def with_user_agent(self, user_agent: Optional[str]) -> "ChatwireClient":
        self.update_config(lambda c: c.with_http(user_agent=user_agent))
        return self

    def add_interceptor(self, interceptor: Interceptor) -> "ChatwireClient":
        """Add a global interceptor (before traffic starts)."""

        def _add(config: Config) -> None:
            config.interceptors.add(interceptor)

        self.update_config(_add)
        return self

    def close(self) -> None:
        self._executor.close()

    def __enter__(self) -> "ChatwireClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["ChatwireClient"]
