"""Shared HTTP client snapshot for the resilient executor.

Purpose:
    Own one ``httpx.Client`` (and its connection pool) together with the
    configuration it was built from, and hand consistent ``(config, client)``
    snapshots to concurrent calls.

Locking:
    Snapshots are taken under the read side of a :class:`ReadWriteLock`.
    :meth:`ClientHolder.update` runs the caller's function on a copy of the
    configuration outside the lock, then takes the write side only to publish
    it, rebuilding the client when :meth:`HttpConfig.client_signature`
    changed. The function may therefore read the holder itself.

Lifecycle & cleanup:
    A replaced client is retired rather than closed, so calls that already
    hold the old snapshot finish normally. Retired clients are closed with
    the holder. Every live holder is closed at interpreter exit via
    ``atexit``; tests may call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

import httpx

from ..errors import RequestError, RequestErrorKind
from ..locks import ReadWriteLock
from ..logging import get_logger, log_event

if TYPE_CHECKING:  # pragma: no cover
    from ...config import Config

_logger = get_logger("chatwire.http")
_HOLDERS: "weakref.WeakSet[ClientHolder]" = weakref.WeakSet()


@dataclass(frozen=True)
class ClientSnapshot:
    """Configuration and client pair used for the whole of one call."""

    config: "Config"
    client: httpx.Client


class ClientHolder:
    """Reader/writer-locked cell holding the current client snapshot."""

    def __init__(self, config: "Config") -> None:
        self._lock = ReadWriteLock()
        self._config = config
        self._client = config.http.build_client()
        self._signature = config.http.client_signature()
        self._version = 0
        self._retired: List[httpx.Client] = []
        self._closed = False
        _HOLDERS.add(self)

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> ClientSnapshot:
        """Return the current snapshot.

        Raises:
            RequestError: ``BUILD`` kind when the holder has been closed.
        """
        with self._lock.read():
            if self._closed:
                raise RequestError(RequestErrorKind.BUILD, "HTTP client has been closed")
            return ClientSnapshot(self._config, self._client)

    @property
    def config(self) -> "Config":
        return self.snapshot().config

    def update(self, fn: Callable[["Config"], Optional["Config"]]) -> "Config":
        """Apply ``fn`` to a copy of the configuration and publish it.

        ``fn`` may mutate the copy in place or return a replacement. It runs
        without the lock held and is applied again if another update was
        published in the meantime. The client is rebuilt only when HTTP
        client settings changed.
        """
        while True:
            with self._lock.read():
                if self._closed:
                    raise RequestError(RequestErrorKind.BUILD, "HTTP client has been closed")
                base, version = self._config, self._version
            candidate = base.copy()
            result = fn(candidate)
            new_config = result if result is not None else candidate
            with self._lock.write():
                if self._closed:
                    raise RequestError(RequestErrorKind.BUILD, "HTTP client has been closed")
                if version == self._version:
                    return self._publish(new_config)

    def _publish(self, new_config: "Config") -> "Config":
        """Install ``new_config``; the caller holds the write lock."""
        signature = new_config.http.client_signature()
        if signature != self._signature:
            self._retired.append(self._client)
            self._client = new_config.http.build_client()
            self._signature = signature
            log_event(
                _logger,
                "config.rebuild",
                timeout=new_config.http.timeout_seconds,
                connect_timeout=new_config.http.connect_timeout_seconds,
                proxy=bool(new_config.http.proxy),
                retired=len(self._retired),
            )
        self._config = new_config
        self._version += 1
        return new_config

    def close(self) -> None:
        """Close the current and all retired clients; idempotent."""
        with self._lock.write():
            if self._closed:
                return
            self._closed = True
            clients = [*self._retired, self._client]
            self._retired.clear()
        for client in clients:
            client.close()


def close_all_clients() -> None:
    """Close every live :class:`ClientHolder`."""
    for holder in list(_HOLDERS):
        holder.close()


atexit.register(close_all_clients)

__all__ = ["ClientHolder", "ClientSnapshot", "close_all_clients"]
