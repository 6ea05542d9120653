"""Pytest configuration for the chatwire test suite.

Fixtures:
    - ``sleeps``: replaces ``time.sleep`` and records requested delays.
    - ``make_client``: builds a ``ChatwireClient`` whose HTTP traffic goes to
      an ``httpx.MockTransport`` handler; clients are closed on teardown.
    - ``log_capture``: collects records emitted on the ``chatwire`` logger.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, List

import httpx
import pytest

from chatwire import ChatwireClient, Config, HttpConfig
from chatwire.base.logging import LOG_LEVEL_ENV, get_logger

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def sleeps(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Make retry backoff instant while recording each delay."""
    recorded: List[float] = []
    monkeypatch.setattr(time, "sleep", lambda seconds: recorded.append(seconds))
    return recorded


@pytest.fixture()
def make_client() -> Iterator[Callable[..., ChatwireClient]]:
    clients: List[ChatwireClient] = []

    def _make(handler: Handler, *, retry_count: int = 3, **http: object) -> ChatwireClient:
        config = Config(
            api_key="sk-test",
            base_url="https://api.test/v1",
            retry_count=retry_count,
            http=HttpConfig(transport=httpx.MockTransport(handler), **http),  # type: ignore[arg-type]
        )
        client = ChatwireClient(config)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[logging.LogRecord]]:
    """Capture chatwire log records at DEBUG level."""
    logger = get_logger()
    previous = logger.level
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    logger.setLevel(logging.DEBUG)
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
