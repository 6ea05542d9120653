"""Immutable request descriptor consumed by the resilient executor.

A descriptor is built once (usually by :class:`RequestBuilder`) and never
mutated afterwards. Interceptors that want to change a request return a
derived copy via :meth:`RequestDescriptor.evolve` or the ``with_*`` helpers.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import httpx


def _frozen(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to send one HTTP request.

    Attributes:
        method: HTTP method (upper-cased on construction).
        url: Absolute target URL.
        headers: Request headers (read-only view).
        query: Query parameters (read-only view).
        body: JSON object body, or ``None`` for no body.
        timeout: Per-request timeout override in seconds.
        retry_count: Per-request retry budget override.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    body: Optional[Mapping[str, Any]] = None
    timeout: Optional[float] = None
    retry_count: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", _frozen(self.headers))
        object.__setattr__(self, "query", _frozen(self.query))
        if self.body is not None:
            object.__setattr__(self, "body", _frozen(self.body))

    def evolve(self, **changes: Any) -> "RequestDescriptor":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    def with_header(self, name: str, value: str) -> "RequestDescriptor":
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return self.evolve(headers=headers)

    def with_query(self, name: str, value: str) -> "RequestDescriptor":
        return self.evolve(query={**self.query, name: value})

    def with_body_field(self, key: str, value: Any) -> "RequestDescriptor":
        return self.evolve(body={**(self.body or {}), key: value})

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for k, v in self.headers.items():
            if k.lower() == lowered:
                return v
        return None

    def body_dict(self) -> Optional[Dict[str, Any]]:
        """Plain ``dict`` copy of the body for JSON encoding."""
        return dict(self.body) if self.body is not None else None

    def to_httpx(self, client: httpx.Client) -> httpx.Request:
        """Build the ``httpx.Request`` this descriptor describes on ``client``."""
        timeout = self.timeout if self.timeout is not None else httpx.USE_CLIENT_DEFAULT
        return client.build_request(
            self.method,
            self.url,
            headers=dict(self.headers),
            params=dict(self.query) or None,
            json=self.body_dict(),
            timeout=timeout,
        )


__all__ = ["RequestDescriptor"]
