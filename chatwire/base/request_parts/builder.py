"""Fluent builder producing :class:`RequestDescriptor` values."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .descriptor import RequestDescriptor


class RequestBuilder:
    """Accumulates request parts, then freezes them with :meth:`build`.

    Setters return ``self`` so calls can be chained. Later values for the same
    header (case-insensitive), query key or body field replace earlier ones.
    """

    def __init__(self, method: str, url: str) -> None:
        self._method = method
        self._url = url
        self._headers: Dict[str, str] = {}
        self._query: Dict[str, str] = {}
        self._body: Optional[Dict[str, Any]] = None
        self._timeout: Optional[float] = None
        self._retry_count: Optional[int] = None

    def header(self, name: str, value: str) -> "RequestBuilder":
        for existing in [k for k in self._headers if k.lower() == name.lower()]:
            del self._headers[existing]
        self._headers[name] = value
        return self

    def headers(self, headers: Mapping[str, str]) -> "RequestBuilder":
        for name, value in headers.items():
            self.header(name, value)
        return self

    def bearer_auth(self, token: str) -> "RequestBuilder":
        return self.header("Authorization", f"Bearer {token}")

    def query(self, name: str, value: Any) -> "RequestBuilder":
        self._query[name] = str(value)
        return self

    def body_field(self, key: str, value: Any) -> "RequestBuilder":
        if self._body is None:
            self._body = {}
        self._body[key] = value
        return self

    def body_fields(self, fields: Mapping[str, Any]) -> "RequestBuilder":
        for key, value in fields.items():
            self.body_field(key, value)
        return self

    def timeout(self, seconds: Optional[float]) -> "RequestBuilder":
        self._timeout = seconds
        return self

    def retry_count(self, count: Optional[int]) -> "RequestBuilder":
        self._retry_count = count
        return self

    def has_header(self, name: str) -> bool:
        return any(k.lower() == name.lower() for k in self._headers)

    def has_query(self, name: str) -> bool:
        return name in self._query

    def has_body_field(self, key: str) -> bool:
        return self._body is not None and key in self._body

    def build(self) -> RequestDescriptor:
        return RequestDescriptor(
            method=self._method,
            url=self._url,
            headers=self._headers,
            query=self._query,
            body=self._body,
            timeout=self._timeout,
            retry_count=self._retry_count,
        )


__all__ = ["RequestBuilder"]
