"""Shared plumbing for the module wrappers."""
from __future__ import annotations

from typing import Optional

from ..base.interceptors import Interceptor, InterceptorChain
from ..transport import Transport, UrlFn


class ModuleBase:
    """A URL family of the service with its own interceptor chain.

    Module interceptors run after the global chain on requests and before
    it on responses and errors.
    """

    name = "module"

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self.interceptors = InterceptorChain()

    def add_interceptor(self, interceptor: Interceptor) -> "ModuleBase":
        self.interceptors.add(interceptor)
        return self

    def _chain(self) -> Optional[InterceptorChain]:
        return None if self.interceptors.is_empty() else self.interceptors

    @staticmethod
    def _url(path: str) -> UrlFn:
        return lambda config: config.endpoint(path)


__all__ = ["ModuleBase"]
