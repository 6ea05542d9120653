"""Priority-ordered interceptor chain.

``items`` is kept sorted by descending priority (stable for equal
priorities, so insertion order breaks ties). Request hooks fold over
``items`` front to back; response and error hooks fold back to front, which
gives the onion ordering: the interceptor that saw the request first sees
the response last.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, List

import httpx

from ..errors import TransportError
from ..logging import get_logger, log_event
from .interceptor_base import Interceptor

if TYPE_CHECKING:  # pragma: no cover
    from ..request import RequestDescriptor

_logger = get_logger("chatwire.interceptors")


def _sorted(items: Iterable[Interceptor]) -> List[Interceptor]:
    return sorted(items, key=lambda i: int(i.priority), reverse=True)


@dataclass
class InterceptorChain:
    """Composable chain executing interceptor hooks in priority order.

    Attributes:
        items: Interceptors sorted by descending priority.

    ``add`` swaps in a new sorted list rather than mutating the current one,
    so a chain being iterated by an in-flight call is never modified under it.
    """

    items: List[Interceptor] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.items = _sorted(self.items)

    def add(self, interceptor: Interceptor) -> "InterceptorChain":
        """Insert ``interceptor`` and re-sort; returns ``self`` for chaining."""
        self.items = _sorted([*self.items, interceptor])
        return self

    def extend(self, interceptors: Iterable[Interceptor]) -> "InterceptorChain":
        self.items = _sorted([*self.items, *interceptors])
        return self

    def copy(self) -> "InterceptorChain":
        """Shallow copy sharing the interceptor instances."""
        return InterceptorChain(list(self.items))

    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(self.items)

    def run_request(self, request: "RequestDescriptor") -> "RequestDescriptor":
        """Fold ``on_request`` highest priority first.

        A hook raising :class:`TransportError` aborts the fold; the error
        propagates to the caller.
        """
        for interceptor in self.items:
            request = interceptor.on_request(request)
        return request

    def run_response(self, response: httpx.Response) -> httpx.Response:
        """Fold ``on_response`` lowest priority first (same abort rule)."""
        for interceptor in reversed(self.items):
            response = interceptor.on_response(response)
        return response

    def run_error(self, error: TransportError) -> TransportError:
        """Fold ``on_error`` lowest priority first and return the final error.

        A hook that raises a ``TransportError`` ends the fold with that error.
        A hook that returns something other than an error cannot suppress it:
        the incoming error is kept.
        """
        current = error
        for interceptor in reversed(self.items):
            try:
                result = interceptor.on_error(current)
            except TransportError as exc:
                return exc
            if isinstance(result, TransportError):
                current = result
                continue
            log_event(
                _logger,
                "interceptor.error_dropped",
                interceptor=interceptor.name,
                error_code=current.error_code,
                returned=type(result).__name__,
            )
        return current


__all__ = ["InterceptorChain"]
