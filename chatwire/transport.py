"""Transport facade used by the module wrappers.

Builds request descriptors from the live configuration and exposes the two
call shapes:

- :meth:`Transport.send_unary` - one JSON response validated as a type;
- :meth:`Transport.send_stream` - a :class:`StreamReceiver` of decoded
  Server-Sent-Events chunks.

Both run through the same :class:`ResilientExecutor`, so interceptors,
retries and error classification behave identically in the two modes.
"""
from __future__ import annotations

import functools
from typing import Any, Callable, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from .base.errors import ProcessingError, ProcessingErrorKind, RequestError, RequestErrorKind
from .base.executor import ResilientExecutor
from .base.interceptors import InterceptorChain
from .base.logging import LogContext
from .base.request import RequestBuilder, RequestDescriptor
from .base.streaming import StreamDecoder, StreamReceiver
from .config import Config
from .config.defaults import EVENT_STREAM_CONTENT_TYPE

T = TypeVar("T")

UrlFn = Callable[[Config], str]
MutateFn = Callable[[Config, RequestBuilder], None]

_PAYLOAD_PREVIEW = 500


@functools.lru_cache(maxsize=64)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _type_name(response_type: Any) -> str:
    return getattr(response_type, "__name__", repr(response_type))


class Transport:
    """Request construction plus unary and streaming sends."""

    def __init__(self, executor: ResilientExecutor) -> None:
        self.executor = executor

    @property
    def config(self) -> Config:
        return self.executor.config

    def build_request(self, method: str, url_fn: UrlFn, mutate: Optional[MutateFn] = None) -> RequestDescriptor:
        """Build a descriptor for ``url_fn(config)``.

        Order: bearer token, then ``mutate`` (module params), then global
        headers, query and body fields for keys ``mutate`` did not set.
        """
        config = self.config
        builder = RequestBuilder(method, url_fn(config)).bearer_auth(config.api_key)
        if mutate is not None:
            mutate(config, builder)
        for name, value in config.http.headers.items():
            if not builder.has_header(name):
                builder.header(name, value)
        for name, value in config.http.query.items():
            if not builder.has_query(name):
                builder.query(name, value)
        if method.upper() not in ("GET", "HEAD", "DELETE"):
            for key, value in config.http.body.items():
                if not builder.has_body_field(key):
                    builder.body_field(key, value)
        return builder.build()

    def send_unary(
        self,
        request: RequestDescriptor,
        response_type: Optional[Type[T]] = None,
        *,
        interceptors: Optional[InterceptorChain] = None,
        module: Optional[str] = None,
    ) -> Any:
        """Send ``request`` and decode the JSON body.

        Returns the body validated as ``response_type``, or the plain decoded
        JSON when no type is given.

        Raises:
            TransportError: transport, API or deserialization failure.
        """
        response = self.executor.execute(request, module_chain=interceptors, module=module)
        try:
            if response_type is None:
                return response.json()
            return _adapter(response_type).validate_json(response.content)
        except (ValidationError, ValueError) as exc:
            raise self.executor.fail(self._deserialization_error(response, response_type, exc), interceptors) from exc

    def send_stream(
        self,
        request: RequestDescriptor,
        item_type: Type[T],
        *,
        interceptors: Optional[InterceptorChain] = None,
        module: Optional[str] = None,
    ) -> StreamReceiver[T]:
        """Start a streaming request and return its receiver.

        The start phase (interceptors, retries, status errors) is synchronous
        and raises like :meth:`send_unary`; later failures arrive as error
        items on the receiver.
        """
        request = request.with_header("Accept", EVENT_STREAM_CONTENT_TYPE)
        response = self.executor.execute(request, module_chain=interceptors, stream=True, module=module)
        content_type = response.headers.get("content-type", "")
        if not content_type.lower().startswith(EVENT_STREAM_CONTENT_TYPE):
            response.close()
            error = RequestError(
                RequestErrorKind.INVALID_CONTENT_TYPE,
                f"Invalid Content-Type for event stream: {content_type or 'missing'}",
            )
            raise self.executor.fail(error, interceptors)
        ctx = LogContext(module=module, method=request.method, url=request.url)
        return StreamDecoder(response, item_type, ctx=ctx).start()

    @staticmethod
    def _deserialization_error(response: httpx.Response, response_type: Any, exc: Exception) -> ProcessingError:
        name = _type_name(response_type) if response_type is not None else "JSON"
        return ProcessingError(
            kind=ProcessingErrorKind.DESERIALIZATION,
            message=f"Failed to deserialize response as {name}: {exc}",
            raw_payload=response.text[:_PAYLOAD_PREVIEW],
            target_type=name,
            status=response.status_code,
            url=str(response.request.url),
            raw=exc,
        )


__all__ = ["Transport"]
