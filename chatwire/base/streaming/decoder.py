"""Stream decoder: SSE byte stream to typed results on a bounded channel.

Purpose:
    Own a streaming ``httpx.Response`` on a dedicated background thread,
    parse its event framing and push :class:`StreamResult` items onto a
    :class:`StreamChannel` read by the caller.

Per event:
    - empty payload: skipped;
    - ``[DONE]``: normal end of stream, nothing emitted;
    - anything else: validated as the target type. Failures emit a
      ``ProcessingError`` (``CONVERSION``) carrying the raw payload and the
      target type name, and decoding continues.

Failure modes:
    - Read errors are classified like unary transport errors, emitted, and
      end the stream. A body that was already consumed or closed is an
      ``EVENT_STREAM`` error.
    - A byte stream that ends without ``[DONE]`` emits a ``STREAM_ENDED``
      request error.
    - Any other exception raised while decoding is emitted as an
      ``UNKNOWN`` processing error so the consumer is never left waiting.

Cancellation:
    When the receiver is closed, abandoned mid-iteration or garbage
    collected, the producer stops at its next send or line,
    closes the response and exits. Nothing is sent upstream.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Generic, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from ...config.defaults import STREAM_CHANNEL_CAPACITY, STREAM_DONE_SENTINEL
from ..errors import (
    ProcessingError,
    ProcessingErrorKind,
    RequestError,
    RequestErrorKind,
    TransportError,
    classify_http_exception,
)
from ..logging import LogContext, get_logger, log_event
from ..timeouts import get_timeout_config
from .channel import StreamChannel, StreamReceiver
from .sse_parser import SseEvent, SseParser
from .stream_result import StreamResult

T = TypeVar("T")

_logger = get_logger("chatwire.stream")


class StreamDecoder(Generic[T]):
    """Decode one streaming response into ``item_type`` values."""

    def __init__(
        self,
        response: httpx.Response,
        item_type: Type[T],
        *,
        capacity: int = STREAM_CHANNEL_CAPACITY,
        poll_seconds: Optional[float] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._response = response
        self._adapter: TypeAdapter[Any] = TypeAdapter(item_type)
        self._type_name = getattr(item_type, "__name__", repr(item_type))
        if poll_seconds is None:
            poll_seconds = get_timeout_config().channel_poll_seconds
        self._channel: StreamChannel[T] = StreamChannel(capacity, poll_seconds)
        self._ctx = ctx
        self._emitted = 0
        self._errors = 0
        self._thread: Optional[threading.Thread] = None

    def start(self) -> StreamReceiver[T]:
        """Start the producer thread and return the receiving end.

        The decoder keeps no reference to the receiver; the caller owns it.
        """
        if self._thread is not None:
            raise RuntimeError("stream decoder already started")
        receiver = self._channel.open_receiver()
        self._thread = threading.Thread(target=self._run, name="chatwire-stream", daemon=True)
        log_event(_logger, "stream.start", self._ctx, item_type=self._type_name)
        self._thread.start()
        return receiver

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the producer thread to exit."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        outcome = "error"
        try:
            outcome = self._pump()
        except Exception as exc:  # forwarded to the consumer below
            self._emit_error(
                ProcessingError(ProcessingErrorKind.UNKNOWN, f"Stream decoding failed: {exc}", raw=exc)
            )
        finally:
            self._response.close()
            if self._channel.closed:
                outcome = "cancelled"
                log_event(_logger, "stream.cancelled", self._ctx, emitted=self._emitted)
            else:
                self._channel.finish()
            log_event(
                _logger,
                "stream.end",
                self._ctx,
                outcome=outcome,
                emitted=self._emitted,
                errors=self._errors,
            )

    def _pump(self) -> str:
        parser = SseParser()
        try:
            for line in self._response.iter_lines():
                if self._channel.closed:
                    return "cancelled"
                event = parser.feed_line(line)
                if event is None:
                    continue
                state = self._handle(event)
                if state != "continue":
                    return state
            tail = parser.flush()
            if tail is not None:
                state = self._handle(tail)
                if state != "continue":
                    return state
        except httpx.HTTPError as exc:
            self._emit_error(classify_http_exception(exc))
            return "error"
        except httpx.StreamError as exc:
            self._emit_error(RequestError(RequestErrorKind.EVENT_STREAM, f"Event stream unreadable: {exc}", raw=exc))
            return "error"
        self._emit_error(RequestError(RequestErrorKind.STREAM_ENDED, "Event stream ended unexpectedly"))
        return "ended"

    def _handle(self, event: SseEvent) -> str:
        payload = event.data
        if not payload.strip():
            return "continue"
        if payload.strip() == STREAM_DONE_SENTINEL:
            return "done"
        try:
            value = self._adapter.validate_json(payload)
        except ValidationError as exc:
            log_event(
                _logger,
                "stream.decode_error",
                self._ctx,
                level=logging.WARNING,
                target_type=self._type_name,
                payload=payload[:200],
            )
            error = ProcessingError.conversion(payload, self._type_name, raw=exc)
            return "continue" if self._emit_error(error) else "cancelled"
        if not self._channel.send(StreamResult.ok(value)):
            return "cancelled"
        self._emitted += 1
        return "continue"

    def _emit_error(self, error: TransportError) -> bool:
        self._errors += 1
        return self._channel.send(StreamResult.failure(error))


__all__ = ["StreamDecoder"]
