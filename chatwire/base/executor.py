"""Resilient executor: send one request with interceptors and retries.

Purpose:
    Turn a :class:`RequestDescriptor` into a successful ``httpx.Response`` or
    a classified :class:`TransportError`.

Algorithm (per call):
    1. Take a ``(config, client)`` snapshot; the whole call uses it even if
       the configuration changes concurrently.
    2. Run request interceptors once: global chain, then module chain.
    3. Send. Transport failures are classified with
       :func:`classify_http_exception`; non-2xx responses are read and turned
       into :class:`ApiError`.
    4. Retryable errors (timeouts, connection failures, rate limits, server
       errors) sleep per :class:`RetryConfig` and try again while the budget
       lasts.
    5. Success runs response interceptors (module chain, then global) and
       returns the response. Terminal errors run error interceptors (module
       chain, then global) and the result is raised.

Failure modes:
    Only ``TransportError`` subclasses are raised for network, status and
    interceptor failures. Exceptions of other types raised by interceptor
    hooks propagate unchanged.

Concurrency:
    One executor may serve many threads; the only shared mutable state is the
    :class:`ClientHolder`, which is reader/writer locked.
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Optional, Union

import httpx

from ..config import Config
from .errors import (
    RequestError,
    RequestErrorKind,
    TransportError,
    api_error_from_response,
    classify_http_exception,
)
from .http import ClientHolder
from .interceptors import InterceptorChain
from .logging import LogContext, get_logger, normalized_log_event
from .request import RequestDescriptor
from .resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig, max_attempts

_logger = get_logger("chatwire.executor")

_SendOutcome = Union[httpx.Response, TransportError]


def _elapsed_ms(started: float) -> float:
    return (time.monotonic() - started) * 1000.0


class ResilientExecutor:
    """Executes request descriptors against a shared, reconfigurable client."""

    def __init__(self, config: Config, retry_config: RetryConfig = DEFAULT_RETRY_CONFIG) -> None:
        self._holder = ClientHolder(config)
        self.retry_config = retry_config

    @property
    def config(self) -> Config:
        """Current configuration snapshot (treat as read-only)."""
        return self._holder.config

    def update_config(self, fn: Callable[[Config], Optional[Config]]) -> Config:
        """Apply ``fn`` to a copy of the configuration and publish the result.

        ``fn`` may read ``self.config``; it runs outside the client lock. The HTTP client is rebuilt only if timeouts, proxy, user agent or
        transport changed. In-flight calls keep their snapshot.
        """
        return self._holder.update(fn)

    def close(self) -> None:
        self._holder.close()

    def execute(
        self,
        request: RequestDescriptor,
        *,
        module_chain: Optional[InterceptorChain] = None,
        stream: bool = False,
        module: Optional[str] = None,
    ) -> httpx.Response:
        """Send ``request`` and return the successful response.

        With ``stream=True`` the response body is left unread and the caller
        owns closing it.

        Raises:
            TransportError: the classified terminal failure after error
                interceptors ran.
        """
        snapshot = self._holder.snapshot()
        global_chain = snapshot.config.interceptors
        ctx = LogContext(module=module, method=request.method, url=request.url, request_id=uuid.uuid4().hex[:12])

        try:
            request = global_chain.run_request(request)
            if module_chain is not None:
                request = module_chain.run_request(request)
        except TransportError as exc:
            raise self._fail(exc, global_chain, module_chain, ctx, attempt=0) from None

        attempts = max_attempts(request.retry_count, snapshot.config.retry_count)
        for attempt in range(1, attempts + 1):
            started = time.monotonic()
            normalized_log_event(_logger, "http.request", ctx, phase="send", attempt=attempt, level=logging.DEBUG)
            outcome = self._send(snapshot.client, request, stream)

            if isinstance(outcome, httpx.Response):
                response = outcome
                try:
                    if module_chain is not None:
                        response = module_chain.run_response(response)
                    response = global_chain.run_response(response)
                except TransportError as exc:
                    response.close()
                    raise self._fail(exc, global_chain, module_chain, ctx, attempt=attempt) from None
                normalized_log_event(
                    _logger,
                    "http.response",
                    ctx,
                    phase="complete",
                    attempt=attempt,
                    status=response.status_code,
                    elapsed_ms=_elapsed_ms(started),
                    stream=stream,
                )
                return response

            error = outcome
            if error.is_retryable() and attempt < attempts:
                delay = self.retry_config.delay_for(error, attempt)
                normalized_log_event(
                    _logger,
                    "http.retry",
                    ctx,
                    phase="retry",
                    attempt=attempt,
                    error_code=error.error_code,
                    status=error.status_code,
                    elapsed_ms=_elapsed_ms(started),
                    level=logging.WARNING,
                    delay_s=round(delay, 3),
                    max_attempts=attempts,
                )
                if self.retry_config.attempt_logger:
                    self.retry_config.attempt_logger(
                        attempt=attempt, max_attempts=attempts, delay=delay, error=error
                    )
                time.sleep(delay)
                continue

            if self.retry_config.attempt_logger:
                self.retry_config.attempt_logger(attempt=attempt, max_attempts=attempts, delay=None, error=error)
            raise self._fail(error, global_chain, module_chain, ctx, attempt=attempt)

        # max_attempts() is always >= 1, so the loop returns or raises.
        raise RuntimeError("executor: retry loop exited without an outcome")  # pragma: no cover

    def fail(self, error: TransportError, module_chain: Optional[InterceptorChain] = None) -> TransportError:
        """Run ``error`` through the error interceptors and return the result.

        Used by callers that detect a terminal failure after :meth:`execute`
        returned (for example an unexpected stream content type).
        """
        global_chain = self._holder.snapshot().config.interceptors
        return self._fail(error, global_chain, module_chain, None, attempt=None)

    def _fail(
        self,
        error: TransportError,
        global_chain: InterceptorChain,
        module_chain: Optional[InterceptorChain],
        ctx: Optional[LogContext],
        *,
        attempt: Optional[int],
    ) -> TransportError:
        final = error
        if module_chain is not None:
            final = module_chain.run_error(final)
        final = global_chain.run_error(final)
        normalized_log_event(
            _logger,
            "http.error",
            ctx,
            phase="error",
            attempt=attempt,
            error_code=final.error_code,
            status=final.status_code,
            level=logging.ERROR,
            message=final.message,
        )
        return final

    def _send(self, client: httpx.Client, request: RequestDescriptor, stream: bool) -> _SendOutcome:
        try:
            http_request = request.to_httpx(client)
        except (TypeError, ValueError) as exc:
            return RequestError(RequestErrorKind.BUILD, f"Failed to encode request: {exc}", raw=exc)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return classify_http_exception(exc)

        try:
            response = client.send(http_request, stream=stream)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return classify_http_exception(exc)

        if response.is_success:
            return response
        try:
            response.read()
        except httpx.HTTPError as exc:
            return classify_http_exception(exc)
        finally:
            response.close()
        return api_error_from_response(response)


__all__ = ["ResilientExecutor"]
