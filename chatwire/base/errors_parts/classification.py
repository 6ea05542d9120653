"""
Classification helpers mapping httpx failures and HTTP statuses onto the
transport error taxonomy.

The executor and the stream decoder both call these helpers so unary and
streaming calls report identical error values for identical failures.
"""
from __future__ import annotations

import time
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

import httpx

from .api_error import ApiError
from .error_kinds import ApiErrorKind, RequestErrorKind
from .request_error import RequestError

_HTTP_STATUS_MAP: Dict[int, ApiErrorKind] = {
    400: ApiErrorKind.BAD_REQUEST,
    401: ApiErrorKind.AUTHENTICATION,
    403: ApiErrorKind.PERMISSION_DENIED,
    404: ApiErrorKind.NOT_FOUND,
    409: ApiErrorKind.CONFLICT,
    422: ApiErrorKind.UNPROCESSABLE_ENTITY,
    429: ApiErrorKind.RATE_LIMIT,
}

DEFAULT_API_ERROR_MESSAGE = "No error message provided"


def api_error_kind_for_status(status: int) -> ApiErrorKind:
    """Map an HTTP status code to an :class:`ApiErrorKind`.

    Any 5xx status is ``INTERNAL_SERVER``; unmapped codes are ``OTHER``.
    """
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status <= 599:
        return ApiErrorKind.INTERNAL_SERVER
    return ApiErrorKind.OTHER


def classify_http_exception(exc: Exception) -> RequestError:
    """Classify an exception raised by httpx while sending or reading.

    Precedence:
        1. Timeouts (connect, read, write, pool).
        2. Connection failures, including the peer dropping the connection.
        3. Request construction problems (bad URL, unsupported scheme).
        4. Anything else is a generic transport failure.
    """
    if isinstance(exc, httpx.TimeoutException):
        return RequestError(RequestErrorKind.TIMEOUT, f"Request timed out: {exc}", raw=exc)
    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.RemoteProtocolError, httpx.ProxyError)):
        return RequestError(RequestErrorKind.CONNECTION, f"Connection failed: {exc}", raw=exc)
    if isinstance(exc, (httpx.UnsupportedProtocol, httpx.LocalProtocolError, httpx.InvalidURL)):
        return RequestError(RequestErrorKind.BUILD, f"Failed to build request: {exc}", raw=exc)
    return RequestError(RequestErrorKind.TRANSPORT, f"Transport failure: {exc}", raw=exc)


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a ``Retry-After`` header into seconds.

    Accepts delta-seconds (``"2"``) or an HTTP date. Returns ``None`` for a
    missing or unparseable header; negative values clamp to ``0``.
    """
    if not value:
        return None
    value = value.strip()
    try:
        return max(0.0, float(int(value)))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if when is None:  # pragma: no cover - older parsers returned None
        return None
    return max(0.0, when.timestamp() - time.time())


def _stringify(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def api_error_from_response(response: httpx.Response) -> ApiError:
    """Build an :class:`ApiError` from a non-2xx response.

    The response body must already be read. A JSON body's ``error`` object
    supplies ``message``, ``code`` and ``type``; a non-JSON body falls back to
    the reason phrase.
    """
    status = response.status_code
    kind = api_error_kind_for_status(status)
    retry_after = parse_retry_after(response.headers.get("retry-after"))
    try:
        payload = response.json()
    except ValueError:
        payload = None

    code = err_type = None
    if isinstance(payload, dict):
        err = payload.get("error", payload)
        if isinstance(err, dict):
            message = _stringify(err.get("message")) or DEFAULT_API_ERROR_MESSAGE
            code = _stringify(err.get("code"))
            err_type = _stringify(err.get("type"))
        else:
            message = _stringify(err) or DEFAULT_API_ERROR_MESSAGE
    else:
        message = response.reason_phrase or f"HTTP {status}"
    return ApiError(
        kind=kind,
        status=status,
        message=message,
        code=code,
        type=err_type,
        retry_after=retry_after,
    )


__all__ = [
    "api_error_kind_for_status",
    "api_error_from_response",
    "classify_http_exception",
    "parse_retry_after",
    "DEFAULT_API_ERROR_MESSAGE",
]
