"""Transport error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``chatwire.base.errors_parts`` behind a stable import path.
"""

from .errors_parts import (
    ApiError,
    ApiErrorKind,
    ConfigError,
    ProcessingError,
    ProcessingErrorKind,
    RequestError,
    RequestErrorKind,
    TransportError,
    api_error_from_response,
    api_error_kind_for_status,
    classify_http_exception,
    parse_retry_after,
)

__all__ = [
    "ApiError",
    "ApiErrorKind",
    "ConfigError",
    "ProcessingError",
    "ProcessingErrorKind",
    "RequestError",
    "RequestErrorKind",
    "TransportError",
    "api_error_from_response",
    "api_error_kind_for_status",
    "classify_http_exception",
    "parse_retry_after",
]
