"""Errors parts package public surface.

Re-exports the individual taxonomy components. Prefer importing from
``chatwire.base.errors`` for the stable surface.
"""

from .error_kinds import ApiErrorKind, ProcessingErrorKind, RequestErrorKind
from .transport_error import TransportError
from .request_error import RequestError
from .api_error import ApiError
from .processing_error import ProcessingError
from .config_error import ConfigError
from .classification import (
    api_error_from_response,
    api_error_kind_for_status,
    classify_http_exception,
    parse_retry_after,
)

__all__ = [
    "ApiErrorKind",
    "ProcessingErrorKind",
    "RequestErrorKind",
    "TransportError",
    "RequestError",
    "ApiError",
    "ProcessingError",
    "ConfigError",
    "api_error_from_response",
    "api_error_kind_for_status",
    "classify_http_exception",
    "parse_retry_after",
]
