"""
Error kind enumerations for the transport taxonomy.

Three families mirror where a failure is detected: before a response exists
(request level), in a non-2xx response (API level), or while turning a
response body into Python objects (processing level). Values are stable
snake_case strings used in structured logs.
"""
from __future__ import annotations

from enum import Enum


class RequestErrorKind(str, Enum):
    """Failures raised while building, sending or reading a request."""

    TIMEOUT = "timeout"
    CONNECTION = "connection"
    TRANSPORT = "transport"
    BUILD = "build"
    INVALID_CONTENT_TYPE = "invalid_content_type"
    STREAM_ENDED = "stream_ended"
    EVENT_STREAM = "event_stream"


class ApiErrorKind(str, Enum):
    """Status-code classification of non-2xx responses."""

    BAD_REQUEST = "bad_request"
    AUTHENTICATION = "authentication"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    RATE_LIMIT = "rate_limit"
    INTERNAL_SERVER = "internal_server"
    OTHER = "other"


class ProcessingErrorKind(str, Enum):
    """Failures turning a successful response body into typed values."""

    DESERIALIZATION = "deserialization"
    CONVERSION = "conversion"
    TEXT_READ = "text_read"
    UNKNOWN = "unknown"


__all__ = ["RequestErrorKind", "ApiErrorKind", "ProcessingErrorKind"]
