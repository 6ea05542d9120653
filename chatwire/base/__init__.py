"""
chatwire base layer.

Leaf building blocks of the transport: the error taxonomy, interceptors,
request descriptors and structured logging. Heavier components (executor,
stream decoder, response models) are imported from their own modules:

- ``chatwire.base.executor`` - :class:`ResilientExecutor`
- ``chatwire.base.streaming`` - SSE decoding and aggregation
- ``chatwire.base.dto`` - pydantic response models
"""

from .errors import (
    ApiError,
    ApiErrorKind,
    ConfigError,
    ProcessingError,
    ProcessingErrorKind,
    RequestError,
    RequestErrorKind,
    TransportError,
)
from .interceptors import Interceptor, InterceptorChain, InterceptorPriority
from .request import RequestBuilder, RequestDescriptor

__all__ = [
    "ApiError",
    "ApiErrorKind",
    "ConfigError",
    "ProcessingError",
    "ProcessingErrorKind",
    "RequestError",
    "RequestErrorKind",
    "TransportError",
    "Interceptor",
    "InterceptorChain",
    "InterceptorPriority",
    "RequestBuilder",
    "RequestDescriptor",
]
