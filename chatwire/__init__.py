"""chatwire package

Client library for OpenAI-compatible chat/completions HTTP services.

Purpose:
    Provide a resilient transport (retries with error-aware backoff, a
    priority-ordered interceptor chain, an SSE stream decoder) and typed
    response models whose streamed chunks aggregate into complete messages.

Public API (re-exported):
    - Client: :class:`ChatwireClient`
    - Configuration: :class:`Config`, :class:`HttpConfig`, :func:`config_from_env`
    - Params and message helpers: :class:`ChatParams`, :class:`CompletionParams`,
      :class:`EmbeddingParams`, :class:`ModelsParams`, ``messages``
    - Interceptors: :class:`Interceptor`, :class:`InterceptorChain`,
      :class:`InterceptorPriority`
    - Errors: :class:`TransportError` and its subclasses
    - Streaming: :class:`StreamReceiver`, :class:`StreamResult`,
      :func:`accumulate_chunks`, :func:`collect_completion`
"""

from .base.dto import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionMessage,
    ChoiceDelta,
    Completion,
    EmbeddingResponse,
    Function,
    Model,
    ModelsData,
    StreamChoice,
    ToolCall,
)
from .base.errors import (
    ApiError,
    ApiErrorKind,
    ConfigError,
    ProcessingError,
    ProcessingErrorKind,
    RequestError,
    RequestErrorKind,
    TransportError,
)
from .base.executor import ResilientExecutor
from .base.interceptors import Interceptor, InterceptorChain, InterceptorPriority
from .base.request import RequestBuilder, RequestDescriptor
from .base.resilience import RetryConfig
from .base.streaming import StreamReceiver, StreamResult, accumulate_chunks, collect_completion
from .client import ChatwireClient
from .config import Config, HttpConfig, config_from_env
from .modules import ChatParams, CompletionParams, EmbeddingParams, ModelsParams, messages
from .transport import Transport

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatwireClient",
    "Config",
    "HttpConfig",
    "config_from_env",
    "ChatParams",
    "CompletionParams",
    "EmbeddingParams",
    "ModelsParams",
    "messages",
    "Interceptor",
    "InterceptorChain",
    "InterceptorPriority",
    "RequestBuilder",
    "RequestDescriptor",
    "ResilientExecutor",
    "RetryConfig",
    "Transport",
    "TransportError",
    "RequestError",
    "RequestErrorKind",
    "ApiError",
    "ApiErrorKind",
    "ProcessingError",
    "ProcessingErrorKind",
    "ConfigError",
    "StreamReceiver",
    "StreamResult",
    "accumulate_chunks",
    "collect_completion",
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChatCompletionMessage",
    "ChoiceDelta",
    "StreamChoice",
    "ToolCall",
    "Function",
    "Completion",
    "EmbeddingResponse",
    "Model",
    "ModelsData",
]
