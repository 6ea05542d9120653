"""Request parameter objects for the module wrappers.

Each params object carries the JSON body fields of one call plus optional
per-request transport overrides (extra headers, query, body, timeout, retry
budget, user agent). Setters return ``self`` for chaining; ``None`` values
are never written to the body.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from ..base.request import RequestBuilder
from ..config import Config

P = TypeVar("P", bound="RequestParams")


class RequestParams:
    """Body fields plus per-request overrides shared by every module."""

    def __init__(self, **fields: Any) -> None:
        self.fields: Dict[str, Any] = {k: v for k, v in fields.items() if v is not None}
        self.extra_headers: Dict[str, str] = {}
        self.extra_query: Dict[str, str] = {}
        self.extra_body: Dict[str, Any] = {}
        self.timeout_seconds: Optional[float] = None
        self.retry: Optional[int] = None
        self.user_agent_value: Optional[str] = None

    def set(self: P, key: str, value: Any) -> P:
        """Set an arbitrary body field; ``None`` removes it."""
        if value is None:
            self.fields.pop(key, None)
        else:
            self.fields[key] = value
        return self

    def header(self: P, name: str, value: str) -> P:
        self.extra_headers[name] = value
        return self

    def query(self: P, name: str, value: Any) -> P:
        self.extra_query[name] = str(value)
        return self

    def body(self: P, key: str, value: Any) -> P:
        """Add a body field outside the typed setters (vendor extensions)."""
        self.extra_body[key] = value
        return self

    def timeout(self: P, seconds: float) -> P:
        self.timeout_seconds = seconds
        return self

    def retry_count(self: P, count: int) -> P:
        self.retry = count
        return self

    def user_agent(self: P, value: str) -> P:
        self.user_agent_value = value
        return self

    def apply(self, builder: RequestBuilder) -> None:
        """Write fields and overrides onto ``builder``."""
        builder.body_fields(self.fields)
        builder.body_fields(self.extra_body)
        builder.headers(self.extra_headers)
        for name, value in self.extra_query.items():
            builder.query(name, value)
        if self.user_agent_value:
            builder.header("User-Agent", self.user_agent_value)
        builder.timeout(self.timeout_seconds)
        builder.retry_count(self.retry)

    def mutator(self, **forced: Any):
        """Return a ``(config, builder)`` callback applying these params.

        ``forced`` body fields (e.g. ``stream``) are written last.
        """

        def mutate(config: Config, builder: RequestBuilder) -> None:
            self.apply(builder)
            builder.body_fields(forced)

        return mutate


class ChatParams(RequestParams):
    """Parameters of ``POST /chat/completions``."""

    def __init__(self, model: str, messages: Sequence[Mapping[str, Any]], **fields: Any) -> None:
        super().__init__(model=model, messages=list(messages), **fields)

    def temperature(self, value: float) -> "ChatParams":
        return self.set("temperature", value)

    def top_p(self, value: float) -> "ChatParams":
        return self.set("top_p", value)

    def max_tokens(self, value: int) -> "ChatParams":
        return self.set("max_tokens", value)

    def max_completion_tokens(self, value: int) -> "ChatParams":
        return self.set("max_completion_tokens", value)

    def n(self, value: int) -> "ChatParams":
        return self.set("n", value)

    def stop(self, value: Union[str, List[str]]) -> "ChatParams":
        return self.set("stop", value)

    def presence_penalty(self, value: float) -> "ChatParams":
        return self.set("presence_penalty", value)

    def frequency_penalty(self, value: float) -> "ChatParams":
        return self.set("frequency_penalty", value)

    def seed(self, value: int) -> "ChatParams":
        return self.set("seed", value)

    def user(self, value: str) -> "ChatParams":
        return self.set("user", value)

    def tools(self, tools: Sequence[Mapping[str, Any]]) -> "ChatParams":
        return self.set("tools", list(tools))

    def tool_choice(self, value: Union[str, Mapping[str, Any]]) -> "ChatParams":
        return self.set("tool_choice", value)

    def parallel_tool_calls(self, value: bool) -> "ChatParams":
        return self.set("parallel_tool_calls", value)

    def response_format(self, value: Mapping[str, Any]) -> "ChatParams":
        return self.set("response_format", dict(value))

    def logprobs(self, value: bool, top_logprobs: Optional[int] = None) -> "ChatParams":
        self.set("logprobs", value)
        return self.set("top_logprobs", top_logprobs)

    def reasoning_effort(self, value: str) -> "ChatParams":
        return self.set("reasoning_effort", value)

    def include_usage(self, value: bool = True) -> "ChatParams":
        """Ask streaming responses to carry usage in their final chunk."""
        return self.set("stream_options", {"include_usage": value})


class CompletionParams(RequestParams):
    """Parameters of ``POST /completions``."""

    def __init__(self, model: str, prompt: Union[str, List[str]], **fields: Any) -> None:
        super().__init__(model=model, prompt=prompt, **fields)

    def max_tokens(self, value: int) -> "CompletionParams":
        return self.set("max_tokens", value)

    def temperature(self, value: float) -> "CompletionParams":
        return self.set("temperature", value)

    def top_p(self, value: float) -> "CompletionParams":
        return self.set("top_p", value)

    def stop(self, value: Union[str, List[str]]) -> "CompletionParams":
        return self.set("stop", value)

    def echo(self, value: bool) -> "CompletionParams":
        return self.set("echo", value)

    def suffix(self, value: str) -> "CompletionParams":
        return self.set("suffix", value)

    def best_of(self, value: int) -> "CompletionParams":
        return self.set("best_of", value)


class EmbeddingParams(RequestParams):
    """Parameters of ``POST /embeddings``."""

    def __init__(self, model: str, input: Union[str, List[str]], **fields: Any) -> None:  # noqa: A002 - wire name
        super().__init__(model=model, input=input, **fields)

    def dimensions(self, value: int) -> "EmbeddingParams":
        return self.set("dimensions", value)

    def encoding_format(self, value: str) -> "EmbeddingParams":
        """``"float"`` (default) or ``"base64"``."""
        return self.set("encoding_format", value)

    def user(self, value: str) -> "EmbeddingParams":
        return self.set("user", value)


class ModelsParams(RequestParams):
    """Overrides for the body-less ``/models`` calls."""


__all__ = [
    "RequestParams",
    "ChatParams",
    "CompletionParams",
    "EmbeddingParams",
    "ModelsParams",
]
