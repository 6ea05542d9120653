"""Streamed chat completion chunks and the delta merge rules.

Merge semantics (``base.merge(incoming)``, mutating ``base``):

- ``content`` and ``reasoning`` append; an absent incoming value is a no-op.
- ``role`` and ``refusal`` are replaced whenever the incoming value is
  present.
- tool calls merge per :func:`merge_tool_calls`.
- ``extra_fields`` deep-merge per :func:`merge_json_values`.
- choices only merge with choices of the same ``index``.

Merging never raises: a partial chunk simply leaves fields absent.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..json_merge import append_text, merge_extra_fields
from .chat_completion import ChatCompletion, ChatCompletionMessage, FinalChoice
from .extra_fields_model import ExtraFieldsModel
from .tool_call import ToolCall, merge_tool_calls
from .usage import CompletionUsage


class ChoiceDelta(ExtraFieldsModel):
    """Partial message carried by one streamed choice."""

    wire_aliases: ClassVar[Dict[str, str]] = {"reasoning_content": "reasoning"}

    content: Optional[str] = None
    refusal: Optional[str] = None
    reasoning: Optional[str] = None
    role: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None

    def merge(self, other: "ChoiceDelta") -> None:
        self.content = append_text(self.content, other.content)
        self.reasoning = append_text(self.reasoning, other.reasoning)
        if other.role is not None:
            self.role = other.role
        if other.refusal is not None:
            self.refusal = other.refusal
        self.tool_calls = merge_tool_calls(self.tool_calls, other.tool_calls)
        self.extra_fields = merge_extra_fields(self.extra_fields, other.extra_fields)


class StreamChoice(BaseModel):
    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None
    logprobs: Optional[Any] = None

    @field_validator("delta", mode="before")
    @classmethod
    def _default_delta(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def finished(self) -> bool:
        return self.finish_reason is not None

    def merge(self, other: "StreamChoice") -> None:
        """Fold ``other`` into this choice; a different index is ignored."""
        if other.index != self.index:
            return
        if other.finish_reason is not None:
            self.finish_reason = other.finish_reason
        if other.logprobs is not None:
            self.logprobs = other.logprobs
        self.delta.merge(other.delta)

    def to_final(self) -> FinalChoice:
        return FinalChoice(
            index=self.index,
            finish_reason=self.finish_reason or "stop",
            message=ChatCompletionMessage.from_delta(self.delta),
            logprobs=self.logprobs,
        )


class ChatCompletionChunk(ExtraFieldsModel):
    """One server-sent event of a streaming chat completion."""

    id: str = "0"
    created: int = 0
    model: str = ""
    object: str = "chat.completion.chunk"
    choices: List[StreamChoice] = Field(default_factory=list)
    service_tier: Optional[str] = None
    system_fingerprint: Optional[str] = None
    usage: Optional[CompletionUsage] = None

    @field_validator("id", mode="before")
    @classmethod
    def _default_id(cls, value: Any) -> Any:
        return "0" if value is None else value

    @field_validator("choices", mode="before")
    @classmethod
    def _default_choices(cls, value: Any) -> Any:
        return [] if value is None else value

    def choice(self, index: int = 0) -> Optional[StreamChoice]:
        return next((c for c in self.choices if c.index == index), None)

    def content(self, index: int = 0) -> Optional[str]:
        choice = self.choice(index)
        return choice.delta.content if choice else None

    def merge(self, other: "ChatCompletionChunk") -> None:
        """Fold ``other`` into this chunk, routing choices by index."""
        if self.id in ("", "0") and other.id not in ("", "0"):
            self.id = other.id
        if not self.created:
            self.created = other.created
        if not self.model:
            self.model = other.model
        if other.service_tier is not None:
            self.service_tier = other.service_tier
        if other.system_fingerprint is not None:
            self.system_fingerprint = other.system_fingerprint
        if other.usage is not None:
            self.usage = other.usage.model_copy(deep=True)
        for incoming in other.choices:
            target = self.choice(incoming.index)
            if target is None:
                self.choices.append(incoming.model_copy(deep=True))
            else:
                target.merge(incoming)
        self.choices.sort(key=lambda c: c.index)
        self.extra_fields = merge_extra_fields(self.extra_fields, other.extra_fields)

    def to_completion(self) -> ChatCompletion:
        """Convert an aggregated chunk into a :class:`ChatCompletion`."""
        return ChatCompletion(
            id=self.id,
            created=self.created,
            model=self.model,
            object="chat.completion",
            choices=[choice.to_final() for choice in self.choices],
            service_tier=self.service_tier,
            system_fingerprint=self.system_fingerprint,
            usage=self.usage.model_copy(deep=True) if self.usage else None,
            extra_fields=dict(self.extra_fields) if self.extra_fields else None,
        )


__all__ = ["ChoiceDelta", "StreamChoice", "ChatCompletionChunk"]
