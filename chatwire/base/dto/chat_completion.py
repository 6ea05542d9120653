"""Non-streamed chat completion models.

A streamed response converts into these same shapes once aggregated (see
``ChatCompletionChunk.to_completion``), so callers handle one message type
regardless of the response mode.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .extra_fields_model import ExtraFieldsModel
from .tool_call import ToolCall
from .usage import CompletionUsage

if TYPE_CHECKING:  # pragma: no cover
    from .chat_chunk import ChoiceDelta


class ChatCompletionMessage(ExtraFieldsModel):
    """A complete assistant message."""

    wire_aliases: ClassVar[Dict[str, str]] = {"reasoning_content": "reasoning"}

    role: str = "assistant"
    content: Optional[str] = None
    refusal: Optional[str] = None
    reasoning: Optional[str] = None
    annotations: Optional[List[Any]] = None
    tool_calls: Optional[List[ToolCall]] = None

    @field_validator("role", mode="before")
    @classmethod
    def _default_role(cls, value: Any) -> Any:
        return value or "assistant"

    @classmethod
    def from_delta(cls, delta: "ChoiceDelta") -> "ChatCompletionMessage":
        """Build a message from an aggregated delta."""
        return cls(
            role=delta.role or "assistant",
            content=delta.content,
            refusal=delta.refusal,
            reasoning=delta.reasoning,
            tool_calls=[call.model_copy(deep=True) for call in delta.tool_calls] if delta.tool_calls else None,
            extra_fields=dict(delta.extra_fields) if delta.extra_fields else None,
        )


class FinalChoice(BaseModel):
    index: int = 0
    finish_reason: str = "stop"
    message: ChatCompletionMessage = Field(default_factory=ChatCompletionMessage)
    logprobs: Optional[Any] = None

    @field_validator("finish_reason", mode="before")
    @classmethod
    def _default_finish_reason(cls, value: Any) -> Any:
        return value or "stop"


class ChatCompletion(ExtraFieldsModel):
    """Response of a non-streaming chat completion call."""

    id: str = "0"
    created: int = 0
    model: str = ""
    object: str = "chat.completion"
    choices: List[FinalChoice] = Field(default_factory=list)
    service_tier: Optional[str] = None
    system_fingerprint: Optional[str] = None
    usage: Optional[CompletionUsage] = None

    def choice(self, index: int = 0) -> Optional[FinalChoice]:
        return next((c for c in self.choices if c.index == index), None)

    def content(self, index: int = 0) -> Optional[str]:
        """Text content of choice ``index``, if any."""
        choice = self.choice(index)
        return choice.message.content if choice else None


__all__ = ["ChatCompletionMessage", "FinalChoice", "ChatCompletion"]
