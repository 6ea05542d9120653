"""Legacy text completion models (``/completions``)."""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field

from ..json_merge import append_text, merge_extra_fields
from .extra_fields_model import ExtraFieldsModel
from .usage import CompletionUsage


class CompletionChoice(ExtraFieldsModel):
    wire_aliases: ClassVar[Dict[str, str]] = {"reasoning_content": "reasoning"}

    index: int = 0
    text: str = ""
    finish_reason: Optional[str] = None
    logprobs: Optional[Any] = None
    reasoning: Optional[str] = None

    def merge(self, other: "CompletionChoice") -> None:
        if other.index != self.index:
            return
        self.text += other.text
        self.reasoning = append_text(self.reasoning, other.reasoning)
        if other.finish_reason is not None:
            self.finish_reason = other.finish_reason
        if other.logprobs is not None:
            self.logprobs = other.logprobs
        self.extra_fields = merge_extra_fields(self.extra_fields, other.extra_fields)


class Completion(ExtraFieldsModel):
    """A text completion, or one streamed chunk of it."""

    id: str = "0"
    created: int = 0
    model: str = ""
    object: str = "text_completion"
    choices: List[CompletionChoice] = Field(default_factory=list)
    system_fingerprint: Optional[str] = None
    usage: Optional[CompletionUsage] = None

    def text(self, index: int = 0) -> Optional[str]:
        choice = next((c for c in self.choices if c.index == index), None)
        return choice.text if choice else None

    def merge(self, other: "Completion") -> None:
        """Fold a streamed completion chunk into this one."""
        if self.id in ("", "0"):
            self.id = other.id
        if not self.model:
            self.model = other.model
        if not self.created:
            self.created = other.created
        if other.usage is not None:
            self.usage = other.usage.model_copy(deep=True)
        for incoming in other.choices:
            target = next((c for c in self.choices if c.index == incoming.index), None)
            if target is None:
                self.choices.append(incoming.model_copy(deep=True))
            else:
                target.merge(incoming)
        self.extra_fields = merge_extra_fields(self.extra_fields, other.extra_fields)


__all__ = ["CompletionChoice", "Completion"]
