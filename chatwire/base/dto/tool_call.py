"""Tool-call models and the tool-call merge rules.

Streaming providers send a tool call as a sequence of fragments: the id and
name usually arrive once, the JSON arguments arrive in many pieces. Every
fragment is appended, never replaced.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Function(BaseModel):
    """Function part of a tool call: id, name and JSON argument text."""

    id: str = ""
    name: str = ""
    arguments: str = ""

    @field_validator("id", "name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("arguments", mode="before")
    @classmethod
    def _arguments_to_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return value if isinstance(value, str) else str(value)

    def merge(self, other: "Function") -> None:
        self.id += other.id
        self.name += other.name
        self.arguments += other.arguments

    def parsed_arguments(self) -> Any:
        """Decode the accumulated arguments (``{}`` when empty).

        Raises:
            ValueError: when the arguments are not valid JSON yet.
        """
        if not self.arguments.strip():
            return {}
        return json.loads(self.arguments)


class ToolCall(BaseModel):
    """One (possibly partial) tool call.

    A top-level ``id`` on the wire is folded into ``function.id`` when the
    function does not carry one.
    """

    index: int = 0
    type: str = "function"
    function: Function = Field(default_factory=Function)

    @model_validator(mode="before")
    @classmethod
    def _fold_call_id(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "id" not in data:
            return data
        data = dict(data)
        call_id = data.pop("id")
        function = data.get("function")
        if function is None:
            data["function"] = {"id": call_id}
        elif isinstance(function, dict) and not function.get("id"):
            data["function"] = {**function, "id": call_id}
        return data

    @field_validator("index", mode="before")
    @classmethod
    def _default_index(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: Any) -> Any:
        return value or "function"

    @property
    def id(self) -> str:
        return self.function.id

    def merge(self, other: "ToolCall") -> None:
        """Append ``other``'s function fragments; the index is kept."""
        self.function.merge(other.function)


def merge_tool_calls(
    existing: Optional[List[ToolCall]], incoming: Optional[List[ToolCall]]
) -> Optional[List[ToolCall]]:
    """Merge incoming tool-call deltas into ``existing`` (mutated in place).

    - No incoming deltas: ``existing`` is returned unchanged.
    - No existing calls: a copy of the incoming list is adopted.
    - A single incoming delta with index 0 while calls already exist is a
      continuation of the last existing call. Some providers reuse index 0
      for "the active call", so a genuinely new call arriving as index 0
      is merged into the previous one.
    - Otherwise deltas are matched by index; unmatched ones are appended.
    """
    if not incoming:
        return existing
    if not existing:
        return [call.model_copy(deep=True) for call in incoming]
    if len(incoming) == 1 and incoming[0].index == 0:
        existing[-1].merge(incoming[0])
        return existing
    for delta in incoming:
        target = next((call for call in existing if call.index == delta.index), None)
        if target is None:
            existing.append(delta.model_copy(deep=True))
        else:
            target.merge(delta)
    return existing


__all__ = ["Function", "ToolCall", "merge_tool_calls"]
