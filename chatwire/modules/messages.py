"""Helpers building chat message dicts in the wire shape."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

Content = Union[str, Sequence[Mapping[str, Any]]]


def _content(content: Content) -> Any:
    return content if isinstance(content, str) else [dict(part) for part in content]


def system(content: Content, name: Optional[str] = None) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "system", "content": _content(content)}
    if name:
        message["name"] = name
    return message


def user(content: Content, name: Optional[str] = None) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "user", "content": _content(content)}
    if name:
        message["name"] = name
    return message


def assistant(
    content: Optional[Content] = None,
    tool_calls: Optional[Sequence[Mapping[str, Any]]] = None,
) -> Dict[str, Any]:
    """Assistant turn; ``tool_calls`` use the wire shape (id/type/function)."""
    message: Dict[str, Any] = {"role": "assistant", "content": _content(content) if content is not None else None}
    if tool_calls:
        message["tool_calls"] = [dict(call) for call in tool_calls]
    return message


def tool(tool_call_id: str, content: Content) -> Dict[str, Any]:
    return {"role": "tool", "tool_call_id": tool_call_id, "content": _content(content)}


def text_part(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


def image_part(url: str, detail: Optional[str] = None) -> Dict[str, Any]:
    image: Dict[str, Any] = {"url": url}
    if detail:
        image["detail"] = detail
    return {"type": "image_url", "image_url": image}


__all__: List[str] = ["system", "user", "assistant", "tool", "text_part", "image_part"]
