"""Shared testing helpers for the chatwire suite.

Exports:
    - assert_true(condition, message): explicit AssertionError with context.
    - sse(*payloads): encode payloads as an event-stream body.
    - sse_response(body, status=200, content_type=...): streaming response.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, Union

import httpx

EVENT_STREAM = "text/event-stream"


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with ``message`` if ``condition`` is false."""
    if not condition:
        raise AssertionError(message)


def sse(*payloads: Any) -> bytes:
    """Encode each payload as one ``data:`` event.

    Dicts are JSON encoded; strings are sent verbatim (``"[DONE]"``,
    malformed JSON, ``""`` for an empty event).
    """
    parts = []
    for payload in payloads:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        parts.append(f"data: {text}\n\n")
    return "".join(parts).encode("utf-8")


def chunk(content: str | None = None, index: int = 0, **delta: Any) -> dict:
    """Minimal chat completion chunk dict with one choice."""
    if content is not None:
        delta["content"] = content
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "created": 1,
        "model": "m",
        "choices": [{"index": index, "delta": delta, "finish_reason": None}],
    }


def sse_response(
    body: Union[bytes, Iterable[bytes]],
    status: int = 200,
    content_type: str = EVENT_STREAM,
) -> httpx.Response:
    return httpx.Response(status, headers={"content-type": content_type}, content=body)
