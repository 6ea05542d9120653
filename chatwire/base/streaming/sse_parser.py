"""Incremental Server-Sent-Events line parser.

Follows the WHATWG event-stream framing: ``data`` lines accumulate (joined
with ``\\n``), a blank line dispatches the event, lines starting with ``:``
are comments, ``event``/``id``/``retry`` fields are tracked and unknown
fields are ignored. A single space after the colon is stripped.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class SseEvent:
    data: str
    event: str = "message"
    id: Optional[str] = None
    retry: Optional[int] = None


class SseParser:
    """Feed decoded lines (without terminators), get events back."""

    def __init__(self) -> None:
        self._data: List[str] = []
        self._event = ""
        self._last_id: Optional[str] = None
        self._retry: Optional[int] = None
        self._first_line = True

    def feed_line(self, line: str) -> Optional[SseEvent]:
        """Consume one line; return an event when the line completes one."""
        if self._first_line:
            self._first_line = False
            line = line.lstrip("\ufeff")
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None
        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if name == "data":
            self._data.append(value)
        elif name == "event":
            self._event = value
        elif name == "id":
            if "\0" not in value:
                self._last_id = value
        elif name == "retry" and value.isdigit():
            self._retry = int(value)
        return None

    def flush(self) -> Optional[SseEvent]:
        """Dispatch data still pending when the byte stream ends."""
        return self._dispatch() if self._data else None

    def iter_events(self, lines: Iterable[str]) -> Iterator[SseEvent]:
        for line in lines:
            event = self.feed_line(line)
            if event is not None:
                yield event
        tail = self.flush()
        if tail is not None:
            yield tail

    def _dispatch(self) -> Optional[SseEvent]:
        if not self._data:
            self._event = ""
            return None
        event = SseEvent(
            data="\n".join(self._data),
            event=self._event or "message",
            id=self._last_id,
            retry=self._retry,
        )
        self._data = []
        self._event = ""
        return event


__all__ = ["SseEvent", "SseParser"]
