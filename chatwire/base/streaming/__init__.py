"""Streaming support: SSE framing, bounded channel, decoder and aggregation."""

from .sse_parser import SseEvent, SseParser
from .stream_result import StreamResult
from .channel import StreamChannel, StreamReceiver
from .decoder import StreamDecoder
from .aggregation import accumulate_chunks, collect_completion

__all__ = [
    "SseEvent",
    "SseParser",
    "StreamResult",
    "StreamChannel",
    "StreamReceiver",
    "StreamDecoder",
    "accumulate_chunks",
    "collect_completion",
]
