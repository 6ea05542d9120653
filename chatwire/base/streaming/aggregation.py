"""Delta aggregation over decoded stream items.

Folds streamed chunks (anything with ``merge`` and ``model_copy``, i.e.
``ChatCompletionChunk`` or ``Completion``) into one aggregate. Items must be
fed in emission order; the first item is copied so inputs stay untouched.
"""
from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from ..dto import ChatCompletion, ChatCompletionChunk, Completion
from .channel import StreamReceiver

C = TypeVar("C", ChatCompletionChunk, Completion)


def accumulate_chunks(chunks: Iterable[C]) -> Optional[C]:
    """Merge ``chunks`` left to right; ``None`` for an empty iterable."""
    aggregate: Optional[C] = None
    for chunk in chunks:
        if aggregate is None:
            aggregate = chunk.model_copy(deep=True)
        else:
            aggregate.merge(chunk)
    return aggregate


def collect_completion(receiver: StreamReceiver[ChatCompletionChunk]) -> ChatCompletion:
    """Drain a chat stream and return the aggregated :class:`ChatCompletion`.

    Raises the first error carried by the stream. The receiver is closed on
    return or failure.
    """
    with receiver:
        aggregate = accumulate_chunks(receiver.values())
    if aggregate is None:
        return ChatCompletion()
    return aggregate.to_completion()


__all__ = ["accumulate_chunks", "collect_completion"]
