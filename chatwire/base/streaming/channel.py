"""Bounded single-producer channel and its receiving end.

The producer blocks (in short polls) while the queue is full and gives up as
soon as the receiver is closed or garbage collected. Dropping the receiver is
therefore the only cancellation signal a stream needs.
"""
from __future__ import annotations

import queue
import weakref
from typing import Generic, Iterator, Optional, TypeVar

from ..cancellation import CancellationToken
from .stream_result import StreamResult

T = TypeVar("T")

_END = object()


class StreamChannel(Generic[T]):
    """Queue plus cancellation token shared by a producer and a receiver.

    The channel never references its receiver, so the producer side cannot
    keep a dropped receiver alive.
    """

    def __init__(self, capacity: int, poll_seconds: float) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=capacity)
        self._poll_seconds = poll_seconds
        self.token = CancellationToken()

    @property
    def closed(self) -> bool:
        return self.token.cancelled

    def open_receiver(self) -> StreamReceiver[T]:
        """Create the receiving end; collecting it cancels the channel."""
        receiver: StreamReceiver[T] = StreamReceiver(self._queue, self.token)
        weakref.finalize(receiver, self.token.cancel, "receiver dropped")
        return receiver

    def send(self, item: StreamResult[T]) -> bool:
        """Enqueue ``item``; return ``False`` once the receiver is closed."""
        return self._put(item)

    def finish(self) -> None:
        """Signal normal end of stream to the receiver."""
        self._put(_END)

    def _put(self, item: object) -> bool:
        while not self.token.cancelled:
            try:
                self._queue.put(item, timeout=self._poll_seconds)
                return True
            except queue.Full:
                continue
        return False


class StreamReceiver(Generic[T]):
    """Consumer side of a stream.

    Iterating yields :class:`StreamResult` items in wire order until the
    stream ends. :meth:`close`, leaving a ``with`` block, abandoning an
    iteration early or dropping the receiver all stop the producer; using a
    closed receiver raises ``CancelledError``.
    """

    def __init__(self, channel: "queue.Queue[object]", token: CancellationToken) -> None:
        self._queue = channel
        self._token = token
        self._exhausted = False

    @property
    def closed(self) -> bool:
        return self._token.cancelled

    def recv(self, timeout: Optional[float] = None) -> Optional[StreamResult[T]]:
        """Return the next item, or ``None`` at end of stream.

        Raises:
            CancelledError: the receiver was closed.
            TimeoutError: nothing arrived within ``timeout`` seconds.
        """
        self._token.raise_if_cancelled()
        if self._exhausted:
            return None
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError(f"no stream item within {timeout}s") from None
        if item is _END:
            self._exhausted = True
            return None
        return item  # type: ignore[return-value]

    def __iter__(self) -> Iterator[StreamResult[T]]:
        try:
            while (item := self.recv()) is not None:
                yield item
        except GeneratorExit:
            # loop abandoned (break or a dropped iterator)
            self.close()
            raise

    def values(self) -> Iterator[T]:
        """Yield decoded values, raising the first error encountered."""
        for item in self:
            yield item.unwrap()

    def close(self) -> None:
        """Stop the producer and drop anything still buffered."""
        self._token.cancel("receiver closed")
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break

    def __enter__(self) -> "StreamReceiver[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["StreamChannel", "StreamReceiver"]
