"""Item type carried on a stream channel: a decoded value or an error."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ..errors import TransportError

T = TypeVar("T")


@dataclass(frozen=True)
class StreamResult(Generic[T]):
    """Either ``value`` or ``error`` is set, never both.

    Errors travel as values so a malformed event does not end iteration;
    callers decide whether to skip, log or :meth:`unwrap` (raise).
    """

    value: Optional[T] = None
    error: Optional[TransportError] = None

    @classmethod
    def ok(cls, value: T) -> "StreamResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TransportError) -> "StreamResult[T]":
        return cls(error=error)

    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = ["StreamResult"]
