"""
Processing-level failure raised after a successful HTTP exchange.

Covers bodies that are not valid JSON for the requested type, stream events
that fail validation (the raw payload is preserved), and body read failures.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_kinds import ProcessingErrorKind
from .transport_error import TransportError


@dataclass(eq=False)
class ProcessingError(TransportError):
    """Failure converting a response (or stream event) into typed values.

    Attributes:
        kind: Classification of the failure.
        message: Human-readable description.
        raw_payload: Offending text, kept for diagnostics.
        target_type: Name of the type the payload was validated against.
        status: HTTP status of the response the payload came from.
        url: URL of the request the payload came from.
        raw: Underlying exception, if any.
    """

    kind: ProcessingErrorKind
    message: str
    raw_payload: Optional[str] = None
    target_type: Optional[str] = None
    status: Optional[int] = None
    url: Optional[str] = None
    raw: Optional[BaseException] = None

    @classmethod
    def conversion(cls, raw_payload: str, target_type: str, raw: Optional[BaseException] = None) -> "ProcessingError":
        """Build the error emitted for a stream event that fails validation."""
        return cls(
            kind=ProcessingErrorKind.CONVERSION,
            message=f"Failed to convert value '{raw_payload}' to type '{target_type}'",
            raw_payload=raw_payload,
            target_type=target_type,
            raw=raw,
        )

    @property
    def error_code(self) -> str:
        return f"processing.{self.kind.value}"

    @property
    def status_code(self) -> Optional[int]:
        return self.status

    def is_deserialization(self) -> bool:
        return self.kind in (ProcessingErrorKind.DESERIALIZATION, ProcessingErrorKind.CONVERSION)


__all__ = ["ProcessingError"]
