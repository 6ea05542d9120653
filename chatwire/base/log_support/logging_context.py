"""Structured logging context carried through transport log events.

:class:`LogContext` bundles the fields every HTTP log line shares (module,
method, url, request id) and flattens its ``extra`` mapping on output.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Per-call context attached to executor and stream events."""

    module: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flat mapping of the set fields; ``extra`` keys never shadow them."""
        data: Dict[str, Any] = {k: v for k, v in self.extra.items() if v is not None}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                data[f.name] = value
        return data


__all__ = ["LogContext"]
