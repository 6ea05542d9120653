"""Interceptor priority scale.

Higher values run earlier on the request path and later on the response and
error paths. Any integer is a valid custom priority; the named levels are
anchors on the same scale.
"""
from __future__ import annotations

from enum import IntEnum


class InterceptorPriority(IntEnum):
    """Named priority levels."""

    LOWEST = 0
    LOW = 25
    MEDIUM = 50
    HIGH = 75
    HIGHEST = 100


__all__ = ["InterceptorPriority"]
