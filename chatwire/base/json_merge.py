"""Type-directed deep merge for JSON-like values.

Used by the delta aggregator to merge the open ``extra_fields`` bags that
providers attach to streamed chunks:

- objects merge key by key, recursively;
- arrays concatenate;
- strings concatenate;
- numbers add;
- booleans OR;
- anything else (including mismatched types): the right value wins.

A ``None`` on the left takes the right value; a ``None`` on the right replaces
whatever came before it. Inputs are never mutated.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def merge_json_values(left: Any, right: Any) -> Any:
    """Merge two JSON values according to the rules above."""
    if left is None:
        return right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged: Dict[str, Any] = dict(left)
        for key, value in right.items():
            merged[key] = merge_json_values(merged[key], value) if key in merged else value
        return merged
    if isinstance(left, list) and isinstance(right, list):
        return [*left, *right]
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    # bool is a subclass of int: check it before the numeric rule.
    if isinstance(left, bool) and isinstance(right, bool):
        return left or right
    if isinstance(left, bool) or isinstance(right, bool):
        return right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left + right
    return right


def merge_extra_fields(
    left: Optional[Mapping[str, Any]], right: Optional[Mapping[str, Any]]
) -> Optional[Dict[str, Any]]:
    """Merge two extra-field bags; ``None`` when both are absent."""
    if left is None and right is None:
        return None
    return merge_json_values(dict(left or {}), dict(right or {}))


def append_text(base: Optional[str], incoming: Optional[str]) -> Optional[str]:
    """Append ``incoming`` to ``base``; absent values leave the other untouched."""
    if incoming is None:
        return base
    if base is None:
        return incoming
    return base + incoming


__all__ = ["merge_json_values", "merge_extra_fields", "append_text"]
