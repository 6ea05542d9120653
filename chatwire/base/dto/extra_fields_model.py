"""Pydantic base model that keeps unrecognized wire fields.

Providers attach vendor-specific keys to otherwise standard payloads. Models
deriving from :class:`ExtraFieldsModel` move every key they do not declare
into ``extra_fields`` instead of dropping it, and can accept alternative wire
names for declared fields through ``wire_aliases``.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class ExtraFieldsModel(BaseModel):
    """Base for response models with a forward-compatible extras bag.

    ``wire_aliases`` maps an alternative wire key to a declared field. The
    declared key wins when both are present.
    """

    model_config = ConfigDict(extra="ignore")

    wire_aliases: ClassVar[Dict[str, str]] = {}

    extra_fields: Optional[Dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _collect_extra_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for alias, target in cls.wire_aliases.items():
            if alias in data:
                value = data.pop(alias)
                if data.get(target) is None:
                    data[target] = value
        known = set(cls.model_fields)
        extras = {key: data.pop(key) for key in list(data) if key not in known}
        if extras:
            data["extra_fields"] = {**(data.get("extra_fields") or {}), **extras}
        return data


__all__ = ["ExtraFieldsModel"]
