"""Model listing models (``/models``)."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .extra_fields_model import ExtraFieldsModel


class Model(ExtraFieldsModel):
    id: str
    created: int = 0
    object: str = "model"
    owned_by: str = ""


class ModelsData(BaseModel):
    data: List[Model] = Field(default_factory=list)
    object: str = "list"

    def ids(self) -> List[str]:
        return [m.id for m in self.data]

    def get(self, model_id: str) -> Optional[Model]:
        return next((m for m in self.data if m.id == model_id), None)


__all__ = ["Model", "ModelsData"]
