"""Models module (``/models`` and ``/models/{id}``)."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from ..base.dto import Model, ModelsData
from ..config.defaults import MODELS_PATH
from .base import ModuleBase
from .params import ModelsParams


class Models(ModuleBase):
    name = "models"

    def list(self, params: Optional[ModelsParams] = None) -> ModelsData:
        params = params or ModelsParams()
        request = self._transport.build_request("GET", self._url(MODELS_PATH), params.mutator())
        return self._transport.send_unary(request, ModelsData, interceptors=self._chain(), module=self.name)

    def retrieve(self, model_id: str, params: Optional[ModelsParams] = None) -> Model:
        params = params or ModelsParams()
        request = self._transport.build_request(
            "GET", self._url(f"{MODELS_PATH}/{quote(model_id, safe='')}"), params.mutator()
        )
        return self._transport.send_unary(request, Model, interceptors=self._chain(), module=self.name)


__all__ = ["Models"]
