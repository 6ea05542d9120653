"""Embeddings module (``/embeddings``)."""
from __future__ import annotations

from ..base.dto import EmbeddingResponse
from ..config.defaults import EMBEDDINGS_PATH
from .base import ModuleBase
from .params import EmbeddingParams


class Embeddings(ModuleBase):
    name = "embeddings"

    def create(self, params: EmbeddingParams) -> EmbeddingResponse:
        request = self._transport.build_request("POST", self._url(EMBEDDINGS_PATH), params.mutator())
        return self._transport.send_unary(request, EmbeddingResponse, interceptors=self._chain(), module=self.name)


__all__ = ["Embeddings"]
