"""Legacy text completions module (``/completions``)."""
from __future__ import annotations

from ..base.dto import Completion
from ..base.streaming import StreamReceiver
from ..config.defaults import COMPLETIONS_PATH
from .base import ModuleBase
from .params import CompletionParams


class Completions(ModuleBase):
    name = "completions"

    def create(self, params: CompletionParams) -> Completion:
        request = self._transport.build_request("POST", self._url(COMPLETIONS_PATH), params.mutator(stream=False))
        return self._transport.send_unary(request, Completion, interceptors=self._chain(), module=self.name)

    def create_stream(self, params: CompletionParams) -> StreamReceiver[Completion]:
        request = self._transport.build_request("POST", self._url(COMPLETIONS_PATH), params.mutator(stream=True))
        return self._transport.send_stream(request, Completion, interceptors=self._chain(), module=self.name)


__all__ = ["Completions"]
