"""Chat completions module (``/chat/completions``)."""
from __future__ import annotations

from ..base.dto import ChatCompletion, ChatCompletionChunk
from ..base.streaming import StreamReceiver, collect_completion
from ..config.defaults import CHAT_COMPLETIONS_PATH
from .base import ModuleBase
from .params import ChatParams


class Chat(ModuleBase):
    name = "chat"

    def create(self, params: ChatParams) -> ChatCompletion:
        request = self._transport.build_request("POST", self._url(CHAT_COMPLETIONS_PATH), params.mutator(stream=False))
        return self._transport.send_unary(request, ChatCompletion, interceptors=self._chain(), module=self.name)

    def create_stream(self, params: ChatParams) -> StreamReceiver[ChatCompletionChunk]:
        """Start a streaming completion; iterate the receiver for chunks."""
        request = self._transport.build_request("POST", self._url(CHAT_COMPLETIONS_PATH), params.mutator(stream=True))
        return self._transport.send_stream(
            request, ChatCompletionChunk, interceptors=self._chain(), module=self.name
        )

    def stream_and_collect(self, params: ChatParams) -> ChatCompletion:
        """Stream a completion and return the aggregated result."""
        return collect_completion(self.create_stream(params))


__all__ = ["Chat"]
