"""Embedding response models (``/embeddings``)."""
from __future__ import annotations

import base64
import struct
from typing import List, Union

from pydantic import BaseModel, Field


class Embedding(BaseModel):
    """One embedding vector.

    ``embedding`` is a float list, or a base64 string of little-endian
    float32 values when the request asked for ``encoding_format=base64``.
    """

    embedding: Union[List[float], str] = Field(default_factory=list)
    index: int = 0
    object: str = "embedding"

    def vector(self) -> List[float]:
        """Return the embedding as floats, decoding base64 when needed."""
        if isinstance(self.embedding, list):
            return list(self.embedding)
        raw = base64.b64decode(self.embedding)
        count = len(raw) // 4
        return list(struct.unpack(f"<{count}f", raw[: count * 4]))


class EmbeddingUsage(BaseModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingResponse(BaseModel):
    model: str = ""
    object: str = "list"
    data: List[Embedding] = Field(default_factory=list)
    usage: EmbeddingUsage = Field(default_factory=EmbeddingUsage)

    def vectors(self) -> List[List[float]]:
        """All vectors ordered by ``index``."""
        return [item.vector() for item in sorted(self.data, key=lambda e: e.index)]


__all__ = ["Embedding", "EmbeddingUsage", "EmbeddingResponse"]
