"""Service modules: thin wrappers choosing a URL path and response type."""

from .base import ModuleBase
from .chat import Chat
from .completions import Completions
from .embeddings import Embeddings
from .models import Models
from .params import ChatParams, CompletionParams, EmbeddingParams, ModelsParams, RequestParams
from . import messages

__all__ = [
    "ModuleBase",
    "Chat",
    "Completions",
    "Embeddings",
    "Models",
    "ChatParams",
    "CompletionParams",
    "EmbeddingParams",
    "ModelsParams",
    "RequestParams",
    "messages",
]
