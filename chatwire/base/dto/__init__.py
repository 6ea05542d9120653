"""Response data-transfer objects (pydantic v2).

Streamed chunk types carry ``merge`` methods implementing delta
aggregation; non-streamed types mirror the service's JSON shapes. Unknown
keys are preserved in ``extra_fields`` where providers are known to add them.
"""

from .extra_fields_model import ExtraFieldsModel
from .tool_call import Function, ToolCall, merge_tool_calls
from .usage import CompletionTokensDetails, CompletionUsage, PromptTokensDetails
from .chat_completion import ChatCompletion, ChatCompletionMessage, FinalChoice
from .chat_chunk import ChatCompletionChunk, ChoiceDelta, StreamChoice
from .completion import Completion, CompletionChoice
from .embedding import Embedding, EmbeddingResponse, EmbeddingUsage
from .model import Model, ModelsData

__all__ = [
    "ExtraFieldsModel",
    "Function",
    "ToolCall",
    "merge_tool_calls",
    "CompletionTokensDetails",
    "CompletionUsage",
    "PromptTokensDetails",
    "ChatCompletion",
    "ChatCompletionMessage",
    "FinalChoice",
    "ChatCompletionChunk",
    "ChoiceDelta",
    "StreamChoice",
    "Completion",
    "CompletionChoice",
    "Embedding",
    "EmbeddingResponse",
    "EmbeddingUsage",
    "Model",
    "ModelsData",
]
