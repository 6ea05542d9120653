"""chatwire.config.defaults
========================

Small, stable default values shared by the configuration layer, the
executor and the stream decoder.

This module imports nothing from the rest of the package so any layer can
depend on it without creating import cycles.
"""

from __future__ import annotations

# ---- Endpoint / credentials ----
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_USER_AGENT = "chatwire-python"

# ---- Retry ----
# Default retry budget (total send attempts) when neither the request nor the
# caller overrides it.
DEFAULT_RETRY_COUNT = 5

# ---- HTTP timeouts (seconds) ----
DEFAULT_TIMEOUT_SECONDS = 300.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0

# ---- Streaming ----
STREAM_CHANNEL_CAPACITY = 32
DEFAULT_CHANNEL_POLL_SECONDS = 0.1
STREAM_DONE_SENTINEL = "[DONE]"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

# ---- Module paths ----
CHAT_COMPLETIONS_PATH = "chat/completions"
COMPLETIONS_PATH = "completions"
EMBEDDINGS_PATH = "embeddings"
MODELS_PATH = "models"
