"""Module wrappers end to end over a mock transport."""
from __future__ import annotations

import base64
import json
import struct
from typing import List

import httpx
import pytest

from chatwire import ChatParams, CompletionParams, EmbeddingParams, ModelsParams, messages
from chatwire.base.errors import ProcessingError, ProcessingErrorKind
from chatwire.base.interceptors import Interceptor
from chatwire.tests.utils import chunk, sse, sse_response

_CHAT = {
    "id": "chatcmpl-9",
    "object": "chat.completion",
    "created": 10,
    "model": "gpt-test",
    "choices": [
        {
            "index": 0,
            "finish_reason": "stop",
            "message": {"role": "assistant", "content": "Hi there", "reasoning_content": "brief"},
        }
    ],
    "usage": {"prompt_tokens": 4, "completion_tokens": 2, "total_tokens": 6},
    "x_vendor": {"region": "eu"},
}


class _Capture:
    def __init__(self, payload, status: int = 200):
        self.payload = payload
        self.status = status
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.payload)

    @property
    def body(self):
        return json.loads(self.requests[-1].content)


def test_chat_create_request_and_response(make_client):
    capture = _Capture(_CHAT)
    client = make_client(capture)
    params = ChatParams("gpt-test", [messages.system("be brief"), messages.user("hello")]).max_tokens(16)

    completion = client.chat.create(params)

    request = capture.requests[0]
    assert request.method == "POST"  # nosec B101
    assert str(request.url) == "https://api.test/v1/chat/completions"  # nosec B101
    assert request.headers["authorization"] == "Bearer sk-test"  # nosec B101
    assert capture.body["messages"][1] == {"role": "user", "content": "hello"}  # nosec B101
    assert capture.body["max_tokens"] == 16 and capture.body["stream"] is False  # nosec B101
    assert completion.content() == "Hi there"  # nosec B101
    assert completion.choice().message.reasoning == "brief"  # nosec B101
    assert completion.usage.total_tokens == 6  # nosec B101
    assert completion.extra_fields == {"x_vendor": {"region": "eu"}}  # nosec B101


def test_global_extras_do_not_override_request_values(make_client):
    capture = _Capture(_CHAT)
    client = make_client(capture)

    def _globals(config):
        config.http.headers.update({"X-Org": "acme", "X-Env": "global"})
        config.http.query["api-version"] = "1"
        config.http.body.update({"user": "global-user", "temperature": 1.0})

    client.update_config(_globals)
    params = ChatParams("m", [messages.user("hi")]).temperature(0.0).header("X-Env", "request")

    client.chat.create(params)

    request = capture.requests[0]
    assert request.headers["x-org"] == "acme" and request.headers["x-env"] == "request"  # nosec B101
    assert request.url.params["api-version"] == "1"  # nosec B101
    assert capture.body["temperature"] == 0.0 and capture.body["user"] == "global-user"  # nosec B101


def test_per_request_user_agent_and_query(make_client):
    capture = _Capture(_CHAT)
    client = make_client(capture, user_agent="chatwire-tests")
    client.chat.create(ChatParams("m", []).query("trace", 1))
    client.chat.create(ChatParams("m", []).user_agent("override/2"))
    assert capture.requests[0].headers["user-agent"] == "chatwire-tests"  # nosec B101
    assert capture.requests[0].url.params["trace"] == "1"  # nosec B101
    assert capture.requests[1].headers["user-agent"] == "override/2"  # nosec B101


def test_models_list_and_retrieve(make_client):
    capture = _Capture({"object": "list", "data": [{"id": "m1", "owned_by": "org"}, {"id": "m2"}]})
    client = make_client(capture)
    listing = client.models.list()
    assert listing.ids() == ["m1", "m2"]  # nosec B101
    assert capture.requests[0].method == "GET" and capture.requests[0].content == b""  # nosec B101

    capture.payload = {"id": "m1", "object": "model", "created": 1, "owned_by": "org", "tier": "gold"}
    model = client.models.retrieve("m1", ModelsParams().header("X-Debug", "1"))
    assert str(capture.requests[1].url) == "https://api.test/v1/models/m1"  # nosec B101
    assert capture.requests[1].headers["x-debug"] == "1"  # nosec B101
    assert model.owned_by == "org" and model.extra_fields == {"tier": "gold"}  # nosec B101


def test_model_id_is_escaped_as_one_path_segment(make_client):
    capture = _Capture({"id": "org/m?v#1", "object": "model"})
    client = make_client(capture)
    model = client.models.retrieve("org/m?v#1")
    request = capture.requests[0]
    assert request.url.raw_path == b"/v1/models/org%2Fm%3Fv%231"  # nosec B101
    assert not request.url.query  # nosec B101
    assert model.id == "org/m?v#1"  # nosec B101


def test_embeddings_base64_vectors(make_client):
    encoded = base64.b64encode(struct.pack("<3f", 0.5, -1.0, 2.0)).decode()
    capture = _Capture(
        {
            "object": "list",
            "model": "emb",
            "data": [{"index": 1, "embedding": [1.0, 2.0]}, {"index": 0, "embedding": encoded}],
            "usage": {"prompt_tokens": 2, "total_tokens": 2},
        }
    )
    response = make_client(capture).embeddings.create(
        EmbeddingParams("emb", ["a", "b"]).encoding_format("base64").dimensions(3)
    )
    assert capture.body == {"model": "emb", "input": ["a", "b"], "encoding_format": "base64", "dimensions": 3}  # nosec B101
    assert response.vectors() == [[0.5, -1.0, 2.0], [1.0, 2.0]]  # nosec B101


def test_completions_create(make_client):
    capture = _Capture({"id": "cmpl", "choices": [{"index": 0, "text": "done", "finish_reason": "stop"}]})
    completion = make_client(capture).completions.create(CompletionParams("m", "Say").max_tokens(3))
    assert str(capture.requests[0].url).endswith("/v1/completions")  # nosec B101
    assert capture.body["prompt"] == "Say" and capture.body["stream"] is False  # nosec B101
    assert completion.text() == "done"  # nosec B101


def test_completions_stream(make_client):
    body = sse(
        {"id": "cmpl", "choices": [{"index": 0, "text": "a"}]},
        {"id": "cmpl", "choices": [{"index": 0, "text": "b"}]},
        "[DONE]",
    )
    receiver = make_client(lambda r: sse_response(body)).completions.create_stream(CompletionParams("m", "x"))
    with receiver:
        texts = [c.text() for c in receiver.values()]
    assert texts == ["a", "b"]  # nosec B101


def test_deserialization_error_goes_through_interceptors(make_client):
    seen = []

    class _Observe(Interceptor):
        def on_error(self, error):
            seen.append(error.error_code)
            return error

    client = make_client(lambda r: httpx.Response(200, text="not json"))
    client.chat.add_interceptor(_Observe())
    with pytest.raises(ProcessingError) as ei:
        client.chat.create(ChatParams("m", []))
    assert ei.value.kind is ProcessingErrorKind.DESERIALIZATION  # nosec B101
    assert ei.value.raw_payload == "not json" and ei.value.status == 200  # nosec B101
    assert seen == ["processing.deserialization"]  # nosec B101


def test_stream_and_collect(make_client):
    body = sse(
        chunk(role="assistant"),
        chunk("Hel"),
        chunk("lo"),
        {"id": "chatcmpl-1", "choices": [{"index": 0, "delta": {}, "finish_reason": "stop"}]},
        "[DONE]",
    )
    completion = make_client(lambda r: sse_response(body)).chat.stream_and_collect(ChatParams("m", []))
    assert completion.content() == "Hello"  # nosec B101
    assert completion.choice().finish_reason == "stop"  # nosec B101
    assert completion.model == "m" and completion.object == "chat.completion"  # nosec B101


def test_message_helpers():
    assert messages.tool("call_1", "42") == {"role": "tool", "tool_call_id": "call_1", "content": "42"}  # nosec B101
    parts = [messages.text_part("look"), messages.image_part("https://img.test/a.png", detail="low")]
    assert messages.user(parts)["content"][1] == {  # nosec B101
        "type": "image_url",
        "image_url": {"url": "https://img.test/a.png", "detail": "low"},
    }
    assert messages.assistant(None)["content"] is None  # nosec B101
