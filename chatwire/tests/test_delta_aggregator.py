"""Delta merge rules for streamed chat chunks."""
from __future__ import annotations

import pytest

from chatwire import ChatCompletionChunk, ToolCall, accumulate_chunks
from chatwire.base.dto import Completion
from chatwire.base.dto.tool_call import Function, merge_tool_calls
from chatwire.base.json_merge import merge_json_values
from chatwire.tests.utils import chunk


def _c(**delta) -> ChatCompletionChunk:
    return ChatCompletionChunk.model_validate(chunk(**delta))


def _tc(index=0, id=None, name=None, arguments=None) -> dict:
    fn = {}
    if name is not None:
        fn["name"] = name
    if arguments is not None:
        fn["arguments"] = arguments
    call = {"index": index, "function": fn}
    if id is not None:
        call["id"] = id
    return call


def test_content_concatenates():
    agg = accumulate_chunks([_c(content="Hel"), _c(content="lo")])
    assert agg.content() == "Hello"  # nosec B101


def test_merge_is_associative():
    parts = [_c(content="a", role="assistant"), _c(content="b"), _c(content="c", refusal="no")]
    left = parts[0].model_copy(deep=True)
    left.merge(parts[1])
    left.merge(parts[2])
    right_tail = parts[1].model_copy(deep=True)
    right_tail.merge(parts[2])
    right = parts[0].model_copy(deep=True)
    right.merge(right_tail)
    assert left.model_dump() == right.model_dump()  # nosec B101


def test_absent_fields_are_noops_and_role_refusal_replace():
    agg = accumulate_chunks(
        [
            _c(role="assistant", content="x"),
            _c(refusal="first"),
            _c(),
            _c(role="tool", refusal="second"),
        ]
    )
    delta = agg.choice().delta
    assert (delta.role, delta.refusal, delta.content) == ("tool", "second", "x")  # nosec B101


def test_reasoning_content_alias():
    agg = accumulate_chunks([_c(reasoning_content="think "), _c(reasoning="more")])
    assert agg.choice().delta.reasoning == "think more"  # nosec B101
    assert agg.choice().delta.extra_fields is None  # nosec B101


def test_tool_call_fragments_assemble():
    agg = accumulate_chunks(
        [
            _c(tool_calls=[_tc(0, id="call_1", name="get_weather", arguments="")]),
            _c(tool_calls=[_tc(0, arguments='{"city":')]),
            _c(tool_calls=[_tc(0, arguments=' "Paris"}')]),
        ]
    )
    calls = agg.choice().delta.tool_calls
    assert len(calls) == 1  # nosec B101
    assert calls[0].id == "call_1" and calls[0].function.name == "get_weather"  # nosec B101
    assert calls[0].function.parsed_arguments() == {"city": "Paris"}  # nosec B101


def test_parallel_tool_calls_match_by_index():
    agg = accumulate_chunks(
        [
            _c(tool_calls=[_tc(0, id="a", name="f"), _tc(1, id="b", name="g")]),
            _c(tool_calls=[_tc(1, arguments="{}"), _tc(0, arguments="[1]")]),
            _c(tool_calls=[_tc(2, id="c", name="h")]),
        ]
    )
    calls = agg.choice().delta.tool_calls
    assert [(c.index, c.id, c.function.arguments) for c in calls] == [  # nosec B101
        (0, "a", "[1]"),
        (1, "b", "{}"),
        (2, "c", ""),
    ]


def test_single_index_zero_delta_continues_last_call():
    existing = [ToolCall.model_validate(_tc(0, id="a")), ToolCall.model_validate(_tc(1, id="b"))]
    merged = merge_tool_calls(existing, [ToolCall.model_validate(_tc(0, arguments="{}"))])
    assert merged[1].function.arguments == "{}"  # nosec B101
    assert merged[1].index == 1  # nosec B101
    assert merged[0].function.arguments == ""  # nosec B101


def test_tool_call_defaults_and_folding():
    call = ToolCall.model_validate({"id": "x", "type": None, "index": None, "function": {"arguments": {"a": 1}}})
    assert (call.index, call.type, call.id) == (0, "function", "x")  # nosec B101
    assert call.function.arguments == '{"a": 1}'  # nosec B101
    assert Function.model_validate({"name": None}).name == ""  # nosec B101


def test_choices_isolated_by_index():
    agg = accumulate_chunks([_c(content="a"), ChatCompletionChunk.model_validate(chunk("b", index=1)), _c(content="c")])
    assert agg.content(0) == "ac" and agg.content(1) == "b"  # nosec B101
    assert [c.index for c in agg.choices] == [0, 1]  # nosec B101


def test_choice_merge_ignores_other_index():
    a = _c(content="a").choices[0]
    b = ChatCompletionChunk.model_validate(chunk("b", index=3)).choices[0]
    a.merge(b)
    assert a.delta.content == "a"  # nosec B101


def test_extra_fields_deep_merge():
    first = ChatCompletionChunk.model_validate({**chunk("a"), "provider": {"latency": 1, "tags": ["x"]}})
    second = ChatCompletionChunk.model_validate({**chunk("b"), "provider": {"latency": 2, "tags": ["y"], "ok": True}})
    agg = accumulate_chunks([first, second])
    assert agg.extra_fields == {"provider": {"latency": 3, "tags": ["x", "y"], "ok": True}}  # nosec B101


def test_later_null_clears_extra_field():
    agg = accumulate_chunks([_c(vendor="x", other=1), _c(vendor=None), _c(content="c")])
    assert agg.choice().delta.extra_fields == {"vendor": None, "other": 1}  # nosec B101


def test_to_completion_defaults():
    agg = accumulate_chunks([_c(content="hi")])
    completion = agg.to_completion()
    choice = completion.choice()
    assert completion.object == "chat.completion" and completion.id == "chatcmpl-1"  # nosec B101
    assert choice.finish_reason == "stop"  # nosec B101
    assert choice.message.role == "assistant" and choice.message.content == "hi"  # nosec B101


def test_finish_reason_and_usage_carried():
    last = ChatCompletionChunk.model_validate(
        {
            "id": "chatcmpl-1",
            "choices": [{"index": 0, "delta": {}, "finish_reason": "tool_calls"}],
            "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
        }
    )
    completion = accumulate_chunks([_c(content="x"), last]).to_completion()
    assert completion.choice().finish_reason == "tool_calls"  # nosec B101
    assert completion.usage.total_tokens == 5  # nosec B101


def test_inputs_are_not_mutated():
    first, second = _c(content="a"), _c(content="b")
    accumulate_chunks([first, second])
    assert first.content() == "a" and second.content() == "b"  # nosec B101


def test_missing_id_and_choices_default():
    parsed = ChatCompletionChunk.model_validate({"id": None, "choices": None})
    assert parsed.id == "0" and parsed.choices == []  # nosec B101
    agg = accumulate_chunks([parsed, _c(content="a")])
    assert agg.id == "chatcmpl-1"  # nosec B101


def test_empty_iterable_gives_none():
    assert accumulate_chunks([]) is None  # nosec B101


def test_text_completion_chunks_merge():
    parts = [
        Completion.model_validate({"id": "cmpl", "choices": [{"index": 0, "text": "Hel"}]}),
        Completion.model_validate({"choices": [{"index": 0, "text": "lo", "finish_reason": "length"}]}),
    ]
    agg = accumulate_chunks(parts)
    assert agg.text() == "Hello" and agg.choices[0].finish_reason == "length"  # nosec B101


@pytest.mark.parametrize(
    "left,right,expected",
    [
        (None, 1, 1),
        ({"a": 1}, None, None),
        ("x", None, None),
        ("ab", "cd", "abcd"),
        ([1], [2], [1, 2]),
        (1, 2.5, 3.5),
        (False, True, True),
        (True, 3, 3),
        ("s", 4, 4),
        ({"a": {"b": "x"}}, {"a": {"b": "y", "c": 1}}, {"a": {"b": "xy", "c": 1}}),
    ],
)
def test_json_value_merge_rules(left, right, expected):
    assert merge_json_values(left, right) == expected  # nosec B101
