"""Request/response model validation and wire mapping."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from openai_interface.base.errors import ErrorCode, ResponseError, ResponseErrorKind
from openai_interface.base.models import (
    AssistantMessage,
    ChatCompletionChunk,
    Completion,
    Content,
    CustomCall,
    CustomToolCall,
    Delta,
    ExtraBody,
    FinishReason,
    FunctionCall,
    FunctionDefinition,
    FunctionTool,
    FunctionToolCall,
    JsonSchemaFormat,
    NamedToolChoice,
    ReasoningContent,
    RequestBody,
    ResponseFormatJsonSchema,
    StreamOptions,
    SystemMessage,
    ToolChoiceFunction,
    ToolMessage,
    UserMessage,
    parse_message,
    select_channel,
)
from openai_interface.tests.fixtures import COMPLETION, COMPLETION_JSON, EMPTY_CHOICES_JSON, chunk


def _body(**kwargs) -> RequestBody:
    kwargs.setdefault("model", "deepseek-chat")
    kwargs.setdefault("messages", [UserMessage(content="hi")])
    return RequestBody(**kwargs)


# ---- messages ----

def test_message_union_dispatches_on_role():
    msg = parse_message({"role": "tool", "content": "42", "tool_call_id": "call_1"})
    assert isinstance(msg, ToolMessage)  # nosec B101 - asserts are appropriate in unit tests
    with pytest.raises(ValidationError):
        parse_message({"role": "robot", "content": "x"})


def test_assistant_message_requires_content_or_tool_calls():
    with pytest.raises(ValidationError):
        AssistantMessage()
    call = FunctionToolCall(id="call_1", function=FunctionCall(name="lookup", arguments="{}"))
    msg = AssistantMessage(tool_calls=[call])
    assert msg.to_dict() == {  # nosec B101
        "role": "assistant",
        "tool_calls": [{"id": "call_1", "type": "function", "function": {"name": "lookup", "arguments": "{}"}}],
    }


def test_assistant_reasoning_content_requires_prefix():
    with pytest.raises(ValidationError):
        AssistantMessage(content="The answer", reasoning_content="thinking")
    msg = AssistantMessage(content="The answer", reasoning_content="thinking", prefix=True)
    assert msg.to_dict()["prefix"] is True  # nosec B101
    assert "prefix" not in AssistantMessage(content="The answer", prefix=False).to_dict()  # nosec B101


def test_custom_tool_call_round_trip():
    call = CustomToolCall(id="c9", custom=CustomCall(name="sql", input="select 1"))
    msg = parse_message(AssistantMessage(tool_calls=[call]).to_dict())
    assert msg.tool_calls[0] == call  # nosec B101


def test_messages_are_immutable():
    msg = UserMessage(content="hi")
    with pytest.raises(ValidationError):
        msg.content = "changed"


# ---- request body ----

def test_minimal_payload_omits_unset_fields():
    payload = _body().to_payload()
    assert payload == {  # nosec B101
        "messages": [{"role": "user", "content": "hi"}],
        "model": "deepseek-chat",
        "stream": False,
    }


@pytest.mark.parametrize(
    "kwargs",
    [
        {"messages": []},
        {"model": ""},
        {"temperature": 2.5},
        {"top_p": -0.1},
        {"max_tokens": 0},
        {"presence_penalty": 3},
        {"top_logprobs": 5},
        {"top_logprobs": 21, "logprobs": True},
    ],
)
def test_invalid_parameters_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        _body(**kwargs)


def test_extension_precedence_standard_then_extra_body_then_map():
    body = _body(
        temperature=0.5,
        extra_body=ExtraBody(enable_thinking=True, top_k=5),
        extra_body_map={"temperature": 1.9, "top_k": 99, "enable_search": True},
    )
    payload = body.to_payload()
    assert payload["temperature"] == 0.5  # nosec B101
    assert payload["top_k"] == 5  # nosec B101
    assert payload["enable_thinking"] is True  # nosec B101
    assert payload["enable_search"] is True  # nosec B101
    assert "extra_body" not in payload and "extra_body_map" not in payload  # nosec B101
    assert json.loads(body.to_json()) == payload  # nosec B101


def test_extra_body_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        ExtraBody(enable_search=True)


def test_payload_survives_parse_and_reserialize():
    body = _body(
        messages=[SystemMessage(content="be brief"), UserMessage(content="weather?")],
        stream=True,
        stream_options=StreamOptions(include_usage=True),
        tools=[FunctionTool(function=FunctionDefinition(name="get_weather", parameters={"type": "object"}))],
        tool_choice=NamedToolChoice(function=ToolChoiceFunction(name="get_weather")),
        response_format=ResponseFormatJsonSchema(
            json_schema=JsonSchemaFormat(name="weather", schema={"type": "object"})
        ),
        extra_body=ExtraBody(thinking_budget=512),
        extra_body_map={"vendor_flag": {"nested": [1, 2]}},
    )
    payload = body.to_payload()
    assert payload["response_format"]["json_schema"]["schema"] == {"type": "object"}  # nosec B101
    rebuilt = RequestBody.from_payload(payload)
    assert rebuilt.to_payload() == payload  # nosec B101
    assert rebuilt.extra_body == ExtraBody(thinking_budget=512)  # nosec B101
    assert rebuilt.extra_body_map == {"vendor_flag": {"nested": [1, 2]}}  # nosec B101


def test_tool_choice_mode_string():
    assert _body(tool_choice="auto").to_payload()["tool_choice"] == "auto"  # nosec B101


def test_with_stream_copies_and_leaves_original_untouched():
    body = _body()
    assert body.with_stream(False) is body  # nosec B101
    streamed = body.with_stream(True)
    assert streamed.stream is True  # nosec B101
    assert body.stream is False  # nosec B101
    assert streamed.messages == body.messages  # nosec B101


# ---- completion ----

def test_completion_round_trip_keeps_vendor_keys():
    completion = Completion.parse(COMPLETION_JSON)
    assert completion.to_dict() == COMPLETION  # nosec B101
    assert completion.text == "4"  # nosec B101
    assert completion.reasoning_text == "2 + 2 is 4."  # nosec B101
    assert completion.usage.reasoning_tokens == 5  # nosec B101
    assert completion.first_choice().finish_reason is FinishReason.STOP  # nosec B101


def test_unknown_finish_reason_is_kept_as_text():
    data = json.loads(COMPLETION_JSON)
    data["choices"][0]["finish_reason"] = "sensitive"
    completion = Completion.parse(json.dumps(data))
    assert completion.first_choice().finish_reason == "sensitive"  # nosec B101
    assert completion.to_dict()["choices"][0]["finish_reason"] == "sensitive"  # nosec B101


def test_empty_choices_parse_but_first_choice_raises():
    completion = Completion.parse(EMPTY_CHOICES_JSON)
    assert completion.choices == []  # nosec B101
    with pytest.raises(ResponseError) as ei:
        completion.first_choice()
    assert ei.value.kind is ResponseErrorKind.EMPTY_CHOICES  # nosec B101
    assert ei.value.code is ErrorCode.PROTOCOL  # nosec B101


def test_first_choice_is_lowest_index():
    data = json.loads(COMPLETION_JSON)
    second = json.loads(json.dumps(data["choices"][0]))
    second["index"] = 1
    second["message"]["content"] = "four"
    data["choices"] = [second, data["choices"][0]]
    assert Completion.parse(json.dumps(data)).text == "4"  # nosec B101


def test_duplicate_choice_indices_are_a_schema_mismatch():
    data = json.loads(COMPLETION_JSON)
    data["choices"] = data["choices"] * 2
    with pytest.raises(ResponseError) as ei:
        Completion.parse(json.dumps(data))
    assert ei.value.kind is ResponseErrorKind.SCHEMA_MISMATCH  # nosec B101


def test_completion_parse_failures():
    with pytest.raises(ResponseError) as ei:
        Completion.parse("<html>bad gateway</html>")
    assert ei.value.kind is ResponseErrorKind.MALFORMED_JSON  # nosec B101
    assert ei.value.context == "<html>bad gateway</html>"  # nosec B101

    with pytest.raises(ResponseError) as ei:
        Completion.parse(json.dumps({"error": {"message": "bad model", "type": "invalid_request_error"}}))
    assert ei.value.kind is ResponseErrorKind.PROVIDER_ERROR  # nosec B101
    assert ei.value.code is ErrorCode.VALIDATION  # nosec B101


# ---- chunks / delta channels ----

@pytest.mark.parametrize(
    "delta, expected",
    [
        ({"content": "hi"}, Content(text="hi")),
        ({"reasoning_content": "hmm"}, ReasoningContent(text="hmm")),
        ({"content": None, "reasoning_content": "hmm"}, ReasoningContent(text="hmm")),
        ({"content": "", "reasoning_content": "hmm"}, ReasoningContent(text="hmm")),
        ({"content": "hi", "reasoning_content": None}, Content(text="hi")),
        ({"content": "hi", "reasoning_content": "hmm"}, Content(text="hi")),
        ({"content": "", "reasoning_content": None}, Content(text="")),
        ({"role": "assistant"}, None),
        ({"content": None, "reasoning_content": None}, None),
    ],
)
def test_delta_channel_selection(delta, expected):
    assert Delta.model_validate(delta).content == expected  # nosec B101


def test_delta_serializes_to_its_channel_key():
    reasoning = Delta.model_validate({"content": None, "reasoning_content": "hmm"})
    assert reasoning.to_dict() == {"content": None, "reasoning_content": "hmm"}  # nosec B101
    only_reasoning = Delta.model_validate({"reasoning_content": "hmm"})
    assert only_reasoning.to_dict() == {"reasoning_content": "hmm"}  # nosec B101
    answer = Delta.model_validate({"role": "assistant", "content": "hi"})
    assert answer.to_dict() == {"role": "assistant", "content": "hi"}  # nosec B101
    assert answer.text == "hi" and answer.reasoning is None  # nosec B101


def test_select_channel_rejects_non_text():
    with pytest.raises(ValueError):
        select_channel(5, None)


def test_chunk_with_non_text_content_is_schema_mismatch():
    with pytest.raises(ResponseError) as ei:
        ChatCompletionChunk.parse(json.dumps(chunk({"content": 5})))
    assert ei.value.kind is ResponseErrorKind.SCHEMA_MISMATCH  # nosec B101


def test_chunk_keeps_vendor_keys():
    parsed = ChatCompletionChunk.parse(json.dumps(chunk({"content": "x"}, x_trace="t1")))
    assert parsed.to_dict()["x_trace"] == "t1"  # nosec B101


def test_chunk_round_trip_keeps_explicit_null_content():
    raw = chunk({"role": "assistant", "content": None, "reasoning_content": "think"})
    parsed = ChatCompletionChunk.parse(json.dumps(raw))
    assert parsed.choices[0].delta.reasoning == "think"  # nosec B101
    assert parsed.to_dict()["choices"][0]["delta"] == raw["choices"][0]["delta"]  # nosec B101
