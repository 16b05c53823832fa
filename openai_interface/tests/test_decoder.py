"""Frame decoding: sentinel, per-frame errors and truncation."""

from __future__ import annotations

import json

from openai_interface.base.errors import ErrorCode, ResponseErrorKind
from openai_interface.base.streaming import StreamItem, decode_frames, iter_sse_frames
from openai_interface.tests.fixtures import DEEPSEEK_REASONER_CHUNKS, DEEPSEEK_REASONER_SSE, chunk


def _frame(delta):
    return json.dumps(chunk(delta))


def test_done_ends_the_sequence_and_later_frames_are_ignored():
    frames = [_frame({"content": "a"}), "[DONE]", _frame({"content": "never"})]
    items = list(decode_frames(frames))
    assert len(items) == 1  # nosec B101 - asserts are appropriate in unit tests
    assert items[0].unwrap().choices[0].delta.text == "a"  # nosec B101


def test_full_fixture_decodes_without_errors():
    items = list(decode_frames(iter_sse_frames([DEEPSEEK_REASONER_SSE])))
    assert len(items) == len(DEEPSEEK_REASONER_CHUNKS)  # nosec B101
    assert not any(i.is_error() for i in items)  # nosec B101
    assert items[-1].unwrap().choices == []  # nosec B101
    assert items[-1].unwrap().usage.total_tokens == 21  # nosec B101


def test_malformed_frame_yields_one_error_and_decoding_continues():
    frames = [_frame({"content": "a"}), "{not json", _frame({"content": "b"}), "[DONE]"]
    items = list(decode_frames(frames))
    assert [i.is_error() for i in items] == [False, True, False]  # nosec B101
    err = items[1].error
    assert err.kind is ResponseErrorKind.MALFORMED_JSON  # nosec B101
    assert err.context == "{not json"  # nosec B101
    assert err.code is ErrorCode.DECODE  # nosec B101
    assert items[2].unwrap().choices[0].delta.text == "b"  # nosec B101


def test_schema_mismatch_is_reported_per_frame():
    frames = [json.dumps({"id": "x"}), "[DONE]"]
    (item,) = list(decode_frames(frames))
    assert item.error.kind is ResponseErrorKind.SCHEMA_MISMATCH  # nosec B101


def test_provider_error_object_in_stream():
    frames = [json.dumps({"error": {"message": "overloaded", "type": "server_error"}}), "[DONE]"]
    (item,) = list(decode_frames(frames))
    assert item.error.kind is ResponseErrorKind.PROVIDER_ERROR  # nosec B101
    assert item.error.provider_error["message"] == "overloaded"  # nosec B101
    assert item.error.code is ErrorCode.UNAVAILABLE  # nosec B101


def test_missing_done_yields_truncated_stream_error():
    items = list(decode_frames([_frame({"content": "a"})]))
    assert items[0].unwrap().choices[0].delta.text == "a"  # nosec B101
    assert items[-1].error.kind is ResponseErrorKind.TRUNCATED_STREAM  # nosec B101
    assert items[-1].error.retryable is True  # nosec B101


def test_empty_payloads_are_skipped():
    items = list(decode_frames(["", _frame({"content": "a"}), "", "[DONE]"]))
    assert len(items) == 1  # nosec B101


def test_frame_level_errors_pass_through():
    bad = list(iter_sse_frames([b"data: \xff\n\n"]))[0]
    items = list(decode_frames([bad, StreamItem.ok("[DONE]")]))
    assert len(items) == 1  # nosec B101
    assert items[0].error.kind is ResponseErrorKind.MALFORMED_FRAME  # nosec B101
