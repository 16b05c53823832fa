"""Canned provider payloads shared by the test suite.

Shapes follow what DeepSeek and Qwen (DashScope compatible mode) actually send:
DeepSeek carries both ``content`` and ``reasoning_content`` with one of them
null, Qwen sends an empty ``content`` string while it is thinking.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

CHUNK_ID = "chatcmpl-fixture"
CREATED = 1700000000


def chunk(
    delta: Dict[str, Any],
    *,
    model: str = "deepseek-reasoner",
    finish_reason: Optional[str] = None,
    index: int = 0,
    **extra: Any,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": CHUNK_ID,
        "object": "chat.completion.chunk",
        "created": CREATED,
        "model": model,
        "choices": [{"index": index, "delta": delta, "logprobs": None, "finish_reason": finish_reason}],
    }
    data.update(extra)
    return data


def usage_chunk(model: str = "deepseek-reasoner") -> Dict[str, Any]:
    return {
        "id": CHUNK_ID,
        "object": "chat.completion.chunk",
        "created": CREATED,
        "model": model,
        "choices": [],
        "usage": {
            "prompt_tokens": 12,
            "completion_tokens": 9,
            "total_tokens": 21,
            "prompt_cache_hit_tokens": 0,
            "prompt_cache_miss_tokens": 12,
            "completion_tokens_details": {"reasoning_tokens": 4},
        },
    }


def sse(payloads: Iterable[Any], *, done: bool = True, newline: str = "\n") -> bytes:
    """Render payloads as an SSE body; dicts are JSON encoded."""
    blocks: List[str] = []
    for payload in payloads:
        text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
        blocks.append(f"data: {text}{newline}{newline}")
    if done:
        blocks.append(f"data: [DONE]{newline}{newline}")
    return "".join(blocks).encode("utf-8")


# DeepSeek reasoner: two reasoning deltas, three answer deltas, then usage.
DEEPSEEK_REASONER_CHUNKS: List[Dict[str, Any]] = [
    chunk({"role": "assistant", "content": None, "reasoning_content": "Let me"}),
    chunk({"content": None, "reasoning_content": " think."}),
    chunk({"content": "Hello", "reasoning_content": None}),
    chunk({"content": " world", "reasoning_content": None}),
    chunk({"content": "", "reasoning_content": None}, finish_reason="stop"),
    usage_chunk(),
]
DEEPSEEK_REASONER_SSE = sse(DEEPSEEK_REASONER_CHUNKS)

# Qwen3 with enable_thinking: empty content while reasoning.
QWEN_THINKING_CHUNKS: List[Dict[str, Any]] = [
    chunk({"role": "assistant", "content": "", "reasoning_content": "思考"}, model="qwen-plus"),
    chunk({"content": "", "reasoning_content": "中"}, model="qwen-plus"),
    chunk({"content": "答案", "reasoning_content": None}, model="qwen-plus"),
    chunk({"content": ""}, model="qwen-plus", finish_reason="stop"),
]
QWEN_THINKING_SSE = sse(QWEN_THINKING_CHUNKS)

TOOL_CALL_CHUNKS: List[Dict[str, Any]] = [
    chunk(
        {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {"index": 0, "id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": ""}}
            ],
        },
        model="gpt-4o-mini",
    ),
    chunk({"tool_calls": [{"index": 0, "function": {"arguments": '{"city":'}}]}, model="gpt-4o-mini"),
    chunk(
        {"tool_calls": [{"index": 0, "function": {"arguments": '"Paris"}'}}]},
        model="gpt-4o-mini",
        finish_reason="tool_calls",
    ),
]

COMPLETION: Dict[str, Any] = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "created": CREATED,
    "model": "deepseek-reasoner",
    "choices": [
        {
            "index": 0,
            "message": {
                "role": "assistant",
                "content": "4",
                "reasoning_content": "2 + 2 is 4.",
                "x_vendor_note": "kept",
            },
            "logprobs": None,
            "finish_reason": "stop",
        }
    ],
    "usage": {
        "prompt_tokens": 10,
        "completion_tokens": 6,
        "total_tokens": 16,
        "prompt_cache_hit_tokens": 0,
        "prompt_cache_miss_tokens": 10,
        "completion_tokens_details": {"reasoning_tokens": 5},
    },
    "system_fingerprint": "fp_fixture",
    "x_request_meta": {"region": "cn", "shards": [1, 2]},
}
COMPLETION_JSON = json.dumps(COMPLETION, ensure_ascii=False)

EMPTY_CHOICES_JSON = json.dumps(
    {"id": "chatcmpl-empty", "object": "chat.completion", "created": CREATED, "model": "m", "choices": []}
)

AUTH_ERROR_BODY = {"error": {"message": "Invalid API key", "type": "authentication_error", "code": "invalid_api_key"}}
