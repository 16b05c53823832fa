"""CLI action handlers.

Purpose
-------
Turn parsed arguments into a ``RequestBody`` and either print it (dry-run, the
default) or send it through :class:`ChatCompletionsClient`.

Fallback & Error Semantics
--------------------------
- Dry-run never touches the network; it reports the resolved endpoint, the
  JSON payload and whether a key was found (never the key itself).
- Execution errors are printed as JSON to stderr. Exit codes: ``0`` success,
  ``1`` request/response failure, ``2`` usage problems (missing key or prompt, or an argument the request
  model rejects, such as an out-of-range ``--temperature``).
- When streaming, answer text goes to stdout as it arrives; reasoning text
  goes to stderr with ``--reasoning``.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.errors import OpenAIInterfaceError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    ExtraBody,
    Message,
    RequestBody,
    StreamOptions,
    SystemMessage,
    UserMessage,
)
from ..chat import ChatCompletionsClient
from ..config import chat_completions_url, get_provider_config
from ..config.env import get_env_var_candidates


def build_body(args: argparse.Namespace, model: str, system_message: Optional[str]) -> RequestBody:
    """Build the request body described by ``args`` for ``model``."""
    messages: List[Message] = []
    system = args.system or system_message
    if system:
        messages.append(SystemMessage(content=system))
    messages.append(UserMessage(content=args.prompt or ""))
    extra = ExtraBody(enable_thinking=args.thinking) if args.thinking is not None else None
    return RequestBody(
        messages=messages,
        model=model,
        stream=bool(args.stream),
        max_tokens=args.max_tokens,
        temperature=args.temperature,
        stream_options=StreamOptions(include_usage=True) if args.stream else None,
        extra_body=extra,
    )


def plan_chat(args: argparse.Namespace) -> Dict[str, Any]:
    """Return a JSON-serializable summary of the call without any I/O."""
    cfg = get_provider_config(args.provider, overrides={"base_url": args.base_url, "model": args.model})
    body = build_body(args, cfg.get("model") or "", cfg.get("system_message"))
    return {
        "provider": args.provider,
        "endpoint": chat_completions_url(cfg["base_url"]),
        "model": body.model,
        "stream": body.stream,
        "api_key_present": bool(cfg.get("api_key")),
        "payload": body.to_payload(),
    }


def _print_invalid_arguments(err: ValidationError) -> None:
    details = [
        {"field": ".".join(str(part) for part in e["loc"]), "message": e["msg"]}
        for e in err.errors(include_url=False)
    ]
    print(json.dumps({"error": "invalid_arguments", "details": details}, ensure_ascii=False), file=sys.stderr)


def _print_error(err: Exception) -> None:
    payload: Dict[str, Any] = {"error": str(err)}
    if isinstance(err, OpenAIInterfaceError):
        payload["code"] = err.code.value
        payload["kind"] = err.kind.value  # type: ignore[attr-defined]
    print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)


def _run_stream(client: ChatCompletionsClient, body: RequestBody, args: argparse.Namespace) -> int:
    with client.stream(body) as chunks:
        if args.json:
            acc = chunks.accumulate()
            summary = {
                "id": acc.id,
                "model": acc.model,
                "content": acc.content,
                "reasoning_content": acc.reasoning_content or None,
                "finish_reason": acc.finish_reason,
                "tool_calls": acc.tool_calls or None,
                "usage": acc.usage.to_dict() if acc.usage else None,
            }
            print(json.dumps({k: v for k, v in summary.items() if v is not None}, ensure_ascii=False))
            return 0
        for item in chunks:
            chunk = item.unwrap()
            for choice in chunk.choices:
                if choice.delta.reasoning and args.reasoning:
                    sys.stderr.write(choice.delta.reasoning)
                    sys.stderr.flush()
                if choice.delta.text:
                    sys.stdout.write(choice.delta.text)
                    sys.stdout.flush()
    sys.stdout.write("\n")
    return 0


def _run_once(client: ChatCompletionsClient, body: RequestBody, args: argparse.Namespace) -> int:
    completion = client.create(body)
    if args.json:
        print(completion.to_json())
        return 0
    if args.reasoning and completion.reasoning_text:
        print(completion.reasoning_text, file=sys.stderr)
    print(completion.text or "")
    return 0


def execute_chat(args: argparse.Namespace, *, transport: Optional[httpx.BaseTransport] = None) -> int:
    """Send the request described by ``args``.

    ``transport`` is handed to the driver's ``httpx.Client`` (tests pass an
    ``httpx.MockTransport``).
    """
    if not args.prompt:
        print(json.dumps({"error": "--prompt is required with --execute"}), file=sys.stderr)
        return 2
    cfg = get_provider_config(args.provider, overrides={"base_url": args.base_url, "model": args.model})
    if not cfg.get("api_key"):
        hint = {
            "error": MISSING_API_KEY_ERROR,
            "message": f"missing API key for provider '{args.provider}'",
            "set_one_of_env": list(get_env_var_candidates(args.provider)),
        }
        print(json.dumps(hint), file=sys.stderr)
        return 2

    try:
        body = build_body(args, cfg.get("model") or "", cfg.get("system_message"))
    except ValidationError as err:
        _print_invalid_arguments(err)
        return 2
    logger = get_logger(f"openai_interface.cli.{args.provider}")
    ctx = LogContext(provider=args.provider, model=body.model)
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1, emitted=None, tokens=None)
    client = ChatCompletionsClient(
        cfg["base_url"], cfg["api_key"], provider=args.provider, transport=transport
    )
    try:
        with client:
            code = _run_stream(client, body, args) if body.stream else _run_once(client, body, args)
    except OpenAIInterfaceError as err:
        normalized_log_event(
            logger,
            "cli.error",
            ctx,
            phase="finalize",
            error_code=err.code.value,
            emitted=False,
        )
        _print_error(err)
        return 1
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=True)
    return code


def handle_chat(args: argparse.Namespace, *, transport: Optional[httpx.BaseTransport] = None) -> int:
    """Execute the ``chat`` subcommand (dry-run unless ``--execute``)."""
    if not args.execute:
        try:
            plan = plan_chat(args)
        except ValidationError as err:
            _print_invalid_arguments(err)
            return 2
        print(json.dumps(plan, ensure_ascii=False))
        return 0
    return execute_chat(args, transport=transport)


__all__ = ["build_body", "plan_chat", "execute_chat", "handle_chat"]
