"""CLI parser construction for ``python -m openai_interface``.

Wires arguments only; handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config import DEFAULTS
from ..config.defaults import CLI_DEFAULT_PROVIDER


def _str2bool(v: str | None) -> bool:
    """Permissive truthy/falsey parsing for optional boolean flags.

    ``None`` (flag given without a value) means ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream [BOOL]`` and its ``--no-stream`` negation."""
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=False)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with the ``chat`` subcommand."""
    p = argparse.ArgumentParser(
        prog="openai-interface",
        description="OpenAI-compatible chat completions CLI (safe by default: dry-run)",
    )
    sub = p.add_subparsers(dest="cmd")

    p_chat = sub.add_parser("chat", help="Show or send a single chat completion request (default)")
    p_chat.add_argument("--provider", default=CLI_DEFAULT_PROVIDER, choices=sorted(DEFAULTS))
    p_chat.add_argument("--model", default=None)
    p_chat.add_argument("--base-url", default=None)
    p_chat.add_argument("--prompt", default=None)
    p_chat.add_argument("--system", default=None, help="System message (defaults to provider config)")
    p_chat.add_argument("--max-tokens", type=int, default=None)
    p_chat.add_argument("--temperature", type=float, default=None)
    p_chat.add_argument(
        "--thinking",
        nargs="?",
        const=True,
        type=_str2bool,
        default=None,
        help="Send enable_thinking (Qwen3 hybrid thinking)",
    )
    add_stream_flags(p_chat)
    p_chat.add_argument("--reasoning", action="store_true", help="Print reasoning text to stderr")
    p_chat.add_argument("--execute", action="store_true", help="Perform the HTTP call")
    p_chat.add_argument("--json", action="store_true", help="Print the full JSON result")
    return p


__all__ = ["build_parser", "add_stream_flags", "_str2bool"]
