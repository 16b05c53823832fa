"""Debugging CLI (package entrypoint).

Public API:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_chat, plan_chat
from .cli_parser import build_parser

_COMMANDS = {"chat"}


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint; returns the process exit code.

    ``chat`` is injected when the first argument is not a known subcommand.
    """
    p = build_parser()
    argv_list = list(sys.argv[1:] if argv is None else argv)
    if not argv_list or argv_list[0] not in _COMMANDS and argv_list[0] not in {"-h", "--help"}:
        argv_list = ["chat"] + argv_list
    args = p.parse_args(argv_list)
    return handle_chat(args)


__all__ = ["main", "plan_chat"]
