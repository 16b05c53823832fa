"""openai_interface.config.env
============================

Environment variable mapping for provider credentials.

Design Notes
------------
- ``ENV_MAP`` holds the canonical variable per provider; ``ENV_ALIASES``
  lists every accepted name with the canonical one first.
- Values that look like placeholders (``changeme``, ``test_...``) are skipped
  so a template ``.env`` never produces a bogus ``Authorization`` header.

Failure Modes
-------------
Helpers never raise for unknown providers or unset variables; they return
``None`` and let the caller decide.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "qwen": "DASHSCOPE_API_KEY",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "qwen": ("DASHSCOPE_API_KEY", "QWEN_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder rather than a real key.

    Case-insensitive match on 'placeholder', 'changeme', 'example', 'your_'
    or a 'test_' prefix.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("your_")
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for ``provider``."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield accepted variable names for ``provider``, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``provider`` from the process environment.

    Returns:
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        value, or ``(None, None)``.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
