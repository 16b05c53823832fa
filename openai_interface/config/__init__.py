"""Configuration layer for OpenAI-compatible providers.

Goals
-----
* Centralize per-provider defaults (base URL, model).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional config file (JSON or YAML) named by OPENAI_INTERFACE_CONFIG_FILE
    3. Environment variables (e.g. DEEPSEEK_MODEL, QWEN_BASE_URL)
    4. API key from the credential env vars in ``config.env`` (if still unset)
    5. In-code overrides (``None`` values ignored)
* Provide a single call site: ``get_provider_config(provider)``.

The package core never reads configuration; only the driver's
``from_provider`` constructor and the CLI do.

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_API_KEY, <PROVIDER>_BASE_URL,
<PROVIDER>_SYSTEM_MESSAGE, e.g. OPENAI_MODEL, DEEPSEEK_BASE_URL.

Config File
-----------
JSON is tried first, then YAML. Example::

    deepseek:
      model: deepseek-reasoner
    qwen:
      base_url: https://dashscope-intl.aliyuncs.com/compatible-mode/v1

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* chat_completions_url(base_url: str) -> str
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..base.constants import CHAT_COMPLETIONS_PATH
from .defaults import (
    DEEPSEEK_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    QWEN_DEFAULT_BASE_URL,
    QWEN_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key

CONFIG_FILE_ENV = "OPENAI_INTERFACE_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "deepseek": {"model": DEEPSEEK_DEFAULT_MODEL, "base_url": DEEPSEEK_DEFAULT_BASE_URL},
    "qwen": {"model": QWEN_DEFAULT_MODEL, "base_url": QWEN_DEFAULT_BASE_URL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "system_message": "SYSTEM_MESSAGE",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load (and cache per path) the file named by ``OPENAI_INTERFACE_CONFIG_FILE``.

    A missing file, unparseable content or a non-mapping document yields ``{}``.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - documented module cache
    path = os.getenv(CONFIG_FILE_ENV) or ""
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    p = Path(path) if path else None
    if p is not None and p.is_file():
        text = p.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    _FILE_CACHE_PATH = path
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and not (field == "api_key" and is_placeholder(val)):
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for ``provider`` (see module docstring for order)."""
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if not cfg.get("api_key"):
        key, _ = resolve_provider_key(name)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def chat_completions_url(base_url: str) -> str:
    """Join ``base_url`` with ``/chat/completions`` (idempotent)."""
    base = base_url.rstrip("/")
    if base.endswith(CHAT_COMPLETIONS_PATH):
        return base
    return base + CHAT_COMPLETIONS_PATH


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "ENV_FIELD_MAP",
    "get_provider_config",
    "get_model",
    "chat_completions_url",
]
