"""Pytest configuration for the openai_interface test suite.

Every test starts from an environment without provider credentials, config
file or timeout overrides, so results never depend on the developer's shell.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, List

import pytest

from openai_interface.base.logging import BASE_LOGGER_NAME, get_logger

_ISOLATED_ENV = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OPENAI_SYSTEM_MESSAGE",
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_MODEL",
    "DEEPSEEK_BASE_URL",
    "DEEPSEEK_SYSTEM_MESSAGE",
    "DASHSCOPE_API_KEY",
    "QWEN_API_KEY",
    "QWEN_MODEL",
    "QWEN_BASE_URL",
    "QWEN_SYSTEM_MESSAGE",
    "OPENAI_INTERFACE_CONFIG_FILE",
    "OPENAI_INTERFACE_LOG_LEVEL",
    "OPENAI_INTERFACE_TIMEOUT_CONNECT",
    "OPENAI_INTERFACE_TIMEOUT_READ",
    "OPENAI_INTERFACE_TIMEOUT_WRITE",
    "OPENAI_INTERFACE_TIMEOUT_POOL",
    "OPENAI_INTERFACE_TIMEOUT_STREAM_READ",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove credentials and package settings from the process environment."""

    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    yield


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - trivial
        self.messages.append(record.getMessage())

    def events(self) -> List[dict]:
        """Return the structured payloads emitted by ``log_event``."""
        out = []
        for message in self.messages:
            try:
                out.append(json.loads(message))
            except ValueError:
                continue
        return out


@pytest.fixture()
def log_events() -> Iterator[_ListHandler]:
    """Capture structured events written under the package base logger."""

    get_logger()
    base = logging.getLogger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
