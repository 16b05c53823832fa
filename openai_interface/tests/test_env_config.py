"""Provider configuration merge order and credential resolution."""

from __future__ import annotations

import json

from openai_interface.config import chat_completions_url, get_model, get_provider_config
from openai_interface.config.defaults import DEEPSEEK_REASONER_MODEL
from openai_interface.config.env import (
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def test_defaults_without_environment():
    cfg = get_provider_config("deepseek")
    assert cfg["base_url"] == "https://api.deepseek.com"  # nosec B101 - asserts are appropriate in unit tests
    assert cfg["model"] == "deepseek-chat"  # nosec B101
    assert "api_key" not in cfg  # nosec B101


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_MODEL", DEEPSEEK_REASONER_MODEL)
    monkeypatch.setenv("DEEPSEEK_BASE_URL", "https://proxy.internal/v1")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-real-123")
    cfg = get_provider_config("DeepSeek")
    assert cfg["model"] == "deepseek-reasoner"  # nosec B101
    assert cfg["base_url"] == "https://proxy.internal/v1"  # nosec B101
    assert cfg["api_key"] == "sk-real-123"  # nosec B101
    assert get_model("deepseek") == "deepseek-reasoner"  # nosec B101


def test_placeholder_keys_are_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "your_openai_key_here")
    assert "api_key" not in get_provider_config("openai")  # nosec B101
    assert is_placeholder("changeme") and is_placeholder("test_abc")  # nosec B101
    assert not is_placeholder("sk-abc")  # nosec B101
    assert not is_placeholder(None)  # nosec B101


def test_qwen_accepts_dashscope_and_alias(monkeypatch):
    assert get_env_var_name("qwen") == "DASHSCOPE_API_KEY"  # nosec B101
    assert list(get_env_var_candidates("qwen")) == ["DASHSCOPE_API_KEY", "QWEN_API_KEY"]  # nosec B101
    monkeypatch.setenv("QWEN_API_KEY", "sk-qwen")
    assert resolve_provider_key("qwen") == ("sk-qwen", "QWEN_API_KEY")  # nosec B101
    monkeypatch.setenv("DASHSCOPE_API_KEY", "sk-dash")
    assert resolve_provider_key("qwen") == ("sk-dash", "DASHSCOPE_API_KEY")  # nosec B101
    assert resolve_provider_key("unknown") == (None, None)  # nosec B101


def test_yaml_config_file_sits_between_defaults_and_env(monkeypatch, tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "qwen:\n  base_url: https://dashscope-intl.aliyuncs.com/compatible-mode/v1\n  model: qwen-max\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("OPENAI_INTERFACE_CONFIG_FILE", str(path))
    cfg = get_provider_config("qwen")
    assert cfg["base_url"].startswith("https://dashscope-intl")  # nosec B101
    assert cfg["model"] == "qwen-max"  # nosec B101
    monkeypatch.setenv("QWEN_MODEL", "qwen-turbo")
    assert get_provider_config("qwen")["model"] == "qwen-turbo"  # nosec B101


def test_json_config_file_and_overrides(monkeypatch, tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"openai": {"model": "gpt-4.1"}}), encoding="utf-8")
    monkeypatch.setenv("OPENAI_INTERFACE_CONFIG_FILE", str(path))
    assert get_provider_config("openai")["model"] == "gpt-4.1"  # nosec B101
    cfg = get_provider_config("openai", overrides={"model": "o3-mini", "base_url": None})
    assert cfg["model"] == "o3-mini"  # nosec B101
    assert cfg["base_url"] == "https://api.openai.com/v1"  # nosec B101


def test_unreadable_config_file_is_ignored(monkeypatch, tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("openai: [unclosed", encoding="utf-8")
    monkeypatch.setenv("OPENAI_INTERFACE_CONFIG_FILE", str(path))
    assert get_provider_config("openai")["model"] == "gpt-4o-mini"  # nosec B101


def test_chat_completions_url_is_idempotent():
    assert chat_completions_url("https://api.deepseek.com") == "https://api.deepseek.com/chat/completions"  # nosec B101
    assert chat_completions_url("https://x.test/v1/") == "https://x.test/v1/chat/completions"  # nosec B101
    assert chat_completions_url("https://x.test/v1/chat/completions") == "https://x.test/v1/chat/completions"  # nosec B101
