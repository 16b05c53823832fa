"""openai_interface.config.defaults
================================

Default endpoints and models for the OpenAI-compatible providers known to the
package. Plain constants only (no I/O, no imports from other subpackages);
the values are overridable through the config file, env vars or arguments.
"""

from __future__ import annotations

# ---- CLI Defaults ----
# Provider selected by the debugging CLI when none is given.
CLI_DEFAULT_PROVIDER = "deepseek"


# ---- Provider endpoints ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# DeepSeek also serves /v1; the bare host is its documented base URL.
DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_REASONER_MODEL = "deepseek-reasoner"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com"

# Qwen through DashScope's OpenAI-compatible mode.
QWEN_DEFAULT_MODEL = "qwen-plus"
QWEN_DEFAULT_BASE_URL = "https://dashscope.aliyuncs.com/compatible-mode/v1"


__all__ = [
    "CLI_DEFAULT_PROVIDER",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_MODEL",
    "DEEPSEEK_REASONER_MODEL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "QWEN_DEFAULT_MODEL",
    "QWEN_DEFAULT_BASE_URL",
]
