"""Shared fixtures for llmls tests."""

from __future__ import annotations

import pytest

_ENV_VARS = (
    "OLLAMA_HOST",
    "LLMLS_OLLAMA_HOST",
    "LLMLS_OPENROUTER_URL",
    "LLMLS_OPENROUTER_TIMEOUT",
    "LLMLS_OLLAMA_TIMEOUT",
    "LLMLS_DEFAULT_TERMINAL_WIDTH",
    "LLMLS_LOG_DIR",
    "LLMLS_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of configuration tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
