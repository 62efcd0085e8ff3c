"""Exceptions raised by llmls.

Only failures the user has to hear about are modelled here. The local
Ollama source has no error type at all: it returns an empty list instead.
"""

from __future__ import annotations


class LlmlsError(Exception):
    """Base exception for llmls errors."""

    pass


class RegistryError(LlmlsError):
    """The primary model registry could not be fetched or parsed.

    Raised for transport errors, non-2xx responses and payloads that
    are not the expected JSON document.
    """

    pass


class ConfigError(LlmlsError):
    """The configuration file exists but could not be read."""

    pass


__all__ = ["LlmlsError", "RegistryError", "ConfigError"]
