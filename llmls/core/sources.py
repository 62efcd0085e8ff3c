"""Catalog sources for llmls.

Fetches model lists from two places:
1. OpenRouter registry - required; failures are reported to the caller
2. Ollama API - optional; any failure yields an empty list

Both requests are plain blocking GETs made one after the other.

Example:
    catalog = ModelCatalog(AppConfig.load())
    for model in catalog.fetch_all():
        print(model.id, model.provider)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from .errors import RegistryError
from .models import (
    ModelRecord,
    OllamaTagsResponse,
    OpenRouterResponse,
    record_from_ollama,
)

if TYPE_CHECKING:
    from ..config import AppConfig

logger = logging.getLogger(__name__)


# =============================================================================
# OpenRouter
# =============================================================================


def fetch_openrouter_models(url: str, timeout: float = 30.0) -> list[ModelRecord]:
    """Fetch the model registry from OpenRouter.

    Args:
        url: Models endpoint URL
        timeout: Request timeout in seconds

    Returns:
        List of ModelRecord in registry order

    Raises:
        RegistryError: If the request fails, returns a non-2xx status,
            or the body is not a valid models document
    """
    logger.debug(f"Fetching registry from {url}")
    try:
        with httpx.Client(timeout=timeout) as client:
            resp = client.get(url)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as e:
        raise RegistryError(f"API returned status {e.response.status_code}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise RegistryError(f"failed to fetch models: {e}") from e
    except ValueError as e:
        raise RegistryError(f"failed to parse JSON: {e}") from e

    try:
        models = OpenRouterResponse.model_validate(data).data
    except ValueError as e:
        raise RegistryError(f"failed to parse JSON: {e}") from e

    logger.info(f"Fetched {len(models)} models from registry")
    return models


# =============================================================================
# Ollama
# =============================================================================


def fetch_ollama_models(host: str, timeout: float = 3.0) -> list[ModelRecord]:
    """Fetch local models from an Ollama server.

    Makes GET request to the /api/tags endpoint. Never raises: an
    unreachable server, an error status or a malformed body all produce
    an empty list.

    Args:
        host: Ollama server URL (e.g., http://localhost:11434)
        timeout: Request timeout in seconds

    Returns:
        List of ModelRecord with local_details set. Empty list if unavailable.
    """
    try:
        with httpx.Client(timeout=timeout) as client:
            resp = client.get(f"{host.rstrip('/')}/api/tags")
            resp.raise_for_status()
            payload = OllamaTagsResponse.model_validate(resp.json())
    except (httpx.HTTPError, httpx.InvalidURL, ValueError):
        return []

    return [record_from_ollama(model) for model in payload.models]


# =============================================================================
# ModelCatalog
# =============================================================================


class ModelCatalog:
    """Merged model list from the registry and the local server.

    Registry records come first, local records are appended after them.
    Records are not de-duplicated by id.

    Example:
        catalog = ModelCatalog(config, ollama_host="http://gpu-box:11434")
        models = catalog.fetch_all()
    """

    def __init__(
        self,
        config: AppConfig,
        ollama_host: str | None = None,
        include_ollama: bool = True,
    ):
        """Initialize the catalog.

        Args:
            config: Application configuration (URLs and timeouts)
            ollama_host: Resolved Ollama address. Default: config.ollama_host
            include_ollama: Set False to skip the local server entirely
        """
        self.config = config
        self.ollama_host = ollama_host or config.ollama_host
        self.include_ollama = include_ollama

    def fetch_all(self) -> list[ModelRecord]:
        """Fetch both sources and merge them.

        Returns:
            Registry records followed by local records

        Raises:
            RegistryError: If the registry fetch fails
        """
        models = list(
            fetch_openrouter_models(
                self.config.openrouter_url, timeout=self.config.openrouter_timeout
            )
        )

        if self.include_ollama:
            models.extend(
                fetch_ollama_models(self.ollama_host, timeout=self.config.ollama_timeout)
            )

        return models


__all__ = [
    "fetch_openrouter_models",
    "fetch_ollama_models",
    "ModelCatalog",
]
