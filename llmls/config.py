"""llmls Configuration.

Includes:
- AppConfig: Application settings with environment variable and YAML file support
- resolve_ollama_host: Local server address resolution

Environment Variables:
    LLMLS_OPENROUTER_URL: OpenRouter models endpoint
    LLMLS_OPENROUTER_TIMEOUT: Timeout in seconds for the OpenRouter request
    LLMLS_OLLAMA_HOST / OLLAMA_HOST: Ollama server URL
    LLMLS_OLLAMA_TIMEOUT: Timeout in seconds for the Ollama request
    LLMLS_DEFAULT_TERMINAL_WIDTH: Width used when stdout is not a terminal
    LLMLS_LOG_DIR: Directory for the rotating log file
    LLMLS_DEBUG: Enable DEBUG level logging
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import ConfigError

OPENROUTER_MODELS_URL = "https://openrouter.ai/api/v1/models"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_CONFIG_PATH = Path("~/.llmls/config.yaml")


class AppConfig(BaseSettings):
    """Application configuration with environment variable support.

    Configuration is loaded from environment variables with LLMLS_ prefix.
    For example, LLMLS_OLLAMA_TIMEOUT sets ollama_timeout. The Ollama host
    also honours the standard OLLAMA_HOST variable.

    Precedence (highest to lowest):
        1. Environment variables (LLMLS_*, OLLAMA_HOST)
        2. Config file (~/.llmls/config.yaml)
        3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="LLMLS_",
        extra="ignore",
        populate_by_name=True,
    )

    openrouter_url: str = OPENROUTER_MODELS_URL
    openrouter_timeout: float = 30.0

    ollama_host: str = Field(
        default=DEFAULT_OLLAMA_HOST,
        validation_alias=AliasChoices("LLMLS_OLLAMA_HOST", "OLLAMA_HOST"),
    )
    ollama_timeout: float = 3.0

    default_terminal_width: int = 120

    log_dir: Path = Field(default_factory=lambda: Path("~/.llmls/logs").expanduser())
    debug: bool = False

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """Load configuration, layering a YAML file under the environment.

        Keys in the file only apply to settings the environment left unset.
        Unknown keys are ignored.

        Args:
            path: Config file to read. Defaults to ~/.llmls/config.yaml

        Returns:
            AppConfig with file values applied (or plain defaults if no file exists)

        Raises:
            ConfigError: If the file cannot be read, or the file or the
                environment holds invalid values
        """
        from ruamel.yaml import YAML
        from ruamel.yaml.error import YAMLError

        config_file = (path or DEFAULT_CONFIG_PATH).expanduser()
        try:
            config = cls()
        except ValidationError as e:
            raise ConfigError(f"Invalid environment setting: {e}") from e

        if not config_file.exists():
            return config

        yaml = YAML()
        try:
            with config_file.open() as f:
                data = yaml.load(f)
        except (OSError, YAMLError) as e:
            raise ConfigError(f"Failed to read {config_file}: {e}") from e

        if data is None:
            return config
        if not isinstance(data, dict):
            raise ConfigError(f"{config_file} must contain a mapping of settings")

        overrides: dict[str, Any] = {
            key: value
            for key, value in data.items()
            if key in cls.model_fields and key not in config.model_fields_set
        }
        if not overrides:
            return config

        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ConfigError(f"Invalid setting in {config_file}: {e}") from e


def normalize_host(host: str) -> str:
    """Add a missing scheme and strip trailing slashes from a server address."""
    host = host.strip()
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")


def resolve_ollama_host(flag_host: Optional[str], config: AppConfig) -> str:
    """Resolve the Ollama server address.

    Priority: 1. Explicit flag, 2. Environment / config file, 3. Default.
    Steps 2 and 3 are already folded into ``config.ollama_host``.

    Args:
        flag_host: Address given on the command line, if any
        config: Loaded application configuration

    Returns:
        Normalized server URL
    """
    if flag_host:
        return normalize_host(flag_host)
    return normalize_host(config.ollama_host or DEFAULT_OLLAMA_HOST)


__all__ = [
    "AppConfig",
    "DEFAULT_OLLAMA_HOST",
    "OPENROUTER_MODELS_URL",
    "normalize_host",
    "resolve_ollama_host",
]
