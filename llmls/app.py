"""llmls entry point."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .config import AppConfig
from .core.errors import ConfigError

_MANAGED_HANDLER_FLAG = "_llmls_managed_handler"


def setup_logging(log_dir: Path, debug: bool = False) -> logging.Logger:
    """Configure logging with rotation.

    Logs are written to <log_dir>/llmls.log with owner-only permissions.
    Uses INFO level by default; DEBUG when debug is set (LLMLS_DEBUG=1).
    Nothing is logged to the terminal, so model listings stay clean.

    Args:
        log_dir: Directory for the log file
        debug: Enable DEBUG level

    Returns:
        Logger for this module
    """
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    # Restrict directory permissions to owner only (700)
    log_dir.chmod(0o700)

    log_level = logging.DEBUG if debug else logging.INFO

    # 5MB max, keep 3 backups
    handler = RotatingFileHandler(
        log_dir / "llmls.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    setattr(handler, _MANAGED_HANDLER_FLAG, True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in list(root_logger.handlers):
        if getattr(existing, _MANAGED_HANDLER_FLAG, False):
            root_logger.removeHandler(existing)
            existing.close()
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(__name__)


def main() -> None:
    """Entry point for the llmls command."""
    from .cli import run_cli

    try:
        config = AppConfig.load()
    except ConfigError as e:
        Console(stderr=True).print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    try:
        logger = setup_logging(config.log_dir, debug=config.debug)
    except OSError:
        # Read-only home directories still get a listing
        logger = logging.getLogger(__name__)

    logger.debug(f"Starting llmls with args {sys.argv[1:]}")
    sys.exit(run_cli(config=config))


if __name__ == "__main__":
    main()
