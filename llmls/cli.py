"""CLI commands for llmls.

Lists models from OpenRouter and a local Ollama server.

Commands:
    llmls [pattern]       - List models, optionally filtered by a glob pattern
    llmls providers       - List provider names
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import AppConfig, resolve_ollama_host
from .core.display import display_models, display_models_detailed, display_providers
from .core.errors import LlmlsError
from .core.search import apply_filters, sort_models_by_created_desc
from .core.sources import ModelCatalog
from .core.terminal import get_terminal_width

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

EXAMPLES = """\
Pattern:
  Glob pattern matched against model id and name: * (any sequence) and ? (single character)
  A bare provider name matches exactly (case-insensitive)

Examples:
  llmls                                    List all models (OpenRouter + Ollama)
  llmls cohere                             List all Cohere models (provider match)
  llmls "anthropic/*"                      List Anthropic models (glob pattern)
  llmls "ollama/*"                         List Ollama models only
  llmls "*gpt-4*"                          Search for GPT-4 models
  llmls --detail "*opus*"                  Detailed view of Opus models
  llmls -p openai -m mini                  OpenAI models with "mini" in id or name
  llmls --ollama-host http://remote:11434  Use remote Ollama server
  llmls providers                          List all providers
"""


def _build_catalog(args: argparse.Namespace, config: AppConfig) -> ModelCatalog:
    host = resolve_ollama_host(args.ollama_host, config)
    return ModelCatalog(config, ollama_host=host, include_ollama=not args.no_ollama)


def list_models(args: argparse.Namespace, config: AppConfig) -> int:
    """List models, filtered and sorted newest first.

    Args:
        args: Parsed arguments (pattern, field filters, detail, ollama options)
        config: Application configuration

    Returns:
        Exit code (0 for success, including no matches)

    Raises:
        RegistryError: If the OpenRouter registry cannot be fetched
    """
    catalog = _build_catalog(args, config)
    models = catalog.fetch_all()

    models = apply_filters(
        models,
        pattern=args.pattern,
        provider=args.provider,
        model=args.model,
        description=args.desc,
        include_description=args.search_description,
    )
    models = sort_models_by_created_desc(models)
    logger.debug(f"Displaying {len(models)} models")

    term_width = get_terminal_width(config.default_terminal_width)
    if args.detail:
        display_models_detailed(models, term_width)
    else:
        display_models(models, term_width)

    return 0


def list_providers(args: argparse.Namespace, config: AppConfig) -> int:
    """List unique provider names, optionally filtered by substring.

    Args:
        args: Parsed arguments (pattern, ollama options)
        config: Application configuration

    Returns:
        Exit code (0 for success)
    """
    catalog = _build_catalog(args, config)
    display_providers(catalog.fetch_all(), args.pattern)
    return 0


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--ollama-host",
        help="Ollama server URL (default: $OLLAMA_HOST or http://localhost:11434)",
    )
    p.add_argument(
        "--no-ollama",
        action="store_true",
        help="Skip the local Ollama server",
    )


def create_parser(version: str = __version__) -> argparse.ArgumentParser:
    """Create the argument parser for listing models.

    Args:
        version: Version string reported by --version

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="llmls",
        description="llmls - List LLM models from OpenRouter and Ollama",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "pattern",
        nargs="?",
        help="Glob pattern or provider name (use 'llmls providers' to list providers)",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"llmls version {version}",
    )
    parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="Display detailed model information",
    )
    parser.add_argument(
        "--search-description",
        "-s",
        action="store_true",
        help="Also match the pattern as a substring of the description",
    )

    # Explicit field filters (AND-ed, case-insensitive substrings)
    parser.add_argument("--provider", "-p", help="Filter by provider substring")
    parser.add_argument("--model", "-m", help="Filter by model id or name substring")
    parser.add_argument("--desc", help="Filter by description substring")

    _add_source_args(parser)
    parser.set_defaults(func=list_models)

    return parser


def create_providers_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the providers subcommand.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="llmls providers",
        description="List all provider names.",
    )
    parser.add_argument(
        "pattern",
        nargs="?",
        help="Only show providers containing this text (case-insensitive)",
    )
    _add_source_args(parser)
    parser.set_defaults(func=list_providers)

    return parser


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    """Parse arguments, dispatching on the providers subcommand.

    Exits with status 2 on usage errors.
    """
    if argv and argv[0] == "providers":
        return create_providers_parser().parse_args(argv[1:])

    parser = create_parser()
    parsed = parser.parse_args(argv)
    if parsed.pattern and (parsed.provider or parsed.model or parsed.desc):
        parser.error("a search pattern cannot be combined with --provider, --model or --desc")
    return parsed


def run_cli(args: Sequence[str] | None = None, config: AppConfig | None = None) -> int:
    """Run the CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])
        config: Preloaded configuration (defaults to AppConfig.load())

    Returns:
        Exit code
    """
    parsed = parse_args(list(sys.argv[1:] if args is None else args))

    try:
        if config is None:
            config = AppConfig.load()
        return parsed.func(parsed, config)
    except KeyboardInterrupt:
        err_console.print("\n[dim]Cancelled.[/dim]")
        return 130
    except LlmlsError as e:
        logger.error(f"Command failed: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1


__all__ = [
    "create_parser",
    "create_providers_parser",
    "parse_args",
    "run_cli",
    "list_models",
    "list_providers",
]
