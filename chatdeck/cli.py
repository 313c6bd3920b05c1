"""CLI interface for chatdeck."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from chatdeck import __version__
from chatdeck.core.config import Config, load_config
from chatdeck.core.logging import setup_logging
from chatdeck.runtime import ChatClient
from chatdeck.terminal import ChatApp

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatdeck",
        description="Multi-session chat client with ordered model failover",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH} if present, else built-in defaults)",
    )
    parser.add_argument("--store-dir", type=Path, default=None, help="Override the session store directory")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured log level",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Also log to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    """Load the config file and apply command-line overrides.

    An explicit --config must exist; the default path is optional.
    """
    if args.config is not None:
        config = load_config(args.config)
    elif DEFAULT_CONFIG_PATH.exists():
        config = load_config(DEFAULT_CONFIG_PATH)
    else:
        config = Config()

    if args.store_dir is not None:
        config.store.directory = args.store_dir.expanduser()
    if args.log_level is not None:
        config.logging.level = args.log_level
    if args.verbose:
        config.logging.console = True
    return config


def main(argv: list[str] | None = None) -> None:
    """Entry point for the chatdeck console script."""
    args = build_parser().parse_args(argv)

    # Provider SDKs read their API keys from the environment
    load_dotenv()

    try:
        config = resolve_config(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Invalid YAML in config: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(
        level=config.logging.level,
        directory=config.logging.directory,
        max_size_mb=config.logging.max_size_mb,
        backup_count=config.logging.backup_count,
        console=config.logging.console,
    )

    client = ChatClient.from_config(config)
    app = ChatApp(client)

    try:
        asyncio.run(app.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except OSError as e:
        logger.error(f"Store failure: {e}", exc_info=True)
        print(f"Store failure: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
