"""CLI interface for termdash.

A single foreground command: ``termdash`` opens the dashboard. There are no
subcommands; options only choose the config file and logging.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__, config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termdash",
        description="Terminal dashboard that launches your TUI tools.",
        epilog=(
            "Keys: arrows/jk move, Tab switches panel, Enter previews or launches, "
            "a adds an application, o opens a shell in a directory, r refreshes, q quits. "
            f"Set {config.CONFIG_ENV_VAR} to choose the config file."
        ),
    )
    parser.add_argument("-V", "--version", action="version", version=f"termdash {__version__}")
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="Config file (default: $TERMDASH_CONFIG or ~/.config/termdash/config.json)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Log file (default: ~/.config/termdash/termdash.log)",
    )
    parser.add_argument("--debug", action="store_true", help="Log debug messages")
    return parser


def configure_logging(log_file: str | None = None, debug: bool = False) -> Path:
    """Send log records to a file; the terminal belongs to the dashboard."""
    path = Path(log_file).expanduser() if log_file else config.get_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(path),
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )
    return path


def main(argv: list[str] | None = None) -> int:
    """termdash entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_file, args.debug)
    except OSError as e:
        print(f"Error: cannot open log file: {e}", file=sys.stderr)
        return 1

    config_path = config.get_config_path(args.config)

    from .app import run_dashboard

    try:
        run_dashboard(config_path)
    except config.ConfigError as e:
        logger.error("Error loading config: %s", e)
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print()
        return 130
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
