"""Main CLI entry point for modulemap_parser.

Provides commands: parse, headers
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from modulemap_parser.cli.headers import headers_command
from modulemap_parser.cli.parse import parse_command

logger = logging.getLogger("modulemap_parser.cli")


def setup_logging(
    verbose: bool = False,
    console: Optional[Console] = None,
    log_file: Optional[str] = None,
) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
        log_file: Additionally write logs to this file (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )
    handlers: list = [handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(name)s] [%(levelname)s] %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=handlers,
    )


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = argparse.ArgumentParser(
        prog="modulemap-parser",
        description="Modulemap Parser - Clang module map inspection tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional parser configuration. Can be a path to a TOML/JSON "
            "file (e.g. config.toml, config.json) or an inline TOML/JSON "
            "string. When omitted, built-in defaults are used."
        ),
    )
    parser.add_argument(
        "--log-file",
        help="Output log to file (optional). When specified, logs are written to this file in addition to console.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse modulemap files and print their declaration trees as JSON",
    )
    parse_parser.add_argument(
        "files",
        nargs="+",
        help="module.modulemap files to parse",
    )
    parse_parser.add_argument(
        "-o",
        "--output",
        help="Write the JSON document to this file instead of stdout",
    )

    headers_parser = subparsers.add_parser(
        "headers",
        help="List the public headers declared by a modulemap",
    )
    headers_parser.add_argument(
        "file",
        help="module.modulemap file declaring a single module",
    )

    args = parser.parse_args()

    setup_logging(args.verbose, log_file=args.log_file)

    if args.command == "parse":
        return parse_command(args)
    elif args.command == "headers":
        return headers_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
