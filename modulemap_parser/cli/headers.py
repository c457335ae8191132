"""Headers command implementation."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from modulemap_parser.config import load_config
from modulemap_parser.errors import ModuleLookupError, ModuleMapError
from modulemap_parser.headers import public_header_paths, read_modulemap

logger = logging.getLogger("modulemap_parser.cli.headers")


def headers_command(args) -> int:
    """Print the public headers declared by a modulemap, one per line.

    Args:
        args: Parsed command-line arguments containing:
            - file: Modulemap file path
            - config: Configuration source (optional)

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    path = Path(args.file)
    try:
        config = load_config(getattr(args, "config", None))
    except (ValidationError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    try:
        text = read_modulemap(path)
        hdrs = public_header_paths(text, path, config)
    except ModuleLookupError as e:
        logger.error("%s", e)
        return 1
    except ModuleMapError as e:
        logger.error("Errors parsing the %s. %s", path, e)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        return 1

    for hdr in hdrs:
        print(hdr)
    return 0
