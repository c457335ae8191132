"""Parse command implementation.

Parses one or more modulemap files and prints their declaration trees as a
JSON document keyed by file path, or writes it to `--output`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Tuple

from pydantic import ValidationError

from modulemap_parser.config import load_config
from modulemap_parser.declarations import Declaration, count_declarations
from modulemap_parser.export.json import declarations_to_list, export_json
from modulemap_parser.headers import read_modulemap
from modulemap_parser.parser import parse

logger = logging.getLogger("modulemap_parser.cli.parse")


def parse_command(args) -> int:
    """Execute parse command.

    Args:
        args: Parsed command-line arguments containing:
            - files: Modulemap file paths
            - output: Output JSON file (optional)
            - config: Configuration source (optional)

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        config = load_config(getattr(args, "config", None))
    except (ValidationError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    results: Dict[str, Tuple[Declaration, ...]] = {}
    failed = 0
    for file_arg in args.files:
        path = Path(file_arg)
        try:
            text = read_modulemap(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", path, e)
            failed += 1
            continue

        result = parse(text, config.parser)
        if not result.ok:
            logger.error("Errors parsing the %s. %s", path, result.error)
            failed += 1
            continue

        decls = result.unwrap()
        logger.info("Parsed %s: %d declarations", path, count_declarations(decls))
        results[str(path)] = decls

    if failed:
        logger.error("%d of %d file(s) failed to parse", failed, len(args.files))
        return 1

    output = getattr(args, "output", None)
    if output:
        export_json(results, Path(output))
    else:
        data = {source: declarations_to_list(decls) for source, decls in results.items()}
        print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0
