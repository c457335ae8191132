"""Helpers for loading configuration from TOML/JSON sources.

`load_config` accepts:

* None -> default ModuleMapConfig
* dict -> ModuleMapConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from modulemap_parser.config.schema import ModuleMapConfig

logger = logging.getLogger("modulemap_parser.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _guess_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith(("{", "[")) else "toml"


def load_config(source: ConfigSource) -> ModuleMapConfig:
    """Load ModuleMapConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns the default configuration
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        ModuleMapConfig instance.

    Raises:
        ValueError: If the top-level document is not a mapping.
        ValidationError: If the configuration values are invalid.
    """
    if source is None:
        logger.debug("No config source provided; using defaults")
        return ModuleMapConfig()

    if isinstance(source, dict):
        logger.debug("Loading ModuleMapConfig from provided dict")
        return ModuleMapConfig.from_dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if path.is_file():
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = _guess_format(text)
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = _guess_format(text)
            logger.info("Loading configuration from inline %s string", fmt)

        if fmt == "json":
            data = json.loads(text)
        else:
            data = tomllib.loads(text)

        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        return ModuleMapConfig.from_dict(data)

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


__all__ = ["ConfigSource", "load_config"]
