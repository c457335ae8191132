"""Configuration schema and loading for modulemap_parser."""

from .loader import load_config
from .schema import (
    DEFAULT_OPAQUE_KEYWORDS,
    HeaderExtractionConfig,
    ModuleMapConfig,
    ParserConfig,
)

__all__ = [
    "DEFAULT_OPAQUE_KEYWORDS",
    "HeaderExtractionConfig",
    "ModuleMapConfig",
    "ParserConfig",
    "load_config",
]
