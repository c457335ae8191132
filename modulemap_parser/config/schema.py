"""Configuration schema definitions using Pydantic for validation.

Settings are optional; every model has defaults matching the parser's
built-in behaviour so `ModuleMapConfig()` is always a valid configuration.
"""

import re
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

DEFAULT_OPAQUE_KEYWORDS = [
    "requires",
    "link",
    "export",
    "export_as",
    "use",
    "config_macros",
    "conflict",
]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9_]+$")

# Words the grammar gives a fixed meaning in member position.
_RESERVED_MEMBER_KEYWORDS = {
    "module",
    "explicit",
    "framework",
    "extern",
    "header",
    "private",
    "textual",
    "umbrella",
    "exclude",
}


class ParserConfig(BaseModel):
    """Configuration for the module map parser.

    Attributes:
        max_depth: Maximum nesting depth of module blocks.
        opaque_keywords: Member keywords accepted as unsupported declarations.
    """

    max_depth: int = Field(default=128, ge=1, le=256)
    opaque_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_OPAQUE_KEYWORDS)
    )

    model_config = {"extra": "allow"}

    @field_validator("opaque_keywords")
    @classmethod
    def validate_keywords(cls, v: List[str]) -> List[str]:
        """Validate that opaque keywords are identifiers without grammar meaning."""
        for keyword in v:
            if not _IDENTIFIER_RE.match(keyword):
                raise ValueError(f"Invalid opaque keyword '{keyword}'")
            if keyword in _RESERVED_MEMBER_KEYWORDS:
                raise ValueError(
                    f"'{keyword}' is reserved by the module map grammar"
                )
        return v


class HeaderExtractionConfig(BaseModel):
    """Configuration for deriving public headers from a module declaration.

    Attributes:
        include_umbrella_headers: Treat `umbrella header` entries as public.
    """

    include_umbrella_headers: bool = True

    model_config = {"extra": "allow"}


class ModuleMapConfig(BaseModel):
    """Top-level configuration.

    Attributes:
        parser: Parser configuration.
        headers: Header extraction configuration.
    """

    parser: ParserConfig = Field(default_factory=ParserConfig)
    headers: HeaderExtractionConfig = Field(default_factory=HeaderExtractionConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModuleMapConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
