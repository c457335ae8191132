"""Structured errors raised by the module map lexer and parser.

Every error carries a stable kind, a human-readable message and the source
position it refers to, so callers can report the failing file themselves.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from modulemap_parser.tokens import SourcePosition, Token


class ErrorKind(str, Enum):
    """Stable identifiers for every failure the parser can report."""

    UNTERMINATED_STRING = "unterminated_string"
    UNTERMINATED_COMMENT = "unterminated_comment"
    UNEXPECTED_TOKEN = "unexpected_token"
    UNBALANCED_BLOCK = "unbalanced_block"
    RECURSION_LIMIT_EXCEEDED = "recursion_limit_exceeded"


class ModuleMapError(Exception):
    """Base class for module map syntax errors.

    Attributes:
        kind: Stable error kind.
        message: Description without position information.
        position: Source position the error refers to.
    """

    def __init__(self, kind: ErrorKind, message: str, position: "SourcePosition") -> None:
        self.kind = kind
        self.message = message
        self.position = position
        super().__init__(f"{position.line}:{position.column}: {message}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleMapError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.kind == other.kind
            and self.message == other.message
            and self.position == other.position
        )

    def __hash__(self) -> int:
        return hash((type(self), self.kind, self.message, self.position))


class LexError(ModuleMapError):
    """Raised when the text cannot be split into tokens."""


class ParseError(ModuleMapError):
    """Raised when the token sequence does not match the grammar.

    For `UNEXPECTED_TOKEN` errors `expected` describes what the grammar
    wanted and `found` is the offending token.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: "SourcePosition",
        expected: Optional[str] = None,
        found: Optional["Token"] = None,
    ) -> None:
        super().__init__(kind, message, position)
        self.expected = expected
        self.found = found

    @classmethod
    def unexpected(cls, expected: str, found: "Token") -> "ParseError":
        return cls(
            ErrorKind.UNEXPECTED_TOKEN,
            f"expected {expected}, found {found.describe()}",
            found.position,
            expected=expected,
            found=found,
        )


class ModuleLookupError(ValueError):
    """Raised when a modulemap does not declare exactly one top-level module."""

    def __init__(self, source: Optional[str], count: int) -> None:
        self.source = source
        self.count = count
        where = f" in {source}" if source else ""
        if count == 0:
            message = f"No module declarations were found{where}."
        else:
            message = f"Expected a single module definition{where} but found {count}."
        super().__init__(message)


__all__ = [
    "ErrorKind",
    "LexError",
    "ModuleLookupError",
    "ModuleMapError",
    "ParseError",
]
