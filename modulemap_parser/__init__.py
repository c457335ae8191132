"""Parser for Clang module map (`module.modulemap`) files.

Typical use::

    from modulemap_parser import parse

    result = parse(text)
    if not result.ok:
        raise SystemExit(f"{path}: {result.error}")
    for decl in result.declarations:
        ...
"""

from modulemap_parser.declarations import (
    Declaration,
    DeclarationType,
    ExcludeHeaderDeclaration,
    ExternModuleDeclaration,
    ModuleDeclaration,
    SingleHeaderDeclaration,
    UmbrellaDirectoryDeclaration,
    UnsupportedDeclaration,
    count_declarations,
    iter_declarations,
)
from modulemap_parser.errors import (
    ErrorKind,
    LexError,
    ModuleLookupError,
    ModuleMapError,
    ParseError,
)
from modulemap_parser.lexer import tokenize, tokenize_all
from modulemap_parser.parser import ParseResult, parse, parse_declarations
from modulemap_parser.tokens import SourcePosition, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "Declaration",
    "DeclarationType",
    "ErrorKind",
    "ExcludeHeaderDeclaration",
    "ExternModuleDeclaration",
    "LexError",
    "ModuleDeclaration",
    "ModuleLookupError",
    "ModuleMapError",
    "ParseError",
    "ParseResult",
    "SingleHeaderDeclaration",
    "SourcePosition",
    "Token",
    "TokenType",
    "UmbrellaDirectoryDeclaration",
    "UnsupportedDeclaration",
    "count_declarations",
    "iter_declarations",
    "parse",
    "parse_declarations",
    "tokenize",
    "tokenize_all",
]
