"""Declaration tree produced by the module map parser.

Declarations form a tagged union: each class carries a fixed `decl_type`
discriminant so consumers can filter with a plain comparison, e.g.::

    [d for d in decls if d.decl_type == DeclarationType.MODULE]

All declarations are frozen and their child sequences are tuples, so a
parse result can be shared freely once built. Source positions are kept for
diagnostics but excluded from equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, Union

from modulemap_parser.tokens import SourcePosition


class DeclarationType(str, Enum):
    """Discriminant of every declaration kind."""

    MODULE = "module"
    SINGLE_HEADER = "single_header"
    EXCLUDE_HEADER = "exclude_header"
    UMBRELLA_DIRECTORY = "umbrella_directory"
    EXTERN_MODULE = "extern_module"
    UNSUPPORTED = "unsupported"  # Recognised syntactically, not modelled


@dataclass(frozen=True)
class SingleHeaderDeclaration:
    """A `[private] [textual|umbrella] header "path"` member.

    Attributes:
        path: Literal string content, never resolved or normalised.
        private: Declared with the `private` qualifier.
        textual: Declared as `textual header`.
        umbrella: Declared as `umbrella header`.
        size: Optional `size` header attribute.
        mtime: Optional `mtime` header attribute.
    """

    path: str
    private: bool = False
    textual: bool = False
    umbrella: bool = False
    size: Optional[int] = None
    mtime: Optional[int] = None
    position: Optional[SourcePosition] = field(default=None, compare=False, repr=False)
    decl_type: DeclarationType = field(default=DeclarationType.SINGLE_HEADER, init=False)


@dataclass(frozen=True)
class ExcludeHeaderDeclaration:
    """An `exclude header "path"` member."""

    path: str
    position: Optional[SourcePosition] = field(default=None, compare=False, repr=False)
    decl_type: DeclarationType = field(default=DeclarationType.EXCLUDE_HEADER, init=False)


@dataclass(frozen=True)
class UmbrellaDirectoryDeclaration:
    """An `umbrella "dir"` member naming a directory of headers."""

    path: str
    position: Optional[SourcePosition] = field(default=None, compare=False, repr=False)
    decl_type: DeclarationType = field(
        default=DeclarationType.UMBRELLA_DIRECTORY, init=False
    )


@dataclass(frozen=True)
class ExternModuleDeclaration:
    """An `extern module Name "path"` declaration pointing at another modulemap."""

    name: str
    path: str
    position: Optional[SourcePosition] = field(default=None, compare=False, repr=False)
    decl_type: DeclarationType = field(default=DeclarationType.EXTERN_MODULE, init=False)


@dataclass(frozen=True)
class UnsupportedDeclaration:
    """A well-formed statement whose semantics are not modelled.

    Attributes:
        keyword: Leading keyword, e.g. ``requires`` or ``export``.
        tokens: Raw texts of the tokens following the keyword.
    """

    keyword: str
    tokens: Tuple[str, ...] = ()
    position: Optional[SourcePosition] = field(default=None, compare=False, repr=False)
    decl_type: DeclarationType = field(default=DeclarationType.UNSUPPORTED, init=False)


@dataclass(frozen=True)
class ModuleDeclaration:
    """A `module` declaration and its members in source order.

    Attributes:
        name: Module name; dotted for submodule paths, ``*`` for wildcards.
        is_explicit: Declared with the `explicit` qualifier.
        is_framework: Declared with the `framework` qualifier.
        is_system: The `[system]` attribute is present.
        attributes: All bracketed attribute names in source order.
        members: Child declarations in source order.
    """

    name: str
    is_explicit: bool = False
    is_framework: bool = False
    is_system: bool = False
    attributes: Tuple[str, ...] = ()
    members: Tuple["Declaration", ...] = ()
    position: Optional[SourcePosition] = field(default=None, compare=False, repr=False)
    decl_type: DeclarationType = field(default=DeclarationType.MODULE, init=False)

    def headers(self) -> Tuple[SingleHeaderDeclaration, ...]:
        """Direct header members in source order."""
        return tuple(
            m for m in self.members if m.decl_type == DeclarationType.SINGLE_HEADER
        )

    def submodules(self) -> Tuple["ModuleDeclaration", ...]:
        """Direct submodule members in source order."""
        return tuple(m for m in self.members if m.decl_type == DeclarationType.MODULE)


Declaration = Union[
    ModuleDeclaration,
    SingleHeaderDeclaration,
    ExcludeHeaderDeclaration,
    UmbrellaDirectoryDeclaration,
    ExternModuleDeclaration,
    UnsupportedDeclaration,
]


def iter_declarations(decls: Iterable[Declaration]) -> Iterator[Declaration]:
    """Walk a declaration tree depth-first in source order.

    Each module is yielded before its members.
    """
    stack = [iter(decls)]
    while stack:
        decl = next(stack[-1], None)
        if decl is None:
            stack.pop()
            continue
        yield decl
        if decl.decl_type == DeclarationType.MODULE:
            stack.append(iter(decl.members))


def count_declarations(decls: Iterable[Declaration]) -> int:
    """Total number of declarations in the tree, nested ones included."""
    return sum(1 for _ in iter_declarations(decls))


__all__ = [
    "Declaration",
    "DeclarationType",
    "ExcludeHeaderDeclaration",
    "ExternModuleDeclaration",
    "ModuleDeclaration",
    "SingleHeaderDeclaration",
    "UmbrellaDirectoryDeclaration",
    "UnsupportedDeclaration",
    "count_declarations",
    "iter_declarations",
]
