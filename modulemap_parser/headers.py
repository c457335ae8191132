"""Public header extraction from parsed module maps.

A package's `module.modulemap` is expected to declare exactly one top-level
module. Its public headers are the header members that are neither private
nor textual, resolved against the directory containing the modulemap.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import Iterable, List, Optional, Union

from modulemap_parser.config.schema import HeaderExtractionConfig, ModuleMapConfig
from modulemap_parser.declarations import Declaration, DeclarationType, ModuleDeclaration
from modulemap_parser.errors import ModuleLookupError
from modulemap_parser.parser import parse

logger = logging.getLogger("modulemap_parser.headers")


def read_modulemap(path: Union[str, Path]) -> str:
    """Read a modulemap file as UTF-8 text.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    return Path(path).read_text(encoding="utf-8")


def find_module_declaration(
    decls: Iterable[Declaration], source: Optional[str] = None
) -> ModuleDeclaration:
    """Return the single top-level module declaration.

    Args:
        decls: Top-level declarations of a parsed modulemap.
        source: Description of where the declarations came from, used in
            error messages.

    Raises:
        ModuleLookupError: If zero or more than one module is declared.
    """
    modules = [d for d in decls if d.decl_type == DeclarationType.MODULE]
    if len(modules) != 1:
        raise ModuleLookupError(source, len(modules))
    return modules[0]


def public_headers(
    module_decl: ModuleDeclaration,
    config: Optional[HeaderExtractionConfig] = None,
) -> List[str]:
    """Return the literal paths of the module's public headers in source order.

    Only direct members are considered; submodule headers are not public
    headers of the enclosing module.
    """
    cfg = config or HeaderExtractionConfig()
    paths: List[str] = []
    for decl in module_decl.headers():
        if decl.private or decl.textual:
            continue
        if decl.umbrella and not cfg.include_umbrella_headers:
            continue
        paths.append(decl.path)
    return paths


def public_header_paths(
    text: str,
    modulemap_path: Union[str, Path],
    config: Optional[ModuleMapConfig] = None,
) -> List[str]:
    """Parse modulemap text and resolve its public headers.

    Each header path is joined with the modulemap's directory and
    normalised, e.g. ``pkg/include`` + ``../src/foo.h`` becomes
    ``pkg/src/foo.h``.

    Args:
        text: Contents of the modulemap file.
        modulemap_path: Location of the modulemap, used for resolution and
            error messages.
        config: Optional configuration.

    Raises:
        ModuleMapError: If the text fails to parse.
        ModuleLookupError: If the modulemap does not declare exactly one module.
    """
    cfg = config or ModuleMapConfig()
    source = Path(modulemap_path).as_posix()
    decls = parse(text, cfg.parser).unwrap()
    module_decl = find_module_declaration(decls, source)

    dirname = posixpath.dirname(source)
    hdrs = [
        posixpath.normpath(posixpath.join(dirname, p))
        for p in public_headers(module_decl, cfg.headers)
    ]
    logger.debug("Found %d public headers for module %s in %s", len(hdrs), module_decl.name, source)
    return hdrs


__all__ = [
    "find_module_declaration",
    "public_header_paths",
    "public_headers",
    "read_modulemap",
]
