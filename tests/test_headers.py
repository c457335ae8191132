"""Tests for public header extraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from modulemap_parser.config import HeaderExtractionConfig, ModuleMapConfig
from modulemap_parser.errors import ErrorKind, ModuleLookupError, ModuleMapError
from modulemap_parser.headers import (
    find_module_declaration,
    public_header_paths,
    public_headers,
    read_modulemap,
)
from modulemap_parser.parser import parse

MODULEMAP = """
module CFoo {
    umbrella header "CFoo.h"
    header "../src/foo_impl.h"
    private header "foo_private.h"
    textual header "foo.inc"
    exclude header "foo_old.h"
    explicit module Extra {
        header "extra.h"
    }
    export *
}
"""


def test_public_headers_skip_private_and_textual() -> None:
    """Only non-private, non-textual direct headers are public."""
    module = find_module_declaration(parse(MODULEMAP).unwrap())
    assert public_headers(module) == ["CFoo.h", "../src/foo_impl.h"]


@pytest.mark.parametrize(
    "text",
    [
        'module Foo { export * header "a.h" }',
        'module Foo { requires objc link "c" header "a.h" }',
        'module Foo { config_macros [exhaustive] header "a.h" }',
    ],
)
def test_headers_after_opaque_statement_on_same_line(text: str) -> None:
    """Headers that share a line with an unmodelled statement stay public."""
    module = find_module_declaration(parse(text).unwrap())
    assert public_headers(module) == ["a.h"]


def test_umbrella_headers_can_be_excluded() -> None:
    """Umbrella headers are dropped when configured."""
    module = find_module_declaration(parse(MODULEMAP).unwrap())
    config = HeaderExtractionConfig(include_umbrella_headers=False)
    assert public_headers(module, config) == ["../src/foo_impl.h"]


def test_public_header_paths_resolve_against_modulemap_dir() -> None:
    """Paths are joined with the modulemap directory and normalised."""
    hdrs = public_header_paths(MODULEMAP, "Sources/CFoo/include/module.modulemap")
    assert hdrs == [
        "Sources/CFoo/include/CFoo.h",
        "Sources/CFoo/src/foo_impl.h",
    ]


def test_public_header_paths_without_directory() -> None:
    """A bare modulemap file name resolves headers as-is."""
    text = 'module Foo {\n header "./Foo.h"\n}'
    assert public_header_paths(text, "module.modulemap") == ["Foo.h"]


def test_public_header_paths_with_config() -> None:
    """Configuration is applied to both parsing and extraction."""
    config = ModuleMapConfig.from_dict({"headers": {"include_umbrella_headers": False}})
    hdrs = public_header_paths(MODULEMAP, Path("pkg/include/module.modulemap"), config)
    assert hdrs == ["pkg/src/foo_impl.h"]


def test_no_module_declaration() -> None:
    """A modulemap without modules is rejected."""
    with pytest.raises(ModuleLookupError) as exc_info:
        public_header_paths("// empty\n", "pkg/module.modulemap")
    assert exc_info.value.count == 0
    assert "pkg/module.modulemap" in str(exc_info.value)


def test_multiple_module_declarations() -> None:
    """More than one top-level module is rejected."""
    decls = parse("module A {}\nmodule B {}").unwrap()
    with pytest.raises(ModuleLookupError) as exc_info:
        find_module_declaration(decls)
    assert exc_info.value.count == 2
    assert str(exc_info.value) == "Expected a single module definition but found 2."


def test_extern_module_does_not_count_as_module() -> None:
    """Only `module` declarations take part in the multiplicity check."""
    decls = parse('extern module A "a.modulemap"\nmodule B {}').unwrap()
    assert find_module_declaration(decls).name == "B"


def test_parse_errors_propagate() -> None:
    """Syntax errors are raised to the caller."""
    with pytest.raises(ModuleMapError) as exc_info:
        public_header_paths('module Foo { header "a.h"', "module.modulemap")
    assert exc_info.value.kind is ErrorKind.UNBALANCED_BLOCK


def test_read_modulemap(tmp_path: Path) -> None:
    """Modulemaps are read as UTF-8 text."""
    path = tmp_path / "include" / "module.modulemap"
    path.parent.mkdir()
    path.write_text('module Foo { header "Foo.h" }', encoding="utf-8")

    text = read_modulemap(path)
    assert public_header_paths(text, path) == [str(path.parent.as_posix()) + "/Foo.h"]


def test_read_missing_modulemap(tmp_path: Path) -> None:
    """Missing files raise OSError."""
    with pytest.raises(OSError):
        read_modulemap(tmp_path / "missing.modulemap")
