"""JSON export for declaration trees."""

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from modulemap_parser.declarations import Declaration, DeclarationType

logger = logging.getLogger("modulemap_parser.export.json")


def declaration_to_dict(decl: Declaration) -> Dict[str, Any]:
    """Convert a declaration (and its members) into plain JSON data.

    The `decl_type` discriminant is emitted first; source positions are
    rendered as ``"line:column"`` strings.
    """
    data: Dict[str, Any] = {"decl_type": decl.decl_type.value}
    for f in fields(decl):
        if f.name == "decl_type":
            continue
        value = getattr(decl, f.name)
        if f.name == "members":
            value = declarations_to_list(value)
        elif f.name == "position":
            value = str(value) if value is not None else None
        elif isinstance(value, tuple):
            value = list(value)
        data[f.name] = value
    return data


def declarations_to_list(decls: Iterable[Declaration]) -> List[Dict[str, Any]]:
    return [declaration_to_dict(d) for d in decls]


def export_json(results: Mapping[str, Iterable[Declaration]], output_path: Path) -> None:
    """Write declaration trees keyed by source file to a JSON file.

    Args:
        results: Mapping of modulemap path to its top-level declarations.
        output_path: Output file path.
    """
    logger.info("Exporting declarations to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = {source: declarations_to_list(decls) for source, decls in results.items()}

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    module_count = sum(
        1
        for decls in data.values()
        for d in decls
        if d["decl_type"] == DeclarationType.MODULE.value
    )
    logger.info("JSON export completed: %d files, %d top-level modules", len(data), module_count)


__all__ = ["declaration_to_dict", "declarations_to_list", "export_json"]
