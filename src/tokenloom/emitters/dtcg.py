"""
W3C Design Token Community Group (DTCG) tokens.json export.

Splits a token graph into one DTCG tree per collection and mode. Aliases stay
references (``{color.gray.500}``) so downstream tools can keep the semantic
layering; literals are formatted the same way as every other emitter.
See: https://design-tokens.github.io/community-group/format/
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tokenloom.core.errors import Diagnostic, EmitError, ResolutionErrorKind
from tokenloom.core.formatting import (
    DEFAULT_UNITLESS_KEYWORDS,
    FONT_WEIGHT_KEYWORD,
    ColorFormat,
    format_value,
    is_unitless,
)
from tokenloom.core.ir import Collection, Mode, Variable, VariableAlias, VariableType
from tokenloom.core.store import TokenGraph

logger = logging.getLogger(__name__)

# Mode names that do not earn a file name suffix
_NEUTRAL_MODE_NAMES = ("mode-1", "value")


@dataclass
class DtcgExport:
    """DTCG trees keyed by file name, plus diagnostics for dangling aliases."""

    files: dict[str, dict[str, Any]] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _slug(text: str) -> str:
    return re.sub(r"[:\s]+", "-", text.strip().lower())


def dtcg_file_name(collection: Collection, mode: Mode) -> str:
    """File name for one collection/mode tree.

    ``Semantic: Color`` in mode ``On Dark`` -> ``semantic-color-on-dark.json``.
    Single-mode collections (and ``Mode 1``/``Value`` modes) get no suffix.
    """
    name = _slug(collection.name)
    mode_name = _slug(mode.name)
    if len(collection.modes) > 1 and mode_name not in _NEUTRAL_MODE_NAMES:
        name += f"-{mode_name}"
    return f"{name}.json"


def dtcg_type(variable: Variable, unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS) -> str:
    """DTCG ``$type`` for a variable."""
    lowered = variable.name.lower()
    if variable.resolved_type == VariableType.COLOR:
        return "color"
    if FONT_WEIGHT_KEYWORD in lowered:
        return "fontWeight"
    if variable.resolved_type == VariableType.FLOAT:
        return "number" if is_unitless(variable.name, unitless_keywords) else "dimension"
    if "font-family" in lowered:
        return "fontFamily"
    return "string"


def reference_path(variable: Variable) -> str:
    """DTCG reference to a variable: ``{color.gray.500}``."""
    return "{" + ".".join(variable.path) + "}"


def _insert(tree: dict[str, Any], path: list[str], token: dict[str, Any]) -> bool:
    node = tree
    for segment in path[:-1]:
        child = node.setdefault(segment, {})
        if "$value" in child:
            return False
        node = child
    if path[-1] in node:
        return False
    node[path[-1]] = token
    return True


class _AliasTargets:
    """Finds alias targets in the exporting graph or its references."""

    def __init__(self, graph: TokenGraph, references: Sequence[TokenGraph]):
        self.graphs = (graph, *(ref for ref in references if ref is not graph))

    def find(self, alias: VariableAlias) -> Variable | None:
        if alias.is_cross_document:
            for graph in self.graphs:
                variable = graph.lookup_by_key(alias.key or "")
                if variable is not None:
                    return variable
            return None
        return self.graphs[0].lookup_by_id(alias.id)


def generate_dtcg_tokens(
    graph: TokenGraph,
    references: Sequence[TokenGraph] = (),
    *,
    color_format: ColorFormat = ColorFormat.HEX,
    unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS,
) -> DtcgExport:
    """Generate DTCG trees for every collection and mode of ``graph``.

    Args:
        graph: Graph to export.
        references: Graphs that cross-document aliases may point into.
        color_format: Color representation for literals.
        unitless_keywords: Name fragments marking FLOAT tokens unitless.

    Returns:
        DtcgExport with one tree per file name.
    """
    targets = _AliasTargets(graph, references)
    export = DtcgExport()

    for collection in graph.collections:
        for mode in collection.modes:
            file_name = dtcg_file_name(collection, mode)
            tree = export.files.setdefault(file_name, {})

            for variable in collection.variables:
                value = variable.values_by_mode.get(mode.mode_id)
                if value is None:
                    continue

                if isinstance(value, VariableAlias):
                    target = targets.find(value)
                    if target is None:
                        kind = (
                            ResolutionErrorKind.UNRESOLVED_CROSS_REFERENCE
                            if value.is_cross_document
                            else ResolutionErrorKind.MISSING_VARIABLE
                        )
                        export.diagnostics.append(
                            Diagnostic(
                                token_name=variable.name,
                                kind=kind,
                                message=f"Alias target {value.id} not found",
                                document=graph.name,
                                collection=collection.name,
                                chain=(variable.id,),
                            )
                        )
                        logger.warning(f"{variable.name}: alias target {value.id} not found")
                        continue
                    rendered: Any = reference_path(target)
                else:
                    rendered = format_value(
                        value,
                        variable.resolved_type,
                        variable.name,
                        color_format,
                        unitless_keywords,
                    )

                token: dict[str, Any] = {
                    "$type": dtcg_type(variable, unitless_keywords),
                    "$value": rendered,
                }
                if variable.description:
                    token["$description"] = variable.description

                if not _insert(tree, variable.path, token):
                    logger.warning(f"{variable.name}: name collides with a token group, skipped")

    return export


def emit_dtcg(
    graph: TokenGraph,
    collection_name: str,
    mode_name: str | None = None,
    references: Sequence[TokenGraph] = (),
    *,
    color_format: ColorFormat = ColorFormat.HEX,
    unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS,
) -> str:
    """DTCG JSON text for one collection (default mode unless named)."""
    collection = graph.collection_by_name(collection_name)
    if collection is None:
        raise EmitError(f"Collection '{collection_name}' not found in {graph.name}")
    mode = collection.mode_by_name(mode_name) if mode_name else collection.default_mode
    if mode is None:
        raise EmitError(f"Mode '{mode_name}' not found in collection '{collection_name}'")
    export = generate_dtcg_tokens(
        graph, references, color_format=color_format, unitless_keywords=unitless_keywords
    )
    tree = export.files.get(dtcg_file_name(collection, mode), {})
    return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"


def write_dtcg_files(export: DtcgExport, output_dir: Path) -> list[Path]:
    """Write one JSON file per tree; returns the paths sorted by file name."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for file_name in sorted(export.files):
        path = output_dir / file_name
        path.write_text(
            json.dumps(export.files[file_name], indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        written.append(path)
    return written


def export_dtcg_files(
    graph: TokenGraph,
    output_dir: Path,
    references: Sequence[TokenGraph] = (),
    *,
    color_format: ColorFormat = ColorFormat.HEX,
    unitless_keywords: Iterable[str] = DEFAULT_UNITLESS_KEYWORDS,
) -> tuple[list[Path], list[Diagnostic]]:
    """Generate DTCG trees and write one JSON file per collection/mode.

    Args:
        graph: Graph to export.
        output_dir: Directory receiving the files.
        references: Graphs for cross-document aliases.
        color_format: Color representation for literals.
        unitless_keywords: Name fragments marking FLOAT tokens unitless.

    Returns:
        Written paths (sorted) and diagnostics.
    """
    export = generate_dtcg_tokens(
        graph, references, color_format=color_format, unitless_keywords=unitless_keywords
    )
    return write_dtcg_files(export, output_dir), export.diagnostics
