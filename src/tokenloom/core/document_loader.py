"""
Loading of design-tool variables exports.

Reads an export (JSON, or YAML for hand-written fixtures), validates it
against the IR models, checks cross-collection invariants, and returns an
indexed ``TokenGraph``. Any problem raises ``StructuralError``; a corrupt
document is never partially indexed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import StructuralError, make_structural_error
from .ir import TokenDocument
from .store import TokenGraph

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


# =============================================================================
# Validation
# =============================================================================


def _format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into ``loc: message`` lines."""
    lines = []
    for detail in error.errors():
        loc = ".".join(str(part) for part in detail["loc"])
        lines.append(f"{loc}: {detail['msg']}" if loc else detail["msg"])
    return "; ".join(lines)


def _check_document(document: TokenDocument, name: str) -> None:
    """Check invariants that span collections."""
    collection_ids: set[str] = set()
    for c_index, collection in enumerate(document.collections):
        if collection.id in collection_ids:
            raise make_structural_error(
                f"duplicate collection id '{collection.id}'", name, f"collections[{c_index}]"
            )
        collection_ids.add(collection.id)

    seen_ids: set[str] = set()
    for c_index, collection in enumerate(document.collections):
        seen_names: set[str] = set()
        for v_index, variable in enumerate(collection.variables):
            where = f"collections[{c_index}].variables[{v_index}]"

            owner = variable.variable_collection_id
            if owner is not None and owner != collection.id:
                if owner not in collection_ids:
                    raise make_structural_error(
                        f"variable '{variable.name}' references non-existent collection '{owner}'",
                        name,
                        where,
                    )
                raise make_structural_error(
                    f"variable '{variable.name}' is listed under collection "
                    f"'{collection.id}' but claims collection '{owner}'",
                    name,
                    where,
                )

            if variable.id in seen_ids:
                raise make_structural_error(
                    f"duplicate variable id '{variable.id}'", name, where
                )
            seen_ids.add(variable.id)

            if variable.name in seen_names:
                raise make_structural_error(
                    f"duplicate variable name '{variable.name}' in collection "
                    f"'{collection.name}'",
                    name,
                    where,
                )
            seen_names.add(variable.name)


# =============================================================================
# Loading
# =============================================================================


def load_document(data: Any, name: str = "tokens") -> TokenGraph:
    """Build a token graph from a parsed export.

    Args:
        data: Parsed JSON/YAML mapping with a ``collections`` list.
        name: Label for the document, used in diagnostics and selection.

    Returns:
        Indexed TokenGraph.

    Raises:
        StructuralError: If the document is malformed.
    """
    if not isinstance(data, dict):
        raise make_structural_error("export must be a mapping", name)
    if "collections" not in data:
        raise make_structural_error("export has no 'collections'", name)
    if not isinstance(data["collections"], list):
        raise make_structural_error("'collections' must be a list", name)

    try:
        document = TokenDocument.model_validate(data)
    except ValidationError as e:
        raise make_structural_error(_format_validation_error(e), name) from e

    _check_document(document, name)

    graph = TokenGraph(document, name=name)
    logger.debug(
        f"Loaded {name}: {len(document.collections)} collections, {len(graph)} variables"
    )
    return graph


def load_document_file(path: Path, name: str | None = None) -> TokenGraph:
    """Read and load an export from disk.

    Args:
        path: Path to a ``.json`` (or ``.yaml``/``.yml``) export.
        name: Document label; defaults to the file stem.

    Returns:
        Indexed TokenGraph.

    Raises:
        StructuralError: If the file is missing, unparsable, or malformed.
    """
    label = name or path.stem
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StructuralError(f"Cannot read token export {path}: {e}") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise StructuralError(f"Invalid token export {path}: {e}") from e

    return load_document(data, name=label)
