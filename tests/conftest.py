"""Shared pytest fixtures for tokenloom tests."""

import json
import shutil
from pathlib import Path
from typing import Any

import pytest

from helpers import alias, make_export, rgba
from tokenloom.core.document_loader import load_document
from tokenloom.core.store import TokenGraph

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES


@pytest.fixture
def primitives_data() -> dict[str, Any]:
    """Parsed primitives export (single-mode palette, spacing, type)."""
    return json.loads((FIXTURES / "primitives.json").read_text())


@pytest.fixture
def semantic_data() -> dict[str, Any]:
    """Parsed semantic export (Light/Dark theme aliasing primitives)."""
    return json.loads((FIXTURES / "semantic.json").read_text())


@pytest.fixture
def primitives_graph(primitives_data: dict[str, Any]) -> TokenGraph:
    return load_document(primitives_data, name="primitives")


@pytest.fixture
def semantic_graph(semantic_data: dict[str, Any]) -> TokenGraph:
    return load_document(semantic_data, name="semantic")


@pytest.fixture
def cyclic_graph() -> TokenGraph:
    """A -> B -> A plus one healthy token."""
    data = make_export(
        [
            {"id": "a", "name": "loop/a", "type": "COLOR", "values": {"m1": alias("b")}},
            {"id": "b", "name": "loop/b", "type": "COLOR", "values": {"m1": alias("a")}},
            {"id": "ok", "name": "color/ok", "type": "COLOR", "values": {"m1": rgba(0, 1, 0)}},
        ]
    )
    return load_document(data, name="cyclic")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with both fixture exports and a tokenloom.toml."""
    tokens_dir = tmp_path / "tokens"
    tokens_dir.mkdir()
    shutil.copy(FIXTURES / "primitives.json", tokens_dir / "primitives.json")
    shutil.copy(FIXTURES / "semantic.json", tokens_dir / "semantic.json")

    (tmp_path / "tokenloom.toml").write_text(
        """
[project]
name = "demo"
build_path = "dist"

[[documents]]
name = "primitives"
path = "tokens/primitives.json"

[[documents]]
name = "semantic"
path = "tokens/semantic.json"

[[builds]]
name = "css-light"
format = "css"
destination = "css/light.css"
documents = ["semantic"]
output_references = true

[[builds]]
name = "css-dark"
format = "css"
destination = "css/dark.css"
selector = '[data-theme="dark"]'
documents = ["semantic"]

[builds.modes]
"Theme" = "Dark"

[[builds]]
name = "js"
format = "js"
destination = "js/tokens.js"
documents = ["primitives"]
include = ["color/"]

[[builds]]
name = "theme"
format = "theme"
destination = "js/theme.js"
object_name = "lightTokens"
documents = ["semantic"]

[[builds]]
name = "types"
format = "dts"
destination = "js/tokens.d.ts"
documents = ["primitives"]

[[builds]]
name = "dtcg"
format = "dtcg"
destination = "dtcg"
"""
    )
    return tmp_path
