"""Tests for DTCG export."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers import make_export, rgba
from tokenloom.core.document_loader import load_document
from tokenloom.core.errors import EmitError, ResolutionErrorKind
from tokenloom.emitters import emit_dtcg, export_dtcg_files, generate_dtcg_tokens
from tokenloom.emitters.dtcg import dtcg_file_name


class TestFileNames:
    def test_single_mode_has_no_suffix(self, primitives_graph):
        [collection] = primitives_graph.collections

        assert dtcg_file_name(collection, collection.modes[0]) == "primitives.json"

    def test_multi_mode_suffix(self, semantic_graph):
        [collection] = semantic_graph.collections

        names = [dtcg_file_name(collection, mode) for mode in collection.modes]

        assert names == ["theme-light.json", "theme-dark.json"]

    def test_collection_name_slug(self):
        graph = load_document(
            make_export([], name="Semantic: Color", modes=[("a", "On Light"), ("b", "Mode 1")]),
            name="x",
        )
        [collection] = graph.collections

        assert dtcg_file_name(collection, collection.modes[0]) == "semantic-color-on-light.json"
        assert dtcg_file_name(collection, collection.modes[1]) == "semantic-color.json"


class TestGenerateDtcg:
    """Test DTCG trees."""

    def test_primitive_types(self, primitives_graph):
        tree = generate_dtcg_tokens(primitives_graph).files["primitives.json"]

        assert tree["color"]["red"]["500"] == {"$type": "color", "$value": "#ff0000"}
        assert tree["spacing"]["2"] == {
            "$type": "dimension",
            "$value": "8px",
            "$description": "Base grid step",
        }
        assert tree["opacity"]["50"] == {"$type": "number", "$value": 0.5}
        assert tree["font-weight"]["semibold"] == {"$type": "fontWeight", "$value": "600"}
        assert tree["font-family"]["body"] == {"$type": "fontFamily", "$value": "Inter"}

    def test_aliases_stay_references(self, semantic_graph, primitives_graph):
        export = generate_dtcg_tokens(semantic_graph, [primitives_graph])

        light = export.files["theme-light.json"]
        assert light["color"]["accent"]["$value"] == "{color.brand}"
        assert light["color"]["background"]["$value"] == "{color.gray.50}"
        assert light["layout"]["gap"] == {"$type": "dimension", "$value": "{spacing.2}"}
        assert export.files["theme-dark.json"]["color"]["background"]["$value"] == "{color.gray.900}"
        assert export.diagnostics == []

    def test_dangling_cross_reference(self, semantic_graph):
        export = generate_dtcg_tokens(semantic_graph)

        assert "background" not in export.files["theme-light.json"]["color"]
        assert len(export.diagnostics) == 4
        assert {d.kind for d in export.diagnostics} == {ResolutionErrorKind.UNRESOLVED_CROSS_REFERENCE}

    def test_collision_is_skipped(self):
        graph = load_document(
            make_export(
                [
                    {"id": "a", "name": "color/brand", "type": "COLOR", "values": {"m1": rgba(0, 0, 1)}},
                    {"id": "b", "name": "color/brand/dark", "type": "COLOR", "values": {"m1": rgba(0, 0, 0)}},
                ]
            ),
            name="collide",
        )

        tree = generate_dtcg_tokens(graph).files["tokens.json"]

        assert tree == {"color": {"brand": {"$type": "color", "$value": "#0000ff"}}}


class TestEmitDtcg:
    def test_single_collection_mode(self, semantic_graph, primitives_graph):
        text = emit_dtcg(semantic_graph, "Theme", "Dark", [primitives_graph])

        assert json.loads(text)["color"]["brand"]["$value"] == "#ff0000"

    def test_default_mode(self, semantic_graph):
        text = emit_dtcg(semantic_graph, "Theme")

        assert json.loads(text)["color"]["brand"]["$value"] == "#0000ff"

    def test_unknown_collection(self, semantic_graph):
        with pytest.raises(EmitError, match="Collection 'Nope'"):
            emit_dtcg(semantic_graph, "Nope")

    def test_unknown_mode(self, semantic_graph):
        with pytest.raises(EmitError, match="Mode 'Sepia'"):
            emit_dtcg(semantic_graph, "Theme", "Sepia")

    def test_unitless_keywords(self):
        graph = load_document(
            make_export([{"id": "r", "name": "size/ratio", "type": "FLOAT", "values": {"m1": 2}}]),
            name="ratios",
        )

        default = json.loads(emit_dtcg(graph, "Tokens"))
        custom = json.loads(emit_dtcg(graph, "Tokens", unitless_keywords=("ratio",)))

        assert default["size"]["ratio"] == {"$type": "dimension", "$value": "2px"}
        assert custom["size"]["ratio"] == {"$type": "number", "$value": 2}


class TestExportFiles:
    def test_writes_one_file_per_mode(self, tmp_path: Path, semantic_graph, primitives_graph):
        paths, diagnostics = export_dtcg_files(semantic_graph, tmp_path / "out", [primitives_graph])

        assert [p.name for p in paths] == ["theme-dark.json", "theme-light.json"]
        assert diagnostics == []
        data = json.loads((tmp_path / "out" / "theme-light.json").read_text())
        assert data["color"]["accent"]["$description"] == "Interactive accent"
