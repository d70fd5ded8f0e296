"""Tests for mode selection."""

from __future__ import annotations

from helpers import make_export, rgba
from tokenloom.core.document_loader import load_document
from tokenloom.core.modes import resolve_modes


class TestResolveModes:
    """Test mapping requested mode names to mode ids."""

    def test_defaults_when_nothing_requested(self, semantic_graph):
        selection = resolve_modes(semantic_graph)

        assert dict(selection) == {"Theme": "2:0"}
        assert selection.mode_name("Theme") == "Light"

    def test_requested_mode(self, semantic_graph):
        selection = resolve_modes(semantic_graph, {"Theme": "Dark"})

        assert selection["Theme"] == "2:1"
        assert selection.mode_name("Theme") == "Dark"

    def test_unknown_mode_falls_back_to_default(self, semantic_graph):
        selection = resolve_modes(semantic_graph, {"Theme": "Sepia"})

        assert selection["Theme"] == "2:0"

    def test_unknown_collection_is_ignored(self, semantic_graph):
        selection = resolve_modes(semantic_graph, {"Density": "Compact", "Theme": "Dark"})

        assert list(selection) == ["Theme"]
        assert selection["Theme"] == "2:1"

    def test_every_collection_gets_a_mode(self, primitives_graph):
        selection = resolve_modes(primitives_graph, {})

        assert len(selection) == len(primitives_graph.collections)

    def test_mode_id_for_duplicate_collection_names(self):
        data = make_export(
            [{"id": "a", "name": "x", "type": "COLOR", "values": {"m1": rgba(0, 0, 0)}}],
            modes=[("m1", "Light"), ("m2", "Dark")],
        )
        twin = make_export(
            [{"id": "b", "name": "y", "type": "COLOR", "values": {"n1": rgba(1, 1, 1)}}],
            collection_id="c2",
            modes=[("n1", "Light"), ("n2", "Dark")],
        )
        data["collections"].extend(twin["collections"])
        graph = load_document(data, name="twins")

        selection = resolve_modes(graph, {"Tokens": "Dark"})
        first, second = graph.collections

        assert selection.mode_id_for(first) == "m2"
        assert selection.mode_id_for(second) == "n2"
        assert selection["Tokens"] == "m2"

    def test_mode_name_unknown_collection(self, semantic_graph):
        assert resolve_modes(semantic_graph).mode_name("Nope") is None
