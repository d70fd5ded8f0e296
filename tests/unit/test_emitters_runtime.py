"""Tests for runtime map emitters (JSON, ES module, theme object) and declarations."""

from __future__ import annotations

import json

import pytest

from helpers import make_export, rgba
from tokenloom.core.document_loader import load_document
from tokenloom.core.resolution import ResolvedTokenSet, resolve_graph
from tokenloom.emitters import (
    NamingStrategy,
    TokenSelector,
    build_runtime_map,
    emit_declarations,
    emit_js_module,
    emit_json,
    emit_nested_declarations,
    emit_theme_object,
)
from tokenloom.emitters.runtime import DEFAULT_KEY


@pytest.fixture
def primitive_tokens(primitives_graph) -> ResolvedTokenSet:
    return resolve_graph(primitives_graph)


@pytest.fixture
def light_tokens(semantic_graph, primitives_graph) -> ResolvedTokenSet:
    return resolve_graph(semantic_graph, {"Theme": "Light"}, [primitives_graph])


class TestRuntimeMap:
    """Test nested runtime maps."""

    def test_nested_by_segments(self, primitive_tokens):
        tree = build_runtime_map(primitive_tokens)

        assert tree["color"]["red"] == {"500": "#ff0000", "500-a50": "#ff000080"}
        assert tree["spacing"] == {"2": "8px"}
        assert tree["opacity"] == {"50": 0.5}
        assert tree["font-weight"] == {"semibold": "600"}

    def test_leaf_and_group_collision(self):
        graph = load_document(
            make_export(
                [
                    {"id": "a", "name": "color/brand", "type": "COLOR", "values": {"m1": rgba(0, 0, 1)}},
                    {"id": "b", "name": "color/brand/dark", "type": "COLOR", "values": {"m1": rgba(0, 0, 0)}},
                ]
            ),
            name="collide",
        )

        tree = build_runtime_map(resolve_graph(graph))

        assert tree == {"color": {"brand": {DEFAULT_KEY: "#0000ff", "dark": "#000000"}}}

    def test_group_then_leaf_collision(self):
        graph = load_document(
            make_export(
                [
                    {"id": "b", "name": "color/brand/dark", "type": "COLOR", "values": {"m1": rgba(0, 0, 0)}},
                    {"id": "a", "name": "color/brand", "type": "COLOR", "values": {"m1": rgba(0, 0, 1)}},
                ]
            ),
            name="collide",
        )

        tree = build_runtime_map(resolve_graph(graph))

        assert tree["color"]["brand"] == {"dark": "#000000", DEFAULT_KEY: "#0000ff"}

    def test_emit_json(self, light_tokens):
        text = emit_json(light_tokens)

        assert text.endswith("}\n")
        assert json.loads(text) == {
            "color": {"brand": "#0000ff", "accent": "#0000ff", "background": "#ffffff"},
            "layout": {"gap": "8px"},
        }


class TestJsModule:
    """Test flat ES module output."""

    def test_exports(self, primitive_tokens):
        js = emit_js_module(primitive_tokens, TokenSelector(include=("color/red",)))

        assert 'export const colorRed500 = "#ff0000";\n' in js
        assert 'export const colorRed500A50 = "#ff000080";\n' in js
        assert "colorGray" not in js

    def test_numbers_are_unquoted(self, primitive_tokens):
        js = emit_js_module(primitive_tokens)

        assert "export const opacity50 = 0.5;" in js
        assert 'export const spacing2 = "8px";' in js

    def test_description_comment(self, primitive_tokens):
        js = emit_js_module(primitive_tokens)

        assert '/** Base grid step */\nexport const spacing2 = "8px";' in js

    def test_constant_naming(self, primitive_tokens):
        js = emit_js_module(primitive_tokens, naming=NamingStrategy.CONSTANT)

        assert 'export const FONT_FAMILY_BODY = "Inter";' in js

    def test_literals_not_references(self, light_tokens):
        js = emit_js_module(light_tokens)

        assert 'export const colorAccent = "#0000ff";' in js


class TestThemeObject:
    """Test the sorted theme object."""

    def test_keys_sorted(self, light_tokens):
        text = emit_theme_object(light_tokens, object_name="lightTokens")

        assert "export const lightTokens = {\n" in text
        body = text.split("{\n", 1)[1]
        assert body == (
            '  colorAccent: "#0000ff",\n'
            '  colorBackground: "#ffffff",\n'
            '  colorBrand: "#0000ff",\n'
            '  layoutGap: "8px",\n'
            "};\n"
        )

    def test_idempotent(self, light_tokens):
        assert emit_theme_object(light_tokens) == emit_theme_object(light_tokens)


class TestDeclarations:
    """Test TypeScript declarations."""

    def test_flat_declarations(self, primitive_tokens):
        dts = emit_declarations(primitive_tokens)

        assert "export const colorRed500: string;" in dts
        assert "export const opacity50: number;" in dts
        assert "export const fontWeightSemibold: string;" in dts
        assert "#ff0000" not in dts

    def test_nested_declaration(self, light_tokens):
        dts = emit_nested_declarations(light_tokens, object_name="theme")

        assert dts.endswith(
            "export declare const theme: {\n"
            "  color: {\n"
            "    brand: string;\n"
            "    accent: string;\n"
            "    background: string;\n"
            "  };\n"
            "  layout: {\n"
            "    gap: string;\n"
            "  };\n"
            "};\n"
        )

    def test_nested_quotes_non_identifiers(self, primitive_tokens):
        dts = emit_nested_declarations(primitive_tokens)

        assert '    "500": string;' in dts
        assert '  "font-weight": {' in dts
        assert '    "50": number;' in dts
