"""Tests for identifier naming strategies."""

from __future__ import annotations

import pytest

from tokenloom.emitters.naming import NamingStrategy, format_name, split_words


class TestSplitWords:
    def test_segments_and_separators(self):
        assert split_words("color/gray-dark/500") == ["color", "gray", "dark", "500"]

    def test_camel_humps_and_spaces(self):
        assert split_words("color/saturatedRed/Semi Bold") == ["color", "saturated", "Red", "Semi", "Bold"]

    def test_invalid_characters_dropped(self):
        assert split_words("size/1.5x (large)") == ["size", "1", "5x", "large"]


class TestFormatName:
    """Test each naming strategy."""

    @pytest.mark.parametrize(
        ("strategy", "expected"),
        [
            (NamingStrategy.KEBAB, "color-gray-500"),
            (NamingStrategy.CAMEL, "colorGray500"),
            (NamingStrategy.PASCAL, "ColorGray500"),
            (NamingStrategy.SNAKE, "color_gray_500"),
            (NamingStrategy.CONSTANT, "COLOR_GRAY_500"),
        ],
    )
    def test_strategies(self, strategy, expected):
        assert format_name("color/gray/500", strategy) == expected

    def test_prefix(self):
        assert format_name("color/gray/500", NamingStrategy.KEBAB, prefix="ds") == "ds-color-gray-500"

    def test_camel_cannot_start_with_digit(self):
        assert format_name("2xl/size", NamingStrategy.CAMEL) == "_2xlSize"

    def test_kebab_may_start_with_digit(self):
        assert format_name("2xl/size", NamingStrategy.KEBAB) == "2xl-size"

    def test_empty_name(self):
        assert format_name("///", NamingStrategy.CAMEL) == ""
