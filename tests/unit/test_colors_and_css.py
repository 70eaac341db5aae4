#  Copyright (c) 2025 Tom Villani, Ph.D.
# tests/unit/test_colors_and_css.py
"""Unit tests for colour parsing and inline CSS helpers."""

import logging

import pytest

from html2pdfmake.utils.colors import parse_color
from html2pdfmake.utils.css import (
    element_classes,
    inline_css,
    parse_style_declarations,
    to_camel_case,
    to_pascal_font_name,
)


@pytest.mark.unit
class TestParseColor:
    """Tests for parse_color."""

    def test_hex_passes_through(self):
        assert parse_color("#FFF") == ("#FFF", 1)
        assert parse_color("#a1b2c3") == ("#a1b2c3", 1)

    def test_rgb_to_hex(self):
        assert parse_color("rgb(255, 0, 0)") == ("#ff0000", 1)
        assert parse_color("rgb(230,0,0)") == ("#e60000", 1)

    def test_rgba_alpha_becomes_opacity(self):
        assert parse_color("rgba(0, 0, 0, 0.5)") == ("#000000", 0.5)

    def test_percentage_channels(self):
        assert parse_color("rgb(100%, 50%, 0%)") == ("#ff8000", 1)

    def test_channels_are_clamped(self):
        assert parse_color("rgb(300, 0, 0)") == ("#ff0000", 1)

    def test_names_pass_through(self):
        assert parse_color("red") == ("red", 1)

    def test_unparsable_value_is_logged_and_returned(self, caplog):
        with caplog.at_level(logging.WARNING, logger="html2pdfmake.utils.colors"):
            assert parse_color("hsl(0, 100%, 50%)") == ("hsl(0, 100%, 50%)", 1)
        assert "Could not parse color" in caplog.text


@pytest.mark.unit
class TestStyleDeclarations:
    """Tests for parse_style_declarations and inline_css."""

    def test_declarations_are_lowercased_and_trimmed(self):
        assert parse_style_declarations("Color: Red ; MARGIN:0") == [("color", "red"), ("margin", "0")]

    def test_important_is_removed(self):
        assert parse_style_declarations("color: red !important") == [("color", "red")]

    def test_malformed_declarations_dropped(self):
        """Declarations without exactly one colon are skipped."""
        assert parse_style_declarations("bad; background: url(http://x); color: blue") == [("color", "blue")]

    def test_empty_style(self):
        assert parse_style_declarations(None) == []
        assert parse_style_declarations("") == []

    def test_inline_css_last_declaration_wins(self, element):
        css = inline_css(element('<p style="color: red; color: blue">x</p>', "p"))
        assert css["color"] == "blue"

    def test_inline_css_expands_margin(self, element):
        css = inline_css(element('<img style="margin: 0 auto">', "img"))
        assert css["margin-left"] == "auto"
        assert css["margin-right"] == "auto"
        assert css["margin-top"] == "0"

    def test_element_classes(self, element):
        assert element_classes(element('<p class="a  b">x</p>', "p")) == ["a", "b"]
        assert element_classes(element("<p>x</p>", "p")) == []


@pytest.mark.unit
class TestNameHelpers:
    """Tests for camelCase and font-name conversion."""

    def test_camel_case(self):
        assert to_camel_case("line-through") == "lineThrough"
        assert to_camel_case("list-style-type") == "listStyleType"

    def test_font_name_first_family(self):
        assert to_pascal_font_name("'open sans', arial") == "OpenSans"

    def test_font_name_double_quotes(self):
        assert to_pascal_font_name('"times new roman", serif') == "TimesNewRoman"

    def test_single_word_font(self):
        assert to_pascal_font_name("roboto") == "Roboto"
