#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared by the converter: units, colours, inline CSS, dependency checks."""

from html2pdfmake.utils.colors import parse_color
from html2pdfmake.utils.css import inline_css, parse_style_declarations, to_camel_case, to_pascal_font_name
from html2pdfmake.utils.units import convert_to_unit

__all__ = [
    "convert_to_unit",
    "inline_css",
    "parse_color",
    "parse_style_declarations",
    "to_camel_case",
    "to_pascal_font_name",
]
