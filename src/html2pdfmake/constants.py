#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for html2pdfmake.

This module centralizes the hardcoded values used by the converter: the
built-in tag styles, the legacy ``<font size>`` buckets, unit conversion
ratios and the tag groupings the node transformer relies on.

Constants are organized by category:
1. Type Definitions - Literal types
2. Conversion Defaults - option defaults
3. Styling Tables - default tag styles, font-size keywords
4. Tag Groupings - block-level and structural tag sets
5. Dependencies - packages required by the HTML parser backends
"""

from __future__ import annotations

from typing import Any, Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html5lib", "html.parser", "lxml"]
PageOrientation = Literal["portrait", "landscape"]

HTML_PARSERS: tuple[str, ...] = ("html5lib", "html.parser", "lxml")

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html5lib"
DEFAULT_TABLE_AUTO_SIZE = False
DEFAULT_IMAGES_BY_REFERENCE = False
DEFAULT_REMOVE_EXTRA_BLANKS = False
DEFAULT_SHOW_HIDDEN = False
DEFAULT_REMOVE_TAG_CLASSES = False
DEFAULT_FAIL_ON_INVALID_OVERRIDES = True
DEFAULT_MAX_NESTING_DEPTH = 256

# Span limits applied to colspan/rowspan, as in browsers
MAX_COL_SPAN = 1000
MAX_ROW_SPAN = 65534

# <font size="1..7"> buckets, px sizes converted to pt
DEFAULT_FONT_SIZES: tuple[float, ...] = (8.04, 11.25, 12.86, 14.46, 16.07, 19.29, 22.50)

IMAGE_REFERENCE_PREFIX = "img_ref_"
IMAGE_REFERENCE_SUFFIX_LENGTH = 6

# Document definition defaults (A4 page, editor body font)
DEFAULT_PAGE_SIZE = "A4"
DEFAULT_PAGE_ORIENTATION: PageOrientation = "portrait"
DEFAULT_PAGE_MARGINS: tuple[float, float, float, float] = (40, 40, 40, 40)
DEFAULT_DOCUMENT_STYLE: dict[str, Any] = {"fontSize": 11.25, "lineHeight": 1.5, "font": "Roboto"}

# =============================================================================
# Units
# =============================================================================

PX_TO_PT = 0.803571
EM_TO_PT = 12
CM_TO_PT = 28.34646
IN_TO_PT = 72

# =============================================================================
# Styling Tables
# =============================================================================

# Heading sizes follow the editor's px sizes converted with PX_TO_PT
DEFAULT_TAG_STYLES: dict[str, dict[str, Any]] = {
    "b": {"bold": True},
    "strong": {"bold": True},
    "u": {"decoration": "underline"},
    "del": {"decoration": "lineThrough"},
    "s": {"decoration": "lineThrough"},
    "em": {"italics": True},
    "i": {"italics": True},
    "h1": {"fontSize": 25.71, "bold": True, "margin": [0, 0, 0, 8], "lineHeight": 1.5},
    "h2": {"fontSize": 20.89, "bold": True, "margin": [0, 0, 0, 6], "lineHeight": 1.5},
    "h3": {"fontSize": 16.88, "bold": True, "margin": [0, 0, 0, 6], "lineHeight": 1.5},
    "h4": {"fontSize": 16.07, "bold": True, "margin": [0, 0, 0, 5], "lineHeight": 1.5},
    "h5": {"fontSize": 14.46, "bold": True, "margin": [0, 0, 0, 5], "lineHeight": 1.5},
    "h6": {"fontSize": 12.86, "bold": True, "margin": [0, 0, 0, 5], "lineHeight": 1.5},
    "a": {"color": "blue", "decoration": "underline"},
    "strike": {"decoration": "lineThrough"},
    "p": {"fontSize": 11.25, "margin": [0, 0, 0, 5], "lineHeight": 1.5},
    "ul": {"margin": [0, 0, 0, 5], "lineHeight": 1.5},
    "table": {"margin": [0, 0, 0, 5]},
    "th": {"bold": True, "fillColor": "#EEEEEE"},
}

# CSS font-size keywords in pt
FONT_SIZE_KEYWORDS: dict[str, float] = {
    "xx-small": 5.79,
    "x-small": 7.23,
    "small": 8.60,
    "medium": 9.64,
    "large": 11.57,
    "x-large": 14.46,
    "xx-large": 19.29,
    "xxx-large": 28.93,
}

BORDER_STYLE_KEYWORDS = frozenset(
    {"dotted", "dashed", "solid", "double", "groove", "ridge", "inset", "outset", "none", "hidden", "mix"}
)

TEXT_DECORATIONS = frozenset({"underline", "lineThrough", "overline"})

QUILL_ALIGNMENTS: tuple[tuple[str, str], ...] = (
    ("ql-align-center", "center"),
    ("ql-align-right", "right"),
    ("ql-align-left", "left"),
    ("ql-align-justify", "justify"),
)

LIST_TYPE_ATTRIBUTES: dict[str, str] = {
    "A": "upper-alpha",
    "a": "lower-alpha",
    "I": "upper-roman",
    "i": "lower-roman",
}

SCRIPT_OFFSET: dict[str, Any] = {"offset": "30%", "fontSize": 8}

HR_DEFAULTS: dict[str, Any] = {
    "width": 514,
    "type": "line",
    "margin": [0, 12, 0, 12],
    "thickness": 0.5,
    "color": "#000000",
    "left": 0,
}

# =============================================================================
# Tag Groupings
# =============================================================================

# Children of these tags force the parent into a vertical stack
BLOCK_LEVEL_TAGS = frozenset({"P", "DIV", "TABLE", "SVG", "UL", "OL", "IMG", "H1", "H2", "H3", "H4", "H5", "H6"})

# Whitespace-only text directly inside these tags is dropped
STRUCTURAL_CONTAINER_TAGS = frozenset({"TABLE", "THEAD", "TBODY", "TFOOT", "TR", "UL", "OL"})

TABLE_ROW_GROUP_TAGS = frozenset({"THEAD", "TBODY", "TFOOT"})

IGNORED_TAGS = frozenset({"COLGROUP", "COL"})

SKIPPED_TAGS = frozenset({"SCRIPT", "STYLE"})

# Tags whose data-pdfmake override is merged by their own handler
SELF_OVERRIDING_TAGS = frozenset({"HR", "TABLE"})

DATA_OVERRIDE_ATTRIBUTE = "data-pdfmake"
DATA_LAYOUT_ATTRIBUTE = "data-pdfmake-type"

# Block tags whose surrounding whitespace is collapsed by remove_extra_blanks
EXTRA_BLANK_TAGS = "div|p|h1|h2|h3|h4|h5|h6|ol|ul|li"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.12")]

# Tree builders beyond the built-in html.parser, as (install_name, import_name, version_spec)
PARSER_BACKEND_PACKAGES: dict[str, tuple[str, str, str]] = {
    "html5lib": ("html5lib", "html5lib", ">=1.1"),
    "lxml": ("lxml", "lxml", ">=4.9"),
}
