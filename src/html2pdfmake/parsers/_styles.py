#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/parsers/_styles.py
"""Style resolution for the HTML to pdfmake converter.

The resolver cascades tag default styles and inline ``style`` attributes
down an ancestor chain onto a pdfmake node. Every ancestor contributes text
properties (bold, colour, font, ...), but box properties (margins and
borders) only come from the last element of the chain, which is the node's
own element or its direct parent.

"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Iterable, Mapping, Sequence

from html2pdfmake.constants import (
    BORDER_STYLE_KEYWORDS,
    FONT_SIZE_KEYWORDS,
    QUILL_ALIGNMENTS,
    TEXT_DECORATIONS,
)
from html2pdfmake.utils.colors import parse_color
from html2pdfmake.utils.css import element_classes, parse_style_declarations, to_camel_case, to_pascal_font_name
from html2pdfmake.utils.units import convert_to_unit, normalize_number

logger = logging.getLogger(__name__)

StyleDeclaration = tuple[str, Any]

_MARGIN_SIDES = {"marginLeft": 0, "marginTop": 1, "marginRight": 2, "marginBottom": 3}
_BORDER_SIDES = (("-left", 0), ("-top", 1), ("-right", 2), ("-bottom", 3))
_LEADING_INT_RE = re.compile(r"^\s*[-+]?\d+")
_LEADING_NUMBER_RE = re.compile(r"^-?(\d+\.?\d*|\.\d+)")
_ZERO_WIDTH_RE = re.compile(r"^0[a-z%]*$")
_PLAIN_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")


def merge_default_styles(base: Mapping[str, Any], overrides: Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Merge user tag styles into the built-in tag styles.

    Parameters
    ----------
    base : Mapping
        Built-in styles keyed by lower-case tag name.
    overrides : Mapping or None
        User styles. A falsy tag entry removes the tag, an empty-string
        property value removes that property, other values overwrite.

    Returns
    -------
    dict
        A new style map; neither input is modified.

    """
    merged: dict[str, dict[str, Any]] = copy.deepcopy(dict(base))
    for tag, properties in (overrides or {}).items():
        tag = tag.lower()
        if tag not in merged:
            merged[tag] = copy.deepcopy(dict(properties or {}))
            continue
        if not properties:
            del merged[tag]
            continue
        for key, value in properties.items():
            if isinstance(value, str) and value == "":
                merged[tag].pop(key, None)
            else:
                merged[tag][key] = copy.deepcopy(value)
    return merged


def rearrange_border_value(value: str) -> str:
    """Reorder a three-token border shorthand into ``width style color``.

    Values that do not have exactly three space-separated tokens are
    returned unchanged.
    """
    tokens = value.split(" ")
    if len(tokens) != 3:
        return value
    width, style, color = "0px", "none", "transparent"
    for token in tokens:
        if token[:1].isdigit():
            width = token
        elif token in BORDER_STYLE_KEYWORDS:
            style = token
        else:
            color = token
    return f"{width} {style} {color}"


def _leading_int(value: str) -> int | None:
    match = _LEADING_INT_RE.match(value)
    return int(match.group()) if match else None


def _add_decoration(node: dict[str, Any], decoration: Any) -> None:
    if not isinstance(node.get("decoration"), list):
        node["decoration"] = []
    values = decoration if isinstance(decoration, list) else [decoration]
    for value in values:
        if value and value not in node["decoration"]:
            node["decoration"].append(value)


class StyleResolver:
    """Compute pdfmake style attributes from tag defaults and inline CSS.

    Parameters
    ----------
    tag_styles : Mapping
        Effective default styles keyed by lower-case tag name.
    ignore_styles : Iterable of str
        CSS properties to skip when reading inline styles.
    font_sizes : Sequence of float
        pt sizes for the legacy ``size`` attribute (1-7).
    remove_tag_classes : bool
        Skip the synthetic ``html-<tag>`` classes.

    """

    _PROPERTY_PARSERS = {
        "margin": "_parse_margin",
        "line-height": "_parse_line_height",
        "text-align": "_parse_text_align",
        "font-weight": "_parse_font_weight",
        "text-decoration": "_parse_text_decoration",
        "font-style": "_parse_font_style",
        "font-family": "_parse_font_family",
        "color": "_parse_color",
        "background-color": "_parse_background_color",
        "text-indent": "_parse_text_indent",
        "white-space": "_parse_white_space",
    }

    def __init__(
        self,
        tag_styles: Mapping[str, Mapping[str, Any]],
        ignore_styles: Iterable[str] = (),
        font_sizes: Sequence[float] = (),
        remove_tag_classes: bool = False,
    ):
        """Initialize the resolver with the conversion's style settings."""
        self.tag_styles = tag_styles
        self.ignore_styles = frozenset(ignore_styles)
        self.font_sizes = tuple(font_sizes)
        self.remove_tag_classes = remove_tag_classes

    def resolve(self, element: Any, ancestors: Sequence[Any] = ()) -> dict[str, Any]:
        """Return the effective style of ``element`` under ``ancestors``.

        Parameters
        ----------
        element : bs4.element.Tag
            The element whose style is computed.
        ancestors : Sequence of Tag
            Ancestors from the document root to the direct parent.

        Returns
        -------
        dict
            A fresh StyleAttrs mapping.

        """
        node = self.apply({"nodeName": element.name.upper()}, (*ancestors, element))
        del node["nodeName"]
        return node

    def apply(self, node: dict[str, Any], parents: Sequence[Any]) -> dict[str, Any]:
        """Cascade the styles of ``parents`` onto ``node`` in place.

        Parameters
        ----------
        node : dict
            The pdfmake node being built.
        parents : Sequence of Tag
            Ancestor chain, outermost first. Only the last entry contributes
            margins and borders.

        Returns
        -------
        dict
            ``node``, for chaining.

        """
        css_classes: list[str] = []
        last_index = len(parents) - 1

        for index, parent in enumerate(parents):
            tag = parent.name.lower()
            if not self.remove_tag_classes:
                html_class = f"html-{tag}"
                if html_class != "html-body" and html_class not in css_classes:
                    css_classes.insert(0, html_class)
            css_classes.extend(element_classes(parent))

            inherited_only = index != last_index
            self._apply_tag_defaults(node, tag, inherited_only)

            if tag == "tr":
                inherited_only = False
            for key, value in self.parse_style(parent, inherited_only):
                self._apply_declaration(node, key, value)

        if css_classes:
            node["style"] = css_classes

        # Quill alignment classes win over text-align
        for css_class, alignment in QUILL_ALIGNMENTS:
            if css_class in css_classes:
                node["alignment"] = alignment
                break

        return node

    def _apply_tag_defaults(self, node: dict[str, Any], tag: str, inherited_only: bool) -> None:
        for key, value in self.tag_styles.get(tag, {}).items():
            if inherited_only and ("margin" in key or "border" in key):
                continue
            if key == "decoration":
                _add_decoration(node, value)
            elif key in ("bold", "italics"):
                if value is True:
                    node[key] = True
            elif key not in node or not inherited_only:
                node[key] = copy.deepcopy(value)

    @staticmethod
    def _apply_declaration(node: dict[str, Any], key: str, value: Any) -> None:
        if key == "decoration":
            _add_decoration(node, value)
        elif key == "alignment" and node.get("nodeName") in ("UL", "OL"):
            return
        elif key != "margin" and key.startswith("margin") and isinstance(node.get("margin"), list):
            side = _MARGIN_SIDES.get(key)
            if side is not None:
                node["margin"][side] = value
        else:
            node[key] = value

    def preserves_whitespace(self, element: Any) -> bool | None:
        """Return the ``white-space`` preservation flag set on ``element``, if any."""
        if "white-space" in self.ignore_styles:
            return None
        for key, value in parse_style_declarations(element.get("style")):
            if key == "white-space" and value != "nowrap":
                return value == "break-spaces" or value.startswith("pre")
        return None

    def parse_style(self, element: Any, inherited_only: bool) -> list[StyleDeclaration]:
        """Read an element's inline style and presentational attributes.

        Parameters
        ----------
        element : bs4.element.Tag
            Element to read.
        inherited_only : bool
            Skip margins, borders and sizes (the element is not the last
            ancestor of the node being styled).

        Returns
        -------
        list of (str, Any)
            pdfmake ``(property, value)`` pairs in application order.

        """
        declarations = parse_style_declarations(element.get("style"))
        for attribute in ("width", "height"):
            raw = element.get(attribute)
            if raw:
                declarations.insert(0, (attribute, self._attribute_length(raw)))

        result: list[StyleDeclaration] = []

        color = element.get("color")
        if color:
            result.append(("color", parse_color(color)[0]))

        size = element.get("size")
        if size is not None:
            level = _leading_int(size)
            if level is None:
                logger.debug(f"Ignoring non-numeric size attribute {size!r} on <{element.name}>")
            elif self.font_sizes:
                level = min(max(1, level), 7)
                result.append(("fontSize", max(self.font_sizes[0], self.font_sizes[level - 1])))

        node_name = element.name.upper()
        borders: list[tuple[str, str]] = []
        for key, value in declarations:
            if key in self.ignore_styles:
                continue
            parser_name = self._PROPERTY_PARSERS.get(key)
            if parser_name is not None:
                if key == "margin" and inherited_only:
                    continue
                getattr(self, parser_name)(value, node_name, result)
            elif key.startswith("border"):
                if not inherited_only:
                    borders.append((key, value))
            else:
                self._parse_other(key, value, inherited_only, node_name, result)

        if borders:
            self._process_borders(borders, result)

        return result

    @staticmethod
    def _attribute_length(raw: str) -> str:
        value = raw.strip().lower()
        if _PLAIN_NUMBER_RE.match(value):
            value += "px"
        converted = convert_to_unit(value)
        return value if converted is None else str(converted)

    @staticmethod
    def _parse_margin(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        values = value.split()
        if len(values) == 1:
            values = values * 4
        elif len(values) == 2:
            values = [values[1], values[0], values[1], values[0]]
        elif len(values) == 3:
            values = [values[1], values[0], values[1], values[2]]
        elif len(values) == 4:
            values = [values[3], values[0], values[1], values[2]]
        else:
            return

        margin = ["" if v == "auto" else convert_to_unit(v) for v in values]
        if None not in margin:
            result.append(("margin", margin))

    @staticmethod
    def _parse_line_height(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        if value.endswith("%"):
            try:
                result.append(("lineHeight", normalize_number(float(value[:-1]) / 100)))
            except ValueError:
                logger.debug(f"Ignoring line-height {value!r}")
            return
        converted = convert_to_unit(value)
        if converted is not None:
            result.append(("lineHeight", converted))

    @staticmethod
    def _parse_text_align(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        result.append(("alignment", value))

    @staticmethod
    def _parse_font_weight(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        weight = _leading_int(value)
        result.append(("bold", value == "bold" or (weight is not None and weight >= 700)))

    @staticmethod
    def _parse_text_decoration(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        decoration = to_camel_case(value)
        if decoration in TEXT_DECORATIONS:
            result.append(("decoration", decoration))

    @staticmethod
    def _parse_font_style(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        if value == "italic":
            result.append(("italics", True))

    @staticmethod
    def _parse_font_family(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        result.append(("font", to_pascal_font_name(value)))

    @staticmethod
    def _parse_color(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        color, opacity = parse_color(value)
        result.append(("color", color))
        if opacity < 1:
            result.append(("opacity", opacity))

    @staticmethod
    def _parse_background_color(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        color, opacity = parse_color(value)
        if color == "transparent":
            return
        is_cell = node_name in ("TD", "TH")
        result.append(("fillColor" if is_cell else "background", color))
        if opacity < 1:
            result.append(("fillOpacity" if is_cell else "opacity", opacity))

    @staticmethod
    def _parse_text_indent(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        converted = convert_to_unit(value)
        if converted is not None:
            result.append(("leadingIndent", converted))

    @staticmethod
    def _parse_white_space(value: str, node_name: str, result: list[StyleDeclaration]) -> None:
        if value == "nowrap":
            result.append(("noWrap", True))
        else:
            result.append(("preserveLeadingSpaces", value == "break-spaces" or value.startswith("pre")))

    @staticmethod
    def _parse_other(key: str, value: str, inherited_only: bool, node_name: str, result: list[StyleDeclaration]) -> None:
        if inherited_only and (key.startswith("margin-") or key in ("width", "height")):
            return

        if node_name == "IMG" and key in ("width", "height"):
            converted = convert_to_unit(value)
            result.append((key, value if converted is None else converted))
            return

        if key.startswith("padding") or not value:
            return

        key = to_camel_case(key)
        converted = convert_to_unit(value)

        if key == "fontSize" and converted is None:
            if value in FONT_SIZE_KEYWORDS:
                result.append((key, FONT_SIZE_KEYWORDS[value]))
            return

        if key.startswith("margin") and value == "auto":
            return

        result.append((key, value if converted is None else converted))

    @staticmethod
    def _process_borders(borders: list[tuple[str, str]], result: list[StyleDeclaration]) -> None:
        border: list[bool | None] = [None] * 4
        border_color: list[str | None] = [None] * 4

        for key, value in borders:
            side = next((index for suffix, index in _BORDER_SIDES if suffix in key), -1)
            sides = [side] if side >= 0 else list(range(4))
            parts = key.split("-")

            if len(parts) == 1 or (len(parts) == 2 and side >= 0):
                properties = rearrange_border_value(value).split(" ")
                match = _LEADING_NUMBER_RE.match(properties[0])
                visible = match is not None and float(match.group()) > 0
                for index in sides:
                    border[index] = visible
                if len(properties) > 2:
                    color = parse_color(" ".join(properties[2:]))[0]
                    for index in sides:
                        border_color[index] = color
            elif side >= 0 and parts[2] == "color":
                border_color[side] = parse_color(value)[0]
            elif side >= 0 and parts[2] == "width":
                border[side] = not _ZERO_WIDTH_RE.match(value)

        if any(b is not None for b in border):
            result.append(("border", [True if b is None else b for b in border]))
        if any(c is not None for c in border_color):
            result.append(("borderColor", ["#000000" if c is None else c for c in border_color]))
