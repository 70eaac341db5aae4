#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/utils/css.py
"""Helpers for reading inline CSS and class attributes from BeautifulSoup tags."""

from __future__ import annotations

import re
from typing import Any

_CAMEL_RE = re.compile(r"-([a-z])")


def to_camel_case(name: str) -> str:
    """Convert a dashed CSS name to camelCase (``line-through`` -> ``lineThrough``)."""
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def to_pascal_font_name(value: str) -> str:
    """Turn a ``font-family`` value into a pdfmake font name.

    Only the first family is kept; quotes and surrounding spaces are removed
    and the words are joined in PascalCase (``"times new roman", serif`` ->
    ``TimesNewRoman``).
    """
    name = value.split(",")[0].replace('"', "").strip()
    if name.startswith("'"):
        name = name[1:]
    if name.endswith("'"):
        name = name[:-1]
    name = re.sub(r"^([a-z])", lambda m: m.group(1).upper(), name)
    return re.sub(r" ([a-z])", lambda m: m.group(1).upper(), name)


def parse_style_declarations(style: str | None) -> list[tuple[str, str]]:
    """Split a ``style`` attribute into ``(property, value)`` pairs.

    The whole declaration block is lower-cased and ``!important`` removed.
    Declarations that do not split into exactly one property and one value
    (including values containing ``:``) are dropped.
    """
    if not style:
        return []
    declarations = []
    for declaration in style.replace("!important", "").split(";"):
        parts = declaration.lower().split(":")
        if len(parts) != 2:
            continue
        declarations.append((parts[0].strip(), parts[1].strip()))
    return declarations


def _expand_margin(value: str) -> dict[str, str]:
    values = value.split()
    if not values or len(values) > 4:
        return {}
    top = values[0]
    right = values[1] if len(values) > 1 else top
    bottom = values[2] if len(values) > 2 else top
    left = values[3] if len(values) > 3 else right
    return {"margin-top": top, "margin-right": right, "margin-bottom": bottom, "margin-left": left}


def inline_css(element: Any) -> dict[str, str]:
    """Return the element's inline style as a property mapping.

    Later declarations win. The ``margin`` shorthand is also expanded into its
    four sides so lookups such as ``margin-left`` work either way.
    """
    css: dict[str, str] = {}
    for key, value in parse_style_declarations(element.get("style")):
        if key == "margin":
            css.update(_expand_margin(value))
        css[key] = value
    return css


def element_classes(element: Any) -> list[str]:
    """Return the element's class names, whatever form the parser stored them in."""
    classes = element.get("class")
    if not classes:
        return []
    if isinstance(classes, str):
        classes = classes.split(" ")
    return [c for c in classes if c]
