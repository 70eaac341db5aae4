#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/parsers/_tags.py
"""Tag-specific post-processing for converted nodes.

Each handler receives the element, the node built from its children, the
ancestor chain (excluding the element) and the conversion context, and
returns the final node. ``TAG_HANDLERS`` maps upper-case tag names to
handlers; tags without an entry go through ``handle_default``.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from typing import Any, Callable, Iterator, Sequence

from html2pdfmake.constants import (
    DATA_LAYOUT_ATTRIBUTE,
    DATA_OVERRIDE_ATTRIBUTE,
    HR_DEFAULTS,
    LIST_TYPE_ATTRIBUTES,
    MAX_COL_SPAN,
    MAX_ROW_SPAN,
    QUILL_ALIGNMENTS,
    SCRIPT_OFFSET,
    SELF_OVERRIDING_TAGS,
    TABLE_ROW_GROUP_TAGS,
)
from html2pdfmake.exceptions import ParsingError
from html2pdfmake.parsers._context import ConversionContext
from html2pdfmake.utils.css import element_classes, inline_css
from html2pdfmake.utils.units import normalize_number

logger = logging.getLogger(__name__)

Node = Any
TagHandler = Callable[[Any, dict[str, Any], Sequence[Any], ConversionContext], Node]

_IMAGE_ALIGNMENTS = QUILL_ALIGNMENTS[:3]
_NON_NUMERIC_RE = re.compile(r"[^0-9.]")
_SVG_NEWLINE_RE = re.compile(r"\n\s*")
_MISSING = object()


def load_data_override(element: Any, context: ConversionContext) -> dict[str, Any] | None:
    """Decode the element's ``data-pdfmake`` JSON override.

    Single quotes are accepted in place of double quotes.

    Raises
    ------
    ParsingError
        If the JSON is malformed (or not an object) and
        ``fail_on_invalid_overrides`` is set. Otherwise the override is
        skipped with a warning.

    """
    raw = element.get(DATA_OVERRIDE_ATTRIBUTE)
    if not raw:
        return None

    error: json.JSONDecodeError | None = None
    try:
        value = json.loads(raw.replace("'", '"'))
    except json.JSONDecodeError as e:
        error = e
        value = None

    if isinstance(value, dict):
        return value

    reason = error.msg if error else f"expected an object, got {type(value).__name__}"
    message = f"Invalid {DATA_OVERRIDE_ATTRIBUTE} on <{element.name}>: {reason}"
    if context.options.fail_on_invalid_overrides:
        raise ParsingError(message, parsing_stage="data-attribute", original_error=error)
    logger.warning(f"{message}; override skipped")
    return None


def _span(cell: Any, key: str) -> int:
    value = cell.get(key) if isinstance(cell, dict) else None
    return value if isinstance(value, int) and not isinstance(value, bool) else 1


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_text(node: Any) -> bool:
    return isinstance(node, dict) and bool(node.get("text"))


def _iter_rows(groups: list[Any]) -> Iterator[dict[str, Any]]:
    for group in groups:
        if not isinstance(group, dict):
            continue
        node_name = group.get("nodeName")
        if node_name == "TR":
            yield group
        elif node_name in TABLE_ROW_GROUP_TAGS:
            rows = group.get("stack") or group.get("text")
            if isinstance(rows, list):
                yield from (row for row in rows if isinstance(row, dict))


def fill_row_spans(body: list[list[Any]]) -> None:
    """Insert empty placeholder cells below every cell spanning several rows.

    A span that runs past the last row is shortened to fit.
    """
    if not body or not isinstance(body[0], list):
        return

    row_count = len(body)
    for column in range(len(body[0])):
        row_index = 0
        while row_index < row_count:
            row = body[row_index]
            cell = row[column] if column < len(row) else None
            row_span = _span(cell, "rowSpan")
            if row_span > 1:
                if row_span > row_count - row_index:
                    row_span = cell["rowSpan"] = row_count - row_index
                col_span = _span(cell, "colSpan")
                for offset in range(1, row_span):
                    for _ in range(col_span):
                        body[row_index + offset].insert(column, {"text": ""})
                row_index += row_span - 1
            row_index += 1


def _wider(size: Any, current: Any) -> bool:
    """Whether a cell size replaces the size collected so far for its column or row."""
    if current is _MISSING:
        return True
    if size == "auto":
        return False
    return current == "auto" or (_is_number(current) and _is_number(size) and size > current)


def _percentage(value: str) -> float:
    digits = _NON_NUMERIC_RE.sub("", value)
    try:
        return float(digits)
    except ValueError:
        return 0.0


def apply_table_auto_size(element: Any, node: dict[str, Any]) -> None:
    """Derive ``table.widths`` and ``table.heights`` from the cell sizes."""
    css = inline_css(element)
    attribute_width = element.get("width") or ""
    style_width = css.get("width", "")
    full_width = attribute_width == "100%" or style_width == "100%"
    declared_width = style_width or attribute_width
    table_has_width = declared_width.endswith("%")
    table_width = _percentage(declared_width) if table_has_width else 0.0

    body = node["table"]["body"]
    cell_widths: list[list[Any]] = []
    cell_heights: list[list[Any]] = []
    for row in body:
        row_widths, row_heights = [], []
        for cell in row:
            width = cell.get("width", "auto") if isinstance(cell, dict) else "auto"
            height = cell.get("height", "auto") if isinstance(cell, dict) else "auto"
            if width == "*":
                width = "auto"
            if height == "*":
                height = "auto"
            col_span = _span(cell, "colSpan")
            if width != "auto" and col_span > 1:
                width = normalize_number(width / col_span) if _is_number(width) else "auto"
            row_span = _span(cell, "rowSpan")
            if height != "auto" and row_span > 1:
                height = normalize_number(height / row_span) if _is_number(height) else "auto"
            row_widths.append(width)
            row_heights.append(height)
        cell_widths.append(row_widths)
        cell_heights.append(row_heights)

    table_widths: list[Any] = []
    for row_widths in cell_widths:
        for index, width in enumerate(row_widths):
            current = table_widths[index] if index < len(table_widths) else _MISSING
            if not _wider(width, current):
                continue
            if table_has_width:
                share = table_width / len(row_widths) if width == "auto" else _percentage(str(width)) * table_width / 100
                width = f"{normalize_number(share)}%"
            if current is _MISSING:
                table_widths.append(width)
            else:
                table_widths[index] = width

    table_heights: list[Any] = []
    for row_heights in cell_heights:
        height: Any = _MISSING
        for cell_height in row_heights:
            if _wider(cell_height, height):
                height = cell_height
        table_heights.append("auto" if height is _MISSING else height)

    if table_widths:
        node["table"]["widths"] = ["*" if w == "auto" else w for w in table_widths] if full_width else table_widths
    if table_heights:
        node["table"]["heights"] = table_heights


def handle_table(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    """Turn row groups and rows into ``table.body`` with span placeholders."""
    body: list[list[Any]] = []
    has_row_span = False

    groups = node.get("stack") or node.get("text")
    if isinstance(groups, list):
        for row in _iter_rows(groups):
            cells = row.get("stack") or row.get("text")
            if not isinstance(cells, list):
                continue
            row_cells: list[Any] = []
            for cell in cells:
                row_cells.append(cell)
                col_span = _span(cell, "colSpan")
                if col_span > 1:
                    row_cells.extend({"text": ""} for _ in range(col_span - 1))
                if _span(cell, "rowSpan") > 1:
                    has_row_span = True
            body.append(row_cells)

    node["table"] = {"body": body}
    if has_row_span:
        fill_row_spans(body)

    node.pop("stack", None)
    node.pop("text", None)
    context.resolver.apply(node, (*parents, element))

    if context.options.table_auto_size:
        apply_table_auto_size(element, node)

    override = load_data_override(element, context)
    if override:
        for key, value in override.items():
            if key == "layout":
                node["layout"] = value
            else:
                node["table"][key] = value

    return node


def handle_table_cell(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    for attribute, key, limit in (("rowspan", "rowSpan", MAX_ROW_SPAN), ("colspan", "colSpan", MAX_COL_SPAN)):
        raw = element.get(attribute)
        if not raw:
            continue
        try:
            span = int(raw)
        except ValueError:
            logger.debug(f"Ignoring non-integer {attribute}={raw!r} on <{element.name}>")
            continue
        if span > limit:
            logger.debug(f"Clamping {attribute}={span} on <{element.name}> to {limit}")
            span = limit
        node[key] = span
    context.resolver.apply(node, (*parents, element))
    return node


def handle_svg(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    """Replace the node with the element's serialized SVG markup."""
    svg: dict[str, Any] = {"svg": _SVG_NEWLINE_RE.sub("", str(element)), "nodeName": "SVG"}
    if not context.options.remove_tag_classes:
        svg["style"] = ["html-svg"]
    return svg


def handle_line_break(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    node["text"] = [{"text": "\n"}]
    return node


def handle_script_offset(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    node[element.name.lower()] = dict(SCRIPT_OFFSET)
    return node


def handle_horizontal_rule(
    element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext
) -> Node:
    """Replace the node with a canvas line, honouring ``data-pdfmake`` overrides."""
    rule = copy.deepcopy(HR_DEFAULTS)
    override = load_data_override(element, context)
    if override:
        rule.update(override)
    return {
        "margin": rule["margin"],
        "canvas": [
            {
                "type": rule["type"],
                "x1": rule["left"],
                "y1": 0,
                "x2": rule["width"],
                "y2": 0,
                "lineWidth": rule["thickness"],
                "lineColor": rule["color"],
            }
        ],
    }


def handle_list(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    """Move the children into a ``ul``/``ol`` array and map the list attributes."""
    stack = node.pop("stack", None)
    text = node.pop("text", None)
    items = stack if stack is not None else text
    node[element.name.lower()] = list(items) if isinstance(items, list) else []
    context.resolver.apply(node, (*parents, element))

    start = element.get("start")
    if start:
        try:
            node["start"] = int(start)
        except ValueError:
            logger.debug(f"Ignoring non-integer start={start!r} on <{element.name}>")

    list_type = LIST_TYPE_ATTRIBUTES.get(element.get("type") or "")
    if list_type:
        node["type"] = list_type

    style_type = node.get("listStyle") or node.get("listStyleType")
    if style_type:
        node["type"] = style_type

    return node


def handle_list_item(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    """Keep the bullet aligned with the first line of a stacked list item.

    When the item's last block has no text (a nested list, a table), the
    leading children are grouped into one entry and the block follows it.
    """
    stack = node.get("stack")
    if isinstance(stack, list) and stack and not _has_text(stack[-1]):
        leading = stack[:-1]
        first = {"stack": leading} if any(not _has_text(child) for child in leading) else {"text": leading}
        return {"stack": [first, stack[-1]]}

    if "stack" not in node and node.get("text") in ([], ""):
        node["text"] = " "
    return node


def handle_preformatted(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    node["preserveLeadingSpaces"] = True
    return node


def _class_alignment(classes: str, candidates: Sequence[tuple[str, str]] = _IMAGE_ALIGNMENTS) -> str | None:
    return next((alignment for css_class, alignment in candidates if css_class in classes), None)


def _inherited_text_align(element: Any) -> str | None:
    while element is not None and element.name != "[document]":
        text_align = inline_css(element).get("text-align") or element.get("align")
        if text_align:
            return text_align.lower()
        element = element.parent
    return None


def handle_image(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    """Emit the image source (or its reference key) and resolve its alignment."""
    if context.options.images_by_reference:
        node["image"] = context.image_reference(element.get("data-src") or element.get("src"))
    else:
        node["image"] = element.get("src")

    node.pop("stack", None)
    node.pop("text", None)
    context.resolver.apply(node, (*parents, element))

    alignment = _class_alignment(" ".join(element_classes(element)))
    if alignment is None and isinstance(node.get("style"), list):
        alignment = next((a for css_class, a in _IMAGE_ALIGNMENTS if css_class in node["style"]), None)
    if alignment:
        node["alignment"] = alignment

    parent = element.parent
    if not node.get("alignment") and parent is not None and parent.name != "[document]":
        alignment = _class_alignment(" ".join(element_classes(parent)))
        if alignment:
            node["alignment"] = alignment
        else:
            text_align = _inherited_text_align(parent)
            if text_align in ("center", "middle"):
                node["alignment"] = "center"
            elif text_align == "right":
                node["alignment"] = "right"

    if not node.get("alignment"):
        css = inline_css(element)
        if css.get("display") == "block" and css.get("margin-left") == "auto" and css.get("margin-right") == "auto":
            node["alignment"] = "center"

    return node


def set_link(pointer: Any, href: str) -> dict[str, Any]:
    """Attach ``href`` to every leaf of ``pointer``.

    ``#name`` targets become ``linkToDestination``; anything else is a
    ``link``. Bare strings are wrapped in a text node first.
    """
    if not isinstance(pointer, dict):
        pointer = {"text": pointer or ""}

    if isinstance(pointer.get("text"), list):
        pointer["text"] = [set_link(child, href) for child in pointer["text"]]
    elif isinstance(pointer.get("stack"), list):
        pointer["stack"] = [set_link(child, href) for child in pointer["stack"]]
    elif href.startswith("#"):
        pointer["linkToDestination"] = href[1:]
    else:
        pointer["link"] = href
    return pointer


def handle_link(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    href = element.get("href")
    if not href:
        return node
    node = set_link(node, href)
    if isinstance(node.get("text"), list) and len(node["text"]) == 1:
        node = node["text"][0]
    node["nodeName"] = "A"
    return node


def handle_default(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    """Handle tags without a dedicated handler.

    Covers ``data-pdfmake-type="columns"`` divs and the ``custom_tag``
    callback, collapses single-text wrappers, and merges ``data-pdfmake``.
    """
    name = element.name.upper()
    if name == "DIV" and element.get(DATA_LAYOUT_ATTRIBUTE) == "columns":
        if "stack" in node:
            node["columns"] = node.pop("stack")
    elif context.options.custom_tag is not None:
        node = context.options.custom_tag(element=element, parents=list(parents), node=node)

    if not isinstance(node, dict):
        return node

    text = node.get("text")
    if isinstance(text, list) and len(text) == 1 and _has_text(text[0]) and not text[0].get("nodeName"):
        node["text"] = text[0]["text"]

    in_list_item = name == "LI" or (bool(parents) and parents[-1].name.upper() == "LI")
    if in_list_item and node.get("text") in ([], ""):
        node["text"] = " "

    if name not in SELF_OVERRIDING_TAGS:
        override = load_data_override(element, context)
        if override:
            node.update(override)

    return node


TAG_HANDLERS: dict[str, TagHandler] = {
    "TABLE": handle_table,
    "TH": handle_table_cell,
    "TD": handle_table_cell,
    "SVG": handle_svg,
    "BR": handle_line_break,
    "SUB": handle_script_offset,
    "SUP": handle_script_offset,
    "HR": handle_horizontal_rule,
    "OL": handle_list,
    "UL": handle_list,
    "LI": handle_list_item,
    "PRE": handle_preformatted,
    "IMG": handle_image,
    "A": handle_link,
}


def dispatch(element: Any, node: dict[str, Any], parents: Sequence[Any], context: ConversionContext) -> Node:
    """Run the handler registered for the element's tag."""
    handler = TAG_HANDLERS.get(element.name.upper(), handle_default)
    return handler(element, node, parents, context)
