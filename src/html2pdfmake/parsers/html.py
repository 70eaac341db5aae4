#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/parsers/html.py
"""HTML to pdfmake converter.

This module walks a BeautifulSoup tree depth-first and builds the pdfmake
content for it. Each element becomes a node built from its converted
children; the node is then styled by the ancestor chain and finished by the
tag handler registered in ``parsers._tags``.

"""

from __future__ import annotations

import copy
import logging
import re
from pathlib import Path
from typing import IO, Any, Sequence, Union

from html2pdfmake.constants import (
    BLOCK_LEVEL_TAGS,
    DEPS_HTML,
    EXTRA_BLANK_TAGS,
    IGNORED_TAGS,
    PARSER_BACKEND_PACKAGES,
    SKIPPED_TAGS,
    STRUCTURAL_CONTAINER_TAGS,
)
from html2pdfmake.exceptions import DependencyError, ParsingError
from html2pdfmake.options.html import HtmlToPdfmakeOptions
from html2pdfmake.parsers._context import ConversionContext
from html2pdfmake.parsers._tags import dispatch
from html2pdfmake.parsers.base import BaseParser
from html2pdfmake.result import ConversionResult
from html2pdfmake.utils.css import inline_css
from html2pdfmake.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)

_BLOCK_GAP_RE = re.compile(rf"(<\/?({EXTRA_BLANK_TAGS})([^>]+)?>)\s+(<\/?({EXTRA_BLANK_TAGS}))", re.IGNORECASE)
_CELL_TABLE_GAP_RE = re.compile(r"(<td([^>]+)?>)\s+(<table)", re.IGNORECASE)
_TABLE_CELL_GAP_RE = re.compile(r"(<\/table>)\s+(<\/td>)", re.IGNORECASE)
_LINE_BREAK_RE = re.compile(r"\s*\n\s*")
_SPACES_RE = re.compile(r"[ \t]+")
_EDGE_BLANKS_RE = re.compile(r"^[\s\ufeff\xa0]+|[\s\ufeff\xa0]+$")


def remove_extra_blanks(html_content: str) -> str:
    """Remove whitespace between block-level tags and around tables nested in cells."""
    for _ in range(2):
        html_content = _BLOCK_GAP_RE.sub(r"\1\4", html_content)
    html_content = _CELL_TABLE_GAP_RE.sub(r"\1\3", html_content)
    return _TABLE_CELL_GAP_RE.sub(r"\1\2", html_content)


def _node_name(item: Any) -> str | None:
    return item.get("nodeName") if isinstance(item, dict) else None


def _is_blank_text(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("text"), str) and not item["text"].strip()


def needs_stack(node: Any) -> bool:
    """Decide whether a node's children must be laid out vertically.

    Two or more images separated only by blank text are moved into a
    ``columns`` layout instead (the node is modified and False returned).

    Parameters
    ----------
    node : Any
        A node whose ``text`` holds its converted children.

    Returns
    -------
    bool
        True when at least one child is block-level or itself needs a stack.

    """
    if not isinstance(node, dict) or not isinstance(node.get("text"), list):
        return False

    items = node["text"]
    images = [item for item in items if _node_name(item) == "IMG"]
    if len(images) > 1 and all(_node_name(item) == "IMG" or _is_blank_text(item) for item in items):
        node["columns"] = images
        del node["text"]
        return False

    block_count = 0
    for item in items:
        if isinstance(item, dict) and (item.get("stack") is not None or item.get("nodeName") in BLOCK_LEVEL_TAGS):
            block_count += 1
        if needs_stack(item):
            block_count += 1
    return block_count > 0


def html_dependencies(options: HtmlToPdfmakeOptions) -> list[tuple[str, str, str]]:
    """Return BeautifulSoup plus the package of the tree builder selected in ``options``."""
    backend = PARSER_BACKEND_PACKAGES.get(options.html_parser)
    return [*DEPS_HTML, backend] if backend else list(DEPS_HTML)


def is_hidden(element: Any) -> bool:
    css = inline_css(element)
    return css.get("display") == "none" or css.get("visibility") == "hidden"


class HtmlToPdfmakeConverter(BaseParser):
    """Convert HTML to pdfmake content.

    Parameters
    ----------
    options : HtmlToPdfmakeOptions or None, default = None
        Conversion options

    Examples
    --------
        >>> converter = HtmlToPdfmakeConverter()
        >>> result = converter.convert("<p>Hello <b>world</b></p>")
        >>> result.content[0]["nodeName"]
        'P'

    """

    def __init__(self, options: HtmlToPdfmakeOptions | None = None):
        """Initialize the converter with its options."""
        BaseParser._validate_options_type(options, HtmlToPdfmakeOptions, "html")
        options = options or HtmlToPdfmakeOptions()
        super().__init__(options)
        self.options: HtmlToPdfmakeOptions = options

    def parse(self, input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> ConversionResult:
        """Convert an HTML document.

        Parameters
        ----------
        input_data : str, Path, IO or bytes
            HTML markup, a path to an HTML file, raw bytes or a file-like
            object.

        Returns
        -------
        ConversionResult
            pdfmake content, styles and (optionally) images.

        Raises
        ------
        ParsingError
            If the input cannot be read, nesting is too deep, or a
            ``data-pdfmake`` override is malformed (strict mode).
        DependencyError
            If BeautifulSoup or the selected tree builder is not installed.

        """
        html_content = self._load_text_content(input_data)
        return self.convert(html_content)

    @requires_dependencies("html", lambda self, *args, **kwargs: html_dependencies(self.options))
    def convert(self, html_content: str) -> ConversionResult:
        """Convert an HTML string.

        A fresh ConversionContext is used for every call, so image
        references and merged styles never leak between documents.
        """
        context = ConversionContext.create(self.options)

        if self.options.remove_extra_blanks:
            html_content = remove_extra_blanks(html_content)

        body = self._parse_body(html_content)

        with debug_timer(logger, "HTML to pdfmake transform"):
            root = self.transform(body, (), context)

        content: Any = []
        if isinstance(root, dict):
            content = root.get("stack")
            if content is None:
                content = root.get("text")
            if content is None:
                content = [root]

        images = context.images() if self.options.images_by_reference else None
        logger.debug(f"Converted HTML with {len(context.image_sources)} image reference(s)")
        return ConversionResult(content=content, styles=copy.deepcopy(context.tag_styles), images=images)

    def _parse_body(self, html_content: str) -> Any:
        from bs4 import BeautifulSoup
        from bs4.element import Tag
        from bs4.exceptions import FeatureNotFound

        parser = self.options.html_parser
        try:
            soup = BeautifulSoup(html_content, parser)
        except FeatureNotFound as e:
            package = PARSER_BACKEND_PACKAGES.get(parser)
            missing_packages = [(package[0], package[2])] if package else []
            raise DependencyError(
                converter_name="html",
                missing_packages=missing_packages,
                message=f"HTML tree builder {parser!r} is not available: {e}. Install with: pip install {parser}",
            ) from e

        body = soup.find("body")
        if isinstance(body, Tag):
            return body

        # html.parser keeps fragments as they are; wrap them in a body
        body = soup.new_tag("body")
        for child in list(soup.contents):
            body.append(child.extract())
        soup.append(body)
        return body

    def transform(self, node: Any, parents: Sequence[Any], context: ConversionContext) -> Any:
        """Convert one DOM node to pdfmake content.

        Parameters
        ----------
        node : bs4 node
            Element or text node.
        parents : Sequence of Tag
            Ancestor chain, outermost first.
        context : ConversionContext
            State of the running conversion.

        Returns
        -------
        dict or str
            The pdfmake node, or an empty string when the node produces
            nothing.

        """
        from bs4.element import NavigableString, PreformattedString, Tag

        # Comments, doctypes, CDATA and processing instructions
        if isinstance(node, PreformattedString):
            return ""
        if isinstance(node, NavigableString):
            return self._transform_text(str(node), parents, context)
        if isinstance(node, Tag):
            return self._transform_element(node, parents, context)
        return ""

    def _transform_text(self, text: str, parents: Sequence[Any], context: ConversionContext) -> Any:
        if not text:
            return ""

        parent = parents[-1] if parents else None
        preserve = any(ancestor.name == "pre" for ancestor in parents)
        if parent is not None:
            flag = context.resolver.preserves_whitespace(parent)
            if flag is not None:
                preserve = flag

        if not preserve:
            text = _LINE_BREAK_RE.sub(" ", text)
            text = _SPACES_RE.sub(" ", text)
        text = text.replace("\xa0", " ")

        if self.options.replace_text is not None:
            text = self.options.replace_text(text, list(parents))

        if parent is not None and parent.name.upper() in STRUCTURAL_CONTAINER_TAGS:
            text = _EDGE_BLANKS_RE.sub("", text)

        if not text:
            return ""
        return context.resolver.apply({"text": text}, parents)

    def _transform_element(self, element: Any, parents: Sequence[Any], context: ConversionContext) -> Any:
        name = element.name.upper()
        if name in IGNORED_TAGS or name in SKIPPED_TAGS:
            return ""
        if not self.options.show_hidden and is_hidden(element):
            return ""
        if len(parents) >= self.options.max_depth:
            raise ParsingError(
                f"HTML nesting exceeds max_depth={self.options.max_depth} at <{element.name}>",
                parsing_stage="transform",
            )

        node: dict[str, Any] = {"text": [], "nodeName": name}
        if element.get("id"):
            node["id"] = element["id"]

        chain = (*parents, element)
        if element.contents:
            for child in element.children:
                result = self.transform(child, chain, context)
                if not result:
                    continue
                if isinstance(result, dict) and result.get("text") == []:
                    result["text"] = ""
                node["text"].append(result)

            if needs_stack(node):
                node["stack"] = node.pop("text")
            else:
                context.resolver.apply(node, chain)

        return dispatch(element, node, parents, context)
