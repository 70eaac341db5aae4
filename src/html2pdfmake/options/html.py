#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML to pdfmake conversion.

This module defines the per-call conversion options and the page settings
used when a conversion result is wrapped into a full document definition.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable

from html2pdfmake.constants import (
    DEFAULT_DOCUMENT_STYLE,
    DEFAULT_FAIL_ON_INVALID_OVERRIDES,
    DEFAULT_FONT_SIZES,
    DEFAULT_HTML_PARSER,
    DEFAULT_IMAGES_BY_REFERENCE,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_PAGE_MARGINS,
    DEFAULT_PAGE_ORIENTATION,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REMOVE_EXTRA_BLANKS,
    DEFAULT_REMOVE_TAG_CLASSES,
    DEFAULT_SHOW_HIDDEN,
    DEFAULT_TABLE_AUTO_SIZE,
    HTML_PARSERS,
    HtmlParser,
    PageOrientation,
)
from html2pdfmake.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class HtmlToPdfmakeOptions(CloneFrozenMixin):
    """Configuration options for converting HTML to a pdfmake document.

    Parameters
    ----------
    table_auto_size : bool, default False
        Compute ``table.widths`` and ``table.heights`` from the cell sizes.
    images_by_reference : bool, default False
        Emit images as ``img_ref_*`` keys and return the sources in
        ``ConversionResult.images`` instead of inlining them in each node.
    remove_extra_blanks : bool, default False
        Collapse whitespace between block-level tags before parsing.
    show_hidden : bool, default False
        Keep elements styled ``display:none`` or ``visibility:hidden``.
    remove_tag_classes : bool, default False
        Do not add the synthetic ``html-<tag>`` classes to ``style``.
    ignore_styles : tuple of str, default ()
        CSS property names that are skipped when reading inline styles.
    font_sizes : tuple of float
        Seven pt sizes used for the legacy ``<font size="1..7">`` attribute.
    default_styles : dict or None, default None
        Per-tag overrides merged into the built-in tag styles. An empty
        string value removes a property; a falsy tag entry removes the tag.
    custom_tag : callable or None, default None
        Called as ``custom_tag(element=..., parents=..., node=...)`` for tags
        without a dedicated handler; the return value replaces the node.
    replace_text : callable or None, default None
        Called as ``replace_text(text, parents)`` for every text node.
    html_parser : {"html5lib", "html.parser", "lxml"}, default "html5lib"
        BeautifulSoup tree builder. ``html5lib`` builds the same tree a
        browser would (implicit ``<tbody>``, case-preserving SVG).
    fail_on_invalid_overrides : bool, default True
        Raise ParsingError on malformed ``data-pdfmake`` JSON. When False the
        override is skipped and a warning is logged.
    max_depth : int, default 256
        Maximum element nesting depth before ParsingError is raised.
    image_reference_suffix : str or None, default None
        Fixed suffix for image reference keys. A random one is drawn per
        conversion when None.

    Examples
    --------
    Size tables and reference images:
        >>> options = HtmlToPdfmakeOptions(table_auto_size=True, images_by_reference=True)

    Drop the paragraph margin and make links red:
        >>> options = HtmlToPdfmakeOptions(default_styles={"p": {"margin": ""}, "a": {"color": "red"}})

    """

    table_auto_size: bool = field(
        default=DEFAULT_TABLE_AUTO_SIZE,
        metadata={"help": "Compute table column widths and row heights from cell sizes", "importance": "core"},
    )
    images_by_reference: bool = field(
        default=DEFAULT_IMAGES_BY_REFERENCE,
        metadata={"help": "Reference images by key and return them in a separate images map", "importance": "core"},
    )
    remove_extra_blanks: bool = field(
        default=DEFAULT_REMOVE_EXTRA_BLANKS,
        metadata={"help": "Collapse whitespace between block-level tags", "importance": "core"},
    )
    show_hidden: bool = field(
        default=DEFAULT_SHOW_HIDDEN,
        metadata={"help": "Keep elements hidden with display:none or visibility:hidden", "importance": "advanced"},
    )
    remove_tag_classes: bool = field(
        default=DEFAULT_REMOVE_TAG_CLASSES,
        metadata={"help": "Do not add html-<tag> classes to node styles", "importance": "advanced"},
    )
    ignore_styles: tuple[str, ...] = field(
        default=(),
        metadata={"help": "CSS properties to ignore when reading inline styles", "importance": "advanced"},
    )
    font_sizes: tuple[float, ...] = field(
        default=DEFAULT_FONT_SIZES,
        metadata={"help": "pt sizes for the legacy font size attribute (seven values)", "importance": "advanced"},
    )
    default_styles: dict[str, Any] | None = field(
        default=None,
        metadata={"help": "Per-tag style overrides merged into the built-in tag styles", "importance": "core"},
    )
    custom_tag: Callable[..., Any] | None = field(
        default=None,
        metadata={"help": "Callback invoked for tags without a dedicated handler", "exclude_from_cli": True},
    )
    replace_text: Callable[[str, list[Any]], str] | None = field(
        default=None,
        metadata={"help": "Callback applied to every text node", "exclude_from_cli": True},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup tree builder", "choices": list(HTML_PARSERS), "importance": "advanced"},
    )
    fail_on_invalid_overrides: bool = field(
        default=DEFAULT_FAIL_ON_INVALID_OVERRIDES,
        metadata={"help": "Raise on malformed data-pdfmake JSON instead of skipping it", "importance": "advanced"},
    )
    max_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum element nesting depth", "type": int, "importance": "security"},
    )
    image_reference_suffix: str | None = field(
        default=None,
        metadata={"help": "Fixed suffix for image reference keys", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize collections and validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        object.__setattr__(self, "ignore_styles", tuple(s.strip().lower() for s in self.ignore_styles))
        object.__setattr__(self, "font_sizes", tuple(self.font_sizes))
        if self.default_styles is not None:
            object.__setattr__(self, "default_styles", copy.deepcopy(self.default_styles))

        if len(self.font_sizes) != 7:
            raise ValueError(f"font_sizes must contain exactly 7 sizes, got {len(self.font_sizes)}")
        if any(size <= 0 for size in self.font_sizes):
            raise ValueError(f"font_sizes must be positive, got {self.font_sizes}")
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.html_parser not in HTML_PARSERS:
            raise ValueError(f"html_parser must be one of {', '.join(HTML_PARSERS)}, got {self.html_parser!r}")
        if self.default_styles is not None and not isinstance(self.default_styles, dict):
            raise ValueError(f"default_styles must be a mapping of tag names, got {type(self.default_styles).__name__}")


@dataclass(frozen=True)
class DocumentDefinitionOptions(CloneFrozenMixin):
    """Page settings for wrapping a conversion result into a document definition.

    Parameters
    ----------
    page_size : str, default "A4"
        pdfmake page size name.
    page_orientation : {"portrait", "landscape"}, default "portrait"
        Page orientation.
    page_margins : tuple of float, default (40, 40, 40, 40)
        Page margins as ``[left, top, right, bottom]`` in pt.
    default_style : dict
        Style applied to the whole document (editor body font by default).

    """

    page_size: str = field(
        default=DEFAULT_PAGE_SIZE,
        metadata={"help": "pdfmake page size name", "importance": "core"},
    )
    page_orientation: PageOrientation = field(
        default=DEFAULT_PAGE_ORIENTATION,
        metadata={"help": "Page orientation", "choices": ["portrait", "landscape"], "importance": "core"},
    )
    page_margins: tuple[float, float, float, float] = field(
        default=DEFAULT_PAGE_MARGINS,
        metadata={"help": "Page margins [left, top, right, bottom] in pt", "importance": "advanced"},
    )
    default_style: dict[str, Any] = field(
        default_factory=lambda: dict(DEFAULT_DOCUMENT_STYLE),
        metadata={"help": "Document-wide default style", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate page settings.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        object.__setattr__(self, "page_margins", tuple(self.page_margins))
        if len(self.page_margins) != 4:
            raise ValueError(f"page_margins must contain 4 values, got {len(self.page_margins)}")
        if self.page_orientation not in ("portrait", "landscape"):
            raise ValueError(f"page_orientation must be 'portrait' or 'landscape', got {self.page_orientation!r}")
