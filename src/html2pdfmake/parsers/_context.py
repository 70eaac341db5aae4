#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/parsers/_context.py
"""Per-conversion state for the HTML to pdfmake converter."""

from __future__ import annotations

import json
import logging
import random
import string
from dataclasses import dataclass, field
from typing import Any

from html2pdfmake.constants import DEFAULT_TAG_STYLES, IMAGE_REFERENCE_PREFIX, IMAGE_REFERENCE_SUFFIX_LENGTH
from html2pdfmake.exceptions import ParsingError
from html2pdfmake.options.html import HtmlToPdfmakeOptions
from html2pdfmake.parsers._styles import StyleResolver, merge_default_styles

logger = logging.getLogger(__name__)


def generate_reference_suffix(length: int = IMAGE_REFERENCE_SUFFIX_LENGTH) -> str:
    """Return a random base-36 string used to namespace image reference keys."""
    return "".join(random.choices(string.digits + string.ascii_lowercase, k=length))


@dataclass
class ConversionContext:
    """State shared by every handler during one conversion.

    A new context is created for each call, so a converter instance can be
    reused (or shared between threads) without leaking image references or
    merged styles from one document into the next.

    Parameters
    ----------
    options : HtmlToPdfmakeOptions
        Options of the running conversion.
    tag_styles : dict
        Built-in tag styles merged with ``options.default_styles``.
    image_suffix : str
        Random (or configured) part of the image reference keys.
    image_sources : list of str
        Distinct image sources, in first-seen order.

    """

    options: HtmlToPdfmakeOptions
    tag_styles: dict[str, dict[str, Any]]
    image_suffix: str
    image_sources: list[str | None] = field(default_factory=list)
    resolver: StyleResolver = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.resolver = StyleResolver(
            self.tag_styles,
            ignore_styles=self.options.ignore_styles,
            font_sizes=self.options.font_sizes,
            remove_tag_classes=self.options.remove_tag_classes,
        )

    @classmethod
    def create(cls, options: HtmlToPdfmakeOptions) -> "ConversionContext":
        """Build a fresh context for ``options``."""
        return cls(
            options=options,
            tag_styles=merge_default_styles(DEFAULT_TAG_STYLES, options.default_styles),
            image_suffix=options.image_reference_suffix or generate_reference_suffix(),
        )

    def image_key(self, index: int) -> str:
        return f"{IMAGE_REFERENCE_PREFIX}{self.image_suffix}{index}"

    def image_reference(self, source: str | None) -> str:
        """Register an image source and return its reference key.

        Identical sources share one key.
        """
        if source in self.image_sources:
            index = self.image_sources.index(source)
        else:
            index = len(self.image_sources)
            self.image_sources.append(source)
        return self.image_key(index)

    def images(self) -> dict[str, Any]:
        """Return the image dictionary for the collected references.

        Sources that start with ``{`` are pdfmake image objects embedded as
        JSON and are decoded; anything else is kept as the URL or data URI.

        Raises
        ------
        ParsingError
            If an embedded image object is not valid JSON and
            ``fail_on_invalid_overrides`` is set.

        """
        images: dict[str, Any] = {}
        for index, source in enumerate(self.image_sources):
            key = self.image_key(index)
            if source and source.startswith("{"):
                try:
                    images[key] = json.loads(source)
                    continue
                except json.JSONDecodeError as e:
                    message = f"Invalid JSON image object for {key}: {e.msg}"
                    if self.options.fail_on_invalid_overrides:
                        raise ParsingError(message, parsing_stage="data-attribute", original_error=e) from e
                    logger.warning(f"{message}; keeping the raw source")
            images[key] = source
        return images
