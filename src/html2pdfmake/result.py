#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/result.py
"""Result type returned by the HTML to pdfmake conversion."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass
class ConversionResult:
    """pdfmake content produced from one HTML document.

    Parameters
    ----------
    content : list or str
        The document content: the body's stack or inline list, or ``[node]``
        when the body became a single columns node.
    styles : dict
        The effective tag styles (built-ins merged with user overrides).
    images : dict or None
        Image sources keyed by reference, only when images are referenced.

    """

    content: Any
    styles: dict[str, dict[str, Any]]
    images: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the result as a plain ``{content, styles, images?}`` mapping."""
        data: dict[str, Any] = {"content": self.content, "styles": self.styles}
        if self.images is not None:
            data["images"] = self.images
        return data

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the result with ``json.dumps``."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
