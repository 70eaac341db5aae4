#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for html2pdfmake.

Options are frozen dataclasses created once per conversion call.
"""

from html2pdfmake.options.base import CloneFrozenMixin
from html2pdfmake.options.html import DocumentDefinitionOptions, HtmlToPdfmakeOptions

__all__ = [
    "CloneFrozenMixin",
    "DocumentDefinitionOptions",
    "HtmlToPdfmakeOptions",
]
