"""html2pdfmake - Convert rich-text HTML into pdfmake document content.

html2pdfmake turns HTML fragments produced by rich-text editors (Quill in
particular) into the JSON document model consumed by the pdfmake renderer:
text runs, vertical stacks, columns, tables, lists, images, canvas lines and
SVG, with the inline CSS mapped onto pdfmake style properties.

Examples
--------
Convert a fragment:

    >>> from html2pdfmake import convert_html_to_document
    >>> result = convert_html_to_document("<p>Hello <b>world</b></p>")
    >>> result.content[0]["nodeName"]
    'P'

Build a complete document definition with referenced images:

    >>> from html2pdfmake import build_document_definition
    >>> result = convert_html_to_document(html, images_by_reference=True)
    >>> definition = build_document_definition(result, page_size="LETTER")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "html2pdfmake requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from html2pdfmake.api import build_document_definition, convert_html_to_document, merge_default_styles
from html2pdfmake.exceptions import (
    DependencyError,
    Html2PdfmakeError,
    InvalidOptionsError,
    ParsingError,
    ValidationError,
)
from html2pdfmake.options import DocumentDefinitionOptions, HtmlToPdfmakeOptions
from html2pdfmake.parsers.html import HtmlToPdfmakeConverter
from html2pdfmake.result import ConversionResult

__all__ = [
    "__version__",
    "convert_html_to_document",
    "build_document_definition",
    "merge_default_styles",
    "ConversionResult",
    "HtmlToPdfmakeConverter",
    "HtmlToPdfmakeOptions",
    "DocumentDefinitionOptions",
    "Html2PdfmakeError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "DependencyError",
]
