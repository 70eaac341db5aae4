#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Converters from HTML to pdfmake content."""

from html2pdfmake.parsers.base import BaseParser
from html2pdfmake.parsers.html import HtmlToPdfmakeConverter

__all__ = ["BaseParser", "HtmlToPdfmakeConverter"]
