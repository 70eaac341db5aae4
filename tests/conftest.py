"""Pytest configuration and shared fixtures for the html2pdfmake test suite.

This module provides shared fixtures, test configuration, and helpers that
are used across the entire test suite.
"""

from typing import Any, Callable

import pytest
from bs4 import BeautifulSoup

from html2pdfmake import convert_html_to_document

# Configure Hypothesis for property-based testing
try:
    import os

    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=25, deadline=None)

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def convert() -> Callable[..., Any]:
    """Convert an HTML string and return only the pdfmake content."""

    def _convert(html: str, **kwargs: Any) -> Any:
        return convert_html_to_document(html, **kwargs).content

    return _convert


@pytest.fixture
def element() -> Callable[[str, str], Any]:
    """Parse a snippet with html.parser and return the first tag of the given name."""

    def _element(html: str, name: str) -> Any:
        return BeautifulSoup(html, "html.parser").find(name)

    return _element


@pytest.fixture
def quill_document() -> str:
    """A document as produced by the Quill editor, without inter-block whitespace."""
    return (
        '<h1 class="ql-align-center">Quarterly report</h1>'
        '<p>Revenue grew by <strong>12%</strong> over <em>Q2</em>.</p>'
        '<p class="ql-align-right"><span style="color: rgb(230, 0, 0);">Draft</span></p>'
        "<ol><li>First</li><li>Second</li></ol>"
        '<table><tbody><tr><th>Region</th><th>Sales</th></tr>'
        "<tr><td>North</td><td>100</td></tr></tbody></table>"
        '<p><a href="https://example.com/report">Full report</a></p>'
    )
