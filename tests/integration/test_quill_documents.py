#  Copyright (c) 2025 Tom Villani, Ph.D.
# tests/integration/test_quill_documents.py
"""End-to-end conversion of editor-produced documents."""

import json
import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from html2pdfmake import build_document_definition, convert_html_to_document


@pytest.mark.integration
class TestQuillDocument:
    """Convert a complete Quill document and check every block."""

    @pytest.fixture
    def content(self, quill_document):
        return convert_html_to_document(quill_document).content

    def test_block_sequence(self, content):
        assert [block["nodeName"] for block in content] == ["H1", "P", "P", "OL", "TABLE", "P"]

    def test_centered_heading(self, content):
        heading = content[0]
        assert heading["text"] == "Quarterly report"
        assert heading["alignment"] == "center"
        assert heading["bold"] is True

    def test_inline_formatting(self, content):
        runs = content[1]["text"]
        assert [run["text"] for run in runs] == ["Revenue grew by ", "12%", " over ", "Q2", "."]
        assert runs[1]["bold"] is True
        assert runs[3]["italics"] is True
        assert "bold" not in runs[0]

    def test_colored_span(self, content):
        paragraph = content[2]
        assert paragraph["alignment"] == "right"
        span = paragraph["text"][0]
        assert span["text"] == "Draft"
        assert span["color"] == "#e60000"

    def test_ordered_list(self, content):
        items = content[3]["ol"]
        assert [item["text"][0]["text"] for item in items] == ["First", "Second"]

    def test_table(self, content):
        body = content[4]["table"]["body"]
        assert [[cell["text"][0]["text"] for cell in row] for row in body] == [["Region", "Sales"], ["North", "100"]]
        assert body[0][0]["fillColor"] == "#EEEEEE"
        assert "fillColor" not in body[1][0]

    def test_link(self, content):
        link = content[5]["text"][0]
        assert link["link"] == "https://example.com/report"
        assert link["text"] == "Full report"

    def test_document_definition_is_json(self, quill_document):
        result = convert_html_to_document(quill_document, table_auto_size=True)
        definition = build_document_definition(result, page_size="LETTER")
        decoded = json.loads(json.dumps(definition))
        assert decoded["pageSize"] == "LETTER"
        assert decoded["content"][4]["table"]["widths"] == ["auto", "auto"]
        assert decoded["styles"]["p"]["lineHeight"] == 1.5

    def test_pretty_printed_source(self, quill_document):
        """Indentation between blocks disappears with remove_extra_blanks."""
        pretty = quill_document.replace("</h1><", "</h1>\n<").replace("</p><", "</p>\n  <")
        compact = convert_html_to_document(quill_document).content
        assert convert_html_to_document(pretty, remove_extra_blanks=True).content == compact


@pytest.mark.integration
class TestConversionProperties:
    """Property-based checks over generated documents."""

    @given(st.text(alphabet="abcxyz ", max_size=40))
    def test_paragraph_whitespace_collapses(self, text):
        (paragraph,) = convert_html_to_document(f"<p>{text}</p>").content
        assert paragraph["text"] == re.sub(" +", " ", text)

    @given(
        st.lists(st.sampled_from(["b", "i", "u", "span", "p", "div", "ul", "li", "table", "td"]), max_size=12),
        st.text(alphabet="abc ", min_size=1, max_size=10),
    )
    def test_nested_markup_is_json_serializable(self, tags, text):
        html = "".join(f"<{tag}>" for tag in tags) + text + "".join(f"</{tag}>" for tag in reversed(tags))
        result = convert_html_to_document(html)
        assert isinstance(result.content, (list, str))
        json.loads(result.to_json())
