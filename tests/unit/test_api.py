#  Copyright (c) 2025 Tom Villani, Ph.D.
# tests/unit/test_api.py
"""Unit tests for the public API, options and result objects."""

import io
import json
import logging

import pytest

from html2pdfmake import (
    ConversionResult,
    DocumentDefinitionOptions,
    HtmlToPdfmakeOptions,
    ValidationError,
    build_document_definition,
    convert_html_to_document,
)
from html2pdfmake.api import _create_options_from_kwargs


@pytest.mark.unit
class TestOptionsValidation:
    """Tests for option dataclass validation."""

    def test_defaults(self):
        options = HtmlToPdfmakeOptions()
        assert options.html_parser == "html5lib"
        assert options.fail_on_invalid_overrides is True
        assert options.max_depth == 256
        assert len(options.font_sizes) == 7

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"font_sizes": (10, 12)},
            {"font_sizes": (0, 1, 2, 3, 4, 5, 6)},
            {"max_depth": 0},
            {"html_parser": "regex"},
            {"default_styles": ["p"]},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            HtmlToPdfmakeOptions(**kwargs)

    def test_ignore_styles_normalized(self):
        options = HtmlToPdfmakeOptions(ignore_styles=[" Color", "FONT-SIZE"])
        assert options.ignore_styles == ("color", "font-size")

    def test_default_styles_copied(self):
        styles = {"p": {"margin": [1, 2, 3, 4]}}
        options = HtmlToPdfmakeOptions(default_styles=styles)
        styles["p"]["margin"].append(5)
        assert options.default_styles == {"p": {"margin": [1, 2, 3, 4]}}

    def test_create_updated(self):
        options = HtmlToPdfmakeOptions()
        updated = options.create_updated(table_auto_size=True)
        assert updated.table_auto_size is True
        assert options.table_auto_size is False

    def test_frozen(self):
        options = HtmlToPdfmakeOptions()
        with pytest.raises(AttributeError):
            options.show_hidden = True

    def test_page_options_validation(self):
        with pytest.raises(ValueError):
            DocumentDefinitionOptions(page_margins=(10, 10))
        with pytest.raises(ValueError):
            DocumentDefinitionOptions(page_orientation="sideways")


@pytest.mark.unit
class TestCreateOptionsFromKwargs:
    """Tests for keyword argument handling."""

    def test_kwargs_build_options(self):
        options = _create_options_from_kwargs(HtmlToPdfmakeOptions, None, show_hidden=True)
        assert options.show_hidden is True

    def test_kwargs_override_base(self):
        base = HtmlToPdfmakeOptions(table_auto_size=True)
        options = _create_options_from_kwargs(HtmlToPdfmakeOptions, base, show_hidden=True)
        assert options.table_auto_size is True
        assert options.show_hidden is True

    def test_base_returned_without_kwargs(self):
        base = HtmlToPdfmakeOptions()
        assert _create_options_from_kwargs(HtmlToPdfmakeOptions, base) is base

    def test_unknown_kwargs_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="html2pdfmake.api"):
            options = _create_options_from_kwargs(HtmlToPdfmakeOptions, None, colour="red")
        assert options == HtmlToPdfmakeOptions()
        assert "colour" in caplog.text

    def test_invalid_value_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            convert_html_to_document("<p>x</p>", max_depth=-1)
        assert isinstance(exc_info.value.original_error, ValueError)


@pytest.mark.unit
class TestConvertHtmlToDocument:
    """Tests for convert_html_to_document."""

    def test_returns_result(self):
        result = convert_html_to_document("<p>Hello</p>")
        assert isinstance(result, ConversionResult)
        assert result.content[0]["text"] == "Hello"
        assert result.images is None

    def test_accepts_streams(self):
        result = convert_html_to_document(io.BytesIO("<p>Grüße</p>".encode("utf-8")))
        assert result.content[0]["text"] == "Grüße"

    def test_options_object(self):
        options = HtmlToPdfmakeOptions(remove_tag_classes=True)
        result = convert_html_to_document("<p>x</p>", options)
        assert "style" not in result.content[0]

    def test_styles_reflect_overrides(self):
        result = convert_html_to_document("<p>x</p>", default_styles={"a": {"color": "red"}, "th": None})
        assert result.styles["a"] == {"color": "red", "decoration": "underline"}
        assert "th" not in result.styles


@pytest.mark.unit
class TestConversionResult:
    """Tests for ConversionResult serialization."""

    def test_to_dict_omits_missing_images(self):
        result = ConversionResult(content=[{"text": "x"}], styles={})
        assert result.to_dict() == {"content": [{"text": "x"}], "styles": {}}

    def test_to_dict_includes_images(self):
        result = ConversionResult(content=[], styles={}, images={})
        assert result.to_dict()["images"] == {}

    def test_to_json(self):
        result = ConversionResult(content=[{"text": "café"}], styles={})
        text = result.to_json()
        assert "café" in text
        assert json.loads(text)["content"][0]["text"] == "café"


@pytest.mark.unit
class TestBuildDocumentDefinition:
    """Tests for build_document_definition."""

    def test_defaults(self):
        result = convert_html_to_document("<p>x</p>")
        definition = build_document_definition(result)
        assert definition["content"] is result.content
        assert definition["styles"] is result.styles
        assert definition["pageSize"] == "A4"
        assert definition["pageOrientation"] == "portrait"
        assert definition["pageMargins"] == [40, 40, 40, 40]
        assert definition["defaultStyle"]["fontSize"] == 11.25
        assert "images" not in definition

    def test_page_overrides(self):
        result = ConversionResult(content=[], styles={})
        definition = build_document_definition(result, page_size="LETTER", page_orientation="landscape")
        assert definition["pageSize"] == "LETTER"
        assert definition["pageOrientation"] == "landscape"

    def test_images_included(self):
        result = convert_html_to_document(
            '<img src="a.png">', images_by_reference=True, image_reference_suffix="doc"
        )
        definition = build_document_definition(result)
        assert definition["images"] == {"img_ref_doc0": "a.png"}

    def test_default_style_is_copied(self):
        options = DocumentDefinitionOptions()
        definition = build_document_definition(ConversionResult(content=[], styles={}), options)
        definition["defaultStyle"]["fontSize"] = 99
        assert options.default_style["fontSize"] == 11.25
