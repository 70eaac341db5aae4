#  Copyright (c) 2025 Tom Villani, Ph.D.
# tests/unit/test_cli.py
"""Unit tests for the html2pdfmake command line."""

import io
import json
import logging

import pytest

from html2pdfmake.cli import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
    main,
)
from html2pdfmake.exceptions import DependencyError, ParsingError, ValidationError


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put the original handlers back."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text('<p>Hello</p><img src="a.png">', encoding="utf-8")
    return path


@pytest.mark.cli
@pytest.mark.unit
class TestExitCodes:
    """Tests for exception to exit code mapping."""

    def test_mapping(self):
        assert get_exit_code_for_exception(DependencyError("html", [("bs4", "")])) == EXIT_DEPENDENCY_ERROR
        assert get_exit_code_for_exception(ValidationError("bad")) == EXIT_VALIDATION_ERROR
        assert get_exit_code_for_exception(FileNotFoundError("x")) == EXIT_FILE_ERROR
        assert get_exit_code_for_exception(ParsingError("x", parsing_stage="input")) == EXIT_FILE_ERROR
        assert get_exit_code_for_exception(ParsingError("x", parsing_stage="transform")) == EXIT_PARSING_ERROR
        assert get_exit_code_for_exception(RuntimeError("x")) == EXIT_ERROR


@pytest.mark.cli
@pytest.mark.unit
class TestArgumentParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args(["page.html"])
        assert args.html_parser == "html5lib"
        assert args.page_size == "A4"
        assert args.ignore_styles == []
        assert args.out is None

    def test_repeatable_ignore_style(self):
        args = create_parser().parse_args(["page.html", "--ignore-style", "color", "--ignore-style", "font-size"])
        assert args.ignore_styles == ["color", "font-size"]

    def test_invalid_parser_choice(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["page.html", "--html-parser", "regex"])


@pytest.mark.cli
@pytest.mark.unit
class TestMain:
    """Tests for running the command."""

    def test_stdout_json(self, html_file, capsys):
        assert main([str(html_file)]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["content"][0]["text"] == "Hello"
        assert data["content"][1]["image"] == "a.png"
        assert "images" not in data

    def test_document_definition(self, html_file, capsys):
        code = main([str(html_file), "--document-definition", "--page-size", "LETTER", "--page-orientation", "landscape"])
        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["pageSize"] == "LETTER"
        assert data["pageOrientation"] == "landscape"
        assert data["pageMargins"] == [40, 40, 40, 40]

    def test_images_by_reference(self, html_file, capsys):
        assert main([str(html_file), "--images-by-reference"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        (key,) = data["images"]
        assert data["images"][key] == "a.png"
        assert data["content"][1]["image"] == key

    def test_out_file(self, html_file, tmp_path, capsys):
        out = tmp_path / "page.json"
        assert main([str(html_file), "--out", str(out), "--indent", "2"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""
        text = out.read_text(encoding="utf-8")
        assert text.startswith('{\n  "content"')
        assert json.loads(text)["content"][0]["text"] == "Hello"

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<p>from stdin</p>"))
        assert main(["-"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["content"][0]["text"] == "from stdin"

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.html")]) == EXIT_FILE_ERROR
        assert capsys.readouterr().err.startswith("Error:")

    def test_malformed_override(self, tmp_path, capsys):
        path = tmp_path / "bad.html"
        path.write_text('<p data-pdfmake="{margin:">x</p>', encoding="utf-8")
        assert main([str(path)]) == EXIT_PARSING_ERROR
        assert "data-pdfmake" in capsys.readouterr().err

    def test_lenient_overrides(self, tmp_path, capsys):
        path = tmp_path / "bad.html"
        path.write_text('<p data-pdfmake="{margin:">x</p>', encoding="utf-8")
        assert main([str(path), "--lenient-overrides"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["content"][0]["text"] == "x"

    def test_default_styles_file(self, html_file, tmp_path, capsys):
        styles = tmp_path / "styles.json"
        styles.write_text(json.dumps({"p": {"color": "gray"}}), encoding="utf-8")
        assert main([str(html_file), "--default-styles", str(styles)]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["content"][0]["color"] == "gray"
        assert data["styles"]["p"]["color"] == "gray"

    @pytest.mark.parametrize("payload", ["{not json", "[1, 2]"], ids=["malformed", "not-an-object"])
    def test_invalid_default_styles(self, html_file, tmp_path, payload):
        styles = tmp_path / "styles.json"
        styles.write_text(payload, encoding="utf-8")
        assert main([str(html_file), "--default-styles", str(styles)]) == EXIT_VALIDATION_ERROR

    def test_ignore_style(self, tmp_path, capsys):
        path = tmp_path / "page.html"
        path.write_text('<p style="color: red; font-style: italic">x</p>', encoding="utf-8")
        assert main([str(path), "--ignore-style", "color"]) == EXIT_SUCCESS
        (p,) = json.loads(capsys.readouterr().out)["content"]
        assert "color" not in p
        assert p["italics"] is True
