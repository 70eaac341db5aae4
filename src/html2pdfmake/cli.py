#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/cli.py
"""Command-line interface for html2pdfmake.

Convert an HTML file (or stdin) into pdfmake JSON.

Examples
--------
Basic conversion to stdout::

    $ html2pdfmake page.html

Full document definition with referenced images, written to a file::

    $ html2pdfmake page.html --images-by-reference --document-definition --out page.json

Read from stdin with pretty-printed JSON::

    $ cat page.html | html2pdfmake - --indent 2 --rich

"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from html2pdfmake import __version__
from html2pdfmake.api import build_document_definition, convert_html_to_document
from html2pdfmake.constants import DEFAULT_HTML_PARSER, DEFAULT_PAGE_ORIENTATION, DEFAULT_PAGE_SIZE, HTML_PARSERS
from html2pdfmake.exceptions import DependencyError, Html2PdfmakeError, ParsingError, ValidationError
from html2pdfmake.logging_utils import configure_logging
from html2pdfmake.options.html import DocumentDefinitionOptions, HtmlToPdfmakeOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_FILE_ERROR if exception.parsing_stage == "input" else EXIT_PARSING_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``html2pdfmake`` command."""
    parser = argparse.ArgumentParser(
        prog="html2pdfmake",
        description="Convert HTML into a pdfmake document definition (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", help="HTML file to convert, or '-' to read from stdin")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    conversion = parser.add_argument_group("conversion options")
    conversion.add_argument(
        "--table-auto-size", action="store_true", help=_help(HtmlToPdfmakeOptions, "table_auto_size")
    )
    conversion.add_argument(
        "--images-by-reference", action="store_true", help=_help(HtmlToPdfmakeOptions, "images_by_reference")
    )
    conversion.add_argument(
        "--remove-extra-blanks", action="store_true", help=_help(HtmlToPdfmakeOptions, "remove_extra_blanks")
    )
    conversion.add_argument("--show-hidden", action="store_true", help=_help(HtmlToPdfmakeOptions, "show_hidden"))
    conversion.add_argument(
        "--remove-tag-classes", action="store_true", help=_help(HtmlToPdfmakeOptions, "remove_tag_classes")
    )
    conversion.add_argument(
        "--ignore-style",
        action="append",
        default=[],
        metavar="PROPERTY",
        dest="ignore_styles",
        help="CSS property to ignore when reading inline styles (repeatable)",
    )
    conversion.add_argument(
        "--default-styles",
        type=Path,
        metavar="FILE",
        help="JSON file with per-tag style overrides merged into the built-in styles",
    )
    conversion.add_argument(
        "--html-parser",
        choices=HTML_PARSERS,
        default=DEFAULT_HTML_PARSER,
        help=_help(HtmlToPdfmakeOptions, "html_parser"),
    )
    conversion.add_argument(
        "--lenient-overrides",
        action="store_true",
        help="Skip malformed data-pdfmake JSON with a warning instead of failing",
    )

    output = parser.add_argument_group("output options")
    output.add_argument("--out", "-o", type=Path, metavar="FILE", help="Write JSON to FILE instead of stdout")
    output.add_argument("--indent", type=int, default=None, metavar="N", help="Indent the JSON output by N spaces")
    output.add_argument(
        "--document-definition",
        action="store_true",
        help="Wrap the result into a complete document definition with page settings",
    )
    output.add_argument(
        "--page-size", default=DEFAULT_PAGE_SIZE, help=_help(DocumentDefinitionOptions, "page_size")
    )
    output.add_argument(
        "--page-orientation",
        choices=("portrait", "landscape"),
        default=DEFAULT_PAGE_ORIENTATION,
        help=_help(DocumentDefinitionOptions, "page_orientation"),
    )
    output.add_argument("--rich", action="store_true", help="Pretty-print JSON with rich when writing to a terminal")

    logging_group = parser.add_argument_group("logging options")
    logging_group.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", metavar="FILE", help="Also write log records to FILE")
    logging_group.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    return parser


def _help(options_class: type, field_name: str) -> str:
    return options_class.__dataclass_fields__[field_name].metadata.get("help", "")


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_default_styles(path: Path) -> dict[str, Any]:
    """Read the ``--default-styles`` JSON file.

    Raises
    ------
    OSError
        If the file cannot be read.
    ValidationError
        If the file is not a JSON object.

    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid JSON in {path}: {e.msg}", parameter_name="default_styles", original_error=e
            ) from e
    if not isinstance(data, dict):
        raise ValidationError(
            f"{path} must contain a JSON object keyed by tag name",
            parameter_name="default_styles",
            parameter_value=type(data).__name__,
        )
    return data


def _build_options(parsed_args: argparse.Namespace) -> HtmlToPdfmakeOptions:
    default_styles = _load_default_styles(parsed_args.default_styles) if parsed_args.default_styles else None
    try:
        return HtmlToPdfmakeOptions(
            table_auto_size=parsed_args.table_auto_size,
            images_by_reference=parsed_args.images_by_reference,
            remove_extra_blanks=parsed_args.remove_extra_blanks,
            show_hidden=parsed_args.show_hidden,
            remove_tag_classes=parsed_args.remove_tag_classes,
            ignore_styles=tuple(parsed_args.ignore_styles),
            default_styles=default_styles,
            html_parser=parsed_args.html_parser,
            fail_on_invalid_overrides=not parsed_args.lenient_overrides,
        )
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e


def _read_input(source: str) -> str | bytes:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_bytes()


def _should_use_rich_output(parsed_args: argparse.Namespace) -> bool:
    if not parsed_args.rich or parsed_args.out is not None:
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(callable(isatty) and isatty())


def _write_output(data: dict[str, Any], parsed_args: argparse.Namespace) -> None:
    text = json.dumps(data, indent=parsed_args.indent, ensure_ascii=False)

    if parsed_args.out is not None:
        parsed_args.out.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {parsed_args.out}")
        return

    if _should_use_rich_output(parsed_args):
        from rich.console import Console

        Console().print_json(text, indent=parsed_args.indent or 2)
        return

    sys.stdout.write(text + "\n")


def main(args: list[str] | None = None) -> int:
    """Run the ``html2pdfmake`` command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments (``sys.argv[1:]`` when omitted).

    Returns
    -------
    int
        Process exit code.

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        options = _build_options(parsed_args)
        html = _read_input(parsed_args.input)
        result = convert_html_to_document(html, options)
        if parsed_args.document_definition:
            data = build_document_definition(
                result,
                page_size=parsed_args.page_size,
                page_orientation=parsed_args.page_orientation,
            )
        else:
            data = result.to_dict()
        _write_output(data, parsed_args)
    except (Html2PdfmakeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected conversion failure", exc_info=True)
        print(f"Error: could not convert {parsed_args.input}: {type(e).__name__}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS
