"""The exported API functions for HTML to pdfmake conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/html2pdfmake/api.py
import copy
import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, TypeVar, Union

from html2pdfmake.exceptions import ValidationError
from html2pdfmake.options.html import DocumentDefinitionOptions, HtmlToPdfmakeOptions
from html2pdfmake.parsers._styles import merge_default_styles
from html2pdfmake.parsers.html import HtmlToPdfmakeConverter
from html2pdfmake.result import ConversionResult
from html2pdfmake.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", HtmlToPdfmakeOptions, DocumentDefinitionOptions)

__all__ = [
    "ConversionResult",
    "build_document_definition",
    "convert_html_to_document",
    "merge_default_styles",
]


def _create_options_from_kwargs(options_class: type[OptionsT], options: Optional[OptionsT], **kwargs: Any) -> OptionsT:
    """Build an options instance from an optional base instance and keyword arguments.

    Parameters
    ----------
    options_class : type
        The options dataclass.
    options : options_class or None
        Base options; keyword arguments override its fields.
    **kwargs
        Field values. Unknown names are logged and skipped.

    Returns
    -------
    options_class
        The resulting options.

    Raises
    ------
    ValidationError
        If a field value is rejected by the options class.

    """
    option_names = {field.name for field in fields(options_class)}
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    missing = [k for k in kwargs if k not in valid_kwargs]
    if missing:
        logger.debug(f"Skipping unknown {options_class.__name__} options: {missing}")

    try:
        if options is None:
            return options_class(**valid_kwargs)
        return options.create_updated(**valid_kwargs) if valid_kwargs else options
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {options_class.__name__}: {e}", original_error=e) from e


def convert_html_to_document(
    html: Union[str, Path, IO[bytes], IO[str], bytes],
    options: Optional[HtmlToPdfmakeOptions] = None,
    **kwargs: Any,
) -> ConversionResult:
    """Convert HTML into pdfmake content.

    Parameters
    ----------
    html : str, Path, IO or bytes
        HTML markup, a path to an HTML file, raw bytes or a file-like object.
    options : HtmlToPdfmakeOptions, optional
        Conversion options.
    **kwargs
        Individual option overrides (e.g. ``table_auto_size=True``).

    Returns
    -------
    ConversionResult
        The content, the effective styles and, in reference mode, the images.

    Raises
    ------
    ValidationError
        If the options are invalid.
    ParsingError
        If the input cannot be read or a strict ``data-pdfmake`` override is
        malformed.
    DependencyError
        If the HTML stack is not installed.

    Examples
    --------
        >>> result = convert_html_to_document("<p>Hello</p>")
        >>> result.content[0]["text"]
        'Hello'

    """
    final_options = _create_options_from_kwargs(HtmlToPdfmakeOptions, options, **kwargs)
    converter = HtmlToPdfmakeConverter(final_options)
    with debug_timer(logger, "HTML conversion"):
        return converter.parse(html)


def build_document_definition(
    result: ConversionResult,
    options: Optional[DocumentDefinitionOptions] = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """Wrap a conversion result into a complete pdfmake document definition.

    Parameters
    ----------
    result : ConversionResult
        Output of ``convert_html_to_document``.
    options : DocumentDefinitionOptions, optional
        Page settings.
    **kwargs
        Individual page setting overrides (e.g. ``page_size="LETTER"``).

    Returns
    -------
    dict
        ``{content, styles, pageSize, pageOrientation, pageMargins,
        defaultStyle}`` plus ``images`` when the result carries any.

    """
    page = _create_options_from_kwargs(DocumentDefinitionOptions, options, **kwargs)
    definition: dict[str, Any] = {
        "content": result.content,
        "styles": result.styles,
        "pageSize": page.page_size,
        "pageOrientation": page.page_orientation,
        "pageMargins": list(page.page_margins),
        "defaultStyle": copy.deepcopy(page.default_style),
    }
    if result.images:
        definition["images"] = result.images
    return definition
