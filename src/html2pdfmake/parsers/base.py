#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/parsers/base.py
"""Base class for converters producing pdfmake content.

This module defines the abstract base class shared by converters, with the
helpers for option validation and for loading input from strings, bytes,
paths and file-like objects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Union

from html2pdfmake.exceptions import InvalidOptionsError, ParsingError
from html2pdfmake.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

if TYPE_CHECKING:
    from html2pdfmake.result import ConversionResult

InputSource = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for converters.

    Parameters
    ----------
    options : Any, optional
        Converter-specific options dataclass instance.

    """

    def __init__(self, options: Any = None):
        """Initialize the converter with its options."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this converter.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: InputSource) -> "ConversionResult":
        """Convert the input into pdfmake content.

        Parameters
        ----------
        input_data : str, Path, IO or bytes
            HTML markup, a path to an HTML file, raw bytes or a file-like
            object.

        Returns
        -------
        ConversionResult
            Content, styles and (optionally) images.

        """
        pass

    @staticmethod
    def _load_text_content(input_data: InputSource) -> str:
        """Load HTML text from the supported input types.

        A ``str`` is always treated as markup; pass a ``Path`` to read a file.

        Raises
        ------
        ParsingError
            If a path cannot be read.

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        if isinstance(input_data, Path):
            try:
                with open(input_data, "rb") as f:
                    return read_text_with_encoding_detection(f.read())
            except OSError as e:
                raise ParsingError(f"Could not read {input_data}: {e}", parsing_stage="input", original_error=e) from e
        if hasattr(input_data, "read"):
            if hasattr(input_data, "seekable") and input_data.seekable():
                input_data.seek(0)
            return normalize_stream_to_text(input_data)
        raise ParsingError(f"Unsupported input type: {type(input_data).__name__}", parsing_stage="input")
