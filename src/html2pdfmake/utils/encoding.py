#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/utils/encoding.py
"""Character encoding detection for HTML supplied as bytes or binary streams."""

from __future__ import annotations

import logging
from typing import IO

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the encoding of ``data`` using chardet.

    Returns None when chardet is not installed or the detection confidence
    is below ``confidence_threshold``.
    """
    try:
        import chardet
    except ImportError:
        logger.debug("chardet not available for encoding detection")
        return None

    result = chardet.detect(data[:sample_size])
    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    return encoding if confidence >= confidence_threshold else None


def read_text_with_encoding_detection(data: bytes, fallback_encodings: tuple[str, ...] | None = None) -> str:
    """Decode ``data`` as text.

    Tries the chardet-detected encoding first, then each fallback encoding
    in order (``utf-8``, ``utf-8-sig``, ``latin-1`` by default).

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : tuple of str, optional
        Encodings to try after detection

    Returns
    -------
    str
        Decoded text content

    """
    detected = detect_encoding(data)
    encodings = (detected,) if detected else ()
    for encoding in encodings + (fallback_encodings or DEFAULT_FALLBACK_ENCODINGS):
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Successfully decoded with encoding: {encoding}")
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a text or binary file-like object and return its content as text."""
    content = stream.read()
    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content)
    if isinstance(content, str):
        return content
    raise TypeError(f"Stream returned {type(content).__name__}, expected bytes or str")
