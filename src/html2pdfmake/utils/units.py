#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/utils/units.py
"""CSS length conversion to pdfmake points.

pdfmake lays out in pt. Lengths from inline styles and HTML attributes are
converted with fixed ratios: ``px`` uses the editor's 0.803571 ratio (so
14px renders as 11.25pt), ``em``/``rem`` are 12pt, ``cm`` and ``in`` use
their physical sizes. Unitless numbers pass through unchanged.
"""

from __future__ import annotations

import math
import re
from typing import Any

from html2pdfmake.constants import CM_TO_PT, EM_TO_PT, IN_TO_PT, PX_TO_PT

_PLAIN_NUMBER_RE = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$")
_LENGTH_RE = re.compile(r"^(-?\d*(?:\.\d+)?)(pt|px|r?em|cm|in)$")


def normalize_number(value: float) -> int | float:
    """Return ``value`` as an int when it has no fractional part.

    Keeps the serialized JSON free of ``72.0``-style floats.
    """
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def convert_to_unit(value: Any) -> int | float | None:
    """Convert a CSS length to pt.

    Parameters
    ----------
    value : Any
        A number or a string such as ``"14px"``, ``"1.5em"``, ``"2cm"``.

    Returns
    -------
    int, float or None
        The length in pt, or None when the unit is not recognized.

    Examples
    --------
    >>> convert_to_unit("14px")
    11.25
    >>> convert_to_unit("1in")
    72
    >>> convert_to_unit("1cm")
    28
    >>> convert_to_unit("50%") is None
    True

    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return normalize_number(float(value)) if math.isfinite(value) else None

    text = str(value)
    if _PLAIN_NUMBER_RE.match(text):
        return normalize_number(float(text))

    match = _LENGTH_RE.match(text.strip())
    if not match or match.group(1) in ("", "-"):
        return None

    number = float(match.group(1))
    unit = match.group(2)
    if unit == "px":
        number = round(number * PX_TO_PT, 2)
    elif unit in ("em", "rem"):
        number *= EM_TO_PT
    elif unit == "cm":
        number = round_half_up(number * CM_TO_PT)
    elif unit == "in":
        number *= IN_TO_PT

    return normalize_number(float(number))
