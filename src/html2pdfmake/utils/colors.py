#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2pdfmake/utils/colors.py
"""CSS colour parsing for pdfmake.

pdfmake accepts ``#rrggbb`` and named colours. ``rgb()``/``rgba()`` values
are rewritten to hex with the alpha channel returned separately so callers
can emit a paired ``opacity``/``fillOpacity``.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)
_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d+(?:\.\d+)?%?),\s*(\d+(?:\.\d+)?%?),\s*(\d+(?:\.\d+)?%?)(?:,\s*(\d+(?:\.\d+)?))?\)$"
)
_NAME_RE = re.compile(r"^[a-z]+$", re.IGNORECASE)


def _channel_to_hex(channel: str) -> str:
    if channel.endswith("%"):
        value = int(float(channel[:-1]) * 255 / 100 + 0.5)
    else:
        value = int(float(channel))
    return f"{min(value, 255):02x}"


def parse_color(color: str) -> tuple[str, float]:
    """Parse a CSS colour into a pdfmake colour and an opacity.

    Parameters
    ----------
    color : str
        CSS colour value (``#fff``, ``#a1b2c3``, ``rgb(...)``, ``rgba(...)``
        or a colour name).

    Returns
    -------
    tuple of (str, float)
        The colour to emit and its opacity (1 when no alpha was given). An
        unparsable value is returned unchanged with opacity 1.

    Examples
    --------
    >>> parse_color("rgb(255, 0, 0)")
    ('#ff0000', 1)
    >>> parse_color("rgba(0, 0, 0, 0.5)")
    ('#000000', 0.5)

    """
    opacity: float = 1

    if _HEX_RE.match(color):
        return color, opacity

    match = _RGB_RE.match(color)
    if match:
        red, green, blue, alpha = match.groups()
        if alpha is not None:
            opacity = float(alpha)
        return "#" + "".join(_channel_to_hex(channel) for channel in (red, green, blue)), opacity

    if _NAME_RE.match(color):
        return color, opacity

    logger.warning(f'Could not parse color "{color}"')
    return color, opacity
