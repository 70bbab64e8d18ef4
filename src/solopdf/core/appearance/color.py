"""Text colour parsing: CSS-style names and hex notation to PDF RGB."""

from __future__ import annotations

import re

from ...errors import InvalidAnnotationError

__all__ = ["NAMED_COLORS", "parse_color"]

RGB = tuple[float, float, float]

# The 16 basic CSS colour keywords plus a few common extras.
NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "white": (255, 255, 255),
    "maroon": (128, 0, 0),
    "red": (255, 0, 0),
    "purple": (128, 0, 128),
    "fuchsia": (255, 0, 255),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "olive": (128, 128, 0),
    "yellow": (255, 255, 0),
    "navy": (0, 0, 128),
    "blue": (0, 0, 255),
    "teal": (0, 128, 128),
    "aqua": (0, 255, 255),
    "orange": (255, 165, 0),
    "darkred": (139, 0, 0),
    "darkblue": (0, 0, 139),
    "darkgreen": (0, 100, 0),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
}

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_color(color: str) -> RGB:
    """Convert a colour name or hex string to PDF RGB components in [0, 1].

    >>> parse_color("red")
    (1.0, 0.0, 0.0)
    >>> parse_color("#00f")
    (0.0, 0.0, 1.0)

    Raises:
        InvalidAnnotationError: If the colour is not recognized.
    """
    value = color.strip().lower()
    named = NAMED_COLORS.get(value)
    if named is not None:
        r, g, b = named
    else:
        m = _HEX_PATTERN.match(value)
        if not m:
            raise InvalidAnnotationError(
                f"Unknown color {color!r}. Use a name (e.g. 'red') or hex ('#ff0000')."
            )
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return r / 255.0, g / 255.0, b / 255.0
