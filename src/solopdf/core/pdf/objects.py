"""Low-level PDF syntax helpers: literal strings and numbers."""

from __future__ import annotations

import logging

_logger = logging.getLogger(__name__)

__all__ = ["pdf_number", "pdf_string"]

# Characters with a named escape inside a literal string (PDF 1.7, 7.3.4.2)
_NAMED_ESCAPES = {
    "\\": "\\\\",
    "(": "\\(",
    ")": "\\)",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}

# Standard 14 fonts with WinAnsiEncoding stop at U+00FF
_MAX_LATIN1 = 0xFF


def _escape_char(char: str) -> str | None:
    """Escaped form of *char*, or None if it cannot be encoded."""
    named = _NAMED_ESCAPES.get(char)
    if named is not None:
        return named
    code = ord(char)
    if code > _MAX_LATIN1:
        return None
    if code < 0x20 or code == 0x7F:
        return f"\\{code:03o}"
    return char


def pdf_string(text: str) -> str:
    """Body of a PDF literal string for *text*, without the parentheses.

    Characters outside Latin-1 become '?' and a warning is logged.
    """
    parts: list[str] = []
    lost = 0
    for char in text:
        escaped = _escape_char(char)
        if escaped is None:
            lost += 1
            escaped = "?"
        parts.append(escaped)
    if lost:
        _logger.warning("%d non-Latin1 character(s) replaced with '?' in %r", lost, text)
    return "".join(parts)


def pdf_number(value: float) -> str:
    """Format a number for a content stream: integers bare, else 4 decimals.

    >>> pdf_number(12.0)
    '12'
    >>> pdf_number(0.5)
    '0.5'
    """
    if value == int(value):
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")
