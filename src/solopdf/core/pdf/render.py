"""Content stream and resource construction for text overlays.

Builds the operators that draw one line of text on a page, plus the
Helvetica font dictionary and the ExtGState used for opacity.
These helpers are called by annotate.py's orchestration layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import require_pikepdf as _require_pikepdf
from .objects import pdf_number, pdf_string

if TYPE_CHECKING:
    import pikepdf

__all__ = [
    "LINE_LEADING",
    "build_font_dict",
    "build_opacity_state",
    "build_overlay_stream",
]

# Standard 14 font: always available, no embedding needed.
_BASE_FONT = "/Helvetica"
_ENCODING = "/WinAnsiEncoding"

# Line spacing multiplier for multi-line overlays
LINE_LEADING = 1.2


def build_font_dict() -> pikepdf.Dictionary:
    """Type1 Helvetica with WinAnsi encoding."""
    pikepdf = _require_pikepdf()
    return pikepdf.Dictionary(
        Type=pikepdf.Name.Font,
        Subtype=pikepdf.Name.Type1,
        BaseFont=pikepdf.Name(_BASE_FONT),
        Encoding=pikepdf.Name(_ENCODING),
    )


def build_opacity_state(opacity: float) -> pikepdf.Dictionary:
    """ExtGState setting fill (/ca) and stroke (/CA) alpha."""
    pikepdf = _require_pikepdf()
    return pikepdf.Dictionary(
        Type=pikepdf.Name.ExtGState,
        ca=opacity,
        CA=opacity,
    )


def build_overlay_stream(
    lines: list[str],
    font_name: str,
    font_size: float,
    rgb: tuple[float, float, float],
    matrix: tuple[float, ...],
    gs_name: str | None = None,
    leading: float | None = None,
) -> bytes:
    """Content stream drawing *lines* of text starting at the text matrix origin.

    The first line's baseline sits at the matrix origin; following lines
    move down by *leading* (default 1.2 x font size).

    Args:
        lines: Text lines to draw (non-Latin1 characters become '?').
        font_name: Resource name of the font, e.g. "/SoloF0".
        font_size: Font size in points.
        rgb: Fill colour components in [0, 1].
        matrix: Six /Tm operands (rotation + translation).
        gs_name: Resource name of an opacity ExtGState, or None for opaque.
        leading: Baseline-to-baseline distance for multi-line text.

    Returns:
        Raw stream bytes wrapped in q/Q.
    """
    if leading is None:
        leading = font_size * LINE_LEADING
    ops = ["q"]
    if gs_name is not None:
        ops.append(f"{gs_name} gs")
    ops.append(" ".join(pdf_number(c) for c in rgb) + " rg")
    ops.append("BT")
    ops.append(f"{font_name} {pdf_number(font_size)} Tf")
    if len(lines) > 1:
        ops.append(f"{pdf_number(leading)} TL")
    ops.append(" ".join(pdf_number(v) for v in matrix) + " Tm")
    for index, line in enumerate(lines):
        if index:
            ops.append("T*")
        ops.append(f"({pdf_string(line)}) Tj")
    ops.append("ET")
    ops.append("Q")
    return ("\n".join(ops) + "\n").encode("latin-1")
