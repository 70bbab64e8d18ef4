"""
Annotation positioning and page geometry helpers.

Computes where to place overlay text on a PDF page, given a preset name
("bottom-right", "br", etc.) or explicit coordinates, and maps visual
coordinates into the page's user space for rotated pages.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from ...constants import ANNOTATION_MARGIN
from ...errors import InvalidAnnotationError

if TYPE_CHECKING:
    import pikepdf

_logger = logging.getLogger(__name__)

# ── Position presets ──────────────────────────────────────────────────

# Short aliases -> full names
POSITION_ALIASES = {
    "tl": "top-left",
    "tr": "top-right",
    "bl": "bottom-left",
    "br": "bottom-right",
    "c": "center",
}

POSITION_PRESETS = {
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
    "center",
}

# Average Helvetica advance width as a fraction of the font size.
# Good enough for placement; the overlay is cosmetic.
_AVG_CHAR_WIDTH_EM = 0.52


@dataclass(frozen=True)
class PageBox:
    """Visible area of a page.

    Attributes:
        x0: Lower-left x of the CropBox (or MediaBox) in user space.
        y0: Lower-left y of the CropBox (or MediaBox) in user space.
        width: Unrotated box width in PDF points.
        height: Unrotated box height in PDF points.
        rotation: /Rotate value normalized to 0, 90, 180, or 270.
    """

    x0: float
    y0: float
    width: float
    height: float
    rotation: int = 0

    @property
    def visual_size(self) -> tuple[float, float]:
        """(width, height) as displayed, with 90/270 rotation swapping axes."""
        if self.rotation in (90, 270):
            return self.height, self.width
        return self.width, self.height


def resolve_position(position_name: str) -> str:
    """Normalize a position name, resolving aliases.

    >>> resolve_position("br")
    'bottom-right'
    >>> resolve_position("Center")
    'center'

    Raises InvalidAnnotationError for unknown positions.
    """
    name = position_name.lower().strip()
    name = POSITION_ALIASES.get(name, name)
    if name not in POSITION_PRESETS:
        valid = sorted(POSITION_PRESETS) + sorted(POSITION_ALIASES)
        raise InvalidAnnotationError(
            f"Unknown position {position_name!r}. Valid: {', '.join(valid)}"
        )
    return name


def estimate_text_width(text: str, font_size: float) -> float:
    """Approximate rendered width of *text* in standard Helvetica."""
    return len(text) * font_size * _AVG_CHAR_WIDTH_EM


def compute_text_origin(
    page_width: float,
    page_height: float,
    position: str,
    text_width: float,
    text_height: float,
    margin: float = ANNOTATION_MARGIN,
) -> tuple[float, float]:
    """Compute the baseline start (x, y) of text placed at a preset.

    Args:
        page_width: Visual page width in PDF points.
        page_height: Visual page height in PDF points.
        position: One of the preset names or aliases.
        text_width: Estimated text width.
        text_height: Text height (the font size).
        margin: Distance from the page edges.

    Returns:
        (x, y) in visual coordinates (origin = bottom-left of the visible
        page). Clamped so the text starts on the page even when it is
        wider than the space between the margins.

    Raises:
        InvalidAnnotationError: If the page dimensions are not positive
            or the position is unknown.
    """
    if page_width <= 0 or page_height <= 0:
        raise InvalidAnnotationError(
            f"Invalid page dimensions: {page_width:.1f} x {page_height:.1f} pt"
        )

    position = resolve_position(position)

    if position == "center":
        x = (page_width - text_width) / 2.0
        y = (page_height - text_height) / 2.0
    else:
        if "right" in position:
            x = page_width - margin - text_width
        else:
            x = margin
        if "bottom" in position:
            y = margin
        else:
            y = page_height - margin - text_height

    max_x = max(page_width - text_width, 0.0)
    max_y = max(page_height - text_height, 0.0)
    clamped_x = min(max(x, 0.0), max_x)
    clamped_y = min(max(y, 0.0), max_y)
    if (clamped_x, clamped_y) != (x, y):
        _logger.debug(
            "Text does not fit at %s: (%.1f, %.1f) clamped to (%.1f, %.1f)",
            position,
            x,
            y,
            clamped_x,
            clamped_y,
        )
    return clamped_x, clamped_y


def to_user_space(box: PageBox, vx: float, vy: float) -> tuple[float, float]:
    """Map a visual point to the page's unrotated user space.

    /Rotate turns the page clockwise when displayed; this applies the
    inverse so text lands where it appears on screen.
    """
    w, h = box.width, box.height
    if box.rotation == 90:
        ux, uy = w - vy, vx
    elif box.rotation == 180:
        ux, uy = w - vx, h - vy
    elif box.rotation == 270:
        ux, uy = vy, h - vx
    else:
        ux, uy = vx, vy
    return box.x0 + ux, box.y0 + uy


def text_matrix(box: PageBox, x: float, y: float, rotation: float) -> tuple[float, ...]:
    """Build the /Tm operands for text at visual (x, y) with *rotation* degrees.

    Rotation is counter-clockwise as seen on screen. The page's own
    /Rotate is added so the text keeps its visual angle on rotated pages.
    """
    ux, uy = to_user_space(box, x, y)
    angle = math.radians(rotation + box.rotation)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return (cos_a, sin_a, -sin_a, cos_a, ux, uy)


def normalize_rotation(value: object) -> int:
    """Map a raw /Rotate value to 0, 90, 180, or 270.

    /Rotate is clockwise degrees and must be a multiple of 90. Other
    angles are rounded to the nearest quarter turn; a missing or
    non-numeric value counts as 0.

    >>> normalize_rotation(-90)
    270
    >>> normalize_rotation(100)
    90
    """
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        _logger.debug("Ignoring non-numeric /Rotate %r", value)
        return 0
    degrees = float(value)
    if not math.isfinite(degrees):
        _logger.debug("Ignoring non-finite /Rotate %r", value)
        return 0
    quarter_turns = math.floor(degrees / 90 + 0.5)
    if quarter_turns * 90 != degrees:
        _logger.debug("Rounding /Rotate %s to %d", value, quarter_turns * 90)
    return (quarter_turns * 90) % 360


def get_page_box(page: pikepdf.Page) -> PageBox:
    """Read the visible box and rotation of a page.

    CropBox takes priority over MediaBox for the visible area; pikepdf
    resolves boxes inherited from the page tree and falls back to the
    MediaBox when no CropBox is set.
    """
    box = page.cropbox
    # pikepdf Array supports indexing; extract 4 values explicitly
    x0, y0, x1, y1 = float(box[0]), float(box[1]), float(box[2]), float(box[3])

    rotate = normalize_rotation(page.get("/Rotate"))

    return PageBox(
        x0=min(x0, x1),
        y0=min(y0, y1),
        width=abs(x1 - x0),
        height=abs(y1 - y0),
        rotation=rotate,
    )


def get_page_dimensions(pdf: pikepdf.Pdf, page_index: int) -> tuple[float, float]:
    """Get effective (width, height) for a page, respecting CropBox and Rotate.

    Args:
        pdf: An open pikepdf.Pdf object.
        page_index: 0-based page index.

    Returns:
        (width, height) in PDF points.
    """
    return get_page_box(pdf.pages[page_index]).visual_size
