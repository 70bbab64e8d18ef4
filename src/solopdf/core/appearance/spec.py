"""Annotation options: text, font size, colour, placement, pages, rotation, opacity."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ...constants import (
    DEFAULT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_OPACITY,
    DEFAULT_PAGES,
    DEFAULT_POSITION,
    DEFAULT_ROTATION,
)
from ...errors import InvalidAnnotationError
from .color import parse_color

if TYPE_CHECKING:
    from ..pdf.selection import PageSelection

__all__ = ["AnnotationSpec"]


@dataclass(frozen=True)
class AnnotationSpec:
    """Options for a text overlay.

    Attributes:
        text: Overlay text (required, non-empty).
        font_size: Font size in points.
        color: Colour name ("red") or hex ("#ff0000").
        position: Preset name or alias. Ignored when x and y are both set.
        x: Manual x-coordinate (PDF points, origin = bottom-left of the
            visible page).
        y: Manual y-coordinate.
        pages: "all", "even", "odd", "first", "last", a comma-separated
            list such as "1,3,5", or an iterable of 1-based page numbers.
        rotation: Counter-clockwise rotation in degrees.
        opacity: Fill/stroke alpha in [0, 1].
    """

    text: str
    font_size: float = DEFAULT_FONT_SIZE
    color: str = DEFAULT_COLOR
    position: str = DEFAULT_POSITION
    x: float | None = None
    y: float | None = None
    pages: PageSelection = DEFAULT_PAGES
    rotation: float = DEFAULT_ROTATION
    opacity: float = DEFAULT_OPACITY

    @property
    def has_explicit_coordinates(self) -> bool:
        return self.x is not None and self.y is not None

    def with_text(self, text: str) -> AnnotationSpec:
        return replace(self, text=text)

    def validate(self) -> None:
        """Check every option, raising InvalidAnnotationError on the first problem."""
        if not self.text or not self.text.strip():
            raise InvalidAnnotationError("Annotation text must not be empty")
        if not math.isfinite(self.font_size) or self.font_size <= 0:
            raise InvalidAnnotationError(f"Font size must be positive, got {self.font_size}")
        if not 0.0 <= self.opacity <= 1.0:
            raise InvalidAnnotationError(f"Opacity must be between 0 and 1, got {self.opacity}")
        if not math.isfinite(self.rotation):
            raise InvalidAnnotationError(f"Rotation must be a finite number, got {self.rotation}")
        for name, value in (("x", self.x), ("y", self.y)):
            if value is not None and not math.isfinite(value):
                raise InvalidAnnotationError(f"{name} must be a finite number, got {value}")
        parse_color(self.color)
        if not self.has_explicit_coordinates:
            from ..pdf.position import resolve_position

            resolve_position(self.position)
