"""Overlay appearance: options, colours, and audit metadata."""

from .color import NAMED_COLORS, parse_color
from .metadata import describe_appearance, parse_appearance_suffix, with_appearance_suffix
from .spec import AnnotationSpec

__all__ = [
    "NAMED_COLORS",
    "AnnotationSpec",
    "describe_appearance",
    "parse_appearance_suffix",
    "parse_color",
    "with_appearance_suffix",
]
