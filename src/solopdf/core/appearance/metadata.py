"""
Audit suffix describing an overlay's visual parameters.

Appended to a signature record's ``visible_text`` so the record shows how
the mark was drawn, e.g. ``DIGITALLY SIGNED [fs:12|c:black|pos:bottom-right|rot:0|op:1]``.
Presentation only: the suffix is never part of the signed hash.
"""

from __future__ import annotations

import re

from .spec import AnnotationSpec

__all__ = ["describe_appearance", "parse_appearance_suffix", "with_appearance_suffix"]

_SUFFIX_PATTERN = re.compile(r"^(?P<text>.*?)\s*\[(?P<body>[a-z]+:[^\[\]]*)\]$", re.DOTALL)


def _fmt(value: float) -> str:
    return f"{value:g}"


def describe_appearance(spec: AnnotationSpec) -> str:
    """Encode font size, colour, position, rotation and opacity as a bracketed suffix."""
    if spec.x is not None and spec.y is not None:
        pos = f"{_fmt(spec.x)},{_fmt(spec.y)}"
    else:
        pos = spec.position
    parts = [
        f"fs:{_fmt(spec.font_size)}",
        f"c:{spec.color}",
        f"pos:{pos}",
        f"rot:{_fmt(spec.rotation)}",
        f"op:{_fmt(spec.opacity)}",
    ]
    return "[" + "|".join(parts) + "]"


def with_appearance_suffix(spec: AnnotationSpec) -> str:
    """The overlay text followed by its appearance suffix."""
    return f"{spec.text} {describe_appearance(spec)}"


def parse_appearance_suffix(text: str) -> tuple[str, dict[str, str]]:
    """Split ``"TEXT [k:v|k:v]"`` into the text and a dict of the suffix fields.

    Text without a suffix is returned unchanged with an empty dict.

    >>> parse_appearance_suffix("Signed [fs:12|c:red]")
    ('Signed', {'fs': '12', 'c': 'red'})
    """
    m = _SUFFIX_PATTERN.match(text)
    if not m:
        return text, {}
    fields: dict[str, str] = {}
    for part in m.group("body").split("|"):
        key, sep, value = part.partition(":")
        if sep:
            fields[key.strip()] = value.strip()
    return m.group("text"), fields
