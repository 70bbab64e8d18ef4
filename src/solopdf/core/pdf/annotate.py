"""
Text overlays (watermarks and visible signature marks).

Stamps positioned text onto selected pages and returns a new
:class:`~solopdf.core.pdf.document.Document`. The overlay is purely
visual: page count never changes and the input document is untouched.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from ...errors import AnnotationError, CorruptPdfError
from .. import require_pikepdf as _require_pikepdf
from ..appearance import AnnotationSpec, parse_color
from .document import Document, load_document
from .position import compute_text_origin, estimate_text_width, get_page_box, text_matrix
from .render import LINE_LEADING, build_font_dict, build_opacity_state, build_overlay_stream
from .selection import resolve_pages

if TYPE_CHECKING:
    import pikepdf

_logger = logging.getLogger(__name__)

__all__ = ["apply_annotation", "stamp_pdf_bytes"]

# Resource name prefixes; pikepdf appends a number unique within the page.
_FONT_PREFIX = "SoloF"
_GS_PREFIX = "SoloGS"


def _stamp_page(
    pdf: pikepdf.Pdf,
    page: pikepdf.Page,
    spec: AnnotationSpec,
    rgb: tuple[float, float, float],
    font: pikepdf.Object,
    opacity_state: pikepdf.Object | None,
) -> None:
    """Append the overlay to a single page."""
    pikepdf = _require_pikepdf()

    lines = spec.text.splitlines() or [spec.text]
    leading = spec.font_size * LINE_LEADING
    block_height = spec.font_size + leading * (len(lines) - 1)

    box = get_page_box(page)
    if spec.x is not None and spec.y is not None:
        x, y = spec.x, spec.y
    else:
        page_w, page_h = box.visual_size
        widest = max(estimate_text_width(line, spec.font_size) for line in lines)
        x, y = compute_text_origin(page_w, page_h, spec.position, widest, block_height)
    # First baseline sits at the top of the block; later lines go down.
    first_baseline = y + leading * (len(lines) - 1)
    matrix = text_matrix(box, x, first_baseline, spec.rotation)

    font_name = page.add_resource(font, pikepdf.Name.Font, prefix=_FONT_PREFIX)
    gs_name = None
    if opacity_state is not None:
        gs_name = str(page.add_resource(opacity_state, pikepdf.Name.ExtGState, prefix=_GS_PREFIX))

    overlay = build_overlay_stream(
        lines,
        str(font_name),
        spec.font_size,
        rgb,
        matrix,
        gs_name=gs_name,
        leading=leading,
    )

    # Isolate existing content so its graphics state cannot leak into the overlay.
    page.contents_add(pikepdf.Stream(pdf, b"q\n"), prepend=True)
    page.contents_add(pikepdf.Stream(pdf, b"Q\n" + overlay))
    _logger.debug("Stamped page at visual (%.1f, %.1f), rotation %s", x, y, spec.rotation)


def stamp_pdf_bytes(pdf_bytes: bytes, spec: AnnotationSpec, pages: list[int]) -> bytes:
    """Stamp *spec* onto the given 1-based *pages* and return the new PDF bytes.

    Saved with a deterministic /ID so identical input and options always
    produce identical output.
    """
    rgb = parse_color(spec.color)
    pikepdf = _require_pikepdf()
    try:
        with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
            font = pdf.make_indirect(build_font_dict())
            opacity_state = None
            if spec.opacity < 1.0:
                opacity_state = pdf.make_indirect(build_opacity_state(spec.opacity))
            for number in pages:
                _stamp_page(pdf, pdf.pages[number - 1], spec, rgb, font, opacity_state)
            buf = io.BytesIO()
            pdf.save(buf, deterministic_id=True)
    except (ValueError, TypeError, RuntimeError, OSError, pikepdf.PdfError) as e:
        raise CorruptPdfError(f"Cannot write annotated PDF: {e}") from e
    return buf.getvalue()


def apply_annotation(doc: Document, spec: AnnotationSpec) -> Document:
    """Overlay ``spec.text`` on the pages selected by ``spec.pages``.

    Args:
        doc: Source document (not modified).
        spec: Annotation options.

    Returns:
        A new Document with the same page count.

    Raises:
        InvalidAnnotationError: If an option is out of range.
        NoValidPagesError: If the page selection resolves to no pages.
        CorruptPdfError: If the document cannot be rewritten.
    """
    spec.validate()
    targets = resolve_pages(spec.pages, doc.page_count)

    _logger.info(
        "Annotating %d of %d page(s): %d bytes, position=%s",
        len(targets),
        doc.page_count,
        doc.byte_length,
        "explicit" if spec.has_explicit_coordinates else spec.position,
    )

    result = load_document(stamp_pdf_bytes(doc.data, spec, targets))
    if result.page_count != doc.page_count:
        raise AnnotationError(
            f"Annotation changed page count: {doc.page_count} -> {result.page_count}"
        )
    _logger.debug("Annotated PDF: %d bytes", result.byte_length)
    return result
