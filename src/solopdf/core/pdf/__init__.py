"""PDF loading, page geometry, page selection, and text overlays."""

from .annotate import apply_annotation, stamp_pdf_bytes
from .document import (
    Document,
    DocumentInfo,
    Page,
    document_info,
    has_pdf_header,
    load_document,
    page_count,
)
from .objects import pdf_number, pdf_string
from .position import (
    POSITION_ALIASES,
    POSITION_PRESETS,
    PageBox,
    compute_text_origin,
    estimate_text_width,
    get_page_box,
    get_page_dimensions,
    normalize_rotation,
    resolve_position,
    text_matrix,
    to_user_space,
)
from .render import build_font_dict, build_opacity_state, build_overlay_stream
from .selection import PAGE_SENTINELS, resolve_pages

__all__ = [
    "PAGE_SENTINELS",
    "POSITION_ALIASES",
    "POSITION_PRESETS",
    "Document",
    "DocumentInfo",
    "Page",
    "PageBox",
    "apply_annotation",
    "build_font_dict",
    "build_opacity_state",
    "build_overlay_stream",
    "compute_text_origin",
    "document_info",
    "estimate_text_width",
    "get_page_box",
    "get_page_dimensions",
    "has_pdf_header",
    "load_document",
    "normalize_rotation",
    "page_count",
    "pdf_number",
    "pdf_string",
    "resolve_pages",
    "resolve_position",
    "stamp_pdf_bytes",
    "text_matrix",
    "to_user_space",
]
