"""
Minimal structural view of a PDF: page count and page boundaries.

A :class:`Document` keeps the exact input bytes alongside the parsed
page list, so checksums and signatures always cover what was loaded.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from ...constants import PDF_HEADER_SEARCH_LIMIT, PDF_MAGIC
from ...errors import CorruptPdfError, NotAPdfError
from .. import require_pikepdf as _require_pikepdf
from .position import PageBox, get_page_box

_logger = logging.getLogger(__name__)

__all__ = [
    "Document",
    "DocumentInfo",
    "Page",
    "document_info",
    "has_pdf_header",
    "load_document",
    "page_count",
]


@dataclass(frozen=True)
class Page:
    """One page of a loaded document.

    Attributes:
        number: 1-based page number.
        width: Visual width in PDF points (CropBox, rotation applied).
        height: Visual height in PDF points.
        rotation: /Rotate value (0, 90, 180, 270).
        origin: Lower-left corner of the visible box in user space.
    """

    number: int
    width: float
    height: float
    rotation: int = 0
    origin: tuple[float, float] = (0.0, 0.0)

    @classmethod
    def from_box(cls, number: int, box: PageBox) -> Page:
        width, height = box.visual_size
        return cls(
            number=number,
            width=width,
            height=height,
            rotation=box.rotation,
            origin=(box.x0, box.y0),
        )


@dataclass(frozen=True)
class Document:
    """Parsed PDF: raw bytes plus ordered pages (1-indexed).

    Construct with :func:`load_document`; never mutated afterwards.
    """

    data: bytes
    pages: tuple[Page, ...]
    pdf_version: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def byte_length(self) -> int:
        return len(self.data)

    def page(self, number: int) -> Page:
        """Return the page with 1-based *number*."""
        if number < 1 or number > len(self.pages):
            raise IndexError(f"Page {number} out of range (document has {len(self.pages)})")
        return self.pages[number - 1]


@dataclass(frozen=True)
class DocumentInfo:
    """Metadata reported before signing or watermarking."""

    page_count: int
    byte_length: int
    pdf_version: str
    page_sizes: tuple[tuple[float, float], ...]


def has_pdf_header(data: bytes) -> bool:
    """True if the %PDF- marker appears within the first 1024 bytes."""
    return bool(data) and data.find(PDF_MAGIC, 0, PDF_HEADER_SEARCH_LIMIT) >= 0


def load_document(data: bytes) -> Document:
    """Parse PDF bytes into a :class:`Document`.

    Args:
        data: Raw PDF file content.

    Returns:
        Document with one :class:`Page` per page in the page tree.

    Raises:
        NotAPdfError: If the input has no %PDF- header.
        CorruptPdfError: If pikepdf cannot open the file or walk its pages.
    """
    if not has_pdf_header(data):
        raise NotAPdfError("Input does not appear to be a PDF file.")

    pikepdf = _require_pikepdf()
    try:
        with pikepdf.open(io.BytesIO(data)) as pdf:
            pages = tuple(
                Page.from_box(index, get_page_box(page))
                for index, page in enumerate(pdf.pages, start=1)
            )
            version = str(pdf.pdf_version)
    except pikepdf.PasswordError as e:
        raise CorruptPdfError(f"PDF is password-protected: {e}") from e
    except (ValueError, TypeError, RuntimeError, OSError, pikepdf.PdfError) as e:
        raise CorruptPdfError(f"Cannot read PDF structure: {e}") from e

    _logger.debug("Loaded PDF %s: %d bytes, %d page(s)", version, len(data), len(pages))
    return Document(data=data, pages=pages, pdf_version=version)


def page_count(doc: Document) -> int:
    """Number of pages in *doc* (>= 0)."""
    return doc.page_count


def document_info(doc: Document) -> DocumentInfo:
    """Summarize *doc*; always includes the page count."""
    return DocumentInfo(
        page_count=doc.page_count,
        byte_length=doc.byte_length,
        pdf_version=doc.pdf_version,
        page_sizes=tuple((p.width, p.height) for p in doc.pages),
    )
