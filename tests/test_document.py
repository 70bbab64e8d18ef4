"""Tests for solopdf.core.pdf.document: loading and page structure."""

from __future__ import annotations

import dataclasses
import io

import pikepdf
import pytest

from solopdf.core.pdf import (
    Document,
    Page,
    document_info,
    get_page_dimensions,
    has_pdf_header,
    load_document,
    page_count,
)
from solopdf.errors import CorruptPdfError, NotAPdfError, ParseError

# ── Header detection ────────────────────────────────────────────────


def test_header_at_start():
    assert has_pdf_header(b"%PDF-1.7\n...")


def test_header_after_junk_within_limit():
    assert has_pdf_header(b"\x00" * 500 + b"%PDF-1.4\n")


def test_header_beyond_limit():
    assert not has_pdf_header(b"\x00" * 2000 + b"%PDF-1.4\n")


def test_header_empty():
    assert not has_pdf_header(b"")


# ── load_document ───────────────────────────────────────────────────


def test_load_single_page(valid_pdf_bytes):
    doc = load_document(valid_pdf_bytes)
    assert doc.page_count == 1
    assert doc.data == valid_pdf_bytes
    assert doc.byte_length == len(valid_pdf_bytes)
    assert doc.pages[0] == Page(number=1, width=612.0, height=792.0)


def test_load_three_pages(three_page_pdf):
    doc = load_document(three_page_pdf)
    assert page_count(doc) == 3
    assert [p.number for p in doc.pages] == [1, 2, 3]


def test_page_lookup(three_page_pdf):
    doc = load_document(three_page_pdf)
    assert doc.page(2).number == 2
    with pytest.raises(IndexError):
        doc.page(0)
    with pytest.raises(IndexError):
        doc.page(4)


def test_document_is_frozen(valid_pdf_bytes):
    doc = load_document(valid_pdf_bytes)
    with pytest.raises(dataclasses.FrozenInstanceError):
        doc.data = b""  # type: ignore[misc]


def test_not_a_pdf():
    with pytest.raises(NotAPdfError, match="does not appear to be a PDF"):
        load_document(b"hello world, definitely not a PDF")


def test_empty_input():
    with pytest.raises(NotAPdfError):
        load_document(b"")


def test_corrupt_pdf():
    with pytest.raises(CorruptPdfError):
        load_document(b"%PDF-1.4\n" + b"\xff" * 64)


def test_parse_errors_share_base():
    with pytest.raises(ParseError):
        load_document(b"nope")


def test_zero_page_pdf():
    import io

    import pikepdf

    buf = io.BytesIO()
    pikepdf.Pdf.new().save(buf)
    doc = load_document(buf.getvalue())
    assert doc.page_count == 0
    assert document_info(doc).page_count == 0


# ── Page geometry ───────────────────────────────────────────────────


def test_rotated_page_swaps_dimensions(make_pdf):
    doc = load_document(make_pdf(rotate=90))
    page = doc.pages[0]
    assert page.rotation == 90
    assert (page.width, page.height) == (792.0, 612.0)


def test_rotate_180_keeps_dimensions(make_pdf):
    page = load_document(make_pdf(rotate=180)).pages[0]
    assert (page.width, page.height) == (612.0, 792.0)


def test_cropbox_takes_priority(make_pdf):
    page = load_document(make_pdf(cropbox=[50, 60, 350, 460])).pages[0]
    assert (page.width, page.height) == (300.0, 400.0)
    assert page.origin == (50.0, 60.0)


def test_get_page_dimensions(make_pdf):
    import io

    import pikepdf

    with pikepdf.open(io.BytesIO(make_pdf(page_size=(842, 595), rotate=270))) as pdf:
        assert get_page_dimensions(pdf, 0) == (595.0, 842.0)


# ── document_info ───────────────────────────────────────────────────


def test_document_info(three_page_pdf):
    doc = load_document(three_page_pdf)
    info = document_info(doc)
    assert info.page_count == doc.page_count == 3
    assert info.byte_length == len(three_page_pdf)
    assert info.page_sizes == ((612.0, 792.0),) * 3


def test_document_constructed_directly():
    doc = Document(data=b"%PDF-", pages=(Page(1, 100.0, 200.0),))
    assert doc.page_count == 1
    assert doc.byte_length == 5


def _pdf_with_rotate(value):
    pdf = pikepdf.Pdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    pdf.pages[0].obj.Rotate = value
    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


def test_non_numeric_rotate_treated_as_upright():
    page = load_document(_pdf_with_rotate(pikepdf.Name("/Foo"))).pages[0]
    assert page.rotation == 0
    assert (page.width, page.height) == (612.0, 792.0)


@pytest.mark.parametrize(
    ("value", "rotation"), [(44, 0), (45, 90), (100, 90), (-90, 270), (450, 90)]
)
def test_off_axis_rotate_rounded_to_quarter_turn(value, rotation):
    assert load_document(_pdf_with_rotate(value)).pages[0].rotation == rotation
