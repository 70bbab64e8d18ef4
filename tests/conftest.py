"""Shared test fixtures for SoloPDF test suite."""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest

# Stroked line so every page starts with real content
PAGE_CONTENT = b"q 0 0 1 RG 72 72 m 144 144 l S Q\n"


def build_pdf(num_pages=1, page_size=(612, 792), rotate=0, cropbox=None):
    """Create a PDF with pikepdf; each page carries a small content stream."""
    import pikepdf

    pdf = pikepdf.Pdf.new()
    for _ in range(num_pages):
        pdf.add_blank_page(page_size=page_size)
    for page in pdf.pages:
        page.obj.Contents = pikepdf.Stream(pdf, PAGE_CONTENT)
        if rotate:
            page.obj.Rotate = rotate
        if cropbox is not None:
            page.obj.CropBox = pikepdf.Array(cropbox)
    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_pdf():
    """Factory fixture: ``make_pdf(num_pages=3, rotate=90)`` returns PDF bytes."""
    return build_pdf


@pytest.fixture
def valid_pdf_bytes():
    """Minimal single-page letter-size PDF."""
    return build_pdf()


@pytest.fixture
def three_page_pdf():
    """Three letter-size pages."""
    return build_pdf(num_pages=3)


@pytest.fixture
def pdf_file(tmp_path, three_page_pdf):
    """Three-page PDF written to disk."""
    path = tmp_path / "document.pdf"
    path.write_bytes(three_page_pdf)
    return path


@pytest.fixture
def key_pair():
    from solopdf.core.keys import generate_key_pair

    return generate_key_pair()


@pytest.fixture
def other_key_pair():
    from solopdf.core.keys import generate_key_pair

    return generate_key_pair()


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Redirect config to a temp directory and clear SOLOPDF_* overrides."""
    cfg_dir = tmp_path / "config"
    config_file = cfg_dir / "config.json"
    monkeypatch.delenv("SOLOPDF_KEY_FILE", raising=False)
    monkeypatch.delenv("SOLOPDF_SIGNATURE_TEXT", raising=False)
    with (
        patch("solopdf.config._storage.CONFIG_DIR", cfg_dir),
        patch("solopdf.config._storage.CONFIG_FILE", config_file),
    ):
        yield cfg_dir, config_file


def page_content(pdf_bytes, index):
    """Decoded content of page *index* (0-based), all streams concatenated."""
    import pikepdf

    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        contents = pdf.pages[index].obj.get("/Contents")
        if contents is None:
            return b""
        streams = [contents] if isinstance(contents, pikepdf.Stream) else list(contents)
        return b"".join(s.read_bytes() for s in streams)


def text_matrices(content):
    """All /Tm operand tuples found in a content stream."""
    result = []
    for line in content.splitlines():
        if line.endswith(b" Tm"):
            result.append(tuple(float(v) for v in line.split()[:-1]))
    return result


@pytest.fixture
def read_page_content():
    return page_content


@pytest.fixture
def read_text_matrices():
    return text_matrices
