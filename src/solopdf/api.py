"""High-level path-based API.

Each function reads its input file, calls into :mod:`solopdf.core`, and
writes any output atomically. Key material and signature records cross
this boundary as JSON text so callers can store them as files.

For in-memory work use :func:`~solopdf.core.pdf.load_document`,
:func:`~solopdf.core.signing.sign_document` and
:func:`~solopdf.core.verify.verify_document` directly.
"""

from __future__ import annotations

__all__ = [
    "apply_annotation_file",
    "generate_key_pair_json",
    "get_checksum",
    "get_page_count",
    "get_pdf_info",
    "get_pdf_info_before_signing",
    "parse_key_info_json",
    "sign_file",
    "verify_file",
]

import json
import logging
import os
from pathlib import Path
from typing import Any

from ._io import atomic_write
from .constants import BYTES_PER_MB, DEFAULT_SIGNATURE_TEXT, PDF_WARN_SIZE
from .core.appearance import AnnotationSpec
from .core.checksum import checksum, short_checksum
from .core.keys import (
    extract_private_key,
    extract_public_key,
    generate_key_pair,
    parse_key_info,
    serialize_key_pair,
)
from .core.pdf import Document, DocumentInfo, apply_annotation, document_info, load_document
from .core.pdf import page_count as _page_count
from .core.pdf import resolve_pages
from .core.signing import parse_signature_record, sign_document
from .core.verify import verify_bytes
from .errors import InvalidKeyError, MalformedKeyError

_logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _read_bytes(path: StrPath) -> bytes:
    p = Path(path)
    data = p.read_bytes()
    if len(data) > PDF_WARN_SIZE:
        _logger.warning("Large input (%.0f MB): %s", len(data) / BYTES_PER_MB, p)
    return data


def _load(path: StrPath) -> Document:
    return load_document(_read_bytes(path))


def _write_document(path: StrPath, doc: Document) -> None:
    atomic_write(Path(path), doc.data)
    _logger.debug("Wrote %d bytes to %s", doc.byte_length, path)


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------


def get_page_count(path: StrPath) -> int:
    """Number of pages in the PDF at *path*.

    Raises:
        NotAPdfError: If the file is not a PDF.
        CorruptPdfError: If the page tree cannot be read.
        OSError: If the file cannot be read.
    """
    return _page_count(_load(path))


def get_pdf_info_before_signing(path: StrPath) -> int:
    """Pre-signing check: parse the document and return its page count."""
    doc = _load(path)
    _logger.info("Pre-signing check: %s has %d page(s)", path, doc.page_count)
    return doc.page_count


def get_pdf_info(path: StrPath) -> DocumentInfo:
    """Structural summary (page count, size, version, page sizes) of *path*."""
    return document_info(_load(path))


def get_checksum(path: StrPath, *, full: bool = False) -> str:
    """Content checksum of the file at *path*.

    Args:
        path: File to hash (any bytes; not parsed as PDF).
        full: Return the full base64 SHA-256 instead of the 16-character
            short form.
    """
    data = _read_bytes(path)
    return checksum(data) if full else short_checksum(data)


# ---------------------------------------------------------------------------
# Annotation
# ---------------------------------------------------------------------------


def apply_annotation_file(
    input_path: StrPath,
    output_path: StrPath,
    text: str,
    spec: AnnotationSpec | None = None,
) -> int:
    """Stamp *text* onto the PDF at *input_path* and write it to *output_path*.

    Args:
        input_path: Source PDF.
        output_path: Destination; replaced atomically.
        text: Overlay text (replaces any text in *spec*).
        spec: Placement and appearance options; defaults apply when None.

    Returns:
        Number of pages annotated.

    Raises:
        AnnotationError: If options are invalid or select no pages.
        ParseError: If the input is not a readable PDF.
    """
    spec = spec.with_text(text) if spec is not None else AnnotationSpec(text=text)
    doc = _load(input_path)
    annotated = apply_annotation(doc, spec)
    _write_document(output_path, annotated)
    return len(resolve_pages(spec.pages, doc.page_count))


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


def generate_key_pair_json() -> str:
    """Fresh key pair as a key-file JSON blob."""
    return serialize_key_pair(generate_key_pair())


def parse_key_info_json(blob: str) -> dict[str, Any]:
    """``fingerprint``, ``algorithm`` and ``created_at`` of a key file.

    Raises:
        MalformedKeyError: If the blob cannot be parsed.
    """
    info = parse_key_info(blob)
    return {
        "fingerprint": info.fingerprint,
        "algorithm": info.algorithm,
        "created_at": info.created_at,
    }


# ---------------------------------------------------------------------------
# Signing and verification
# ---------------------------------------------------------------------------


def sign_file(
    input_path: StrPath,
    output_path: StrPath,
    key_data: str,
    visible_text: str | None = DEFAULT_SIGNATURE_TEXT,
    *,
    annotation: AnnotationSpec | None = None,
) -> str:
    """Sign the PDF at *input_path* and write the output document.

    Args:
        input_path: PDF to sign.
        output_path: Destination for the (optionally stamped) document.
        key_data: Key-file JSON blob or a bare private key.
        visible_text: Visible mark text, or None for an invisible signature.
        annotation: Placement and appearance of the visible mark.

    Returns:
        JSON with ``original_file``, ``signed_file`` and ``signature_info``.

    Raises:
        InvalidKeyError: If the key material cannot be used for signing.
        AnnotationError: If the visible mark cannot be applied.
        ParseError: If the input is not a readable PDF.
    """
    try:
        private_key = extract_private_key(key_data)
    except MalformedKeyError as e:
        raise InvalidKeyError(str(e)) from e

    doc = _load(input_path)
    signed = sign_document(doc, private_key, visible_text, annotation=annotation)
    _write_document(output_path, signed.document)
    return json.dumps(
        {
            "original_file": str(input_path),
            "signed_file": str(output_path),
            "signature_info": signed.record.to_dict(),
        },
        indent=2,
    )


def verify_file(path: StrPath, signature_record: str, public_key: str) -> str:
    """Verify the PDF at *path* against a signature record.

    Args:
        path: The signed original (the document whose hash was signed).
        signature_record: Record JSON, bare or as returned by :func:`sign_file`.
        public_key: Bare base64 public key, or a key-file / public-key JSON blob.

    Returns:
        JSON with ``is_valid``, ``message``, ``verified_at`` and ``signature_info``.
        A failed check, including a file damaged beyond parsing, is reported
        here, not raised. The file is hashed as-is and never parsed.

    Raises:
        MalformedKeyError: If the public key cannot be decoded.
        MalformedRecordError: If the record cannot be parsed.
    """
    record = parse_signature_record(signature_record)
    key = extract_public_key(public_key)
    result = verify_bytes(_read_bytes(path), record, key)
    return json.dumps(result.to_dict(), indent=2)
