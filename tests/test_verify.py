"""Tests for solopdf.core.verify: verification outcomes and check order."""

from __future__ import annotations

import base64
from dataclasses import replace

import pytest

from solopdf.core.keys import generate_key_pair
from solopdf.core.pdf import Document, load_document
from solopdf.core.signing import sign_document
from solopdf.core.verify import (
    MSG_ALGORITHM,
    MSG_FINGERPRINT,
    MSG_HASH_MISMATCH,
    MSG_INVALID,
    MSG_VALID,
    verify_bytes,
    verify_document,
)
from solopdf.errors import MalformedKeyError, MalformedRecordError


@pytest.fixture
def signed(three_page_pdf, key_pair):
    doc = load_document(three_page_pdf)
    return doc, sign_document(doc, key_pair.private_key).record


def _tampered(doc: Document, index: int) -> Document:
    data = bytearray(doc.data)
    data[index] ^= 0x01
    return Document(data=bytes(data), pages=doc.pages)


# ── Positive results ────────────────────────────────────────────────


def test_valid_signature(signed, key_pair):
    doc, record = signed
    result = verify_document(doc, record, key_pair.public_key)
    assert result.is_valid
    assert result.message == MSG_VALID
    assert result.signature_info == record
    assert result.verified_at.endswith("+00:00")


def test_invisible_output_verifies(valid_pdf_bytes, key_pair):
    signed = sign_document(load_document(valid_pdf_bytes), key_pair.private_key, None)
    assert verify_document(signed.document, signed.record, key_pair.public_key).is_valid


def test_three_page_default_visible_signature(make_pdf):
    doc = load_document(make_pdf(num_pages=3))
    signer, stranger = generate_key_pair(), generate_key_pair()
    record = sign_document(doc, signer.private_key).record
    assert record.visible_text is not None
    assert verify_document(doc, record, signer.public_key).is_valid is True
    assert verify_document(doc, record, stranger.public_key).is_valid is False


def test_result_to_dict(signed, key_pair):
    doc, record = signed
    data = verify_document(doc, record, key_pair.public_key).to_dict()
    assert data["is_valid"] is True
    assert data["message"] == MSG_VALID
    assert data["signature_info"]["document_hash"] == record.document_hash


# ── Negative results ────────────────────────────────────────────────


@pytest.mark.parametrize("index", [0, 100, -1])
def test_tampered_document(signed, key_pair, index):
    doc, record = signed
    result = verify_document(_tampered(doc, index), record, key_pair.public_key)
    assert not result.is_valid
    assert result.message == MSG_HASH_MISMATCH


def test_annotated_output_fails_hash_check(three_page_pdf, key_pair):
    signed = sign_document(load_document(three_page_pdf), key_pair.private_key)
    result = verify_document(signed.document, signed.record, key_pair.public_key)
    assert result.message == MSG_HASH_MISMATCH


def test_wrong_key_fingerprint(signed, other_key_pair):
    doc, record = signed
    result = verify_document(doc, record, other_key_pair.public_key)
    assert not result.is_valid
    assert result.message == MSG_FINGERPRINT


def test_wrong_key_without_fingerprint(signed, other_key_pair):
    doc, record = signed
    unpinned = replace(record, signer_fingerprint="")
    result = verify_document(doc, unpinned, other_key_pair.public_key)
    assert not result.is_valid
    assert result.message == MSG_INVALID


def test_unsupported_algorithm(signed, key_pair):
    doc, record = signed
    result = verify_document(doc, replace(record, algorithm="RSA_SHA1"), key_pair.public_key)
    assert not result.is_valid
    assert result.message == f"{MSG_ALGORITHM}: RSA_SHA1"


def test_hash_checked_before_algorithm(signed, key_pair):
    doc, record = signed
    result = verify_document(
        _tampered(doc, 0), replace(record, algorithm="RSA_SHA1"), key_pair.public_key
    )
    assert result.message == MSG_HASH_MISMATCH


def test_short_signature(signed, key_pair):
    doc, record = signed
    short = base64.b64encode(base64.b64decode(record.signature)[:63]).decode()
    result = verify_document(doc, replace(record, signature=short), key_pair.public_key)
    assert not result.is_valid
    assert result.message == MSG_INVALID


def test_flipped_signature_bit(signed, key_pair):
    doc, record = signed
    raw = bytearray(base64.b64decode(record.signature))
    raw[10] ^= 0x80
    forged = base64.b64encode(bytes(raw)).decode()
    result = verify_document(doc, replace(record, signature=forged), key_pair.public_key)
    assert result.message == MSG_INVALID


# ── Undecodable inputs ──────────────────────────────────────────────


def test_bad_signature_encoding(signed, key_pair):
    doc, record = signed
    with pytest.raises(MalformedRecordError):
        verify_document(doc, replace(record, signature="!!not base64!!"), key_pair.public_key)


@pytest.mark.parametrize("public_key", ["", "@@@", base64.b64encode(b"short").decode()])
def test_bad_public_key(signed, public_key):
    doc, record = signed
    with pytest.raises(MalformedKeyError):
        verify_document(doc, record, public_key)


# ── verify_bytes ────────────────────────────────────────────────────


def test_verify_bytes_matches_document(signed, key_pair):
    doc, record = signed
    assert verify_bytes(doc.data, record, key_pair.public_key).is_valid


@pytest.mark.parametrize("data", [b"", b"garbage", b"$PDF-1.7\n"])
def test_verify_bytes_never_parses(signed, key_pair, data):
    _, record = signed
    result = verify_bytes(data, record, key_pair.public_key)
    assert not result.is_valid
    assert result.message == MSG_HASH_MISMATCH
