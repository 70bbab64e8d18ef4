"""Tests for solopdf.api: the path-based entry points."""

from __future__ import annotations

import json

import pytest

from solopdf import api
from solopdf.core.appearance import AnnotationSpec
from solopdf.core.checksum import checksum
from solopdf.core.keys import public_key_info, serialize_key_pair
from solopdf.core.verify import MSG_FINGERPRINT, MSG_HASH_MISMATCH, MSG_VALID
from solopdf.errors import (
    InvalidKeyError,
    MalformedKeyError,
    MalformedRecordError,
    NotAPdfError,
    NoValidPagesError,
)

# ── Inspection ──────────────────────────────────────────────────────


def test_get_page_count(pdf_file):
    assert api.get_page_count(pdf_file) == 3


def test_get_page_count_accepts_str(pdf_file):
    assert api.get_page_count(str(pdf_file)) == 3


def test_get_page_count_not_a_pdf(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("plain text")
    with pytest.raises(NotAPdfError):
        api.get_page_count(path)


def test_get_page_count_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        api.get_page_count(tmp_path / "nope.pdf")


def test_get_pdf_info_before_signing(pdf_file):
    assert api.get_pdf_info_before_signing(pdf_file) == 3


def test_get_pdf_info(pdf_file):
    info = api.get_pdf_info(pdf_file)
    assert info.page_count == 3
    assert info.byte_length == pdf_file.stat().st_size


def test_get_checksum(pdf_file):
    full = api.get_checksum(pdf_file, full=True)
    assert full == checksum(pdf_file.read_bytes())
    assert api.get_checksum(pdf_file) == full[:16]


def test_get_checksum_any_bytes(tmp_path):
    path = tmp_path / "blob.bin"
    path.write_bytes(b"")
    assert api.get_checksum(path, full=True) == "47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="


# ── Annotation ──────────────────────────────────────────────────────


def test_apply_annotation_file(pdf_file, tmp_path, read_page_content):
    out = tmp_path / "stamped.pdf"
    count = api.apply_annotation_file(pdf_file, out, "CONFIDENTIAL")
    assert count == 3
    assert api.get_page_count(out) == 3
    assert b"(CONFIDENTIAL) Tj" in read_page_content(out.read_bytes(), 1)


def test_apply_annotation_file_with_spec(pdf_file, tmp_path):
    out = tmp_path / "stamped.pdf"
    spec = AnnotationSpec(text="placeholder", pages="odd", color="red")
    assert api.apply_annotation_file(pdf_file, out, "DRAFT", spec) == 2


def test_apply_annotation_file_overwrites_input(pdf_file):
    original = pdf_file.read_bytes()
    api.apply_annotation_file(pdf_file, pdf_file, "IN PLACE")
    assert pdf_file.read_bytes() != original
    assert api.get_page_count(pdf_file) == 3


def test_apply_annotation_file_no_pages(pdf_file, tmp_path):
    out = tmp_path / "stamped.pdf"
    with pytest.raises(NoValidPagesError):
        api.apply_annotation_file(pdf_file, out, "X", AnnotationSpec(text="X", pages="9"))
    assert not out.exists()


# ── Keys ────────────────────────────────────────────────────────────


def test_generate_key_pair_json():
    data = json.loads(api.generate_key_pair_json())
    assert data["algorithm"] == "ECDSA_P256_SHA256"
    assert data["private_key"] and data["public_key"]


def test_parse_key_info_json(key_pair):
    info = api.parse_key_info_json(serialize_key_pair(key_pair))
    assert info == {
        "fingerprint": key_pair.fingerprint,
        "algorithm": key_pair.algorithm,
        "created_at": key_pair.created_at,
    }


def test_parse_key_info_json_malformed():
    with pytest.raises(MalformedKeyError):
        api.parse_key_info_json("{}")


# ── Signing and verification ────────────────────────────────────────


def test_sign_and_verify_file(pdf_file, tmp_path, key_pair):
    out = tmp_path / "signed.pdf"
    result = json.loads(api.sign_file(pdf_file, out, serialize_key_pair(key_pair)))
    assert result["original_file"] == str(pdf_file)
    assert result["signed_file"] == str(out)
    assert result["signature_info"]["signer_fingerprint"] == key_pair.fingerprint
    assert out.exists()

    verdict = json.loads(
        api.verify_file(pdf_file, json.dumps(result["signature_info"]), key_pair.public_key)
    )
    assert verdict["is_valid"] is True
    assert verdict["message"] == MSG_VALID


def test_verify_file_accepts_full_sign_output(pdf_file, tmp_path, key_pair):
    sign_output = api.sign_file(pdf_file, tmp_path / "signed.pdf", key_pair.private_key)
    public_file = json.dumps(public_key_info(key_pair))
    verdict = json.loads(api.verify_file(pdf_file, sign_output, public_file))
    assert verdict["is_valid"] is True


def test_verify_stamped_output_reports_mismatch(pdf_file, tmp_path, key_pair):
    out = tmp_path / "signed.pdf"
    sign_output = api.sign_file(pdf_file, out, key_pair.private_key)
    verdict = json.loads(api.verify_file(out, sign_output, key_pair.public_key))
    assert verdict["is_valid"] is False
    assert verdict["message"] == MSG_HASH_MISMATCH


def test_invisible_signed_output_verifies(pdf_file, tmp_path, key_pair):
    out = tmp_path / "signed.pdf"
    sign_output = api.sign_file(pdf_file, out, key_pair.private_key, None)
    assert out.read_bytes() == pdf_file.read_bytes()
    assert json.loads(api.verify_file(out, sign_output, key_pair.public_key))["is_valid"]


def test_verify_file_wrong_key(pdf_file, tmp_path, key_pair, other_key_pair):
    sign_output = api.sign_file(pdf_file, tmp_path / "signed.pdf", key_pair.private_key)
    verdict = json.loads(api.verify_file(pdf_file, sign_output, other_key_pair.public_key))
    assert verdict["is_valid"] is False
    assert verdict["message"] == MSG_FINGERPRINT


@pytest.mark.parametrize("key_data", ["", "{}", "{broken", "not-a-key"])
def test_sign_file_invalid_key(pdf_file, tmp_path, key_data):
    out = tmp_path / "signed.pdf"
    with pytest.raises(InvalidKeyError):
        api.sign_file(pdf_file, out, key_data)
    assert not out.exists()


def test_verify_file_malformed_record(pdf_file, key_pair):
    with pytest.raises(MalformedRecordError):
        api.verify_file(pdf_file, "{}", key_pair.public_key)


def test_verify_file_header_damage_is_a_mismatch(pdf_file, tmp_path, key_pair):
    out = tmp_path / "signed.pdf"
    sign_output = api.sign_file(pdf_file, out, key_pair.private_key, None)
    data = bytearray(out.read_bytes())
    data[0] ^= 0x01
    out.write_bytes(bytes(data))
    verdict = json.loads(api.verify_file(out, sign_output, key_pair.public_key))
    assert verdict["is_valid"] is False
    assert verdict["message"] == MSG_HASH_MISMATCH


def test_verify_file_non_pdf_content(tmp_path, pdf_file, key_pair):
    sign_output = api.sign_file(pdf_file, tmp_path / "signed.pdf", key_pair.private_key)
    junk = tmp_path / "junk.pdf"
    junk.write_bytes(b"\x00\xff not a document")
    verdict = json.loads(api.verify_file(junk, sign_output, key_pair.public_key))
    assert verdict["message"] == MSG_HASH_MISMATCH
