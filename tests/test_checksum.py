"""Tests for solopdf.core.checksum."""

import base64
import hashlib

from solopdf.core.checksum import checksum, checksum_bytes, short_checksum

# SHA-256 of the empty string, base64-encoded
EMPTY_SHA256_B64 = "47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="


def test_checksum_known_value():
    assert checksum(b"") == EMPTY_SHA256_B64


def test_checksum_is_base64_sha256():
    data = b"%PDF-1.7 example"
    assert base64.b64decode(checksum(data)) == hashlib.sha256(data).digest()


def test_checksum_bytes_length():
    assert len(checksum_bytes(b"abc")) == 32


def test_checksum_deterministic(three_page_pdf):
    assert checksum(three_page_pdf) == checksum(bytes(three_page_pdf))


def test_single_byte_change_changes_digest(valid_pdf_bytes):
    original = checksum(valid_pdf_bytes)
    for index in (0, len(valid_pdf_bytes) // 2, len(valid_pdf_bytes) - 1):
        tampered = bytearray(valid_pdf_bytes)
        tampered[index] ^= 0x01
        assert checksum(bytes(tampered)) != original


def test_short_checksum_is_prefix():
    data = b"some document"
    short = short_checksum(data)
    assert len(short) == 16
    assert checksum(data).startswith(short)
