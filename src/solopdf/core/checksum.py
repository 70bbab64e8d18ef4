"""Content checksums for integrity comparison and signing."""

from __future__ import annotations

__all__ = ["checksum", "checksum_bytes", "short_checksum"]

import base64
import hashlib

from ..constants import SHORT_CHECKSUM_LENGTH


def checksum_bytes(data: bytes) -> bytes:
    """Raw 32-byte SHA-256 digest of *data*."""
    return hashlib.sha256(data).digest()


def checksum(data: bytes) -> str:
    """Base64-encoded SHA-256 digest of *data*.

    This is the value stored as a signature record's ``document_hash``
    and the value the signature is computed over (after decoding).
    """
    return base64.b64encode(checksum_bytes(data)).decode("ascii")


def short_checksum(data: bytes) -> str:
    """First 16 characters of :func:`checksum`, for quick visual comparison."""
    return checksum(data)[:SHORT_CHECKSUM_LENGTH]
