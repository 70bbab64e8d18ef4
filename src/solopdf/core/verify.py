"""
Signature verification.

A failed check is reported through :class:`VerificationResult`, never
raised. Only undecodable inputs (public key, signature encoding) raise.
"""

from __future__ import annotations

__all__ = [
    "MSG_ALGORITHM",
    "MSG_FINGERPRINT",
    "MSG_HASH_MISMATCH",
    "MSG_INVALID",
    "MSG_VALID",
    "VerificationResult",
    "verify_bytes",
    "verify_document",
]

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ..constants import SIGNATURE_ALGORITHM, SIGNATURE_SIZE
from ..errors import MalformedRecordError
from . import utc_timestamp
from .asn1 import raw_to_der_signature
from .checksum import checksum_bytes
from .keys import fingerprint, load_public_key
from .pdf import Document
from .signing import SignatureRecord

_logger = logging.getLogger(__name__)

MSG_VALID = "Signature is valid and document is authentic"
MSG_HASH_MISMATCH = "Document has been modified since signing (content hash mismatch)"
MSG_ALGORITHM = "Unsupported signature algorithm"
MSG_FINGERPRINT = "Signature was made with a different key (fingerprint mismatch)"
MSG_INVALID = "Invalid signature - document may be tampered or signed with different key"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of :func:`verify_document`."""

    is_valid: bool
    message: str
    verified_at: str
    signature_info: SignatureRecord | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "message": self.message,
            "verified_at": self.verified_at,
            "signature_info": (
                self.signature_info.to_dict() if self.signature_info is not None else None
            ),
        }


def _decode_signature(record: SignatureRecord) -> bytes:
    try:
        return base64.b64decode(record.signature, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedRecordError(f"Signature is not valid base64: {e}") from e


def _ecdsa_verify(public: ec.EllipticCurvePublicKey, raw: bytes, digest: bytes) -> bool:
    if len(raw) != SIGNATURE_SIZE:
        _logger.debug("Signature has %d bytes, expected %d", len(raw), SIGNATURE_SIZE)
        return False
    try:
        public.verify(raw_to_der_signature(raw), digest, ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        return False
    return True


def verify_bytes(data: bytes, record: SignatureRecord, public_key: str) -> VerificationResult:
    """Check *record* against raw file content and *public_key*.

    The content is hashed as-is and never parsed, so a file damaged
    beyond reading as a PDF still yields a content-hash-mismatch result.

    Checks run in order and stop at the first failure: content hash,
    algorithm, signer fingerprint, then the ECDSA signature itself.

    Args:
        data: Exact bytes of the file that was signed.
        record: Signature record produced by signing.
        public_key: Base64 public key of the expected signer.

    Returns:
        VerificationResult; ``is_valid`` is False for any failed check.

    Raises:
        MalformedKeyError: If *public_key* cannot be decoded.
        MalformedRecordError: If the record's signature is not valid base64.
    """
    public = load_public_key(public_key)
    raw = _decode_signature(record)
    digest = checksum_bytes(data)

    def result(is_valid: bool, message: str) -> VerificationResult:
        _logger.info("Verification %s: %s", "passed" if is_valid else "failed", message)
        return VerificationResult(is_valid, message, utc_timestamp(), record)

    if base64.b64encode(digest).decode("ascii") != record.document_hash:
        return result(False, MSG_HASH_MISMATCH)
    if record.algorithm != SIGNATURE_ALGORITHM:
        return result(False, f"{MSG_ALGORITHM}: {record.algorithm}")
    if record.signer_fingerprint and record.signer_fingerprint != fingerprint(public):
        return result(False, MSG_FINGERPRINT)
    if not _ecdsa_verify(public, raw, digest):
        return result(False, MSG_INVALID)
    return result(True, MSG_VALID)


def verify_document(doc: Document, record: SignatureRecord, public_key: str) -> VerificationResult:
    """Check *record* against *doc* (the unmodified original that was signed).

    Same checks as :func:`verify_bytes`, run over ``doc.data``.
    """
    return verify_bytes(doc.data, record, public_key)
