"""
Document signing and signature records.

The signature covers the SHA-256 content hash of the document as it was
handed in, before any visible mark is stamped. The visible mark is an
informational overlay and is not covered by the signature.
"""

from __future__ import annotations

__all__ = [
    "SignatureRecord",
    "SignedDocument",
    "parse_signature_record",
    "serialize_signature_record",
    "sign_document",
]

import base64
import json
import logging
from dataclasses import asdict, dataclass, replace
from typing import Any

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ..constants import DEFAULT_SIGNATURE_PAGES, DEFAULT_SIGNATURE_TEXT, SIGNATURE_ALGORITHM
from ..errors import InvalidKeyError, MalformedKeyError, MalformedRecordError
from . import utc_timestamp
from .appearance import AnnotationSpec, with_appearance_suffix
from .asn1 import der_to_raw_signature
from .checksum import checksum_bytes
from .keys import fingerprint, load_private_key
from .pdf import Document, apply_annotation

_logger = logging.getLogger(__name__)

# Record fields that must be present and be strings
_REQUIRED_FIELDS = ("document_hash", "timestamp", "algorithm", "signature", "signer_fingerprint")


@dataclass(frozen=True)
class SignatureRecord:
    """Everything a verifier needs besides the document and the public key.

    Attributes:
        document_hash: Base64 SHA-256 of the unmodified input.
        timestamp: ISO-8601 UTC signing time.
        algorithm: Signature scheme identifier.
        signature: Base64 of the 64-byte r || s signature over the
            decoded ``document_hash``.
        signer_fingerprint: Fingerprint of the signing key's public half.
        visible_text: Stamped text plus its appearance suffix, or None
            for an invisible signature.
    """

    document_hash: str
    timestamp: str
    algorithm: str
    signature: str
    signer_fingerprint: str
    visible_text: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SignatureRecord:
        """Build a record from its JSON form; ``hash`` is accepted for ``document_hash``.

        Raises:
            MalformedRecordError: If a required field is missing or not a string.
        """
        fields = dict(data)
        if "document_hash" not in fields and "hash" in fields:
            fields["document_hash"] = fields["hash"]
        missing = [name for name in _REQUIRED_FIELDS if not isinstance(fields.get(name), str)]
        if missing:
            raise MalformedRecordError(
                f"Signature record is missing or has non-string field(s): {', '.join(missing)}"
            )
        visible_text = fields.get("visible_text")
        if visible_text is not None and not isinstance(visible_text, str):
            raise MalformedRecordError("Signature record field 'visible_text' must be a string")
        return cls(
            document_hash=fields["document_hash"],
            timestamp=fields["timestamp"],
            algorithm=fields["algorithm"],
            signature=fields["signature"],
            signer_fingerprint=fields["signer_fingerprint"],
            visible_text=visible_text,
        )


@dataclass(frozen=True)
class SignedDocument:
    """Result of :func:`sign_document`.

    ``document`` is the annotated output when a visible mark was requested,
    otherwise the input document itself.
    """

    record: SignatureRecord
    document: Document


def sign_document(
    doc: Document,
    private_key: str,
    visible_text: str | None = DEFAULT_SIGNATURE_TEXT,
    *,
    annotation: AnnotationSpec | None = None,
) -> SignedDocument:
    """Sign *doc*'s content hash and optionally stamp a visible mark.

    Args:
        doc: Document to sign (not modified).
        private_key: Base64 PKCS#8 DER or PEM private key.
        visible_text: Text of the visible mark, or None for an invisible
            signature.
        annotation: Placement and appearance for the visible mark; its
            text is replaced by *visible_text*. Defaults to the bottom-right
            corner of the last page.

    Returns:
        SignedDocument with the record and the output document.

    Raises:
        InvalidKeyError: If the private key cannot be used.
        AnnotationError: If the visible mark cannot be applied.
    """
    try:
        key = load_private_key(private_key)
    except MalformedKeyError as e:
        raise InvalidKeyError(str(e)) from e

    digest = checksum_bytes(doc.data)
    der = key.sign(digest, ec.ECDSA(hashes.SHA256()))
    record = SignatureRecord(
        document_hash=base64.b64encode(digest).decode("ascii"),
        timestamp=utc_timestamp(),
        algorithm=SIGNATURE_ALGORITHM,
        signature=base64.b64encode(der_to_raw_signature(der)).decode("ascii"),
        signer_fingerprint=fingerprint(key.public_key()),
    )

    output = doc
    if visible_text is not None:
        if annotation is not None:
            spec = annotation.with_text(visible_text)
        else:
            spec = AnnotationSpec(text=visible_text, pages=DEFAULT_SIGNATURE_PAGES)
        output = apply_annotation(doc, spec)
        record = replace(record, visible_text=with_appearance_suffix(spec))

    _logger.info(
        "Signed %d-byte document with key %s (%s)",
        doc.byte_length,
        record.signer_fingerprint,
        "visible" if visible_text is not None else "invisible",
    )
    return SignedDocument(record=record, document=output)


def serialize_signature_record(record: SignatureRecord) -> str:
    """Pretty JSON form of *record*."""
    return json.dumps(record.to_dict(), indent=2)


def parse_signature_record(blob: str | dict[str, Any]) -> SignatureRecord:
    """Parse a signature record.

    Accepts the bare record object or the full output of signing, in which
    the record sits under ``signature_info``.

    Raises:
        MalformedRecordError: If the blob is not JSON or lacks required fields.
    """
    if isinstance(blob, str):
        try:
            data = json.loads(blob)
        except json.JSONDecodeError as e:
            raise MalformedRecordError(f"Signature record is not valid JSON: {e}") from e
    else:
        data = blob
    if isinstance(data, dict) and isinstance(data.get("signature_info"), dict):
        data = data["signature_info"]
    if not isinstance(data, dict):
        raise MalformedRecordError("Signature record must be a JSON object")
    return SignatureRecord.from_dict(data)
