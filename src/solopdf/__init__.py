"""
solopdf: PDF integrity and signing toolkit.

Inspects PDF page structure, computes content checksums, stamps
watermark and signature text, and signs and verifies documents with
ECDSA P-256 keys. No server or certificate authority involved.
"""

from __future__ import annotations

from .api import (
    apply_annotation_file,
    generate_key_pair_json,
    get_checksum,
    get_page_count,
    get_pdf_info,
    get_pdf_info_before_signing,
    parse_key_info_json,
    sign_file,
    verify_file,
)
from .constants import __version__
from .core.appearance import AnnotationSpec
from .core.checksum import checksum, short_checksum
from .core.keys import (
    KeyInfo,
    KeyPair,
    derive_key_pair,
    fingerprint,
    generate_key_pair,
    parse_key_info,
    parse_key_pair,
    public_key_info,
    serialize_key_pair,
)
from .core.pdf import (
    POSITION_PRESETS,
    Document,
    DocumentInfo,
    Page,
    apply_annotation,
    document_info,
    load_document,
    page_count,
    resolve_pages,
    resolve_position,
)
from .core.signing import (
    SignatureRecord,
    SignedDocument,
    parse_signature_record,
    serialize_signature_record,
    sign_document,
)
from .core.verify import VerificationResult, verify_bytes, verify_document
from .errors import (
    AnnotationError,
    ConfigError,
    CorruptPdfError,
    InvalidAnnotationError,
    InvalidKeyError,
    KeyMaterialError,
    MalformedKeyError,
    MalformedRecordError,
    NoValidPagesError,
    NotAPdfError,
    ParseError,
    RecordError,
    SignError,
    SoloPDFError,
)

__all__ = [
    "POSITION_PRESETS",
    "AnnotationError",
    "AnnotationSpec",
    "ConfigError",
    "CorruptPdfError",
    "Document",
    "DocumentInfo",
    "InvalidAnnotationError",
    "InvalidKeyError",
    "KeyInfo",
    "KeyMaterialError",
    "KeyPair",
    "MalformedKeyError",
    "MalformedRecordError",
    "NoValidPagesError",
    "NotAPdfError",
    "Page",
    "ParseError",
    "RecordError",
    "SignError",
    "SignatureRecord",
    "SignedDocument",
    "SoloPDFError",
    "VerificationResult",
    "__version__",
    "apply_annotation",
    "apply_annotation_file",
    "checksum",
    "derive_key_pair",
    "document_info",
    "fingerprint",
    "generate_key_pair",
    "generate_key_pair_json",
    "get_checksum",
    "get_page_count",
    "get_pdf_info",
    "get_pdf_info_before_signing",
    "load_document",
    "page_count",
    "parse_key_info",
    "parse_key_info_json",
    "parse_key_pair",
    "parse_signature_record",
    "public_key_info",
    "resolve_pages",
    "resolve_position",
    "serialize_key_pair",
    "serialize_signature_record",
    "short_checksum",
    "sign_document",
    "sign_file",
    "verify_bytes",
    "verify_document",
    "verify_file",
]
