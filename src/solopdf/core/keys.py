"""
ECDSA P-256 key pairs: generation, fingerprints, and key-file handling.

Keys travel as text:

- private key: base64 of unencrypted PKCS#8 DER (PEM is also accepted
  on input),
- public key: base64 of the uncompressed SEC1 point (65 bytes).

A key file is a JSON object holding both halves plus the fingerprint,
algorithm identifier, and creation time.
"""

from __future__ import annotations

__all__ = [
    "KeyInfo",
    "KeyPair",
    "derive_key_pair",
    "encode_public_key",
    "extract_private_key",
    "extract_public_key",
    "fingerprint",
    "generate_key_pair",
    "load_private_key",
    "load_public_key",
    "parse_key_info",
    "parse_key_pair",
    "public_key_info",
    "serialize_key_pair",
]

import base64
import binascii
import hashlib
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ..constants import FINGERPRINT_BYTES, SIGNATURE_ALGORITHM
from ..errors import MalformedKeyError
from . import utc_timestamp

_logger = logging.getLogger(__name__)

_PEM_MARKER = "-----BEGIN"
_CURVE_NAME = "secp256r1"


@dataclass(frozen=True)
class KeyPair:
    """A P-256 key pair in its text encoding."""

    public_key: str
    private_key: str
    fingerprint: str
    algorithm: str = SIGNATURE_ALGORITHM
    created_at: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class KeyInfo:
    """Shareable summary of a key file (never carries the private key).

    Attributes:
        fingerprint: Colon-grouped hex fingerprint of the public key.
        algorithm: Signature scheme identifier.
        created_at: ISO-8601 creation time, if the key file recorded one.
        public_key: Base64 uncompressed public point.
        has_private_key: Whether the source blob contained a private key.
    """

    fingerprint: str
    algorithm: str
    created_at: str | None
    public_key: str
    has_private_key: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ── Encoding ────────────────────────────────────────────────────────


def _b64decode(value: str, what: str) -> bytes:
    try:
        return base64.b64decode("".join(value.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedKeyError(f"{what} is not valid base64: {e}") from e


def _encode_private_key(key: ec.EllipticCurvePrivateKey) -> str:
    der = key.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return base64.b64encode(der).decode("ascii")


def encode_public_key(key: ec.EllipticCurvePublicKey) -> str:
    """Base64 of the uncompressed SEC1 point of *key*."""
    point = key.public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    return base64.b64encode(point).decode("ascii")


def _require_p256(key: ec.EllipticCurvePrivateKey | ec.EllipticCurvePublicKey, what: str) -> None:
    if key.curve.name != _CURVE_NAME:
        raise MalformedKeyError(f"{what} is not an ECDSA P-256 key (curve {key.curve.name})")


def load_private_key(data: str) -> ec.EllipticCurvePrivateKey:
    """Decode a private key from base64 PKCS#8 DER or PEM.

    Raises:
        MalformedKeyError: If the key cannot be decoded or is not P-256.
    """
    text = data.strip()
    if not text:
        raise MalformedKeyError("Private key is empty")
    try:
        if text.startswith(_PEM_MARKER):
            key = serialization.load_pem_private_key(text.encode("ascii"), password=None)
        else:
            key = serialization.load_der_private_key(
                _b64decode(text, "Private key"), password=None
            )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise MalformedKeyError(f"Cannot decode private key: {e}") from e
    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise MalformedKeyError("Private key is not an elliptic curve key")
    _require_p256(key, "Private key")
    return key


def load_public_key(data: str) -> ec.EllipticCurvePublicKey:
    """Decode a public key from a base64 SEC1 point, base64 SPKI DER, or PEM.

    Raises:
        MalformedKeyError: If the key cannot be decoded or is not P-256.
    """
    text = data.strip()
    if not text:
        raise MalformedKeyError("Public key is empty")
    try:
        if text.startswith(_PEM_MARKER):
            key = serialization.load_pem_public_key(text.encode("ascii"))
        else:
            raw = _b64decode(text, "Public key")
            # 0x30 is a DER SEQUENCE (SubjectPublicKeyInfo); points start with 0x02-0x04.
            if raw[:1] == b"\x30":
                key = serialization.load_der_public_key(raw)
            else:
                key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), raw)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise MalformedKeyError(f"Cannot decode public key: {e}") from e
    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise MalformedKeyError("Public key is not an elliptic curve key")
    _require_p256(key, "Public key")
    return key


# ── Fingerprints and key pairs ──────────────────────────────────────


def fingerprint(public_key: str | ec.EllipticCurvePublicKey) -> str:
    """Fingerprint of a public key.

    The first 16 bytes of SHA-256 over the uncompressed point, as hex in
    eight colon-separated groups of four, e.g. ``1a2b:3c4d:...``.
    Encodings of the same key (PEM, compressed point) give the same value.
    """
    key = load_public_key(public_key) if isinstance(public_key, str) else public_key
    point = base64.b64decode(encode_public_key(key))
    digest = hashlib.sha256(point).hexdigest()[: FINGERPRINT_BYTES * 2]
    return ":".join(digest[i : i + 4] for i in range(0, len(digest), 4))


def _key_pair_from_private(key: ec.EllipticCurvePrivateKey, created_at: str) -> KeyPair:
    public = key.public_key()
    return KeyPair(
        public_key=encode_public_key(public),
        private_key=_encode_private_key(key),
        fingerprint=fingerprint(public),
        algorithm=SIGNATURE_ALGORITHM,
        created_at=created_at,
    )


def generate_key_pair() -> KeyPair:
    """Generate a fresh P-256 key pair from the OS CSPRNG."""
    key = ec.generate_private_key(ec.SECP256R1())
    pair = _key_pair_from_private(key, utc_timestamp())
    _logger.info("Generated key pair %s", pair.fingerprint)
    return pair


def derive_key_pair(private_key: str, created_at: str | None = None) -> KeyPair:
    """Rebuild the full key pair from its private half.

    Raises:
        MalformedKeyError: If *private_key* cannot be decoded.
    """
    key = load_private_key(private_key)
    return _key_pair_from_private(key, created_at or utc_timestamp())


def public_key_info(pair: KeyPair) -> dict[str, str]:
    """The distributable part of *pair*: everything except the private key."""
    return {
        "public_key": pair.public_key,
        "fingerprint": pair.fingerprint,
        "algorithm": pair.algorithm,
        "created_at": pair.created_at,
    }


# ── Key files ───────────────────────────────────────────────────────


def serialize_key_pair(pair: KeyPair) -> str:
    """Pretty JSON key file for *pair*."""
    return json.dumps(pair.to_dict(), indent=2)


def _load_blob(blob: str) -> dict[str, Any]:
    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedKeyError(f"Key file is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedKeyError("Key file must be a JSON object")

    algorithm = data.get("algorithm", SIGNATURE_ALGORITHM)
    if algorithm != SIGNATURE_ALGORITHM:
        raise MalformedKeyError(f"Unsupported key algorithm: {algorithm!r}")
    for field in ("public_key", "private_key", "fingerprint", "created_at"):
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise MalformedKeyError(f"Key file field {field!r} must be a string")
    return data


def _resolve_blob(data: dict[str, Any]) -> tuple[ec.EllipticCurvePublicKey, str | None]:
    """Return the blob's public key and canonical private key (if present).

    Checks that the two halves belong together and that any stored
    fingerprint matches.
    """
    private_text = data.get("private_key")
    public_text = data.get("public_key")
    if not private_text and not public_text:
        raise MalformedKeyError("Key file has no public_key")

    private_key = None
    if private_text:
        key = load_private_key(private_text)
        private_key = _encode_private_key(key)
        public = key.public_key()
        stored = load_public_key(public_text) if public_text else public
        if encode_public_key(stored) != encode_public_key(public):
            raise MalformedKeyError("Key file public_key does not match its private_key")
    else:
        public = load_public_key(public_text)

    stored_fp = data.get("fingerprint")
    if stored_fp and stored_fp != fingerprint(public):
        raise MalformedKeyError("Key file fingerprint does not match its public key")
    return public, private_key


def parse_key_pair(blob: str) -> KeyPair:
    """Parse a key file into a :class:`KeyPair`.

    The public half is derived when the file only holds ``private_key``.

    Raises:
        MalformedKeyError: On unparseable JSON, undecodable keys, an
            unsupported algorithm, a missing private key, or an
            inconsistent fingerprint.
    """
    data = _load_blob(blob)
    public, private_key = _resolve_blob(data)
    if private_key is None:
        raise MalformedKeyError("Key file has no private_key")
    return KeyPair(
        public_key=encode_public_key(public),
        private_key=private_key,
        fingerprint=fingerprint(public),
        algorithm=SIGNATURE_ALGORITHM,
        created_at=data.get("created_at") or "",
    )


def parse_key_info(blob: str) -> KeyInfo:
    """Summarize a key file or public-key file without exposing the private key.

    Raises:
        MalformedKeyError: As for :func:`parse_key_pair`, except that a
            missing private key is allowed.
    """
    data = _load_blob(blob)
    public, private_key = _resolve_blob(data)
    return KeyInfo(
        fingerprint=fingerprint(public),
        algorithm=SIGNATURE_ALGORITHM,
        created_at=data.get("created_at") or None,
        public_key=encode_public_key(public),
        has_private_key=private_key is not None,
    )


def _is_json_blob(material: str) -> bool:
    return material.lstrip().startswith("{")


def extract_private_key(key_data: str) -> str:
    """Private key text from a key file or from a bare encoded private key."""
    if _is_json_blob(key_data):
        return parse_key_pair(key_data).private_key
    return key_data.strip()


def extract_public_key(material: str) -> str:
    """Public key text from a key file, a public-key file, or a bare encoded key."""
    if _is_json_blob(material):
        return parse_key_info(material).public_key
    return material.strip()
