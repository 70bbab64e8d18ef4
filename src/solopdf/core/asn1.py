"""ECDSA signature encoding: DER SEQUENCE { r, s } <-> fixed-width r || s."""

from __future__ import annotations

from asn1crypto.algos import DSASignature

__all__ = ["der_to_raw_signature", "raw_to_der_signature"]

# P-256 scalar size in bytes
_P256_SCALAR_SIZE = 32


def der_to_raw_signature(der: bytes, scalar_size: int = _P256_SCALAR_SIZE) -> bytes:
    """Convert a DER-encoded ECDSA signature to fixed-width ``r || s``.

    Raises:
        ValueError: If the DER is malformed or a component does not fit.
    """
    sig = DSASignature.load(der, strict=True)
    r = sig["r"].native
    s = sig["s"].native
    try:
        return r.to_bytes(scalar_size, "big") + s.to_bytes(scalar_size, "big")
    except OverflowError as exc:
        raise ValueError(f"ECDSA component larger than {scalar_size} bytes") from exc


def raw_to_der_signature(raw: bytes, scalar_size: int = _P256_SCALAR_SIZE) -> bytes:
    """Convert fixed-width ``r || s`` to a DER-encoded ECDSA signature.

    Raises:
        ValueError: If *raw* is not exactly ``2 * scalar_size`` bytes.
    """
    if len(raw) != 2 * scalar_size:
        raise ValueError(f"Expected {2 * scalar_size}-byte signature, got {len(raw)} bytes")
    r = int.from_bytes(raw[:scalar_size], "big")
    s = int.from_bytes(raw[scalar_size:], "big")
    return DSASignature({"r": r, "s": s}).dump()
