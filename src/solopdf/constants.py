"""
Application-wide constants for SoloPDF.

Default annotation values, key scheme identifiers, and other magic
numbers are centralized here for easy maintenance and configuration.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("solopdf")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "ANNOTATION_MARGIN",
    "BYTES_PER_MB",
    "DEFAULT_COLOR",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_OPACITY",
    "DEFAULT_PAGES",
    "DEFAULT_POSITION",
    "DEFAULT_ROTATION",
    "DEFAULT_SIGNATURE_PAGES",
    "DEFAULT_SIGNATURE_TEXT",
    "ENV_KEY_FILE",
    "ENV_SIGNATURE_TEXT",
    "FINGERPRINT_BYTES",
    "PDF_HEADER_SEARCH_LIMIT",
    "PDF_MAGIC",
    "PDF_WARN_SIZE",
    "SHORT_CHECKSUM_LENGTH",
    "SIGNATURE_ALGORITHM",
    "SIGNATURE_SIZE",
    "__version__",
]

# ── Size units ────────────────────────────────────────────────────────

# Bytes per megabyte -- used for size limit formatting and calculations
BYTES_PER_MB = 1024 * 1024

# PDF file size warning threshold (100 MB); hashing loads the whole file
PDF_WARN_SIZE = 100 * 1024 * 1024


# ── PDF structure ─────────────────────────────────────────────────────

# PDF file magic bytes
PDF_MAGIC = b"%PDF-"

# Readers accept the header anywhere in the first 1024 bytes
# (PDF 1.7, Annex H.3, implementation note 13).
PDF_HEADER_SEARCH_LIMIT = 1024


# ── Checksums and keys ───────────────────────────────────────────────

# Length of the user-facing short checksum (base64 characters)
SHORT_CHECKSUM_LENGTH = 16

# Signature scheme identifier stored in key files and signature records
SIGNATURE_ALGORITHM = "ECDSA_P256_SHA256"

# Fixed-width P-256 signature: 32-byte r followed by 32-byte s
SIGNATURE_SIZE = 64

# Number of SHA-256 bytes kept in a public key fingerprint
FINGERPRINT_BYTES = 16


# ── Annotation defaults ──────────────────────────────────────────────

DEFAULT_FONT_SIZE = 12.0
DEFAULT_COLOR = "black"
DEFAULT_POSITION = "bottom-right"
DEFAULT_PAGES = "all"
DEFAULT_ROTATION = 0.0
DEFAULT_OPACITY = 1.0

# Distance from the page edge for preset positions (PDF points, ~13 mm)
ANNOTATION_MARGIN = 36.0


# ── Signature defaults ──────────────────────────────────────────────

DEFAULT_SIGNATURE_TEXT = "DIGITALLY SIGNED"

# Page the visible signature mark goes on unless overridden
DEFAULT_SIGNATURE_PAGES = "last"


# ── Environment variable names ──────────────────────────────────────

ENV_KEY_FILE = "SOLOPDF_KEY_FILE"
ENV_SIGNATURE_TEXT = "SOLOPDF_SIGNATURE_TEXT"
