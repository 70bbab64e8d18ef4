"""SoloPDF error types."""

from __future__ import annotations

__all__ = [
    "AnnotationError",
    "ConfigError",
    "CorruptPdfError",
    "InvalidAnnotationError",
    "InvalidKeyError",
    "KeyMaterialError",
    "MalformedKeyError",
    "MalformedRecordError",
    "NoValidPagesError",
    "NotAPdfError",
    "ParseError",
    "RecordError",
    "SignError",
    "SoloPDFError",
]


class SoloPDFError(Exception):
    """Base error for SoloPDF operations."""


# ── Document parsing ────────────────────────────────────────────────


class ParseError(SoloPDFError):
    """Input is not a usable PDF document."""


class NotAPdfError(ParseError):
    """Input lacks the %PDF- header marker."""


class CorruptPdfError(ParseError):
    """PDF header is present but the page structure cannot be traversed."""


# ── Annotation ──────────────────────────────────────────────────────


class AnnotationError(SoloPDFError):
    """Annotation could not be applied."""


class NoValidPagesError(AnnotationError):
    """Page selection resolved to an empty set.

    Args:
        message: Human-readable error description.
        page_count: Number of pages in the target document.
    """

    def __init__(self, message: str, *, page_count: int = 0) -> None:
        super().__init__(message)
        self.page_count = page_count

    def __reduce__(self) -> tuple[type[NoValidPagesError], tuple[str], dict[str, int]]:
        """Preserve page_count across pickle/unpickle."""
        return (type(self), (str(self),), {"page_count": self.page_count})

    def __setstate__(self, state: dict[str, int] | None) -> None:
        if state is None:
            return
        self.page_count = state.get("page_count", 0)


class InvalidAnnotationError(AnnotationError):
    """Annotation options are out of range (font size, opacity, color...)."""


# ── Keys, signing, records ──────────────────────────────────────────


class KeyMaterialError(SoloPDFError):
    """Key material error."""


class MalformedKeyError(KeyMaterialError):
    """Key file or encoded key cannot be parsed."""


class SignError(SoloPDFError):
    """Signing failed."""


class InvalidKeyError(SignError):
    """Private key cannot be parsed or used with the signature scheme."""


class RecordError(SoloPDFError):
    """Signature record error."""


class MalformedRecordError(RecordError):
    """Signature record cannot be parsed."""


class ConfigError(SoloPDFError):
    """Configuration validation error."""
