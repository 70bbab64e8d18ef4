"""Core document, key, signing, and verification operations."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from ..errors import SoloPDFError

if TYPE_CHECKING:
    import types

__all__ = ["require_pikepdf", "utc_timestamp"]


def require_pikepdf() -> types.ModuleType:
    """Lazily import pikepdf to avoid loading the C extension at startup.

    pikepdf is a required dependency; this defers the import for
    startup performance, not optionality.
    """
    try:
        import pikepdf
    except ImportError as exc:
        raise SoloPDFError(
            "pikepdf is required for this operation.\nInstall with: pip install pikepdf"
        ) from exc
    else:
        return pikepdf


def utc_timestamp() -> str:
    """Current time as ISO-8601 UTC with second precision, e.g. 2024-05-01T12:00:00+00:00."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds")
