"""
Common CLI helper functions for SoloPDF.

File reading with uniform error reporting, size formatting, and the
default locations derived from a command's arguments.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

__all__ = [
    "default_record_path",
    "fail",
    "format_size_kb",
    "read_text_or_exit",
    "safe_read_file",
]

_BYTES_PER_KB = 1024

# Appended to the signed output's name when --record is not given
_RECORD_SUFFIX = ".sig.json"


def format_size_kb(size_bytes: int) -> str:
    """Format a byte count as a human-readable KB string (e.g. '123.4 KB')."""
    return f"{size_bytes / _BYTES_PER_KB:.1f} KB"


def default_record_path(output_path: Path) -> Path:
    """Where ``sign`` stores the signature record: '<output>.sig.json'."""
    return output_path.with_name(output_path.name + _RECORD_SUFFIX)


def fail(message: str) -> NoReturn:
    """Print ``Error: <message>`` to stderr and exit with status 1."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def safe_read_file(path: Path, kind: str = "file") -> bytes | None:
    """
    Read a file with uniform error handling.

    Checks existence first, then reads, catching OSError.

    Args:
        path: Path to the file to read.
        kind: Descriptive name for error messages (e.g., "PDF", "key file").

    Returns:
        File contents as bytes, or None if the file doesn't exist or can't be read.
    """
    if not path.exists():
        print(f"Error: {kind} not found: {path}", file=sys.stderr)
        return None

    try:
        return path.read_bytes()
    except OSError as e:
        print(f"Error reading {kind}: {e}", file=sys.stderr)
        return None


def read_text_or_exit(path: Path, kind: str) -> str:
    """Read a UTF-8 text file (key file, signature record), exiting on failure."""
    data = safe_read_file(path, kind)
    if data is None:
        sys.exit(1)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        fail(f"{kind} is not UTF-8 text: {path}")
