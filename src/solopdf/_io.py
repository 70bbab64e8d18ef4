"""Atomic file output shared by the API, key files, and config storage."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

__all__ = ["atomic_write"]

_logger = logging.getLogger(__name__)

# mkstemp creates 0600 files; ordinary outputs get the usual 0644
_DEFAULT_MODE = 0o644


def atomic_write(path: Path, data: bytes, mode: int | None = None) -> None:
    """Write data to a file atomically using temp file + rename.

    Readers never see a partially written file; if the process is
    interrupted mid-write the target is left untouched.

    Args:
        path: Target file path.
        data: Bytes to write.
        mode: Permission bits for the result (e.g. 0o600 for key material).
            Defaults to the existing file's mode, or 0644 for a new file.
            Ignored on Windows.
    """
    if mode is None:
        try:
            mode = stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            mode = _DEFAULT_MODE
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "wb") as f:
            fd = -1  # closed by the context manager from here on
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if os.name != "nt":
            try:
                tmp.chmod(mode)
            except OSError:
                _logger.warning("Failed to set permissions %o on %s", mode, path)
        tmp.replace(path)  # atomic on POSIX
    except BaseException:
        if fd >= 0:
            os.close(fd)
        tmp.unlink(missing_ok=True)
        raise
