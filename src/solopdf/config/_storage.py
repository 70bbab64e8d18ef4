"""
On-disk config storage for SoloPDF.

The config is a single JSON object in ~/.solopdf/config.json. Reads are
lenient (a missing or damaged file means "no settings"); writes are
atomic and private to the user.
"""

from __future__ import annotations

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "ConfigDict",
    "load_config",
    "load_raw_config",
    "save_config",
]

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, TypedDict, cast

from .._io import atomic_write

_logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".solopdf"
CONFIG_FILE = CONFIG_DIR / "config.json"

_DIR_MODE = 0o700
_FILE_MODE = 0o600

_STR_KEYS = ("key_file", "signature_text", "color", "position")


class ConfigDict(TypedDict, total=False):
    """Settings SoloPDF understands; every key is optional."""

    key_file: str
    signature_text: str
    font_size: float
    color: str
    position: str


def load_raw_config() -> dict[str, object]:
    """Everything stored in the config file, including keys SoloPDF does not use.

    Returns an empty dict when the file is missing, unreadable, or not a
    JSON object.
    """
    try:
        text = CONFIG_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        _logger.warning("Cannot read %s: %s", CONFIG_FILE, e)
        return {}

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        _logger.warning("Config file corrupted, ignoring: %s", e)
        return {}
    if not isinstance(data, dict):
        _logger.warning("Config file is not a JSON object, ignoring")
        return {}
    return cast("dict[str, object]", data)


def _known_settings(data: dict[str, object]) -> ConfigDict:
    """Keep the recognised settings whose values have the right type."""
    settings: ConfigDict = {}
    for key in _STR_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            settings[key] = value  # type: ignore[literal-required]
    font_size = data.get("font_size")
    if isinstance(font_size, (int, float)) and not isinstance(font_size, bool):
        if math.isfinite(font_size) and font_size > 0:
            settings["font_size"] = float(font_size)
        else:
            _logger.warning("Ignoring font_size=%r from config (must be positive)", font_size)
    return settings


def load_config() -> ConfigDict:
    """Typed view of the config file."""
    return _known_settings(load_raw_config())


def save_config(config: dict[str, object]) -> None:
    """Replace the config file with *config*.

    The directory is kept at 0700 and the file written at 0600, since the
    config names the user's signing key.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True, mode=_DIR_MODE)
    if os.name != "nt":
        try:
            CONFIG_DIR.chmod(_DIR_MODE)
        except OSError:
            _logger.warning("Cannot restrict permissions on %s", CONFIG_DIR)
    payload = json.dumps(config, indent=2, ensure_ascii=False) + "\n"
    atomic_write(CONFIG_FILE, payload.encode("utf-8"), mode=_FILE_MODE)
    _logger.debug("Saved config to %s", CONFIG_FILE)
