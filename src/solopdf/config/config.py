"""
Configuration management for SoloPDF.

Stores the default key file, the visible signature text, and overlay
preferences in ~/.solopdf/config.json. Environment variables override
the file for the key file and signature text.
"""

from __future__ import annotations

__all__ = [
    "get_annotation_defaults",
    "get_config_path",
    "get_key_file",
    "get_signature_text",
    "reset_all",
    "update_config",
]

import logging
import math
import os
from pathlib import Path

from ..constants import (
    DEFAULT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_POSITION,
    DEFAULT_SIGNATURE_TEXT,
    ENV_KEY_FILE,
    ENV_SIGNATURE_TEXT,
)
from ..core.appearance import parse_color
from ..core.pdf import resolve_position
from ..errors import ConfigError, InvalidAnnotationError
from . import _storage
from ._storage import load_config, load_raw_config, save_config

_logger = logging.getLogger(__name__)

_SETTABLE_KEYS = frozenset(("key_file", "signature_text", "font_size", "color", "position"))


def get_config_path() -> Path:
    """Location of the config file (it may not exist yet)."""
    return _storage.CONFIG_FILE


# ── Resolution ───────────────────────────────────────────────────────


def get_key_file() -> Path | None:
    """
    Resolve the default key file.

    Priority: SOLOPDF_KEY_FILE env var > config file.

    Returns:
        Path with ``~`` expanded, or None if nothing is configured.
    """
    value = os.environ.get(ENV_KEY_FILE, "").strip() or load_config().get("key_file")
    if not value:
        return None
    return Path(value).expanduser()


def get_signature_text() -> str:
    """Visible signature text: SOLOPDF_SIGNATURE_TEXT env var > config > built-in default."""
    env = os.environ.get(ENV_SIGNATURE_TEXT, "").strip()
    if env:
        return env
    return load_config().get("signature_text", DEFAULT_SIGNATURE_TEXT)


def get_annotation_defaults() -> dict[str, float | str]:
    """Overlay defaults from config: ``font_size``, ``color`` and ``position``."""
    config = load_config()
    return {
        "font_size": config.get("font_size", DEFAULT_FONT_SIZE),
        "color": config.get("color", DEFAULT_COLOR),
        "position": config.get("position", DEFAULT_POSITION),
    }


# ── Updates ──────────────────────────────────────────────────────────


def _validate_value(key: str, value: object) -> object:
    """Check a single setting, returning the value to store."""
    if key == "font_size":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"font_size must be a number, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise ConfigError(f"font_size must be positive, got {value}")
        return float(value)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key} must be a non-empty string")
    try:
        if key == "color":
            parse_color(value)
        elif key == "position":
            return resolve_position(value)
    except InvalidAnnotationError as e:
        raise ConfigError(str(e)) from e
    return value


def update_config(values: dict[str, object]) -> None:
    """Validate and merge *values* into the config file.

    Unknown keys already in the file are preserved. A value of None
    removes that key.

    Raises:
        ConfigError: If a key is not settable or a value is invalid.
    """
    unknown = set(values) - _SETTABLE_KEYS
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(sorted(unknown))}")

    config = load_raw_config()
    for key, value in values.items():
        if value is None:
            config.pop(key, None)
        else:
            config[key] = _validate_value(key, value)
    save_config(config)
    _logger.info("Updated config: %s", ", ".join(sorted(values)))


def reset_all() -> None:
    """Clear every saved setting."""
    save_config({})
