"""
User configuration.

Import from this package rather than from the individual submodules.
"""

from __future__ import annotations

from ._storage import CONFIG_DIR, CONFIG_FILE, load_config, save_config
from .config import (
    get_annotation_defaults,
    get_config_path,
    get_key_file,
    get_signature_text,
    reset_all,
    update_config,
)

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "get_annotation_defaults",
    "get_config_path",
    "get_key_file",
    "get_signature_text",
    "load_config",
    "reset_all",
    "save_config",
    "update_config",
]
