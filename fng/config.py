"""Configuration and logging helpers."""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from .constants import (
    CONFIG_FILE,
    DEFAULT_SHEET_ID,
    DEFAULT_SHEET_NAMES,
    DEFAULT_SIZE_UNIT,
    DEFAULT_THEME,
    MAX_FILENAME_LENGTH,
    PRESETS_FILE,
    SIZE_UNITS,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the application."""
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)


def load_json_config(filepath: str, default_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Load a JSON object from disk, falling back to defaults when absent or unreadable."""
    if os.path.exists(filepath):
        try:
            with open(filepath, "r", encoding="utf-8") as handle:
                data = json.load(handle)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring %s: top-level value is not an object", filepath)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s: %s", filepath, exc)

    return dict(default_data) if default_data is not None else {}


def save_json_config(filepath: str, data: Dict[str, Any]) -> bool:
    """Persist a JSON object to disk."""
    try:
        with open(filepath, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
        return True
    except (OSError, TypeError) as exc:
        logger.error("Could not write %s: %s", filepath, exc)
        return False


def default_main_config() -> Dict[str, Any]:
    return {
        "sheet_id": DEFAULT_SHEET_ID,
        "sheet_names": dict(DEFAULT_SHEET_NAMES),
        "max_filename_length": MAX_FILENAME_LENGTH,
        "default_size_unit": DEFAULT_SIZE_UNIT,
        "size_units": list(SIZE_UNITS),
        "theme": DEFAULT_THEME,
        "allowed_domain": "",
        "account_email": "",
        "presets_file": PRESETS_FILE,
        "log_level": "INFO",
    }


def load_main_config(filepath: str = CONFIG_FILE) -> Dict[str, Any]:
    """Load the main application configuration merged over the defaults."""
    config = default_main_config()
    stored = load_json_config(filepath)
    sheet_names = stored.pop("sheet_names", None)
    config.update(stored)
    if isinstance(sheet_names, dict):
        config["sheet_names"].update(sheet_names)
    return config
