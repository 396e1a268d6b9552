"""Core backend implementation orchestrating all helper modules."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

import pyperclip

from . import config
from .constants import APP_NAME, DEFAULT_SIZE_UNIT, MAX_FILENAME_LENGTH, PRESETS_FILE, TEXTS
from .errors import PresetError
from .naming import GeneratedName, NameAssembler
from .presets import PresetStore
from .selection import SelectionState
from .sheets import SheetData, fetch_sheet_data

logger = logging.getLogger(__name__)


def is_access_allowed(email: Optional[str], allowed_domain: str) -> bool:
    """Check the signed-in account against the allowed e-mail domain."""
    if not allowed_domain:
        return True
    if not email:
        return False
    return email.strip().lower().endswith(allowed_domain.strip().lower())


class Backend:
    """Backend logic for the File Name Generator."""

    def __init__(self, config_path: Optional[str] = None, fetcher: Any = None) -> None:
        self.config_path = config_path or config.CONFIG_FILE
        self.config_data: Dict[str, Any] = config.load_main_config(self.config_path)
        self.load_error: Optional[str] = None
        self.data_loaded = False

        self.max_length: int = int(self.config_data.get("max_filename_length", MAX_FILENAME_LENGTH))
        self.default_unit: str = self.config_data.get("default_size_unit") or DEFAULT_SIZE_UNIT
        self.size_units: List[str] = list(self.config_data.get("size_units") or [self.default_unit])

        self.assembler = NameAssembler(max_length=self.max_length, default_unit=self.default_unit)
        self.presets = PresetStore(
            self.config_data.get("presets_file") or PRESETS_FILE, default_unit=self.default_unit
        )

        self._fetcher = fetcher or fetch_sheet_data
        self.executor = ThreadPoolExecutor(max_workers=1)

    # ------------------------------------------------------------------
    # Configuration management
    # ------------------------------------------------------------------
    @property
    def theme(self) -> str:
        return self.config_data.get("theme", "flatly")

    @property
    def title(self) -> str:
        return TEXTS.get("title", APP_NAME)

    def access_allowed(self, email: Optional[str] = None) -> bool:
        if email is None:
            email = self.config_data.get("account_email", "")
        return is_access_allowed(email, self.config_data.get("allowed_domain", ""))

    # ------------------------------------------------------------------
    # Data loading
    # ------------------------------------------------------------------
    def load_data_async(self) -> Future[SheetData]:
        return self.executor.submit(
            self._fetcher, self.config_data["sheet_id"], self.config_data.get("sheet_names")
        )

    def apply_loaded_data(self, future: Future[SheetData]) -> bool:
        """Install the fetched data, recording a load error on any failure."""
        try:
            data = future.result()
        except Exception as exc:
            logger.error("Data load failed: %s", exc)
            self.load_error = TEXTS["error_loading"]
            self.data_loaded = False
            return False

        self.assembler.set_data(data.hierarchy, data.mediums, data.materials)
        self.load_error = None
        self.data_loaded = True
        logger.info(
            "Loaded %d clients, %d mediums, %d materials",
            len(data.hierarchy),
            len(data.mediums),
            len(data.materials),
        )
        return True

    def load_data(self) -> bool:
        return self.apply_loaded_data(self.load_data_async())

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    @property
    def state(self) -> SelectionState:
        return self.assembler.state

    @property
    def generated(self) -> GeneratedName:
        return self.assembler.generated

    def set_field(self, field_name: str, value: Any) -> GeneratedName:
        return self.assembler.set_field(field_name, value)

    def set_text_part(self, index: int, value: str) -> GeneratedName:
        return self.assembler.set_text_part(index, value)

    def add_text_part(self) -> GeneratedName:
        return self.assembler.add_text_part()

    def remove_text_part(self, index: int) -> GeneratedName:
        return self.assembler.remove_text_part(index)

    def reset_selection(self) -> GeneratedName:
        return self.assembler.reset()

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------
    def get_preset_names(self) -> List[str]:
        return self.presets.names()

    def save_preset(self, name: str) -> Tuple[bool, str]:
        try:
            preset = self.presets.save(name, self.state)
        except PresetError as exc:
            logger.warning("Preset %r not saved: %s", name, exc)
            if not (name or "").strip():
                return False, TEXTS["preset_name_required"]
            return False, TEXTS["preset_save_failed"]
        logger.info("Saved preset %r", preset.name)
        return True, preset.name

    def load_preset(self, name: str) -> bool:
        snapshot = self.presets.load(name)
        if snapshot is None:
            return False
        self.assembler.restore(snapshot)
        logger.info("Loaded preset %r", name)
        return True

    def delete_preset(self, name: str) -> Tuple[bool, str]:
        try:
            removed = self.presets.delete(name)
        except PresetError as exc:
            logger.warning("Preset %r not deleted: %s", name, exc)
            return False, TEXTS["preset_save_failed"]
        return removed, name

    # ------------------------------------------------------------------
    # Clipboard
    # ------------------------------------------------------------------
    def copy_generated_name(self) -> Tuple[bool, str]:
        generated = self.generated
        if not generated.can_copy:
            return False, TEXTS["status_failed"]
        try:
            pyperclip.copy(generated.text)
        except pyperclip.PyperclipException as exc:
            logger.warning("Clipboard copy failed: %s", exc)
            return False, TEXTS["status_failed"]
        return True, TEXTS["status_copied"]

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------
    def shutdown(self) -> None:
        self.executor.shutdown(wait=False)


__all__ = ["Backend", "is_access_allowed", "APP_NAME"]
