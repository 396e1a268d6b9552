"""Named presets persisted in a JSON key-value file."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from . import config
from .constants import DEFAULT_SIZE_UNIT, PRESETS_FILE, PRESETS_KEY
from .errors import PresetError
from .selection import SelectionState

logger = logging.getLogger(__name__)


@dataclass
class Preset:
    name: str
    values: SelectionState

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "values": self.values.to_dict()}


class PresetStore:
    """Manage saved presets.

    The file holds a single key whose value maps preset names to presets.
    It is read once on construction and rewritten wholesale after every
    save or delete.
    """

    def __init__(self, filepath: str = PRESETS_FILE, default_unit: str = DEFAULT_SIZE_UNIT) -> None:
        self.filepath = filepath
        self.default_unit = default_unit
        self._presets: Dict[str, Preset] = self._read()

    def _read(self) -> Dict[str, Preset]:
        stored = config.load_json_config(self.filepath).get(PRESETS_KEY)
        if not isinstance(stored, dict):
            if stored is not None:
                logger.warning("Ignoring malformed presets in %s", self.filepath)
            return {}

        presets: Dict[str, Preset] = {}
        for name, entry in stored.items():
            if not isinstance(entry, dict) or not isinstance(entry.get("values"), dict):
                logger.warning("Skipping malformed preset %r", name)
                continue
            presets[name] = Preset(name, SelectionState.from_dict(entry["values"], self.default_unit))
        return presets

    def _write(self) -> bool:
        payload = {PRESETS_KEY: {name: preset.to_dict() for name, preset in self._presets.items()}}
        saved = config.save_json_config(self.filepath, payload)
        if saved:
            logger.debug("Saved %d presets to %s", len(self._presets), self.filepath)
        return saved

    def names(self) -> List[str]:
        return sorted(self._presets)

    def __len__(self) -> int:
        return len(self._presets)

    def save(self, name: str, state: SelectionState) -> Preset:
        """Store ``state`` under ``name``, replacing any preset of that name."""
        name = (name or "").strip()
        if not name:
            raise PresetError("Preset name is required")
        snapshot = SelectionState.from_dict(state.to_dict(), self.default_unit)
        previous = self._presets.get(name)
        preset = self._presets[name] = Preset(name, snapshot)
        if not self._write():
            if previous is None:
                del self._presets[name]
            else:
                self._presets[name] = previous
            raise PresetError(f"Could not write presets to {self.filepath}")
        return preset

    def load(self, name: str) -> Optional[SelectionState]:
        """Return a copy of the stored snapshot, or None for unknown names."""
        preset = self._presets.get(name)
        if preset is None:
            return None
        return SelectionState.from_dict(preset.values.to_dict(), self.default_unit)

    def delete(self, name: str) -> bool:
        if name not in self._presets:
            return False
        removed = self._presets.pop(name)
        if not self._write():
            self._presets[name] = removed
            raise PresetError(f"Could not write presets to {self.filepath}")
        return True
