"""Selection state and the cascading field transitions."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List

from .constants import DEFAULT_SIZE_UNIT
from .hierarchy import Hierarchy, Project

CLIENT = "client"
BRAND = "brand"
PROJECT = "project"
MEDIUM = "medium"
MATERIAL = "material"
SIZE_WIDTH = "size_width"
SIZE_HEIGHT = "size_height"
SIZE_UNIT = "size_unit"
CUSTOM_TEXT_PARTS = "custom_text_parts"

# Fields cleared when the key field changes, in cascade order.
DEPENDENTS: Dict[str, tuple] = {
    CLIENT: (BRAND, PROJECT),
    BRAND: (PROJECT,),
}


def _default_parts() -> List[str]:
    return [""]


@dataclass
class SelectionState:
    """Current values of every form field."""

    client: str = ""
    brand: str = ""
    project: str = ""
    medium: str = ""
    material: str = ""
    size_width: str = ""
    size_height: str = ""
    size_unit: str = DEFAULT_SIZE_UNIT
    custom_text_parts: List[str] = field(default_factory=_default_parts)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Dict[str, Any], default_unit: str = DEFAULT_SIZE_UNIT) -> "SelectionState":
        """Build a state from stored values, tolerating missing or odd entries."""
        kwargs: Dict[str, Any] = {}
        for item in fields(cls):
            if item.name == CUSTOM_TEXT_PARTS:
                continue
            raw = values.get(item.name)
            kwargs[item.name] = str(raw) if raw is not None else ""
        kwargs[SIZE_UNIT] = kwargs[SIZE_UNIT] or default_unit

        parts = values.get(CUSTOM_TEXT_PARTS)
        if isinstance(parts, list) and parts:
            kwargs[CUSTOM_TEXT_PARTS] = [str(part) if part is not None else "" for part in parts]
        else:
            kwargs[CUSTOM_TEXT_PARTS] = _default_parts()
        return cls(**kwargs)


FIELD_NAMES = tuple(item.name for item in fields(SelectionState))


def apply_change(state: SelectionState, field_name: str, value: Any) -> SelectionState:
    """Return a new state with ``field_name`` set and its dependents cleared.

    Setting the client clears brand and project, setting the brand clears
    the project; every other field is set on its own.
    """
    if field_name not in FIELD_NAMES:
        raise ValueError(f"Unknown selection field: {field_name!r}")

    if field_name == CUSTOM_TEXT_PARTS:
        parts = list(value) if value else _default_parts()
        return replace(state, custom_text_parts=parts)

    changes: Dict[str, Any] = {field_name: value or ""}
    for dependent in DEPENDENTS.get(field_name, ()):
        changes[dependent] = ""
    return replace(state, custom_text_parts=list(state.custom_text_parts), **changes)


def available_brands(hierarchy: Hierarchy, client: str) -> List[str]:
    entry = hierarchy.get(client) if client else None
    return list(entry.brands) if entry else []


def available_projects(hierarchy: Hierarchy, client: str, brand: str) -> List[Project]:
    if not client or not brand:
        return []
    entry = hierarchy.get(client)
    if entry is None or brand not in entry.brands:
        return []
    return list(entry.brands[brand].projects)
