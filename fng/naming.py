"""Name assembly from the current selection."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .constants import MAX_FILENAME_LENGTH, NAME_DELIMITER, NOT_APPLICABLE
from .hierarchy import Hierarchy, LookupList, Project
from .selection import (
    BRAND,
    CLIENT,
    CUSTOM_TEXT_PARTS,
    FIELD_NAMES,
    PROJECT,
    SelectionState,
    apply_change,
    available_brands,
    available_projects,
)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class GeneratedName:
    text: str
    max_length: int = MAX_FILENAME_LENGTH

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def too_long(self) -> bool:
        return self.length > self.max_length

    @property
    def can_copy(self) -> bool:
        return bool(self.text) and not self.too_long


def lookup_abbr(value: str, items: Iterable[Any]) -> str:
    """Return the upper-cased abbreviation of ``value`` in ``items``, or the value itself."""
    for item in items:
        if item.name == value:
            return (item.abbr or value).upper()
    return value.upper()


def client_abbr(hierarchy: Hierarchy, client: str) -> str:
    entry = hierarchy.get(client)
    return ((entry.abbr if entry else "") or client).upper()


def brand_abbr(hierarchy: Hierarchy, client: str, brand: str) -> str:
    entry = hierarchy.get(client)
    found = entry.brands.get(brand) if entry else None
    return ((found.abbr if found else "") or brand).upper()


def format_part(part: Optional[str]) -> str:
    """Trim, hyphenate internal whitespace and upper-case a free-text part."""
    return _WHITESPACE.sub("-", (part or "").strip()).upper()


def size_token(width: str, height: str, unit: str) -> str:
    width = (width or "").strip()
    height = (height or "").strip()
    if not width or not height:
        return ""
    return f"{width}x{height}{(unit or '').strip()}".upper()


def join_components(components: Iterable[str]) -> str:
    """Join non-empty components that are not "N/A" with the delimiter.

    Components are split on the delimiter first, so each piece of a
    free-text part such as ``a_n/a`` is checked on its own.
    """
    pieces = []
    for component in components:
        for piece in (component or "").split(NAME_DELIMITER):
            if piece and piece.upper() != NOT_APPLICABLE:
                pieces.append(piece)
    return NAME_DELIMITER.join(pieces)


def build_name(
    state: SelectionState,
    hierarchy: Hierarchy,
    mediums: LookupList,
    materials: LookupList,
    projects: Optional[List[Project]] = None,
) -> str:
    """Render the file name for ``state``.

    Component order: client, brand, project, medium, material, size, then
    the free-text parts. ``projects`` is the current project option set; it
    is derived from the state when omitted.
    """
    if projects is None:
        projects = available_projects(hierarchy, state.client, state.brand)
    components = [
        client_abbr(hierarchy, state.client),
        brand_abbr(hierarchy, state.client, state.brand),
        lookup_abbr(state.project, projects),
        lookup_abbr(state.medium, mediums),
        lookup_abbr(state.material, materials),
        size_token(state.size_width, state.size_height, state.size_unit),
    ]
    components.extend(format_part(part) for part in state.custom_text_parts)
    return join_components(components)


class NameAssembler:
    """Owns the selection state and recomputes the name after every change."""

    def __init__(
        self,
        hierarchy: Optional[Hierarchy] = None,
        mediums: Optional[LookupList] = None,
        materials: Optional[LookupList] = None,
        max_length: int = MAX_FILENAME_LENGTH,
        default_unit: Optional[str] = None,
    ) -> None:
        self.hierarchy: Hierarchy = hierarchy or {}
        self.mediums: LookupList = mediums or []
        self.materials: LookupList = materials or []
        self.max_length = max_length
        self.default_unit = default_unit
        self.state = self._fresh_state()
        self.brand_options: List[str] = []
        self.project_options: List[Project] = []
        self.generated = GeneratedName("", max_length)
        self._refresh_options()
        self._recompute()

    def _fresh_state(self) -> SelectionState:
        if self.default_unit is None:
            return SelectionState()
        return SelectionState(size_unit=self.default_unit)

    # ------------------------------------------------------------------
    # Lookup data
    # ------------------------------------------------------------------
    def set_data(self, hierarchy: Hierarchy, mediums: LookupList, materials: LookupList) -> None:
        self.hierarchy = hierarchy
        self.mediums = mediums
        self.materials = materials
        self._refresh_options()
        self._recompute()

    @property
    def client_options(self) -> List[str]:
        return list(self.hierarchy)

    @property
    def project_names(self) -> List[str]:
        return [project.name for project in self.project_options]

    @property
    def medium_names(self) -> List[str]:
        return [item.name for item in self.mediums]

    @property
    def material_names(self) -> List[str]:
        return [item.name for item in self.materials]

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------
    def set_field(self, field_name: str, value: Any) -> GeneratedName:
        self.state = apply_change(self.state, field_name, value)
        if field_name in (CLIENT, BRAND):
            self._refresh_options()
        return self._recompute()

    def set_text_part(self, index: int, value: str) -> GeneratedName:
        parts = list(self.state.custom_text_parts)
        if not 0 <= index < len(parts):
            raise IndexError(f"No text part at index {index}")
        parts[index] = value
        return self.set_field(CUSTOM_TEXT_PARTS, parts)

    def add_text_part(self, value: str = "") -> GeneratedName:
        return self.set_field(CUSTOM_TEXT_PARTS, list(self.state.custom_text_parts) + [value])

    def remove_text_part(self, index: int) -> GeneratedName:
        parts = list(self.state.custom_text_parts)
        if not 0 <= index < len(parts):
            raise IndexError(f"No text part at index {index}")
        parts.pop(index)
        # An empty list is normalised back to a single blank slot.
        return self.set_field(CUSTOM_TEXT_PARTS, parts)

    def reset(self) -> GeneratedName:
        self.state = self._fresh_state()
        self._refresh_options()
        return self._recompute()

    def restore(self, snapshot: SelectionState) -> GeneratedName:
        """Apply a stored snapshot, replaying the cascade parents first.

        Client is applied before brand and brand before project so each
        dependent value lands after its parent has already cleared it.
        """
        state = self._fresh_state()
        for name in (CLIENT, BRAND, PROJECT):
            state = apply_change(state, name, getattr(snapshot, name))
        for name in FIELD_NAMES:
            if name in (CLIENT, BRAND, PROJECT):
                continue
            state = apply_change(state, name, getattr(snapshot, name))
        self.state = state
        self._refresh_options()
        return self._recompute()

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    def _refresh_options(self) -> None:
        self.brand_options = available_brands(self.hierarchy, self.state.client)
        self.project_options = available_projects(self.hierarchy, self.state.client, self.state.brand)

    def _recompute(self) -> GeneratedName:
        text = build_name(self.state, self.hierarchy, self.mediums, self.materials, self.project_options)
        self.generated = GeneratedName(text, self.max_length)
        return self.generated
