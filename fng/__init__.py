"""File Name Generator backend package."""

from .backend import Backend
from .constants import APP_NAME
from .selection import SelectionState

__all__ = ["Backend", "SelectionState", "APP_NAME"]
