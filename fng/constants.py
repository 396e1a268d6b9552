"""Core constants for the File Name Generator backend."""

from typing import Dict, List

CONFIG_FILE = "config.json"
PRESETS_FILE = "presets.json"
PRESETS_KEY = "fileNameGeneratorPresets"
LOGO_FILE = "logo.png"
APP_NAME = "File Name Generator"

DEFAULT_SHEET_ID = "1CofaP4ZhFqFBVAktX6MN48oa75YyEHDW4d8zobx3Az0"
DEFAULT_SHEET_NAMES: Dict[str, str] = {
    "hierarchy": "Client-Brand-Project",
    "medium": "Mediums",
    "material": "Materials",
}
SHEET_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:csv&sheet={sheet}"

NAME_DELIMITER = "_"
NOT_APPLICABLE = "N/A"
MAX_FILENAME_LENGTH = 220
DEFAULT_SIZE_UNIT = "px"
SIZE_UNITS: List[str] = ["px", "cm", "mm", "in"]
DEFAULT_THEME = "flatly"
STATUS_CLEAR_DELAY_MS = 2000

TEXTS: Dict[str, str] = {
    "title": "File Name Generator",
    "client": "Client",
    "brand": "Brand",
    "project": "Project",
    "medium": "Medium",
    "material": "Material",
    "size": "Size",
    "size_width": "Width",
    "size_height": "Height",
    "size_unit": "Unit",
    "variable": "Variable",
    "variable_example": "e.g. editable, v2, outlined, RGB, collect",
    "add_part": "+",
    "remove_part": "-",
    "presets_title": "Presets",
    "presets_load": "Load",
    "presets_delete": "Delete",
    "presets_save_placeholder": "New preset name",
    "presets_save_button": "Save",
    "preset_name_required": "Please enter a name for the preset.",
    "preset_save_failed": "The presets file could not be written. Your change was not kept.",
    "output_title": "GENERATED NAME",
    "output_placeholder": "...",
    "button_copy": "Copy",
    "button_reset": "Clear",
    "status_copied": "Copied!",
    "status_failed": "Copy failed!",
    "loading": "Loading data...",
    "error_loading": "Could not load the data. Check the spreadsheet URL and its sharing permissions.",
    "char_limit_warning": (
        "The file name ({length} characters) exceeds the recommended limit of {limit}. "
        "It may cause problems on some systems."
    ),
    "access_denied_title": "Access Denied",
    "access_denied_message": "You do not have permission to use this tool. Please contact the administrator.",
    "warning": "Warning",
    "error": "Error",
}
