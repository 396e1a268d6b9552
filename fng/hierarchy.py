"""Parsing of the spreadsheet CSV exports into lookup structures."""
from __future__ import annotations

import csv
import re
from dataclasses import dataclass, field
from typing import Dict, List

from .constants import NOT_APPLICABLE

COMMENT_PREFIX = '"#'

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass
class Project:
    name: str
    abbr: str


@dataclass
class Brand:
    abbr: str
    projects: List[Project] = field(default_factory=list)


@dataclass
class Client:
    abbr: str
    brands: Dict[str, Brand] = field(default_factory=dict)


@dataclass
class ListItem:
    """A medium or material entry."""

    name: str
    abbr: str


Hierarchy = Dict[str, Client]
LookupList = List[ListItem]


def split_rows(text: str) -> List[List[str]]:
    """Split CSV text into trimmed rows, dropping the header, blank rows and comments."""
    lines = _LINE_SPLIT.split(text.strip())[1:]
    rows: List[List[str]] = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        # A single line never spans records here, so each one is parsed on its own.
        parsed = next(csv.reader([line], skipinitialspace=True), [])
        rows.append([value.strip() for value in parsed])
    return rows


def _column(row: List[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def parse_hierarchy(text: str) -> Hierarchy:
    """Build the client -> brand -> project lookup from the hierarchy sheet.

    Columns are positional: client name, client abbreviation, brand name,
    brand abbreviation, project name, project abbreviation. The first row
    that mentions a client or brand fixes its abbreviation; projects are kept
    in order of appearance without de-duplication.
    """
    data: Hierarchy = {}
    for row in split_rows(text):
        client_name, client_abbr, brand_name, brand_abbr, project_name, project_abbr = (
            _column(row, index) for index in range(6)
        )
        if not client_name:
            continue

        client = data.get(client_name)
        if client is None:
            client = data[client_name] = Client(abbr=client_abbr or client_name)

        if brand_name and brand_name not in client.brands:
            client.brands[brand_name] = Brand(abbr=brand_abbr or brand_name)

        if project_name and project_name.upper() != NOT_APPLICABLE and brand_name:
            client.brands[brand_name].projects.append(
                Project(name=project_name, abbr=project_abbr or project_name)
            )
    return data


def parse_list_data(text: str) -> LookupList:
    """Parse a two column (name, abbreviation) sheet such as mediums or materials."""
    items: LookupList = []
    for row in split_rows(text):
        name = _column(row, 0)
        if not name:
            continue
        items.append(ListItem(name=name, abbr=_column(row, 1) or name))
    return items
