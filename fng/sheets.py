"""Fetching the published spreadsheet tabs."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import quote

import requests

from .constants import DEFAULT_SHEET_NAMES, SHEET_URL_TEMPLATE, TEXTS
from .errors import DataLoadError
from .hierarchy import Hierarchy, LookupList, parse_hierarchy, parse_list_data

logger = logging.getLogger(__name__)


@dataclass
class SheetData:
    """Everything the generator needs from the spreadsheet."""

    hierarchy: Hierarchy = field(default_factory=dict)
    mediums: LookupList = field(default_factory=list)
    materials: LookupList = field(default_factory=list)


def build_sheet_url(sheet_id: str, sheet_name: str) -> str:
    return SHEET_URL_TEMPLATE.format(sheet_id=sheet_id, sheet=quote(sheet_name, safe=""))


def fetch_sheet_text(session: requests.Session, url: str) -> str:
    response = session.get(url)
    response.raise_for_status()
    return response.text


def fetch_sheet_data(
    sheet_id: str,
    sheet_names: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
) -> SheetData:
    """Fetch the three tabs concurrently and parse them.

    All three requests must succeed; any failure raises a single
    ``DataLoadError`` carrying the generic loading message.
    """
    names = dict(DEFAULT_SHEET_NAMES)
    if sheet_names:
        names.update(sheet_names)

    if session is None:
        with requests.Session() as own_session:
            return fetch_sheet_data(sheet_id, sheet_names, own_session)

    keys = ("hierarchy", "medium", "material")
    urls = {key: build_sheet_url(sheet_id, names[key]) for key in keys}
    logger.info("Fetching sheets %s from spreadsheet %s", ", ".join(names[key] for key in keys), sheet_id)

    with ThreadPoolExecutor(max_workers=len(keys)) as executor:
        futures = {key: executor.submit(fetch_sheet_text, session, urls[key]) for key in keys}
        try:
            texts = {key: future.result() for key, future in futures.items()}
        except requests.RequestException as exc:
            logger.error("Sheet fetch failed: %s", exc)
            raise DataLoadError(TEXTS["error_loading"]) from exc

    return SheetData(
        hierarchy=parse_hierarchy(texts["hierarchy"]),
        mediums=parse_list_data(texts["medium"]),
        materials=parse_list_data(texts["material"]),
    )
