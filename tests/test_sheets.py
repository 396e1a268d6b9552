import pytest
import requests

from fng.errors import DataLoadError
from fng.sheets import build_sheet_url, fetch_sheet_data

from .conftest import HIERARCHY_CSV, MATERIAL_CSV, MEDIUM_CSV


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    def get(self, url):
        self.requested.append(url)
        for sheet, response in self.pages.items():
            if url.endswith("sheet=" + sheet):
                if isinstance(response, Exception):
                    raise response
                return response
        return FakeResponse("", 404)


PAGES = {
    "Client-Brand-Project": FakeResponse(HIERARCHY_CSV),
    "Mediums": FakeResponse(MEDIUM_CSV),
    "Materials": FakeResponse(MATERIAL_CSV),
}


def test_build_sheet_url_encodes_name():
    url = build_sheet_url("abc", "Client-Brand Project")
    assert url == "https://docs.google.com/spreadsheets/d/abc/gviz/tq?tqx=out:csv&sheet=Client-Brand%20Project"


def test_fetch_sheet_data_parses_all_tabs():
    session = FakeSession(PAGES)
    data = fetch_sheet_data("abc", session=session)
    assert len(session.requested) == 3
    assert list(data.hierarchy) == ["Acme", "Globex"]
    assert [item.abbr for item in data.mediums] == ["DIG", "Print"]
    assert [item.name for item in data.materials] == ["PNG", "Vinyl, matte"]


def test_custom_sheet_names():
    pages = dict(PAGES)
    pages["Formats"] = pages.pop("Mediums")
    data = fetch_sheet_data("abc", {"medium": "Formats"}, session=FakeSession(pages))
    assert data.mediums[0].name == "Digital"


@pytest.mark.parametrize(
    "failure",
    [FakeResponse("", 500), requests.ConnectionError("offline")],
)
def test_any_failure_aborts_loading(failure):
    pages = dict(PAGES)
    pages["Materials"] = failure
    with pytest.raises(DataLoadError):
        fetch_sheet_data("abc", session=FakeSession(pages))


def test_owned_session_is_closed(monkeypatch):
    class ClosingSession(FakeSession):
        closed = False

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            self.closed = True

    session = ClosingSession(PAGES)
    monkeypatch.setattr(requests, "Session", lambda: session)
    data = fetch_sheet_data("abc")
    assert session.closed
    assert list(data.hierarchy) == ["Acme", "Globex"]
