import json

import pyperclip
import pytest

from fng.backend import Backend, is_access_allowed
from fng.constants import TEXTS
from fng.errors import DataLoadError
from fng.presets import PresetStore
from fng.sheets import SheetData


@pytest.fixture
def make_backend(tmp_path, hierarchy, mediums, materials):
    def factory(fetcher=None, **overrides):
        config_path = tmp_path / "config.json"
        settings = {"presets_file": str(tmp_path / "presets.json")}
        settings.update(overrides)
        config_path.write_text(json.dumps(settings), encoding="utf-8")

        def fetch(sheet_id, sheet_names):
            return SheetData(hierarchy, mediums, materials)

        backend = Backend(str(config_path), fetcher=fetcher or fetch)
        return backend

    return factory


def test_config_defaults_are_merged(make_backend):
    backend = make_backend(sheet_names={"medium": "Formats"})
    assert backend.config_data["sheet_names"]["medium"] == "Formats"
    assert backend.config_data["sheet_names"]["hierarchy"] == "Client-Brand-Project"
    assert backend.max_length == 220
    assert backend.state.size_unit == "px"


def test_load_data_installs_lookups(make_backend):
    backend = make_backend()
    assert backend.load_data()
    assert backend.data_loaded
    assert backend.assembler.client_options == ["Acme", "Globex"]


def test_load_failure_is_reported(make_backend):
    def failing(sheet_id, sheet_names):
        raise DataLoadError(TEXTS["error_loading"])

    backend = make_backend(fetcher=failing)
    assert not backend.load_data()
    assert backend.load_error == TEXTS["error_loading"]
    assert not backend.data_loaded


def test_preset_save_and_load_restore_project(make_backend):
    backend = make_backend()
    backend.load_data()
    backend.set_field("client", "Acme")
    backend.set_field("brand", "Nova")
    backend.set_field("project", "Launch")
    backend.set_text_part(0, "v2")
    assert backend.save_preset("launch") == (True, "launch")

    backend.set_field("client", "Globex")
    assert backend.load_preset("launch")
    assert (backend.state.client, backend.state.brand, backend.state.project) == ("Acme", "Nova", "Launch")
    assert backend.generated.text == "ACM_NV_LNC_V2"


def test_preset_blank_name_rejected(make_backend):
    backend = make_backend()
    success, _ = backend.save_preset("  ")
    assert not success
    assert backend.get_preset_names() == []


def test_load_unknown_preset_is_noop(make_backend):
    backend = make_backend()
    backend.load_data()
    backend.set_field("client", "Acme")
    assert not backend.load_preset("nope")
    assert backend.state.client == "Acme"


def test_copy_generated_name(make_backend, monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    backend = make_backend()
    backend.load_data()
    backend.set_field("client", "Acme")
    assert backend.copy_generated_name() == (True, TEXTS["status_copied"])
    assert copied == ["ACM"]


def test_copy_failure_is_reported(make_backend, monkeypatch):
    def broken(text):
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", broken)
    backend = make_backend()
    backend.set_field("client", "Acme")
    assert backend.copy_generated_name() == (False, TEXTS["status_failed"])


def test_copy_disabled_when_too_long(make_backend, monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    backend = make_backend(max_filename_length=5)
    backend.set_text_part(0, "abcdefgh")
    assert backend.generated.too_long
    success, _ = backend.copy_generated_name()
    assert not success
    assert copied == []


@pytest.mark.parametrize(
    "email, domain, allowed",
    [
        ("ana@bake.mx", "@bake.mx", True),
        ("ANA@Bake.MX", "@bake.mx", True),
        ("ana@other.com", "@bake.mx", False),
        ("", "@bake.mx", False),
        (None, "", True),
    ],
)
def test_is_access_allowed(email, domain, allowed):
    assert is_access_allowed(email, domain) is allowed


def test_backend_access_uses_configured_account(make_backend):
    backend = make_backend(allowed_domain="@bake.mx", account_email="sam@bake.mx")
    assert backend.access_allowed()
    assert not backend.access_allowed("sam@elsewhere.com")


def test_preset_write_failure_is_reported(make_backend, tmp_path):
    presets_file = str(tmp_path / "missing-dir" / "presets.json")
    backend = make_backend(presets_file=presets_file)
    backend.set_field("client", "Acme")
    assert backend.save_preset("kit") == (False, TEXTS["preset_save_failed"])
    assert backend.get_preset_names() == []
    assert PresetStore(presets_file).names() == []


def test_delete_preset(make_backend):
    backend = make_backend()
    backend.save_preset("kit")
    assert backend.delete_preset("kit") == (True, "kit")
    assert backend.delete_preset("kit") == (False, "kit")
