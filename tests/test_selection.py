import pytest

from fng.hierarchy import Project
from fng.selection import SelectionState, apply_change, available_brands, available_projects


def _selected():
    return SelectionState(client="Acme", brand="Nova", project="Launch", medium="Digital", material="PNG")


def test_setting_client_clears_brand_and_project():
    state = apply_change(_selected(), "client", "Globex")
    assert (state.client, state.brand, state.project) == ("Globex", "", "")
    assert state.medium == "Digital"


def test_setting_brand_clears_project_only():
    state = apply_change(_selected(), "brand", "Orbit")
    assert (state.client, state.brand, state.project) == ("Acme", "Orbit", "")


@pytest.mark.parametrize(
    "field_name, value",
    [("medium", "Print"), ("material", "Vinyl"), ("size_width", "10"), ("custom_text_parts", ["v2"])],
)
def test_independent_fields_do_not_cascade(field_name, value):
    state = apply_change(_selected(), field_name, value)
    assert (state.client, state.brand, state.project) == ("Acme", "Nova", "Launch")
    assert getattr(state, field_name) == value


def test_apply_change_returns_new_state():
    original = _selected()
    apply_change(original, "client", "Globex")
    assert original.client == "Acme"


def test_empty_text_parts_keep_one_slot():
    assert apply_change(_selected(), "custom_text_parts", []).custom_text_parts == [""]


def test_unknown_field_is_rejected():
    with pytest.raises(ValueError):
        apply_change(_selected(), "colour", "red")


def test_option_sets(hierarchy):
    assert available_brands(hierarchy, "Acme") == ["Nova", "Orbit"]
    assert available_brands(hierarchy, "Unknown") == []
    assert available_brands(hierarchy, "") == []
    assert available_projects(hierarchy, "Globex", "Nova") == [Project("Summer", "SUM")]
    assert available_projects(hierarchy, "Acme", "") == []
    assert available_projects(hierarchy, "Acme", "Missing") == []


def test_from_dict_fills_missing_values():
    state = SelectionState.from_dict({"client": "Acme", "custom_text_parts": None}, default_unit="cm")
    assert state == SelectionState(client="Acme", size_unit="cm", custom_text_parts=[""])


def test_dict_round_trip_preserves_state():
    state = SelectionState(client="Acme", size_width="10", custom_text_parts=["a", "b"])
    assert SelectionState.from_dict(state.to_dict()) == state
