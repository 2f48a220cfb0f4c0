"""Tests for project state persistence."""

import json

import pytest

from cadastre.config import StorageConfig
from cadastre.exceptions import ProjectStoreError, StoreQuotaExceededError
from cadastre.storage import ProjectStore

LANDS = {
    "4479031021100010000": {"area_sqm": 1234.5, "perimeter_m": 150.2, "owner_note": "운곡면"},
    "4479031021100020000": {"area_sqm": 880.0, "perimeter_m": 120.0},
}


@pytest.fixture()
def store(tmp_path):
    return ProjectStore(StorageConfig(
        quick_store_path=str(tmp_path / "state" / "project_state.json"),
        quick_store_max_bytes=10_000,
    ))


def test_save_and_load_state(store):
    saved = store.save_state("Ungok", LANDS)

    loaded = store.load_state()

    assert loaded is not None
    assert loaded.project_name == "Ungok"
    assert loaded.lands == LANDS
    assert loaded.updated_at == saved.updated_at


def test_load_without_state(store):
    assert store.load_state() is None


def test_load_corrupt_state(store, tmp_path):
    path = tmp_path / "state" / "project_state.json"
    path.parent.mkdir(parents=True)
    path.write_text("{broken", encoding="utf-8")

    assert store.load_state() is None


def test_quota_exceeded(store):
    lands = {str(i): {"note": "x" * 100} for i in range(200)}

    with pytest.raises(StoreQuotaExceededError) as exc_info:
        store.save_state("Big", lands)

    assert exc_info.value.limit_bytes == 10_000
    assert exc_info.value.size_bytes > 10_000
    assert store.load_state() is None


def test_export_has_no_size_limit(store, tmp_path):
    from cadastre.models import ProjectState

    lands = {str(i): {"note": "x" * 100} for i in range(200)}
    state = ProjectState(project_name="Big", lands=lands)

    path = store.export_project(state, str(tmp_path / "exports" / "big.json"))

    assert store.import_project(path).lands == lands


def test_export_is_pretty_printed(store, tmp_path):
    state = store.save_state("Ungok", LANDS)

    path = store.export_project(state, str(tmp_path / "ungok.json"))

    text = (tmp_path / "ungok.json").read_text(encoding="utf-8")
    assert "\n  " in text
    assert json.loads(text)["project_name"] == "Ungok"
    assert path == str(tmp_path / "ungok.json")


def test_import_missing_file(store, tmp_path):
    with pytest.raises(ProjectStoreError):
        store.import_project(str(tmp_path / "missing.json"))


def test_import_not_a_project(store, tmp_path):
    path = tmp_path / "other.json"
    path.write_text(json.dumps({"lands": {}}), encoding="utf-8")

    with pytest.raises(ProjectStoreError):
        store.import_project(str(path))


def test_clear_state(store):
    store.save_state("Ungok", LANDS)

    store.clear_state()

    assert store.load_state() is None
