# tests/test_lifecycle.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskglyph.cli.commands import registry
from taskglyph.icons import lifecycle
from taskglyph.icons.icon_models import IconMap, IconSource, MappingConfig

from .fakes import BrokenSettingsRepo, FakeSettingsRepo


def _custom_config() -> MappingConfig:
    config = MappingConfig(primary_source=IconSource.PROJECT)
    config.project_icons = IconMap({"Client": "\uE716", "home": "\uE80F"})
    config.tag_icons["odd"] = "\uE001"
    config.default_icon = "\uE734"
    return config


def test_document_shape_and_key_order() -> None:
    doc = lifecycle.to_document(MappingConfig())
    assert list(doc) == [
        "primaryIconSource",
        "statusIcons",
        "priorityIcons",
        "projectIcons",
        "contextIcons",
        "tagIcons",
        "defaultIcon",
    ]
    assert doc["primaryIconSource"] == "Status"
    assert doc["defaultIcon"] == "\uE73A"
    assert doc["projectIcons"] == {"work": "\uE821", "home": "\uE80F", "personal": "\uE77B"}


def test_document_round_trip() -> None:
    config = _custom_config()
    assert lifecycle.from_document(lifecycle.to_document(config)) == config


def test_from_document_missing_fields_keep_defaults() -> None:
    config = lifecycle.from_document({"primaryIconSource": "tag", "tagIcons": {"x": "Star"}})
    assert config.primary_source is IconSource.TAG
    assert config.tag_icons == {"x": "\uE734"}
    assert config.status_icons == MappingConfig().status_icons
    assert config.default_icon == "\uE73A"


def test_from_document_normalizes_and_drops_bad_icons() -> None:
    doc = {"contextIcons": {"car": "Car", "web": "E774", "esc": "\\uE717", "bad": "nope", " ": "Car"}}
    config = lifecycle.from_document(doc)
    assert config.context_icons == {"car": "\uE804", "web": "\uE774", "esc": "\uE717"}


@pytest.mark.parametrize(
    "doc",
    [
        [],
        "text",
        {"primaryIconSource": 3},
        {"primaryIconSource": "Due"},
        {"statusIcons": ["todo"]},
        {"tagIcons": {"x": 5}},
        {"defaultIcon": "not-an-icon"},
        {"defaultIcon": None},
    ],
)
def test_from_document_rejects_invalid_structure(doc) -> None:
    with pytest.raises(lifecycle.ConfigDocumentError):
        lifecycle.from_document(doc)


def test_config_document_error_is_value_error() -> None:
    assert issubclass(lifecycle.ConfigDocumentError, ValueError)


def test_clone_and_reset() -> None:
    config = _custom_config()
    copy = lifecycle.clone(config)
    copy.project_icons["new"] = "\uE002"
    assert "new" not in config.project_icons

    assert lifecycle.reset_to_defaults() == MappingConfig()
    assert lifecycle.reset_to_defaults() is not lifecycle.reset_to_defaults()


# ---- store ----


def test_load_returns_defaults_on_first_use() -> None:
    assert lifecycle.load(FakeSettingsRepo()) == MappingConfig()


def test_load_returns_defaults_when_store_fails() -> None:
    assert lifecycle.load(BrokenSettingsRepo()) == MappingConfig()


def test_load_returns_defaults_for_invalid_document() -> None:
    repo = FakeSettingsRepo()
    repo.save_document(lifecycle.SETTINGS_KEY, {"primaryIconSource": "Nope"})
    assert lifecycle.load(repo) == MappingConfig()


def test_update_then_load() -> None:
    repo = FakeSettingsRepo()
    config = _custom_config()

    lifecycle.update(repo, config)

    assert repo.saves == 1
    assert lifecycle.load(repo) == config
    assert lifecycle.load(repo, "otherKey") == MappingConfig()


def test_update_propagates_store_errors() -> None:
    with pytest.raises(OSError):
        lifecycle.update(BrokenSettingsRepo(), MappingConfig())


def test_loaded_config_is_a_snapshot() -> None:
    repo = FakeSettingsRepo()
    lifecycle.update(repo, MappingConfig())

    loaded = lifecycle.load(repo)
    loaded.status_icons["todo"] = "\uE001"

    assert lifecycle.load(repo).status_icons["todo"] == "\uE73A"


# ---- export / import ----


def test_export_then_import(tmp_path: Path) -> None:
    path = tmp_path / "out" / "icons.json"
    config = _custom_config()

    assert lifecycle.export_to(path, config) is True
    assert path.is_file()
    assert not path.with_name("icons.json.tmp").exists()

    assert lifecycle.import_from(path) == config


def test_export_writes_readable_json(tmp_path: Path) -> None:
    path = tmp_path / "icons.json"
    lifecycle.export_to(path, MappingConfig())
    doc = json.loads(path.read_text("utf-8"))
    assert doc["primaryIconSource"] == "Status"
    assert doc["statusIcons"]["todo"] == "\uE73A"


def test_import_missing_file(tmp_path: Path) -> None:
    assert lifecycle.import_from(tmp_path / "missing.json") is None


def test_import_corrupt_json(tmp_path: Path) -> None:
    path = tmp_path / "icons.json"
    path.write_text("{not json", "utf-8")
    assert lifecycle.import_from(path) is None


def test_import_wrong_types(tmp_path: Path) -> None:
    path = tmp_path / "icons.json"
    path.write_text(json.dumps({"statusIcons": "todo=Checkbox"}), "utf-8")
    assert lifecycle.import_from(path) is None


def test_import_accepts_friendly_spellings(tmp_path: Path) -> None:
    path = tmp_path / "icons.json"
    path.write_text(
        json.dumps({"primaryIconSource": "Context", "contextIcons": {"car": "Car"}, "defaultIcon": "E734"}),
        "utf-8",
    )
    config = lifecycle.import_from(path)
    assert config is not None
    assert config.primary_source is IconSource.CONTEXT
    assert config.context_icons == {"car": "\uE804"}
    assert config.default_icon == "\uE734"


def test_export_to_unwritable_path_returns_false(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", "utf-8")
    assert lifecycle.export_to(blocker / "icons.json", MappingConfig()) is False


@pytest.mark.parametrize("target", ["/", "", "."])
def test_export_to_path_without_file_name_returns_false(target: str) -> None:
    assert lifecycle.export_to(target, MappingConfig()) is False


def test_export_command_reports_path_without_file_name(state) -> None:
    assert "Export failed" in (registry.handle(state, "/export /") or "")


def test_failed_export_keeps_previous_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "icons.json"
    assert lifecycle.export_to(path, MappingConfig())
    before = path.read_text("utf-8")

    def boom(config: MappingConfig) -> dict:
        raise RuntimeError("serialization failed")

    monkeypatch.setattr(lifecycle, "to_document", boom)

    assert lifecycle.export_to(path, _custom_config()) is False
    assert path.read_text("utf-8") == before
    assert not path.with_name("icons.json.tmp").exists()
