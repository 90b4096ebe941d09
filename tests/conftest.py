# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskglyph.core.state import AppState
from taskglyph.settings.settings_store import SettingsStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskglyph-test",
        log_level="DEBUG",
        console_enabled=False,
        # Paths (tmp per test run)
        data_dir=tmp_path,
        settings_db_path=tmp_path / "settings.sqlite3",
        export_path=tmp_path / "tasknotes-icon-mappings.json",
        settings_key="iconMappings",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> SettingsStore:
    return SettingsStore(settings.settings_db_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: SettingsStore) -> AppState:
    """
    AppState wired with a real SQLite settings store.

    NOTE: the store's whole-document semantics are part of what we test.
    """
    return AppState(
        settings=settings,
        settings_store=store,
        settings_key=settings.settings_key,
    )
