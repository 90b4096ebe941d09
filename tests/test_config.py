# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskglyph.cli import main as cli_main
from taskglyph.cli.bootstrap import create_initial_state
from taskglyph.config import Settings
from taskglyph.icons.icon_models import MappingConfig
from taskglyph.logging_setup import LOG_FILE_NAME, _ConsoleNoiseFilter, setup_logging


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for suffix in (
        "APP_NAME",
        "LOG_LEVEL",
        "CONSOLE_ENABLED",
        "DATA_DIR",
        "SETTINGS_DB_PATH",
        "EXPORT_PATH",
        "SETTINGS_KEY",
    ):
        monkeypatch.delenv(f"TASKGLYPH_{suffix}", raising=False)


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    s = Settings.from_env()

    assert s.app_name == "taskglyph"
    assert s.console_enabled is True
    assert s.data_dir == Path(".local/taskglyph")
    assert s.settings_db_path == Path(".local/taskglyph/settings.sqlite3")
    assert s.export_path == Path(".local/taskglyph/tasknotes-icon-mappings.json")
    assert s.settings_key == "iconMappings"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("TASKGLYPH_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKGLYPH_CONSOLE_ENABLED", "off")
    monkeypatch.setenv("TASKGLYPH_SETTINGS_KEY", "  ")
    monkeypatch.setenv("TASKGLYPH_EXPORT_PATH", str(tmp_path / "x.json"))

    s = Settings.from_env()

    assert s.console_enabled is False
    assert s.settings_db_path == tmp_path / "settings.sqlite3"
    assert s.export_path == tmp_path / "x.json"
    assert s.settings_key == "iconMappings"


def test_create_initial_state(settings) -> None:
    settings.data_dir = settings.data_dir / "fresh"
    settings.settings_db_path = settings.data_dir / "db" / "settings.sqlite3"

    state = create_initial_state(settings=settings)

    assert settings.settings_db_path.is_file()
    assert state.current_icon_config() == MappingConfig()


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_noise_filter() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("taskglyph.cli.commands", logging.DEBUG))
    assert not f.filter(_record("taskglyph.settings.settings_store", logging.INFO))
    assert f.filter(_record("taskglyph.settings.settings_store", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))


def test_console_filter_hides_per_line_codec_skips() -> None:
    f = _ConsoleNoiseFilter()

    assert not f.filter(_record("taskglyph.icons.text_codec", logging.DEBUG))
    assert f.filter(_record("taskglyph.icons.text_codec", logging.INFO))
    assert f.filter(_record("taskglyph.icons.lifecycle", logging.DEBUG))
    # Prefixes match whole dotted segments only.
    assert not f.filter(_record("taskglyphx", logging.WARNING))


def test_setup_logging_writes_file_and_replaces_own_handlers(tmp_path: Path) -> None:
    root = logging.getLogger()
    old_level = root.level
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        setup_logging(log_dir=tmp_path)
        log_file = setup_logging(log_dir=tmp_path)

        assert log_file == tmp_path / LOG_FILE_NAME
        assert foreign in root.handlers
        own = [h for h in root.handlers if getattr(h, "_taskglyph_handler", False)]
        assert len(own) == 2

        logging.getLogger("taskglyph.icons.text_codec").debug("skipped line")
        for h in own:
            h.flush()
        assert "skipped line" in log_file.read_text("utf-8")
    finally:
        for h in list(root.handlers):
            if getattr(h, "_taskglyph_handler", False):
                root.removeHandler(h)
                h.close()
        root.removeHandler(foreign)
        root.setLevel(old_level)
        logging.captureWarnings(False)


def test_main_without_console_leaves_no_open_handles(settings, monkeypatch, tmp_path: Path) -> None:
    root = logging.getLogger()
    old_level = root.level
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    try:
        cli_main.main()

        # Every store call opens and closes its own connection, so the
        # database can be replaced as soon as main() returns.
        moved = tmp_path / "moved.sqlite3"
        settings.settings_db_path.replace(moved)
        assert moved.is_file()
        assert "Console disabled" in (tmp_path / LOG_FILE_NAME).read_text("utf-8")
    finally:
        for h in list(root.handlers):
            if getattr(h, "_taskglyph_handler", False):
                root.removeHandler(h)
                h.close()
        root.setLevel(old_level)
        logging.captureWarnings(False)
