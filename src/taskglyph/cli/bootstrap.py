# src/taskglyph/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (settings store).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..icons.lifecycle import SETTINGS_KEY
from ..settings.settings_store import SettingsStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.settings_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.export_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(
        settings=settings,
        settings_store=SettingsStore(settings.settings_db_path),
        settings_key=getattr(settings, "settings_key", SETTINGS_KEY),
    )
    logger.debug("AppState created (settings_db=%s).", settings.settings_db_path)
    return state
