# src/taskglyph/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..icons import lifecycle
from ..icons.icon_models import MappingConfig
from ..icons.resolver import IconMappingService
from .ports import SettingsRepo


@dataclass
class AppState:
    # Settings object (config.Settings or a test stand-in).
    settings: Any

    settings_store: SettingsRepo
    settings_key: str = lifecycle.SETTINGS_KEY

    icon_service: IconMappingService = field(init=False)

    def __post_init__(self) -> None:
        self.icon_service = IconMappingService(self.current_icon_config)

    def current_icon_config(self) -> MappingConfig:
        """Fresh snapshot of the persisted configuration (defaults on first use)."""
        return lifecycle.load(self.settings_store, self.settings_key)

    def replace_icon_config(self, config: MappingConfig) -> None:
        lifecycle.update(self.settings_store, config, self.settings_key)
