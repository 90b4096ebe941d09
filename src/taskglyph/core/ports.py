# src/taskglyph/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The icon core depends on Protocols instead of concrete implementations.
This keeps the settings storage swappable and makes testing easier.
"""

from typing import Any, Protocol

SettingsDocument = dict[str, Any]
# JSON-shaped document, e.g. {"primaryIconSource": "Status", "statusIcons": {...}, ...}.


class SettingsRepo(Protocol):
    """Whole-document key-value persistence (load/save are atomic per key)."""

    def load_document(self, key: str) -> SettingsDocument | None: ...
    def save_document(self, key: str, document: SettingsDocument) -> None: ...
