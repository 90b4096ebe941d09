# src/taskglyph/icons/lifecycle.py

"""
Configuration lifecycle: clone, persist, export/import, reset.

Writers never patch a live configuration. They clone it, change the copy and
hand the copy to update(), which replaces the stored document as a whole.

Document shape (settings store and export file):
    {
      "primaryIconSource": "Status",
      "statusIcons": {...}, "priorityIcons": {...}, "projectIcons": {...},
      "contextIcons": {...}, "tagIcons": {...},
      "defaultIcon": "\\uE73A"
    }
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..core.ports import SettingsDocument, SettingsRepo
from .icon_models import IconMap, IconSource, MappingConfig
from .text_codec import parse_icon_value

logger = logging.getLogger(__name__)

SETTINGS_KEY = "iconMappings"

_ICON_FIELDS: tuple[tuple[str, str], ...] = (
    ("statusIcons", "status_icons"),
    ("priorityIcons", "priority_icons"),
    ("projectIcons", "project_icons"),
    ("contextIcons", "context_icons"),
    ("tagIcons", "tag_icons"),
)


class ConfigDocumentError(ValueError):
    """Raised when a settings document does not have the expected structure."""


def clone(config: MappingConfig) -> MappingConfig:
    """Deep copy: every mapping and scalar is independent of the original."""
    return config.clone()


def reset_to_defaults() -> MappingConfig:
    return MappingConfig()


def to_document(config: MappingConfig) -> SettingsDocument:
    doc: SettingsDocument = {"primaryIconSource": config.primary_source.value}
    for doc_key, attr in _ICON_FIELDS:
        doc[doc_key] = getattr(config, attr).to_dict()
    doc["defaultIcon"] = config.default_icon
    return doc


def _icon_map_from_doc(doc_key: str, raw: Any) -> IconMap:
    if not isinstance(raw, dict):
        raise ConfigDocumentError(f"{doc_key} must be an object")

    out = IconMap()
    for name, value in raw.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise ConfigDocumentError(f"{doc_key} must map strings to strings")
        name = name.strip()
        if not name:
            logger.warning("Dropping empty key in %s", doc_key)
            continue
        icon = parse_icon_value(value)
        if icon is None:
            logger.warning("Dropping invalid icon %r for %s[%r]", value, doc_key, name)
            continue
        out[name] = icon
    return out


def from_document(doc: Any) -> MappingConfig:
    """
    Build a MappingConfig from a document.

    - missing fields keep their built-in defaults
    - present fields must have the right type (ConfigDocumentError otherwise)
    - icon spellings are normalized (palette names and hex forms are accepted);
      entries that do not resolve to a valid icon are dropped
    """
    if not isinstance(doc, dict):
        raise ConfigDocumentError("settings document must be an object")

    config = MappingConfig()

    if "primaryIconSource" in doc:
        raw_source = doc["primaryIconSource"]
        if not isinstance(raw_source, str):
            raise ConfigDocumentError("primaryIconSource must be a string")
        try:
            config.primary_source = IconSource.parse(raw_source)
        except ValueError as e:
            raise ConfigDocumentError(str(e)) from e

    for doc_key, attr in _ICON_FIELDS:
        if doc_key in doc:
            setattr(config, attr, _icon_map_from_doc(doc_key, doc[doc_key]))

    if "defaultIcon" in doc:
        raw_default = doc["defaultIcon"]
        if not isinstance(raw_default, str):
            raise ConfigDocumentError("defaultIcon must be a string")
        icon = parse_icon_value(raw_default)
        if icon is None:
            raise ConfigDocumentError(f"defaultIcon is not a valid icon: {raw_default!r}")
        config.default_icon = icon

    return config


def load(store: SettingsRepo, key: str = SETTINGS_KEY) -> MappingConfig:
    """
    Current configuration from the store.

    Nothing stored yet (first use) or an unusable document -> built-in defaults.
    """
    try:
        doc = store.load_document(key)
    except Exception:
        logger.exception("Failed to read icon mappings key=%s; using defaults.", key)
        return reset_to_defaults()

    if doc is None:
        return reset_to_defaults()
    try:
        return from_document(doc)
    except ConfigDocumentError as e:
        logger.warning("Stored icon mappings are invalid (%s); using defaults.", e)
        return reset_to_defaults()


def update(store: SettingsRepo, config: MappingConfig, key: str = SETTINGS_KEY) -> None:
    """Replace the persisted configuration with `config` (whole document)."""
    store.save_document(key, to_document(config))
    logger.info("Icon mappings updated (primary=%s).", config.primary_source.value)


def export_to(path: str | Path, config: MappingConfig) -> bool:
    """
    Write `config` to `path` as JSON. Returns False on failure.

    Writes a temp file next to the target and renames it over, so a failed
    export never leaves a truncated file in place of a previous good one.
    """
    path = Path(path)
    if not path.name:
        logger.warning("Export path has no file name: %r", str(path))
        return False

    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(to_document(config), ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, path)
    except Exception:
        logger.exception("Failed to export icon mappings to %s", path)
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            logger.debug("Could not remove temp export file %s", tmp, exc_info=True)
        return False

    logger.info("Exported icon mappings to %s", path)
    return True


def import_from(path: str | Path) -> MappingConfig | None:
    """
    Read a configuration previously written by export_to().

    Returns None when the file is missing, unreadable or structurally invalid.
    The caller decides whether to update() with the result.
    """
    path = Path(path)
    if not path.is_file():
        logger.warning("Import file not found: %s", path)
        return None

    try:
        doc = json.loads(path.read_text("utf-8"))
    except (OSError, UnicodeDecodeError, ValueError):
        logger.exception("Failed to read icon mappings from %s", path)
        return None

    try:
        config = from_document(doc)
    except ConfigDocumentError as e:
        logger.warning("Import rejected %s: %s", path, e)
        return None

    logger.info("Imported icon mappings from %s", path)
    return config
