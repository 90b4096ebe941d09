# src/taskglyph/icons/resolver.py

"""
Icon resolution.

resolve_icon(task, config) picks the icon for one task:
- try the configured primary source,
- if that finds nothing and the primary source is not Status, try Status,
- otherwise return config.default_icon.

Status checks run in a fixed order: overdue, archived, completed, raw status.
Project/context/tag values are checked in the task's own order with one
leading sigil (+ @ #) removed; the first configured value wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .icon_models import IconMap, IconSource, MappingConfig, TaskSnapshot

logger = logging.getLogger(__name__)

SIGILS: dict[IconSource, str] = {
    IconSource.PROJECT: "+",
    IconSource.CONTEXT: "@",
    IconSource.TAG: "#",
}


def strip_sigil(value: str, sigil: str) -> str:
    """Remove a single leading sigil, if present."""
    return value[len(sigil) :] if value.startswith(sigil) else value


def _resolve_status(task: TaskSnapshot, config: MappingConfig) -> str | None:
    icons = config.status_icons

    # Computed states are more specific than the raw status value.
    if task.is_overdue and "overdue" in icons:
        return icons["overdue"]
    if task.is_archived and "archived" in icons:
        return icons["archived"]
    if task.is_completed and "completed" in icons:
        return icons["completed"]

    return icons.get(task.status) if task.status else None


def _resolve_priority(task: TaskSnapshot, config: MappingConfig) -> str | None:
    if not task.priority:
        return None
    return config.priority_icons.get(task.priority)


def _first_match(values: list[str] | None, icons: IconMap, sigil: str) -> str | None:
    if not values:
        return None
    for raw in values:
        key = strip_sigil(raw, sigil)
        if not key:
            continue
        icon = icons.get(key)
        if icon is not None:
            return icon
    return None


def _resolve_project(task: TaskSnapshot, config: MappingConfig) -> str | None:
    return _first_match(task.projects, config.project_icons, SIGILS[IconSource.PROJECT])


def _resolve_context(task: TaskSnapshot, config: MappingConfig) -> str | None:
    return _first_match(task.contexts, config.context_icons, SIGILS[IconSource.CONTEXT])


def _resolve_tag(task: TaskSnapshot, config: MappingConfig) -> str | None:
    return _first_match(task.tags, config.tag_icons, SIGILS[IconSource.TAG])


_RESOLVERS: dict[IconSource, Callable[[TaskSnapshot, MappingConfig], str | None]] = {
    IconSource.STATUS: _resolve_status,
    IconSource.PRIORITY: _resolve_priority,
    IconSource.PROJECT: _resolve_project,
    IconSource.CONTEXT: _resolve_context,
    IconSource.TAG: _resolve_tag,
}


def resolve_from_source(source: IconSource, task: TaskSnapshot, config: MappingConfig) -> str | None:
    """Resolve from a single source; None means "no match" (no fallback applied)."""
    return _RESOLVERS[source](task, config)


def resolve_icon(task: TaskSnapshot, config: MappingConfig) -> str:
    """Return the icon for `task`. Never raises for well-formed input."""
    primary = config.primary_source
    icon = resolve_from_source(primary, task, config)

    if icon is None and primary is not IconSource.STATUS:
        icon = _resolve_status(task, config)

    return config.default_icon if icon is None else icon


class IconMappingService:
    """
    Resolver bound to a configuration provider.

    The provider is called on every resolve(), so a configuration replaced in
    the settings store is picked up by the next render without extra wiring.
    """

    def __init__(self, config_provider: Callable[[], MappingConfig]) -> None:
        self._config_provider = config_provider

    @property
    def config(self) -> MappingConfig:
        return self._config_provider()

    def resolve(self, task: TaskSnapshot) -> str:
        # One snapshot per call: a concurrent settings write replaces the
        # document, it never mutates the instance we hold here.
        config = self._config_provider()
        return resolve_icon(task, config)

    @classmethod
    def create_default(cls) -> IconMappingService:
        config = MappingConfig()
        return cls(lambda: config)
