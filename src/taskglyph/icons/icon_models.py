# src/taskglyph/icons/icon_models.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class IconSource(StrEnum):
    """
    Task field that drives icon selection.

    Values are the names used in the persisted document ("primaryIconSource").
    """

    STATUS = "Status"
    PRIORITY = "Priority"
    PROJECT = "Project"
    CONTEXT = "Context"
    TAG = "Tag"

    @classmethod
    def parse(cls, raw: str) -> IconSource:
        """Case-insensitive lookup by name; raises ValueError for unknown names."""
        needle = (raw or "").strip().lower()
        for member in cls:
            if member.value.lower() == needle:
                return member
        raise ValueError(f"unknown icon source: {raw!r}")

    @property
    def description(self) -> str:
        return SOURCE_DESCRIPTIONS[self]


SOURCE_DESCRIPTIONS: dict[IconSource, str] = {
    IconSource.STATUS: "Task status (todo, done, archived, etc.)",
    IconSource.PRIORITY: "Task priority (urgent, high, medium, etc.)",
    IconSource.PROJECT: "Project membership (+work, +home, etc.)",
    IconSource.CONTEXT: "Context (@phone, @office, etc.)",
    IconSource.TAG: "Tags (#urgent, #bug, etc.)",
}


class IconMap(MutableMapping[str, str]):
    """
    Name -> icon mapping with case-insensitive keys.

    The key spelling of the first insert is kept; later writes under a
    different case only replace the value. Empty keys are rejected.
    """

    __slots__ = ("_data",)

    def __init__(self, items: Mapping[str, str] | Iterable[tuple[str, str]] | None = None) -> None:
        self._data: dict[str, tuple[str, str]] = {}
        if items is not None:
            self.update(items)

    @staticmethod
    def _fold(key: str) -> str:
        return key.lower()

    def __getitem__(self, key: str) -> str:
        return self._data[self._fold(key)][1]

    def __setitem__(self, key: str, value: str) -> None:
        if not key:
            raise ValueError("icon map keys must be non-empty")
        folded = self._fold(key)
        existing = self._data.get(folded)
        self._data[folded] = (existing[0] if existing else key, value)

    def __delitem__(self, key: str) -> None:
        del self._data[self._fold(key)]

    def __iter__(self) -> Iterator[str]:
        for stored_key, _ in self._data.values():
            yield stored_key

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self._data

    def get(self, key: str, default: Any = None) -> Any:
        if not key:
            return default
        entry = self._data.get(self._fold(key))
        return default if entry is None else entry[1]

    def clear(self) -> None:
        self._data.clear()

    def copy(self) -> IconMap:
        return IconMap(self.items())

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())

    def __repr__(self) -> str:
        return f"IconMap({self.to_dict()!r})"


def _default_status_icons() -> IconMap:
    return IconMap(
        {
            "todo": "\uE73A",  # Checkbox
            "done": "\uE73E",  # Checkmark
            "completed": "\uE73E",  # Checkmark
            "archived": "\uE7B8",  # Archive
            "in-progress": "\uE916",  # Play
            "overdue": "\uE7BA",  # Warning
        }
    )


def _default_priority_icons() -> IconMap:
    return IconMap(
        {
            "1-urgent": "\uE7C1",  # Important
            "urgent": "\uE7C1",
            "1": "\uE7C1",
            "2-high": "\uE7C1",
            "high": "\uE7C1",
            "2": "\uE7C1",
            "3-medium": "\uE8CB",  # Flag
            "medium": "\uE8CB",
            "3": "\uE8CB",
            "4-normal": "\uE735",  # StarFilled
            "normal": "\uE735",
            "4": "\uE735",
            "5-low": "\uE734",  # Star
            "low": "\uE734",
            "5": "\uE734",
        }
    )


def _default_project_icons() -> IconMap:
    return IconMap(
        {
            "work": "\uE821",  # Folder
            "home": "\uE80F",  # Home
            "personal": "\uE77B",  # Person
        }
    )


def _default_context_icons() -> IconMap:
    return IconMap(
        {
            "phone": "\uE717",
            "email": "\uE715",
            "mail": "\uE715",
            "office": "\uE770",
            "home": "\uE80F",
            "computer": "\uE7F4",
            "online": "\uE774",
        }
    )


def _default_tag_icons() -> IconMap:
    return IconMap(
        {
            "urgent": "\uE7C1",
            "bug": "\uE783",
            "feature": "\uE945",
            "idea": "\uE945",
            "meeting": "\uE716",
            "waiting": "\uE823",
        }
    )


DEFAULT_ICON = "\uE73A"  # Checkbox


@dataclass(slots=True)
class MappingConfig:
    """
    Icon mapping configuration.

    Instances handed to readers are treated as read-only. Writers call clone(),
    change the copy and persist it as a whole (see lifecycle.update).
    """

    primary_source: IconSource = IconSource.STATUS
    status_icons: IconMap = field(default_factory=_default_status_icons)
    priority_icons: IconMap = field(default_factory=_default_priority_icons)
    project_icons: IconMap = field(default_factory=_default_project_icons)
    context_icons: IconMap = field(default_factory=_default_context_icons)
    tag_icons: IconMap = field(default_factory=_default_tag_icons)
    default_icon: str = DEFAULT_ICON

    def clone(self) -> MappingConfig:
        return MappingConfig(
            primary_source=self.primary_source,
            status_icons=self.status_icons.copy(),
            priority_icons=self.priority_icons.copy(),
            project_icons=self.project_icons.copy(),
            context_icons=self.context_icons.copy(),
            tag_icons=self.tag_icons.copy(),
            default_icon=self.default_icon,
        )

    def icons_for(self, source: IconSource) -> IconMap:
        return {
            IconSource.STATUS: self.status_icons,
            IconSource.PRIORITY: self.priority_icons,
            IconSource.PROJECT: self.project_icons,
            IconSource.CONTEXT: self.context_icons,
            IconSource.TAG: self.tag_icons,
        }[source]


_COMPLETED_STATUSES = frozenset({"done", "completed"})


def _parse_due(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug("Unparseable due date ignored: %r", raw)
        return None


def _str_list(raw: Any) -> list[str] | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, Iterable):
        return [str(x) for x in raw if x is not None]
    return None


@dataclass(frozen=True, slots=True)
class TaskSnapshot:
    """
    Read-only view of a task used for icon resolution.

    is_overdue / is_archived / is_completed are derived by whoever owns task
    semantics; the resolver trusts them as given.
    """

    status: str
    priority: str | None = None
    projects: list[str] | None = None
    contexts: list[str] | None = None
    tags: list[str] | None = None
    is_overdue: bool = False
    is_archived: bool = False
    is_completed: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any], *, today: date | None = None) -> TaskSnapshot:
        """
        Build a snapshot from a raw task record (API / JSON shape).

        Derived flags:
        - completed: status is "done" or "completed"
        - archived: status is "archived" or record["archived"] is true
        - overdue: due date before today and not completed
        Explicit isOverdue / isArchived / isCompleted keys win over derivation.
        """
        if today is None:
            today = date.today()

        status = str(record.get("status") or "")
        folded = status.lower()

        completed = folded in _COMPLETED_STATUSES
        archived = folded == "archived" or bool(record.get("archived", False))
        due = _parse_due(record.get("due"))
        overdue = due is not None and due < today and not completed

        priority = record.get("priority")

        return cls(
            status=status,
            priority=str(priority) if priority is not None else None,
            projects=_str_list(record.get("projects")),
            contexts=_str_list(record.get("contexts")),
            tags=_str_list(record.get("tags")),
            is_overdue=bool(record.get("isOverdue", overdue)),
            is_archived=bool(record.get("isArchived", archived)),
            is_completed=bool(record.get("isCompleted", completed)),
        )
