# tests/fakes.py

from __future__ import annotations

import json
from typing import Any

from taskglyph.icons.icon_models import TaskSnapshot


class FakeSettingsRepo:
    """
    In-memory SettingsRepo.

    Documents are stored as JSON text so callers can't mutate what was saved,
    mirroring the real store.
    """

    def __init__(self) -> None:
        self.docs: dict[str, str] = {}
        self.saves = 0

    def load_document(self, key: str) -> dict[str, Any] | None:
        raw = self.docs.get(key)
        return None if raw is None else json.loads(raw)

    def save_document(self, key: str, document: dict[str, Any]) -> None:
        self.docs[key] = json.dumps(document, ensure_ascii=False)
        self.saves += 1


class BrokenSettingsRepo:
    """SettingsRepo whose backend is unavailable."""

    def load_document(self, key: str) -> dict[str, Any] | None:
        raise OSError("settings backend unavailable")

    def save_document(self, key: str, document: dict[str, Any]) -> None:
        raise OSError("settings backend unavailable")


def make_task(
    status: str = "todo",
    *,
    priority: str | None = None,
    projects: list[str] | None = None,
    contexts: list[str] | None = None,
    tags: list[str] | None = None,
    overdue: bool = False,
    archived: bool = False,
    completed: bool = False,
) -> TaskSnapshot:
    return TaskSnapshot(
        status=status,
        priority=priority,
        projects=projects,
        contexts=contexts,
        tags=tags,
        is_overdue=overdue,
        is_archived=archived,
        is_completed=completed,
    )
