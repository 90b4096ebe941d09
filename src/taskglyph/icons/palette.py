# src/taskglyph/icons/palette.py

"""
Built-in icon palette.

A fixed catalog of friendly names -> icon code points (Segoe MDL2 glyphs in the
Unicode private use area). Used by the settings text format so users can write
`work=Folder` instead of raw code points. Resolution itself never consults it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

PUA_FIRST = 0xE000
PUA_LAST = 0xF8FF

ICONS: Mapping[str, str] = MappingProxyType(
    {
        # Status
        "Checkbox": "\uE73A",
        "Checkmark": "\uE73E",
        "CheckmarkCircle": "\uE73D",
        "Warning": "\uE7BA",
        "Error": "\uE783",
        "Info": "\uE946",
        "Question": "\uE897",
        # Priority
        "Important": "\uE7C1",
        "Flag": "\uE8CB",
        "Star": "\uE734",
        "StarFilled": "\uE735",
        "Heart": "\uE8F1",
        # Actions
        "Play": "\uE916",
        "Pause": "\uE769",
        "Stop": "\uE71A",
        "Sync": "\uE72C",
        "Clock": "\uE823",
        # Organization
        "Folder": "\uE821",
        "Tag": "\uE8EC",
        "Category": "\uE902",
        "List": "\uE8FD",
        "Archive": "\uE7B8",
        # Communication
        "Phone": "\uE717",
        "Mail": "\uE715",
        "Chat": "\uE8F2",
        "People": "\uE716",
        "Person": "\uE77B",
        # Location / context
        "Home": "\uE80F",
        "Work": "\uE770",
        "Globe": "\uE774",
        "Location": "\uE81D",
        "Car": "\uE804",
        # Misc
        "Edit": "\uE70F",
        "Delete": "\uE74D",
        "Add": "\uE710",
        "Remove": "\uE738",
        "Settings": "\uE713",
        "Calendar": "\uE787",
        "Document": "\uE8A5",
        "Code": "\uE943",
        "Lightbulb": "\uE945",
        "Rocket": "\uE7C8",
    }
)

# Short quick-reference list shown next to the mapping editor.
COMMON_ICON_NAMES: tuple[str, ...] = (
    "Folder",
    "Home",
    "Phone",
    "Mail",
    "Work",
    "Star",
    "Flag",
    "Important",
    "Warning",
    "Error",
    "Info",
    "Tag",
    "Archive",
    "Clock",
    "Globe",
    "Car",
    "Chat",
)


def get_code(name: str) -> str | None:
    """Exact (case-sensitive) friendly-name lookup."""
    return ICONS.get(name)


def get_name_for_code(code: str) -> str | None:
    """Return the first palette name whose code equals `code`, or None."""
    for name, value in ICONS.items():
        if value == code:
            return name
    return None


def is_valid_icon_code(code: str | None) -> bool:
    """True for a single character inside the private use area (E000..F8FF)."""
    if not code or len(code) != 1:
        return False
    return PUA_FIRST <= ord(code) <= PUA_LAST


def format_code_point(code: str) -> str:
    """`"\\uE821"` -> `"E821"` (uppercase, at least 4 hex digits, no prefix)."""
    if not code:
        return ""
    return f"{ord(code[0]):04X}"
