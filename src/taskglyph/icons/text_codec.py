# src/taskglyph/icons/text_codec.py

"""
`name=value` text format for bulk editing of icon mappings.

One mapping per line. A value can be written as:
- a palette name:          work=Folder
- an escaped code point:   work=\\uE821
- a bare code point:       work=E821
- the icon character itself (private use area only)

Parsing is total: a bad line is skipped and reported, the rest is kept.
Both real newlines and the two-character token "\\n" separate lines, since
some form widgets escape newlines in their payload.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from . import palette
from .icon_models import IconMap

logger = logging.getLogger(__name__)

ESCAPED_NEWLINE = "\\n"

_HEX4 = re.compile(r"[0-9A-Fa-f]{4}")

IconValueParser = Callable[[str], str | None]


def _decode_hex4(digits: str) -> str | None:
    if not _HEX4.fullmatch(digits):
        return None
    code = chr(int(digits, 16))
    return code if palette.is_valid_icon_code(code) else None


def _from_palette_name(value: str) -> str | None:
    return palette.get_code(value)


def _from_escaped_hex(value: str) -> str | None:
    if len(value) != 6 or value[:2].lower() != "\\u":
        return None
    return _decode_hex4(value[2:])


def _from_bare_hex(value: str) -> str | None:
    if len(value) != 4:
        return None
    return _decode_hex4(value)


def _from_literal_char(value: str) -> str | None:
    return value if palette.is_valid_icon_code(value) else None


# Tried in order; the first parser that returns a value wins.
VALUE_PARSERS: tuple[IconValueParser, ...] = (
    _from_palette_name,
    _from_escaped_hex,
    _from_bare_hex,
    _from_literal_char,
)


def parse_icon_value(value: str) -> str | None:
    """Resolve one value in any accepted notation to an icon character, or None."""
    value = (value or "").strip()
    if not value:
        return None
    for parser in VALUE_PARSERS:
        icon = parser(value)
        if icon is not None:
            return icon
    return None


def format_icon_value(icon: str) -> str:
    """Palette name when the icon is in the palette, else the bare hex form."""
    name = palette.get_name_for_code(icon)
    if name is not None:
        return name
    return palette.format_code_point(icon)


def format_mappings(mappings: Mapping[str, str], separator: str = "\n") -> str:
    """Serialize `mappings` into `name=value` lines, in mapping order."""
    return separator.join(f"{key}={format_icon_value(icon)}" for key, icon in mappings.items())


@dataclass(slots=True)
class MappingParseReport:
    mappings: IconMap
    skipped: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> int:
        return len(self.mappings)


def split_lines(text: str | None) -> list[str]:
    if not text:
        return []
    return text.replace(ESCAPED_NEWLINE, "\n").split("\n")


def parse_mappings_report(text: str | None, target: IconMap | None = None) -> MappingParseReport:
    """
    Parse `name=value` text into `target` (cleared first) and report skipped lines.

    Never raises on user text.
    """
    mappings = IconMap() if target is None else target
    mappings.clear()
    report = MappingParseReport(mappings=mappings)

    for line in split_lines(text):
        if not line.strip():
            continue

        name, sep, raw_value = line.partition("=")
        name = name.strip()
        raw_value = raw_value.strip()
        if not sep or not name or not raw_value:
            logger.debug("Skipping malformed mapping line: %r", line)
            report.skipped.append(line)
            continue

        icon = parse_icon_value(raw_value)
        if icon is None:
            logger.debug("Skipping invalid icon value %r for %r", raw_value, name)
            report.skipped.append(line)
            continue

        mappings[name] = icon

    if report.skipped:
        logger.info(
            "Parsed icon mappings: accepted=%d skipped=%d", report.accepted, len(report.skipped)
        )
    return report


def parse_mappings(text: str | None, target: IconMap | None = None) -> IconMap:
    """Same as parse_mappings_report(), returning only the mapping."""
    return parse_mappings_report(text, target).mappings
