# src/taskglyph/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..core.state import AppState
from ..icons import lifecycle, palette
from ..icons.icon_models import IconSource, TaskSnapshot
from ..icons.text_codec import (
    ESCAPED_NEWLINE,
    format_icon_value,
    format_mappings,
    parse_mappings_report,
)

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

CATEGORIES: dict[str, IconSource] = {
    "status": IconSource.STATUS,
    "priority": IconSource.PRIORITY,
    "project": IconSource.PROJECT,
    "projects": IconSource.PROJECT,
    "context": IconSource.CONTEXT,
    "contexts": IconSource.CONTEXT,
    "tag": IconSource.TAG,
    "tags": IconSource.TAG,
}


class CommandRegistry:
    """Simple slash-command registry used by the settings surface (/help, /map, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Handlers get the raw argument text (mapping text keeps its spacing).
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].strip().split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, rest, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, rest)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _describe_icon(icon: str) -> str:
    return f"{icon} {format_icon_value(icon)} (U+{palette.format_code_point(icon)})"


def _category_usage() -> str:
    return "Categories: status, priority, project, context, tag."


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: str) -> str:
    config = state.current_icon_config()
    counts = ", ".join(
        f"{src.value.lower()}={len(config.icons_for(src))}" for src in IconSource
    )
    store_path = getattr(state.settings_store, "db_path", None)
    return (
        "Status:\n"
        f"  Icon source: {config.primary_source.value} - {config.primary_source.description}\n"
        f"  Mappings: {counts}\n"
        f"  Default icon: {_describe_icon(config.default_icon)}\n"
        f"  Settings store: {store_path or '(in memory)'}"
    )


def cmd_source(state: AppState, args: str) -> str:
    """
    /source            -> show current primary source
    /source <kind>     -> set primary source (status|priority|project|context|tag)
    """
    config = state.current_icon_config()
    if not args:
        lines = [f"Icon source: {config.primary_source.value}"]
        for src in IconSource:
            mark = "*" if src is config.primary_source else " "
            lines.append(f" {mark} {src.value:<8} {src.description}")
        lines.append("If the selected source has no matching icon, Status is used.")
        return "\n".join(lines)

    try:
        source = IconSource.parse(args.split()[0])
    except ValueError:
        return f"Unknown icon source: {args!r}. Use one of: " + ", ".join(s.value for s in IconSource)

    if source is config.primary_source:
        return f"Icon source is already {source.value}."

    updated = config.clone()
    updated.primary_source = source
    state.replace_icon_config(updated)
    logger.debug("Primary icon source set to %s", source.value)
    return f"Icon source set to {source.value}."


def cmd_mappings(state: AppState, args: str) -> str:
    """/mappings <category> -> show a category as name=value lines."""
    if not args:
        return "Usage: /mappings <category>. " + _category_usage()

    source = CATEGORIES.get(args.split()[0].lower())
    if source is None:
        return f"Unknown category: {args!r}. " + _category_usage()

    icons = state.current_icon_config().icons_for(source)
    if not icons:
        return f"No {source.value.lower()} mappings."
    # The last line is a single-line /map command that restores the category.
    return (
        format_mappings(icons)
        + f"\nTo edit: /map {source.value.lower()} "
        + format_mappings(icons, separator=ESCAPED_NEWLINE)
    )


def cmd_map(state: AppState, args: str) -> str:
    """
    /map <category> <text>

    Replaces the whole category. Separate entries with "\\n", e.g.:
      /map project work=Folder\\nhome=Home\\nclient=E716
    """
    parts = args.split(maxsplit=1)
    if len(parts) < 2:
        return "Usage: /map <category> name=Icon\\nname=Icon ... " + _category_usage()

    source = CATEGORIES.get(parts[0].lower())
    if source is None:
        return f"Unknown category: {parts[0]!r}. " + _category_usage()

    updated = state.current_icon_config().clone()
    report = parse_mappings_report(parts[1], updated.icons_for(source))
    state.replace_icon_config(updated)

    lines = [f"Saved {report.accepted} {source.value.lower()} mapping(s)."]
    if report.skipped:
        lines.append(f"Skipped {len(report.skipped)} invalid line(s):")
        lines.extend(f"  {line.strip()}" for line in report.skipped)
    return "\n".join(lines)


def cmd_palette(state: AppState, args: str) -> str:
    lines = ["Palette icons:"]
    for name, code in palette.ICONS.items():
        lines.append(f"  {code} {name:<16} {palette.format_code_point(code)}")
    lines.append("Common: " + ", ".join(palette.COMMON_ICON_NAMES))
    return "\n".join(lines)


def _target_path(state: AppState, args: str) -> Path:
    if args:
        return Path(args).expanduser()
    return Path(getattr(state.settings, "export_path", "tasknotes-icon-mappings.json"))


def cmd_export(state: AppState, args: str) -> str:
    path = _target_path(state, args)
    if lifecycle.export_to(path, state.current_icon_config()):
        return f"Exported icon mappings to {path}"
    return f"Export failed: {path} (see log for details)."


def cmd_import(state: AppState, args: str, emit: CommandEmitter | None = None) -> str:
    path = _target_path(state, args)
    if emit:
        with contextlib.suppress(Exception):
            emit(f"[ICONS] Importing from {path}...")

    config = lifecycle.import_from(path)
    if config is None:
        return f"Import failed or file not found: {path}. Current mappings unchanged."

    state.replace_icon_config(config)
    return f"Imported icon mappings from {path} (source: {config.primary_source.value})."


def cmd_reset(state: AppState, args: str) -> str:
    state.replace_icon_config(lifecycle.reset_to_defaults())
    logger.info("Icon mappings reset to defaults.")
    return "Icon mappings reset to defaults."


def cmd_resolve(state: AppState, args: str) -> str:
    """
    /resolve {"status": "todo", "projects": ["+work"], "due": "2024-01-31"}
    """
    if not args:
        return 'Usage: /resolve {"status": "todo", "projects": ["+work"]}'

    try:
        record = json.loads(args)
    except ValueError as e:
        return f"Invalid JSON: {e}"
    if not isinstance(record, dict):
        return "Task record must be a JSON object."

    task = TaskSnapshot.from_record(record)
    icon = state.icon_service.resolve(task)
    return f"Icon: {_describe_icon(icon)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show icon source, mapping counts and default icon.")
registry.register("source", cmd_source, help_text="Show or set the primary icon source: /source project.")
registry.register("mappings", cmd_mappings, help_text="Show a category as text: /mappings tag.")
registry.register(
    "map", cmd_map, help_text="Replace a category: /map tag urgent=Important\\nbug=Error."
)
registry.register("palette", cmd_palette, help_text="List built-in icon names.")
registry.register("export", cmd_export, help_text="Export mappings to a JSON file: /export [path].")
registry.register("import", cmd_import, help_text="Import mappings from a JSON file: /import [path].")
registry.register("reset", cmd_reset, help_text="Restore default icon mappings.")
registry.register("resolve", cmd_resolve, help_text="Resolve the icon for a JSON task record.")
