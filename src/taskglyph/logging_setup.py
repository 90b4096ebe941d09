# src/taskglyph/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path

LOG_FILE_NAME = "taskglyph.log"

# Minimum level shown on the console, by logger prefix (longest prefix wins).
# Loggers outside the table only reach the console at ERROR+.
CONSOLE_LEVELS: Mapping[str, int] = {
    "taskglyph": logging.DEBUG,
    # Every save/load logs.
    "taskglyph.settings": logging.WARNING,
    # Skipped lines are already listed in the /map reply.
    "taskglyph.icons.text_codec": logging.INFO,
}
_OTHER_LEVEL = logging.ERROR

_HANDLER_MARK = "_taskglyph_handler"


class _ConsoleNoiseFilter(logging.Filter):
    """Per-logger console thresholds; the log file keeps everything."""

    def __init__(self, levels: Mapping[str, int] = CONSOLE_LEVELS) -> None:
        super().__init__()
        self._levels = dict(levels)

    def threshold(self, name: str) -> int:
        best = ""
        for prefix in self._levels:
            if (name == prefix or name.startswith(prefix + ".")) and len(prefix) > len(best):
                best = prefix
        return self._levels[best] if best else _OTHER_LEVEL

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold(record.name)


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _install(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    setattr(handler, _HANDLER_MARK, True)
    root.addHandler(handler)


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskglyph",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console (stderr, filtered) + file (<log_dir>/taskglyph.log, unfiltered).

    Calling it again replaces the handlers a previous call installed and leaves
    any other handlers alone. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        if getattr(h, _HANDLER_MARK, False):
            root.removeHandler(h)
            h.close()

    console = logging.StreamHandler(sys.stderr)
    console.addFilter(_ConsoleNoiseFilter())
    _install(root, console, console_level)

    _install(root, logging.FileHandler(str(log_file), encoding="utf-8"), file_level)

    # warnings.warn(...) arrives as 'py.warnings'.
    logging.captureWarnings(True)
    return log_file
