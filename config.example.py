# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/taskglyph/config.py for how each value is read.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKGLYPH_APP_NAME": "App display name (default: taskglyph).",
    "TASKGLYPH_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASKGLYPH_CONSOLE_ENABLED": "Run the interactive settings console (true/false, default: true).",
    # Paths (gitignored)
    "TASKGLYPH_DATA_DIR": "Local data directory (default: .local/taskglyph).",
    "TASKGLYPH_SETTINGS_DB_PATH": "SettingsStore SQLite path (default: <data_dir>/settings.sqlite3).",
    "TASKGLYPH_EXPORT_PATH": (
        "Default /export and /import file (default: <data_dir>/tasknotes-icon-mappings.json)."
    ),
    # Settings store
    "TASKGLYPH_SETTINGS_KEY": "Key of the icon mapping document (default: iconMappings).",
}
