"""
Icon subsystem.

Components:
- palette.py: built-in icon names <-> code points, icon code validation
- icon_models.py: data structures (IconSource, IconMap, MappingConfig, TaskSnapshot)
- resolver.py: picks the icon for a task (primary source, Status fallback, default)
- text_codec.py: `name=value` text format used for bulk editing
- lifecycle.py: clone / persist / export / import / reset of MappingConfig
"""
