"""
Settings persistence.

Components:
- settings_store.py: SQLite-backed key-value store for JSON settings documents
"""
