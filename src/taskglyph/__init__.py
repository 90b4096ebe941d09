"""Task icon mapping engine with a console settings surface."""

__version__ = "0.1.0"
