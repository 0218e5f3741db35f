"""College statistics: tuition, diversity and salary relations plus a fixed report catalog (SQLite)."""

__version__ = "0.1.0"
