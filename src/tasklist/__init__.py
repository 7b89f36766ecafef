"""tasklist - a local task list backed by SQLite."""

__version__ = "0.1.0"
