# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. Only the names below are read.
"""

# Example: verbose log file
# LOG_LEVEL = "DEBUG"

# Example: keep the database somewhere else
# TASKS_DB_PATH = "/tmp/tasklist/tasks.sqlite3"
