# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name, used as the console prompt (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Logging level for the log file (default: INFO). Console shows WARNING+.",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory (default: .local/tasklist).",
    "TASKLIST_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    "TASKLIST_LOG_DIR": "Directory for tasklist.log (default: <data_dir>).",
    # Storage
    "TASKLIST_DB_TIMEOUT": "Seconds to wait on a locked database (default: 30).",
    "TASKLIST_LOAD_ON_START": "Load every task when the app starts (true/false, default: true).",
}
