# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (one TaskStore for the process),
then runs the console connector in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleRenderer, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_store import StoreError

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # TaskStore uses short-lived sqlite connections per call; close() is a hook only.
    try:
        state.task_store.close()
    except Exception:
        logger.debug("TaskStore close failed.", exc_info=True)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    # Console stays at WARNING+ so log lines do not interleave with the task rows.
    log_file = setup_logging(
        log_dir=settings.log_dir,
        console_level=max(level, logging.WARNING),
        file_level=level,
    )

    logger.info("Starting %s (log=%s)...", settings.app_name, log_file)

    renderer = ConsoleRenderer()
    try:
        state = create_initial_state(settings=settings, on_change=renderer)
    except StoreError:
        logger.exception("Cannot open task database at %s.", settings.tasks_db_path)
        print(f"Cannot open task database at {settings.tasks_db_path}. See {log_file}.", file=sys.stderr)
        return 1
    renderer.state = state

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
