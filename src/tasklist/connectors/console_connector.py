# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import format_row, format_rows
from ..cli.commands import registry as command_registry
from ..core.ports import ChangeKind, ListChange
from ..core.state import AppState
from ..tasks.task_store import StoreError

logger = logging.getLogger(__name__)

Printer = Callable[[str], None]


class ConsoleRenderer:
    """
    Presentation side of the list: turns ListChange signals into console output.

    RELOAD redraws every visible row; row signals print just the affected row.
    """

    def __init__(self, state: AppState | None = None, *, out: Printer = print) -> None:
        self.state = state
        self._out = out

    def __call__(self, change: ListChange) -> None:
        if self.state is None:
            return
        tl = self.state.task_list
        visible = tl.visible_tasks

        if change.kind == ChangeKind.RELOAD or change.index is None:
            header = f'-- tasks matching "{tl.search_term}" --' if tl.is_filtering else "-- tasks --"
            self._out(f"{header}\n{format_rows(visible)}")
            return

        if change.kind == ChangeKind.DELETE:
            self._out(f"  - row {change.index + 1} removed")
            return

        if change.index >= len(visible):
            logger.debug("Stale row signal %s (visible=%d)", change, len(visible))
            return
        mark = "+" if change.kind == ChangeKind.INSERT else "~"
        self._out(f"{mark}{format_row(change.index, visible[change.index])}")


def handle_line(state: AppState, line: str, emit: Printer | None = None) -> str | None:
    """
    One line of console input: a slash command, or plain text that becomes a new task.
    Storage failures are reported as a reply; the list is left as it was.
    """
    line = line.strip()
    if not line:
        return None
    try:
        reply = command_registry.handle(state, line, emit=emit)
        if reply is not None:
            return reply
        task = state.task_list.add_task(line)
        return f"Added: {task.title}" if task is not None else None
    except StoreError as e:
        logger.info("Storage error on input %r: %s", line, e)
        return f"[store] {e}"


def run_console_loop(state: AppState, *, out: Printer = print) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "tasklist"))
    out(f"[{app_name}] Type a task to add it. Use /help for commands, /exit to quit.")
    out(format_rows(state.task_list.visible_tasks))

    while True:
        try:
            user_input = input(f"{app_name}> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            out("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input, emit=out)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            out(reply)

    logger.info("Console connector finished.")
