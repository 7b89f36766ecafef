# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Sequence
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]


class CommandArgs(list[str]):
    """
    Whitespace-split command arguments that keep the raw text they came from.

    Titles and search text must reach the list model with their inner spacing intact.
    """

    def __init__(self, raw: str) -> None:
        super().__init__(raw.split())
        self.raw = raw

    def rest(self, skip: int = 0) -> str:
        """Raw text after the first `skip` arguments, leading whitespace dropped."""
        m = re.match(r"\s*(?:\S+\s+){%d}" % skip, self.raw)
        return self.raw[m.end():] if m else ""


CommandHandler2 = Callable[[AppState, CommandArgs], str]
CommandHandler3 = Callable[[AppState, CommandArgs, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        m = re.match(r"\s*(\S+)", line[1:])
        if not m:
            return "Empty command. Use /help to list available commands."

        name = m.group(1).lower()
        args = CommandArgs(line[1 + m.end():])

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text without a leading / adds it as a new task)")
        return "\n".join(lines)


registry = CommandRegistry()


def format_row(row: int, task: Task) -> str:
    """`row` is 0-based; the console shows rows from 1."""
    return f"{row + 1:>3}. {task.title}"


def format_rows(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "(no tasks)"
    return "\n".join(format_row(i, t) for i, t in enumerate(tasks))


def _parse_row(state: AppState, raw: str) -> Task | None:
    try:
        row = int(raw)
    except ValueError:
        return None
    if row < 1:
        return None
    try:
        return state.task_list.task_at(row - 1)
    except IndexError:
        return None


def cmd_help(state: AppState, args: CommandArgs) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: CommandArgs) -> str:
    tl = state.task_list
    header = f'Tasks matching "{tl.search_term}":' if tl.is_filtering else "Tasks:"
    return f"{header}\n{format_rows(tl.visible_tasks)}"


def cmd_add(state: AppState, args: CommandArgs) -> str:
    task = state.task_list.add_task(args.rest())
    if task is None:
        return "Usage: /add <title> (title must not be empty)"
    return f"Added: {task.title}"


def cmd_edit(state: AppState, args: CommandArgs) -> str:
    if len(args) < 2:
        return "Usage: /edit <row> <new title>"
    task = _parse_row(state, args[0])
    if task is None:
        return f"No task at row {args[0]}."
    old_title = task.title
    if not state.task_list.update_task(task, args.rest(1)):
        return "Title must not be empty."
    return f"Renamed: {old_title} -> {task.title}"


def cmd_delete(state: AppState, args: CommandArgs) -> str:
    if len(args) != 1:
        return "Usage: /delete <row>"
    task = _parse_row(state, args[0])
    if task is None:
        return f"No task at row {args[0]}."
    state.task_list.delete_task(task)
    return f"Deleted: {task.title}"


def cmd_clear(state: AppState, args: CommandArgs, emit: CommandEmitter | None = None) -> str:
    total = len(state.task_list.all_tasks)
    if emit is not None and total:
        emit(f"Deleting {total} task(s)...")
    removed = state.task_list.delete_all_tasks()
    return f"Deleted {removed} task(s)."


def cmd_search(state: AppState, args: CommandArgs) -> str:
    tl = state.task_list
    if not args:
        tl.end_search()
        return "Search closed."
    tl.search(args.rest())
    return f'{len(tl.filtered_tasks)} match(es) for "{tl.search_term}".'


def cmd_reload(state: AppState, args: CommandArgs) -> str:
    tasks = state.task_list.load_all()
    return f"Reloaded {len(tasks)} task(s)."


def cmd_status(state: AppState, args: CommandArgs) -> str:
    tl = state.task_list
    search = f'"{tl.search_term}"' if tl.is_filtering else "off"
    return (
        "Status:\n"
        f"- Database: {state.task_store.db_path}\n"
        f"- Tasks: {len(tl.all_tasks)}\n"
        f"- Search: {search}\n"
        f"- Visible: {len(tl.visible_tasks)}"
    )


registry.register("help", cmd_help, "show this help", aliases=["h", "?"])
registry.register("list", cmd_list, "show the visible tasks", aliases=["ls"])
registry.register("add", cmd_add, "add a task: /add <title>", aliases=["new"])
registry.register("edit", cmd_edit, "rename a task: /edit <row> <title>", aliases=["rename"])
registry.register("delete", cmd_delete, "delete a task: /delete <row>", aliases=["del", "rm"])
registry.register("clear", cmd_clear, "delete every task")
registry.register("search", cmd_search, "filter by text: /search <text>; /search alone closes it", aliases=["s"])
registry.register("reload", cmd_reload, "reload tasks from the database")
registry.register("status", cmd_status, "show database and search state")
