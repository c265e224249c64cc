# src/taskboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.events import (
    add_task,
    fetch_tasks_request,
    remove_task,
    update_task,
)
from ..core.state import AppState, LoadStatus
from ..core.store import Store
from ..tasks.task_models import Task, TaskId

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[Store, list[str]], str]
CommandHandler3 = Callable[[Store, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

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
        store: Store,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(store, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(store, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] {task.id}  {task.title}"


def format_tasks(state: AppState) -> str:
    if state.loading:
        return "Loading..."
    if state.error is not None:
        return f"Error: {state.error}"
    if not state.tasks:
        return "No tasks. Use /add <title> or /fetch."
    return "\n".join(format_task(t) for t in state.tasks)


def _parse_id(args: list[str]) -> TaskId | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def cmd_help(store: Store, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(store: Store, args: list[str]) -> str:
    return format_tasks(store.get_state())


def cmd_status(store: Store, args: list[str]) -> str:
    state = store.get_state()
    done = sum(1 for t in state.tasks if t.completed)
    lines = [
        "Status:",
        f"  State: {state.status.value}",
        f"  Tasks: {len(state.tasks)} ({done} done)",
    ]
    if state.status is LoadStatus.ERROR:
        lines.append(f"  Last error: {state.error}")
    effects = store.effects
    if effects is not None:
        lines.append(f"  Fetches in flight: {effects.pending}")
    return "\n".join(lines)


def cmd_fetch(store: Store, args: list[str], emit: CommandEmitter | None = None) -> str:
    effects = store.effects
    if emit is not None and effects is not None and effects.pending:
        # No single-flight: the new fetch runs alongside the old one.
        emit("A fetch is already in flight; starting another one.")
    store.dispatch(fetch_tasks_request())
    return "Fetching tasks..."


def cmd_add(store: Store, args: list[str]) -> str:
    """
    /add <title>  -> append a new task
    """
    title = " ".join(args).strip()
    if not title:
        return "Usage: /add <title>"
    store.dispatch(add_task(title))
    task = store.get_state().tasks[-1]
    return f"Added: {format_task(task)}"


def _set_completed(store: Store, args: list[str], completed: bool | None, usage: str) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return usage
    task = store.get_state().find(task_id)
    if task is None:
        return f"No task with id {task_id}."

    new_value = (not task.completed) if completed is None else completed
    store.dispatch(update_task(task_id, completed=new_value))
    updated = store.get_state().find(task_id)
    return format_task(updated) if updated is not None else f"Task {task_id} is gone."


def cmd_done(store: Store, args: list[str]) -> str:
    return _set_completed(store, args, True, "Usage: /done <id>")


def cmd_undo(store: Store, args: list[str]) -> str:
    return _set_completed(store, args, False, "Usage: /undo <id>")


def cmd_toggle(store: Store, args: list[str]) -> str:
    return _set_completed(store, args, None, "Usage: /toggle <id>")


def cmd_rename(store: Store, args: list[str]) -> str:
    """
    /rename <id> <title>  -> change the task title
    """
    task_id = _parse_id(args)
    title = " ".join(args[1:]).strip()
    if task_id is None or not title:
        return "Usage: /rename <id> <title>"
    if store.get_state().find(task_id) is None:
        return f"No task with id {task_id}."
    store.dispatch(update_task(task_id, title=title))
    return f"Renamed task {task_id}."


def cmd_remove(store: Store, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /remove <id>"
    if store.get_state().find(task_id) is None:
        return f"No task with id {task_id}."
    store.dispatch(remove_task(task_id))
    return f"Removed task {task_id}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show loading/error state and counters.")
registry.register("fetch", cmd_fetch, help_text="Reload tasks from the task source.")
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undo", cmd_undo, help_text="Mark a task not completed: /undo <id>.")
registry.register("toggle", cmd_toggle, help_text="Flip completion: /toggle <id>.")
registry.register("rename", cmd_rename, help_text="Change a title: /rename <id> <title>.")
registry.register("remove", cmd_remove, help_text="Delete a task: /remove <id>.", aliases=["rm"])
