# src/priority_scheduler/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_csv import load_tasks, save_tasks
from ..tasks.task_models import InsertOutcome, LoadStatus, SaveStatus, UpdateOutcome

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
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

    def dispatch(
        self,
        state: AppState,
        name: str,
        args: list[str],
        emit: CommandEmitter | None = None,
    ) -> str:
        """Run a registered command by name with pre-split arguments."""
        handler = self._handlers.get(name.lower())
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

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        return self.dispatch(state, parts[0], parts[1:], emit=emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _split_name_priority(args: list[str]) -> tuple[str, float] | None:
    """`<name words...> <priority>` -> (name, priority); None if malformed."""
    if len(args) < 2:
        return None
    name = " ".join(args[:-1]).strip()
    if not name:
        return None
    try:
        priority = float(args[-1])
    except ValueError:
        return None
    if priority != priority:  # NaN
        return None
    return name, priority


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <name> <priority>   -> add a task (smaller priority = more urgent)
    """
    parsed = _split_name_priority(args)
    if parsed is None:
        return "Usage: /add <name> <priority>. Invalid priority input."
    name, priority = parsed
    name = state.queue.normalize_name(name)

    try:
        outcome = state.queue.insert(name, priority)
    except ValueError as e:
        return f"Error: {e}."
    if outcome == InsertOutcome.DUPLICATE:
        return f"Error: Task '{name}' already exists. Use /update to change its priority."
    return f"Task '{name}' added with priority {priority:.2f}."


def cmd_pop(state: AppState, args: list[str]) -> str:
    task = state.queue.extract_min()
    if task is None:
        return "The scheduler is currently empty."
    return f"Removed most urgent task: '{task.name}'"


def cmd_peek(state: AppState, args: list[str]) -> str:
    task = state.queue.peek_min()
    if task is None:
        return "The scheduler is currently empty."
    return f"The most urgent task is: '{task.name}' (priority {task.priority:.2f})"


def cmd_update(state: AppState, args: list[str]) -> str:
    """
    /update <name> <priority>   -> change the priority of an existing task
    """
    parsed = _split_name_priority(args)
    if parsed is None:
        return "Usage: /update <name> <priority>. Invalid priority input."
    name, priority = parsed
    name = state.queue.normalize_name(name)

    outcome = state.queue.update_priority(name, priority)
    if outcome == UpdateOutcome.NOT_FOUND:
        return f"Error: Task '{name}' not found. Cannot change priority."
    return f"Priority of task '{name}' updated to {priority:.2f}."


def cmd_has(state: AppState, args: list[str]) -> str:
    name = " ".join(args).strip()
    if not name:
        return "Usage: /has <name>."
    name = state.queue.normalize_name(name)
    if state.queue.contains(name):
        return f"Task '{name}' EXISTS in the scheduler."
    return f"Task '{name}' DOES NOT exist in the scheduler."


def cmd_count(state: AppState, args: list[str]) -> str:
    return f"Total number of pending tasks: {state.queue.count()}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.queue.snapshot()
    if not tasks:
        return "The scheduler is currently empty."
    lines = ["Tasks (storage order):"]
    for i, t in enumerate(tasks):
        lines.append(f"{i}. ({t.priority:.2f}) {t.name}")
    return "\n".join(lines)


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Saving tasks...")
    report = save_tasks(state.queue, state.tasks_path)
    if report.status == SaveStatus.FAILED:
        return f"Error: could not save tasks to '{report.path}': {report.error}"
    return f"Tasks successfully saved to '{report.path}' ({report.written} tasks)."


def cmd_load(state: AppState, args: list[str]) -> str:
    report = load_tasks(state.queue, state.tasks_path, max_name_length=state.queue.max_name_length)
    if report.status == LoadStatus.MISSING:
        return f"No task file found at '{report.path}'. Nothing loaded."
    if report.status == LoadStatus.UNREADABLE:
        return f"Error: could not read '{report.path}': {report.error}"
    return (
        f"Tasks successfully loaded from '{report.path}' "
        f"(loaded={report.loaded} skipped={report.skipped} duplicates={report.duplicates})."
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <name> <priority>.")
registry.register("pop", cmd_pop, help_text="Remove the most urgent task.", aliases=["remove"])
registry.register("peek", cmd_peek, help_text="Show the most urgent task.")
registry.register("update", cmd_update, help_text="Change a priority: /update <name> <priority>.")
registry.register("has", cmd_has, help_text="Check if a task exists: /has <name>.", aliases=["exists"])
registry.register("count", cmd_count, help_text="Show the number of pending tasks.")
registry.register("list", cmd_list, help_text="List tasks in storage order.")
registry.register("save", cmd_save, help_text="Save tasks to the tasks file.")
registry.register("load", cmd_load, help_text="Load tasks from the tasks file.")
