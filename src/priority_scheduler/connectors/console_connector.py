# src/priority_scheduler/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.errors import ResourceExhaustedError

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

EXIT_CHOICE = 7

MENU_LINES = (
    "1. Add Task",
    "2. Remove Most Urgent Task",
    "3. Get Most Urgent Task (Peek)",
    "4. Change Task Priority",
    "5. Check if Task Exists",
    "6. Get Total Task Count",
    "7. Exit (Save & Quit)",
)


def _parse_choice(raw: str) -> int:
    """Leading integer of the input, 0 when there is none."""
    digits = ""
    for ch in raw.strip():
        if ch.isdigit() or (not digits and ch in "+-"):
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


def _menu_text(state: AppState) -> str:
    lines = [f"\nScheduler Menu (Tasks: {state.queue.count()}):", *MENU_LINES]
    return "\n".join(lines)


def _prompt_name_priority(read: InputFn, name_prompt: str, priority_prompt: str) -> list[str] | None:
    name = read(name_prompt).rstrip("\r\n")
    if not name.strip():
        return None
    priority = read(priority_prompt).strip()
    return [name, priority]


def _run_menu_choice(state: AppState, choice: int, read: InputFn) -> str:
    limit = state.queue.max_name_length

    if choice == 1:
        args = _prompt_name_priority(
            read,
            f"Enter task name (max {limit} chars): ",
            "Enter priority (smaller is more urgent, e.g., 1.0): ",
        )
        if args is None:
            return "Task name must not be empty."
        return command_registry.dispatch(state, "add", args)

    if choice == 2:
        return command_registry.dispatch(state, "pop", [])

    if choice == 3:
        return command_registry.dispatch(state, "peek", [])

    if choice == 4:
        args = _prompt_name_priority(
            read,
            "Enter task name to update: ",
            "Enter NEW priority (smaller is more urgent): ",
        )
        if args is None:
            return "Task name must not be empty."
        return command_registry.dispatch(state, "update", args)

    if choice == 5:
        name = read("Enter task name to check: ").rstrip("\r\n")
        return command_registry.dispatch(state, "has", [name])

    if choice == 6:
        return command_registry.dispatch(state, "count", [])

    return f"Invalid choice. Please enter a number between 1 and {EXIT_CHOICE}."


def run_console_loop(
    state: AppState,
    *,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    """
    Interactive numbered menu. Slash commands (/help, /add, ...) work at the same prompt.

    Returns on choice 7, /exit, EOF or Ctrl+C. Saving is left to the caller.
    """
    logger.info("Console connector started (tasks=%s).", state.queue.count())
    write("--- Interactive Priority-Based Task Scheduler ---")

    while True:
        write(_menu_text(state))
        try:
            raw = read("Enter your choice: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if raw.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            if raw.startswith("/"):
                response = command_registry.handle(state, raw, emit=write)
            else:
                choice = _parse_choice(raw)
                if choice == EXIT_CHOICE:
                    logger.info("Console exit choice received.")
                    break
                response = _run_menu_choice(state, choice, read)
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed mid-command, exiting.")
            break
        except ResourceExhaustedError:
            raise
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response:
            write(response)

    logger.info("Console connector finished.")
