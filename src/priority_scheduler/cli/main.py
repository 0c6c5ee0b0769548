# src/priority_scheduler/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the tasks file, runs the console
menu in the main thread and saves the tasks file on exit.
"""

from __future__ import annotations

import logging
import signal
import sys

from ..cli.bootstrap import create_initial_state, load_tasks, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import DEFAULT_QUIET_LOGGERS, setup_logging
from ..tasks.errors import ResourceExhaustedError
from ..tasks.task_models import LoadStatus, SaveStatus

logger = logging.getLogger(__name__)


def _handle_sigterm(signum, _frame) -> None:
    # Unwinds the blocking input() the same way Ctrl+C does, so the console loop exits cleanly.
    logger.info("Signal %s received, shutting down...", signum)
    raise KeyboardInterrupt


def _install_sigterm(handler) -> None:
    try:
        signal.signal(signal.SIGTERM, handler)
    except (ValueError, OSError, AttributeError):
        # Not in the main thread, or the platform has no SIGTERM.
        pass


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        quiet_loggers=getattr(settings, "log_quiet", DEFAULT_QUIET_LOGGERS),
    )

    logger.info("Starting %s...", settings.app_name)

    _install_sigterm(_handle_sigterm)

    state = create_initial_state(settings=settings)
    try:
        report = load_tasks(state)
        if report.status == LoadStatus.MISSING:
            print("No previous task file found. Starting fresh.")
        elif report.status == LoadStatus.UNREADABLE:
            print(f"Could not read '{report.path}'. Starting with an empty scheduler.")
        else:
            print(f"Tasks successfully loaded from '{report.path}'.")

        run_console_loop(state)
    except ResourceExhaustedError:
        logger.critical("Task storage exhausted; exiting without saving.", exc_info=True)
        return 1

    # The console loop is done; a late SIGTERM must not interrupt the save.
    _install_sigterm(signal.SIG_IGN)

    exit_code = 0
    if state.autosave:
        print("\nSaving tasks before exit...")
        saved = save_tasks(state)
        if saved.status == SaveStatus.FAILED:
            print(f"Error: could not save tasks to '{saved.path}': {saved.error}")
            exit_code = 1
        else:
            print(f"Tasks successfully saved to '{saved.path}'.")

    state.close()
    print("Exiting scheduler. Goodbye!")
    logger.info("Bye.")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
