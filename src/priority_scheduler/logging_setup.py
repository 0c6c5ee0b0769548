# src/priority_scheduler/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

APP_LOGGER_PREFIX = "priority_scheduler"
LOG_FILE_NAME = "psched.log"
DEFAULT_QUIET_LOGGERS = ("priority_scheduler.tasks",)


class ConsoleFilter(logging.Filter):
    """
    Console rules for the interactive menu.

    App loggers pass, except the `quiet` ones (the menu already prints what the
    task container did), which need WARNING+. Everything else needs ERROR+.
    """

    def __init__(self, quiet: Iterable[str] = DEFAULT_QUIET_LOGGERS) -> None:
        super().__init__()
        self.quiet = tuple(q.rstrip(".") for q in quiet if q.strip())

    def _is_quiet(self, name: str) -> bool:
        return any(name == q or name.startswith(q + ".") for q in self.quiet)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == APP_LOGGER_PREFIX or name.startswith(APP_LOGGER_PREFIX + "."):
            if self._is_quiet(name):
                return record.levelno >= logging.WARNING
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/psched",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    quiet_loggers: Iterable[str] = DEFAULT_QUIET_LOGGERS,
) -> Path:
    """
    Route logs to stderr (filtered, for the menu) and to `<log_dir>/psched.log` (everything).

    Call this ONCE, very early. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleFilter(quiet_loggers))

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)

    root.addHandler(console)
    root.addHandler(file_handler)

    # warnings.warn(...) arrives as 'py.warnings', which the console filter holds to ERROR+.
    logging.captureWarnings(True)
    return log_file
