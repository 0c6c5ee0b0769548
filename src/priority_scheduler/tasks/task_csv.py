# src/priority_scheduler/tasks/task_csv.py

"""
Line-oriented task file ("Task,Priority" CSV).

Format:
    Task,Priority
    <name>,<priority with 2 decimals>

Rows are written in heap storage order, not sorted by priority. Loading
replays every row through insert(), so the heap shape is rebuilt rather than
copied.

Loading is permissive: a row that does not parse is skipped and loading
continues. A missing file is reported as MISSING ("start fresh"), a file that
cannot be read as UNREADABLE; neither touches the queue.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

from ..core.ports import TaskQueue
from .task_models import (
    DEFAULT_MAX_NAME_LENGTH,
    InsertOutcome,
    LoadReport,
    LoadStatus,
    SaveReport,
    SaveStatus,
)

logger = logging.getLogger(__name__)

CSV_HEADER = "Task,Priority"

# Leading number of the priority field; anything after it is ignored.
_NUMBER_RE = re.compile(
    r"\s*([-+]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?|inf(?:inity)?))",
    re.IGNORECASE,
)


def parse_task_line(line: str, *, max_name_length: int = DEFAULT_MAX_NAME_LENGTH) -> tuple[str, float] | None:
    """
    Parse one data row into (name, priority).

    The name is 1..max_name_length characters up to the first comma, taken
    verbatim (no whitespace stripping). Returns None for rows that do not parse.
    """
    line = line.rstrip("\r\n")
    sep = line.find(",")
    if sep <= 0 or sep > max_name_length:
        return None

    m = _NUMBER_RE.match(line, sep + 1)
    if not m:
        return None

    return line[:sep], float(m.group(1))


def format_task_line(name: str, priority: float) -> str:
    return f"{name},{priority:.2f}"


def save_tasks(queue: TaskQueue, path: str | Path) -> SaveReport:
    """Write every live task to `path`. Never touches the queue on failure."""
    path = Path(path)
    lines = [CSV_HEADER]
    lines.extend(format_task_line(t.name, t.priority) for t in queue.iter_storage())

    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text("\n".join(lines) + "\n", "utf-8")
        os.replace(tmp, path)
    except OSError as e:
        logger.exception("Failed to save tasks to %s", path)
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        return SaveReport(status=SaveStatus.FAILED, path=path, error=str(e))

    written = len(lines) - 1
    logger.info("Saved tasks: %d to %s", written, path)
    return SaveReport(status=SaveStatus.SAVED, path=path, written=written)


def load_tasks(
    queue: TaskQueue,
    path: str | Path,
    *,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
) -> LoadReport:
    """Insert every parseable row of `path` into `queue`."""
    path = Path(path)
    try:
        text = path.read_text("utf-8")
    except FileNotFoundError:
        logger.info("No previous task file found at %s. Starting fresh.", path)
        return LoadReport(status=LoadStatus.MISSING, path=path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Task file %s is unreadable: %s", path, e)
        return LoadReport(status=LoadStatus.UNREADABLE, path=path, error=str(e))

    report = LoadReport(status=LoadStatus.LOADED, path=path)

    # First line is the header; it is skipped without being checked.
    for lineno, line in enumerate(text.split("\n")[1:], start=2):
        if not line.strip():
            continue

        parsed = parse_task_line(line, max_name_length=max_name_length)
        if parsed is None:
            report.skipped += 1
            logger.debug("Skipping malformed task row %s:%d: %r", path, lineno, line)
            continue

        name, priority = parsed
        if queue.insert(name, priority) == InsertOutcome.DUPLICATE:
            report.duplicates += 1
        else:
            report.loaded += 1

    logger.info(
        "Loaded tasks: %d from %s (skipped=%d duplicates=%d)",
        report.loaded,
        path,
        report.skipped,
        report.duplicates,
    )
    return report
