# src/priority_scheduler/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

DEFAULT_MAX_NAME_LENGTH = 49


class InsertOutcome(StrEnum):
    ADDED = "added"
    DUPLICATE = "duplicate"


class UpdateOutcome(StrEnum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"


class LoadStatus(StrEnum):
    """
    Result of reading a tasks file.

    Notes:
    - MISSING is the normal first-run case ("start fresh"), not an error.
    - UNREADABLE means the file exists but could not be read or decoded.
    """

    LOADED = "loaded"
    MISSING = "missing"
    UNREADABLE = "unreadable"


class SaveStatus(StrEnum):
    SAVED = "saved"
    FAILED = "failed"


@dataclass(slots=True)
class Task:
    """Internal heap record. Owned by TaskHeap; never handed out directly."""

    name: str
    priority: float


@dataclass(slots=True, frozen=True)
class TaskView:
    """Copy of a task's data returned to callers."""

    name: str
    priority: float

    @classmethod
    def of(cls, task: Task) -> TaskView:
        return cls(name=task.name, priority=task.priority)


@dataclass(slots=True)
class LoadReport:
    status: LoadStatus
    path: Path
    loaded: int = 0
    skipped: int = 0
    duplicates: int = 0
    error: str | None = None


@dataclass(slots=True)
class SaveReport:
    status: SaveStatus
    path: Path
    written: int = 0
    error: str | None = None
