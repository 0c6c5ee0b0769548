# src/priority_scheduler/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the task heap and wraps it into AppState,
- loads/saves the tasks file around the interactive session.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_csv import load_tasks as load_tasks_file
from ..tasks.task_csv import save_tasks as save_tasks_file
from ..tasks.task_heap import TaskHeap
from ..tasks.task_models import LoadReport, SaveReport

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    queue = TaskHeap(settings.initial_capacity, max_name_length=settings.max_name_length)
    logger.debug("Task heap ready capacity=%s", queue.capacity)

    return AppState(
        settings=settings,
        queue=queue,
        tasks_path=settings.tasks_path,
        autosave=bool(getattr(settings, "autosave", True)),
    )


def load_tasks(state: AppState) -> LoadReport:
    return load_tasks_file(state.queue, state.tasks_path, max_name_length=state.queue.max_name_length)


def save_tasks(state: AppState) -> SaveReport:
    return save_tasks_file(state.queue, state.tasks_path)
