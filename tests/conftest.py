# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from priority_scheduler.cli.bootstrap import create_initial_state
from priority_scheduler.core.state import AppState
from priority_scheduler.tasks.task_heap import TaskHeap


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="psched-test",
        log_level="DEBUG",
        # Paths (tmp per test run)
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "tasks.csv",
        autosave=True,
        # Small capacity so growth is exercised
        initial_capacity=2,
        max_name_length=49,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return create_initial_state(settings=settings)


@pytest.fixture()
def heap() -> TaskHeap:
    return TaskHeap(4)
