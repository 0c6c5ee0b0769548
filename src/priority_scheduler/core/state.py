# src/priority_scheduler/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..tasks.task_heap import TaskHeap


@dataclass
class AppState:
    # Settings are kept on the state so commands can read them without globals.
    settings: Any

    queue: TaskHeap
    tasks_path: Path
    autosave: bool = True

    def close(self) -> None:
        """Release every task record held by the queue."""
        self.queue.clear()
