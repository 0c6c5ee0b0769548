# src/priority_scheduler/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the front ends and the persistence adapter.

They depend on this Protocol instead of TaskHeap, so tests can swap in
any object offering the same operation set.
"""

from typing import Iterator, Protocol

from ..tasks.task_models import InsertOutcome, TaskView, UpdateOutcome


class TaskQueue(Protocol):
    """The full caller-facing operation set of the priority container."""

    def insert(self, name: str, priority: float) -> InsertOutcome: ...
    def peek_min(self) -> TaskView | None: ...
    def extract_min(self) -> TaskView | None: ...
    def update_priority(self, name: str, new_priority: float) -> UpdateOutcome: ...
    def contains(self, name: str) -> bool: ...
    def count(self) -> int: ...

    # Storage-order traversal, used by save.
    def iter_storage(self) -> Iterator[TaskView]: ...
