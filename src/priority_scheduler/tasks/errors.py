# src/priority_scheduler/tasks/errors.py

"""
Fatal errors of the task container.

Everything recoverable (duplicate names, unknown names, empty queue, missing
tasks file) is reported through outcome values in task_models instead.
"""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for scheduler failures."""


class ResourceExhaustedError(SchedulerError):
    """Heap storage could not grow. The process cannot continue."""

    def __init__(self, requested_capacity: int) -> None:
        super().__init__(f"Failed to grow task storage to capacity {requested_capacity}")
        self.requested_capacity = requested_capacity
