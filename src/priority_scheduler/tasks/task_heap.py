# src/priority_scheduler/tasks/task_heap.py

from __future__ import annotations

"""
Priority container.

An array-backed binary min-heap of named tasks:
- smaller priority = more urgent, the root is always the most urgent task,
- names are unique; lookup by name is a linear scan over live slots,
- storage grows by doubling and never re-heapifies on growth.

Rejections (duplicate name, unknown name, empty heap) are returned as outcome
values; only a failed storage growth raises.
"""

import logging
import math
from collections.abc import Iterator

from .errors import ResourceExhaustedError
from .task_models import DEFAULT_MAX_NAME_LENGTH, InsertOutcome, Task, TaskView, UpdateOutcome

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_CAPACITY = 10

# Field separator and row terminators of the tasks file.
RESERVED_NAME_CHARS = (",", "\n", "\r")


def _coerce_priority(priority: float) -> float:
    try:
        value = float(priority)
    except (TypeError, ValueError):
        raise ValueError(f"priority must be a number, got {priority!r}") from None
    if math.isnan(value):
        raise ValueError("priority must not be NaN")
    return value


class TaskHeap:
    """
    Min-heap of Task records keyed by priority.

    The heap owns every Task it stores. Callers only ever get TaskView copies.
    """

    def __init__(
        self,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        *,
        max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
    ) -> None:
        if max_name_length <= 0:
            raise ValueError("max_name_length must be positive")
        capacity = int(initial_capacity) if initial_capacity and initial_capacity > 0 else DEFAULT_INITIAL_CAPACITY
        self._slots: list[Task | None] = [None] * capacity
        self._size = 0
        self._max_name_length = int(max_name_length)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"TaskHeap(size={self._size}, capacity={self.capacity})"

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def max_name_length(self) -> int:
        return self._max_name_length

    # ---- low-level helpers ----

    def _task_at(self, index: int) -> Task:
        task = self._slots[index]
        if task is None:
            raise RuntimeError(f"Empty heap slot at index {index} (size={self._size})")
        return task

    def _priority_at(self, index: int) -> float:
        return self._task_at(index).priority

    def _swap(self, a: int, b: int) -> None:
        self._slots[a], self._slots[b] = self._slots[b], self._slots[a]

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if self._priority_at(index) >= self._priority_at(parent):
                break
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int) -> None:
        while True:
            smallest = index
            left = 2 * index + 1
            right = 2 * index + 2

            # Strict comparisons: on equal children the left one wins.
            if left < self._size and self._priority_at(left) < self._priority_at(smallest):
                smallest = left
            if right < self._size and self._priority_at(right) < self._priority_at(smallest):
                smallest = right

            if smallest == index:
                return
            self._swap(index, smallest)
            index = smallest

    def _find_index(self, name: str) -> int:
        for i in range(self._size):
            if self._task_at(i).name == name:
                return i
        return -1

    def _grow(self) -> None:
        new_capacity = max(1, self.capacity * 2)
        try:
            self._slots.extend([None] * (new_capacity - self.capacity))
        except MemoryError:
            logger.critical("Task storage growth failed capacity=%s", new_capacity)
            raise ResourceExhaustedError(new_capacity) from None
        logger.debug("Task storage grown capacity=%s size=%s", new_capacity, self._size)

    # ---- public API ----

    def normalize_name(self, name: str) -> str:
        """The name as it is stored: cut to max_name_length."""
        return str(name)[: self._max_name_length]

    def insert(self, name: str, priority: float) -> InsertOutcome:
        key = self.normalize_name(name)
        if not key:
            raise ValueError("task name is required")
        if any(ch in key for ch in RESERVED_NAME_CHARS):
            raise ValueError(f"task name must not contain a comma or line break: {key!r}")
        value = _coerce_priority(priority)

        if self._find_index(key) != -1:
            logger.info("Task %r already exists; insert rejected", key)
            return InsertOutcome.DUPLICATE

        if self._size == self.capacity:
            self._grow()

        self._slots[self._size] = Task(name=key, priority=value)
        self._size += 1
        self._sift_up(self._size - 1)
        logger.debug("Task added name=%r priority=%.2f size=%s", key, value, self._size)
        return InsertOutcome.ADDED

    def peek_min(self) -> TaskView | None:
        if self._size == 0:
            return None
        return TaskView.of(self._task_at(0))

    def extract_min(self) -> TaskView | None:
        if self._size == 0:
            return None

        root = self._task_at(0)

        self._size -= 1
        last = self._slots[self._size]
        self._slots[self._size] = None
        if self._size > 0:
            self._slots[0] = last
            self._sift_down(0)

        logger.debug("Task removed name=%r priority=%.2f size=%s", root.name, root.priority, self._size)
        return TaskView.of(root)

    def update_priority(self, name: str, new_priority: float) -> UpdateOutcome:
        value = _coerce_priority(new_priority)
        index = self._find_index(self.normalize_name(name))
        if index == -1:
            logger.info("Task %r not found; priority update rejected", name)
            return UpdateOutcome.NOT_FOUND

        task = self._task_at(index)
        old = task.priority
        task.priority = value

        if value < old:
            self._sift_up(index)
        elif value > old:
            self._sift_down(index)

        logger.debug("Task priority updated name=%r %.2f -> %.2f", task.name, old, value)
        return UpdateOutcome.UPDATED

    def contains(self, name: str) -> bool:
        return self._find_index(self.normalize_name(name)) != -1

    def count(self) -> int:
        return self._size

    def iter_storage(self) -> Iterator[TaskView]:
        """Yield copies of live tasks in heap-array order (not sorted)."""
        for i in range(self._size):
            yield TaskView.of(self._task_at(i))

    def snapshot(self) -> list[TaskView]:
        return list(self.iter_storage())

    def clear(self) -> None:
        """Release every task record. Capacity is kept."""
        for i in range(self._size):
            self._slots[i] = None
        self._size = 0
