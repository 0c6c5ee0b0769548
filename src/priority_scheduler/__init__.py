"""In-memory priority scheduler: a min-heap of named tasks with CSV persistence."""

from .tasks.task_heap import TaskHeap
from .tasks.task_models import InsertOutcome, TaskView, UpdateOutcome

__all__ = ["InsertOutcome", "TaskHeap", "TaskView", "UpdateOutcome"]
