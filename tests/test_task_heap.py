# tests/test_task_heap.py

from __future__ import annotations

import random
from dataclasses import FrozenInstanceError

import pytest

from priority_scheduler.tasks.errors import ResourceExhaustedError
from priority_scheduler.tasks.task_heap import TaskHeap
from priority_scheduler.tasks.task_models import InsertOutcome, UpdateOutcome

from .fakes import drain, heap_violations


def test_extracts_in_priority_order(heap: TaskHeap) -> None:
    heap.insert("A", 3.0)
    heap.insert("B", 1.0)
    heap.insert("C", 2.0)

    assert [t.name for t in drain(heap)] == ["B", "C", "A"]
    assert heap.extract_min() is None
    assert heap.count() == 0


def test_duplicate_insert_is_rejected(heap: TaskHeap) -> None:
    assert heap.insert("X", 5.0) == InsertOutcome.ADDED
    assert heap.insert("X", 1.0) == InsertOutcome.DUPLICATE

    assert heap.contains("X")
    assert heap.count() == 1
    top = heap.peek_min()
    assert top is not None
    assert top.name == "X"
    assert top.priority == 5.0


def test_updated_task_rises_above_later_insert(heap: TaskHeap) -> None:
    heap.insert("A", 5.0)
    assert heap.update_priority("A", 1.0) == UpdateOutcome.UPDATED
    heap.insert("B", 3.0)

    top = heap.peek_min()
    assert top is not None and top.name == "A"


def test_update_unknown_name_on_empty_heap(heap: TaskHeap) -> None:
    assert heap.update_priority("Z", 1.0) == UpdateOutcome.NOT_FOUND
    assert heap.count() == 0
    assert heap.peek_min() is None


def test_update_to_larger_priority_sinks(heap: TaskHeap) -> None:
    heap.insert("A", 1.0)
    heap.insert("B", 2.0)
    heap.insert("C", 3.0)

    assert heap.update_priority("A", 10.0) == UpdateOutcome.UPDATED

    assert [t.name for t in heap.snapshot()] == ["B", "A", "C"]
    assert [t.name for t in drain(heap)] == ["B", "C", "A"]


def test_update_to_same_priority_keeps_shape(heap: TaskHeap) -> None:
    for name, prio in [("A", 1.0), ("B", 2.0), ("C", 2.0)]:
        heap.insert(name, prio)
    before = heap.snapshot()

    assert heap.update_priority("B", 2.0) == UpdateOutcome.UPDATED
    assert heap.snapshot() == before


def test_sift_down_prefers_left_child_on_tie(heap: TaskHeap) -> None:
    heap.insert("root", 0.0)
    heap.insert("L", 1.0)
    heap.insert("R", 1.0)
    heap.insert("x", 5.0)

    removed = heap.extract_min()
    assert removed is not None and removed.name == "root"
    assert [t.name for t in heap.snapshot()] == ["L", "x", "R"]


def test_storage_grows_by_doubling_without_reordering() -> None:
    heap = TaskHeap(1)
    assert heap.capacity == 1

    heap.insert("a", 1.0)
    heap.insert("b", 2.0)
    assert heap.capacity == 2
    heap.insert("c", 3.0)
    assert heap.capacity == 4

    assert [t.name for t in heap.snapshot()] == ["a", "b", "c"]


def test_non_positive_capacity_falls_back_to_default() -> None:
    assert TaskHeap(0).capacity == 10
    assert TaskHeap(-3).capacity == 10


def test_peek_returns_a_copy(heap: TaskHeap) -> None:
    heap.insert("A", 2.0)
    view = heap.peek_min()
    assert view is not None

    heap.update_priority("A", 9.0)
    assert view.priority == 2.0
    with pytest.raises(FrozenInstanceError):
        view.priority = 1.0  # type: ignore[misc]


def test_contains_does_not_mutate(heap: TaskHeap) -> None:
    for i, prio in enumerate([4.0, 2.0, 8.0, 1.0]):
        heap.insert(f"t{i}", prio)
    before = heap.snapshot()

    for _ in range(3):
        assert heap.contains("t2")
        assert not heap.contains("missing")

    assert heap.snapshot() == before
    assert heap.count() == 4


def test_invalid_input_is_rejected_without_mutation(heap: TaskHeap) -> None:
    heap.insert("A", 1.0)

    with pytest.raises(ValueError):
        heap.insert("", 1.0)
    with pytest.raises(ValueError):
        heap.insert("B", float("nan"))
    with pytest.raises(ValueError):
        heap.insert("B", "soon")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        heap.update_priority("A", float("nan"))

    assert heap.count() == 1
    assert heap.snapshot()[0].priority == 1.0


def test_long_names_are_truncated_to_bound() -> None:
    heap = TaskHeap(max_name_length=49)
    long_name = "n" * 60

    assert heap.insert(long_name, 1.0) == InsertOutcome.ADDED
    assert heap.snapshot()[0].name == "n" * 49
    assert heap.contains(long_name)
    assert heap.insert("n" * 55, 2.0) == InsertOutcome.DUPLICATE


def test_growth_failure_is_fatal_and_keeps_state() -> None:
    class NoGrowList(list):
        def extend(self, _items) -> None:
            raise MemoryError

    heap = TaskHeap(1)
    heap.insert("a", 1.0)
    heap._slots = NoGrowList(heap._slots)

    with pytest.raises(ResourceExhaustedError) as exc_info:
        heap.insert("b", 0.5)

    assert exc_info.value.requested_capacity == 2
    assert heap.count() == 1
    assert heap.contains("a")
    assert not heap.contains("b")


def test_clear_releases_everything(heap: TaskHeap) -> None:
    heap.insert("A", 1.0)
    heap.insert("B", 2.0)
    heap.clear()

    assert heap.count() == 0
    assert len(heap) == 0
    assert heap.peek_min() is None
    assert not heap.contains("A")


def test_random_operations_keep_invariants() -> None:
    rng = random.Random(1234)
    heap = TaskHeap(1)
    names = [f"task-{i}" for i in range(30)]
    expected_count = 0

    for _ in range(600):
        op = rng.random()
        name = rng.choice(names)
        prio = round(rng.uniform(-50.0, 50.0), 1)

        if op < 0.5:
            existed = heap.contains(name)
            outcome = heap.insert(name, prio)
            assert outcome == (InsertOutcome.DUPLICATE if existed else InsertOutcome.ADDED)
            if not existed:
                expected_count += 1
        elif op < 0.75:
            top = heap.peek_min()
            removed = heap.extract_min()
            assert removed == top
            if removed is not None:
                expected_count -= 1
        else:
            existed = heap.contains(name)
            outcome = heap.update_priority(name, prio)
            assert outcome == (UpdateOutcome.UPDATED if existed else UpdateOutcome.NOT_FOUND)

        tasks = heap.snapshot()
        assert heap_violations(tasks) == []
        assert heap.count() == expected_count == len(tasks)
        assert len({t.name for t in tasks}) == len(tasks)

    priorities = [t.priority for t in drain(heap)]
    assert priorities == sorted(priorities)


@pytest.mark.parametrize("name", ["buy milk, eggs", "line\nbreak", "carriage\rreturn", ","])
def test_names_that_cannot_be_stored_in_the_tasks_file_are_rejected(heap: TaskHeap, name: str) -> None:
    heap.insert("ok", 2.0)

    with pytest.raises(ValueError):
        heap.insert(name, 1.0)

    assert heap.count() == 1
    assert not heap.contains(name)
    assert [t.name for t in heap.snapshot()] == ["ok"]


def test_separator_past_the_name_bound_is_cut_off() -> None:
    heap = TaskHeap(max_name_length=5)

    assert heap.insert("short, but long", 1.0) == InsertOutcome.ADDED
    assert heap.snapshot()[0].name == "short"
