# src/taskboard/tasks/task_models.py

from __future__ import annotations

import itertools
import threading
import time
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, replace
from typing import Any, Protocol

TaskId = int


@dataclass(frozen=True, slots=True)
class Task:
    id: TaskId
    title: str
    completed: bool = False

    @classmethod
    def from_record(cls, raw: Task | Mapping[str, Any]) -> Task:
        """
        Normalize a Task-shaped record coming from a task source.

        Accepts Task instances as-is and mappings with "id", "title" and an
        optional "completed". Raises ValueError for anything else.
        """
        if isinstance(raw, Task):
            return raw
        if not isinstance(raw, Mapping):
            raise ValueError(f"Task record must be a mapping, got {type(raw).__name__}")

        completed = raw.get("completed")
        if completed is None:
            completed = False
        elif not isinstance(completed, bool):
            raise ValueError(f"Task record has a non-boolean completed: {completed!r}")

        return cls(
            id=_parse_task_id(raw.get("id")),
            title=str(raw.get("title") or ""),
            completed=completed,
        )


def _parse_task_id(raw_id: Any) -> TaskId:
    # ints, integral floats (JSON numbers) and digit strings; never truncate
    if raw_id is None or isinstance(raw_id, bool):
        raise ValueError("Task record has no usable id")
    if isinstance(raw_id, int):
        return raw_id
    if isinstance(raw_id, float) and raw_id.is_integer():
        return int(raw_id)
    if isinstance(raw_id, str):
        try:
            return int(raw_id.strip())
        except ValueError:
            pass
    raise ValueError(f"Task record has a non-integer id: {raw_id!r}")


@dataclass(frozen=True, slots=True)
class TaskPatch:
    """
    Partial task keyed by id (payload of an update).

    Fields left unset keep the current task value.
    """

    id: TaskId
    title: str | None = None
    completed: bool | None = None

    def changes(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.title is not None:
            out["title"] = self.title
        if self.completed is not None:
            out["completed"] = self.completed
        return out

    def apply_to(self, task: Task) -> Task:
        changes = self.changes()
        if not changes:
            return task
        return replace(task, **changes)


class IdGenerator(Protocol):
    def next_id(self, taken: Collection[TaskId] = ()) -> TaskId: ...


class TaskIdGenerator:
    """
    Millisecond clock with a monotonic tie-breaker.

    Two calls in the same millisecond (or a clock stepping backwards) still get
    distinct, increasing ids.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, taken: Collection[TaskId] = ()) -> TaskId:
        with self._lock:
            candidate = max(int(self._clock() * 1000), self._last + 1)
            while candidate in taken:
                candidate += 1
            self._last = candidate
            return candidate


class SequentialIdGenerator:
    """Plain counter; deterministic ids for replays and tests."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self, taken: Collection[TaskId] = ()) -> TaskId:
        with self._lock:
            candidate = next(self._counter)
            while candidate in taken:
                candidate = next(self._counter)
            return candidate


_default_ids = TaskIdGenerator()


def create_task(
    title: str,
    completed: bool = False,
    *,
    taken_ids: Collection[TaskId] = (),
    ids: IdGenerator | None = None,
) -> Task:
    """Build a new Task with a freshly assigned id."""
    gen = ids or _default_ids
    return Task(id=gen.next_id(taken_ids), title=title, completed=bool(completed))
