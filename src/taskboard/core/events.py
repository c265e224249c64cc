# src/taskboard/core/events.py

from __future__ import annotations

"""
Events: the only input to state transitions.

Every event is a frozen dataclass with a class-level `kind` discriminant.
Callers build events through the constructor helpers at the bottom of this
module instead of instantiating the classes by hand.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar

from ..tasks.task_models import Task, TaskId, TaskPatch


class EventKind(StrEnum):
    FETCH_TASKS_REQUEST = "fetch_tasks_request"
    FETCH_TASKS_SUCCESS = "fetch_tasks_success"
    FETCH_TASKS_FAILURE = "fetch_tasks_failure"
    ADD_TASK = "add_task"
    UPDATE_TASK = "update_task"
    REMOVE_TASK = "remove_task"


@dataclass(frozen=True, slots=True)
class Event:
    # subclasses override; the base value matches no reducer branch or workflow
    kind: ClassVar[str] = "unknown"


@dataclass(frozen=True, slots=True)
class FetchTasksRequested(Event):
    kind: ClassVar[str] = EventKind.FETCH_TASKS_REQUEST


@dataclass(frozen=True, slots=True)
class FetchTasksSucceeded(Event):
    kind: ClassVar[str] = EventKind.FETCH_TASKS_SUCCESS

    tasks: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class FetchTasksFailed(Event):
    kind: ClassVar[str] = EventKind.FETCH_TASKS_FAILURE

    error: str


@dataclass(frozen=True, slots=True)
class TaskAdded(Event):
    """Request to append a task; the id is assigned by the reducer."""

    kind: ClassVar[str] = EventKind.ADD_TASK

    title: str
    completed: bool = False


@dataclass(frozen=True, slots=True)
class TaskUpdated(Event):
    kind: ClassVar[str] = EventKind.UPDATE_TASK

    patch: TaskPatch


@dataclass(frozen=True, slots=True)
class TaskRemoved(Event):
    kind: ClassVar[str] = EventKind.REMOVE_TASK

    task_id: TaskId


# ---- constructor helpers ----


def fetch_tasks_request() -> FetchTasksRequested:
    return FetchTasksRequested()


def fetch_tasks_success(tasks: Iterable[Task | Mapping[str, Any]]) -> FetchTasksSucceeded:
    """
    Wrap a fetched collection; records are normalized into Task values.

    Raises ValueError on a malformed record or on two records sharing an id.
    """
    normalized = tuple(Task.from_record(t) for t in tasks)
    seen: set[int] = set()
    for t in normalized:
        if t.id in seen:
            raise ValueError(f"duplicate task id in fetched tasks: {t.id}")
        seen.add(t.id)
    return FetchTasksSucceeded(tasks=normalized)


def fetch_tasks_failure(error: str) -> FetchTasksFailed:
    return FetchTasksFailed(error=str(error))


def add_task(title: str, completed: bool = False) -> TaskAdded:
    return TaskAdded(title=title, completed=bool(completed))


def update_task(
    task_id: TaskId,
    *,
    title: str | None = None,
    completed: bool | None = None,
) -> TaskUpdated:
    return TaskUpdated(patch=TaskPatch(id=task_id, title=title, completed=completed))


def remove_task(task_id: TaskId) -> TaskRemoved:
    return TaskRemoved(task_id=task_id)
