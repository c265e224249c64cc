# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..tasks.task_models import Task, TaskId


class LoadStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class AppState:
    """
    Immutable application state snapshot.

    Notes:
    - tasks keep insertion order (used for display)
    - loading and error are never both active; see `status`
    """

    tasks: tuple[Task, ...] = ()
    loading: bool = False
    error: str | None = None

    @property
    def status(self) -> LoadStatus:
        if self.loading:
            return LoadStatus.LOADING
        if self.error is not None:
            return LoadStatus.ERROR
        return LoadStatus.IDLE

    @property
    def task_ids(self) -> frozenset[TaskId]:
        return frozenset(t.id for t in self.tasks)

    def find(self, task_id: TaskId) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None


INITIAL_STATE = AppState()
