"""Client-side task state container: store, reducer and async effects."""

from __future__ import annotations

from .core.events import (
    add_task,
    fetch_tasks_failure,
    fetch_tasks_request,
    fetch_tasks_success,
    remove_task,
    update_task,
)
from .core.state import AppState, LoadStatus
from .core.store import Store
from .tasks.task_models import Task

__version__ = "0.1.0"

__all__ = [
    "AppState",
    "LoadStatus",
    "Store",
    "Task",
    "add_task",
    "fetch_tasks_failure",
    "fetch_tasks_request",
    "fetch_tasks_success",
    "remove_task",
    "update_task",
]
