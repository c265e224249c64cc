# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps task sources swappable and makes testing easier.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from ..tasks.task_models import Task
from .events import Event

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]
Dispatch = Callable[[Event], None]

Workflow = Callable[[Event, Dispatch], Awaitable[None]]
# A workflow receives the triggering event and the dispatch entry point.


class TaskSource(Protocol):
    """
    Remote source of tasks (the fetch capability).

    Must either return a sequence of tasks or raise. Transport, retries and
    caching are the implementation's business.
    """

    async def fetch_tasks(self) -> Sequence[Task]: ...
