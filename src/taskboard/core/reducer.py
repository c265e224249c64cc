# src/taskboard/core/reducer.py

from __future__ import annotations

"""
Transition function: (state, event) -> state.

Rules:
- never mutate the input state (always build a new AppState via replace())
- unknown events return the input state object itself
- no I/O, no asyncio; the only outside input is the id generator used by add_task
"""

import logging
from collections.abc import Callable
from dataclasses import replace

from ..tasks.task_models import IdGenerator, create_task
from .events import (
    Event,
    FetchTasksFailed,
    FetchTasksRequested,
    FetchTasksSucceeded,
    TaskAdded,
    TaskRemoved,
    TaskUpdated,
)
from .state import AppState

logger = logging.getLogger(__name__)

Reducer = Callable[[AppState, Event], AppState]


def make_transition(ids: IdGenerator | None = None) -> Reducer:
    """Build a transition function bound to an id generator (None -> default clock ids)."""

    def transition(state: AppState, event: Event) -> AppState:
        if isinstance(event, FetchTasksRequested):
            return replace(state, loading=True, error=None)

        if isinstance(event, FetchTasksSucceeded):
            # error was already cleared by the request that started this fetch
            return replace(state, loading=False, tasks=tuple(event.tasks))

        if isinstance(event, FetchTasksFailed):
            return replace(state, loading=False, error=event.error)

        if isinstance(event, TaskAdded):
            task = create_task(
                event.title,
                event.completed,
                taken_ids=state.task_ids,
                ids=ids,
            )
            return replace(state, tasks=state.tasks + (task,))

        if isinstance(event, TaskUpdated):
            patch = event.patch
            found = False
            new_tasks = []
            for t in state.tasks:
                if t.id == patch.id:
                    found = True
                    new_tasks.append(patch.apply_to(t))
                else:
                    new_tasks.append(t)
            if not found:
                logger.debug("update_task: no task with id=%s; ignored", patch.id)
                return state
            return replace(state, tasks=tuple(new_tasks))

        if isinstance(event, TaskRemoved):
            kept = tuple(t for t in state.tasks if t.id != event.task_id)
            if len(kept) == len(state.tasks):
                logger.debug("remove_task: no task with id=%s; ignored", event.task_id)
                return state
            return replace(state, tasks=kept)

        logger.debug("Unrecognized event kind=%s; state unchanged", event.kind)
        return state

    return transition


transition = make_transition()
