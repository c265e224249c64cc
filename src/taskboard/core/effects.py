# src/taskboard/core/effects.py

from __future__ import annotations

"""
Effect runner (saga-style middleware).

The store hands every dispatched event to EffectRunner.observe(). For each
workflow registered under the event's kind, one asyncio task is launched per
event instance. Workflows feed their results back through `dispatch`.

There is no single-flight guard: two fetch requests start two fetches, and
their completion order is whatever the source makes it.
"""

import asyncio
import logging
import threading
from collections import defaultdict

from .errors import EffectRunnerError
from .events import Event, EventKind, fetch_tasks_failure, fetch_tasks_success
from .ports import Dispatch, TaskSource, Workflow

logger = logging.getLogger(__name__)


class EffectRunner:
    """
    Standing listener keyed by event kind.

    Persistent state is limited to the registration table and the set of
    in-flight asyncio tasks (kept so they are not garbage-collected and can be
    awaited or cancelled on shutdown).
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._workflows: dict[str, list[Workflow]] = defaultdict(list)
        self._loop = loop
        self._running: set[asyncio.Task[None]] = set()
        self._lock = threading.Lock()

    # ---- registration ----

    def register(self, kind: str, workflow: Workflow) -> None:
        with self._lock:
            self._workflows[str(kind)].append(workflow)
        logger.debug("Registered workflow %s for kind=%s", _workflow_name(workflow), kind)

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Pin the loop workflows run on (needed when dispatching from other threads)."""
        self._loop = loop

    @property
    def pending(self) -> int:
        return len(self._running)

    # ---- dispatch hook ----

    def observe(self, event: Event, dispatch: Dispatch) -> None:
        with self._lock:
            workflows = list(self._workflows.get(str(event.kind), ()))
        if not workflows:
            return

        for workflow in workflows:
            self._launch(workflow, event, dispatch)

    def _launch(self, workflow: Workflow, event: Event, dispatch: Dispatch) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        bound = self._loop
        if running is not None and (bound is None or bound is running or bound.is_closed()):
            self._loop = running
            self._spawn(workflow, event, dispatch)
            return

        loop = self._loop
        if loop is None or loop.is_closed():
            raise EffectRunnerError(
                f"No event loop available to run workflow for kind={event.kind}"
            )

        # Called from a foreign thread: hop onto the store's loop.
        loop.call_soon_threadsafe(self._spawn, workflow, event, dispatch)

    def _spawn(self, workflow: Workflow, event: Event, dispatch: Dispatch) -> None:
        name = f"{_workflow_name(workflow)}:{event.kind}"
        task = asyncio.get_running_loop().create_task(
            self._guard(workflow, event, dispatch), name=name
        )
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        logger.debug("Launched workflow %s (in flight: %d)", name, len(self._running))

    @staticmethod
    async def _guard(workflow: Workflow, event: Event, dispatch: Dispatch) -> None:
        # Last-resort boundary: a buggy workflow must not take the runner down.
        try:
            await workflow(event, dispatch)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception(
                "Workflow %s crashed on kind=%s", _workflow_name(workflow), event.kind
            )

    # ---- lifecycle ----

    async def wait_idle(self) -> None:
        """Wait until every in-flight workflow has finished (including ones they start)."""
        while self._running:
            await asyncio.gather(*tuple(self._running), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel in-flight workflows and wait for them to unwind."""
        tasks = tuple(self._running)
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Cancelled %d in-flight workflow(s)", len(tasks))


def _workflow_name(workflow: object) -> str:
    return getattr(workflow, "__qualname__", None) or type(workflow).__name__


def _error_text(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or exc.__class__.__name__


def fetch_tasks_workflow(source: TaskSource) -> Workflow:
    """
    Workflow for fetch_tasks_request: call the source, report the outcome.

    Any Exception from the source (or from normalizing its records) becomes a
    fetch_tasks_failure event; nothing escapes the workflow.
    """

    async def fetch_tasks(event: Event, dispatch: Dispatch) -> None:
        try:
            tasks = await source.fetch_tasks()
            outcome = fetch_tasks_success(tasks)
        except Exception as e:
            logger.warning("Fetching tasks failed: %s", _error_text(e))
            logger.debug("Fetch failure details", exc_info=True)
            dispatch(fetch_tasks_failure(_error_text(e)))
            return

        logger.info("Fetched %d task(s)", len(outcome.tasks))
        dispatch(outcome)

    return fetch_tasks


def build_effect_runner(
    source: TaskSource,
    loop: asyncio.AbstractEventLoop | None = None,
) -> EffectRunner:
    """Effect runner with the fetch workflow wired to `source`."""
    runner = EffectRunner(loop=loop)
    runner.register(EventKind.FETCH_TASKS_REQUEST, fetch_tasks_workflow(source))
    return runner
