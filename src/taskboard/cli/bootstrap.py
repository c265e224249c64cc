# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- picks the concrete task source,
- wires the reducer, effect runner and store together,
- tears them down on shutdown.
"""

from __future__ import annotations

import asyncio
import logging

from ..config import Settings, get_settings
from ..core.effects import build_effect_runner
from ..core.ports import TaskSource
from ..core.reducer import transition
from ..core.store import Store
from ..tasks.task_sources import DemoTaskSource, HttpTaskSource

logger = logging.getLogger(__name__)


def build_task_source(settings: Settings) -> TaskSource:
    """
    Pick the task source from settings.

    Falls back to the demo source when "http" is selected without a URL.
    """
    if settings.task_source == "http":
        if settings.tasks_url:
            logger.info("Using HTTP task source url=%s", settings.tasks_url)
            return HttpTaskSource(settings.tasks_url, timeout_seconds=settings.fetch_timeout_seconds)
        logger.warning("TASKBOARD_TASKS_URL is empty; falling back to the demo task source.")

    logger.info("Using demo task source (delay=%.1fs)", settings.demo_delay_seconds)
    return DemoTaskSource(delay_seconds=settings.demo_delay_seconds)


def create_store(
    *,
    settings: Settings | None = None,
    source: TaskSource | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Store:
    """
    Build the application store.

    Keeping settings and source injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if source is None:
        if settings is None:
            settings = get_settings()
        source = build_task_source(settings)

    effects = build_effect_runner(source, loop=loop)
    return Store(reducer=transition, effects=effects)


async def shutdown_store(store: Store, source: TaskSource | None = None) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    effects = store.effects
    if effects is not None:
        try:
            await effects.aclose()
        except Exception:
            logger.exception("Failed to stop in-flight workflows.")

    aclose = getattr(source, "aclose", None)
    if aclose is not None:
        try:
            await aclose()
        except Exception:
            logger.debug("Task source close failed.", exc_info=True)
