# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the store, then runs the console REPL on an
asyncio loop until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import build_task_source, create_store, shutdown_store
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..core.events import fetch_tasks_request
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings: Settings) -> None:
    source = build_task_source(settings)
    store = create_store(settings=settings, source=source, loop=asyncio.get_running_loop())

    try:
        if settings.console_enabled:
            await run_console_loop(store, fetch_on_start=settings.fetch_on_start)
        else:
            logger.info("Console disabled. Fetching once and exiting.")
            store.dispatch(fetch_tasks_request())
            if store.effects is not None:
                await store.effects.wait_idle()
            state = store.get_state()
            logger.info(
                "Final state: status=%s tasks=%d error=%s",
                state.status.value,
                len(state.tasks),
                state.error,
            )
    finally:
        await shutdown_store(store, source)


def main() -> None:
    settings = get_settings()

    setup_logging(log_dir=settings.data_dir, console_level=settings.log_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
