# src/taskboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import CommandRegistry, format_tasks
from ..cli.commands import registry as command_registry
from ..core.events import fetch_tasks_request
from ..core.state import LoadStatus
from ..core.store import Store

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class StatusPrinter:
    """
    Store listener that reports loading/error transitions.

    Only prints when the load status changes, so plain edits stay quiet.
    """

    def __init__(self, store: Store) -> None:
        self._store = store
        self._last = store.get_state().status

    def __call__(self) -> None:
        state = self._store.get_state()
        status = state.status
        if status is self._last:
            return
        self._last = status

        if status is LoadStatus.LOADING:
            _print_ts("[TASKS] Loading...")
        elif status is LoadStatus.ERROR:
            _print_ts(f"[TASKS] Error: {state.error}")
        else:
            _print_ts(f"[TASKS] Loaded {len(state.tasks)} task(s).\n{format_tasks(state)}")


async def run_console_loop(
    store: Store,
    *,
    fetch_on_start: bool = True,
    registry: CommandRegistry | None = None,
) -> None:
    """
    Interactive REPL driving the store.

    input() runs in a worker thread so fetch workflows keep running on the loop
    while the user is typing.
    """
    reg = registry or command_registry
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    unsubscribe = store.subscribe(StatusPrinter(store))

    def emit(text: str) -> None:
        _print_ts(text)

    if fetch_on_start:
        store.dispatch(fetch_tasks_request())

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, ">>> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                reply = reg.handle(store, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is None:
                reply = "Commands start with '/'. Use /help to list them."
            _print_ts(reply)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
