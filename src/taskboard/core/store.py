# src/taskboard/core/store.py

from __future__ import annotations

"""
Store: owner of the current AppState.

dispatch(event) order, for every event:
1. state = reducer(state, event)
2. listeners subscribed at the start of this dispatch are called (no arguments)
3. the event is handed to the effect runner (which may launch workflows)

Dispatches issued while another dispatch is running on the same thread
(from a listener, or a workflow resumed synchronously) are queued and processed
FIFO before the outermost dispatch() returns. Dispatches from other threads
wait on the store lock, so read-reduce-replace-notify is atomic.
"""

import itertools
import logging
import threading
from collections import deque

from .effects import EffectRunner
from .events import Event
from .ports import Listener, Unsubscribe
from .reducer import Reducer, transition
from .state import INITIAL_STATE, AppState

logger = logging.getLogger(__name__)


class Store:
    def __init__(
        self,
        reducer: Reducer = transition,
        initial_state: AppState = INITIAL_STATE,
        effects: EffectRunner | None = None,
    ) -> None:
        self._reducer = reducer
        self._state = initial_state
        self._effects = effects

        self._listeners: dict[int, Listener] = {}
        self._tokens = itertools.count(1)

        self._lock = threading.RLock()
        self._queue: deque[Event] = deque()
        self._dispatching = False

    @property
    def effects(self) -> EffectRunner | None:
        return self._effects

    def get_state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        Register a zero-argument listener called after every dispatch.

        Returns an idempotent unsubscribe function.
        """
        if not callable(listener):
            raise TypeError("listener must be callable")

        with self._lock:
            token = next(self._tokens)
            self._listeners[token] = listener

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(token, None)

        return unsubscribe

    def dispatch(self, event: Event) -> None:
        if not isinstance(event, Event):
            raise TypeError(f"dispatch() expects an Event, got {type(event).__name__}")

        with self._lock:
            self._queue.append(event)
            if self._dispatching:
                # Re-entrant call: the outer loop below picks it up.
                return

            self._dispatching = True
            try:
                while self._queue:
                    self._process(self._queue.popleft())
            except Exception:
                dropped = len(self._queue)
                self._queue.clear()
                if dropped:
                    logger.error("Dispatch failed; dropped %d queued event(s)", dropped)
                raise
            finally:
                self._dispatching = False

    def _process(self, event: Event) -> None:
        prev = self._state
        self._state = self._reducer(prev, event)
        logger.debug(
            "dispatch kind=%s changed=%s tasks=%d loading=%s",
            event.kind,
            self._state is not prev,
            len(self._state.tasks),
            self._state.loading,
        )

        for listener in list(self._listeners.values()):
            try:
                listener()
            except Exception:
                logger.exception("Store listener failed (kind=%s)", event.kind)

        if self._effects is not None:
            self._effects.observe(event, self.dispatch)
