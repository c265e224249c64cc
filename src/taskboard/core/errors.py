# src/taskboard/core/errors.py

from __future__ import annotations


class TaskboardError(Exception):
    """Base class for errors raised by taskboard itself."""


class EffectRunnerError(TaskboardError):
    """The effect runner cannot schedule a workflow (e.g. no event loop)."""


class TaskSourceError(TaskboardError):
    """
    A task source failed to produce tasks.

    The message is short and user-facing: it ends up in AppState.error.
    """
