# tests/conftest.py

from __future__ import annotations

import pytest

from taskboard.core.effects import build_effect_runner
from taskboard.core.reducer import Reducer, make_transition
from taskboard.core.store import Store
from taskboard.tasks.task_models import SequentialIdGenerator, Task

from .fakes import FakeTaskSource


@pytest.fixture()
def reducer() -> Reducer:
    """
    Transition function with counter ids (100, 101, ...).

    Clock-based ids are fine in production but make assertions awkward.
    """
    return make_transition(SequentialIdGenerator(start=100))


@pytest.fixture()
def sample_tasks() -> tuple[Task, ...]:
    return (
        Task(id=1, title="A", completed=False),
        Task(id=2, title="B", completed=True),
    )


@pytest.fixture()
def source(sample_tasks: tuple[Task, ...]) -> FakeTaskSource:
    return FakeTaskSource(sample_tasks)


@pytest.fixture()
def store(reducer: Reducer) -> Store:
    """Store without effects: pure dispatch/reduce/notify."""
    return Store(reducer=reducer)


@pytest.fixture()
def effect_store(reducer: Reducer, source: FakeTaskSource) -> Store:
    """
    Store wired with the fetch workflow over a FakeTaskSource.

    The runner binds to the running loop on first use, so async tests can use it directly.
    """
    return Store(reducer=reducer, effects=build_effect_runner(source))
