# tests/test_reducer.py

from __future__ import annotations

from dataclasses import dataclass

from taskboard.core import events as ev
from taskboard.core.events import Event
from taskboard.core.reducer import make_transition
from taskboard.core.state import INITIAL_STATE, AppState, LoadStatus
from taskboard.tasks.task_models import SequentialIdGenerator, Task


@dataclass(frozen=True)
class Ping(Event):
    kind = "ping"


def test_unrecognized_event_returns_same_state(reducer, sample_tasks) -> None:
    for state in (INITIAL_STATE, AppState(tasks=sample_tasks, loading=True)):
        assert reducer(state, Ping()) is state


def test_fetch_request_sets_loading_and_clears_error(reducer, sample_tasks) -> None:
    state = AppState(tasks=sample_tasks, error="boom")
    new = reducer(state, ev.fetch_tasks_request())

    assert new.loading is True
    assert new.error is None
    assert new.tasks == sample_tasks
    assert new.status is LoadStatus.LOADING
    # input untouched
    assert state.error == "boom"
    assert state.loading is False


def test_fetch_success_replaces_tasks(reducer, sample_tasks) -> None:
    state = AppState(tasks=(Task(id=9, title="old"),), loading=True)
    new = reducer(state, ev.fetch_tasks_success(sample_tasks))

    assert new.loading is False
    assert new.tasks == sample_tasks
    assert new.status is LoadStatus.IDLE


def test_fetch_failure_keeps_tasks(reducer, sample_tasks) -> None:
    state = AppState(tasks=sample_tasks, loading=True)
    new = reducer(state, ev.fetch_tasks_failure("timeout"))

    assert new.loading is False
    assert new.error == "timeout"
    assert new.tasks == sample_tasks
    assert new.status is LoadStatus.ERROR


def test_add_task_appends_with_fresh_id(reducer) -> None:
    new = reducer(INITIAL_STATE, ev.add_task("x"))

    assert len(new.tasks) == 1
    task = new.tasks[0]
    assert task.title == "x"
    assert task.completed is False

    newer = reducer(new, ev.add_task("y", completed=True))
    assert [t.title for t in newer.tasks] == ["x", "y"]
    assert newer.tasks[1].id != task.id
    assert newer.tasks[1].completed is True


def test_add_task_never_reuses_a_server_id() -> None:
    reducer = make_transition(SequentialIdGenerator(start=1))
    state = AppState(tasks=(Task(id=1, title="a"), Task(id=2, title="b")))

    new = reducer(state, ev.add_task("c"))
    assert [t.id for t in new.tasks] == [1, 2, 3]


def test_update_matching_task_only(reducer) -> None:
    state = AppState(
        tasks=(
            Task(id=1, title="A", completed=False),
            Task(id=2, title="B", completed=True),
        )
    )
    new = reducer(state, ev.update_task(1, completed=True))

    assert new.tasks == (
        Task(id=1, title="A", completed=True),
        Task(id=2, title="B", completed=True),
    )
    assert new.tasks[1] is state.tasks[1]


def test_update_unknown_id_is_ignored(reducer, sample_tasks) -> None:
    state = AppState(tasks=sample_tasks)
    new = reducer(state, ev.update_task(5, completed=True))
    assert new.tasks == sample_tasks
    assert new is state


def test_remove_task(reducer, sample_tasks) -> None:
    state = AppState(tasks=sample_tasks)

    new = reducer(state, ev.remove_task(1))
    assert [t.id for t in new.tasks] == [2]

    assert reducer(new, ev.remove_task(1)) is new


def test_replay_is_deterministic(sample_tasks) -> None:
    events = [
        ev.fetch_tasks_request(),
        ev.fetch_tasks_success(sample_tasks),
        ev.add_task("c"),
        ev.update_task(2, title="B2"),
        ev.add_task("d", completed=True),
        ev.remove_task(1),
        ev.fetch_tasks_request(),
        ev.fetch_tasks_failure("timeout"),
    ]

    def replay() -> AppState:
        reducer = make_transition(SequentialIdGenerator(start=50))
        state = INITIAL_STATE
        for e in events:
            state = reducer(state, e)
        return state

    first, second = replay(), replay()
    assert first == second
    assert [t.title for t in first.tasks] == ["B2", "c", "d"]
    assert first.error == "timeout"
