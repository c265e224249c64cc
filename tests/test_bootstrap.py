# tests/test_bootstrap.py

from __future__ import annotations

import asyncio

import pytest

from taskboard.cli.bootstrap import build_task_source, create_store, shutdown_store
from taskboard.config import Settings
from taskboard.core import events as ev
from taskboard.tasks.task_sources import DEMO_TASKS, DemoTaskSource, HttpTaskSource

from .fakes import FakeTaskSource


def test_build_task_source_picks_demo_by_default() -> None:
    assert isinstance(build_task_source(Settings()), DemoTaskSource)


def test_build_task_source_http() -> None:
    source = build_task_source(Settings(task_source="http", tasks_url="https://example.test/t"))
    assert isinstance(source, HttpTaskSource)
    assert source.url == "https://example.test/t"


def test_build_task_source_http_without_url_falls_back() -> None:
    assert isinstance(build_task_source(Settings(task_source="http")), DemoTaskSource)


@pytest.mark.asyncio
async def test_create_store_wires_fetch_workflow(sample_tasks) -> None:
    source = FakeTaskSource(sample_tasks)
    store = create_store(source=source)

    store.dispatch(ev.fetch_tasks_request())
    await store.effects.wait_idle()

    assert source.calls == 1
    assert store.get_state().tasks == sample_tasks


@pytest.mark.asyncio
async def test_demo_settings_end_to_end() -> None:
    store = create_store(settings=Settings(demo_delay_seconds=0))

    store.dispatch(ev.fetch_tasks_request())
    await store.effects.wait_idle()

    assert store.get_state().tasks == DEMO_TASKS


@pytest.mark.asyncio
async def test_shutdown_cancels_and_closes(sample_tasks) -> None:
    class ClosableSource(FakeTaskSource):
        closed = False

        async def aclose(self) -> None:
            self.closed = True

    source = ClosableSource(sample_tasks, gate=asyncio.Event())
    store = create_store(source=source)
    store.dispatch(ev.fetch_tasks_request())
    await asyncio.sleep(0)

    await shutdown_store(store, source)

    assert store.effects.pending == 0
    assert source.closed is True
