# tests/test_commands.py

from __future__ import annotations

import asyncio

import pytest

from taskboard.cli.commands import CommandRegistry, registry
from taskboard.core.store import Store

from .fakes import FakeTaskSource


def test_command_registry_routes_2_and_3_params(store: Store) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(store, args):
        called["h2"] += 1
        return "h2"

    def h3(store, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    notes: list[str] = []
    assert reg.handle(store, "/a x") == "h2"
    assert reg.handle(store, "/b y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(store: Store) -> None:
    reg = CommandRegistry()
    assert reg.handle(store, "hello") is None
    assert "Unknown command" in (reg.handle(store, "/nope") or "")
    assert "Empty command" in (reg.handle(store, "/") or "")


def test_help_lists_commands(store: Store) -> None:
    text = registry.handle(store, "/help") or ""
    for name in ("add", "done", "toggle", "rename", "remove", "fetch", "list"):
        assert f"/{name}" in text


def test_add_toggle_rename_remove_flow(store: Store) -> None:
    assert registry.handle(store, "/list") == "No tasks. Use /add <title> or /fetch."

    reply = registry.handle(store, "/add Buy milk") or ""
    assert reply.startswith("Added: [ ]")
    task = store.get_state().tasks[0]
    assert task.title == "Buy milk"

    registry.handle(store, f"/done {task.id}")
    assert store.get_state().find(task.id).completed is True

    registry.handle(store, f"/toggle {task.id}")
    assert store.get_state().find(task.id).completed is False

    registry.handle(store, f"/rename {task.id} Buy oat milk")
    assert store.get_state().find(task.id).title == "Buy oat milk"

    listing = registry.handle(store, "/ls") or ""
    assert f"[ ] {task.id}  Buy oat milk" in listing

    assert registry.handle(store, f"/rm {task.id}") == f"Removed task {task.id}."
    assert store.get_state().tasks == ()


def test_commands_report_bad_ids(store: Store) -> None:
    assert registry.handle(store, "/done") == "Usage: /done <id>"
    assert registry.handle(store, "/undo abc") == "Usage: /undo <id>"
    assert registry.handle(store, "/toggle 42") == "No task with id 42."
    assert registry.handle(store, "/rename 42") == "Usage: /rename <id> <title>"
    assert registry.handle(store, "/remove 42") == "No task with id 42."
    assert registry.handle(store, "/add") == "Usage: /add <title>"


@pytest.mark.asyncio
async def test_fetch_and_status(effect_store: Store, source: FakeTaskSource) -> None:
    gate = asyncio.Event()
    source.gate = gate
    notes: list[str] = []

    assert registry.handle(effect_store, "/fetch", emit=notes.append) == "Fetching tasks..."
    assert registry.handle(effect_store, "/list") == "Loading..."
    assert "State: loading" in (registry.handle(effect_store, "/status") or "")

    registry.handle(effect_store, "/fetch", emit=notes.append)
    assert notes == ["A fetch is already in flight; starting another one."]

    gate.set()
    await effect_store.effects.wait_idle()

    status = registry.handle(effect_store, "/status") or ""
    assert "State: idle" in status
    assert "Tasks: 2 (1 done)" in status
    assert "Fetches in flight: 0" in status


@pytest.mark.asyncio
async def test_status_shows_last_error(effect_store: Store, source: FakeTaskSource) -> None:
    source.error = RuntimeError("timeout")
    registry.handle(effect_store, "/fetch")
    await effect_store.effects.wait_idle()

    assert registry.handle(effect_store, "/list") == "Error: timeout"
    assert "Last error: timeout" in (registry.handle(effect_store, "/status") or "")
