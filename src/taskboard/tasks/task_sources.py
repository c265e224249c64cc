# src/taskboard/tasks/task_sources.py

from __future__ import annotations

"""
Task sources (implementations of the TaskSource port).

- DemoTaskSource: offline source with a fixed task list and an artificial delay
- HttpTaskSource: GET a JSON task list over HTTP (httpx)
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..core.errors import TaskSourceError
from .task_models import Task

logger = logging.getLogger(__name__)

DEMO_TASKS: tuple[Task, ...] = (
    Task(id=1, title="Check email", completed=False),
    Task(id=2, title="Finish report", completed=True),
    Task(id=3, title="Prepare meeting", completed=False),
)


class DemoTaskSource:
    """
    Offline deterministic source used when no remote endpoint is configured.

    Behaves like a slow API: waits `delay_seconds`, then returns the demo list.
    """

    def __init__(self, *, delay_seconds: float = 1.0, tasks: Sequence[Task] = DEMO_TASKS) -> None:
        self._delay = max(0.0, float(delay_seconds))
        self._tasks = tuple(tasks)

    async def fetch_tasks(self) -> Sequence[Task]:
        if self._delay:
            await asyncio.sleep(self._delay)
        return self._tasks


def _friendly_http_error(exc: Exception) -> str:
    """Short, user-facing message for a failed fetch."""
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        if code in (401, 403):
            return f"access denied (HTTP {code})"
        if code == 404:
            return "tasks endpoint not found (HTTP 404)"
        if code >= 500:
            return f"server error (HTTP {code})"
        return f"request failed (HTTP {code})"
    if isinstance(exc, httpx.TransportError):
        return "connection failed"
    return str(exc) or exc.__class__.__name__


def _extract_records(payload: Any) -> list[Any]:
    # Accept either a bare list or {"tasks": [...]}.
    if isinstance(payload, dict):
        payload = payload.get("tasks")
    if not isinstance(payload, list):
        raise TaskSourceError("unexpected response: expected a list of tasks")
    return payload


class HttpTaskSource:
    """
    Fetch tasks with a single GET request.

    Notes:
    - one request per fetch, no retries (a new fetch request is the retry)
    - the client is created lazily and reused; call aclose() on shutdown
    - every failure is raised as TaskSourceError with a short message
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("HttpTaskSource requires a URL")
        self._url = url
        self._timeout = httpx.Timeout(timeout_seconds, connect=min(5.0, timeout_seconds))
        self._headers = dict(headers or {})
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Accept": "application/json", **self._headers},
                transport=self._transport,
            )
        return self._client

    async def fetch_tasks(self) -> Sequence[Task]:
        client = self._get_client()
        logger.debug("GET %s", self._url)
        try:
            response = await client.get(self._url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise TaskSourceError(_friendly_http_error(e)) from e
        except ValueError as e:
            raise TaskSourceError("invalid JSON in response") from e

        records = _extract_records(payload)
        try:
            tasks = [Task.from_record(r) for r in records]
        except ValueError as e:
            raise TaskSourceError(f"invalid task record: {e}") from e

        logger.debug("GET %s -> %d task(s)", self._url, len(tasks))
        return tasks

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
