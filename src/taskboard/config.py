# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Bootstrap code takes settings as a parameter; only the CLI reads the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"

TASK_SOURCES = ("demo", "http")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import find_dotenv, load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(find_dotenv(usecwd=True), override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str = "taskboard"
    log_level: str = "INFO"
    data_dir: Path = Path(".local/taskboard")

    # ---- Task source ----
    task_source: str = "demo"
    tasks_url: str = ""
    fetch_timeout_seconds: float = 10.0
    demo_delay_seconds: float = 1.0

    # ---- Startup / connectors ----
    fetch_on_start: bool = True
    console_enabled: bool = True

    @staticmethod
    def from_env() -> "Settings":
        _load_dotenv_if_available()

        task_source = _env(_k("TASK_SOURCE"), "demo").strip().lower()
        if task_source not in TASK_SOURCES:
            task_source = "demo"

        return Settings(
            app_name=_env(_k("APP_NAME"), "taskboard") or "taskboard",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/taskboard")),
            task_source=task_source,
            tasks_url=_env(_k("TASKS_URL"), "").strip(),
            fetch_timeout_seconds=max(0.1, _env_float(_k("FETCH_TIMEOUT_SECONDS"), 10.0)),
            demo_delay_seconds=max(0.0, _env_float(_k("DEMO_DELAY_SECONDS"), 1.0)),
            fetch_on_start=_env_bool(_k("FETCH_ON_START"), True),
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process settings, read from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
