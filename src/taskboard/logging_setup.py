# src/taskboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "taskboard.log"

# Per-dispatch chatter that only belongs in the file log.
DEFAULT_CONSOLE_FLOORS: Mapping[str, int] = {
    "taskboard.core.store": logging.WARNING,
    "taskboard.core.reducer": logging.WARNING,
}

# Third-party loggers capped at the logger level (applies to the file too).
_QUIET_LOGGERS: Mapping[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "asyncio": logging.WARNING,
}

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Map "debug" / "WARNING" / 10 to a logging level; unknown names fall back to default."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable while the REPL prompt is open.

    taskboard loggers pass unless a floor is configured for them (store and
    reducer chatter by default). Captured Python warnings and anything from
    other packages only pass at ERROR+.
    """

    def __init__(self, floors: Mapping[str, int] | None = None) -> None:
        super().__init__()
        self._floors = dict(DEFAULT_CONSOLE_FLOORS if floors is None else floors)

    def _floor_for(self, name: str) -> int | None:
        # longest configured prefix wins: "taskboard.core" covers its children
        best: str | None = None
        for prefix in self._floors:
            if name == prefix or name.startswith(prefix + "."):
                if best is None or len(prefix) > len(best):
                    best = prefix
        return None if best is None else self._floors[best]

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "taskboard" or name.startswith("taskboard."):
            floor = self._floor_for(name)
            return floor is None or record.levelno >= floor

        return record.levelno >= logging.ERROR


def _console_handler(level: int, floors: Mapping[str, int] | None) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(_ConsoleNoiseFilter(floors))
    return handler


def _file_handler(path: Path, level: int, max_bytes: int, backups: int) -> logging.Handler:
    if max_bytes > 0:
        handler: logging.Handler = RotatingFileHandler(
            str(path), maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
    else:
        handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(level)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskboard",
    console_level: str | int = logging.INFO,
    file_level: str | int = logging.DEBUG,
    console_floors: Mapping[str, int] | None = None,
    max_bytes: int = 1_000_000,
    backups: int = 3,
) -> Path:
    """
    Route everything to a rotating file log and a filtered stderr console.

    Levels accept names ("debug") or numbers. Replaces existing root handlers,
    so calling it twice does not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)
        if getattr(h, "_taskboard_owned", False):
            h.close()

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    handlers = (
        _console_handler(resolve_level(console_level), console_floors),
        _file_handler(log_file, resolve_level(file_level, logging.DEBUG), max_bytes, backups),
    )
    for h in handlers:
        h._taskboard_owned = True  # type: ignore[attr-defined]
        h.setFormatter(fmt)
        root.addHandler(h)

    logging.captureWarnings(True)

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    return log_file
