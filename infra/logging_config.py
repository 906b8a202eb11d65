# infra/logging_config.py
from __future__ import annotations
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.path import user_data_dir
from infra.operational_support import TraceIdLogFilter, install_global_exception_hooks

LOG_LEVEL_ENV = "WBL_LOG_LEVEL"
LOG_FILE_NAME = "app.log"

_FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"


def _resolve_level(level: int | None) -> int:
    if level is not None:
        return level
    name = (os.getenv(LOG_LEVEL_ENV) or "").strip().upper()
    resolved = logging.getLevelName(name) if name else logging.INFO
    return resolved if isinstance(resolved, int) else logging.INFO


def _build_handlers(log_file: Path) -> list[logging.Handler]:
    trace_filter = TraceIdLogFilter()

    file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    handlers: list[logging.Handler] = [file_handler, console]
    for handler in handlers:
        handler.addFilter(trace_filter)
    return handlers


def setup_logging(level: int | None = None, log_dir: Path | None = None) -> Path:
    """
    Route the root logger to ``<data dir>/logs/app.log`` (1 MB x 5 rotation) and the console.

    ``level`` defaults to ``WBL_LOG_LEVEL`` or INFO. Calling it again replaces
    the handlers instead of stacking them. Returns the log file path.
    """
    log_dir = log_dir or (user_data_dir() / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    root.handlers.clear()
    for handler in _build_handlers(log_file):
        root.addHandler(handler)

    root.info("Logging initialized. Log file at %s", log_file)
    install_global_exception_hooks()
    return log_file


__all__ = ["setup_logging"]
