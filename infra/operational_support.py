from __future__ import annotations

import logging
import sys
import threading
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator

from infra.version import get_app_version

logger = logging.getLogger(__name__)

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("wbl_trace_id", default=None)


def create_trace_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"trc-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = _TRACE_ID_CTX.get()
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Tag every log record emitted inside the block with one trace id."""
    normalized = (trace_id or "").strip() or create_trace_id()
    token = _TRACE_ID_CTX.set(normalized)
    try:
        yield normalized
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


_HOOKS_INSTALLED = False


def install_global_exception_hooks() -> None:
    """Route uncaught exceptions (main and worker threads) through logging before the default hooks run."""
    global _HOOKS_INSTALLED
    if _HOOKS_INSTALLED:
        return

    previous_sys_hook = sys.excepthook

    def _sys_hook(exc_type: type[BaseException], exc_value: BaseException, exc_tb: Any) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            logger.critical(
                "Unhandled exception (app %s): %s",
                get_app_version(),
                exc_value,
                exc_info=(exc_type, exc_value, exc_tb),
            )
        previous_sys_hook(exc_type, exc_value, exc_tb)

    sys.excepthook = _sys_hook

    previous_thread_hook = threading.excepthook

    def _thread_hook(args: Any) -> None:
        thread_name = getattr(getattr(args, "thread", None), "name", "worker-thread")
        logger.critical(
            "Unhandled exception in thread %s: %s",
            thread_name,
            args.exc_value,
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )
        previous_thread_hook(args)

    threading.excepthook = _thread_hook
    _HOOKS_INSTALLED = True


__all__ = [
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "install_global_exception_hooks",
]
