"""Logging setup with run correlation context.

Every record carries the current ``run_id`` and ``phase`` (discover,
resolve, output). Both live in context variables, so asyncio tasks
spawned inside a phase inherit it.
"""

from __future__ import annotations

import contextvars
import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | phase=%(phase)s | "
    "%(name)s | %(message)s"
)

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "reader_run_id", default="-"
)
_PHASE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "reader_phase", default="-"
)


class _RunContextFilter(logging.Filter):
    """Stamp run_id/phase onto records before formatting."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get()
        record.phase = _PHASE_VAR.get()
        return True


def configure_structured_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure root logging with run/phase context.

    Logs go to ``stream`` (stderr by default) so stdout stays free for the
    JSON output of the CLI.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler(stream or sys.stderr))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(f, _RunContextFilter) for f in handler.filters):
            handler.addFilter(_RunContextFilter())


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate run correlation ID."""
    value = run_id or uuid.uuid4().hex[:12]
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    return _RUN_ID_VAR.get()


def get_phase() -> str:
    return _PHASE_VAR.get()


@contextmanager
def phase_scope(phase: str) -> Iterator[None]:
    """Temporarily set the phase reported in log records."""
    token = _PHASE_VAR.set(phase)
    try:
        yield
    finally:
        _PHASE_VAR.reset(token)
