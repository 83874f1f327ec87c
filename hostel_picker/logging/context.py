"""Context propagation for structured logging.

Fields pushed here (run_id, destination, ...) are attached to every log
record emitted inside the scope by ContextualFilter. Storage is a
ContextVar, so concurrent runs in separate threads or tasks do not leak
fields into each other.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("hostel_picker_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Returns:
        Token for pop_log_context() to restore the previous state

    Example:
        >>> token = push_log_context(run_id="abc123")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context captured by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly useful in tests."""
    LogContextVar.set({})


@contextmanager
def log_context(**kwargs) -> Iterator[Dict[str, Any]]:
    """Scope logging context fields to a with-block.

    Example:
        >>> with log_context(run_id="abc123", destination="lima"):
        ...     logger.info("Scoring candidates")
    """
    token = push_log_context(**kwargs)
    try:
        yield get_log_context()
    finally:
        pop_log_context(token)
