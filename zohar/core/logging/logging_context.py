"""Logging context utilities for tagging records with the active emission."""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Hashable, Iterator, Optional

# Event currently being dispatched by emit() (safe across asyncio tasks)
_current_emission: ContextVar[Optional[Hashable]] = ContextVar(
    "current_emission", default=None
)


def get_current_emission() -> Optional[Hashable]:
    """Get the event name currently being dispatched, if any."""
    return _current_emission.get()


@contextmanager
def emission_context(event_name: Hashable) -> Iterator[None]:
    """
    Mark ``event_name`` as the active emission for the enclosed block.

    Nested emissions (a listener emitting another event) restore the
    outer event name on exit.
    """
    token = _current_emission.set(event_name)
    try:
        yield
    finally:
        _current_emission.reset(token)


class EmissionContextFilter(logging.Filter):
    """Handler filter that adds the active emission to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add emission_event to log record if available."""
        event_name = get_current_emission()
        record.emission_event = "none" if event_name is None else str(event_name)
        return True


def _emission_record_factory(previous: Callable[..., logging.LogRecord]):
    """Wrap ``previous`` so every record it creates carries emission_event."""

    def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = previous(*args, **kwargs)
        event_name = get_current_emission()
        record.emission_event = "none" if event_name is None else str(event_name)
        return record

    factory.emission_aware = True
    return factory


def setup_emission_logging():
    """
    Tag every log record with the active emission.

    Installs a record factory, so records from any named logger are tagged
    when created. Safe to call repeatedly.
    """
    current = logging.getLogRecordFactory()
    if not getattr(current, "emission_aware", False):
        logging.setLogRecordFactory(_emission_record_factory(current))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with emission context support.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    setup_emission_logging()
    return logging.getLogger(name)
