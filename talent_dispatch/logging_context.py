"""Audit context for booking mutations.

Every assignment mutation runs on behalf of an administrator and targets
one booking. ``acting_as`` scopes both ids to a block; while it is open,
loggers from ``get_actor_logger`` stamp ``actor_id`` and ``booking_id``
on each record. Leaving the block restores whatever was set before, so
one admin's id never leaks into the next operation's records.

Usage:
    logger = get_actor_logger(__name__)

    with acting_as("admin-42", booking_id="bk-1001"):
        logger.info("Assigning talent")  # actor_id="admin-42", booking_id="bk-1001"
    logger.info("Idle")                  # actor_id="NO_ACTOR", booking_id="-"
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_ACTOR = "NO_ACTOR"
NO_BOOKING = "-"

_actor_id: ContextVar[str] = ContextVar("actor_id", default=NO_ACTOR)
_booking_id: ContextVar[str] = ContextVar("booking_id", default=NO_BOOKING)


@contextmanager
def acting_as(actor_id: str, booking_id: Optional[str] = None) -> Iterator[None]:
    actor_token = _actor_id.set(actor_id)
    booking_token = _booking_id.set(booking_id or NO_BOOKING)
    try:
        yield
    finally:
        _booking_id.reset(booking_token)
        _actor_id.reset(actor_token)


def get_actor_id() -> str:
    return _actor_id.get()


class AuditContextFilter(logging.Filter):
    """Copies the current actor and booking ids onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.actor_id = _actor_id.get()  # type: ignore[attr-defined]
        record.booking_id = _booking_id.get()  # type: ignore[attr-defined]
        return True


def get_actor_logger(name: str) -> logging.Logger:
    """Return a logger with the AuditContextFilter attached.

    Formatters can then use ``%(actor_id)s`` and ``%(booking_id)s``.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, AuditContextFilter) for f in logger.filters):
        logger.addFilter(AuditContextFilter())
    return logger
