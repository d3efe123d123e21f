"""Shared pieces for the page views."""

import logging

from ..errors import BookCircleError, ServiceError
from ..notifications import Notifier

logger = logging.getLogger(__name__)

DIRECTORY_ROUTE = "directory"
LOGIN_ROUTE = "login"


def book_route(book_id: str) -> str:
    """Route to a book's detail page."""
    return f"book:{book_id}"


def user_message(error: BookCircleError, fallback: str) -> str:
    """Message to show for a failed operation.

    Persistence failures are opaque to users, so they get the fallback.
    """
    if isinstance(error, ServiceError):
        return fallback
    return str(error) or fallback


def report_failure(notifier: Notifier, error: BookCircleError, fallback: str) -> str:
    """Log a caught failure and post it as an error notification."""
    message = user_message(error, fallback)
    logger.warning("%s: %s", fallback, error)
    notifier.error(message)
    return message


class RequestTracker:
    """Generation tokens for discarding stale responses.

    Each fetch calls ``begin()``; only the result carrying the newest token
    may be applied.
    """

    def __init__(self):
        self._generation = 0

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation
