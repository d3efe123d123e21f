"""Non-blocking user notifications (toasts).

Views post notices here instead of raising. A sink callback can render
them as they arrive; the CLI uses one that prints with Rich.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class NoticeLevel(str, Enum):
    """Severity of a notification."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: NoticeLevel
    message: str


class Notifier:
    """Collects notifications in the order they were posted."""

    def __init__(self, sink: Optional[Callable[[Notification], None]] = None):
        self._sink = sink
        self._pending: list[Notification] = []

    def notify(self, level: NoticeLevel, message: str) -> Notification:
        notice = Notification(level=level, message=message)
        self._pending.append(notice)
        if self._sink is not None:
            self._sink(notice)
        return notice

    def success(self, message: str) -> Notification:
        return self.notify(NoticeLevel.SUCCESS, message)

    def info(self, message: str) -> Notification:
        return self.notify(NoticeLevel.INFO, message)

    def error(self, message: str) -> Notification:
        return self.notify(NoticeLevel.ERROR, message)

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    @property
    def errors(self) -> list[str]:
        return [n.message for n in self._pending if n.level == NoticeLevel.ERROR]

    def drain(self) -> list[Notification]:
        """Return and clear all pending notifications."""
        pending, self._pending = self._pending, []
        return pending
