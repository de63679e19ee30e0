"""Transient operator notifications (the dashboard's toast messages)."""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

_MAX_KEPT = 50


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    level: NotificationLevel
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    """Collects one-line notifications until the view drains them."""

    def __init__(self, maxlen: int = _MAX_KEPT) -> None:
        self._queue: deque[Notification] = deque(maxlen=maxlen)

    def push(self, level: NotificationLevel, message: str) -> Notification:
        note = Notification(level=level, message=message)
        self._queue.append(note)
        return note

    def success(self, message: str) -> Notification:
        return self.push(NotificationLevel.SUCCESS, message)

    def info(self, message: str) -> Notification:
        return self.push(NotificationLevel.INFO, message)

    def warning(self, message: str) -> Notification:
        return self.push(NotificationLevel.WARNING, message)

    def error(self, message: str) -> Notification:
        return self.push(NotificationLevel.ERROR, message)

    def peek(self) -> list[Notification]:
        return list(self._queue)

    def drain(self) -> list[Notification]:
        notes = list(self._queue)
        self._queue.clear()
        return notes
