"""Bulk messaging screen: choose recipients, write one message, send."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from adapters.student_adapter import StudentAdapter
from config.settings import get_settings
from errors import ActionInProgressError, AdminError
from models.student import BulkMessageResult, Student
from services.notifications import Notifier
from services.resource_page import error_detail
from services.selection import SelectionController

logger = logging.getLogger(__name__)


class BulkMessagePage:
    def __init__(self, students: StudentAdapter, notifier: Notifier | None = None) -> None:
        settings = get_settings()
        self.students = students
        self.notifier = notifier or Notifier()
        self.selection = SelectionController()
        self.roster: list[Student] = []
        self.message = ""
        self.max_length = settings.bulk_message_max_length
        self.loading = False
        self.sending = False

    async def load(self) -> bool:
        """Load the roster that backs the multi-select and the chips."""
        self.loading = True
        try:
            result = await self.students.list(1, get_settings().roster_fetch_limit)
        except AdminError as exc:
            self.notifier.error(f"Failed to load students: {error_detail(exc)}")
            return False
        finally:
            self.loading = False
        self.roster = list(result.items)
        return True

    # -- selection passthrough ------------------------------------------------

    def type_ids(self, text: str) -> set[int]:
        return self.selection.from_text(text)

    def select(self, ids: Iterable[int]) -> set[int]:
        return self.selection.from_select(ids)

    def dismiss(self, student_id: int) -> set[int]:
        return self.selection.remove_one(student_id)

    def selected_students(self) -> list[tuple[int, str]]:
        """Chips for selected ids that match a roster entry, in roster order."""
        return [(s.student_id, s.name) for s in self.roster if s.student_id in self.selection]

    # -- send ----------------------------------------------------------------

    async def send(self, message: str | None = None) -> BulkMessageResult | None:
        """Send *message* (or the current draft) to every selected student."""
        if self.sending:
            raise ActionInProgressError("send bulk message")
        if message is not None:
            self.message = message

        if not len(self.selection):
            self.notifier.warning("Select at least one student")
            return None
        if not self.message.strip():
            self.notifier.warning("Enter a message to send")
            return None
        if len(self.message) > self.max_length:
            self.notifier.warning(f"Message is longer than {self.max_length} characters")
            return None

        count = len(self.selection)
        self.sending = True
        try:
            result = await self.students.bulk_message(self.selection.selected, self.message)
        except AdminError as exc:
            self.notifier.error(f"Failed to send message: {error_detail(exc)}")
            return None
        finally:
            self.sending = False

        logger.info("bulk message sent to %d students", count)
        self.notifier.success(f"Message sent to {count} students")
        self.clear()
        return result

    def clear(self) -> None:
        self.selection.clear()
        self.message = ""

    def snapshot(self) -> dict[str, Any]:
        return {
            "text": self.selection.text,
            "selected": self.selection.selected,
            "chips": [{"student_id": sid, "name": name} for sid, name in self.selected_students()],
            "message": self.message,
            "students": [{"student_id": s.student_id, "name": s.name} for s in self.roster],
            "loading": self.loading,
            "sending": self.sending,
        }
