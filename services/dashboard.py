"""Process-wide dashboard session: one set of screens for one operator.

The screens share a :class:`Notifier`, and every HTTP response drains it so
each notification is shown exactly once.
"""

from __future__ import annotations

from typing import Any

from adapters.config_adapter import ConfigAdapter
from adapters.grade_adapter import GradeAdapter
from adapters.student_adapter import StudentAdapter
from services.admin_client import AdminClient, get_admin_client
from services.bulk_message import BulkMessagePage
from services.config_page import ConfigPage
from services.grade_page import GradePage
from services.notifications import Notifier
from services.student_page import StudentPage

_dashboard: Dashboard | None = None


class Dashboard:
    def __init__(self, client: AdminClient) -> None:
        self.client = client
        self.notifier = Notifier()
        students = StudentAdapter(client)
        self.students = StudentPage(students, self.notifier)
        self.grades = GradePage(GradeAdapter(client), students, self.notifier)
        self.bulk_message = BulkMessagePage(students, self.notifier)
        self.config = ConfigPage(ConfigAdapter(client), self.notifier)

    def respond(self, state: dict[str, Any], **extra: Any) -> dict[str, Any]:
        """Wrap a screen state with the notifications raised while producing it."""
        body = {"state": state, "notifications": [n.model_dump(mode="json") for n in self.notifier.drain()]}
        body.update(extra)
        return body


def get_dashboard() -> Dashboard:
    """Return the module-level Dashboard singleton (create if needed)."""
    global _dashboard
    if _dashboard is None:
        _dashboard = Dashboard(get_admin_client())
    return _dashboard


def reset_dashboard() -> None:
    global _dashboard
    _dashboard = None
