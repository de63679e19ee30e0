"""Grade screen: CRUD over grades with a student picker fed by the roster."""

from __future__ import annotations

from typing import Any

from adapters.grade_adapter import GradeAdapter
from adapters.student_adapter import StudentAdapter
from config.settings import get_settings
from errors import AdminError
from models.grade import GRADE_CATEGORIES, Grade
from models.student import Student
from services.notifications import Notifier
from services.resource_page import ResourcePage, error_detail

SCORE_MIN = 0
SCORE_MAX = 100


def check_score(value: Any) -> str | None:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return "score must be a number"
    if not SCORE_MIN <= score <= SCORE_MAX:
        return f"score must be between {SCORE_MIN} and {SCORE_MAX}"
    return None


class GradePage(ResourcePage[Grade]):
    label = "grade"
    plural = "grades"
    required = (
        "student_name",
        "exam_name",
        "course_id",
        "course_seq",
        "student_id",
        "score",
        "category",
    )
    categories = GRADE_CATEGORIES

    adapter: GradeAdapter

    def __init__(
        self,
        adapter: GradeAdapter,
        students: StudentAdapter,
        notifier: Notifier | None = None,
        **kwargs,
    ) -> None:
        super().__init__(adapter, notifier, **kwargs)
        self.students = students
        self.roster: list[Student] = []

    def validators(self) -> dict[str, Any]:
        return {"score": check_score}

    async def change_page(self, page: int, page_size: int | None = None) -> bool:
        changed = await super().change_page(page, page_size)
        if changed:
            await self.load_roster()
        return changed

    async def load(self) -> bool:
        loaded = await super().load()
        await self.load_roster()
        return loaded

    async def load_roster(self) -> bool:
        """Load every student (up to the roster limit) for the picker."""
        try:
            result = await self.students.list(1, get_settings().roster_fetch_limit)
        except AdminError as exc:
            self.notifier.error(f"Failed to load students: {error_detail(exc)}")
            return False
        self.roster = list(result.items)
        return True

    def student_choices(self) -> list[tuple[int, str]]:
        return [(s.student_id, s.name) for s in self.roster]

    async def grades_for_student(self, student_id: int) -> list[Grade]:
        try:
            return await self.adapter.list_by_student(student_id)
        except AdminError as exc:
            self.notifier.error(f"Failed to load grades: {error_detail(exc)}")
            return []

    def snapshot(self) -> dict[str, Any]:
        state = super().snapshot()
        state["categories"] = list(self.categories)
        state["students"] = [{"student_id": sid, "name": name} for sid, name in self.student_choices()]
        return state
