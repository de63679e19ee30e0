"""Grade models — one exam score for one student in one course offering."""

from __future__ import annotations

from pydantic import BaseModel

# Offered as form choices only; the backend accepts any string.
GRADE_CATEGORIES = ("Quiz-1", "Quiz-2", "Quiz-3", "Quiz-4", "Mid")


class Grade(BaseModel):
    id: int | None = None
    student_name: str
    exam_name: str
    course_id: int
    course_seq: int
    student_id: int  # Student.student_id, not Student.id
    score: float
    category: str


class GradeDraft(BaseModel):
    student_name: str
    exam_name: str
    course_id: int
    course_seq: int
    student_id: int
    score: float
    category: str


class GradePatch(BaseModel):
    student_name: str | None = None
    exam_name: str | None = None
    course_id: int | None = None
    course_seq: int | None = None
    student_id: int | None = None
    score: float | None = None
    category: str | None = None
