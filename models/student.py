"""Student roster models.

``student_id`` is the externally meaningful school number that grades point
at; ``id`` is the storage key assigned by the backend.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Student(BaseModel):
    id: int | None = None
    student_id: int
    name: str
    qq_number: int
    group_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StudentDraft(BaseModel):
    """Create-time payload.

    Numeric fields are optional because CSV import is best-effort: a value
    that fails to parse is sent as ``null`` rather than dropping the row.
    """

    student_id: int | None = None
    name: str = ""
    qq_number: int | None = None
    group_id: int | None = None


class StudentPatch(BaseModel):
    """Partial update; unset fields are left unchanged by the backend."""

    student_id: int | None = None
    name: str | None = None
    qq_number: int | None = None
    group_id: int | None = None


class ImportResult(BaseModel):
    success_count: int = 0
    total_count: int = 0
    errors: list[str] = Field(default_factory=list)


class BulkMessageResult(BaseModel):
    success_count: int = 0
    message: str = ""
