"""Adapter for the grade endpoints.

Adds ``GET /grades/student/{student_id}`` → list[Grade] on top of CRUD.
"""

from __future__ import annotations

from adapters.resource_adapter import ResourceAdapter
from models.grade import Grade, GradeDraft, GradePatch


class GradeAdapter(ResourceAdapter[Grade, GradeDraft, GradePatch]):
    path = "/grades"
    entity = Grade
    draft = GradeDraft
    patch = GradePatch

    async def list_by_student(self, student_id: int) -> list[Grade]:
        """All grades of one student, keyed by the school number."""
        resp = await self.client.get(f"{self.path}/student/{student_id}")
        return [self._parse(Grade, item) for item in resp or []]
