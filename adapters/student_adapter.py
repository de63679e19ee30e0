"""Adapter for the student roster endpoints.

Beyond plain CRUD:
- POST /students/import        {students: StudentDraft[]} → ImportResult
- GET  /students/export        → text/csv bytes
- POST /students/bulk-message  {student_ids, message}    → BulkMessageResult
"""

from __future__ import annotations

import logging
from typing import Iterable

from adapters.resource_adapter import ResourceAdapter
from models.student import (
    BulkMessageResult,
    ImportResult,
    Student,
    StudentDraft,
    StudentPatch,
)

logger = logging.getLogger(__name__)


class StudentAdapter(ResourceAdapter[Student, StudentDraft, StudentPatch]):
    path = "/students"
    entity = Student
    draft = StudentDraft
    patch = StudentPatch

    async def import_students(self, drafts: Iterable[StudentDraft]) -> ImportResult:
        students = [d.model_dump(mode="json") for d in drafts]
        resp = await self.client.post(f"{self.path}/import", json_body={"students": students})
        result = self._parse(ImportResult, resp or {})
        if result.errors:
            logger.info(
                "import: %d/%d rows accepted", result.success_count, result.total_count,
            )
        return result

    async def export(self) -> bytes:
        return await self.client.get_bytes(f"{self.path}/export")

    async def bulk_message(self, student_ids: Iterable[int], message: str) -> BulkMessageResult:
        body = {"student_ids": sorted(set(student_ids)), "message": message}
        resp = await self.client.post(f"{self.path}/bulk-message", json_body=body)
        return self._parse(BulkMessageResult, resp or {})
