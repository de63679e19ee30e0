"""Grade screen routes: shared CRUD plus per-student lookup."""

from __future__ import annotations

from fastapi import Depends

from api.resources import build_resource_router
from services.dashboard import Dashboard, get_dashboard

router = build_resource_router("grades")


@router.get("/student/{student_id}")
async def grades_for_student(student_id: int, dashboard: Dashboard = Depends(get_dashboard)):
    grades = await dashboard.grades.grades_for_student(student_id)
    return dashboard.respond(
        {"student_id": student_id, "grades": [g.model_dump(mode="json") for g in grades]},
    )
