"""Student screen routes: shared CRUD plus CSV import/export."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.responses import Response

from api.resources import build_resource_router
from config.settings import get_settings
from errors import ActionInProgressError
from services.dashboard import Dashboard, get_dashboard

router = build_resource_router("students")


@router.post("/import")
async def import_students(request: Request, dashboard: Dashboard = Depends(get_dashboard)):
    """Import the raw CSV request body (``student_id,name,qq_number,group_id``)."""
    raw = await request.body()
    text = raw.decode("utf-8-sig", errors="replace")
    try:
        result = await dashboard.students.import_csv(text)
    except ActionInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return dashboard.respond(
        dashboard.students.snapshot(),
        imported=result.model_dump() if result is not None else None,
    )


@router.get("/export")
async def export_students(dashboard: Dashboard = Depends(get_dashboard)):
    """Stream the backend's CSV export as a file download."""
    try:
        data = await dashboard.students.download_csv()
    except ActionInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    if data is None:
        notes = [n.model_dump(mode="json") for n in dashboard.notifier.drain()]
        raise HTTPException(status_code=502, detail=notes[-1]["message"] if notes else "Export failed")
    filename = get_settings().export_filename
    return Response(
        content=data,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
