"""Bulk messaging screen routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from errors import ActionInProgressError
from services.dashboard import Dashboard, get_dashboard

router = APIRouter(prefix="/dashboard/bulk-message", tags=["bulk-message"])


class TextSelection(BaseModel):
    text: str = ""


class ListSelection(BaseModel):
    ids: list[int] = Field(default_factory=list)


class SendRequest(BaseModel):
    message: str = ""


@router.get("")
async def show(dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.bulk_message
    await page.load()
    return dashboard.respond(page.snapshot())


@router.post("/text")
async def type_ids(req: TextSelection, dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.bulk_message
    page.type_ids(req.text)
    return dashboard.respond(page.snapshot())


@router.post("/select")
async def select(req: ListSelection, dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.bulk_message
    page.select(req.ids)
    return dashboard.respond(page.snapshot())


@router.delete("/selection/{student_id}")
async def dismiss(student_id: int, dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.bulk_message
    page.dismiss(student_id)
    return dashboard.respond(page.snapshot())


@router.post("/send")
async def send(req: SendRequest, dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.bulk_message
    try:
        result = await page.send(req.message)
    except ActionInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return dashboard.respond(
        page.snapshot(),
        result=result.model_dump() if result is not None else None,
    )


@router.post("/clear")
async def clear(dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.bulk_message
    page.clear()
    return dashboard.respond(page.snapshot())
