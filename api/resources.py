"""Shared routes for the paginated CRUD screens (students, grades).

Every response is ``{"state": <screen snapshot>, "notifications": [...]}``.

Endpoints, under ``/dashboard/<screen>``:
- ``GET    ""``                 — visit: fetch the current page
- ``POST   /page``              — navigate ``{page, page_size}``
- ``POST   /form/create``       — open the blank form
- ``POST   /form/edit/{id}``    — open the form prefilled from a record
- ``POST   /form/submit``       — submit ``{values}``
- ``POST   /form/cancel``       — close the form, nothing sent
- ``DELETE /{id}``              — delete a confirmed record
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from errors import ActionInProgressError, AdminError
from services.dashboard import Dashboard, get_dashboard
from services.resource_page import ResourcePage, error_detail

logger = logging.getLogger(__name__)


class PageRequest(BaseModel):
    page: int = Field(ge=1)
    page_size: int | None = Field(default=None, ge=1)


class SubmitRequest(BaseModel):
    values: dict[str, Any] = Field(default_factory=dict)


def build_resource_router(screen: str) -> APIRouter:
    """Router for the :class:`ResourcePage` stored as ``Dashboard.<screen>``."""
    router = APIRouter(prefix=f"/dashboard/{screen}", tags=[screen])

    def page_of(dashboard: Dashboard) -> ResourcePage:
        return getattr(dashboard, screen)

    @router.get("")
    async def show(dashboard: Dashboard = Depends(get_dashboard)):
        page = page_of(dashboard)
        await page.load()
        return dashboard.respond(page.snapshot())

    @router.post("/page")
    async def change_page(req: PageRequest, dashboard: Dashboard = Depends(get_dashboard)):
        page = page_of(dashboard)
        await page.change_page(req.page, req.page_size)
        return dashboard.respond(page.snapshot())

    @router.post("/form/create")
    async def open_create(dashboard: Dashboard = Depends(get_dashboard)):
        page = page_of(dashboard)
        page.form.open_create()
        return dashboard.respond(page.snapshot())

    @router.post("/form/edit/{id}")
    async def open_edit(id: int, dashboard: Dashboard = Depends(get_dashboard)):
        page = page_of(dashboard)
        entity = next((item for item in page.items if item.id == id), None)
        if entity is None:
            try:
                entity = await page.adapter.get(id)
            except AdminError as exc:
                page.notifier.error(f"Failed to load {page.label}: {error_detail(exc)}")
                return dashboard.respond(page.snapshot())
        page.form.open_edit(entity)
        return dashboard.respond(page.snapshot())

    @router.post("/form/submit")
    async def submit(req: SubmitRequest, dashboard: Dashboard = Depends(get_dashboard)):
        page = page_of(dashboard)
        try:
            saved = await page.form.submit(req.values)
        except ActionInProgressError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return dashboard.respond(page.snapshot(), saved=saved is not None)

    @router.post("/form/cancel")
    async def cancel(dashboard: Dashboard = Depends(get_dashboard)):
        page = page_of(dashboard)
        page.form.cancel()
        return dashboard.respond(page.snapshot())

    @router.delete("/{id}")
    async def delete(id: int, dashboard: Dashboard = Depends(get_dashboard)):
        page = page_of(dashboard)
        try:
            deleted = await page.delete(id)
        except ActionInProgressError as exc:
            raise HTTPException(status_code=409, detail=str(exc))
        return dashboard.respond(page.snapshot(), deleted=deleted)

    return router
