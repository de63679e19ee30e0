"""Bot configuration screen routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from errors import ActionInProgressError
from models.bot_config import BotConfig
from services.config_page import admins_from_text
from services.dashboard import Dashboard, get_dashboard

router = APIRouter(prefix="/dashboard/config", tags=["config"])


class ConfigForm(BotConfig):
    """Submitted form; ``admins_text`` (one id per line) overrides ``admins``."""

    admins_text: str | None = None

    def to_config(self) -> BotConfig:
        data = self.model_dump(exclude={"admins_text"})
        if self.admins_text is not None:
            data["admins"] = admins_from_text(self.admins_text)
        return BotConfig.model_validate(data)


@router.get("")
async def show(dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.config
    await page.load()
    return dashboard.respond(page.snapshot())


@router.put("")
async def save(form: ConfigForm, dashboard: Dashboard = Depends(get_dashboard)):
    page = dashboard.config
    try:
        status = await page.save(form.to_config())
    except ActionInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return dashboard.respond(page.snapshot(), status=status)
