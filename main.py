"""FastAPI entry point for the course-assistant admin dashboard."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from services.admin_client import get_admin_client
from services.dashboard import reset_dashboard
from services.middleware import RequestIdMiddleware

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle — start/stop the backend connection pool and drop the session."""
    client = get_admin_client()
    await client.start()
    yield
    reset_dashboard()
    await client.close()


app = FastAPI(
    title="Course Assistant Admin",
    description="Roster, grade, bulk messaging and bot configuration dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Middleware stack (outermost first) ─────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)

# ── Register routers ────────────────────────────────────────
from api.health import router as health_router  # noqa: E402
from api.students import router as students_router  # noqa: E402
from api.grades import router as grades_router  # noqa: E402
from api.bulk_message import router as bulk_message_router  # noqa: E402
from api.bot_config import router as config_router  # noqa: E402

app.include_router(health_router)
app.include_router(students_router)
app.include_router(grades_router)
app.include_router(bulk_message_router)
app.include_router(config_router)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.service_port,
        reload=settings.debug,
    )
