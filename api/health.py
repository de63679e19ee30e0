"""Liveness endpoint."""

from fastapi import APIRouter

from services.admin_client import get_admin_client

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health():
    """Report service liveness and whether the backend client is started."""
    return {"status": "healthy", "admin_client": get_admin_client().started}
