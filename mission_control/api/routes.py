"""System routes."""

from fastapi import APIRouter

from mission_control.core.config import settings

health_router = APIRouter(tags=["system"])


@health_router.get("/health", summary="Liveness probe")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name, "version": settings.app_version}
