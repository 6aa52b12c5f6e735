"""API router definitions."""

from fastapi import APIRouter

from .arsenal import router as arsenal_router
from .events import router as events_router
from .logs import router as logs_router
from .routes import health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(arsenal_router)
api_router.include_router(events_router)
api_router.include_router(logs_router)

__all__ = ["api_router"]
