"""API dependencies."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from google.cloud.firestore import AsyncClient

from mission_control.core.config import settings
from mission_control.db.firebase import get_firestore, get_realtime_reference
from mission_control.models import Viewer
from mission_control.services import ArsenalService, ChatStore, EventBoardService


def get_db() -> AsyncClient:
    return get_firestore()


def get_chat_store() -> ChatStore:
    return ChatStore(get_realtime_reference)


def get_arsenal_service(db: AsyncClient = Depends(get_db)) -> ArsenalService:
    return ArsenalService(db)


def get_event_service(
    db: AsyncClient = Depends(get_db),
    chats: ChatStore = Depends(get_chat_store),
) -> EventBoardService:
    return EventBoardService(db, chats)


def get_viewer(request: Request) -> Viewer:
    """Viewer identity as set by the authenticating proxy.

    Falls back to the configured development viewer when the headers are absent.
    """
    viewer_id = request.headers.get(settings.viewer_id_header)
    if viewer_id:
        return Viewer(id=viewer_id, role=request.headers.get(settings.viewer_role_header, ""))
    if settings.dev_viewer_id:
        return Viewer(id=settings.dev_viewer_id, role=settings.dev_viewer_role)
    raise HTTPException(status_code=401, detail="viewer_required")


def require_admin(viewer: Viewer = Depends(get_viewer)) -> Viewer:
    if not viewer.is_admin:
        raise HTTPException(status_code=403, detail="admin_required")
    return viewer


__all__ = [
    "get_db",
    "get_chat_store",
    "get_arsenal_service",
    "get_event_service",
    "get_viewer",
    "require_admin",
]
