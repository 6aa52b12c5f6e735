"""Event board endpoints."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from mission_control.api.deps import get_event_service, get_viewer, require_admin
from mission_control.models import EventCreate, EventData, EventUpdate, Viewer
from mission_control.services import EventBoardService

router = APIRouter(prefix="/events", tags=["events"])


def event_page_url(event_id: str, edit: bool = False) -> str:
    url = f"/dashboard/events/{event_id}"
    return f"{url}?edit=true" if edit else url


@router.get("/today", response_model=List[EventData])
async def todays_events(
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    """Non-archived events dated today that the viewer may see."""
    return await service.fetch(viewer)


@router.post("", status_code=201)
async def create_event(
    payload: EventCreate,
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> dict[str, str]:
    event_id = await service.create(payload.event_name, payload.event_date)
    return {"id": event_id, "redirect": event_page_url(event_id, edit=True)}


@router.get("/{event_id}", response_model=EventData)
async def get_event(
    event_id: str,
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    event = await service.get(event_id, viewer)
    if event is None:
        raise HTTPException(status_code=404, detail="event_not_found")
    return event


@router.patch("/{event_id}", response_model=EventData)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    return await service.update(event_id, payload, viewer)


@router.post("/{event_id}/archive")
async def archive_event(
    event_id: str,
    viewer: Viewer = Depends(require_admin),
    service: EventBoardService = Depends(get_event_service),
) -> dict[str, str]:
    await service.archive(event_id)
    return {"archived": event_id}


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    viewer: Viewer = Depends(require_admin),
    service: EventBoardService = Depends(get_event_service),
) -> dict[str, str]:
    await service.delete(event_id)
    return {"deleted": event_id}


__all__ = ["router", "event_page_url"]
