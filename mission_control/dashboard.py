"""Dashboard page routes and partials."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from mission_control.api.deps import get_arsenal_service, get_event_service, get_viewer, require_admin
from mission_control.api.events import event_page_url
from mission_control.core.config import settings
from mission_control.models import ArsenalItem, EventUpdate, Viewer
from mission_control.services import (
    ArsenalService,
    EventBoardService,
    RecordNotFound,
    StoreError,
    ValidationFailed,
)

templates = Jinja2Templates(directory=str(settings.templates_dir))
router = APIRouter(prefix="/dashboard")
logger = logging.getLogger(__name__)

# Child components fire this after mutating an event; the board listens and refetches.
EVENTS_CHANGED = "eventsChanged"


def _warn(text: str) -> dict[str, str]:
    return {"kind": "warn", "text": text}


def _redirect(request: Request, url: str) -> Response:
    """Client-side redirect for HTMX requests, plain 303 otherwise."""
    if request.headers.get("HX-Request"):
        return Response(status_code=200, headers={"HX-Redirect": url})
    return RedirectResponse(url, status_code=303)


# --- Event board ("Mission Control") ---


@router.get("", response_class=HTMLResponse)
def board_page(request: Request, viewer: Viewer = Depends(get_viewer)) -> Any:
    """Render the event board shell; the list itself loads as a partial."""
    return templates.TemplateResponse(
        request,
        "dashboard/index.html",
        {"viewer": viewer, "form_error": None, "form": {}},
    )


@router.get("/partials/board", response_class=HTMLResponse)
async def board_partial(
    request: Request,
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    status_banner = None
    events = []
    try:
        events = await service.fetch(viewer)
    except StoreError as exc:
        status_banner = _warn(exc.message)
    return templates.TemplateResponse(
        request,
        "dashboard/partials/board.html",
        {
            "viewer": viewer,
            "events": events,
            "today": service.today(),
            "status_banner": status_banner,
            "events_changed": EVENTS_CHANGED,
        },
    )


@router.post("/events", response_class=HTMLResponse)
async def board_create_event(
    request: Request,
    event_name: str = Form(""),
    event_date: str = Form(""),
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    """Create an event from the board dialog and jump to its edit page."""
    try:
        event_id = await service.create(event_name, event_date)
    except (ValidationFailed, StoreError) as exc:
        return templates.TemplateResponse(
            request,
            "dashboard/partials/event_form.html",
            {"form_error": exc.message, "form": {"event_name": event_name, "event_date": event_date}},
        )
    return _redirect(request, event_page_url(event_id, edit=True))


@router.post("/events/{event_id}/archive", response_class=HTMLResponse)
async def board_archive_event(
    event_id: str,
    viewer: Viewer = Depends(require_admin),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    try:
        await service.archive(event_id)
    except StoreError:
        return Response(status_code=200)
    return Response(status_code=200, headers={"HX-Trigger": EVENTS_CHANGED})


@router.post("/events/{event_id}/delete", response_class=HTMLResponse)
async def board_delete_event(
    request: Request,
    event_id: str,
    viewer: Viewer = Depends(require_admin),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    try:
        await service.delete(event_id)
    except StoreError:
        return _redirect(request, event_page_url(event_id))
    return _redirect(request, "/dashboard")


# --- Event detail ---


@router.get("/events/{event_id}", response_class=HTMLResponse)
async def event_page(
    request: Request,
    event_id: str,
    edit: bool = False,
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    try:
        event = await service.get(event_id, viewer)
    except StoreError as exc:
        return templates.TemplateResponse(
            request,
            "dashboard/event_detail.html",
            {"viewer": viewer, "event": None, "edit": False, "status_banner": _warn(exc.message)},
            status_code=502,
        )
    if event is None:
        raise HTTPException(status_code=404, detail="event_not_found")
    return templates.TemplateResponse(
        request,
        "dashboard/event_detail.html",
        {"viewer": viewer, "event": event, "edit": edit, "status_banner": None},
    )


@router.post("/events/{event_id}", response_class=HTMLResponse)
async def event_save(
    request: Request,
    event_id: str,
    viewer: Viewer = Depends(get_viewer),
    service: EventBoardService = Depends(get_event_service),
) -> Any:
    """Save the edit form; counts arrive as strings from the browser."""
    form = await request.form()
    fields = {key: str(value) for key, value in form.items() if key in EventUpdate.model_fields}
    for key in ("sd_card_count", "battery_count"):
        if key in fields and not fields[key].strip():
            fields[key] = "0"

    try:
        changes = EventUpdate.model_validate(fields)
    except ValidationError:
        return await _render_edit_error(
            request, viewer, service, event_id, "Card and battery counts must be whole numbers."
        )
    try:
        event = await service.update(event_id, changes, viewer)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="event_not_found") from None
    except (ValidationFailed, StoreError) as exc:
        return await _render_edit_error(request, viewer, service, event_id, exc.message)
    return _redirect(request, event_page_url(event.id))


async def _render_edit_error(
    request: Request,
    viewer: Viewer,
    service: EventBoardService,
    event_id: str,
    text: str,
) -> HTMLResponse:
    event = await service.get(event_id, viewer)
    if event is None:
        raise HTTPException(status_code=404, detail="event_not_found")
    return templates.TemplateResponse(
        request,
        "dashboard/event_detail.html",
        {"viewer": viewer, "event": event, "edit": True, "status_banner": _warn(text)},
    )


# --- Equipment registry ("Arsenal") ---


def _render_arsenal_panel(
    request: Request,
    type_: str,
    items: list[ArsenalItem],
    editing_id: Optional[str] = None,
    status_banner: dict[str, str] | None = None,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "dashboard/partials/arsenal_panel.html",
        {
            "types": settings.arsenal_types,
            "selected_type": type_,
            "items": items,
            "editing_id": editing_id,
            "status_banner": status_banner,
        },
    )


def _selected_type(type_: Optional[str]) -> str:
    if type_ in settings.arsenal_types:
        return type_
    return settings.arsenal_types[0]


async def _arsenal_listing(service: ArsenalService, type_: str) -> tuple[list[ArsenalItem], dict | None]:
    try:
        return await service.fetch(type_), None
    except StoreError as exc:
        return [], _warn(exc.message)


@router.get("/arsenal", response_class=HTMLResponse)
async def arsenal_page(
    request: Request,
    viewer: Viewer = Depends(get_viewer),
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    selected = _selected_type(request.query_params.get("type"))
    items, banner = await _arsenal_listing(service, selected)
    return templates.TemplateResponse(
        request,
        "dashboard/arsenal.html",
        {
            "viewer": viewer,
            "types": settings.arsenal_types,
            "selected_type": selected,
            "items": items,
            "editing_id": None,
            "status_banner": banner,
        },
    )


@router.get("/partials/arsenal", response_class=HTMLResponse)
async def arsenal_partial(
    request: Request,
    edit: Optional[str] = None,
    viewer: Viewer = Depends(get_viewer),
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    """Tab switch, edit mode and cancel all re-render the panel for one category."""
    selected = _selected_type(request.query_params.get("type"))
    items, banner = await _arsenal_listing(service, selected)
    return _render_arsenal_panel(request, selected, items, editing_id=edit, status_banner=banner)


@router.post("/arsenal", response_class=HTMLResponse)
async def arsenal_add(
    request: Request,
    arsenal_name: str = Form(""),
    arsenal_type: str = Form(""),
    viewer: Viewer = Depends(get_viewer),
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    try:
        listing = await service.create(arsenal_name, arsenal_type)
    except (ValidationFailed, StoreError) as exc:
        selected = _selected_type(arsenal_type)
        items, _ = await _arsenal_listing(service, selected)
        return _render_arsenal_panel(request, selected, items, status_banner=_warn(exc.message))
    return _render_arsenal_panel(request, listing.type, listing.items)


@router.post("/arsenal/{item_id}/rename", response_class=HTMLResponse)
async def arsenal_rename(
    request: Request,
    item_id: str,
    name: str = Form(""),
    type_: str = Form("", alias="type"),
    viewer: Viewer = Depends(get_viewer),
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    try:
        listing = await service.rename(item_id, name)
    except ValidationFailed as exc:
        selected = _selected_type(type_)
        items, _ = await _arsenal_listing(service, selected)
        return _render_arsenal_panel(request, selected, items, editing_id=item_id, status_banner=_warn(exc.message))
    except StoreError as exc:
        selected = _selected_type(type_)
        items, _ = await _arsenal_listing(service, selected)
        return _render_arsenal_panel(request, selected, items, status_banner=_warn(exc.message))
    return _render_arsenal_panel(request, listing.type, listing.items)


@router.post("/arsenal/{item_id}/delete", response_class=HTMLResponse)
async def arsenal_delete(
    request: Request,
    item_id: str,
    type_: str = Form("", alias="type"),
    viewer: Viewer = Depends(get_viewer),
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    selected = _selected_type(type_)
    try:
        listing = await service.delete(item_id, selected)
    except StoreError as exc:
        items, _ = await _arsenal_listing(service, selected)
        return _render_arsenal_panel(request, selected, items, status_banner=_warn(exc.message))
    return _render_arsenal_panel(request, listing.type, listing.items)


__all__ = ["router", "templates", "EVENTS_CHANGED"]
