"""Equipment registry endpoints."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from mission_control.api.deps import get_arsenal_service, get_viewer
from mission_control.models import ArsenalItem, ArsenalListing
from mission_control.services import ArsenalService

router = APIRouter(prefix="/arsenal", tags=["arsenal"], dependencies=[Depends(get_viewer)])


class ArsenalCreatePayload(BaseModel):
    name: str = Field(max_length=160)
    type: str


class ArsenalRenamePayload(BaseModel):
    name: str = Field(max_length=160)


def _check_type(service: ArsenalService, type_: str) -> None:
    if type_ not in service.types:
        raise HTTPException(status_code=422, detail=f"unknown_type:{type_}")


@router.get("", response_model=dict[str, list[ArsenalItem]])
async def list_arsenal(
    type_: Optional[str] = Query(default=None, alias="type"),
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    """List equipment for one category, or every category when ``type`` is omitted."""
    if type_ is None:
        return await service.fetch_all()
    _check_type(service, type_)
    return {type_: await service.fetch(type_)}


@router.post("", response_model=ArsenalListing, status_code=201)
async def create_arsenal(
    payload: ArsenalCreatePayload,
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    return await service.create(payload.name, payload.type)


@router.patch("/{item_id}", response_model=ArsenalListing)
async def rename_arsenal(
    item_id: str,
    payload: ArsenalRenamePayload,
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    return await service.rename(item_id, payload.name)


@router.delete("/{item_id}", response_model=ArsenalListing)
async def delete_arsenal(
    item_id: str,
    type_: str = Query(alias="type"),
    service: ArsenalService = Depends(get_arsenal_service),
) -> Any:
    _check_type(service, type_)
    return await service.delete(item_id, type_)


__all__ = ["router"]
