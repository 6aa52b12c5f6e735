"""Recent log records for the dashboard log panel."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from mission_control.api.deps import require_admin
from mission_control.core.logging_config import get_log_buffer

router = APIRouter(prefix="/logs", tags=["logs"], dependencies=[Depends(require_admin)])


@router.get("")
def list_logs(
    limit: int = Query(100, ge=1, le=500),
    level: Optional[str] = Query(None, description="Minimum level, e.g. WARNING"),
) -> dict[str, list[dict[str, str]]]:
    return {"logs": get_log_buffer(limit=limit, min_level=level)}


__all__ = ["router"]
