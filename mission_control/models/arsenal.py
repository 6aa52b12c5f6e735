"""Equipment (arsenal) records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .event import as_text


class ArsenalItem(BaseModel):
    """Equipment row with its event references already resolved to labels."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    type: str = ""
    events: list[str] = Field(default_factory=list, description="Names of the events this item is assigned to")
    date_added: Optional[datetime] = Field(default=None, alias="dateAdded")

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> ArsenalItem:
        events = data.get("events")
        date_added = data.get("dateAdded")
        return cls(
            id=doc_id,
            name=as_text(data.get("name")),
            type=as_text(data.get("type")),
            events=[as_text(label) for label in events] if isinstance(events, list) else [],
            date_added=date_added if isinstance(date_added, datetime) else None,
        )


class ArsenalListing(BaseModel):
    """A freshly re-queried category, returned after every mutation."""

    type: str
    items: list[ArsenalItem] = Field(default_factory=list)
    id: Optional[str] = Field(default=None, description="Record touched by the mutation, if any")


__all__ = ["ArsenalItem", "ArsenalListing"]
