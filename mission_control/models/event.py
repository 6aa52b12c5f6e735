"""Event documents as shown on the board."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
UNNAMED_EVENT = "Unnamed Event"


def as_text(value: Any) -> str:
    """Stored scalar as display text; ``None`` and containers become empty."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def as_count(value: Any) -> int:
    """Stored count as a non-negative int, 0 when it cannot be read as one."""
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)


def _reference_ids(values: Any) -> list[str]:
    if not isinstance(values, list):
        return []
    return [getattr(value, "id", None) or str(value) for value in values]


class EventData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    event_name: str = Field(default=UNNAMED_EVENT, alias="eventName")
    event_date: str = Field(default="", alias="eventDate", description="YYYY-MM-DD")
    location: str = ""
    contact_person: str = Field(default="", alias="contactPerson")
    contact_number: str = Field(default="", alias="contactNumber")
    package: str = ""
    layout: str = ""
    sd_card_count: int = Field(default=0, alias="sdCardCount")
    battery_count: int = Field(default=0, alias="batteryCount")
    notes: str = ""
    hqt: str = ""
    aop: str = ""
    agent_ids: list[str] = Field(default_factory=list, alias="agentIds")
    arsenal_ids: list[str] = Field(default_factory=list, alias="arsenalIds")
    agent_names: list[str] = Field(default_factory=list, alias="agentNames")
    arsenal_names: list[str] = Field(default_factory=list, alias="arsenalNames")
    date_added: datetime = Field(default=EPOCH, alias="dateAdded")
    is_archive: bool = Field(default=False, alias="isArchive")

    @classmethod
    def from_document(
        cls,
        doc_id: str,
        data: dict[str, Any],
        agent_names: list[str] | None = None,
        arsenal_names: list[str] | None = None,
    ) -> EventData:
        """Build an event from raw store data, filling absent fields with defaults."""
        date_added = data.get("dateAdded")
        return cls(
            id=doc_id,
            event_name=as_text(data.get("eventName")) or UNNAMED_EVENT,
            event_date=as_text(data.get("eventDate")),
            location=as_text(data.get("location")),
            contact_person=as_text(data.get("contactPerson")),
            contact_number=as_text(data.get("contactNumber")),
            package=as_text(data.get("package")),
            layout=as_text(data.get("layout")),
            sd_card_count=as_count(data.get("sdCardCount")),
            battery_count=as_count(data.get("batteryCount")),
            notes=as_text(data.get("notes")),
            hqt=as_text(data.get("hqt")),
            aop=as_text(data.get("aop")),
            agent_ids=_reference_ids(data.get("agents")),
            arsenal_ids=_reference_ids(data.get("arsenal")),
            agent_names=agent_names or [],
            arsenal_names=arsenal_names or [],
            date_added=date_added if isinstance(date_added, datetime) else EPOCH,
            is_archive=bool(data.get("isArchive", False)),
        )


class EventCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_name: str = Field(default="", alias="eventName")
    event_date: str = Field(default="", alias="eventDate")


class EventUpdate(BaseModel):
    """Editable scalar fields; unset fields are left untouched."""

    model_config = ConfigDict(populate_by_name=True)

    event_name: Optional[str] = Field(default=None, alias="eventName")
    event_date: Optional[str] = Field(default=None, alias="eventDate")
    location: Optional[str] = None
    contact_person: Optional[str] = Field(default=None, alias="contactPerson")
    contact_number: Optional[str] = Field(default=None, alias="contactNumber")
    package: Optional[str] = None
    layout: Optional[str] = None
    sd_card_count: Optional[int] = Field(default=None, alias="sdCardCount", ge=0)
    battery_count: Optional[int] = Field(default=None, alias="batteryCount", ge=0)
    notes: Optional[str] = None
    hqt: Optional[str] = None
    aop: Optional[str] = None

    def to_changes(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = ["EventData", "EventCreate", "EventUpdate", "UNNAMED_EVENT", "as_count", "as_text"]
