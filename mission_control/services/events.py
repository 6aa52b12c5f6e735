"""Event board backed by the ``events`` collection."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from google.cloud.firestore import AsyncClient
from google.cloud.firestore_v1.base_query import FieldFilter

from mission_control.core.config import settings
from mission_control.models import EventData, EventUpdate, Viewer
from mission_control.services.chats import ChatStore
from mission_control.services.errors import RecordNotFound, ValidationFailed, store_call
from mission_control.services.references import resolve_agent_names, resolve_arsenal_names

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Both event name and date are required."


def today_in(tz_name: str) -> str:
    """Local calendar date in ``tz_name`` as ``YYYY-MM-DD``."""
    return datetime.now(ZoneInfo(tz_name)).date().isoformat()


def new_event_document(name: str, event_date: str) -> dict[str, Any]:
    """Placeholder document for a freshly created event."""
    return {
        "eventName": name,
        "eventDate": event_date,
        "location": "",
        "agents": [],
        "arsenal": [],
        "contactNumber": "",
        "contactPerson": "",
        "package": "",
        "layout": "",
        "sdCardCount": 0,
        "batteryCount": 0,
        "notes": "",
        "hqt": "",
        "aop": "",
        "dateAdded": datetime.now(timezone.utc),
        "isArchive": False,
    }


class EventBoardService:
    """Today's events, filtered by the viewer's access, plus event mutations."""

    def __init__(self, db: AsyncClient, chats: ChatStore, tz_name: str | None = None) -> None:
        self.db = db
        self.chats = chats
        self.tz_name = tz_name or settings.timezone
        self.collection = db.collection(settings.events_collection)

    def today(self) -> str:
        return today_in(self.tz_name)

    def agent_ref(self, agent_id: str) -> Any:
        return self.db.collection(settings.agents_collection).document(agent_id)

    async def fetch(self, viewer: Viewer, on: Optional[str] = None) -> list[EventData]:
        """Non-archived events dated ``on`` (default today) visible to ``viewer``."""
        day = on or self.today()
        query = self.collection.where(filter=FieldFilter("isArchive", "==", False)).where(
            filter=FieldFilter("eventDate", "==", day)
        )
        if not viewer.is_admin:
            query = query.where(filter=FieldFilter("agents", "array_contains", self.agent_ref(viewer.id)))

        with store_call("fetching events"):
            snapshots = await query.get()
        events = list(await asyncio.gather(*(self._to_event(snapshot) for snapshot in snapshots)))
        logger.debug("Fetched %d events for %s on %s", len(events), viewer.id, day)
        return events

    async def _to_event(self, snapshot: Any) -> EventData:
        data = snapshot.to_dict() or {}
        agents = data.get("agents") if isinstance(data.get("agents"), list) else []
        arsenal = data.get("arsenal") if isinstance(data.get("arsenal"), list) else []
        agent_names, arsenal_names = await asyncio.gather(
            resolve_agent_names(agents),
            resolve_arsenal_names(arsenal),
        )
        return EventData.from_document(snapshot.id, data, agent_names, arsenal_names)

    def visible_to(self, data: dict[str, Any], viewer: Optional[Viewer]) -> bool:
        """Admins see every event; agents only those listing them in ``agents``."""
        if viewer is None or viewer.is_admin:
            return True
        agents = data.get("agents")
        if not isinstance(agents, list):
            return False
        own_path = self.agent_ref(viewer.id).path
        return any(getattr(ref, "path", None) == own_path for ref in agents)

    async def get(self, event_id: str, viewer: Optional[Viewer] = None) -> EventData | None:
        """Load one event; ``None`` when it is missing or hidden from ``viewer``."""
        with store_call(f"loading event {event_id}"):
            snapshot = await self.collection.document(event_id).get()
        if not snapshot.exists or not self.visible_to(snapshot.to_dict() or {}, viewer):
            return None
        return await self._to_event(snapshot)

    async def create(self, name: str, event_date: str) -> str:
        """Write a new event and its chat root; return the new event id."""
        name = (name or "").strip()
        event_date = (event_date or "").strip()
        if not name or not event_date:
            raise ValidationFailed(MISSING_FIELDS_MESSAGE)
        try:
            date.fromisoformat(event_date)
        except ValueError:
            raise ValidationFailed("Event date must be formatted as YYYY-MM-DD.") from None

        with store_call("adding event"):
            _, doc_ref = await self.collection.add(new_event_document(name, event_date))
        logger.info("Event written with ID %s", doc_ref.id)

        await self.chats.provision(doc_ref.id, name)
        return doc_ref.id

    async def update(self, event_id: str, changes: EventUpdate, viewer: Optional[Viewer] = None) -> EventData:
        fields = changes.to_changes()
        if "eventName" in fields and not fields["eventName"].strip():
            raise ValidationFailed("Event name cannot be empty.")
        if fields.get("eventDate"):
            try:
                date.fromisoformat(fields["eventDate"])
            except ValueError:
                raise ValidationFailed("Event date must be formatted as YYYY-MM-DD.") from None

        if viewer is not None and not viewer.is_admin:
            with store_call(f"loading event {event_id}"):
                snapshot = await self.collection.document(event_id).get()
            if not snapshot.exists or not self.visible_to(snapshot.to_dict() or {}, viewer):
                raise RecordNotFound(f"Event {event_id} not found")

        if fields:
            with store_call(f"updating event {event_id}"):
                await self.collection.document(event_id).update(fields)
            logger.info("Event %s updated: %s", event_id, sorted(fields))

        event = await self.get(event_id, viewer)
        if event is None:
            raise RecordNotFound(f"Event {event_id} not found")
        return event

    async def archive(self, event_id: str) -> None:
        with store_call(f"archiving event {event_id}"):
            await self.collection.document(event_id).update({"isArchive": True})
        logger.info("Event %s archived", event_id)

    async def delete(self, event_id: str) -> None:
        # The chat root under /chats is left behind.
        with store_call(f"deleting event {event_id}"):
            await self.collection.document(event_id).delete()
        logger.info("Event %s deleted", event_id)


__all__ = ["EventBoardService", "MISSING_FIELDS_MESSAGE", "new_event_document", "today_in"]
