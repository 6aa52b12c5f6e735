"""Equipment registry backed by the ``arsenal`` collection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.cloud import firestore
from google.cloud.firestore import AsyncClient
from google.cloud.firestore_v1.base_query import FieldFilter

from mission_control.core.config import settings
from mission_control.models import ArsenalItem, ArsenalListing
from mission_control.services.errors import RecordNotFound, ValidationFailed, store_call
from mission_control.services.references import resolve_event_names

logger = logging.getLogger(__name__)


class ArsenalService:
    """Create, rename, delete and list equipment by category.

    Every mutation re-runs the listing query for the affected category and
    returns it; nothing is merged locally.
    """

    def __init__(self, db: AsyncClient) -> None:
        self.db = db
        self.collection = db.collection(settings.arsenal_collection)

    @property
    def types(self) -> tuple[str, ...]:
        return settings.arsenal_types

    async def fetch(self, type_: str) -> list[ArsenalItem]:
        """Return every record of ``type_`` with its event references resolved."""
        with store_call(f"fetching {type_} equipment"):
            snapshots = await self.collection.where(filter=FieldFilter("type", "==", type_)).get()
        return list(await asyncio.gather(*(self._to_item(snapshot) for snapshot in snapshots)))

    async def fetch_all(self) -> dict[str, list[ArsenalItem]]:
        listings = await asyncio.gather(*(self.fetch(type_) for type_ in self.types))
        return dict(zip(self.types, listings))

    async def _to_item(self, snapshot: Any) -> ArsenalItem:
        data = snapshot.to_dict() or {}
        if isinstance(data.get("events"), list):
            data["events"] = await resolve_event_names(data["events"])
        return ArsenalItem.from_document(snapshot.id, data)

    async def create(self, name: str, type_: str) -> ArsenalListing:
        name = (name or "").strip()
        if not name:
            raise ValidationFailed("Equipment name is required.")
        if type_ not in self.types:
            raise ValidationFailed(f"Unknown equipment type '{type_}'.")

        with store_call("adding equipment"):
            _, doc_ref = await self.collection.add(
                {
                    "name": name,
                    "type": type_,
                    "events": [],
                    "dateAdded": firestore.SERVER_TIMESTAMP,
                }
            )
        logger.info("Equipment written with ID %s", doc_ref.id)
        return ArsenalListing(type=type_, items=await self.fetch(type_), id=doc_ref.id)

    async def rename(self, item_id: str, new_name: str) -> ArsenalListing:
        """Rename a record and re-fetch the category it belongs to."""
        new_name = (new_name or "").strip()
        if not new_name:
            raise ValidationFailed("Equipment name is required.")

        doc_ref = self.collection.document(item_id)
        with store_call(f"renaming equipment {item_id}"):
            await doc_ref.update({"name": new_name})
            snapshot = await doc_ref.get()
        if not snapshot.exists:
            raise RecordNotFound(f"Equipment {item_id} not found")
        logger.info("Equipment updated with ID %s", item_id)

        type_ = (snapshot.to_dict() or {}).get("type", "")
        return ArsenalListing(type=type_, items=await self.fetch(type_), id=item_id)

    async def delete(self, item_id: str, type_: str) -> ArsenalListing:
        # Events that reference this item keep the reference; it resolves to a sentinel.
        with store_call(f"deleting equipment {item_id}"):
            await self.collection.document(item_id).delete()
        logger.info("Equipment deleted with ID %s", item_id)
        return ArsenalListing(type=type_, items=await self.fetch(type_), id=item_id)


__all__ = ["ArsenalService"]
