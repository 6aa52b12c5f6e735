"""Companion chat roots in the Realtime Database."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable

from mission_control.core.config import settings
from mission_control.services.errors import store_call

logger = logging.getLogger(__name__)

ReferenceFactory = Callable[[str], Any]


class ChatStore:
    """Writes one chat root per event at ``{chats_path}/{event_id}``."""

    def __init__(self, reference_factory: ReferenceFactory, root: str | None = None) -> None:
        self.reference_factory = reference_factory
        self.root = (root or settings.chats_path).rstrip("/")

    def path_for(self, event_id: str) -> str:
        return f"{self.root}/{event_id}"

    async def provision(self, event_id: str, name: str) -> dict[str, Any]:
        """Create the chat root for a new event and return what was written."""
        payload = {
            "info": {
                "name": name,
                "createdAt": int(time.time() * 1000),
            },
            "messages": {},
        }
        ref = self.reference_factory(self.path_for(event_id))
        with store_call(f"provisioning chat for event {event_id}"):
            # The Admin SDK's Realtime Database client is blocking
            await asyncio.to_thread(ref.set, payload)
        logger.info("Chat root created at %s", self.path_for(event_id))
        return payload


__all__ = ["ChatStore"]
