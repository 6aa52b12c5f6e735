"""Resolve lists of document references into display labels.

Every lookup in a batch is issued at once and joined with ``asyncio.gather``.
A lookup that fails never aborts its siblings: it is replaced by a sentinel
label, so the result always has the same length and order as the input.
Nothing is cached; repeated references are fetched again.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable

from mission_control.models import AgentData
from mission_control.models.event import as_text

logger = logging.getLogger(__name__)

EVENT_UNNAMED = "Unknown Event"
EVENT_NOT_FOUND = "Unknown Event (Reference not found)"
EVENT_LOAD_ERROR = "Error loading event"
AGENT_UNKNOWN = "Unknown Agent"
ARSENAL_UNNAMED = "Unnamed Arsenal"
ARSENAL_UNKNOWN = "Unknown Arsenal"

Projector = Callable[[dict[str, Any]], str]


def event_label(data: dict[str, Any]) -> str:
    return as_text(data.get("eventName")) or EVENT_UNNAMED


def agent_label(data: dict[str, Any]) -> str:
    agent = AgentData(first_name=as_text(data.get("firstName")), last_name=as_text(data.get("lastName")))
    return agent.display_name or AGENT_UNKNOWN


def arsenal_label(data: dict[str, Any]) -> str:
    return as_text(data.get("name")) or ARSENAL_UNNAMED


async def resolve_references(
    refs: Iterable[Any],
    project: Projector,
    *,
    missing: str,
    failed: str,
    kind: str = "reference",
) -> list[str]:
    """Fetch every reference concurrently and project each to a label.

    ``missing`` is used when the referenced document does not exist and
    ``failed`` when the lookup raised or the entry is not a reference.
    """

    async def _resolve(ref: Any) -> str:
        if not hasattr(ref, "path"):
            logger.warning("Skipping non-reference %s entry: %r", kind, ref)
            return failed
        try:
            snapshot = await ref.get()
            if not snapshot.exists:
                return missing
            return project(snapshot.to_dict() or {})
        except Exception:
            logger.warning("Error fetching %s %s", kind, ref.path, exc_info=True)
            return failed

    return list(await asyncio.gather(*(_resolve(ref) for ref in refs)))


async def resolve_event_names(refs: Iterable[Any]) -> list[str]:
    return await resolve_references(
        refs, event_label, missing=EVENT_NOT_FOUND, failed=EVENT_LOAD_ERROR, kind="event"
    )


async def resolve_agent_names(refs: Iterable[Any]) -> list[str]:
    return await resolve_references(
        refs, agent_label, missing=AGENT_UNKNOWN, failed=AGENT_UNKNOWN, kind="agent"
    )


async def resolve_arsenal_names(refs: Iterable[Any]) -> list[str]:
    return await resolve_references(
        refs, arsenal_label, missing=ARSENAL_UNKNOWN, failed=ARSENAL_UNKNOWN, kind="arsenal"
    )


__all__ = [
    "resolve_references",
    "resolve_event_names",
    "resolve_agent_names",
    "resolve_arsenal_names",
    "event_label",
    "agent_label",
    "arsenal_label",
    "EVENT_UNNAMED",
    "EVENT_NOT_FOUND",
    "EVENT_LOAD_ERROR",
    "AGENT_UNKNOWN",
    "ARSENAL_UNNAMED",
    "ARSENAL_UNKNOWN",
]
