"""Document models."""

from .agent import AgentData, Viewer
from .arsenal import ArsenalItem, ArsenalListing
from .event import EventCreate, EventData, EventUpdate

__all__ = [
    "AgentData",
    "Viewer",
    "ArsenalItem",
    "ArsenalListing",
    "EventData",
    "EventCreate",
    "EventUpdate",
]
