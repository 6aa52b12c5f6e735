"""Service-layer utilities."""

from .arsenal import ArsenalService
from .chats import ChatStore
from .errors import RecordNotFound, StoreError, ValidationFailed
from .events import EventBoardService
from .references import resolve_references

__all__ = [
    "ArsenalService",
    "ChatStore",
    "EventBoardService",
    "RecordNotFound",
    "StoreError",
    "ValidationFailed",
    "resolve_references",
]
