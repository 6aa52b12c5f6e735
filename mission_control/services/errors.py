"""Service-layer exceptions and store error translation."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from firebase_admin.exceptions import FirebaseError
from google.api_core.exceptions import GoogleAPIError, NotFound

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a read or write against a backing store fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RecordNotFound(StoreError):
    """Raised when a mutation targets a document that does not exist."""


class ValidationFailed(Exception):
    """Raised when submitted form data is incomplete; nothing was written."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@contextmanager
def store_call(action: str) -> Iterator[None]:
    """Log and translate client errors raised while ``action`` runs."""
    try:
        yield
    except NotFound as exc:
        logger.error("Error %s: record not found", action)
        raise RecordNotFound(f"Error {action}: record not found") from exc
    except (GoogleAPIError, FirebaseError) as exc:
        logger.error("Error %s", action, exc_info=True)
        raise StoreError(f"Error {action}") from exc


__all__ = ["StoreError", "RecordNotFound", "ValidationFailed", "store_call"]
