"""Firebase app bootstrap and store clients."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import firebase_admin
from firebase_admin import credentials, db, firestore_async
from google.cloud.firestore import AsyncClient

from mission_control.core.config import settings

logger = logging.getLogger(__name__)


def get_firebase_app() -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if settings.firebase_credentials_path:
        credential = credentials.Certificate(settings.firebase_credentials_path)
    else:
        credential = credentials.ApplicationDefault()

    options: dict[str, Any] = {}
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id
    if settings.firebase_database_url:
        options["databaseURL"] = settings.firebase_database_url

    logger.info("Initializing Firebase app for project %s", settings.firebase_project_id or "<default>")
    return firebase_admin.initialize_app(credential, options)


@lru_cache(maxsize=1)
def get_firestore() -> AsyncClient:
    """Async Firestore client shared by every request."""
    return firestore_async.client(app=get_firebase_app())


def get_realtime_reference(path: str) -> db.Reference:
    """Reference into the Realtime Database at ``path``."""
    return db.reference(path, app=get_firebase_app())


__all__ = ["get_firebase_app", "get_firestore", "get_realtime_reference"]
