"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
import threading

from fastapi import FastAPI, Request

from prayerboard.config import Settings
from prayerboard.db import DbClient, InMemoryDbClient, SqlDbClient

logger = logging.getLogger(__name__)

_db_lock = threading.Lock()


def build_db_client(settings: Settings) -> DbClient:
    """
    Pick the storage backend. Called once per app; nothing else branches on
    which backend is in use.
    """
    if settings.use_in_memory_backends or not settings.database_url:
        logger.info("Storage backend: InMemoryDbClient (in-memory, not persisted)")
        return InMemoryDbClient()
    client = SqlDbClient(settings.database_url)
    logger.info("Storage backend: SqlDbClient (%s)", client.storage_name)
    return client


def ensure_db_client(app: FastAPI) -> DbClient:
    """Build the app's storage handle on first use and keep it on `app.state`."""
    if app.state.db is None:
        with _db_lock:
            if app.state.db is None:
                app.state.db = build_db_client(app.state.settings)
    return app.state.db


def get_db_client(request: Request) -> DbClient:
    """Return the storage handle built for this app."""
    return ensure_db_client(request.app)
