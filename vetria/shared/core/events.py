"""Canonical event definitions for Vetria."""

from __future__ import annotations

import time
from typing import Any, Dict, Literal, Optional

from .event_bus import EventPayload

# Event Topics
TOPIC_LOGS_EVENT = "logs.event"

# Access gate
TOPIC_ACCESS_STATE = "access.state"

# Local store lifecycle
TOPIC_STORE_LOADED = "store.loaded"
TOPIC_STORE_SEEDED = "store.seeded"
TOPIC_RECORD_ADDED = "record.added"
TOPIC_RECORD_DELETED = "record.deleted"


def create_logs_event(
    message: str,
    level: Literal["info", "warning", "error", "success"] = "info",
    topic: str | None = None,
) -> EventPayload:
    """Create a Log event."""
    return {
        "message": message,
        "level": level,
        "topic": topic,
        "ts": time.time(),
    }


def create_access_state_event(
    status: str,
    payload: Optional[Dict[str, Any]] = None,
    destination: Optional[str] = None,
) -> EventPayload:
    """Create an access gate transition event.

    Args:
        status: One of idle, validating, approved, use_native
        payload: Response body of an approved check
        destination: Remote content URL of an approved check
    """
    return {
        "status": status,
        "payload": payload,
        "destination": destination,
    }


def create_store_loaded_event(counts: Dict[str, int], seeded: bool = False) -> EventPayload:
    """Create a store loaded event with per-collection record counts."""
    return {
        "counts": counts,
        "seeded": seeded,
    }


def create_record_added_event(collection: str, record_id: str) -> EventPayload:
    return {
        "collection": collection,
        "record_id": record_id,
    }


def create_record_deleted_event(collection: str, record_id: str) -> EventPayload:
    return {
        "collection": collection,
        "record_id": record_id,
    }
