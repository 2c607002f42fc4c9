"""GET /api/v1/state, /notifications, /events: live tower data polled by the UI."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from simlibrary.api.dependencies import get_engine_manager
from simlibrary.api.engine_manager import EngineManager
from simlibrary.api.schemas import EventSchema, EventsResponse, NotificationsResponse

router = APIRouter()


@router.get("/state")
def get_state(manager: EngineManager = Depends(get_engine_manager)) -> dict[str, Any]:
    return manager.describe()


@router.get("/notifications", response_model=NotificationsResponse)
def get_notifications(manager: EngineManager = Depends(get_engine_manager)) -> NotificationsResponse:
    """Read and clear every pending notification."""
    return NotificationsResponse(notifications=manager.consume_notifications())


@router.get("/events", response_model=EventsResponse)
def get_events(
    since: int | None = Query(None, description="Only events at or after this timestamp (ms)"),
    category: str | None = Query(None, description="Only events of this category, e.g. construction"),
    limit: int = Query(50, ge=1, le=500),
    manager: EngineManager = Depends(get_engine_manager),
) -> EventsResponse:
    items = manager.event_log.query(since=since, category=category, limit=limit)
    return EventsResponse(events=[
        EventSchema(timestamp=e.timestamp, category=e.category, message=e.message, metadata=e.metadata)
        for e in items
    ])
