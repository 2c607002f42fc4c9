"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- Actions ---

class ActionRequest(BaseModel):
    """Keyword arguments for a player action, e.g. ``{"floor_id": "f2"}``."""

    model_config = ConfigDict(extra="forbid")

    type_id: str | None = None
    floor_id: str | None = None
    staff_id: str | None = None
    staff_type_id: str | None = None
    role_id: str | None = None
    applicant_id: str | None = None
    vip_id: str | None = None
    reader_id: str | None = None
    category_index: int | None = Field(None, ge=0)
    target_index: int | None = Field(None, ge=0)
    kind: str | None = None
    perk_id: str | None = None
    upgrade_id: str | None = None
    decoration_id: str | None = None
    theme_id: str | None = None

    def params(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ActionResponse(BaseModel):
    success: bool
    error: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


# --- State ---

class EventSchema(BaseModel):
    timestamp: int
    category: str
    message: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class EventsResponse(BaseModel):
    events: list[EventSchema] = Field(default_factory=list)


class NotificationsResponse(BaseModel):
    notifications: dict[str, Any] = Field(default_factory=dict)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    ticks: int = 0


# --- Config ---

class EngineConfigResponse(BaseModel):
    world_seed: int
    starting_stars: int
    starting_tower_bucks: int
    max_floors: int
    lobby_capacity: int
    reader_spawn_chance: float
    vip_chance: float
    offline_base_cap_hours: int
    save_key: str
    tick_rate: float
