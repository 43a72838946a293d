"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Orders & bots ---

class OrderSchema(BaseModel):
    id: int
    name: str
    priority: str
    state: str
    bot_id: int | None = None
    completed_at: int | None = None
    progress: float = 0.0


class BotSchema(BaseModel):
    id: int
    order_id: int | None = None
    started_at: int | None = None
    progress: float = 0.0
    remaining_seconds: int | None = None
    order_expedited: bool = False


class EventSchema(BaseModel):
    version: int
    category: str
    message: str
    at: int | None = None
    order_id: int | None = None
    bot_id: int | None = None


class EngineStateResponse(BaseModel):
    version: int
    now: int
    pending: list[OrderSchema]
    completed: list[OrderSchema]
    bots: list[BotSchema]
    idle_bots: int = 0
    active_bots: int = 0
    events: list[EventSchema] = Field(default_factory=list)


# --- Mutations ---

class OrderCreatedResponse(BaseModel):
    order_id: int
    priority: str
    version: int


class BotResponse(BaseModel):
    status: str
    message: str
    bot_id: int | None = None
    version: int = 0


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    version: int = 0
    changed: bool | None = None


# --- Config ---

class EngineConfigResponse(BaseModel):
    processing_time_ms: int
    tick_interval: float
    tick_rate: float
    initial_bots: int
    check_invariants: bool
    event_log_size: int


# --- Stats ---

class EngineStats(BaseModel):
    version: int
    total_orders: int
    queued: int
    in_progress: int
    completed: int
    bots: int
    idle_bots: int
    active_bots: int
    total_ticks: int
    changed_ticks: int
    running: bool
    paused: bool
    last_error: str | None = None
