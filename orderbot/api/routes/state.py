"""GET /api/v1/state — orders, bots & events (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from orderbot.api.dependencies import get_engine_manager
from orderbot.api.engine_manager import EngineManager
from orderbot.api.schemas import (
    BotSchema,
    EngineStateResponse,
    EngineStats,
    EventSchema,
    OrderSchema,
)
from orderbot.core.enums import OrderState
from orderbot.core.models import Order
from orderbot.core.snapshot import Snapshot

router = APIRouter()


def _serialize_order(snapshot: Snapshot, o: Order, now: int) -> OrderSchema:
    return OrderSchema(
        id=o.id,
        name=o.name,
        priority=o.priority.name.lower(),
        state=o.state.name.lower(),
        bot_id=o.bot_id,
        completed_at=o.completed_at,
        progress=snapshot.order_progress(o, now),
    )


@router.get("/state", response_model=EngineStateResponse)
def get_state(
    since_version: int = Query(0, ge=0, description="Only return events since this version"),
    manager: EngineManager = Depends(get_engine_manager),
) -> EngineStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    now = manager.now()
    bots = []
    for b in snapshot.bots:
        order = snapshot.order(b.order_id) if b.order_id is not None else None
        bots.append(BotSchema(
            id=b.id,
            order_id=b.order_id,
            started_at=b.started_at,
            progress=snapshot.progress(b, now),
            remaining_seconds=snapshot.remaining_seconds(b, now),
            order_expedited=order is not None and order.expedited,
        ))

    events = [
        EventSchema(
            version=ev.version, category=ev.category, message=ev.message,
            at=ev.at, order_id=ev.order_id, bot_id=ev.bot_id,
        )
        for ev in manager.event_log.since_version(since_version)
    ]

    return EngineStateResponse(
        version=snapshot.version,
        now=now,
        pending=[_serialize_order(snapshot, o, now) for o in snapshot.pending_orders()],
        completed=[_serialize_order(snapshot, o, now) for o in snapshot.completed_orders()],
        bots=bots,
        idle_bots=len(snapshot.idle_bots()),
        active_bots=len(snapshot.active_bots()),
        events=events,
    )


@router.get("/stats", response_model=EngineStats)
def get_stats(
    manager: EngineManager = Depends(get_engine_manager),
) -> EngineStats:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    def count(state: OrderState) -> int:
        return sum(1 for o in snapshot.orders if o.state == state)

    return EngineStats(
        version=snapshot.version,
        total_orders=len(snapshot.orders),
        queued=count(OrderState.QUEUED),
        in_progress=count(OrderState.IN_PROGRESS),
        completed=count(OrderState.DONE),
        bots=len(snapshot.bots),
        idle_bots=len(snapshot.idle_bots()),
        active_bots=len(snapshot.active_bots()),
        total_ticks=manager.total_ticks,
        changed_ticks=manager.changed_ticks,
        running=manager.running,
        paused=manager.paused,
        last_error=repr(manager.last_error) if manager.last_error else None,
    )
