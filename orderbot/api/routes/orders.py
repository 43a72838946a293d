"""POST /api/v1/orders — submit a new order."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from orderbot.api.dependencies import get_engine_manager
from orderbot.api.engine_manager import EngineManager
from orderbot.api.schemas import OrderCreatedResponse

router = APIRouter()


class PriorityParam(str, Enum):
    standard = "standard"
    expedited = "expedited"
    normal = "normal"
    vip = "vip"


@router.post("/orders", response_model=OrderCreatedResponse, status_code=201)
def submit_order(
    priority: PriorityParam = Query(PriorityParam.standard, description="Priority class of the new order"),
    manager: EngineManager = Depends(get_engine_manager),
) -> OrderCreatedResponse:
    order_id = manager.submit_order(priority.value)
    snapshot = manager.get_snapshot()
    order = snapshot.order(order_id) if snapshot else None
    return OrderCreatedResponse(
        order_id=order_id,
        priority=order.priority.name.lower() if order else priority.value,
        version=snapshot.version if snapshot else 0,
    )
