"""GET /api/v1/config — expose engine configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from orderbot.api.dependencies import get_engine_manager
from orderbot.api.engine_manager import EngineManager
from orderbot.api.schemas import EngineConfigResponse

router = APIRouter()


@router.get("/config", response_model=EngineConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> EngineConfigResponse:
    cfg = manager.config
    return EngineConfigResponse(
        processing_time_ms=cfg.processing_time_ms,
        tick_interval=cfg.tick_interval,
        tick_rate=manager.tick_rate,
        initial_bots=cfg.initial_bots,
        check_invariants=cfg.check_invariants,
        event_log_size=cfg.event_log_size,
    )
