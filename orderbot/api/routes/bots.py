"""POST/DELETE /api/v1/bots — grow or shrink the bot pool."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from orderbot.api.dependencies import get_engine_manager
from orderbot.api.engine_manager import EngineManager
from orderbot.api.schemas import BotResponse

router = APIRouter()


def _version(manager: EngineManager) -> int:
    snapshot = manager.get_snapshot()
    return snapshot.version if snapshot else 0


@router.post("/bots", response_model=BotResponse, status_code=201)
def add_bot(manager: EngineManager = Depends(get_engine_manager)) -> BotResponse:
    bot_id = manager.add_bot()
    return BotResponse(status="ok", message=f"Bot #{bot_id} added.", bot_id=bot_id, version=_version(manager))


@router.delete("/bots", response_model=BotResponse)
def remove_bot(manager: EngineManager = Depends(get_engine_manager)) -> BotResponse:
    """Remove the newest bot; its order, if any, goes back to the queue."""
    bot_id = manager.remove_bot()
    if bot_id is None:
        return BotResponse(status="noop", message="No bots to remove.", version=_version(manager))
    return BotResponse(status="ok", message=f"Bot #{bot_id} removed.", bot_id=bot_id, version=_version(manager))
