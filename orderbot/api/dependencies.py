"""Request-scoped access to the process-wide EngineManager."""

from __future__ import annotations

from fastapi import HTTPException

from orderbot.api.engine_manager import EngineManager

_engine_manager: EngineManager | None = None


def set_engine_manager(manager: EngineManager | None) -> None:
    """Install the manager built by the app lifespan; ``None`` on shutdown."""
    global _engine_manager
    _engine_manager = manager


def get_engine_manager() -> EngineManager:
    # Requests can race startup or shutdown of the lifespan.
    if _engine_manager is None:
        raise HTTPException(status_code=503, detail="Engine is not running.")
    return _engine_manager
