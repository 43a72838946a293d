"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orderbot.api.dependencies import set_engine_manager
from orderbot.api.engine_manager import EngineManager
from orderbot.api.routes import api_router
from orderbot.config import EngineConfig
from orderbot.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    config: EngineConfig | None = None,
    clock: Callable[[], int] | None = None,
    autostart: bool = True,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    *clock* overrides the monotonic millisecond clock; with
    ``autostart=False`` the tick source stays stopped until
    ``POST /control/start`` (or ticks are driven with ``/control/step``).
    """
    if config is None:
        config = EngineConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config, clock=clock)
        set_engine_manager(manager)
        app.state.engine_manager = manager
        if autostart:
            manager.start()
        logger.info("API server started (tick source %s).", "running" if autostart else "stopped")
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Order Bot Engine",
        description=(
            "Priority order-dispatch engine — control and read API.\n\n"
            "## API Groups\n\n"
            "- **State** — Live engine state: pending and completed orders, bots, events\n"
            "- **Orders** — Submit standard or expedited orders\n"
            "- **Bots** — Add a bot or remove the newest one\n"
            "- **Control** — Tick source lifecycle: start, pause, resume, step, stop, reset\n"
            "- **Config** — Read-only engine configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live engine state polled by the frontend, with derived progress and remaining time."},
            {"name": "Orders", "description": "Order submission. Expedited orders are queued ahead of every standard order."},
            {"name": "Bots", "description": "Bot pool size. Removing a busy bot returns its order to the queue."},
            {"name": "Control", "description": "Tick source lifecycle controls: start, pause, resume, single-step, stop and reset."},
            {"name": "Config", "description": "Read-only engine configuration parameters (processing time, tick rate, etc.)."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
