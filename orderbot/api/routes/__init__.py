"""Versioned API route modules."""

from fastapi import APIRouter

from orderbot.api.routes.bots import router as bots_router
from orderbot.api.routes.config import router as config_router
from orderbot.api.routes.control import router as control_router
from orderbot.api.routes.orders import router as orders_router
from orderbot.api.routes.state import router as state_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(state_router, tags=["State"])
api_router.include_router(orders_router, tags=["Orders"])
api_router.include_router(bots_router, tags=["Bots"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
