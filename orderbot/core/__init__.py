"""Core data models and engine state representation."""

from orderbot.core.enums import Domain, OrderState, PriorityClass
from orderbot.core.models import Bot, Order
from orderbot.core.order_queue import OrderQueue
from orderbot.core.bot_pool import BotPool
from orderbot.core.engine_state import EngineState
from orderbot.core.snapshot import Snapshot

__all__ = [
    "Bot",
    "BotPool",
    "Domain",
    "EngineState",
    "Order",
    "OrderQueue",
    "OrderState",
    "PriorityClass",
    "Snapshot",
]
