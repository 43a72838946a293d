"""Core data models: Order, Bot."""

from __future__ import annotations

from dataclasses import dataclass, replace

from orderbot.core.enums import OrderState, PriorityClass

MENU_ITEMS: tuple[str, ...] = (
    "Big Mac",
    "McChicken",
    "Filet-O-Fish",
    "McNuggets",
    "McFlurry",
    "French Fries",
    "Double Cheeseburger",
    "Apple Pie",
)


def order_name(order_id: int, priority: PriorityClass) -> str:
    """Display name: menu item rotated by id, tagged for expedited orders."""
    base = MENU_ITEMS[(order_id - 1) % len(MENU_ITEMS)]
    return f"{base} (VIP)" if priority == PriorityClass.EXPEDITED else base


@dataclass(slots=True)
class Order:
    """A unit of work awaiting or undergoing processing.

    ``bot_id`` is set iff the order is IN_PROGRESS; ``completed_at`` is set
    iff it is DONE.
    """

    id: int
    priority: PriorityClass
    name: str = ""
    state: OrderState = OrderState.QUEUED
    bot_id: int | None = None
    completed_at: int | None = None

    @property
    def expedited(self) -> bool:
        return self.priority == PriorityClass.EXPEDITED

    @property
    def queued(self) -> bool:
        return self.state == OrderState.QUEUED

    def copy(self) -> Order:
        return replace(self)

    def __repr__(self) -> str:
        return f"Order(#{self.id}, {self.priority.name}, {self.state.name}, bot={self.bot_id})"


@dataclass(slots=True)
class Bot:
    """A processing unit handling one order at a time."""

    id: int
    order_id: int | None = None
    started_at: int | None = None

    @property
    def idle(self) -> bool:
        return self.order_id is None

    def bind(self, order_id: int, now: int) -> None:
        self.order_id = order_id
        self.started_at = now

    def release(self) -> None:
        self.order_id = None
        self.started_at = None

    def copy(self) -> Bot:
        return replace(self)
