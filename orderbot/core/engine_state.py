"""Mutable authoritative engine state. Only mutated through the OrderEngine."""

from __future__ import annotations

from orderbot.core.bot_pool import BotPool
from orderbot.core.enums import OrderState, PriorityClass
from orderbot.core.order_queue import OrderQueue


class EngineState:
    """The single source of truth for orders, bots and id counters."""

    __slots__ = ("orders", "bots", "_next_order_id", "_next_bot_id", "last_now", "version")

    def __init__(self) -> None:
        self.orders: OrderQueue = OrderQueue()
        self.bots: BotPool = BotPool()
        self._next_order_id: int = 1
        self._next_bot_id: int = 1
        self.last_now: int | None = None
        self.version: int = 0

    @property
    def next_order_id(self) -> int:
        return self._next_order_id

    @property
    def next_bot_id(self) -> int:
        return self._next_bot_id

    def allocate_order_id(self) -> int:
        oid = self._next_order_id
        self._next_order_id += 1
        return oid

    def allocate_bot_id(self) -> int:
        bid = self._next_bot_id
        self._next_bot_id += 1
        return bid

    def check_invariants(self) -> None:
        """Assert the order/bot binding invariants. Violations are bugs."""
        bound: dict[int, int] = {}
        for bot in self.bots:
            assert (bot.order_id is None) == (bot.started_at is None), f"bot #{bot.id} half-bound"
            if bot.order_id is None:
                continue
            assert bot.order_id not in bound, (
                f"order #{bot.order_id} bound to bots #{bound.get(bot.order_id)} and #{bot.id}"
            )
            bound[bot.order_id] = bot.id
            order = self.orders.get(bot.order_id)
            assert order is not None, f"bot #{bot.id} bound to unknown order #{bot.order_id}"
            assert order.state == OrderState.IN_PROGRESS, f"bot #{bot.id} holds {order!r}"
            assert order.bot_id == bot.id, f"{order!r} does not point back at bot #{bot.id}"

        in_progress = 0
        seen_standard = False
        for order in self.orders:
            assert order.id < self._next_order_id, f"{order!r} id beyond counter"
            assert (order.bot_id is not None) == (order.state == OrderState.IN_PROGRESS), f"{order!r} binding"
            assert (order.completed_at is not None) == (order.state == OrderState.DONE), f"{order!r} completion"
            if order.state == OrderState.IN_PROGRESS:
                in_progress += 1
                assert bound.get(order.id) == order.bot_id, f"{order!r} not held by its bot"
            elif order.state == OrderState.QUEUED:
                if order.priority == PriorityClass.STANDARD:
                    seen_standard = True
                else:
                    assert not seen_standard, f"queued {order!r} behind a queued standard order"
        assert in_progress == len(bound), f"{in_progress} in progress vs {len(bound)} busy bots"
