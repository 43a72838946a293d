"""Immutable snapshot of the engine state for readers (API, CLI, tests).

Also hosts the display derivations (pending/completed views, progress and
remaining time). They are pure reads over the snapshot plus a caller-supplied
``now`` and never feed back into engine state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from orderbot.core.engine_state import EngineState
from orderbot.core.enums import OrderState
from orderbot.core.models import Bot, Order


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the engine, safe to share across threads.

    Orders and bots are copied, so later engine mutations never leak into a
    snapshot that has already been handed out.

    ``last_now`` is the engine time as of the last state-changing call that
    published this snapshot. Ticks that change nothing advance the engine
    clock without publishing, so readers pass their own ``now`` to the
    progress derivations instead of relying on this field.
    """

    version: int
    last_now: int | None  # engine time at publication, not the live clock
    processing_time_ms: int
    orders: tuple[Order, ...]
    bots: tuple[Bot, ...]
    next_order_id: int
    next_bot_id: int

    @classmethod
    def from_state(cls, state: EngineState, processing_time_ms: int) -> Snapshot:
        return cls(
            version=state.version,
            last_now=state.last_now,
            processing_time_ms=processing_time_ms,
            orders=tuple(o.copy() for o in state.orders),
            bots=tuple(b.copy() for b in state.bots),
            next_order_id=state.next_order_id,
            next_bot_id=state.next_bot_id,
        )

    # -- lookups --

    def order(self, order_id: int) -> Order | None:
        for o in self.orders:
            if o.id == order_id:
                return o
        return None

    def bot(self, bot_id: int) -> Bot | None:
        for b in self.bots:
            if b.id == bot_id:
                return b
        return None

    # -- derived views --

    def pending_orders(self) -> list[Order]:
        """Queued and in-progress orders, in engine order."""
        return [o for o in self.orders if o.state != OrderState.DONE]

    def completed_orders(self) -> list[Order]:
        """Done orders, most recently completed first."""
        done = [o for o in self.orders if o.state == OrderState.DONE]
        return sorted(done, key=lambda o: o.completed_at, reverse=True)

    def idle_bots(self) -> list[Bot]:
        return [b for b in self.bots if b.idle]

    def active_bots(self) -> list[Bot]:
        return [b for b in self.bots if not b.idle]

    def progress(self, bot: Bot, now: int) -> float:
        """Percent of the processing duration *bot* has spent on its order (0-100)."""
        if bot.started_at is None:
            return 0.0
        elapsed = max(0, now - bot.started_at)
        return min(elapsed / self.processing_time_ms * 100.0, 100.0)

    def remaining_seconds(self, bot: Bot, now: int) -> int | None:
        """Whole seconds left on *bot*'s order, rounded up; None when idle."""
        if bot.started_at is None:
            return None
        elapsed = max(0, now - bot.started_at)
        remaining = max(0, self.processing_time_ms - elapsed)
        return math.ceil(remaining / 1000)

    def order_progress(self, order: Order, now: int) -> float:
        if order.state == OrderState.DONE:
            return 100.0
        if order.bot_id is None:
            return 0.0
        bot = self.bot(order.bot_id)
        return self.progress(bot, now) if bot else 0.0
