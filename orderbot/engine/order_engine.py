"""OrderEngine — the only mutation path into the engine state.

Exposes exactly four mutating operations (submit an order, add a bot,
remove a bot, advance time). Each call is one complete state transition;
readers get copies through ``snapshot()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orderbot.core.engine_state import EngineState
from orderbot.core.enums import PriorityClass
from orderbot.core.models import Bot, Order, order_name
from orderbot.core.snapshot import Snapshot
from orderbot.engine.scheduler import Scheduler
from orderbot.utils.event_log import SimEvent

if TYPE_CHECKING:
    from orderbot.config import EngineConfig

logger = logging.getLogger(__name__)


class OrderEngine:
    """Facade over EngineState + Scheduler.

    Not thread-safe on its own; callers that share an engine across threads
    (see ``EngineManager``) serialize calls with a lock.
    """

    __slots__ = ("_config", "_state", "_scheduler")

    def __init__(self, config: EngineConfig, state: EngineState | None = None) -> None:
        self._config = config
        self._state = state or EngineState()
        self._scheduler = Scheduler(config.processing_time_ms)

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def version(self) -> int:
        return self._state.version

    # -- mutating operations --

    def submit_order(self, priority: PriorityClass | str) -> int:
        """Create a queued order and insert it by priority. Returns its id."""
        priority = PriorityClass.parse(priority)
        oid = self._state.allocate_order_id()
        order = Order(id=oid, priority=priority, name=order_name(oid, priority))
        pos = self._state.orders.insert(order)

        self._scheduler.emit(
            self._state, "submit", f"New {priority.name.lower()} order #{oid} ({order.name})",
            order_id=oid,
        )
        logger.info("Submitted %s order #%d at position %d", priority.name.lower(), oid, pos)
        self._commit()
        return oid

    def add_bot(self) -> int:
        """Append a new idle bot. Returns its id."""
        bid = self._state.allocate_bot_id()
        self._state.bots.add(Bot(id=bid))

        self._scheduler.emit(self._state, "bot_added", f"Bot #{bid} joined", bot_id=bid)
        logger.info("Added bot #%d (%d total)", bid, len(self._state.bots))
        self._commit()
        return bid

    def remove_bot(self) -> int | None:
        """Remove the newest bot, requeueing its order. Returns the bot id.

        Removing from an empty pool is a no-op and returns None.
        """
        bot = self._state.bots.newest()
        if bot is None:
            logger.info("remove_bot: no bots to remove")
            return None

        self._scheduler.release(self._state, bot)
        removed = self._state.bots.pop_newest()
        assert removed is bot

        self._scheduler.emit(self._state, "bot_removed", f"Bot #{bot.id} removed", bot_id=bot.id)
        logger.info("Removed bot #%d (%d left)", bot.id, len(self._state.bots))
        self._commit()
        return bot.id

    def tick(self, now: int) -> bool:
        """Run the completion and assignment passes at *now* (ms).

        Returns False, without bumping the version, when nothing changed.
        """
        changed = self._scheduler.tick(self._state, now)
        if changed:
            self._commit()
        return changed

    # -- reads --

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state, self._config.processing_time_ms)

    def drain_events(self) -> list[SimEvent]:
        """Return and clear events produced since the last drain."""
        events = self._scheduler.events
        self._scheduler.events = []
        return events

    # -- internals --

    def _commit(self) -> None:
        self._state.version += 1
        if self._config.check_invariants:
            self._state.check_invariants()
