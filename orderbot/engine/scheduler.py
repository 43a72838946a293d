"""Scheduler: the two-pass tick algorithm and the bot-removal requeue policy.

Tick cycle:
  1. Completion — bots whose order has run for the full processing time go idle
  2. Assignment — idle bots, in id order, take the next queued order

Completion runs first so a bot freed this tick can pick up new work in the
same tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orderbot.core.enums import OrderState
from orderbot.utils.event_log import SimEvent

if TYPE_CHECKING:
    from orderbot.core.engine_state import EngineState
    from orderbot.core.models import Bot

logger = logging.getLogger(__name__)


class Scheduler:
    """Detects completions and binds idle bots to queued orders.

    Stateless apart from configuration; the EngineState is passed in on
    every call. Events produced by a call are collected in ``events`` until
    the caller drains them.
    """

    __slots__ = ("_processing_time_ms", "events")

    def __init__(self, processing_time_ms: int) -> None:
        if processing_time_ms <= 0:
            raise ValueError("processing_time_ms must be positive")
        self._processing_time_ms = processing_time_ms
        self.events: list[SimEvent] = []

    @property
    def processing_time_ms(self) -> int:
        return self._processing_time_ms

    def tick(self, state: EngineState, now: int) -> bool:
        """Advance *state* to *now*. Returns True if any order or bot changed.

        Timestamps earlier than the last one seen are clamped to it, so
        elapsed times never run backwards.
        """
        if state.last_now is not None and now < state.last_now:
            logger.debug("Clamping non-monotonic tick %d to %d", now, state.last_now)
            now = state.last_now
        state.last_now = now

        completed = self._completion_pass(state, now)
        assigned = self._assignment_pass(state, now)
        return completed + assigned > 0

    def release(self, state: EngineState, bot: Bot) -> int | None:
        """Detach *bot*'s order and return it to the queued pool.

        The whole queued set is re-sorted by priority class afterwards.
        Returns the requeued order id, or None if the bot was idle.
        """
        if bot.idle:
            return None
        order = state.orders.get(bot.order_id)
        assert order is not None and order.state == OrderState.IN_PROGRESS, (
            f"bot #{bot.id} holds order #{bot.order_id} that is not in progress"
        )
        order.state = OrderState.QUEUED
        order.bot_id = None
        bot.release()
        state.orders.repartition()

        self.emit(
            state, "requeue",
            f"Order #{order.id} returned to queue from bot #{bot.id}",
            order_id=order.id, bot_id=bot.id,
        )
        logger.info("Requeued order #%d (bot #%d removed)", order.id, bot.id)
        return order.id

    # -- passes --

    def _completion_pass(self, state: EngineState, now: int) -> int:
        count = 0
        for bot in state.bots:
            if bot.idle:
                continue
            if now - bot.started_at < self._processing_time_ms:
                continue

            order = state.orders.get(bot.order_id)
            assert order is not None and order.state == OrderState.IN_PROGRESS, (
                f"bot #{bot.id} completed order #{bot.order_id} that is not in progress"
            )
            order.state = OrderState.DONE
            order.completed_at = now
            order.bot_id = None
            bot.release()
            count += 1

            self.emit(
                state, "complete", f"Bot #{bot.id} completed order #{order.id}",
                at=now, order_id=order.id, bot_id=bot.id,
            )
            logger.debug("t=%d: bot #%d completed order #%d", now, bot.id, order.id)
        return count

    def _assignment_pass(self, state: EngineState, now: int) -> int:
        count = 0
        for bot in state.bots:
            if not bot.idle:
                continue
            # Orders assigned earlier in this pass are already IN_PROGRESS,
            # so next_assignable never hands the same order to two bots.
            order = state.orders.next_assignable()
            if order is None:
                break
            order.state = OrderState.IN_PROGRESS
            order.bot_id = bot.id
            bot.bind(order.id, now)
            count += 1

            self.emit(
                state, "assign", f"Bot #{bot.id} picked up order #{order.id}",
                at=now, order_id=order.id, bot_id=bot.id,
            )
            logger.debug("t=%d: bot #%d picked up order #%d", now, bot.id, order.id)
        return count

    def emit(
        self,
        state: EngineState,
        category: str,
        message: str,
        at: int | None = None,
        order_id: int | None = None,
        bot_id: int | None = None,
    ) -> None:
        # Events carry the version the current call will publish.
        self.events.append(SimEvent(
            version=state.version + 1,
            category=category,
            message=message,
            at=at,
            order_id=order_id,
            bot_id=bot_id,
        ))
