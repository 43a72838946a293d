"""Workload generator — seeded order arrivals and bot scaling for headless runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from orderbot.core.enums import PriorityClass

if TYPE_CHECKING:
    from orderbot.config import EngineConfig
    from orderbot.systems.rng import DeterministicRNG

_MAX_ARRIVALS_PER_TICK = 2


class WorkloadGenerator:
    """Decides, per tick, which orders arrive and whether the bot count changes.

    Pure with respect to the engine: it only returns decisions, the caller
    applies them through the OrderEngine.
    """

    __slots__ = ("_config", "_rng")

    def __init__(self, config: EngineConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def arrivals(self, tick: int) -> list[PriorityClass]:
        """Priority classes of the orders arriving at *tick* (possibly none)."""
        result: list[PriorityClass] = []
        for slot in range(_MAX_ARRIVALS_PER_TICK):
            if not self._rng.order_arrives(slot, tick, self._config.order_arrival_rate):
                break
            vip = self._rng.order_is_expedited(slot, tick, self._config.vip_ratio)
            result.append(PriorityClass.EXPEDITED if vip else PriorityClass.STANDARD)
        return result

    def bot_delta(self, tick: int, bot_count: int) -> int:
        """+1 to add a bot, -1 to remove the newest, 0 to leave the pool alone."""
        interval = self._config.bot_change_interval
        if interval <= 0 or tick == 0 or tick % interval != 0:
            return 0
        if bot_count == 0:
            return 1
        roll = self._rng.scaling_roll(bot_count, tick)
        if roll == 0 and bot_count < self._config.max_bots:
            return 1
        if roll == 1 and bot_count > 1:
            return -1
        return 0
