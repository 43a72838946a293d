"""SimulationLoop — headless driver with a simulated clock.

Per tick:
  1. Bot scaling — the workload generator may add or remove a bot
  2. Arrivals — new orders are submitted
  3. Advance — the engine runs its completion and assignment passes
  4. Record — state-changing ticks go to the replay trace
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orderbot.core.enums import OrderState

if TYPE_CHECKING:
    from orderbot.config import EngineConfig
    from orderbot.engine.order_engine import OrderEngine
    from orderbot.systems.generator import WorkloadGenerator
    from orderbot.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)


class SimulationLoop:
    """Drives an OrderEngine through ``max_ticks`` simulated ticks."""

    __slots__ = ("_config", "_engine", "_generator", "_recorder", "_tick")

    def __init__(
        self,
        config: EngineConfig,
        engine: OrderEngine,
        generator: WorkloadGenerator,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        self._config = config
        self._engine = engine
        self._generator = generator
        self._recorder = recorder
        self._tick = 0

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def engine(self) -> OrderEngine:
        return self._engine

    def now(self) -> int:
        return self._tick * self._config.sim_tick_ms

    def tick_once(self) -> bool:
        """Execute a single simulated tick. Returns True if the engine state changed."""
        tick = self._tick
        now = self.now()
        engine = self._engine
        version_before = engine.version

        delta = self._generator.bot_delta(tick, len(engine.state.bots))
        if delta > 0:
            engine.add_bot()
        elif delta < 0:
            engine.remove_bot()

        for priority in self._generator.arrivals(tick):
            engine.submit_order(priority)

        engine.tick(now)

        events = engine.drain_events()
        if self._recorder and events:
            self._recorder.record_tick(tick, now, events, engine.snapshot())

        self._tick += 1
        return engine.version != version_before

    def run(self) -> None:
        """Execute the simulation until max_ticks."""
        logger.info("=== Simulation started (seed=%d) ===", self._config.world_seed)

        while self._tick < self._config.max_ticks:
            self.tick_once()

            if self._tick % 50 == 0:
                counts = self.order_counts()
                logger.info(
                    "Tick %d (t=%dms): %d queued, %d in progress, %d done, %d bots",
                    self._tick,
                    self.now(),
                    counts[OrderState.QUEUED],
                    counts[OrderState.IN_PROGRESS],
                    counts[OrderState.DONE],
                    len(self._engine.state.bots),
                )

        logger.info("=== Simulation finished at tick %d ===", self._tick)
        if self._recorder:
            self._recorder.flush()

    def order_counts(self) -> dict[OrderState, int]:
        counts = {state: 0 for state in OrderState}
        for order in self._engine.state.orders:
            counts[order.state] += 1
        return counts
