"""EngineManager — runs the OrderEngine tick source on a background thread.

The API reads from an atomically-swapped immutable Snapshot. Every engine
call (user actions from request threads, ticks from the engine thread) is
serialized by one lock, so each call is a single atomic state transition.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from orderbot.core.enums import PriorityClass
from orderbot.core.snapshot import Snapshot
from orderbot.engine.order_engine import OrderEngine
from orderbot.utils.event_log import EventLog

if TYPE_CHECKING:
    from orderbot.config import EngineConfig

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    """Monotonic clock in integer milliseconds."""
    return time.monotonic_ns() // 1_000_000


class EngineManager:
    """Manages the engine lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap, only on state change)
      - event log (lock-guarded ring buffer)
      - the four engine operations (submit order / add bot / remove bot / tick)
      - control commands (start / pause / resume / step / stop / reset)
    """

    def __init__(self, config: EngineConfig, clock: Callable[[], int] | None = None) -> None:
        self._config = config
        self.config = config
        self._clock: Callable[[], int] = clock or monotonic_ms
        self._tick_rate: float = config.tick_interval

        # Built in _build
        self._engine: OrderEngine | None = None

        # Thread-safe shared state
        self._engine_lock = threading.Lock()
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog(maxlen=config.event_log_size)

        # Counters
        self._total_ticks: int = 0
        self._changed_ticks: int = 0

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._stop_requested = threading.Event()
        self._last_error: Exception | None = None

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def last_error(self) -> Exception | None:
        """Exception that killed the tick thread, if any."""
        return self._last_error

    @property
    def total_ticks(self) -> int:
        return self._total_ticks

    @property
    def changed_ticks(self) -> int:
        return self._changed_ticks

    def now(self) -> int:
        return self._clock()

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- engine operations --

    def submit_order(self, priority: PriorityClass | str) -> int:
        with self._engine_lock:
            oid = self._require_engine().submit_order(priority)
            self._publish_if_changed()
        return oid

    def add_bot(self) -> int:
        with self._engine_lock:
            bid = self._require_engine().add_bot()
            self._publish_if_changed()
        return bid

    def remove_bot(self) -> int | None:
        with self._engine_lock:
            bid = self._require_engine().remove_bot()
            self._publish_if_changed()
        return bid

    def tick(self) -> bool:
        """Advance the engine to the current clock reading."""
        with self._engine_lock:
            changed = self._require_engine().tick(self._clock())
            self._total_ticks += 1
            if changed:
                self._changed_ticks += 1
                self._publish_if_changed()
        return changed

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._last_error = None
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at version %d", self._current_version())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at version %d", self._current_version())

    def step(self) -> bool:
        """Pause the tick thread (if running) and execute exactly one tick."""
        if self._running.is_set() and not self._paused.is_set():
            self.pause()
        return self.tick()

    def stop(self) -> None:
        """Cancel the tick thread. Safe at any point; ticks are never left half-applied."""
        self._stop_requested.set()
        self._paused.clear()
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=5.0)
            if self._thread.is_alive():
                logger.warning("Engine thread did not exit within 5s; still marked running.")
                return
        self._running.clear()
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave stopped, ready to start."""
        self.stop()
        self._event_log.clear()
        self._total_ticks = 0
        self._changed_ticks = 0
        self._build()
        logger.info("EngineManager reset.")

    # -- internals --

    def _build(self) -> None:
        """Construct a fresh engine from config and publish its first snapshot."""
        with self._engine_lock:
            self._engine = OrderEngine(self._config)
            for _ in range(self._config.initial_bots):
                self._engine.add_bot()
            self._engine.drain_events()
            snap = self._engine.snapshot()
            with self._snapshot_lock:
                self._latest_snapshot = snap

    def _require_engine(self) -> OrderEngine:
        if self._engine is None:
            raise RuntimeError("Engine not built.")
        return self._engine

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")

        try:
            while not self._stop_requested.is_set():
                if self._paused.is_set():
                    time.sleep(0.01)
                    continue

                self.tick()
                # Wakes early when stop() is requested.
                self._stop_requested.wait(self._tick_rate)
        except Exception as exc:
            self._last_error = exc
            logger.exception("Engine thread crashed at version %d", self._current_version())
        finally:
            self._running.clear()
            logger.info("Engine thread exited.")

    def _publish_if_changed(self) -> None:
        """Swap snapshot + push events. Caller holds the engine lock."""
        engine = self._require_engine()
        events = engine.drain_events()
        current = self.get_snapshot()
        if current is not None and current.version == engine.version:
            return
        snap = engine.snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap
        if events:
            self._event_log.append_many(events)

    def _current_version(self) -> int:
        snap = self.get_snapshot()
        return snap.version if snap else 0
