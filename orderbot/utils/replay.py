"""Tick trace recorder for headless runs — writes state changes as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from orderbot.core.snapshot import Snapshot
    from orderbot.utils.event_log import SimEvent

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates state-changing ticks and flushes them to a JSON file.

    Ticks that changed nothing are not recorded.
    """

    __slots__ = ("_path", "_ticks", "_seed")

    def __init__(self, path: str | Path, seed: int) -> None:
        self._path = Path(path)
        self._seed = seed
        self._ticks: list[dict[str, Any]] = []

    @property
    def recorded(self) -> int:
        return len(self._ticks)

    def record_tick(
        self,
        tick: int,
        now: int,
        events: list[SimEvent],
        snapshot: Snapshot,
    ) -> None:
        if not events:
            return
        orders_snapshot = [
            {
                "id": o.id,
                "priority": o.priority.name,
                "state": o.state.name,
                "bot": o.bot_id,
            }
            for o in snapshot.pending_orders()
        ]
        bots_snapshot = [
            {"id": b.id, "order": b.order_id, "started_at": b.started_at}
            for b in snapshot.bots
        ]
        events_log = [
            {
                "category": e.category,
                "order": e.order_id,
                "bot": e.bot_id,
                "message": e.message,
            }
            for e in events
        ]

        self._ticks.append(
            {
                "tick": tick,
                "now": now,
                "version": snapshot.version,
                "events": events_log,
                "pending": orders_snapshot,
                "bots": bots_snapshot,
                "completed": len(snapshot.orders) - len(orders_snapshot),
            }
        )

    def flush(self) -> None:
        """Write accumulated data to disk."""
        replay = {
            "version": "1.0",
            "seed": self._seed,
            "recorded_ticks": len(self._ticks),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))
