"""Thread-safe ring buffer of engine events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SimEvent:
    """A single engine event for the API event feed."""

    version: int           # State version the event produced
    category: str          # submit | assign | complete | requeue | bot_added | bot_removed
    message: str
    at: int | None = None  # Engine timestamp (ms) when known
    order_id: int | None = None
    bot_id: int | None = None


class EventLog:
    """Bounded event log. Writers append; readers copy a slice.

    Thread-safe via a simple lock: writes happen once per state-changing call
    and reads are non-blocking copies.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int | None = 500) -> None:
        self._buffer: deque[SimEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def append_many(self, events: list[SimEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def since_version(self, version: int) -> list[SimEvent]:
        """Return all events with version >= *version*."""
        with self._lock:
            return [e for e in self._buffer if e.version >= version]

    def latest(self, count: int = 50) -> list[SimEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
