"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class PriorityClass(IntEnum):
    """Priority classes. Lower value is dispatched first."""

    EXPEDITED = 0
    STANDARD = 1

    @classmethod
    def parse(cls, value: str | int | PriorityClass) -> PriorityClass:
        """Accept an enum member, its int value, or a case-insensitive name.

        ``vip`` and ``normal`` are accepted as aliases.
        """
        if isinstance(value, PriorityClass):
            return value
        if isinstance(value, int):
            return cls(value)
        key = value.strip().lower()
        alias = _PRIORITY_ALIASES.get(key)
        if alias is None:
            raise ValueError(f"Unknown priority class: {value!r}")
        return alias


_PRIORITY_ALIASES: dict[str, PriorityClass] = {
    "expedited": PriorityClass.EXPEDITED,
    "vip": PriorityClass.EXPEDITED,
    "standard": PriorityClass.STANDARD,
    "normal": PriorityClass.STANDARD,
}


@unique
class OrderState(IntEnum):
    """Lifecycle states of an order."""

    QUEUED = 0
    IN_PROGRESS = 1
    DONE = 2


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation (headless workload)."""

    ARRIVAL = 0
    PRIORITY = 1
    BOT_SCALING = 2
