"""Seeded workload randomness for headless runs, hashed with xxhash.

Every draw is keyed by what it decides: an arrival slot within a tick, or
the bot-pool size at a scaling check. A run is therefore reproducible from
its seed alone, and adding a bot never shifts the arrival stream.

    value = xxh64(seed, domain, key, tick) / 2**64
"""

from __future__ import annotations

import struct

import xxhash

from orderbot.core.enums import Domain

_SCALING_OUTCOMES = 3


class DeterministicRNG:
    """Stateless, thread-safe draws for the workload generator."""

    __slots__ = ("_seed",)

    _SPAN = float(1 << 64)

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    # -- workload draws --

    def order_arrives(self, slot: int, tick: int, rate: float) -> bool:
        """Whether arrival *slot* of *tick* produces an order."""
        return self.next_bool(Domain.ARRIVAL, slot, tick, rate)

    def order_is_expedited(self, slot: int, tick: int, ratio: float) -> bool:
        """Priority class draw for the order arriving in *slot* of *tick*."""
        return self.next_bool(Domain.PRIORITY, slot, tick, ratio)

    def scaling_roll(self, pool_size: int, tick: int) -> int:
        """0 = grow, 1 = shrink, 2 = hold, keyed by the current pool size."""
        return self.next_int(Domain.BOT_SCALING, pool_size, tick, 0, _SCALING_OUTCOMES - 1)

    # -- primitives --

    def next_float(self, domain: Domain, key: int, tick: int) -> float:
        """Deterministic float in [0.0, 1.0)."""
        payload = struct.pack("<qiqi", self._seed, domain.value, key, tick)
        return xxhash.xxh64_intdigest(payload) / self._SPAN

    def next_int(self, domain: Domain, key: int, tick: int, low: int, high: int) -> int:
        """Deterministic integer in [low, high] inclusive."""
        return low + int(self.next_float(domain, key, tick) * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, tick: int, probability: float = 0.5) -> bool:
        return self.next_float(domain, key, tick) < probability
