"""Priority-aware ordered collection of orders.

The list order is both dispatch order and display order. Expedited orders are
inserted ahead of every queued standard order, so dispatch only has to find
the first queued entry.
"""

from __future__ import annotations

from typing import Iterator

from orderbot.core.models import Order


class OrderQueue:
    """Ordered sequence of orders in every state (queued, in progress, done)."""

    __slots__ = ("_orders", "_index")

    def __init__(self) -> None:
        self._orders: list[Order] = []
        self._index: dict[int, Order] = {}

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self._orders)

    def get(self, order_id: int) -> Order | None:
        return self._index.get(order_id)

    def position(self, order_id: int) -> int:
        """Index of *order_id* in the sequence (ValueError when absent)."""
        order = self._index.get(order_id)
        if order is None:
            raise ValueError(f"Order #{order_id} is not in the queue")
        return self._orders.index(order)

    def queued(self) -> list[Order]:
        return [o for o in self._orders if o.queued]

    def insert(self, order: Order) -> int:
        """Insert *order* per its priority class and return its position.

        Expedited orders land directly after the last currently-queued
        expedited order (at the front when there is none). In-progress and
        done orders do not count toward that insertion point. Standard
        orders are appended.
        """
        if order.id in self._index:
            raise ValueError(f"Order #{order.id} already queued")

        if order.expedited:
            last_vip = -1
            for idx, existing in enumerate(self._orders):
                if existing.queued and existing.expedited:
                    last_vip = idx
            pos = last_vip + 1
            self._orders.insert(pos, order)
        else:
            pos = len(self._orders)
            self._orders.append(order)

        self._index[order.id] = order
        return pos

    def next_assignable(self) -> Order | None:
        """Return the first queued order in sequence order."""
        for order in self._orders:
            if order.queued:
                return order
        return None

    def repartition(self) -> bool:
        """Stable re-sort of the queued set by priority class.

        Queued orders keep the slots they occupy; only the contents of those
        slots are reordered by (priority class, id). Returns True if the
        order changed.
        """
        slots = [i for i, o in enumerate(self._orders) if o.queued]
        current = [self._orders[i] for i in slots]
        ordered = sorted(current, key=lambda o: (int(o.priority), o.id))
        if [o.id for o in ordered] == [o.id for o in current]:
            return False
        for slot, order in zip(slots, ordered):
            self._orders[slot] = order
        return True
