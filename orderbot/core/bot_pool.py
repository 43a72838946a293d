"""Collection of bots, insertion-ordered by id."""

from __future__ import annotations

from typing import Iterator

from orderbot.core.models import Bot


class BotPool:
    """Bots in creation order. Removal always takes the newest."""

    __slots__ = ("_bots",)

    def __init__(self) -> None:
        self._bots: list[Bot] = []

    def __len__(self) -> int:
        return len(self._bots)

    def __iter__(self) -> Iterator[Bot]:
        return iter(self._bots)

    def add(self, bot: Bot) -> None:
        if self._bots and bot.id <= self._bots[-1].id:
            raise ValueError(f"Bot id {bot.id} is not newer than #{self._bots[-1].id}")
        self._bots.append(bot)

    def newest(self) -> Bot | None:
        return self._bots[-1] if self._bots else None

    def pop_newest(self) -> Bot | None:
        """Remove and return the most recently added bot, or None if empty."""
        if not self._bots:
            return None
        return self._bots.pop()

    def get(self, bot_id: int) -> Bot | None:
        for bot in self._bots:
            if bot.id == bot_id:
                return bot
        return None

    def idle(self) -> list[Bot]:
        return [b for b in self._bots if b.idle]

    def active(self) -> list[Bot]:
        return [b for b in self._bots if not b.idle]
