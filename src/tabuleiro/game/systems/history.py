"""Bounded roll history for display.

The history is a log only; nothing reads it back for a calculation. It is
passed explicitly to `resolve_pool` as a sink and may be shared between
threads.
"""

import threading
from collections import deque

from tabuleiro.game.systems.dice import RollRecord

DEFAULT_HISTORY_SIZE = 50


class RollHistory:
    """
    Append-only history of resolved rolls, newest first.

    Once `max_size` entries are held, each new roll drops the oldest.
    """

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE):
        if max_size < 1:
            raise ValueError(f"History size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._entries: deque[RollRecord] = deque(maxlen=max_size)
        self._lock = threading.Lock()

    def add(self, roll: RollRecord) -> None:
        """Store a roll as the newest entry."""
        with self._lock:
            self._entries.appendleft(roll)

    def record(self, roll: RollRecord) -> None:
        """Sink interface used by `resolve_pool`."""
        self.add(roll)

    def get_all(self) -> list[RollRecord]:
        """All stored rolls, newest first."""
        with self._lock:
            return list(self._entries)

    def get_last(self, count: int = 1) -> list[RollRecord]:
        """The `count` most recent rolls, newest first."""
        with self._lock:
            return list(self._entries)[: max(0, count)]

    def clear(self) -> None:
        """Drop every stored roll."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
