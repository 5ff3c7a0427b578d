"""
Bounded event log shown next to the visualization.

Entries are short human-readable strings, most recent first. Every entry is
also forwarded to the standard logging system.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Tuple

logger = logging.getLogger(__name__)


class EventLog:
    """Most-recent-first log with a fixed capacity."""

    def __init__(self, capacity: int = 8, *initial: str):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: deque = deque(maxlen=capacity)
        self.replace(*initial)

    def push(self, message: str) -> None:
        """Insert ``message`` at the front, dropping the oldest entry when full."""
        self._entries.appendleft(message)
        logger.info(message)

    def replace(self, *messages: str) -> None:
        """Replace the whole log; ``messages`` are given most recent first."""
        self._entries.clear()
        for message in reversed(messages):
            self.push(message)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    @property
    def latest(self) -> str | None:
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)
