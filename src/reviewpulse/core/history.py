"""Bounded history of recent analyses and duplicate suppression."""

from collections import deque
from datetime import datetime, timedelta
from typing import Iterable, Iterator, List

from .constants import HistoryConstants
from .models import HistoryEntry


class HistoryBuffer:
    """FIFO buffer that keeps the most recent ``maxlen`` summaries."""

    def __init__(self, maxlen: int = HistoryConstants.MAX_HISTORY):
        self._entries = deque(maxlen=max(1, maxlen))

    @property
    def maxlen(self) -> int:
        return self._entries.maxlen

    def append(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    def entries(self) -> List[HistoryEntry]:
        """Oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))


def is_duplicate(
    candidate: str,
    history: Iterable[HistoryEntry],
    now: datetime,
    window: timedelta = timedelta(seconds=HistoryConstants.DUPLICATE_WINDOW_SECONDS),
    prefix_chars: int = HistoryConstants.TRUNCATE_CHARS,
) -> bool:
    """Heuristic duplicate check on a text prefix within a time window.

    Two different reviews sharing their first ``prefix_chars`` characters
    are treated as the same review.
    """
    prefix = candidate[:prefix_chars]
    for entry in history:
        if prefix in entry.text and now - entry.timestamp <= window:
            return True
    return False
