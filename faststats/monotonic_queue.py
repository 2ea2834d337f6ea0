"""Monotonic queues giving windowed minimum and maximum values."""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional, Sequence

log = logging.getLogger(__name__)

Entry = tuple  # (logical_index, value)


class Comparator(Enum):
    """Which extreme a queue tracks."""

    MIN = "min"
    MAX = "max"

    def better(self, new: float, existing: float) -> bool:
        """Whether ``new`` should push ``existing`` out of the back of a queue."""
        if self is Comparator.MIN:
            return new <= existing
        return new >= existing


@dataclass
class LevelView:
    """Cached position of the best entry for one level below the top."""

    id: int
    window_size: int
    best_idx: Optional[int] = None


class SharedMonotonicQueue:
    """Strictly monotonic ring of ``(index, value)`` pairs shared by all levels.

    The top level's best value is always at the front. Lower levels locate
    their best entry by binary search and cache its position until a push or
    an eviction makes it stale.
    """

    def __init__(self, comparator: Comparator, window_sizes: Sequence[int], radix: int) -> None:
        if not window_sizes:
            raise ValueError("at least one window size is required")
        self.comparator = comparator
        self.entries: Deque[tuple[int, float]] = deque()
        self.views = [LevelView(i, size) for i, size in enumerate(window_sizes)]
        self.max_window = radix ** len(self.views)

    def push(self, index: int, value: float) -> Optional[int]:
        """Append a value, dropping worse values from the back.

        Returns the position the new entry took if anything was dropped,
        otherwise ``None``.
        """
        evicted = False
        while self.entries and self.comparator.better(value, self.entries[-1][1]):
            self.entries.pop()
            evicted = True
        position = len(self.entries) if evicted else None
        self.entries.append((index, value))
        return position

    def evict(self, current_index: int, min_evicted: Optional[int] = None) -> None:
        """Drop entries older than the top window and refresh cached positions."""
        lower_views = self.views[:-1]

        if min_evicted is not None:
            for view in lower_views:
                if view.best_idx is not None and view.best_idx < min_evicted:
                    log.debug("%s: invalidating best index %s of level %s",
                              self.comparator.value, view.best_idx, view.id)
                    view.best_idx = None

        oldest_allowed = max(0, current_index - self.max_window)
        front_evicted = 0
        while self.entries and self.entries[0][0] < oldest_allowed:
            self.entries.popleft()
            front_evicted += 1

        if not front_evicted:
            return

        for view in lower_views:
            if view.best_idx is None:
                continue
            idx = view.best_idx - front_evicted
            if idx < 0:
                view.best_idx = None
                continue
            view.best_idx = idx
            min_index = max(0, current_index - view.window_size)
            if idx < len(self.entries) and self.entries[idx][0] < min_index:
                view.best_idx = None

    def best_or_refresh(self, level: int, current_index: int) -> Optional[float]:
        """Best value within the window of ``level``, or ``None`` if empty."""
        if not 0 <= level < len(self.views):
            raise IndexError(f"level {level} out of range")

        if level == len(self.views) - 1:
            return self.entries[0][1] if self.entries else None

        view = self.views[level]
        min_index = max(0, current_index - view.window_size)

        idx = view.best_idx
        if idx is not None and idx < len(self.entries):
            index, value = self.entries[idx]
            if index >= min_index:
                return value

        idx = bisect_left(self.entries, min_index, key=lambda entry: entry[0])
        view.best_idx = idx
        if idx < len(self.entries):
            return self.entries[idx][1]
        return None

    def best_indexes(self) -> list[Optional[int]]:
        """Cached best positions of every level."""
        return [view.best_idx for view in self.views]


class MonotonicQueue:
    """Single-window monotonic queue."""

    def __init__(self, comparator: Comparator) -> None:
        self.comparator = comparator
        self.entries: Deque[tuple[int, float]] = deque()

    def push(self, index: int, value: float) -> None:
        while self.entries and self.comparator.better(value, self.entries[-1][1]):
            self.entries.pop()
        self.entries.append((index, value))

    def evict_older_than(self, min_index: int) -> None:
        while self.entries and self.entries[0][0] < min_index:
            self.entries.popleft()

    def best(self) -> Optional[float]:
        return self.entries[0][1] if self.entries else None