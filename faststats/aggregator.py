"""Per-symbol sliding-window statistics over several window sizes."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from faststats.kahan import NeumaierSum
from faststats.monotonic_queue import Comparator, SharedMonotonicQueue

log = logging.getLogger(__name__)

DEFAULT_LEVELS = 8
DEFAULT_RADIX = 10


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class StatsResult:
    """Statistics of one window."""

    min: float
    max: float
    last: float
    avg: float
    var: float

    def to_dict(self) -> dict[str, Optional[float]]:
        """JSON-ready mapping; non-finite numbers become ``None``."""
        return {
            "min": _finite_or_none(self.min),
            "max": _finite_or_none(self.max),
            "last": _finite_or_none(self.last),
            "avg": _finite_or_none(self.avg),
            "var": _finite_or_none(self.var),
        }


@dataclass
class LevelStats:
    """Running sum and sum of squares of the values in one window."""

    id: int
    size: int
    count: int = 0
    sum: NeumaierSum = field(default_factory=NeumaierSum)
    sum_sq: NeumaierSum = field(default_factory=NeumaierSum)

    def is_full(self) -> bool:
        return self.count == self.size

    def push(self, value: float, value_sq: float, oldest_value: float) -> None:
        """Add a value, first dropping ``oldest_value`` if the window is full."""
        self.evict_oldest(oldest_value)
        self.count += 1
        self.sum += value
        self.sum_sq += value_sq

    def evict_oldest(self, oldest_value: float) -> None:
        """Remove ``oldest_value`` from the sums when the window is full."""
        if not self.is_full():
            return
        log.debug("evicting oldest value %s of level %s", oldest_value, self.id)
        self.sum += -oldest_value
        self.sum_sq += -(oldest_value * oldest_value)
        self.count = max(0, self.count - 1)


class SymbolAggregator:
    """Keeps the last ``radix ** levels`` values of a symbol.

    Window ``k`` (1-based) covers the last ``radix ** k`` values. Average and
    variance come from running sums per window; minimum and maximum come
    from two monotonic queues shared by all windows.
    """

    def __init__(self, levels: int = DEFAULT_LEVELS, radix: int = DEFAULT_RADIX) -> None:
        if levels < 1:
            raise ValueError("levels must be at least 1")
        if radix < 1:
            raise ValueError("radix must be at least 1")
        self.levels_count = levels
        self.radix = radix
        self.capacity = radix ** levels
        sizes = [radix ** (i + 1) for i in range(levels)]
        self._buffer: list[float] = []
        self._tip = self.capacity - 1
        self._index = 0
        self.levels = [LevelStats(i, size) for i, size in enumerate(sizes)]
        self._minq = SharedMonotonicQueue(Comparator.MIN, sizes, radix)
        self._maxq = SharedMonotonicQueue(Comparator.MAX, sizes, radix)

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def index(self) -> int:
        """Total number of values accepted so far."""
        return self._index

    def add_batch(self, values: Iterable[float]) -> None:
        """Add values in order, skipping any whose square would overflow the sums."""
        min_evicted: Optional[int] = None
        max_evicted: Optional[int] = None

        for raw in values:
            value = float(raw)
            if not self._try_push(value):
                continue
            pos = self._minq.push(self._index, value)
            if pos is not None:
                min_evicted = pos if min_evicted is None else min(min_evicted, pos)
            pos = self._maxq.push(self._index, value)
            if pos is not None:
                max_evicted = pos if max_evicted is None else min(max_evicted, pos)
            self._index += 1

        self._minq.evict(self._index, min_evicted)
        self._maxq.evict(self._index, max_evicted)

    def _try_push(self, value: float) -> bool:
        value_sq = value * value
        projected = (self.levels[-1].sum_sq + value_sq).sum()
        if not math.isfinite(projected):
            log.warning("ignoring %s since its square brings sum to %s", value, projected)
            return False

        for level in self.levels:
            if level.is_full():
                oldest_pos = (self._tip + self.capacity - level.size + 1) % self.capacity
                oldest = self._buffer[oldest_pos]
            else:
                oldest = 0.0
            level.push(value, value_sq, oldest)

        self._tip = (self._tip + 1) % self.capacity
        if len(self._buffer) < self.capacity:
            self._buffer.append(value)
        else:
            self._buffer[self._tip] = value
        return True

    def get_stats(self, k: int) -> Optional[StatsResult]:
        """Statistics of window ``k``, or ``None`` if empty or ``k`` is out of range."""
        if not self._buffer:
            return None
        if not 1 <= k <= self.levels_count:
            return None

        last = self._buffer[self._tip]
        level = self.levels[k - 1]
        n = float(level.count)
        avg = level.sum.sum() / n
        var = level.sum_sq.sum() / n - avg * avg
        if not math.isfinite(var):
            log.warning("variance not available: it is %s", var)

        minimum = self._minq.best_or_refresh(k - 1, self._index)
        if minimum is None:
            return None
        maximum = self._maxq.best_or_refresh(k - 1, self._index)
        if maximum is None:
            return None

        return StatsResult(min=minimum, max=maximum, last=last, avg=avg, var=var)