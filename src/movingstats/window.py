"""Bounded, time-ordered store of price bars."""

from __future__ import annotations

from bisect import insort
from collections import deque

from movingstats.errors import MovingStatsError, MovingStatsErrorCode
from movingstats.models.bar import PriceBar


class BoundedWindow:
    """Ordered mapping ``time -> PriceBar`` holding at most ``capacity`` bars.

    Once full, every insert of a new timestamp first evicts the bar with
    the smallest timestamp. Re-inserting an existing timestamp overwrites
    it in place. Not thread-safe; ``MovingStatistics`` guards access.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise MovingStatsError(
                f"Window capacity must be non-negative, got {capacity}.",
                code=MovingStatsErrorCode.INVALID_WINDOW,
            )
        self.capacity = capacity
        self._bars: dict[int, PriceBar] = {}
        self._times: deque[int] = deque()  # ascending

    def __len__(self) -> int:
        return len(self._times)

    def __contains__(self, time: object) -> bool:
        return time in self._bars

    @property
    def is_full(self) -> bool:
        return len(self._times) >= self.capacity

    def insert(self, bar: PriceBar) -> PriceBar | None:
        """Insert ``bar`` and return the evicted bar, if any."""
        if bar.time in self._bars:
            self._bars[bar.time] = bar
            return None

        # Zero capacity: the bar goes in and straight back out.
        if self.capacity == 0:
            return bar

        evicted = None
        if len(self._times) >= self.capacity:
            evicted = self._bars.pop(self._times.popleft())

        if not self._times or bar.time > self._times[-1]:
            self._times.append(bar.time)
        else:
            # late bar
            insort(self._times, bar.time)
        self._bars[bar.time] = bar
        return evicted

    def values(self) -> list[PriceBar]:
        """Bars in ascending time order (a copy)."""
        return [self._bars[t] for t in self._times]

    def oldest(self) -> PriceBar | None:
        return self._bars[self._times[0]] if self._times else None

    def newest(self) -> PriceBar | None:
        return self._bars[self._times[-1]] if self._times else None
