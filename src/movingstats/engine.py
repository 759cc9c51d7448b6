"""MovingStatistics — sliding-window statistics engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from movingstats.aggregation import check_window_lengths, mean_deviations, moving_means
from movingstats.config import MovingStatsConfig
from movingstats.locking import AsyncReadWriteLock
from movingstats.models.bar import PriceBar
from movingstats.window import BoundedWindow

logger = logging.getLogger(__name__)


class MovingStatistics:
    """Bounded window of recent bars with on-demand moving statistics.

    ``update`` takes exclusive access to the window; ``means``,
    ``deviations`` and the other queries share it. Queries copy the
    window under the lock and compute on the copy, so the lock is held
    only for the copy.

    Usage::

        stats = MovingStatistics(100)
        evicted = await stats.update(bar)
        means = await stats.means({5, 20})
        deviations = await stats.deviations(means)
    """

    def __init__(self, universe_window: int, *, lock_timeout: float | None = None) -> None:
        self._universe = BoundedWindow(universe_window)
        self.universe_window = universe_window
        self.lock_timeout = lock_timeout
        self._lock = AsyncReadWriteLock()

    @classmethod
    def from_config(cls, config: MovingStatsConfig) -> MovingStatistics:
        return cls(config.universe_window, lock_timeout=config.lock_timeout_seconds)

    # ------------------------------------------------------------ ingestion

    async def update(self, bar: PriceBar) -> PriceBar | None:
        """Insert ``bar``, returning the bar evicted to make room (if any)."""
        async with self._lock.write(self.lock_timeout):
            evicted = self._universe.insert(bar)
        if evicted is not None:
            logger.debug("Evicted bar %d for bar %d", evicted.time, bar.time)
        return evicted

    # -------------------------------------------------------------- queries

    async def snapshot(self) -> list[PriceBar]:
        """Current window contents, earliest first."""
        async with self._lock.read(self.lock_timeout):
            return self._universe.values()

    async def size(self) -> int:
        async with self._lock.read(self.lock_timeout):
            return len(self._universe)

    async def means(self, windows: Iterable[int]) -> dict[int, list[PriceBar]]:
        """Moving averages for each requested window length.

        Every length must be positive and no larger than the universe
        window, even while the window is still filling up. Lengths larger
        than the current contents yield an empty sequence.
        """
        lengths = check_window_lengths(windows, self.universe_window)
        bars = await self.snapshot()
        return moving_means(bars, lengths)

    async def deviations(
        self, means: Mapping[int, Sequence[PriceBar]],
    ) -> dict[int, list[PriceBar]]:
        """Mean absolute deviation around previously computed ``means``.

        ``means`` must match the current window: each sequence needs
        ``n - L + 1`` entries. Averages computed before a later ``update``
        usually fail this check; use ``means_and_deviations`` for a
        consistent pair.
        """
        check_window_lengths(means.keys(), self.universe_window)
        bars = await self.snapshot()
        return mean_deviations(bars, means)

    async def means_and_deviations(
        self, windows: Iterable[int],
    ) -> tuple[dict[int, list[PriceBar]], dict[int, list[PriceBar]]]:
        """Averages and deviations computed from one snapshot."""
        lengths = check_window_lengths(windows, self.universe_window)
        bars = await self.snapshot()
        means = moving_means(bars, lengths)
        return means, mean_deviations(bars, means)
