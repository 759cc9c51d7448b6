"""Mock feed for testing and demos — no market connection required."""

from __future__ import annotations

from collections import deque

from movingstats.errors import MovingStatsError, MovingStatsErrorCode
from movingstats.feeds.base import BaseBarFeed
from movingstats.models.bar import PriceBar


class MockFeed(BaseBarFeed):
    """In-memory feed that replays preset bars or generates synthetic ones.

    Preset bars (``set_bars``) and injected failures (``fail_next``) are
    served first. Without presets, ``limit`` synthetic bars spaced
    ``interval`` apart are generated from ``start_time``.
    """

    def __init__(
        self,
        limit: int = 0,
        *,
        start_time: int = 1_700_000_000,
        interval: int = 60,
        base_price: float = 150.0,
    ) -> None:
        self.limit = limit
        self.start_time = start_time
        self.interval = interval
        self.base_price = base_price
        self.closed = False
        self._queue: deque[PriceBar | MovingStatsError] = deque()
        self._generated = 0

    # --- Pre-load helpers ---

    def set_bars(self, bars: list[PriceBar]) -> None:
        self._queue.extend(bars)

    def fail_next(self, message: str = "Feed disconnected", retryable: bool = True) -> None:
        self._queue.append(MovingStatsError(
            message, code=MovingStatsErrorCode.FEED_ERROR, retryable=retryable,
        ))

    # --- Feed implementation ---

    async def consume(self) -> PriceBar:
        if self._queue:
            item = self._queue.popleft()
            if isinstance(item, MovingStatsError):
                raise item
            return item
        if self._generated < self.limit:
            bar = self._synthetic_bar(self._generated)
            self._generated += 1
            return bar
        raise MovingStatsError(
            "Feed has no more bars",
            code=MovingStatsErrorCode.FEED_EXHAUSTED,
        )

    async def close(self) -> None:
        self.closed = True

    # --- Synthetic data generation ---

    def _synthetic_bar(self, i: int) -> PriceBar:
        o = self.base_price + (i % 5) * 0.10
        h = o + 0.25
        l = o - 0.15
        c = o + 0.05
        return PriceBar(
            time=self.start_time + i * self.interval,
            open=round(o, 2),
            high=round(h, 2),
            low=round(l, 2),
            close=round(c, 2),
            vwap=round((o + h + l + c) / 4, 4),
            volume=10000.0 + i * 100,
            count=50 + i,
        )
