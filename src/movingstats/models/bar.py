"""Price bar (OHLC + vwap/volume/count) value type."""

from __future__ import annotations

from dataclasses import dataclass


def _trunc_div(value: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(value) // abs(divisor)
    return quotient if (value < 0) == (divisor < 0) else -quotient


@dataclass(frozen=True)
class PriceBar:
    """Single price bar over one time slice.

    Bars form an additive group so they can be used directly as prefix-sum
    accumulators. ``time`` takes part in the arithmetic too; a summed
    timestamp has no physical meaning but keeps the bookkeeping uniform.

    Attributes:
        time: Bar timestamp, unique key within a window.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        vwap: Volume-weighted average price.
        volume: Traded volume.
        count: Number of trades aggregated into this bar.
    """

    time: int
    open: float
    high: float
    low: float
    close: float
    vwap: float
    volume: float
    count: int

    @classmethod
    def zero(cls) -> PriceBar:
        """Additive identity."""
        return cls(time=0, open=0.0, high=0.0, low=0.0, close=0.0,
                   vwap=0.0, volume=0.0, count=0)

    def __add__(self, other: PriceBar) -> PriceBar:
        if not isinstance(other, PriceBar):
            return NotImplemented
        return PriceBar(
            time=self.time + other.time,
            open=self.open + other.open,
            high=self.high + other.high,
            low=self.low + other.low,
            close=self.close + other.close,
            vwap=self.vwap + other.vwap,
            volume=self.volume + other.volume,
            count=self.count + other.count,
        )

    def __sub__(self, other: PriceBar) -> PriceBar:
        if not isinstance(other, PriceBar):
            return NotImplemented
        return PriceBar(
            time=self.time - other.time,
            open=self.open - other.open,
            high=self.high - other.high,
            low=self.low - other.low,
            close=self.close - other.close,
            vwap=self.vwap - other.vwap,
            volume=self.volume - other.volume,
            count=self.count - other.count,
        )

    def __truediv__(self, divisor: int) -> PriceBar:
        """Divide every field by ``divisor``.

        ``time`` and ``count`` stay integers (truncating division); the
        price and volume fields use float division. A zero divisor raises
        ``ZeroDivisionError``.
        """
        if isinstance(divisor, bool) or not isinstance(divisor, int):
            return NotImplemented
        if divisor == 0:
            raise ZeroDivisionError("PriceBar division by zero")
        return PriceBar(
            time=_trunc_div(self.time, divisor),
            open=self.open / divisor,
            high=self.high / divisor,
            low=self.low / divisor,
            close=self.close / divisor,
            vwap=self.vwap / divisor,
            volume=self.volume / divisor,
            count=_trunc_div(self.count, divisor),
        )

    def __abs__(self) -> PriceBar:
        return PriceBar(
            time=abs(self.time),
            open=abs(self.open),
            high=abs(self.high),
            low=abs(self.low),
            close=abs(self.close),
            vwap=abs(self.vwap),
            volume=abs(self.volume),
            count=abs(self.count),
        )
