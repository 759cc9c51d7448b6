"""pandas conversions for price bars and moving statistics results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import pandas as pd

from movingstats.models.bar import PriceBar

BAR_COLUMNS = ["time", "open", "high", "low", "close", "vwap", "volume", "count"]


def bars_to_frame(bars: Sequence[PriceBar]) -> pd.DataFrame:
    """One row per bar, columns in ``BAR_COLUMNS`` order."""
    records = [
        {
            "time": b.time,
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "vwap": b.vwap,
            "volume": b.volume,
            "count": b.count,
        }
        for b in bars
    ]
    return pd.DataFrame(records, columns=BAR_COLUMNS)


def frame_to_bars(df: pd.DataFrame) -> list[PriceBar]:
    bars: list[PriceBar] = []
    for _, row in df.iterrows():
        bars.append(PriceBar(
            time=int(row["time"]),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            vwap=float(row["vwap"]),
            volume=float(row["volume"]),
            count=int(row["count"]),
        ))
    return bars


def results_to_frame(results: Mapping[int, Sequence[PriceBar]]) -> pd.DataFrame:
    """Long-format frame of ``means``/``deviations`` output.

    Adds a ``window`` column (the window length) and a ``position`` column
    (index of the window within its sequence, earliest first).
    """
    frames = []
    for window in sorted(results):
        df = bars_to_frame(results[window])
        df.insert(0, "position", range(len(df)))
        df.insert(0, "window", window)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=["window", "position", *BAR_COLUMNS])
    return pd.concat(frames, ignore_index=True)
