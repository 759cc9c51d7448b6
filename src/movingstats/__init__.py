"""movingstats — sliding-window moving statistics over price bars.

Bounded, time-ordered window of recent bars with moving averages for many
window lengths computed in one prefix-sum pass, plus mean absolute
deviations around those averages.

Quick start::

    from movingstats import create_statistics_from_env
    stats = create_statistics_from_env()
    await stats.update(bar)
    means = await stats.means({5, 20})
"""

from __future__ import annotations

import os

from movingstats.aggregation import mean_deviations, moving_means, prefix_sums
from movingstats.config import MovingStatsConfig
from movingstats.engine import MovingStatistics
from movingstats.errors import LockAcquisitionError, MovingStatsError, MovingStatsErrorCode
from movingstats.feeds import BaseBarFeed, IngestReport, MockFeed, ingest
from movingstats.models.bar import PriceBar
from movingstats.quality import validate_bars
from movingstats.window import BoundedWindow

__version__ = "0.1.0"

__all__ = [
    # Engine
    "MovingStatistics",
    "create_statistics_from_env",
    "BoundedWindow",
    # Algorithms
    "prefix_sums",
    "moving_means",
    "mean_deviations",
    # Config
    "MovingStatsConfig",
    "config_from_env",
    # Errors
    "MovingStatsError",
    "MovingStatsErrorCode",
    "LockAcquisitionError",
    # Models
    "PriceBar",
    # Feeds
    "BaseBarFeed",
    "MockFeed",
    "IngestReport",
    "ingest",
    # Quality
    "validate_bars",
]


def config_from_env() -> MovingStatsConfig:
    """Build a MovingStatsConfig from environment variables.

    Environment variables:
        MOVING_STATS_WINDOW: Universe window capacity (default: 100).
        MOVING_STATS_LOCK_TIMEOUT: Seconds to wait for window access
            (default: unset, wait indefinitely).
        MOVING_STATS_VALIDATE: "0"/"false" disables the ingest quality gate.
        MOVING_STATS_WINDOWS: Comma-separated moving-average lengths
            (default: "5,20").
    """
    timeout = os.getenv("MOVING_STATS_LOCK_TIMEOUT", "").strip()
    windows = [
        int(w.strip())
        for w in os.getenv("MOVING_STATS_WINDOWS", "5,20").split(",")
        if w.strip()
    ]
    return MovingStatsConfig(
        universe_window=int(os.getenv("MOVING_STATS_WINDOW", "100")),
        lock_timeout_seconds=float(timeout) if timeout else None,
        validate=os.getenv("MOVING_STATS_VALIDATE", "1").strip().lower()
        not in ("0", "false", "no"),
        windows=windows,
    )


def create_statistics_from_env() -> MovingStatistics:
    """Zero-config factory — reads window settings from env vars."""
    return MovingStatistics.from_config(config_from_env())
