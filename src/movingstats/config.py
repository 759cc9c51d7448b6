"""Moving statistics configuration."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MovingStatsConfig:
    """Configuration for MovingStatistics and the feed pump.

    Attributes:
        universe_window: Capacity of the sliding window (number of bars kept).
        lock_timeout_seconds: Bound on waiting for window access; ``None``
            waits indefinitely.
        validate: Whether ``ingest`` runs quality checks on incoming bars.
        windows: Moving-average lengths reported after ingestion.
    """

    universe_window: int = 100
    lock_timeout_seconds: float | None = None
    validate: bool = True
    windows: list[int] = field(default_factory=lambda: [5, 20])
