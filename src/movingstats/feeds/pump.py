"""Feed pump — moves bars from a feed into a MovingStatistics engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from movingstats.config import MovingStatsConfig
from movingstats.engine import MovingStatistics
from movingstats.errors import MovingStatsError, MovingStatsErrorCode
from movingstats.feeds.base import BaseBarFeed
from movingstats.models.bar import PriceBar
from movingstats.quality import validate_bars

logger = logging.getLogger(__name__)


@dataclass
class IngestReport:
    """Outcome of one ``ingest`` run.

    Attributes:
        ingested: Bars passed to ``update``.
        evicted: Number of bars pushed out of the window by those updates.
        last_evicted: Most recently evicted bar, if any.
        rejected: Bars dropped by the quality gate.
        failures: Retryable feed errors that were logged and skipped.
        latest_means: Most recent moving average per requested window
            length (absent while the window holds fewer bars than the length).
    """

    ingested: int = 0
    evicted: int = 0
    last_evicted: PriceBar | None = None
    rejected: int = 0
    failures: int = 0
    latest_means: dict[int, PriceBar] = field(default_factory=dict)


async def ingest(
    feed: BaseBarFeed,
    statistics: MovingStatistics,
    *,
    max_bars: int | None = None,
    validate: bool | None = None,
    windows: Iterable[int] | None = None,
    config: MovingStatsConfig | None = None,
) -> IngestReport:
    """Consume ``feed`` until it is exhausted or ``max_bars`` were ingested.

    ``validate`` and ``windows`` fall back to ``config`` when not given
    (validation on and no reported windows without a config).

    With ``validate`` on, a bar that fails the quality checks against the
    previously ingested bar (ordering, NaN, OHLC consistency) is dropped
    with a warning. Retryable feed errors are logged and skipped;
    non-retryable ones propagate. Engine errors always propagate.

    The feed is closed when it is exhausted or fails; stopping at
    ``max_bars`` leaves it open so the caller can resume.
    """
    if validate is None:
        validate = config.validate if config is not None else True
    if windows is None and config is not None:
        windows = config.windows

    report = IngestReport()
    previous: PriceBar | None = None
    finished = False

    try:
        while max_bars is None or report.ingested < max_bars:
            try:
                bar = await feed.consume()
            except MovingStatsError as e:
                if e.code == MovingStatsErrorCode.FEED_EXHAUSTED:
                    logger.debug("Feed exhausted after %d bars", report.ingested)
                    finished = True
                    break
                if not e.retryable:
                    finished = True
                    raise
                report.failures += 1
                logger.warning("Feed error, continuing: %s", e)
                continue

            if validate:
                recent = [bar] if previous is None else [previous, bar]
                result = validate_bars(recent, max_move=None)
                if not result.passed:
                    report.rejected += 1
                    msgs = "; ".join(c.message for c in result.failed_checks)
                    logger.warning("Rejected bar %d: %s", bar.time, msgs)
                    continue

            evicted = await statistics.update(bar)
            report.ingested += 1
            previous = bar
            if evicted is not None:
                report.evicted += 1
                report.last_evicted = evicted
    finally:
        if finished:
            await feed.close()

    if windows is not None:
        means = await statistics.means(windows)
        report.latest_means = {w: seq[-1] for w, seq in means.items() if seq}

    logger.debug(
        "Ingested %d bars (%d evicted, %d rejected, %d feed errors)",
        report.ingested, report.evicted, report.rejected, report.failures,
    )
    return report
