"""Tests for MockFeed and the ingest pump."""

import logging

import pytest

from movingstats import config_from_env
from movingstats.config import MovingStatsConfig
from movingstats.engine import MovingStatistics
from movingstats.errors import MovingStatsError, MovingStatsErrorCode
from movingstats.feeds import MockFeed, ingest
from movingstats.models.bar import PriceBar

from conftest import make_bar


class TestMockFeed:
    @pytest.mark.asyncio
    async def test_synthetic_bars(self):
        feed = MockFeed(limit=3, start_time=1000, interval=60)
        bars = [await feed.consume() for _ in range(3)]
        assert [b.time for b in bars] == [1000, 1060, 1120]
        assert all(isinstance(b, PriceBar) for b in bars)
        assert all(b.low <= b.open <= b.high for b in bars)

    @pytest.mark.asyncio
    async def test_exhausted(self, mock_feed):
        with pytest.raises(MovingStatsError) as exc_info:
            await mock_feed.consume()
        assert exc_info.value.code == MovingStatsErrorCode.FEED_EXHAUSTED

    @pytest.mark.asyncio
    async def test_preset_bars_served_first(self, mock_feed, sample_bars):
        mock_feed.set_bars(sample_bars)
        assert await mock_feed.consume() == sample_bars[0]

    @pytest.mark.asyncio
    async def test_injected_failure(self, mock_feed):
        mock_feed.fail_next("socket closed", retryable=False)
        with pytest.raises(MovingStatsError) as exc_info:
            await mock_feed.consume()
        assert exc_info.value.code == MovingStatsErrorCode.FEED_ERROR
        assert not exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_close(self, mock_feed):
        await mock_feed.close()
        assert mock_feed.closed


class TestIngest:
    @pytest.mark.asyncio
    async def test_fills_window_and_reports_evictions(self):
        feed = MockFeed(limit=250, start_time=0, interval=60)
        stats = MovingStatistics(100)
        report = await ingest(feed, stats)
        assert report.ingested == 250
        assert report.evicted == 150
        assert report.last_evicted.time == 149 * 60
        assert await stats.size() == 100

    @pytest.mark.asyncio
    async def test_max_bars(self):
        feed = MockFeed(limit=50)
        stats = MovingStatistics(100)
        report = await ingest(feed, stats, max_bars=10)
        assert report.ingested == 10
        assert await stats.size() == 10

    @pytest.mark.asyncio
    async def test_retryable_errors_skipped(self, mock_feed, sample_bars, caplog):
        mock_feed.set_bars(sample_bars[:2])
        mock_feed.fail_next()
        mock_feed.set_bars(sample_bars[2:])
        stats = MovingStatistics(10)
        with caplog.at_level(logging.WARNING):
            report = await ingest(mock_feed, stats)
        assert report.ingested == 5
        assert report.failures == 1
        assert "Feed error" in caplog.text

    @pytest.mark.asyncio
    async def test_fatal_errors_propagate(self, mock_feed, sample_bars):
        mock_feed.set_bars(sample_bars[:2])
        mock_feed.fail_next(retryable=False)
        stats = MovingStatistics(10)
        with pytest.raises(MovingStatsError):
            await ingest(mock_feed, stats)
        assert await stats.size() == 2

    @pytest.mark.asyncio
    async def test_out_of_order_bar_rejected(self, mock_feed):
        mock_feed.set_bars([make_bar(2, 2.0), make_bar(1, 1.0), make_bar(3, 3.0)])
        stats = MovingStatistics(10)
        report = await ingest(mock_feed, stats)
        assert report.ingested == 2
        assert report.rejected == 1
        assert [b.time for b in await stats.snapshot()] == [2, 3]

    @pytest.mark.asyncio
    async def test_validation_disabled(self, mock_feed):
        mock_feed.set_bars([make_bar(2, 2.0), make_bar(1, 1.0), make_bar(3, 3.0)])
        stats = MovingStatistics(10)
        report = await ingest(mock_feed, stats, validate=False)
        assert report.ingested == 3
        assert [b.time for b in await stats.snapshot()] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_latest_means(self):
        feed = MockFeed(limit=10)
        stats = MovingStatistics(20)
        report = await ingest(feed, stats, windows=[5, 20])
        assert set(report.latest_means) == {5}
        expected = (await stats.means({5}))[5][-1]
        assert report.latest_means[5] == expected

    @pytest.mark.asyncio
    async def test_long_feed_keeps_report_bounded(self):
        feed = MockFeed(limit=20000, start_time=0)
        stats = MovingStatistics(10)
        report = await ingest(feed, stats)
        assert report.evicted == 19990
        assert isinstance(report.last_evicted, PriceBar)
        assert report.last_evicted.time == 19989 * 60
        assert await stats.size() == 10


class TestIngestConfig:
    @pytest.mark.asyncio
    async def test_config_disables_validation(self, mock_feed):
        mock_feed.set_bars([make_bar(2, 2.0), make_bar(1, 1.0), make_bar(3, 3.0)])
        stats = MovingStatistics(10)
        config = MovingStatsConfig(validate=False, windows=[2])
        report = await ingest(mock_feed, stats, config=config)
        assert report.ingested == 3
        assert report.rejected == 0

    @pytest.mark.asyncio
    async def test_config_supplies_windows(self):
        stats = MovingStatistics(20)
        config = MovingStatsConfig(windows=[3, 4])
        report = await ingest(MockFeed(limit=10), stats, config=config)
        assert set(report.latest_means) == {3, 4}

    @pytest.mark.asyncio
    async def test_explicit_arguments_override_config(self, mock_feed):
        mock_feed.set_bars([make_bar(2, 2.0), make_bar(1, 1.0)])
        stats = MovingStatistics(10)
        report = await ingest(
            mock_feed, stats, validate=True,
            config=MovingStatsConfig(validate=False, windows=[2]),
        )
        assert report.rejected == 1

    @pytest.mark.asyncio
    async def test_env_settings_drive_the_pump(self, monkeypatch, mock_feed):
        monkeypatch.setenv("MOVING_STATS_VALIDATE", "false")
        monkeypatch.setenv("MOVING_STATS_WINDOWS", "2")
        mock_feed.set_bars([make_bar(2, 2.0), make_bar(1, 1.0), make_bar(3, 3.0)])
        stats = MovingStatistics(10)
        report = await ingest(mock_feed, stats, config=config_from_env())
        assert report.ingested == 3
        assert set(report.latest_means) == {2}
        assert report.latest_means[2] == make_bar(2, 2.5, count=2)


class TestIngestFeedLifecycle:
    @pytest.mark.asyncio
    async def test_closes_exhausted_feed(self):
        feed = MockFeed(limit=3)
        await ingest(feed, MovingStatistics(5))
        assert feed.closed

    @pytest.mark.asyncio
    async def test_closes_feed_on_fatal_error(self, mock_feed):
        mock_feed.fail_next(retryable=False)
        with pytest.raises(MovingStatsError):
            await ingest(mock_feed, MovingStatistics(5))
        assert mock_feed.closed

    @pytest.mark.asyncio
    async def test_max_bars_leaves_feed_open(self):
        feed = MockFeed(limit=10)
        stats = MovingStatistics(20)
        await ingest(feed, stats, max_bars=4)
        assert not feed.closed
        report = await ingest(feed, stats)
        assert report.ingested == 6
        assert feed.closed
