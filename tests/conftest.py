"""Shared fixtures for movingstats tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from movingstats.feeds.mock import MockFeed
from movingstats.models.bar import PriceBar


def make_bar(time: int, value: float, count: int | None = None) -> PriceBar:
    """Bar whose price/volume fields all equal ``value``."""
    return PriceBar(
        time=time, open=value, high=value, low=value, close=value,
        vwap=value, volume=value, count=int(value) if count is None else count,
    )


@pytest.fixture
def mock_feed() -> MockFeed:
    return MockFeed()


@pytest.fixture
def indexed_bars() -> list[PriceBar]:
    """100 bars with every field equal to the bar's index."""
    return [make_bar(i, float(i)) for i in range(100)]


@pytest.fixture
def sample_bars() -> list[PriceBar]:
    """5 contiguous 1-min bars."""
    base = 1_705_311_000
    bars = []
    for i in range(5):
        bars.append(PriceBar(
            time=base + i * 60,
            open=150.0 + i * 0.1,
            high=150.5 + i * 0.1,
            low=149.5 + i * 0.1,
            close=150.2 + i * 0.1,
            vwap=150.1 + i * 0.1,
            volume=10000.0 + i * 500,
            count=100 + i * 10,
        ))
    return bars
