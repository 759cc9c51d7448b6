"""Abstract base class for price bar feeds."""

from __future__ import annotations

from abc import ABC, abstractmethod

from movingstats.models.bar import PriceBar


class BaseBarFeed(ABC):
    """Abstract source of price bars, delivered one at a time.

    Feeds own their transport (streaming or batch) and map its messages to
    ``PriceBar`` records. They are expected to deliver bars in
    chronological order; the statistics engine does not reorder them.
    """

    @abstractmethod
    async def consume(self) -> PriceBar:
        """Wait for and return the next bar.

        Raises:
            MovingStatsError: ``FEED_EXHAUSTED`` when no more bars will
                arrive, ``FEED_ERROR`` for transport failures (``retryable``
                tells the pump whether to keep going).
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None
