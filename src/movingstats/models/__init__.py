"""Moving statistics data models."""

from movingstats.models.bar import PriceBar

__all__ = [
    "PriceBar",
]
