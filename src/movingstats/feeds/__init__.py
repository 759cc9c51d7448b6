"""Price bar feeds and the ingest pump."""

from __future__ import annotations

from movingstats.feeds.base import BaseBarFeed
from movingstats.feeds.mock import MockFeed
from movingstats.feeds.pump import IngestReport, ingest

__all__ = ["BaseBarFeed", "IngestReport", "MockFeed", "ingest"]
