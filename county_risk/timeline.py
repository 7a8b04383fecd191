"""Widget host: holds the latest snapshot and serializes refresh cycles."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from county_risk.domain import REFRESH_INTERVAL, Snapshot
from county_risk.pipeline import RefreshPipeline
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="timeline")


@dataclass(frozen=True)
class Timeline:
    """Entries to display plus the earliest time the host should refresh."""
    entries: List[Snapshot]
    refresh_after: datetime


class WidgetTimelineProvider:
    """Keep the last good snapshot and decide when a new cycle may run.

    Failed cycles leave the previous snapshot (or the placeholder) in place.
    Only one cycle runs at a time.
    """

    def __init__(self, pipeline: RefreshPipeline):
        self.pipeline = pipeline
        self._latest: Optional[Snapshot] = None
        self._lock = asyncio.Lock()

    @property
    def latest(self) -> Optional[Snapshot]:
        return self._latest

    def placeholder(self) -> Snapshot:
        return self.pipeline.placeholder()

    def get_snapshot(self) -> Snapshot:
        """Synchronous preview: the latest snapshot, else a placeholder."""
        return self._latest or self.pipeline.placeholder()

    def is_due(self, now: Optional[datetime] = None) -> bool:
        if self._latest is None:
            return True
        now = now or self.pipeline.clock()
        return now >= self._latest.next_refresh_at

    async def _refresh(self) -> Timeline:
        result = await self.pipeline.run_cycle()
        if result.ok:
            self._latest = result.snapshot
            return Timeline(entries=[result.snapshot], refresh_after=result.snapshot.next_refresh_at)

        logger.info("Keeping previous entry after failed cycle (%s)", result.error.kind)
        entry = self.get_snapshot()
        return Timeline(entries=[entry], refresh_after=self.pipeline.clock() + REFRESH_INTERVAL)

    async def get_timeline(self) -> Timeline:
        """Run one cycle and return what should be displayed next."""
        async with self._lock:
            return await self._refresh()

    async def current(self) -> Snapshot:
        """Latest snapshot, running a cycle first when one is due."""
        async with self._lock:
            if self.is_due():
                timeline = await self._refresh()
                return timeline.entries[0]
            return self.get_snapshot()
