"""Refresh pipeline: location fix -> risk fetch -> classification -> snapshot."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from county_risk.classifier import classify
from county_risk.data_sources.base import LocationProvider, RiskDataSource
from county_risk.domain import (
    REFRESH_INTERVAL,
    Coordinate,
    CycleResult,
    PresentationTier,
    RiskReport,
    Snapshot,
)
from county_risk.errors import RefreshError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="pipeline")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshPipeline:
    """Run one refresh cycle at a time and report when the next one is due.

    The pipeline never schedules itself; callers read `next_refresh_at` from the
    snapshot and invoke `run_cycle` again no earlier than that.
    """

    def __init__(
        self,
        location_source: LocationProvider,
        risk_client: RiskDataSource,
        *,
        classifier: Callable[[int], PresentationTier] = classify,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.location_source = location_source
        self.risk_client = risk_client
        self.classifier = classifier
        self.clock = clock or _utcnow

    def _assemble(self, coordinate: Coordinate, report: RiskReport) -> Snapshot:
        captured_at = self.clock()
        return Snapshot(
            captured_at=captured_at,
            coordinate=coordinate,
            report=report,
            tier=self.classifier(report.raw_level),
            next_refresh_at=captured_at + REFRESH_INTERVAL,
        )

    async def run_cycle(self) -> CycleResult:
        """Run location -> fetch -> classify; failures come back in the result."""
        try:
            coordinate = await self.location_source.request_current_location()
            report = await self.risk_client.fetch_risk(coordinate)
        except RefreshError as exc:
            logger.warning("Refresh cycle aborted (%s): %s", exc.kind, exc)
            return CycleResult(error=exc)

        snapshot = self._assemble(coordinate, report)
        logger.info(
            "Refresh cycle complete: %s, %s -> %s",
            report.county_name,
            report.state_name,
            snapshot.tier.value,
        )
        return CycleResult(snapshot=snapshot)

    def placeholder(self) -> Snapshot:
        """Synthetic UNKNOWN snapshot for use before the first successful cycle."""
        captured_at = self.clock()
        return Snapshot(
            captured_at=captured_at,
            coordinate=Coordinate(latitude=0.0, longitude=0.0),
            report=RiskReport.placeholder(),
            tier=PresentationTier.UNKNOWN,
            next_refresh_at=captured_at + REFRESH_INTERVAL,
        )
