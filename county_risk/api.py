"""HTTP API the presentation layer reads snapshots from."""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from .config import settings
from .data_sources.factory import build_pipeline
from .domain import Snapshot
from .timeline import WidgetTimelineProvider
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="county_risk/api")

router = APIRouter()
PROVIDER = WidgetTimelineProvider(build_pipeline(settings))


class ReportPayload(BaseModel):
    """Risk report fields as received from the endpoint."""
    rawLevel: int
    levelLabel: str
    countyName: str
    stateName: str
    lastUpdated: str


class SnapshotResponse(BaseModel):
    """Serialized snapshot for the widget view."""
    captured_at: datetime
    next_refresh_at: datetime
    latitude: float
    longitude: float
    tier: str
    tier_label: str
    theme: str
    report: ReportPayload
    placeholder: bool = False


class TimelineResponse(BaseModel):
    """Entries to display and the earliest time to ask again."""
    entries: list[SnapshotResponse]
    refresh_after: datetime


def _to_response(snapshot: Snapshot) -> SnapshotResponse:
    return SnapshotResponse(**snapshot.to_display_dict())


@router.get("/snapshot", response_model=SnapshotResponse)
async def current_snapshot():
    """Latest snapshot, running a refresh cycle first if one is due."""
    snapshot = await PROVIDER.current()
    return _to_response(snapshot)


@router.get("/preview", response_model=SnapshotResponse)
def preview_snapshot():
    """Latest snapshot or the placeholder, without touching the network."""
    return _to_response(PROVIDER.get_snapshot())


@router.get("/placeholder", response_model=SnapshotResponse)
def placeholder_snapshot():
    return _to_response(PROVIDER.placeholder())


@router.get("/timeline", response_model=TimelineResponse)
async def timeline():
    """Run one refresh cycle and return the resulting timeline."""
    result = await PROVIDER.get_timeline()
    logger.debug("Timeline refresh_after=%s", result.refresh_after.isoformat())
    return TimelineResponse(
        entries=[_to_response(entry) for entry in result.entries],
        refresh_after=result.refresh_after,
    )
