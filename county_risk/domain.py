"""Domain vocabulary for the county risk widget.

Defines the values that flow through a refresh cycle: the coordinate a cycle
starts from, the risk report parsed from the remote endpoint, the presentation
tier derived from it, and the immutable snapshot handed to the presentation
layer. No fetching or classification logic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from county_risk.errors import RefreshError

REFRESH_INTERVAL = timedelta(minutes=1)
PLACEHOLDER_TEXT = "Loading..."
PLACEHOLDER_LEVEL = -1


@dataclass(frozen=True)
class Coordinate:
    """A single location fix in decimal degrees."""
    latitude: float
    longitude: float


class RiskReport(BaseModel):
    """Risk classification for the county around a coordinate.

    Accepts the widget endpoint's camelCase keys as well as the upstream CDC
    community-level keys the endpoint historically passed through. Unknown keys
    are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    raw_level: int = Field(
        validation_alias=AliasChoices("rawLevel", "raw_level", "CCL_community_burden_level_integer"),
        serialization_alias="rawLevel",
    )
    level_label: str = Field(
        validation_alias=AliasChoices("levelLabel", "level_label", "CCL_community_burden_level"),
        serialization_alias="levelLabel",
    )
    county_name: str = Field(
        validation_alias=AliasChoices("countyName", "county_name", "County"),
        serialization_alias="countyName",
    )
    state_name: str = Field(
        validation_alias=AliasChoices("stateName", "state_name", "State_name"),
        serialization_alias="stateName",
    )
    last_updated: str = Field(
        validation_alias=AliasChoices("lastUpdated", "last_updated", "CCL_report_date"),
        serialization_alias="lastUpdated",
    )

    @field_validator("raw_level", mode="before")
    @classmethod
    def reject_boolean_level(cls, v):
        """Integer-valued strings are allowed (upstream shape); booleans are not."""
        if isinstance(v, bool):
            raise ValueError("risk level must be an integer, not a boolean")
        return v

    @classmethod
    def placeholder(cls) -> RiskReport:
        """Sentinel report shown before any real data has arrived."""
        return cls(
            raw_level=PLACEHOLDER_LEVEL,
            level_label=PLACEHOLDER_TEXT,
            county_name=PLACEHOLDER_TEXT,
            state_name=PLACEHOLDER_TEXT,
            last_updated=PLACEHOLDER_TEXT,
        )


class PresentationTier(str, Enum):
    """Presentation-facing risk tier."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def theme(self) -> str:
        """Fixed visual theme identifier (a background colour name)."""
        return _TIER_THEMES[self]


_TIER_LABELS = {
    PresentationTier.LOW: "Low",
    PresentationTier.MEDIUM: "Medium",
    PresentationTier.HIGH: "High",
    PresentationTier.UNKNOWN: "Unknown",
}

_TIER_THEMES = {
    PresentationTier.LOW: "green",
    PresentationTier.MEDIUM: "orange",
    PresentationTier.HIGH: "red",
    PresentationTier.UNKNOWN: "white",
}


@dataclass(frozen=True)
class Snapshot:
    """Immutable result of one refresh cycle (or the placeholder)."""
    captured_at: datetime  # timezone-aware
    coordinate: Coordinate
    report: RiskReport
    tier: PresentationTier
    next_refresh_at: datetime

    @property
    def is_placeholder(self) -> bool:
        return self.report.raw_level == PLACEHOLDER_LEVEL and self.report.county_name == PLACEHOLDER_TEXT

    def to_display_dict(self) -> dict:
        """Flatten the snapshot for JSON responses."""
        return {
            "captured_at": self.captured_at,
            "next_refresh_at": self.next_refresh_at,
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "tier": self.tier.value,
            "tier_label": self.tier.label,
            "theme": self.tier.theme,
            "report": self.report.model_dump(by_alias=True),
            "placeholder": self.is_placeholder,
        }


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one refresh cycle: a snapshot or the error that ended it."""
    snapshot: Optional[Snapshot] = None
    error: Optional[RefreshError] = None

    def __post_init__(self):
        if (self.snapshot is None) == (self.error is None):
            raise ValueError("CycleResult needs exactly one of snapshot or error")

    @property
    def ok(self) -> bool:
        return self.snapshot is not None
