"""Interfaces for the host services a refresh cycle depends on."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence

from county_risk.domain import Coordinate, RiskReport


class AuthorizationStatus(str, Enum):
    """Location authorization state as reported by the host platform."""
    NOT_DETERMINED = "not_determined"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"
    DENIED = "denied"
    RESTRICTED = "restricted"

    @property
    def is_authorized(self) -> bool:
        return self in (AuthorizationStatus.AUTHORIZED_WHEN_IN_USE, AuthorizationStatus.AUTHORIZED_ALWAYS)


class LocationPlatform(Protocol):
    """Host-provided location capability."""

    def authorization_status(self) -> AuthorizationStatus:
        """Return the current authorization state without prompting."""
        ...

    async def request_when_in_use_authorization(self) -> AuthorizationStatus:
        """Prompt for in-use access and return the resulting state."""
        ...

    async def request_location(self) -> Sequence[Coordinate]:
        """Perform one location request; returns the fixes reported, oldest first.

        Raises on platform failure.
        """
        ...


class RiskDataSource(Protocol):
    """Anything that can turn a coordinate into a county risk report."""

    async def fetch_risk(self, coordinate: Coordinate) -> RiskReport:
        ...


class LocationProvider(Protocol):
    """Anything that can resolve the device's current coordinate."""

    async def request_current_location(self) -> Coordinate:
        ...
