"""One-shot current-location requests on top of a host location platform."""
from __future__ import annotations

from county_risk.data_sources.base import AuthorizationStatus, LocationPlatform
from county_risk.domain import Coordinate
from county_risk.errors import LocationUnavailable
from utils.logging_utils import get_tagged_logger, round_coordinate

logger = get_tagged_logger(__name__, tag="location_source")


class LocationSource:
    """Resolve the current coordinate through an injected platform.

    Authorization is requested at most once for the lifetime of the source, and
    only while the platform still reports NOT_DETERMINED. Each call issues a
    single platform location request and resolves with the last fix reported.
    """

    def __init__(self, platform: LocationPlatform):
        self._platform = platform
        self._authorization_requested = False

    async def _ensure_authorized(self) -> AuthorizationStatus:
        status = self._platform.authorization_status()
        if status == AuthorizationStatus.NOT_DETERMINED and not self._authorization_requested:
            self._authorization_requested = True
            logger.info("Requesting when-in-use location authorization")
            status = await self._platform.request_when_in_use_authorization()
        return status

    async def request_current_location(self) -> Coordinate:
        """Return the most recent fix or raise LocationUnavailable."""
        try:
            status = await self._ensure_authorized()
        except Exception as exc:
            raise LocationUnavailable(f"location authorization failed: {exc}") from exc
        if not status.is_authorized:
            logger.debug("Location authorization not granted", extra={"status": status.value})
            raise LocationUnavailable(f"location authorization is {status.value}")

        try:
            fixes = await self._platform.request_location()
        except Exception as exc:
            raise LocationUnavailable(f"location request failed: {exc}") from exc

        if not fixes:
            raise LocationUnavailable("location request returned no fixes")

        latest = fixes[-1]
        logger.debug(
            "Resolved location fix %s (%d reported)",
            round_coordinate(latest.latitude, latest.longitude),
            len(fixes),
        )
        return latest
