"""Location platform backed by an IP geolocation HTTP service."""
from __future__ import annotations

import asyncio
from typing import List, Optional

import requests

from county_risk.config import DEFAULT_GEOLOCATION_URL
from county_risk.data_sources.base import AuthorizationStatus
from county_risk.domain import Coordinate
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ip_location")

session = requests.Session()


class LocationPlatformError(RuntimeError):
    """The geolocation service failed or answered without a usable position."""


class IpGeolocationPlatform:
    """Resolve the host's approximate position from its public IP address.

    There is no OS permission involved, so authorization is always reported as
    granted and the authorization request is a no-op.
    """

    def __init__(
        self,
        url: str = DEFAULT_GEOLOCATION_URL,
        *,
        http_session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._session = http_session

    def authorization_status(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED_WHEN_IN_USE

    async def request_when_in_use_authorization(self) -> AuthorizationStatus:
        return self.authorization_status()

    def _lookup(self) -> List[Coordinate]:
        http = self._session if self._session is not None else session
        try:
            resp = http.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise LocationPlatformError(f"geolocation lookup failed: {exc}") from exc

        if not isinstance(data, dict):
            raise LocationPlatformError("geolocation response is not an object")

        # ipapi.co style keys first, then ip-api.com style
        lat = data.get("latitude", data.get("lat"))
        lon = data.get("longitude", data.get("lon"))
        try:
            coordinate = Coordinate(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError) as exc:
            raise LocationPlatformError(f"geolocation response has no usable position: {data!r:.200}") from exc
        return [coordinate]

    async def request_location(self) -> List[Coordinate]:
        return await asyncio.to_thread(self._lookup)
