"""Client for the county risk endpoint."""
from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import urlencode

import requests
from pydantic import ValidationError

from county_risk.config import DEFAULT_RISK_ENDPOINT_URL
from county_risk.domain import Coordinate, RiskReport
from county_risk.errors import MalformedResponse, NetworkError
from utils.logging_utils import get_tagged_logger, round_coordinate

logger = get_tagged_logger(__name__, tag="risk_client")

# Plain session: no caching, no retry adapter, no extra headers.
session = requests.Session()


def build_risk_url(endpoint_url: str, coordinate: Coordinate) -> str:
    """Append the coordinate as a single comma-joined `location` query value."""
    location = f"{coordinate.latitude},{coordinate.longitude}"
    separator = "&" if "?" in endpoint_url else "?"
    return f"{endpoint_url}{separator}{urlencode({'location': location})}"


def parse_risk_report(body: str | bytes) -> RiskReport:
    """Parse a JSON body into a RiskReport or raise MalformedResponse."""
    try:
        return RiskReport.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedResponse(
            f"risk response failed validation ({exc.error_count()} error(s)): {exc.errors()[0]['msg']}"
        ) from exc


class RiskClient:
    """Fetch a RiskReport for a coordinate with one GET, never retried."""

    def __init__(
        self,
        endpoint_url: str = DEFAULT_RISK_ENDPOINT_URL,
        *,
        http_session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._session = http_session

    def _get(self, url: str) -> requests.Response:
        http = self._session if self._session is not None else session
        resp = http.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp

    async def fetch_risk(self, coordinate: Coordinate) -> RiskReport:
        url = build_risk_url(self.endpoint_url, coordinate)
        logger.info(
            "Fetching county risk for %s",
            round_coordinate(coordinate.latitude, coordinate.longitude),
        )

        try:
            resp = await asyncio.to_thread(self._get, url)
        except requests.exceptions.RequestException as exc:
            raise NetworkError(f"risk request failed: {exc}") from exc

        report = parse_risk_report(resp.text)
        logger.debug(
            "Risk report parsed",
            extra={"county": report.county_name, "state": report.state_name, "raw_level": report.raw_level},
        )
        return report
