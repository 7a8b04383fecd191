"""Factory helpers for wiring the refresh pipeline at startup."""

from __future__ import annotations

from county_risk import config
from county_risk.data_sources.base import LocationPlatform
from county_risk.data_sources.ip_location import IpGeolocationPlatform
from county_risk.data_sources.location_source import LocationSource
from county_risk.data_sources.risk_client import RiskClient
from county_risk.pipeline import RefreshPipeline
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_PLATFORM_NAME = "ip"


def build_location_platform(settings: config.Settings | None = None) -> LocationPlatform:
    """Instantiate the configured host location platform."""
    settings = settings or config.settings
    name = (settings.location_platform or DEFAULT_PLATFORM_NAME).lower()

    if name == "ip":
        logger.info("Using IP geolocation platform", extra={"url": settings.geolocation_url})
        return IpGeolocationPlatform(settings.geolocation_url, timeout=settings.request_timeout_seconds)

    raise ValueError(f"Unknown location platform '{name}'")


def build_risk_client(settings: config.Settings | None = None) -> RiskClient:
    settings = settings or config.settings
    return RiskClient(settings.risk_endpoint_url, timeout=settings.request_timeout_seconds)


def build_pipeline(settings: config.Settings | None = None) -> RefreshPipeline:
    """Build a pipeline with its own location source and risk client."""
    settings = settings or config.settings
    return RefreshPipeline(
        location_source=LocationSource(build_location_platform(settings)),
        risk_client=build_risk_client(settings),
    )
