"""Host location and remote risk data sources."""

from .base import AuthorizationStatus, LocationPlatform, LocationProvider, RiskDataSource
from .ip_location import IpGeolocationPlatform, LocationPlatformError
from .location_source import LocationSource
from .risk_client import RiskClient, build_risk_url, parse_risk_report

__all__ = [
    "AuthorizationStatus",
    "LocationPlatform",
    "LocationProvider",
    "RiskDataSource",
    "IpGeolocationPlatform",
    "LocationPlatformError",
    "LocationSource",
    "RiskClient",
    "build_risk_url",
    "parse_risk_report",
]
