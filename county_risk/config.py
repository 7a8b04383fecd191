"""Deployment configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")

DEFAULT_RISK_ENDPOINT_URL = "https://jndaditnce62h556zs2k5q3kqu0hlvjr.lambda-url.us-east-1.on.aws/"
DEFAULT_GEOLOCATION_URL = "https://ipapi.co/json/"


class Settings(BaseSettings):
    """Environment-driven configuration for the county risk widget backend."""
    model_config = SettingsConfigDict(env_prefix="COUNTY_RISK_", extra="ignore")

    risk_endpoint_url: str = DEFAULT_RISK_ENDPOINT_URL
    location_platform: str = "ip"  # options: ip
    geolocation_url: str = DEFAULT_GEOLOCATION_URL
    request_timeout_seconds: float | None = None  # None keeps the transport default
    log_level: str = "INFO"

    @field_validator("risk_endpoint_url", "geolocation_url", mode="after")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return str(v).strip()

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return str(v).strip().upper() or "INFO"


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
