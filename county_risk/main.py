"""FastAPI application setup for the county risk widget backend."""

from fastapi import FastAPI

from .api import router as api_router
from .config import settings
from utils.logging_utils import setup_logging

setup_logging(level=settings.log_level, job_name="county_risk_api")

app = FastAPI(title="Current County Risk")

app.include_router(api_router, prefix="/v1")
