import os

import uvicorn

from county_risk.config import settings
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    logger.info(
        "Starting county risk API",
        extra={"risk_endpoint_url": settings.risk_endpoint_url, "location_platform": settings.location_platform},
    )
    uvicorn.run(
        "county_risk.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
