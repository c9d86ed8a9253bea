"""
Main FastAPI application bootstrap.
Validates configuration and includes routers.
"""
import logging
from typing import Dict

from fastapi import FastAPI

from infra_pricing.core.config import config
from infra_pricing.api.pricing import router as pricing_router
from infra_pricing.api.estimates import router as estimates_router
from infra_pricing.api.lowcode import router as lowcode_router
from infra_pricing.api.alternatives import router as alternatives_router


logger = logging.getLogger(__name__)

# Validate configuration on startup
try:
    config.validate()
except ValueError as error:
    # Fail fast with a clear message
    raise RuntimeError(f"Configuration error: {error}") from error

logger.info(
    "Pricing engine starting: currency=%s, include_pricing=%s, live_pricing=%s",
    config.DEFAULT_CURRENCY,
    config.INCLUDE_PRICING_IN_RESULTS,
    config.LIVE_PRICING_ENABLED,
)


app = FastAPI(
    title="Infrastructure Pricing",
    description="Cost estimation and licensing for Kubernetes platforms and low-code deployments",
)

# Include routers
app.include_router(pricing_router)
app.include_router(estimates_router)
app.include_router(lowcode_router)
app.include_router(alternatives_router)


@app.get("/health")
async def health() -> Dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
