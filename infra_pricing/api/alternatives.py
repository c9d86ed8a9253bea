"""
API routes for managed cloud alternatives to self-hosted distributions.
"""
from typing import Dict, Any
from fastapi import APIRouter, HTTPException
import logging

from infra_pricing.domain.enums import Distribution
from infra_pricing.services.cloud_alternatives import get_cloud_alternatives, is_on_prem_distribution


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/alternatives/{distribution}")
async def list_cloud_alternatives(distribution: str) -> Dict[str, Any]:
    """
    Managed offerings that could replace a distribution.

    Raises:
        HTTPException: 404 if the distribution is unknown
    """
    try:
        resolved = Distribution(distribution)
    except ValueError as error:
        raise HTTPException(status_code=404, detail=f"Unknown distribution: {distribution}") from error

    alternatives = get_cloud_alternatives(resolved)
    logger.debug("Found %d cloud alternatives for %s", len(alternatives), resolved.value)
    return {
        "distribution": resolved.value,
        "is_on_prem": is_on_prem_distribution(resolved),
        "alternatives": [alternative.to_dict() for alternative in alternatives],
    }
