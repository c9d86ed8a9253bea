"""
API routes for provider rate cards and distribution licensing.
"""
from typing import Dict, Any, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
import logging

from infra_pricing.domain.enums import SupportTier
from infra_pricing.domain.licensing_models import LicensingInput
from infra_pricing.pricing.licensing import has_license_cost
from infra_pricing.pricing.registry import PricingRegistry, PricingRegistryError, get_pricing_registry


logger = logging.getLogger(__name__)
router = APIRouter()


class LicensingRequest(BaseModel):
    """Request model for a distribution licensing quote."""
    distribution: str = Field(..., description="Distribution name, e.g. OpenShift or RancherEKS")
    node_count: int = Field(..., ge=0, description="Total nodes in the cluster(s)")
    total_cores: Optional[int] = Field(None, ge=0, description="Total cores (8 per node when omitted)")
    total_sockets: Optional[int] = Field(None, ge=0, description="Total sockets (2 per node when omitted)")
    environment_count: int = Field(default=1, ge=1)
    master_nodes: int = Field(default=0, ge=0)
    worker_nodes: Optional[int] = Field(None, ge=0)
    infra_nodes: int = Field(default=0, ge=0)
    support_tier: SupportTier = Field(default=SupportTier.STANDARD)
    contract_years: int = Field(default=1, ge=1, le=10)
    is_managed_service: bool = Field(default=False)


@router.get("/api/pricing/providers")
async def list_providers(registry: PricingRegistry = Depends(get_pricing_registry)) -> Dict[str, Any]:
    """List providers with a registered rate card."""
    return {
        "providers": [provider.value for provider in registry.providers()],
        "distributions": [distribution.value for distribution in registry.distributions()],
    }


@router.get("/api/pricing/providers/{provider}")
async def get_provider_pricing(
    provider: str,
    region: Optional[str] = None,
    ha_control_plane: bool = False,
    registry: PricingRegistry = Depends(get_pricing_registry),
) -> Dict[str, Any]:
    """
    Rate card for a provider in a region.

    Raises:
        HTTPException: 404 if the provider is unknown
    """
    try:
        pricing = registry.get_pricing(provider, region, ha_control_plane=ha_control_plane)
    except PricingRegistryError as error:
        raise HTTPException(status_code=404, detail=str(error)) from error
    return {"status": "ok", "pricing": pricing.to_dict()}


@router.get("/api/pricing/providers/{provider}/regions")
async def get_provider_regions(
    provider: str,
    registry: PricingRegistry = Depends(get_pricing_registry),
) -> Dict[str, Any]:
    try:
        regions = registry.get_regions(provider)
    except PricingRegistryError as error:
        raise HTTPException(status_code=404, detail=str(error)) from error
    return {"provider": provider, "regions": [region.to_dict() for region in regions]}


@router.post("/api/pricing/licensing")
async def calculate_licensing(
    licensing_request: LicensingRequest,
    registry: PricingRegistry = Depends(get_pricing_registry),
) -> Dict[str, Any]:
    """
    Annual and monthly licence cost for a distribution.

    Unknown distribution names are priced at zero and flagged in the response.
    """
    try:
        licensing_input = LicensingInput(
            node_count=licensing_request.node_count,
            total_cores=licensing_request.total_cores,
            total_sockets=licensing_request.total_sockets,
            environment_count=licensing_request.environment_count,
            master_nodes=licensing_request.master_nodes,
            worker_nodes=licensing_request.worker_nodes,
            infra_nodes=licensing_request.infra_nodes,
            support_tier=licensing_request.support_tier,
            contract_years=licensing_request.contract_years,
            is_managed_service=licensing_request.is_managed_service,
        )
        strategy = registry.get_licensing(licensing_request.distribution)
        cost = strategy.calculate(licensing_input)

        recognized = registry.is_distribution_supported(licensing_request.distribution)
        return {
            "status": "ok",
            "distribution": licensing_request.distribution,
            "recognized": recognized,
            "vendor": strategy.vendor,
            "display_name": strategy.display_name,
            "has_license_cost": recognized and has_license_cost(strategy.distribution),
            "licensing": cost.to_dict(),
            "support_tiers": [tier.to_dict() for tier in strategy.support_tiers()],
        }
    except Exception as error:
        logger.error("Licensing calculation failed for %s: %s", licensing_request.distribution, error, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while calculating licensing"
        ) from error
