"""
API routes for Kubernetes platform cost estimates.
"""
from typing import Dict, Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
import logging

from infra_pricing.domain.cluster_models import ClusterSpec, EnvironmentResources
from infra_pricing.domain.enums import (
    CloudProvider,
    Distribution,
    EnvironmentType,
    PricingType,
    SupportLevel,
    SupportTier,
)
from infra_pricing.domain.onprem_models import OnPremPricing
from infra_pricing.pricing.live_pricing import LivePricingService
from infra_pricing.pricing.registry import PricingRegistry, get_pricing_registry
from infra_pricing.services.cost_estimator import CostEstimationService, CostEstimatorError
from infra_pricing.services.onprem_calculator import OnPremCostCalculator
from infra_pricing.services.pricing_settings import PricingSettings, present_estimate


logger = logging.getLogger(__name__)
router = APIRouter()


class EnvironmentRequest(BaseModel):
    """Sizing of one environment."""
    nodes: int = Field(..., ge=0)
    cpu_per_node: int = Field(default=4, ge=0)
    ram_gb_per_node: int = Field(default=16, ge=0)
    disk_gb_per_node: int = Field(default=100, ge=0)
    instance_type: Optional[str] = Field(None, description="Named instance type; priced per node-hour")
    name: str = Field(default="")


class ClusterEstimateRequest(BaseModel):
    """Request model for a cloud or on-prem estimate."""
    provider: CloudProvider = Field(default=CloudProvider.ON_PREM, description="Cloud provider, or OnPrem")
    distribution: Distribution = Field(..., description="Kubernetes distribution")
    environments: Dict[EnvironmentType, EnvironmentRequest] = Field(..., description="Sizing per environment")
    region: Optional[str] = Field(None, description="Region code (provider default when omitted)")
    cluster_count: int = Field(default=1, ge=1)
    ha_control_plane: bool = Field(default=False)
    pricing_type: PricingType = Field(default=PricingType.ON_DEMAND)
    load_balancers: int = Field(default=1, ge=0)
    nat_gateways: int = Field(default=0, ge=0)
    egress_gb_per_month: int = Field(default=0, ge=0)
    registry_storage_gb: int = Field(default=50, ge=0)
    backup_storage_gb: int = Field(default=0, ge=0)
    support_level: SupportLevel = Field(default=SupportLevel.NONE)
    license_support_tier: SupportTier = Field(default=SupportTier.STANDARD)
    contract_years: int = Field(default=1, ge=1, le=10)
    master_nodes: int = Field(default=0, ge=0)
    include_pricing_in_results: Optional[bool] = Field(None, description="Show costs (default from config)")
    on_prem_pricing: Optional[Dict[str, Any]] = Field(None, description="Overrides for on-prem cost assumptions")

    def to_spec(self) -> ClusterSpec:
        return ClusterSpec(
            provider=self.provider,
            distribution=self.distribution,
            environments={
                env_type: EnvironmentResources(
                    nodes=env.nodes,
                    cpu_per_node=env.cpu_per_node,
                    ram_gb_per_node=env.ram_gb_per_node,
                    disk_gb_per_node=env.disk_gb_per_node,
                    instance_type=env.instance_type,
                    name=env.name,
                )
                for env_type, env in self.environments.items()
            },
            region=self.region,
            cluster_count=self.cluster_count,
            ha_control_plane=self.ha_control_plane,
            pricing_type=self.pricing_type,
            load_balancers=self.load_balancers,
            nat_gateways=self.nat_gateways,
            egress_gb_per_month=self.egress_gb_per_month,
            registry_storage_gb=self.registry_storage_gb,
            backup_storage_gb=self.backup_storage_gb,
            support_level=self.support_level,
            license_support_tier=self.license_support_tier,
            contract_years=self.contract_years,
            master_nodes=self.master_nodes,
        )

    def to_settings(self) -> PricingSettings:
        settings = PricingSettings(on_prem_defaults=OnPremPricing.from_dict(self.on_prem_pricing))
        if self.include_pricing_in_results is not None:
            settings.include_pricing_in_results = self.include_pricing_in_results
        return settings


class CompareRequest(BaseModel):
    """Request model for comparing several estimates."""
    options: List[ClusterEstimateRequest] = Field(..., min_length=2, description="Options to compare")


def _build_service(registry: PricingRegistry, settings: PricingSettings) -> CostEstimationService:
    return CostEstimationService(
        registry=registry,
        onprem_calculator=OnPremCostCalculator(settings.on_prem_defaults),
        live_pricing=LivePricingService(),
    )


async def _estimate(estimate_request: ClusterEstimateRequest, registry: PricingRegistry) -> Dict[str, Any]:
    try:
        settings = estimate_request.to_settings()
        spec = estimate_request.to_spec()
    except (ValueError, ArithmeticError) as error:
        raise HTTPException(status_code=400, detail=str(error)) from error

    service = _build_service(registry, settings)
    try:
        estimate = await service.estimate_async(spec)
    except CostEstimatorError as error:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to estimate costs: {str(error)}"
        ) from error

    return {
        "status": "ok",
        "include_pricing_in_results": settings.include_pricing_in_results,
        "estimate": present_estimate(estimate, settings),
    }


@router.post("/api/estimates/kubernetes")
async def estimate_kubernetes(
    estimate_request: ClusterEstimateRequest,
    registry: PricingRegistry = Depends(get_pricing_registry),
) -> Dict[str, Any]:
    """
    Estimate the monthly cost of a Kubernetes platform on a cloud provider.

    Returns:
        JSON response with the estimate; money fields are "N/A" when pricing is excluded

    Raises:
        HTTPException: 400 for an unusable spec, 500 for unexpected failures
    """
    try:
        if estimate_request.provider == CloudProvider.ON_PREM:
            raise HTTPException(
                status_code=400,
                detail="A cloud provider is required; use /api/estimates/on-prem for on-prem estimates"
            )
        return await _estimate(estimate_request, registry)
    except HTTPException:
        # Re-raise HTTP exceptions as-is
        raise
    except Exception as error:
        logger.error("Kubernetes estimate failed: %s", error, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while estimating costs"
        ) from error


@router.post("/api/estimates/on-prem")
async def estimate_on_prem(
    estimate_request: ClusterEstimateRequest,
    registry: PricingRegistry = Depends(get_pricing_registry),
) -> Dict[str, Any]:
    """Estimate the monthly cost of running a distribution in an owned data center."""
    try:
        on_prem_request = estimate_request.model_copy(update={"provider": CloudProvider.ON_PREM})
        return await _estimate(on_prem_request, registry)
    except HTTPException:
        # Re-raise HTTP exceptions as-is
        raise
    except Exception as error:
        logger.error("On-prem estimate failed: %s", error, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while estimating costs"
        ) from error


@router.post("/api/estimates/compare")
async def compare_estimates(
    compare_request: CompareRequest,
    registry: PricingRegistry = Depends(get_pricing_registry),
) -> Dict[str, Any]:
    """Estimate every option with default assumptions and rank them by monthly cost."""
    try:
        service = CostEstimationService(registry=registry)
        comparison = service.compare([option.to_spec() for option in compare_request.options])
        return {"status": "ok", "comparison": comparison.to_dict()}
    except (CostEstimatorError, ValueError) as error:
        raise HTTPException(status_code=400, detail=str(error)) from error
    except Exception as error:
        logger.error("Comparison failed: %s", error, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while comparing estimates"
        ) from error
