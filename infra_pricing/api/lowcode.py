"""
API routes for low-code platform pricing (Mendix, OutSystems).
"""
from decimal import Decimal
from typing import Dict, Any, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
import logging

from infra_pricing.domain.discount import Discount, DiscountScope, DiscountType
from infra_pricing.domain.mendix_models import (
    MendixCloudType,
    MendixDeploymentCategory,
    MendixDeploymentConfig,
    MendixOtherDeployment,
    MendixPrivateCloudProvider,
    MendixResourcePackSize,
    MendixResourcePackTier,
)
from infra_pricing.domain.outsystems_models import (
    OutSystemsCloudProvider,
    OutSystemsDeployment,
    OutSystemsDeploymentConfig,
    OutSystemsEdition,
    OutSystemsPlatform,
    OutSystemsRegion,
    OutSystemsSupportTier,
)
from infra_pricing.services.mendix_engine import MendixPricingEngine, MendixPricingError
from infra_pricing.services.outsystems_engine import OutSystemsPricingEngine, OutSystemsPricingError


logger = logging.getLogger(__name__)
router = APIRouter()


class DiscountRequest(BaseModel):
    """A negotiated discount on a low-code quote."""
    type: DiscountType = Field(..., description="Percentage or FixedAmount")
    value: Decimal = Field(..., ge=0)
    scope: DiscountScope = Field(default=DiscountScope.TOTAL)
    notes: str = Field(default="")

    def to_discount(self) -> Discount:
        return Discount(self.type, self.value, self.scope, self.notes)


class MendixRequest(BaseModel):
    """Request model for a Mendix quote."""
    category: MendixDeploymentCategory = Field(..., description="Cloud, PrivateCloud or Other")
    cloud_type: MendixCloudType = Field(default=MendixCloudType.SAAS)
    resource_pack_tier: Optional[MendixResourcePackTier] = Field(None)
    resource_pack_size: Optional[MendixResourcePackSize] = Field(None)
    resource_pack_quantity: int = Field(default=1, ge=0)
    private_cloud_provider: MendixPrivateCloudProvider = Field(default=MendixPrivateCloudProvider.GENERIC_K8S)
    number_of_environments: int = Field(default=3, ge=0)
    other_deployment: MendixOtherDeployment = Field(default=MendixOtherDeployment.SERVER)
    is_unlimited_apps: bool = Field(default=True)
    number_of_apps: int = Field(default=1, ge=0)
    internal_users: int = Field(default=100, ge=0)
    external_users: int = Field(default=0, ge=0)
    genai_model_pack_size: Optional[str] = Field(None, description="GenAI model pack size: S, M or L")
    include_genai_knowledge_base: bool = Field(default=False)
    include_customer_enablement: bool = Field(default=False)
    additional_file_storage_gb: Decimal = Field(default=Decimal("0"), ge=0)
    additional_database_storage_gb: Decimal = Field(default=Decimal("0"), ge=0)
    apply_volume_discount: bool = Field(default=True)
    discount: Optional[DiscountRequest] = Field(None, description="Replaces the volume discount when set")


class OutSystemsRequest(BaseModel):
    """Request model for an OutSystems quote."""
    platform: OutSystemsPlatform = Field(default=OutSystemsPlatform.O11)
    edition: OutSystemsEdition = Field(default=OutSystemsEdition.STANDARD)
    deployment: OutSystemsDeployment = Field(default=OutSystemsDeployment.CLOUD)
    region: OutSystemsRegion = Field(default=OutSystemsRegion.AMERICAS)
    total_aos: int = Field(default=150, ge=0, description="Application Objects in use")
    internal_users: int = Field(default=100, ge=0)
    external_users: int = Field(default=0, ge=0, description="External sessions per month")
    use_unlimited_users: bool = Field(default=False)
    production_environments: int = Field(default=1, ge=1)
    non_production_environments: int = Field(default=3, ge=0)
    include_high_availability: bool = Field(default=False)
    include_disaster_recovery: bool = Field(default=False)
    front_end_servers: int = Field(default=0, ge=0)
    support_tier: OutSystemsSupportTier = Field(default=OutSystemsSupportTier.STANDARD)
    include_24x7_premium_support: bool = Field(default=False)
    include_sentry: bool = Field(default=False)
    non_production_environment_quantity: int = Field(default=0, ge=0)
    load_test_environment_quantity: int = Field(default=0, ge=0)
    environment_pack_quantity: int = Field(default=0, ge=0)
    log_streaming_quantity: int = Field(default=0, ge=0)
    database_replica_quantity: int = Field(default=0, ge=0)
    include_private_gateway: bool = Field(default=False)
    include_appshield: bool = Field(default=False)
    appshield_user_volume: Optional[int] = Field(None, ge=0)
    essential_success_plans: int = Field(default=0, ge=0)
    premier_success_plans: int = Field(default=0, ge=0)
    dedicated_group_sessions: int = Field(default=0, ge=0)
    public_sessions: int = Field(default=0, ge=0)
    expert_days: int = Field(default=0, ge=0)
    cloud_provider: OutSystemsCloudProvider = Field(default=OutSystemsCloudProvider.ON_PREMISES)
    instance_type: Optional[str] = Field(None, description="Azure or AWS VM size for self-managed servers")
    servers_per_environment: int = Field(default=2, ge=0)
    discount: Optional[DiscountRequest] = Field(None)


def _config_values(request: BaseModel) -> Dict[str, Any]:
    """Request fields as config keyword arguments, with the discount converted."""
    values = request.model_dump(exclude={"discount"})
    values["discount"] = request.discount.to_discount() if request.discount else None
    return values


@router.post("/api/lowcode/mendix")
async def price_mendix(mendix_request: MendixRequest) -> Dict[str, Any]:
    """
    Annual Mendix cost for a deployment.

    Raises:
        HTTPException: 400 if the configuration or discount cannot be priced
    """
    try:
        config = MendixDeploymentConfig(**_config_values(mendix_request))
        result = MendixPricingEngine().calculate(config)
        return {"status": "ok", "pricing": result.to_dict()}
    except (MendixPricingError, ValueError) as error:
        raise HTTPException(status_code=400, detail=str(error)) from error
    except Exception as error:
        logger.error("Mendix pricing failed: %s", error, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while pricing Mendix"
        ) from error


@router.post("/api/lowcode/outsystems")
async def price_outsystems(outsystems_request: OutSystemsRequest) -> Dict[str, Any]:
    """
    Annual OutSystems cost for a subscription.

    Raises:
        HTTPException: 400 if the configuration or discount cannot be priced
    """
    try:
        config = OutSystemsDeploymentConfig(**_config_values(outsystems_request))
        result = OutSystemsPricingEngine().calculate(config)
        return {"status": "ok", "pricing": result.to_dict()}
    except (OutSystemsPricingError, ValueError) as error:
        raise HTTPException(status_code=400, detail=str(error)) from error
    except Exception as error:
        logger.error("OutSystems pricing failed: %s", error, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while pricing OutSystems"
        ) from error
