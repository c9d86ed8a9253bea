"""
OutSystems platforms, editions, price list, deployment configuration and pricing result.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from infra_pricing.core.config import config as app_config
from infra_pricing.domain.cost_models import CostLineItem
from infra_pricing.domain.discount import Discount
from infra_pricing.domain.money import ZERO, money
from infra_pricing.domain.tier_models import Tier, UNLIMITED


class OutSystemsPlatform(str, Enum):
    """O11 is the classic platform; ODC is the cloud-native Developer Cloud."""
    O11 = "O11"
    ODC = "ODC"


class OutSystemsEdition(str, Enum):
    STANDARD = "Standard"
    ENTERPRISE = "Enterprise"


class OutSystemsDeployment(str, Enum):
    CLOUD = "Cloud"
    SELF_MANAGED = "SelfManaged"


class OutSystemsSupportTier(str, Enum):
    STANDARD = "Standard"
    PREMIUM = "Premium"
    ELITE = "Elite"


class OutSystemsRegion(str, Enum):
    """Sales region; success plans, training and expert days are priced per region."""
    AFRICA = "Africa"
    MIDDLE_EAST = "MiddleEast"
    AMERICAS = "Americas"
    EUROPE = "Europe"
    ASIA_PACIFIC = "AsiaPacific"


class OutSystemsCloudProvider(str, Enum):
    """Where self-managed O11 servers run."""
    ON_PREMISES = "OnPremises"
    AZURE = "Azure"
    AWS = "AWS"


@dataclass(frozen=True)
class OutSystemsEditionSpec:
    edition: OutSystemsEdition
    base_price_per_year: Decimal
    included_aos: int
    included_internal_users: int


@dataclass(frozen=True)
class OutSystemsServicesPricing:
    essential_success_plan: Decimal
    premier_success_plan: Decimal
    dedicated_group_session: Decimal
    public_session: Decimal
    expert_day: Decimal


@dataclass(frozen=True)
class OutSystemsInstanceType:
    """VM size for self-managed servers on a public cloud."""
    name: str
    vcpu: int
    ram_gb: int
    hourly_rate: Decimal

    def describe(self) -> str:
        return f"{self.name} ({self.vcpu} vCPU, {self.ram_gb} GB)"


EDITIONS: Mapping[OutSystemsEdition, OutSystemsEditionSpec] = MappingProxyType({
    OutSystemsEdition.STANDARD: OutSystemsEditionSpec(OutSystemsEdition.STANDARD, Decimal("36300"), 150, 100),
    OutSystemsEdition.ENTERPRISE: OutSystemsEditionSpec(OutSystemsEdition.ENTERPRISE, Decimal("72600"), 450, 500),
})

SUPPORT_PERCENTS: Mapping[OutSystemsSupportTier, Decimal] = MappingProxyType({
    OutSystemsSupportTier.STANDARD: ZERO,
    OutSystemsSupportTier.PREMIUM: Decimal("15"),
    OutSystemsSupportTier.ELITE: Decimal("25"),
})

# O11 user bands are by absolute user number, priced per pack. The first band is the
# list price: 6,000 per 100 internal users, 12,000 per 10,000 external sessions
O11_INTERNAL_USER_TIERS: Tuple[Tier, ...] = (
    Tier(1, 1000, Decimal("6000")),
    Tier(1001, 5000, Decimal("4800")),
    Tier(5001, UNLIMITED, Decimal("3600")),
)

O11_EXTERNAL_USER_TIERS: Tuple[Tier, ...] = (
    Tier(1, 50_000, Decimal("12000")),
    Tier(50_001, 250_000, Decimal("9600")),
    Tier(250_001, UNLIMITED, Decimal("7200")),
)

# Per protected user
APPSHIELD_TIERS: Tuple[Tier, ...] = (
    Tier(1, 1000, Decimal("16.50")),
    Tier(1001, 10_000, Decimal("12.10")),
    Tier(10_001, UNLIMITED, Decimal("6.05")),
)

SERVICES_PRICING: Mapping[OutSystemsRegion, OutSystemsServicesPricing] = MappingProxyType({
    OutSystemsRegion.AMERICAS: OutSystemsServicesPricing(
        Decimal("30250"), Decimal("60500"), Decimal("3820"), Decimal("720"), Decimal("2640")),
    OutSystemsRegion.EUROPE: OutSystemsServicesPricing(
        Decimal("30250"), Decimal("60500"), Decimal("3500"), Decimal("660"), Decimal("2420")),
    OutSystemsRegion.MIDDLE_EAST: OutSystemsServicesPricing(
        Decimal("30250"), Decimal("60500"), Decimal("3440"), Decimal("650"), Decimal("2380")),
    OutSystemsRegion.ASIA_PACIFIC: OutSystemsServicesPricing(
        Decimal("27225"), Decimal("54450"), Decimal("3060"), Decimal("580"), Decimal("2110")),
    OutSystemsRegion.AFRICA: OutSystemsServicesPricing(
        Decimal("24200"), Decimal("48400"), Decimal("2670"), Decimal("500"), Decimal("1850")),
})

AZURE_INSTANCE_TYPES: Mapping[str, OutSystemsInstanceType] = MappingProxyType({
    "F4s_v2": OutSystemsInstanceType("F4s_v2", 4, 8, Decimal("0.169")),
    "D4s_v3": OutSystemsInstanceType("D4s_v3", 4, 16, Decimal("0.192")),
    "D8s_v3": OutSystemsInstanceType("D8s_v3", 8, 32, Decimal("0.384")),
    "D16s_v3": OutSystemsInstanceType("D16s_v3", 16, 64, Decimal("0.768")),
})

AWS_INSTANCE_TYPES: Mapping[str, OutSystemsInstanceType] = MappingProxyType({
    "m5.large": OutSystemsInstanceType("m5.large", 2, 8, Decimal("0.096")),
    "m5.xlarge": OutSystemsInstanceType("m5.xlarge", 4, 16, Decimal("0.192")),
    "m5.2xlarge": OutSystemsInstanceType("m5.2xlarge", 8, 32, Decimal("0.384")),
})


@dataclass(frozen=True)
class OutSystemsPricingSettings:
    """OutSystems annual price list (USD)."""
    editions: Mapping[OutSystemsEdition, OutSystemsEditionSpec] = field(default_factory=lambda: EDITIONS)

    ao_pack_size: int = 150
    ao_pack_price: Decimal = Decimal("18000")
    internal_user_pack_size: int = 100
    external_session_pack_size: int = 10_000
    o11_internal_user_tiers: Tuple[Tier, ...] = O11_INTERNAL_USER_TIERS
    o11_external_user_tiers: Tuple[Tier, ...] = O11_EXTERNAL_USER_TIERS

    # ODC has a single platform subscription with one AO pack included
    odc_base_price: Decimal = Decimal("30250")
    odc_included_aos: int = 150
    odc_included_internal_users: int = 100
    odc_ao_pack_price: Decimal = Decimal("18150")
    odc_internal_user_pack_price: Decimal = Decimal("6050")
    odc_external_user_pack_size: int = 1000
    odc_external_user_pack_price: Decimal = Decimal("6050")

    unlimited_users_per_ao_pack: Decimal = Decimal("60500")

    # Cloud
    included_production_environments: int = 1
    included_non_production_environments: int = 3
    additional_production_environment_price: Decimal = Decimal("12000")
    additional_non_production_environment_price: Decimal = Decimal("6000")
    high_availability_price: Decimal = Decimal("24000")
    disaster_recovery_price: Decimal = Decimal("18000")

    # Self-managed
    self_managed_base_price: Decimal = Decimal("48000")
    self_managed_per_environment_price: Decimal = Decimal("9600")
    self_managed_per_front_end_price: Decimal = Decimal("4800")

    # Add-ons billed per AO pack
    support_24x7_premium_per_ao_pack: Decimal = Decimal("3630")
    sentry_per_ao_pack: Decimal = Decimal("24200")
    odc_high_availability_per_ao_pack: Decimal = Decimal("12100")
    non_production_environment_per_ao_pack: Decimal = Decimal("3630")
    load_test_environment_per_ao_pack: Decimal = Decimal("6050")
    environment_pack_per_ao_pack: Decimal = Decimal("9680")
    self_managed_disaster_recovery_per_ao_pack: Decimal = Decimal("12100")
    private_gateway_per_ao_pack: Decimal = Decimal("1210")

    # Flat add-ons, per unit
    log_streaming_price: Decimal = Decimal("7260")
    database_replica_price: Decimal = Decimal("96800")

    appshield_tiers: Tuple[Tier, ...] = APPSHIELD_TIERS
    appshield_default_user_volume: int = 10_000

    services_pricing: Mapping[OutSystemsRegion, OutSystemsServicesPricing] = field(default_factory=lambda: SERVICES_PRICING)
    azure_instance_types: Mapping[str, OutSystemsInstanceType] = field(default_factory=lambda: AZURE_INSTANCE_TYPES)
    aws_instance_types: Mapping[str, OutSystemsInstanceType] = field(default_factory=lambda: AWS_INSTANCE_TYPES)

    support_percents: Mapping[OutSystemsSupportTier, Decimal] = field(default_factory=lambda: SUPPORT_PERCENTS)

    def edition(self, edition: OutSystemsEdition) -> OutSystemsEditionSpec:
        return self.editions[edition]

    def services(self, region: OutSystemsRegion) -> OutSystemsServicesPricing:
        return self.services_pricing.get(region, self.services_pricing[OutSystemsRegion.AMERICAS])

    def instance_type(self, provider: OutSystemsCloudProvider, name: str) -> Optional[OutSystemsInstanceType]:
        if provider == OutSystemsCloudProvider.AZURE:
            return self.azure_instance_types.get(name)
        if provider == OutSystemsCloudProvider.AWS:
            return self.aws_instance_types.get(name)
        return None


@dataclass
class OutSystemsDeploymentConfig:
    """What a customer wants to run on OutSystems."""
    platform: OutSystemsPlatform = OutSystemsPlatform.O11
    edition: OutSystemsEdition = OutSystemsEdition.STANDARD
    deployment: OutSystemsDeployment = OutSystemsDeployment.CLOUD
    region: OutSystemsRegion = OutSystemsRegion.AMERICAS
    total_aos: int = 150
    internal_users: int = 100
    external_users: int = 0
    use_unlimited_users: bool = False
    production_environments: int = 1
    non_production_environments: int = 3
    include_high_availability: bool = False
    include_disaster_recovery: bool = False
    front_end_servers: int = 0
    support_tier: OutSystemsSupportTier = OutSystemsSupportTier.STANDARD

    # Add-ons
    include_24x7_premium_support: bool = False
    include_sentry: bool = False
    non_production_environment_quantity: int = 0
    load_test_environment_quantity: int = 0
    environment_pack_quantity: int = 0
    log_streaming_quantity: int = 0
    database_replica_quantity: int = 0
    include_private_gateway: bool = False
    include_appshield: bool = False
    appshield_user_volume: Optional[int] = None

    # Services
    essential_success_plans: int = 0
    premier_success_plans: int = 0
    dedicated_group_sessions: int = 0
    public_sessions: int = 0
    expert_days: int = 0

    # Self-managed O11 servers on a public cloud
    cloud_provider: OutSystemsCloudProvider = OutSystemsCloudProvider.ON_PREMISES
    instance_type: Optional[str] = None
    servers_per_environment: int = 2

    discount: Optional[Discount] = None

    @property
    def total_environments(self) -> int:
        return self.production_environments + self.non_production_environments

    @property
    def is_cloud(self) -> bool:
        return self.deployment == OutSystemsDeployment.CLOUD

    def get_validation_warnings(self) -> List[str]:
        """Options that have no effect for the chosen platform and deployment type."""
        warnings = []
        if not self.is_cloud:
            cloud_only = [
                ("High Availability add-on", self.include_high_availability),
                ("Sentry add-on", self.include_sentry),
                ("Load test environment add-on", self.load_test_environment_quantity > 0),
                ("Log streaming add-on", self.log_streaming_quantity > 0),
                ("Database replica add-on", self.database_replica_quantity > 0),
            ]
            for name, selected in cloud_only:
                if selected:
                    warnings.append(f"{name} is only available for OutSystems Cloud")
        elif self.front_end_servers > 0:
            warnings.append("Front-end servers are managed by OutSystems Cloud and are not billed separately")

        if self.include_sentry and self.include_high_availability:
            warnings.append("Sentry already includes High Availability; the HA add-on is not billed")

        if self.platform == OutSystemsPlatform.ODC:
            o11_only = [
                ("Load test environment add-on", self.load_test_environment_quantity > 0),
                ("Environment pack add-on", self.environment_pack_quantity > 0),
                ("Log streaming add-on", self.log_streaming_quantity > 0),
                ("Database replica add-on", self.database_replica_quantity > 0),
                ("Disaster Recovery add-on", self.include_disaster_recovery),
            ]
            for name, selected in o11_only:
                if selected:
                    warnings.append(f"{name} is not offered on OutSystems Developer Cloud")
        elif self.include_private_gateway:
            warnings.append("Private gateway add-on is only offered on OutSystems Developer Cloud")

        if self.cloud_provider != OutSystemsCloudProvider.ON_PREMISES and (
            self.is_cloud or self.platform == OutSystemsPlatform.ODC
        ):
            warnings.append("Cloud server costs apply only to self-managed O11 installs")
        return warnings


@dataclass
class OutSystemsPricingResult:
    """Annual OutSystems cost by component, with line items."""
    edition: OutSystemsEdition
    deployment: OutSystemsDeployment
    platform: OutSystemsPlatform = OutSystemsPlatform.O11
    region: OutSystemsRegion = OutSystemsRegion.AMERICAS
    edition_cost: Decimal = ZERO
    additional_ao_cost: Decimal = ZERO
    ao_pack_count: int = 0
    total_ao_packs: int = 1
    user_cost: Decimal = ZERO
    used_unlimited_users: bool = False
    deployment_cost: Decimal = ZERO
    support_cost: Decimal = ZERO
    support_percent: Decimal = ZERO
    add_on_costs: Dict[str, Decimal] = field(default_factory=dict)
    appshield_user_volume: int = 0
    service_costs: Dict[str, Decimal] = field(default_factory=dict)
    monthly_vm_cost: Decimal = ZERO
    vm_count: int = 0
    vm_details: Optional[str] = None
    discount_amount: Decimal = ZERO
    discount_description: Optional[str] = None
    line_items: List[CostLineItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def license_subtotal(self) -> Decimal:
        """Edition, AO packs, users and deployment, before the support surcharge."""
        return self.edition_cost + self.additional_ao_cost + self.user_cost + self.deployment_cost

    @property
    def add_ons_subtotal(self) -> Decimal:
        return sum(self.add_on_costs.values(), ZERO)

    @property
    def services_subtotal(self) -> Decimal:
        return sum(self.service_costs.values(), ZERO)

    @property
    def infrastructure_subtotal(self) -> Decimal:
        return self.monthly_vm_cost * app_config.MONTHS_PER_YEAR

    @property
    def total_per_year(self) -> Decimal:
        return (
            self.license_subtotal
            + self.support_cost
            + self.add_ons_subtotal
            + self.services_subtotal
            + self.infrastructure_subtotal
            - self.discount_amount
        )

    @property
    def total_per_month(self) -> Decimal:
        return self.total_per_year / 12

    @property
    def total_three_year(self) -> Decimal:
        return self.total_per_year * 3

    @property
    def total_five_year(self) -> Decimal:
        return self.total_per_year * 5

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "platform": self.platform.value,
            "edition": self.edition.value,
            "deployment": self.deployment.value,
            "region": self.region.value,
            "edition_cost": money(self.edition_cost),
            "additional_ao_cost": money(self.additional_ao_cost),
            "ao_pack_count": self.ao_pack_count,
            "total_ao_packs": self.total_ao_packs,
            "user_cost": money(self.user_cost),
            "used_unlimited_users": self.used_unlimited_users,
            "deployment_cost": money(self.deployment_cost),
            "support_cost": money(self.support_cost),
            "support_percent": float(self.support_percent),
            "add_on_costs": {name: money(amount) for name, amount in self.add_on_costs.items()},
            "add_ons_subtotal": money(self.add_ons_subtotal),
            "service_costs": {name: money(amount) for name, amount in self.service_costs.items()},
            "services_subtotal": money(self.services_subtotal),
            "monthly_vm_cost": money(self.monthly_vm_cost),
            "vm_count": self.vm_count,
            "vm_details": self.vm_details,
            "infrastructure_subtotal": money(self.infrastructure_subtotal),
            "discount_amount": money(self.discount_amount),
            "discount_description": self.discount_description,
            "total_per_year": money(self.total_per_year),
            "total_per_month": money(self.total_per_month),
            "total_three_year": money(self.total_three_year),
            "total_five_year": money(self.total_five_year),
            "line_items": [item.to_dict() for item in self.line_items],
            "warnings": list(self.warnings),
        }
