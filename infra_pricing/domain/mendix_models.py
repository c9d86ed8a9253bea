"""
Mendix platform catalog, deployment configuration and pricing result.
Prices are annual list prices in USD.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from infra_pricing.domain.discount import Discount
from infra_pricing.domain.money import ZERO, money
from infra_pricing.domain.tier_models import Tier, UNLIMITED


class MendixDeploymentCategory(str, Enum):
    CLOUD = "Cloud"  # Mendix Cloud SaaS or Dedicated
    PRIVATE_CLOUD = "PrivateCloud"  # Mendix on Azure or Kubernetes
    OTHER = "Other"  # Server, StackIT, SAP BTP


class MendixCloudType(str, Enum):
    SAAS = "SaaS"
    DEDICATED = "Dedicated"


class MendixPrivateCloudProvider(str, Enum):
    AZURE = "Azure"
    EKS = "EKS"
    AKS = "AKS"
    GKE = "GKE"
    OPENSHIFT = "OpenShift"
    GENERIC_K8S = "GenericK8s"
    RANCHER = "Rancher"
    K3S = "K3s"
    DOCKER = "Docker"


SUPPORTED_PRIVATE_CLOUD_PROVIDERS = frozenset({
    MendixPrivateCloudProvider.AZURE,
    MendixPrivateCloudProvider.EKS,
    MendixPrivateCloudProvider.AKS,
    MendixPrivateCloudProvider.GKE,
    MendixPrivateCloudProvider.OPENSHIFT,
})


class MendixOtherDeployment(str, Enum):
    SERVER = "Server"
    STACKIT = "StackIT"
    SAP_BTP = "SapBtp"


class MendixResourcePackTier(str, Enum):
    STANDARD = "Standard"  # 99.5% SLA
    PREMIUM = "Premium"  # 99.95% SLA with fallback
    PREMIUM_PLUS = "PremiumPlus"  # 99.95% SLA with multi-region failover


class MendixResourcePackSize(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XL2 = "2XL"
    XL3 = "3XL"
    XL4 = "4XL"
    XL4_DB5 = "4XL-5XLDB"


@dataclass(frozen=True)
class MendixResourcePackSpec:
    """One Mendix Cloud resource pack: runtime, database and file storage at a fixed size."""
    tier: MendixResourcePackTier
    size: MendixResourcePackSize
    mx_memory_gb: Decimal
    mx_vcpu: Decimal
    db_memory_gb: Decimal
    db_vcpu: int
    db_storage_gb: Decimal
    file_storage_gb: Decimal
    price_per_year: Decimal
    cloud_tokens: int
    uptime_sla: Decimal = Decimal("99.5")
    has_fallback: bool = False
    has_multi_region_failover: bool = False

    @property
    def display_name(self) -> str:
        return self.size.value

    def describe(self, quantity: int = 1) -> str:
        return (
            f"{quantity}x {self.tier.value} {self.display_name} "
            f"({self.mx_memory_gb}GB RAM, {self.mx_vcpu} vCPU, {self.db_storage_gb}GB DB)"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "size": self.size.value,
            "mx_memory_gb": float(self.mx_memory_gb),
            "mx_vcpu": float(self.mx_vcpu),
            "db_memory_gb": float(self.db_memory_gb),
            "db_vcpu": self.db_vcpu,
            "db_storage_gb": float(self.db_storage_gb),
            "file_storage_gb": float(self.file_storage_gb),
            "price_per_year": float(self.price_per_year),
            "cloud_tokens": self.cloud_tokens,
            "uptime_sla": float(self.uptime_sla),
            "has_fallback": self.has_fallback,
            "has_multi_region_failover": self.has_multi_region_failover,
        }


@dataclass(frozen=True)
class MendixGenAIModelPack:
    size: str
    claude_tokens_in_per_month: int
    claude_tokens_out_per_month: int
    cohere_tokens_in_per_month: int
    price_per_year: Decimal
    cloud_tokens: int


_T = MendixResourcePackTier
_S = MendixResourcePackSize


def _packs(tier: MendixResourcePackTier, rows: Tuple[Tuple, ...], sla: str, fallback: bool = False,
           failover: bool = False) -> Tuple[MendixResourcePackSpec, ...]:
    return tuple(
        MendixResourcePackSpec(
            tier=tier,
            size=size,
            mx_memory_gb=Decimal(mx_mem),
            mx_vcpu=Decimal(mx_cpu),
            db_memory_gb=Decimal(db_mem),
            db_vcpu=db_cpu,
            db_storage_gb=Decimal(db_storage),
            file_storage_gb=Decimal(file_storage),
            price_per_year=Decimal(price),
            cloud_tokens=tokens,
            uptime_sla=Decimal(sla),
            has_fallback=fallback,
            has_multi_region_failover=failover,
        )
        for size, mx_mem, mx_cpu, db_mem, db_cpu, db_storage, file_storage, price, tokens in rows
    )


# size, mx GB, mx vCPU, db GB, db vCPU, db storage GB, file storage GB, price/year, cloud tokens
STANDARD_RESOURCE_PACKS = _packs(_T.STANDARD, (
    (_S.XS, "1", "0.25", "1", 2, "5", "10", "516", 10),
    (_S.S, "2", "0.5", "2", 2, "10", "20", "1032", 20),
    (_S.M, "4", "1", "4", 2, "20", "40", "2064", 40),
    (_S.L, "8", "2", "8", 2, "40", "80", "4128", 80),
    (_S.XL, "16", "4", "16", 4, "80", "160", "8256", 160),
    (_S.XL2, "32", "8", "32", 4, "160", "320", "16512", 320),
    (_S.XL3, "64", "16", "64", 8, "320", "640", "33024", 640),
    (_S.XL4, "128", "32", "128", 16, "640", "1280", "66048", 1280),
    (_S.XL4_DB5, "128", "32", "256", 32, "1280", "1280", "115584", 2240),
), sla="99.5")

PREMIUM_RESOURCE_PACKS = _packs(_T.PREMIUM, (
    (_S.S, "2", "0.5", "2", 2, "10", "20", "1548", 30),
    (_S.M, "4", "1", "4", 2, "20", "40", "3096", 60),
    (_S.L, "8", "2", "8", 2, "40", "80", "6192", 120),
    (_S.XL, "16", "4", "16", 4, "80", "160", "12384", 240),
    (_S.XL2, "32", "8", "32", 4, "160", "320", "24768", 480),
    (_S.XL3, "64", "16", "64", 8, "320", "640", "49536", 960),
    (_S.XL4, "128", "32", "128", 16, "640", "1280", "99072", 1920),
    (_S.XL4_DB5, "128", "32", "256", 32, "1280", "1280", "173376", 3360),
), sla="99.95", fallback=True)

PREMIUM_PLUS_RESOURCE_PACKS = _packs(_T.PREMIUM_PLUS, (
    (_S.XL, "16", "4", "16", 4, "80", "160", "20640", 400),
    (_S.XXL, "32", "8", "32", 4, "160", "320", "41280", 800),
    (_S.XL3, "64", "16", "64", 8, "320", "640", "82560", 1600),
    (_S.XL4, "128", "32", "128", 16, "640", "1280", "165120", 3200),
    (_S.XL4_DB5, "128", "32", "128", 32, "1280", "1280", "288960", 5600),
), sla="99.95", fallback=True, failover=True)

K8S_ENVIRONMENT_TIERS = (
    Tier(4, 50, Decimal("552")),
    Tier(51, 100, Decimal("408")),
    Tier(101, 150, Decimal("240")),
    Tier(151, UNLIMITED, ZERO),
)

GENAI_MODEL_PACKS = (
    MendixGenAIModelPack("S", 2_500_000, 1_250_000, 5_000_000, Decimal("1857.60"), 36),
    MendixGenAIModelPack("M", 5_000_000, 2_500_000, 10_000_000, Decimal("3715.20"), 72),
    MendixGenAIModelPack("L", 10_000_000, 5_000_000, 20_000_000, Decimal("7430.40"), 144),
)


@dataclass(frozen=True)
class MendixPricingSettings:
    """Mendix price list. Catalogs are tuples so a shared instance cannot be altered."""
    cloud_token_price: Decimal = Decimal("51.60")

    standard_resource_packs: Tuple[MendixResourcePackSpec, ...] = STANDARD_RESOURCE_PACKS
    premium_resource_packs: Tuple[MendixResourcePackSpec, ...] = PREMIUM_RESOURCE_PACKS
    premium_plus_resource_packs: Tuple[MendixResourcePackSpec, ...] = PREMIUM_PLUS_RESOURCE_PACKS
    additional_file_storage_per_100gb: Decimal = Decimal("123")
    additional_database_storage_per_100gb: Decimal = Decimal("246")
    cloud_dedicated_price_per_year: Decimal = Decimal("368100")

    azure_base_price_per_year: Decimal = Decimal("6612")
    azure_base_environments_included: int = 3
    azure_additional_environment_price: Decimal = Decimal("722.40")
    azure_additional_environment_tokens: int = 14

    k8s_base_price_per_year: Decimal = Decimal("6360")
    k8s_base_environments_included: int = 3
    k8s_environment_tiers: Tuple[Tier, ...] = K8S_ENVIRONMENT_TIERS

    server_per_app_price_per_year: Decimal = Decimal("6612")
    server_unlimited_apps_price_per_year: Decimal = Decimal("33060")
    stackit_per_app_price_per_year: Decimal = Decimal("6612")
    stackit_unlimited_apps_price_per_year: Decimal = Decimal("33060")
    sap_btp_per_app_price_per_year: Decimal = Decimal("6612")
    sap_btp_unlimited_apps_price_per_year: Decimal = Decimal("33060")

    genai_model_packs: Tuple[MendixGenAIModelPack, ...] = GENAI_MODEL_PACKS
    genai_knowledge_base_price_per_year: Decimal = Decimal("2476.80")
    genai_knowledge_base_tokens: int = 48

    platform_premium_unlimited_per_year: Decimal = Decimal("65400")
    internal_users_per_100_per_year: Decimal = Decimal("40800")
    external_users_per_250k_per_year: Decimal = Decimal("60000")
    volume_discount_percent: Decimal = Decimal("10")
    customer_enablement_price: Decimal = Decimal("45000")

    def available_packs(self, tier: MendixResourcePackTier) -> Tuple[MendixResourcePackSpec, ...]:
        return {
            MendixResourcePackTier.STANDARD: self.standard_resource_packs,
            MendixResourcePackTier.PREMIUM: self.premium_resource_packs,
            MendixResourcePackTier.PREMIUM_PLUS: self.premium_plus_resource_packs,
        }[tier]

    def get_resource_pack(
        self,
        tier: MendixResourcePackTier,
        size: MendixResourcePackSize,
    ) -> Optional[MendixResourcePackSpec]:
        return next((pack for pack in self.available_packs(tier) if pack.size == size), None)

    def get_genai_pack(self, size: str) -> Optional[MendixGenAIModelPack]:
        return next((pack for pack in self.genai_model_packs if pack.size == size), None)


@dataclass
class MendixDeploymentConfig:
    """What a customer wants to run on Mendix."""
    category: MendixDeploymentCategory
    cloud_type: MendixCloudType = MendixCloudType.SAAS
    resource_pack_tier: Optional[MendixResourcePackTier] = None
    resource_pack_size: Optional[MendixResourcePackSize] = None
    resource_pack_quantity: int = 1
    private_cloud_provider: MendixPrivateCloudProvider = MendixPrivateCloudProvider.GENERIC_K8S
    number_of_environments: int = 3
    other_deployment: MendixOtherDeployment = MendixOtherDeployment.SERVER
    is_unlimited_apps: bool = True
    number_of_apps: int = 1
    internal_users: int = 100
    external_users: int = 0
    genai_model_pack_size: Optional[str] = None
    include_genai_knowledge_base: bool = False
    include_customer_enablement: bool = False
    additional_file_storage_gb: Decimal = ZERO
    additional_database_storage_gb: Decimal = ZERO
    apply_volume_discount: bool = True
    # Negotiated discount; replaces the volume discount when set
    discount: Optional[Discount] = None


@dataclass
class MendixPricingResult:
    """Annual Mendix cost by component."""
    category: MendixDeploymentCategory
    deployment_type_name: str = ""
    platform_license_cost: Decimal = ZERO
    user_license_cost: Decimal = ZERO
    deployment_fee_cost: Decimal = ZERO
    environment_cost: Decimal = ZERO
    storage_cost: Decimal = ZERO
    genai_cost: Decimal = ZERO
    services_cost: Decimal = ZERO
    discount_amount: Decimal = ZERO
    discount_percent: Decimal = ZERO
    discount_description: Optional[str] = None
    total_cloud_tokens: int = 0
    resource_pack_details: Optional[str] = None
    environment_details: Optional[str] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def license_subtotal(self) -> Decimal:
        return self.platform_license_cost + self.user_license_cost

    @property
    def add_ons_subtotal(self) -> Decimal:
        """Deployment fees, environments, storage and GenAI."""
        return self.deployment_fee_cost + self.environment_cost + self.storage_cost + self.genai_cost

    @property
    def total_per_year(self) -> Decimal:
        return (
            self.platform_license_cost
            + self.user_license_cost
            + self.deployment_fee_cost
            + self.environment_cost
            + self.storage_cost
            + self.genai_cost
            + self.services_cost
            - self.discount_amount
        )

    @property
    def total_per_month(self) -> Decimal:
        return self.total_per_year / 12

    @property
    def total_three_year(self) -> Decimal:
        return self.total_per_year * 3

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "deployment_type_name": self.deployment_type_name,
            "platform_license_cost": money(self.platform_license_cost),
            "user_license_cost": money(self.user_license_cost),
            "deployment_fee_cost": money(self.deployment_fee_cost),
            "environment_cost": money(self.environment_cost),
            "storage_cost": money(self.storage_cost),
            "genai_cost": money(self.genai_cost),
            "services_cost": money(self.services_cost),
            "discount_amount": money(self.discount_amount),
            "discount_percent": float(self.discount_percent),
            "discount_description": self.discount_description,
            "total_per_year": money(self.total_per_year),
            "total_per_month": money(self.total_per_month),
            "total_three_year": money(self.total_three_year),
            "total_cloud_tokens": self.total_cloud_tokens,
            "resource_pack_details": self.resource_pack_details,
            "environment_details": self.environment_details,
            "warnings": list(self.warnings),
        }
