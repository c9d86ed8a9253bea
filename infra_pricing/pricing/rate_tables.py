"""
Offline rate cards for every supported cloud provider (2025 public list prices, USD).
Pure data: strategies in providers.py turn these into PricingModel instances.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from infra_pricing.domain.enums import CloudProvider
from infra_pricing.domain.money import ZERO
from infra_pricing.domain.pricing_models import ComputePricing, NetworkPricing, RegionInfo, StoragePricing


@dataclass(frozen=True)
class ProviderRateCard:
    """Base-region rates for one provider plus its region catalog."""
    provider: CloudProvider
    display_name: str
    default_region: str
    compute: ComputePricing
    storage: StoragePricing
    network: NetworkPricing
    regions: Tuple[RegionInfo, ...] = ()
    # Control plane fee charged when an uptime SLA / HA control plane is requested
    ha_control_plane_per_hour: Decimal = ZERO
    # Explicit per-region multipliers on compute and storage
    regional_multipliers: Mapping[str, Decimal] = field(default_factory=lambda: MappingProxyType({}))
    # Region prefix that counts as the provider's home market; other regions pay off_home_multiplier
    home_region_prefix: Optional[str] = None
    off_home_multiplier: Decimal = Decimal("1")


def _compute(cpu: str, ram: str, instances: dict, control_plane: str = "0", openshift_fee: str = "0") -> ComputePricing:
    return ComputePricing(
        cpu_per_hour=Decimal(cpu),
        ram_gb_per_hour=Decimal(ram),
        instance_type_prices=MappingProxyType({name: Decimal(price) for name, price in instances.items()}),
        managed_control_plane_per_hour=Decimal(control_plane),
        openshift_service_fee_per_worker_hour=Decimal(openshift_fee),
    )


def _storage(ssd: str, hdd: str, obj: str, backup: str, registry: str) -> StoragePricing:
    return StoragePricing(Decimal(ssd), Decimal(hdd), Decimal(obj), Decimal(backup), Decimal(registry))


def _network(egress: str, lb: str, nat: str = "0", vpn: str = "0", public_ip: str = "0") -> NetworkPricing:
    return NetworkPricing(
        egress_per_gb=Decimal(egress),
        load_balancer_per_hour=Decimal(lb),
        nat_gateway_per_hour=Decimal(nat),
        vpn_per_hour=Decimal(vpn),
        public_ip_per_hour=Decimal(public_ip),
    )


def _regions(*entries: Tuple) -> Tuple[RegionInfo, ...]:
    return tuple(RegionInfo(*entry) for entry in entries)


def _multipliers(**groups: Tuple[str, ...]) -> Mapping[str, Decimal]:
    """Build region -> multiplier from keyword groups like m1_05=("eu-west-1",)."""
    table = {}
    for key, regions in groups.items():
        value = Decimal(key[1:].replace("_", "."))
        for region in regions:
            table[region] = value
    return MappingProxyType(table)


GENERIC_REGIONS = _regions(("default", "Default Region", True))

AWS_REGIONS = _regions(
    ("us-east-1", "US East (N. Virginia)", True),
    ("us-east-2", "US East (Ohio)"),
    ("us-west-1", "US West (N. California)"),
    ("us-west-2", "US West (Oregon)", True),
    ("eu-west-1", "Europe (Ireland)", True),
    ("eu-west-2", "Europe (London)"),
    ("eu-west-3", "Europe (Paris)"),
    ("eu-central-1", "Europe (Frankfurt)", True),
    ("ap-southeast-1", "Asia Pacific (Singapore)"),
    ("ap-southeast-2", "Asia Pacific (Sydney)"),
    ("ap-northeast-1", "Asia Pacific (Tokyo)"),
    ("ap-south-1", "Asia Pacific (Mumbai)"),
    ("me-south-1", "Middle East (Bahrain)"),
    ("me-central-1", "Middle East (UAE)"),
)

AZURE_REGIONS = _regions(
    ("eastus", "East US", True),
    ("eastus2", "East US 2"),
    ("westus", "West US"),
    ("westus2", "West US 2", True),
    ("westeurope", "West Europe", True),
    ("northeurope", "North Europe"),
    ("uksouth", "UK South"),
    ("germanywestcentral", "Germany West Central"),
    ("southeastasia", "Southeast Asia"),
    ("australiaeast", "Australia East"),
    ("japaneast", "Japan East"),
    ("centralindia", "Central India"),
    ("uaenorth", "UAE North"),
)

GCP_REGIONS = _regions(
    ("us-central1", "Iowa", True),
    ("us-east1", "South Carolina"),
    ("us-east4", "Northern Virginia"),
    ("us-west1", "Oregon", True),
    ("europe-west1", "Belgium", True),
    ("europe-west2", "London"),
    ("europe-west3", "Frankfurt"),
    ("asia-southeast1", "Singapore"),
    ("australia-southeast1", "Sydney"),
    ("asia-northeast1", "Tokyo"),
    ("asia-south1", "Mumbai"),
    ("me-west1", "Tel Aviv"),
)

OCI_REGIONS = _regions(
    ("us-ashburn-1", "US East (Ashburn)", True),
    ("us-phoenix-1", "US West (Phoenix)"),
    ("uk-london-1", "UK South (London)", True),
    ("eu-frankfurt-1", "Germany Central (Frankfurt)"),
    ("eu-amsterdam-1", "Netherlands Northwest (Amsterdam)"),
    ("ap-sydney-1", "Australia East (Sydney)"),
    ("ap-tokyo-1", "Japan East (Tokyo)"),
    ("ap-mumbai-1", "India West (Mumbai)"),
    ("me-dubai-1", "UAE East (Dubai)"),
    ("me-jeddah-1", "Saudi Arabia West (Jeddah)"),
)

IBM_REGIONS = _regions(
    ("us-south", "Dallas", True),
    ("us-east", "Washington DC"),
    ("eu-de", "Frankfurt", True),
    ("eu-gb", "London"),
    ("jp-tok", "Tokyo"),
    ("au-syd", "Sydney"),
)

ALIBABA_REGIONS = _regions(
    ("cn-hangzhou", "China (Hangzhou)", True),
    ("cn-shanghai", "China (Shanghai)"),
    ("ap-southeast-1", "Singapore", True),
    ("us-west-1", "US (Silicon Valley)"),
    ("eu-central-1", "Germany (Frankfurt)"),
    ("me-east-1", "UAE (Dubai)"),
)

DIGITALOCEAN_REGIONS = _regions(
    ("nyc1", "New York 1", True),
    ("nyc3", "New York 3"),
    ("sfo3", "San Francisco 3", True),
    ("ams3", "Amsterdam 3"),
    ("lon1", "London 1", True),
    ("fra1", "Frankfurt 1"),
    ("sgp1", "Singapore 1"),
    ("blr1", "Bangalore 1"),
    ("syd1", "Sydney 1"),
)

LINODE_REGIONS = _regions(
    ("us-east", "Newark, NJ", True),
    ("us-central", "Dallas, TX"),
    ("us-west", "Fremont, CA", True),
    ("eu-west", "London, UK", True),
    ("eu-central", "Frankfurt, DE"),
    ("ap-south", "Singapore"),
    ("ap-northeast", "Tokyo, JP"),
    ("ap-southeast", "Sydney, AU"),
)

VULTR_REGIONS = _regions(
    ("ewr", "New Jersey", True),
    ("dfw", "Dallas"),
    ("lax", "Los Angeles", True),
    ("lhr", "London", True),
    ("fra", "Frankfurt"),
    ("ams", "Amsterdam"),
    ("sgp", "Singapore"),
    ("nrt", "Tokyo"),
    ("syd", "Sydney"),
)

HETZNER_REGIONS = _regions(
    ("fsn1", "Falkenstein", True),
    ("nbg1", "Nuremberg"),
    ("hel1", "Helsinki", True),
    ("ash", "Ashburn"),
)

CIVO_REGIONS = _regions(
    ("lon1", "London", True),
    ("nyc1", "New York", True),
    ("fra1", "Frankfurt"),
    ("phx1", "Phoenix"),
)

EXOSCALE_REGIONS = _regions(
    ("ch-gva-2", "Geneva", True),
    ("ch-dk-2", "Zurich"),
    ("de-fra-1", "Frankfurt", True),
    ("de-muc-1", "Munich"),
    ("at-vie-1", "Vienna"),
    ("bg-sof-1", "Sofia"),
)


AWS = ProviderRateCard(
    provider=CloudProvider.AWS,
    display_name="AWS",
    default_region="us-east-1",
    compute=_compute("0.048", "0.006", {
        "t3.medium": "0.0416", "t3.large": "0.0832",
        "m6i.large": "0.096", "m6i.xlarge": "0.192", "m6i.2xlarge": "0.384", "m6i.4xlarge": "0.768",
        "c6i.xlarge": "0.17", "r6i.xlarge": "0.252",
        "m5.xlarge": "0.192", "m5.2xlarge": "0.384", "m5.4xlarge": "0.768",
    }, control_plane="0.10", openshift_fee="0.171"),
    storage=_storage("0.08", "0.045", "0.023", "0.05", "0.10"),
    network=_network("0.09", "0.0225", "0.045", "0.05", "0.005"),
    regions=AWS_REGIONS,
    regional_multipliers=_multipliers(
        m1_0=("us-east-1", "us-east-2", "us-west-2"),
        m1_1=("us-west-1", "ap-southeast-1", "ap-southeast-2"),
        m1_05=("eu-west-1", "eu-central-1"),
        m1_08=("eu-west-2", "eu-west-3"),
        m1_15=("ap-northeast-1",),
        m0_95=("ap-south-1",),
        m1_2=("me-south-1", "me-central-1"),
        m1_25=("sa-east-1",),
    ),
)

AZURE = ProviderRateCard(
    provider=CloudProvider.AZURE,
    display_name="Azure",
    default_region="eastus",
    compute=_compute("0.048", "0.006", {
        "Standard_B2ms": "0.0832",
        "Standard_D2s_v5": "0.096", "Standard_D4s_v5": "0.192", "Standard_D8s_v5": "0.384",
        "Standard_D16s_v5": "0.768",
        "Standard_F4s_v2": "0.169", "Standard_E4s_v5": "0.252",
        "Standard_D4s_v3": "0.192", "Standard_D8s_v3": "0.384", "Standard_D16s_v3": "0.768",
    }, openshift_fee="0.35"),
    storage=_storage("0.075", "0.04", "0.0184", "0.05", "0.10"),
    network=_network("0.087", "0.025", "0.045", "0.05", "0.004"),
    regions=AZURE_REGIONS,
    ha_control_plane_per_hour=Decimal("0.10"),
    regional_multipliers=_multipliers(
        m1_0=("eastus", "eastus2", "westus2"),
        m1_05=("westus", "westus3", "westeurope", "northeurope"),
        m1_08=("uksouth", "ukwest"),
        m1_1=("germanywestcentral", "southeastasia", "eastasia"),
        m1_15=("japaneast",),
        m1_12=("australiaeast",),
        m0_95=("centralindia",),
        m1_2=("uaenorth",),
        m1_25=("brazilsouth",),
    ),
)

GCP = ProviderRateCard(
    provider=CloudProvider.GCP,
    display_name="GCP",
    default_region="us-central1",
    compute=_compute("0.0335", "0.0045", {
        "e2-medium": "0.0335", "e2-standard-2": "0.067", "e2-standard-4": "0.134",
        "e2-standard-8": "0.268", "e2-standard-16": "0.536",
        "n2-standard-4": "0.194", "n2-standard-8": "0.388",
        "c2-standard-4": "0.209", "n2-highmem-4": "0.262",
    }, control_plane="0.10", openshift_fee="0.171"),
    storage=_storage("0.17", "0.04", "0.02", "0.05", "0.10"),
    network=_network("0.12", "0.025", "0.045", "0.05", "0.004"),
    regions=GCP_REGIONS,
    regional_multipliers=_multipliers(
        m1_0=("us-central1", "us-east1", "us-west1"),
        m1_05=("us-east4", "us-west2", "us-west3", "us-west4", "europe-west1", "europe-west4"),
        m1_1=("europe-west2", "europe-west3", "asia-southeast1", "asia-east1"),
        m1_2=("asia-northeast1",),
        m1_15=("australia-southeast1",),
        m0_95=("asia-south1",),
        m1_25=("me-west1",),
        m1_3=("southamerica-east1",),
    ),
)

OCI = ProviderRateCard(
    provider=CloudProvider.OCI,
    display_name="Oracle Cloud",
    default_region="us-ashburn-1",
    compute=_compute("0.03", "0.0015", {
        "VM.Standard.E4.Flex.1": "0.03", "VM.Standard.E4.Flex.2": "0.06",
        "VM.Standard.E4.Flex.4": "0.12", "VM.Standard.E4.Flex.8": "0.24",
        "VM.Standard3.Flex.4": "0.128", "VM.Standard3.Flex.8": "0.256",
    }),
    storage=_storage("0.0255", "0.0255", "0.0255", "0.05", "0.0255"),
    network=_network("0.0085", "0.01", "0.03", "0.04", "0"),
    regions=OCI_REGIONS,
    ha_control_plane_per_hour=Decimal("0.10"),
    regional_multipliers=_multipliers(
        m1_0=("us-ashburn-1", "us-phoenix-1"),
        m1_05=("uk-london-1", "eu-frankfurt-1"),
        m1_1=("ap-tokyo-1",),
        m1_08=("ap-sydney-1", "ap-melbourne-1"),
        m1_15=("me-dubai-1", "me-jeddah-1"),
        m1_2=("sa-saopaulo-1",),
    ),
)

IBM = ProviderRateCard(
    provider=CloudProvider.IBM,
    display_name="IBM Cloud",
    default_region="us-south",
    compute=_compute("0.05", "0.007", {
        "bx2-4x16": "0.192", "bx2-8x32": "0.384", "bx2-16x64": "0.768",
        "cx2-4x8": "0.17", "mx2-4x32": "0.25",
    }, openshift_fee="0.20"),
    storage=_storage("0.10", "0.05", "0.022", "0.05", "0.10"),
    network=_network("0.09", "0.025", "0.045", "0.05", "0.004"),
    regions=IBM_REGIONS,
)

ALIBABA = ProviderRateCard(
    provider=CloudProvider.ALIBABA,
    display_name="Alibaba Cloud",
    default_region="cn-hangzhou",
    compute=_compute("0.04", "0.005", {
        "ecs.g6.large": "0.096", "ecs.g6.xlarge": "0.192", "ecs.g6.2xlarge": "0.384",
        "ecs.c6.xlarge": "0.17", "ecs.r6.xlarge": "0.25",
    }),
    storage=_storage("0.08", "0.04", "0.02", "0.05", "0.08"),
    network=_network("0.12", "0.02", "0.04", "0.05", "0.003"),
    regions=ALIBABA_REGIONS,
    ha_control_plane_per_hour=Decimal("0.10"),
    home_region_prefix="cn-",
    off_home_multiplier=Decimal("1.1"),
)

TENCENT = ProviderRateCard(
    provider=CloudProvider.TENCENT,
    display_name="Tencent Cloud",
    default_region="ap-guangzhou",
    compute=_compute("0.035", "0.005", {
        "S5.MEDIUM4": "0.06", "S5.MEDIUM8": "0.08", "S5.LARGE8": "0.12",
        "S5.LARGE16": "0.16", "S5.2XLARGE16": "0.24", "S5.2XLARGE32": "0.32",
    }),
    storage=_storage("0.07", "0.04", "0.02", "0.04", "0.05"),
    network=_network("0.08", "0.02", "0.03", "0.05", "0.003"),
    regions=GENERIC_REGIONS,
    ha_control_plane_per_hour=Decimal("0.08"),
    home_region_prefix="ap-",
    off_home_multiplier=Decimal("1.15"),
)

HUAWEI = ProviderRateCard(
    provider=CloudProvider.HUAWEI,
    display_name="Huawei Cloud",
    default_region="cn-north-4",
    compute=_compute("0.038", "0.005", {
        "s6.medium.2": "0.05", "s6.large.2": "0.08", "s6.xlarge.2": "0.16",
        "s6.2xlarge.2": "0.32", "c6.xlarge.2": "0.14", "m6.xlarge.8": "0.24",
    }),
    storage=_storage("0.08", "0.04", "0.02", "0.04", "0.06"),
    network=_network("0.10", "0.02", "0.04", "0.05", "0.003"),
    regions=GENERIC_REGIONS,
    ha_control_plane_per_hour=Decimal("0.09"),
    home_region_prefix="cn-",
    off_home_multiplier=Decimal("1.1"),
)

DIGITALOCEAN = ProviderRateCard(
    provider=CloudProvider.DIGITALOCEAN,
    display_name="DigitalOcean",
    default_region="nyc1",
    compute=_compute("0.018", "0.003", {
        "s-2vcpu-4gb": "0.030", "s-4vcpu-8gb": "0.065",
        "g-2vcpu-8gb": "0.091", "g-4vcpu-16gb": "0.182", "g-8vcpu-32gb": "0.364",
        "c-4vcpu-8gb": "0.126", "m-2vcpu-16gb": "0.126",
    }),
    storage=_storage("0.10", "0.10", "0.02", "0.05", "0.02"),
    network=_network("0.01", "0.015"),
    regions=DIGITALOCEAN_REGIONS,
    ha_control_plane_per_hour=Decimal("0.055"),
)

LINODE = ProviderRateCard(
    provider=CloudProvider.LINODE,
    display_name="Linode",
    default_region="us-east",
    compute=_compute("0.015", "0.003", {
        "g6-standard-2": "0.018", "g6-standard-4": "0.036", "g6-standard-6": "0.054",
        "g6-standard-8": "0.072",
        "g6-dedicated-4": "0.054", "g6-dedicated-8": "0.108", "g6-dedicated-16": "0.216",
    }),
    storage=_storage("0.10", "0.10", "0.02", "0.025", "0"),
    network=_network("0.01", "0.015"),
    regions=LINODE_REGIONS,
    ha_control_plane_per_hour=Decimal("0.083"),
)

VULTR = ProviderRateCard(
    provider=CloudProvider.VULTR,
    display_name="Vultr",
    default_region="ewr",
    compute=_compute("0.012", "0.003", {
        "vc2-1c-2gb": "0.015", "vc2-2c-4gb": "0.030", "vc2-4c-8gb": "0.060",
        "vc2-6c-16gb": "0.119", "vc2-8c-32gb": "0.238",
        "vhf-2c-4gb": "0.036", "vhf-4c-8gb": "0.071", "vhf-8c-32gb": "0.286",
    }),
    storage=_storage("0.10", "0.10", "0.02", "0.05", "0"),
    network=_network("0.01", "0.015"),
    regions=VULTR_REGIONS,
)

HETZNER = ProviderRateCard(
    provider=CloudProvider.HETZNER,
    display_name="Hetzner",
    default_region="fsn1",
    compute=_compute("0.006", "0.002", {
        "cx11": "0.005", "cx21": "0.008", "cx31": "0.015", "cx41": "0.028", "cx51": "0.055",
        "cpx11": "0.006", "cpx21": "0.011", "cpx31": "0.021", "cpx41": "0.041", "cpx51": "0.082",
        "ccx13": "0.055", "ccx23": "0.082", "ccx33": "0.137", "ccx43": "0.274", "ccx53": "0.548",
    }),
    storage=_storage("0.044", "0.044", "0.02", "0.02", "0"),
    network=_network("0", "0.008", public_ip="0.001"),
    regions=HETZNER_REGIONS,
)

OVH = ProviderRateCard(
    provider=CloudProvider.OVH,
    display_name="OVHcloud",
    default_region="gra",
    compute=_compute("0.010", "0.003", {
        "b2-7": "0.026", "b2-15": "0.052", "b2-30": "0.104", "b2-60": "0.208",
        "c2-7": "0.032", "c2-15": "0.064", "r2-30": "0.070", "r2-60": "0.140",
    }),
    storage=_storage("0.04", "0.02", "0.01", "0.02", "0.02"),
    network=_network("0.01", "0.012", vpn="0.03"),
    regions=GENERIC_REGIONS,
)

SCALEWAY = ProviderRateCard(
    provider=CloudProvider.SCALEWAY,
    display_name="Scaleway",
    default_region="fr-par",
    compute=_compute("0.008", "0.002", {
        "DEV1-S": "0.007", "DEV1-M": "0.015", "DEV1-L": "0.030",
        "GP1-XS": "0.024", "GP1-S": "0.048", "GP1-M": "0.096", "GP1-L": "0.192",
    }),
    storage=_storage("0.08", "0.04", "0.01", "0.02", "0.02"),
    network=_network("0.01", "0.012", nat="0.01", public_ip="0.002"),
    regions=GENERIC_REGIONS,
)

CIVO = ProviderRateCard(
    provider=CloudProvider.CIVO,
    display_name="Civo",
    default_region="lon1",
    compute=_compute("0.0075", "0.0025", {
        "g4s.xsmall": "0.0075", "g4s.small": "0.015", "g4s.medium": "0.030",
        "g4s.large": "0.060", "g4s.xlarge": "0.119", "g4s.2xlarge": "0.238",
        "g4p.small": "0.045", "g4p.medium": "0.089", "g4p.large": "0.179",
    }),
    storage=_storage("0.10", "0.10", "0.02", "0.05", "0"),
    network=_network("0.01", "0.015"),
    regions=CIVO_REGIONS,
)

EXOSCALE = ProviderRateCard(
    provider=CloudProvider.EXOSCALE,
    display_name="Exoscale",
    default_region="ch-gva-2",
    compute=_compute("0.012", "0.003", {
        "micro": "0.008", "tiny": "0.015", "small": "0.023", "medium": "0.046",
        "large": "0.069", "extra-large": "0.115", "huge": "0.231", "mega": "0.462",
        "titan": "0.923", "gpu-small": "0.577", "gpu-medium": "1.154",
    }),
    storage=_storage("0.08", "0.04", "0.02", "0.03", "0.02"),
    network=_network("0.02", "0.015", public_ip="0.003"),
    regions=EXOSCALE_REGIONS,
)

ON_PREM = ProviderRateCard(
    provider=CloudProvider.ON_PREM,
    display_name="On-Premises",
    default_region="On-Premises",
    compute=ComputePricing(),
    storage=StoragePricing(),
    network=NetworkPricing(),
    regions=(),
)

RATE_CARDS: Mapping[CloudProvider, ProviderRateCard] = MappingProxyType({
    card.provider: card
    for card in (
        AWS, AZURE, GCP, OCI, IBM, ALIBABA, TENCENT, HUAWEI, DIGITALOCEAN, LINODE,
        VULTR, HETZNER, OVH, SCALEWAY, CIVO, EXOSCALE, ON_PREM,
    )
})

ON_PREM_REGION_DISPLAY_NAME = "On-Premises Data Center"
