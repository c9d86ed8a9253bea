"""
Distribution licensing strategies.
Each strategy knows how its vendor bills a subscription and which support tiers it sells.
"""
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from infra_pricing.core.config import config
from infra_pricing.domain.enums import CloudProvider, Distribution, LicensingModel, SupportTier
from infra_pricing.domain.licensing_models import (
    DEFAULT_CORES_PER_NODE,
    LicensingCost,
    LicensingInput,
    SupportTierInfo,
)
from infra_pricing.domain.money import ZERO, HUNDRED


ONE = Decimal("1")

# Multi-year contract discount by term length (4+ years capped at 15%)
MULTI_YEAR_DISCOUNTS: Mapping[int, Decimal] = MappingProxyType({
    1: ZERO,
    2: Decimal("0.05"),
    3: Decimal("0.10"),
})
MAX_MULTI_YEAR_DISCOUNT = Decimal("0.15")

# Managed OpenShift worker fee per hour, licence included
MANAGED_OPENSHIFT_WORKER_FEES: Mapping[CloudProvider, Decimal] = MappingProxyType({
    CloudProvider.ROSA: Decimal("0.171"),
    CloudProvider.ARO: Decimal("0.21"),
    CloudProvider.OSD: Decimal("0.166"),
    CloudProvider.ROKS: Decimal("0.20"),
})
MANAGED_OPENSHIFT_UNDERLYING: Mapping[CloudProvider, CloudProvider] = MappingProxyType({
    CloudProvider.AWS: CloudProvider.ROSA,
    CloudProvider.AZURE: CloudProvider.ARO,
    CloudProvider.GCP: CloudProvider.OSD,
    CloudProvider.IBM: CloudProvider.ROKS,
})
MANAGED_OPENSHIFT_NAMES: Mapping[CloudProvider, str] = MappingProxyType({
    CloudProvider.ROSA: "ROSA",
    CloudProvider.ARO: "ARO",
    CloudProvider.OSD: "Dedicated",
    CloudProvider.ROKS: "ROKS",
})

# Managed Kubernetes control plane fee per hour (free tiers elsewhere)
MANAGED_CONTROL_PLANE_FEES: Mapping[CloudProvider, Decimal] = MappingProxyType({
    CloudProvider.AWS: Decimal("0.10"),
    CloudProvider.GCP: Decimal("0.10"),
})
DEFAULT_CONTROL_PLANE_FEE = Decimal("0.10")

MANAGED_K8S_NAMES: Mapping[Distribution, str] = MappingProxyType({
    Distribution.EKS: "Amazon EKS",
    Distribution.AKS: "Azure AKS",
    Distribution.GKE: "Google GKE",
    Distribution.OKE: "Oracle OKE",
    Distribution.IKS: "IBM IKS",
    Distribution.ACK: "Alibaba ACK",
    Distribution.TKE: "Tencent TKE",
    Distribution.CCE: "Huawei CCE",
    Distribution.DOKS: "DigitalOcean DOKS",
    Distribution.LKE: "Linode LKE",
    Distribution.VKE: "Vultr VKE",
    Distribution.HETZNER_K8S: "Hetzner K8s",
    Distribution.OVH_KUBERNETES: "OVH Kubernetes",
    Distribution.SCALEWAY_KAPSULE: "Scaleway Kapsule",
})

PROVIDER_VENDORS: Mapping[CloudProvider, str] = MappingProxyType({
    CloudProvider.AWS: "Amazon Web Services",
    CloudProvider.AZURE: "Microsoft",
    CloudProvider.GCP: "Google",
    CloudProvider.OCI: "Oracle",
    CloudProvider.IBM: "IBM",
    CloudProvider.ALIBABA: "Alibaba Cloud",
    CloudProvider.TENCENT: "Tencent Cloud",
    CloudProvider.HUAWEI: "Huawei Cloud",
    CloudProvider.DIGITALOCEAN: "DigitalOcean",
    CloudProvider.LINODE: "Akamai (Linode)",
    CloudProvider.VULTR: "Vultr",
    CloudProvider.HETZNER: "Hetzner",
    CloudProvider.OVH: "OVHcloud",
    CloudProvider.SCALEWAY: "Scaleway",
    CloudProvider.CIVO: "Civo",
    CloudProvider.EXOSCALE: "Exoscale",
})


def multi_year_discount(years: int) -> Decimal:
    if years >= 4:
        return MAX_MULTI_YEAR_DISCOUNT
    return MULTI_YEAR_DISCOUNTS.get(years, ZERO)


def _usd(amount: Decimal) -> str:
    return f"${amount:,.0f}"


def _tier(tier: SupportTier, name: str, hours: str, sla: str, multiplier: str = "1.0",
          additional: str = "0", tam: bool = False) -> SupportTierInfo:
    return SupportTierInfo(tier, name, hours, sla, Decimal(multiplier), Decimal(additional), tam)


class DistributionLicensing:
    """
    Base licensing strategy.

    Subclasses set the distribution, vendor facts and rates; the annual cost and the full
    licensing calculation are shared.
    """

    distribution: Distribution = Distribution.KUBERNETES
    vendor: str = ""
    requires_license: bool = True
    primary_model: LicensingModel = LicensingModel.PER_NODE
    minimum_cores: int = 0

    @property
    def display_name(self) -> str:
        return self.distribution.value

    def license_cost_per_node_year(self) -> Decimal:
        return ZERO

    def license_cost_per_core_year(self) -> Decimal:
        return ZERO

    def license_cost_per_socket_year(self) -> Decimal:
        return ZERO

    def cluster_fixed_cost_per_year(self) -> Decimal:
        return ZERO

    def worker_node_fee_per_hour(self) -> Decimal:
        return ZERO

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        return ()

    def find_support_tier(self, tier: SupportTier) -> Optional[SupportTierInfo]:
        return next((info for info in self.support_tiers() if info.tier == tier), None)

    def annual_cost(self, node_count: int, core_count: Optional[int] = None) -> Decimal:
        """
        Annual list-price subscription cost.

        Args:
            node_count: Licensed nodes
            core_count: Licensed cores; 8 per node when not supplied

        Returns:
            Annual cost before support uplifts and discounts
        """
        if not self.requires_license:
            return ZERO
        cores = core_count if core_count is not None else node_count * DEFAULT_CORES_PER_NODE
        return self._base_cost(node_count, cores, node_count * 2, node_count) + self.cluster_fixed_cost_per_year()

    def monthly_cost(self, node_count: int, core_count: Optional[int] = None) -> Decimal:
        return self.annual_cost(node_count, core_count) / config.MONTHS_PER_YEAR

    def _base_cost(self, nodes: int, cores: int, sockets: int, workers: int, minimum_cores: int = 0) -> Decimal:
        model = self.primary_model
        if model == LicensingModel.PER_NODE:
            return nodes * self.license_cost_per_node_year()
        if model == LicensingModel.PER_CORE:
            return max(cores, minimum_cores) * self.license_cost_per_core_year()
        if model == LicensingModel.PER_SOCKET:
            return sockets * self.license_cost_per_socket_year()
        if model == LicensingModel.PER_WORKER_NODE:
            return workers * self.license_cost_per_node_year()
        return ZERO

    def basis(self) -> str:
        model = self.primary_model
        if model == LicensingModel.PER_NODE:
            return f"Per-node: {_usd(self.license_cost_per_node_year())}/node/year"
        if model == LicensingModel.PER_CORE:
            return f"Per-core: {_usd(self.license_cost_per_core_year())}/core/year"
        if model == LicensingModel.PER_SOCKET:
            return f"Per-socket: {_usd(self.license_cost_per_socket_year())}/socket/year"
        if model == LicensingModel.PER_WORKER_NODE:
            return f"Per-worker: {_usd(self.license_cost_per_node_year())}/worker/year"
        if model == LicensingModel.FLAT_RATE:
            return f"Flat rate: {_usd(self.cluster_fixed_cost_per_year())}/cluster/year"
        return "Custom licensing"

    def calculate(self, licensing_input: LicensingInput) -> LicensingCost:
        """
        Full licensing calculation including term discount, support tier and managed fees.

        Args:
            licensing_input: Cluster size, support tier and contract facts

        Returns:
            LicensingCost with annual components and a basis description
        """
        if not self.requires_license:
            return LicensingCost.free()

        base_cost = self._base_cost(
            licensing_input.node_count,
            licensing_input.effective_cores,
            licensing_input.effective_sockets,
            licensing_input.effective_worker_nodes,
            minimum_cores=self.minimum_cores,
        ) + self.cluster_fixed_cost_per_year()

        discount = multi_year_discount(licensing_input.contract_years)
        base_cost *= ONE - discount

        tier = self.find_support_tier(licensing_input.support_tier)
        multiplier = tier.cost_multiplier if tier else ONE
        support_cost = base_cost * (multiplier - ONE) + (tier.additional_annual_cost if tier else ZERO)

        additional = ZERO
        if licensing_input.is_managed_service:
            additional = (
                licensing_input.effective_worker_nodes * self.worker_node_fee_per_hour() * config.HOURS_PER_YEAR
            )

        nodes = max(licensing_input.node_count, 1)
        return LicensingCost(
            base_license_cost=base_cost,
            support_cost=support_cost,
            additional_costs=additional,
            per_node_per_year=(base_cost + support_cost + additional) / nodes,
            discount_percent=discount * HUNDRED,
            licensing_model=self.primary_model,
            basis=self.basis(),
        )


class OpenShiftLicensing(DistributionLicensing):
    """Red Hat OpenShift: per-node subscriptions, or an hourly worker fee when managed."""

    distribution = Distribution.OPENSHIFT
    vendor = "Red Hat"

    def __init__(self, managed: bool = False, provider: Optional[CloudProvider] = None):
        self.managed = managed
        self.provider = MANAGED_OPENSHIFT_UNDERLYING.get(provider, provider)
        self.primary_model = LicensingModel.USAGE_BASED if managed else LicensingModel.PER_NODE

    @property
    def display_name(self) -> str:
        if self.managed:
            return f"OpenShift ({MANAGED_OPENSHIFT_NAMES.get(self.provider, 'Managed')})"
        return "OpenShift Container Platform"

    def license_cost_per_node_year(self) -> Decimal:
        return Decimal("2500")

    def license_cost_per_core_year(self) -> Decimal:
        return Decimal("200")

    def worker_node_fee_per_hour(self) -> Decimal:
        return MANAGED_OPENSHIFT_WORKER_FEES.get(self.provider, MANAGED_OPENSHIFT_WORKER_FEES[CloudProvider.ROSA])

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        return (
            _tier(SupportTier.STANDARD, "Standard", "Business hours (Mon-Fri)", "4 business hours (Sev 1)"),
            _tier(SupportTier.PREMIUM, "Premium", "24x7x365", "1 hour (Sev 1)", "1.3"),
            _tier(SupportTier.ENTERPRISE, "Premium Plus (TAM)", "24x7x365 + Dedicated TAM",
                  "30 minutes (Sev 1)", "1.5", "50000", tam=True),
        )

    def annual_cost(self, node_count: int, core_count: Optional[int] = None) -> Decimal:
        if self.managed:
            return node_count * self.worker_node_fee_per_hour() * config.HOURS_PER_YEAR
        return super().annual_cost(node_count, core_count)

    def calculate(self, licensing_input: LicensingInput) -> LicensingCost:
        if not self.managed:
            return super().calculate(licensing_input)

        # Licence and control plane are folded into the hourly worker fee
        fee = self.worker_node_fee_per_hour()
        worker_fees = licensing_input.effective_worker_nodes * fee * config.HOURS_PER_YEAR
        nodes = max(licensing_input.node_count, 1)
        return LicensingCost(
            base_license_cost=worker_fees,
            per_node_per_year=worker_fees / nodes,
            licensing_model=LicensingModel.USAGE_BASED,
            basis=f"Managed OpenShift: ${fee:.3f}/worker/hour",
        )


class TanzuEdition(str, Enum):
    STANDARD = "Standard"
    ADVANCED = "Advanced"
    ENTERPRISE = "Enterprise"


TANZU_CORE_RATES: Mapping[TanzuEdition, Decimal] = MappingProxyType({
    TanzuEdition.STANDARD: Decimal("1500"),
    TanzuEdition.ADVANCED: Decimal("2000"),
    TanzuEdition.ENTERPRISE: Decimal("2500"),
})


class TanzuLicensing(DistributionLicensing):
    """VMware Tanzu: per-core subscriptions. Contract quotes carry a 16-core minimum."""

    distribution = Distribution.TANZU
    vendor = "VMware (Broadcom)"
    primary_model = LicensingModel.PER_CORE
    minimum_cores = 16

    def __init__(self, edition: TanzuEdition = TanzuEdition.STANDARD):
        self.edition = edition

    @property
    def display_name(self) -> str:
        return f"VMware Tanzu ({self.edition.value})"

    def license_cost_per_core_year(self) -> Decimal:
        return TANZU_CORE_RATES[self.edition]

    def license_cost_per_node_year(self) -> Decimal:
        return self.license_cost_per_core_year() * DEFAULT_CORES_PER_NODE

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        return (
            _tier(SupportTier.BASIC, "Production", "12x5", "4 business hours"),
            _tier(SupportTier.PREMIUM, "Premier", "24x7", "30 minutes (Sev 1)", "1.25"),
            _tier(SupportTier.ENTERPRISE, "Premier + TAM", "24x7 + Dedicated TAM",
                  "15 minutes (Sev 1)", "1.5", "75000", tam=True),
        )

    def basis(self) -> str:
        return f"Per-core ({self.edition.value}): {_usd(self.license_cost_per_core_year())}/core/year"


class RancherEdition(str, Enum):
    COMMUNITY = "Community"
    PRIME = "Prime"
    GOVERNMENT = "Government"


class RancherLicensing(DistributionLicensing):
    """SUSE Rancher Prime: per-node subscriptions; the community edition is free."""

    distribution = Distribution.RANCHER
    vendor = "SUSE"

    def __init__(self, edition: RancherEdition = RancherEdition.PRIME):
        self.edition = edition
        self.requires_license = edition != RancherEdition.COMMUNITY
        self.primary_model = LicensingModel.PER_NODE if self.requires_license else LicensingModel.OPEN_SOURCE

    @property
    def display_name(self) -> str:
        if self.edition == RancherEdition.COMMUNITY:
            return "Rancher (Community)"
        return f"SUSE Rancher {self.edition.value}"

    def license_cost_per_node_year(self) -> Decimal:
        return {
            RancherEdition.COMMUNITY: ZERO,
            RancherEdition.PRIME: Decimal("1000"),
            RancherEdition.GOVERNMENT: Decimal("1500"),
        }[self.edition]

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        if self.edition == RancherEdition.COMMUNITY:
            return (_tier(SupportTier.COMMUNITY, "Community", "Community forums", "Best effort", "0"),)
        return (
            _tier(SupportTier.STANDARD, "Standard", "12x5 (business hours)", "4 business hours (Sev 1)"),
            _tier(SupportTier.PREMIUM, "Priority", "24x7", "1 hour (Sev 1)", "1.4"),
            _tier(SupportTier.ENTERPRISE, "Premium", "24x7 + Dedicated SE", "15 minutes (Sev 1)",
                  "1.8", "25000", tam=True),
        )


class CharmedEdition(str, Enum):
    FREE = "Free"
    PRO = "Pro"
    PRO_SUPPORT = "ProSupport"


class CharmedLicensing(DistributionLicensing):
    """Canonical Charmed Kubernetes via Ubuntu Pro, per node."""

    distribution = Distribution.CHARMED
    vendor = "Canonical"

    def __init__(self, edition: CharmedEdition = CharmedEdition.PRO):
        self.edition = edition
        self.requires_license = edition != CharmedEdition.FREE
        self.primary_model = LicensingModel.PER_NODE if self.requires_license else LicensingModel.OPEN_SOURCE

    @property
    def display_name(self) -> str:
        if self.edition == CharmedEdition.FREE:
            return "Charmed Kubernetes"
        return f"Charmed Kubernetes (Ubuntu {self.edition.value})"

    def license_cost_per_node_year(self) -> Decimal:
        return {
            CharmedEdition.FREE: ZERO,
            CharmedEdition.PRO: Decimal("500"),
            CharmedEdition.PRO_SUPPORT: Decimal("1500"),
        }[self.edition]

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        if self.edition == CharmedEdition.FREE:
            return (_tier(SupportTier.COMMUNITY, "Community", "Community forums, Ask Ubuntu", "Best effort", "0"),)
        return (
            _tier(SupportTier.STANDARD, "Ubuntu Pro", "10x5", "4 business hours"),
            _tier(SupportTier.PREMIUM, "Ubuntu Pro + 24x7", "24x7", "1 hour (Sev 1)", "2.0"),
            _tier(SupportTier.ENTERPRISE, "Ubuntu Pro + TAM", "24x7 + Dedicated TAM", "15 minutes (Sev 1)",
                  "2.5", "40000", tam=True),
        )


class Rke2Edition(str, Enum):
    COMMUNITY = "Community"
    PRIME = "Prime"
    GOVERNMENT = "Government"


class OpenSourceLicensing(DistributionLicensing):
    """Distributions with no subscription; support is sold separately."""

    requires_license = False
    primary_model = LicensingModel.OPEN_SOURCE


class Rke2Licensing(OpenSourceLicensing):
    distribution = Distribution.RKE2
    vendor = "SUSE (Rancher Labs)"

    def __init__(self, edition: Rke2Edition = Rke2Edition.COMMUNITY):
        self.edition = edition

    @property
    def display_name(self) -> str:
        if self.edition == Rke2Edition.COMMUNITY:
            return "RKE2"
        return f"RKE2 ({self.edition.value})"

    def license_cost_per_node_year(self) -> Decimal:
        return {
            Rke2Edition.COMMUNITY: ZERO,
            Rke2Edition.PRIME: Decimal("750"),
            Rke2Edition.GOVERNMENT: Decimal("1200"),
        }[self.edition]

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        government = self.edition == Rke2Edition.GOVERNMENT
        tiers = []
        if self.edition == Rke2Edition.COMMUNITY:
            tiers.append(_tier(SupportTier.COMMUNITY, "Community", "GitHub Issues, Slack", "Best effort", "0"))
        tiers.extend([
            _tier(SupportTier.STANDARD, "Government Standard" if government else "Rancher Prime",
                  "12x5", "4 business hours"),
            _tier(SupportTier.PREMIUM, "Government Priority" if government else "Rancher Priority",
                  "24x7", "1 hour (Sev 1)", "1.4"),
            _tier(SupportTier.ENTERPRISE, "Government Premium" if government else "Rancher Premium",
                  "24x7 + Dedicated SE", "15 minutes (Sev 1)", "1.8", "25000", tam=True),
        ])
        return tuple(tiers)


class K3sLicensing(OpenSourceLicensing):
    distribution = Distribution.K3S
    vendor = "SUSE (Rancher Labs)"

    def __init__(self, with_rancher_support: bool = False):
        self.with_rancher_support = with_rancher_support

    @property
    def display_name(self) -> str:
        return "K3s (Rancher Prime)" if self.with_rancher_support else "K3s"

    def license_cost_per_node_year(self) -> Decimal:
        return Decimal("500") if self.with_rancher_support else ZERO

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        return (
            _tier(SupportTier.COMMUNITY, "Community", "GitHub Issues, Slack", "Best effort", "0"),
            _tier(SupportTier.STANDARD, "SUSE Rancher Prime", "12x5", "4 business hours", "1.0", "500"),
            _tier(SupportTier.PREMIUM, "SUSE Rancher Priority", "24x7", "1 hour", "1.4", "700"),
        )


class MicroK8sLicensing(OpenSourceLicensing):
    distribution = Distribution.MICROK8S
    vendor = "Canonical"

    def __init__(self, with_ubuntu_pro: bool = False):
        self.with_ubuntu_pro = with_ubuntu_pro

    @property
    def display_name(self) -> str:
        return "MicroK8s (Ubuntu Pro)" if self.with_ubuntu_pro else "MicroK8s"

    def license_cost_per_node_year(self) -> Decimal:
        return Decimal("225") if self.with_ubuntu_pro else ZERO

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        return (
            _tier(SupportTier.COMMUNITY, "Community", "Community forums", "Best effort", "0"),
            _tier(SupportTier.STANDARD, "Ubuntu Pro (Device)", "10x5", "4 business hours", "1.0", "225"),
            _tier(SupportTier.PREMIUM, "Ubuntu Pro + Support", "24x7", "1 hour", "1.0", "500"),
        )


class KubernetesLicensing(OpenSourceLicensing):
    """Upstream Kubernetes: free, with optional third-party support contracts."""

    distribution = Distribution.KUBERNETES
    vendor = "CNCF (Cloud Native Computing Foundation)"

    @property
    def display_name(self) -> str:
        return "Kubernetes (Vanilla)"

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        return (
            _tier(SupportTier.COMMUNITY, "Community", "Kubernetes Slack, GitHub, Stack Overflow", "Best effort", "0"),
            _tier(SupportTier.BASIC, "Third-Party Basic", "Business hours", "4 business hours", "1.0", "2000"),
            _tier(SupportTier.PREMIUM, "Third-Party Premium", "24x7", "1 hour", "1.0", "10000"),
        )

    def calculate(self, licensing_input: LicensingInput) -> LicensingCost:
        tier = self.find_support_tier(licensing_input.support_tier)
        support_cost = tier.additional_annual_cost if tier else ZERO
        return LicensingCost(
            support_cost=support_cost,
            per_node_per_year=support_cost / max(licensing_input.node_count, 1),
            licensing_model=LicensingModel.OPEN_SOURCE,
            basis="Open Source - CNCF Apache 2.0",
        )


class ManagedK8sLicensing(OpenSourceLicensing):
    """Cloud-managed Kubernetes: no licence, only the provider's control plane fee."""

    primary_model = LicensingModel.USAGE_BASED

    def __init__(self, distribution: Distribution, provider: CloudProvider):
        self.distribution = distribution
        self.provider = provider
        self.vendor = PROVIDER_VENDORS.get(provider, provider.value)

    @property
    def display_name(self) -> str:
        return MANAGED_K8S_NAMES.get(self.distribution, f"Managed Kubernetes ({self.distribution.value})")

    def control_plane_fee_per_hour(self) -> Decimal:
        if self.provider in MANAGED_CONTROL_PLANE_FEES:
            return MANAGED_CONTROL_PLANE_FEES[self.provider]
        if self.provider in PROVIDER_VENDORS:
            return ZERO
        return DEFAULT_CONTROL_PLANE_FEE

    def cluster_fixed_cost_per_year(self) -> Decimal:
        return self.control_plane_fee_per_hour() * config.HOURS_PER_YEAR

    def support_tiers(self) -> Tuple[SupportTierInfo, ...]:
        return (
            _tier(SupportTier.BASIC, "Cloud Provider Basic", "Online resources, forums", "Best effort", "0"),
            _tier(SupportTier.STANDARD, "Cloud Provider Business", "24x7", "1 hour (critical)"),
            _tier(SupportTier.ENTERPRISE, "Cloud Provider Enterprise", "24x7 + TAM", "15 minutes (critical)", tam=True),
        )

    def calculate(self, licensing_input: LicensingInput) -> LicensingCost:
        control_plane = self.cluster_fixed_cost_per_year()
        return LicensingCost(
            additional_costs=control_plane,
            per_node_per_year=control_plane / max(licensing_input.node_count, 1),
            licensing_model=LicensingModel.USAGE_BASED,
            basis=f"Managed K8s - Control plane: ${self.control_plane_fee_per_hour():.2f}/hour",
        )


class UnlicensedDistribution(OpenSourceLicensing):
    """Stand-in for distribution names the registry does not recognise: always zero cost."""

    def __init__(self, name: str):
        self.name = name

    @property
    def display_name(self) -> str:
        return self.name

    def calculate(self, licensing_input: LicensingInput) -> LicensingCost:
        return LicensingCost.free(basis=f"Unknown distribution '{self.name}' - no license cost applied")


_D = Distribution

# Cloud-hosted variants licensed exactly like their self-managed base
DISTRIBUTION_VARIANTS: Mapping[Distribution, Distribution] = MappingProxyType({
    _D.RANCHER_HOSTED: _D.RANCHER,
    _D.RANCHER_EKS: _D.RANCHER,
    _D.RANCHER_AKS: _D.RANCHER,
    _D.RANCHER_GKE: _D.RANCHER,
    _D.TANZU_CLOUD: _D.TANZU,
    _D.TANZU_AWS: _D.TANZU,
    _D.TANZU_AZURE: _D.TANZU,
    _D.TANZU_GCP: _D.TANZU,
    _D.CHARMED_AWS: _D.CHARMED,
    _D.CHARMED_AZURE: _D.CHARMED,
    _D.CHARMED_GCP: _D.CHARMED,
    _D.MICROK8S_AWS: _D.MICROK8S,
    _D.MICROK8S_AZURE: _D.MICROK8S,
    _D.MICROK8S_GCP: _D.MICROK8S,
    _D.K3S_AWS: _D.K3S,
    _D.K3S_AZURE: _D.K3S,
    _D.K3S_GCP: _D.K3S,
    _D.RKE2_AWS: _D.RKE2,
    _D.RKE2_AZURE: _D.RKE2,
    _D.RKE2_GCP: _D.RKE2,
})

LICENSED_DISTRIBUTIONS = frozenset({_D.OPENSHIFT, _D.TANZU, _D.RANCHER, _D.CHARMED})


def base_distribution(distribution: Distribution) -> Distribution:
    return DISTRIBUTION_VARIANTS.get(distribution, distribution)


def has_license_cost(distribution: Distribution) -> bool:
    """Whether a distribution carries a separate subscription line."""
    return base_distribution(distribution) in LICENSED_DISTRIBUTIONS
