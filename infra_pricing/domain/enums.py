"""
Closed enumerations shared by the pricing and licensing engines.
"""
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class CloudProvider(str, Enum):
    """Where a cluster runs. Managed OpenShift services are pseudo-providers."""
    AWS = "AWS"
    AZURE = "Azure"
    GCP = "GCP"
    OCI = "OCI"
    IBM = "IBM"
    ALIBABA = "Alibaba"
    TENCENT = "Tencent"
    HUAWEI = "Huawei"
    ROSA = "ROSA"  # Red Hat OpenShift Service on AWS
    ARO = "ARO"  # Azure Red Hat OpenShift
    OSD = "OSD"  # OpenShift Dedicated (GCP)
    ROKS = "ROKS"  # Red Hat OpenShift on IBM Cloud
    DIGITALOCEAN = "DigitalOcean"
    LINODE = "Linode"
    VULTR = "Vultr"
    HETZNER = "Hetzner"
    OVH = "OVH"
    SCALEWAY = "Scaleway"
    CIVO = "Civo"
    EXOSCALE = "Exoscale"
    ON_PREM = "OnPrem"
    MANUAL = "Manual"


class Distribution(str, Enum):
    """Kubernetes distributions, including cloud-hosted and managed variants."""
    # Self-managed (on-prem)
    OPENSHIFT = "OpenShift"
    KUBERNETES = "Kubernetes"
    RANCHER = "Rancher"
    RKE2 = "RKE2"
    K3S = "K3s"
    MICROK8S = "MicroK8s"
    CHARMED = "Charmed"
    TANZU = "Tanzu"

    # Managed OpenShift
    OPENSHIFT_ROSA = "OpenShiftROSA"
    OPENSHIFT_ARO = "OpenShiftARO"
    OPENSHIFT_DEDICATED = "OpenShiftDedicated"
    OPENSHIFT_IBM = "OpenShiftIBM"

    # Rancher variants
    RANCHER_HOSTED = "RancherHosted"
    RANCHER_EKS = "RancherEKS"
    RANCHER_AKS = "RancherAKS"
    RANCHER_GKE = "RancherGKE"

    # Tanzu variants
    TANZU_CLOUD = "TanzuCloud"
    TANZU_AWS = "TanzuAWS"
    TANZU_AZURE = "TanzuAzure"
    TANZU_GCP = "TanzuGCP"

    # Canonical variants
    CHARMED_AWS = "CharmedAWS"
    CHARMED_AZURE = "CharmedAzure"
    CHARMED_GCP = "CharmedGCP"
    MICROK8S_AWS = "MicroK8sAWS"
    MICROK8S_AZURE = "MicroK8sAzure"
    MICROK8S_GCP = "MicroK8sGCP"

    # K3s / RKE2 on cloud VMs
    K3S_AWS = "K3sAWS"
    K3S_AZURE = "K3sAzure"
    K3S_GCP = "K3sGCP"
    RKE2_AWS = "RKE2AWS"
    RKE2_AZURE = "RKE2Azure"
    RKE2_GCP = "RKE2GCP"

    # Managed Kubernetes services
    EKS = "EKS"
    AKS = "AKS"
    GKE = "GKE"
    OKE = "OKE"
    IKS = "IKS"
    ACK = "ACK"
    TKE = "TKE"
    CCE = "CCE"
    DOKS = "DOKS"
    LKE = "LKE"
    VKE = "VKE"
    HETZNER_K8S = "HetznerK8s"
    OVH_KUBERNETES = "OVHKubernetes"
    SCALEWAY_KAPSULE = "ScalewayKapsule"


class PricingType(str, Enum):
    """Commitment model for compute prices."""
    ON_DEMAND = "OnDemand"
    RESERVED_1_YEAR = "Reserved1Year"
    RESERVED_3_YEAR = "Reserved3Year"
    SPOT = "Spot"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    AUD = "AUD"
    CAD = "CAD"
    JPY = "JPY"


class CostCategory(str, Enum):
    """Top-level buckets of a cost breakdown."""
    COMPUTE = "Compute"
    STORAGE = "Storage"
    NETWORK = "Network"
    LICENSE = "License"
    SUPPORT = "Support"
    DATA_CENTER = "DataCenter"
    LABOR = "Labor"


class SupportLevel(str, Enum):
    """Cloud provider support plans, priced as a percentage of spend."""
    NONE = "None"
    BASIC = "Basic"
    DEVELOPER = "Developer"
    BUSINESS = "Business"
    ENTERPRISE = "Enterprise"


class SupportTier(str, Enum):
    """Vendor support tiers for distribution subscriptions."""
    COMMUNITY = "Community"
    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"
    ENTERPRISE = "Enterprise"


class LicensingModel(str, Enum):
    """How a distribution vendor bills its subscription."""
    OPEN_SOURCE = "OpenSource"
    PER_NODE = "PerNode"
    PER_CORE = "PerCore"
    PER_SOCKET = "PerSocket"
    PER_WORKER_NODE = "PerWorkerNode"
    FLAT_RATE = "FlatRate"
    USAGE_BASED = "UsageBased"


class EnvironmentType(str, Enum):
    DEV = "Dev"
    TEST = "Test"
    STAGE = "Stage"
    PROD = "Prod"
    DR = "DR"


_D = Distribution
_P = CloudProvider

DISTRIBUTION_PROVIDERS: Mapping[Distribution, CloudProvider] = MappingProxyType({
    _D.OPENSHIFT: _P.ON_PREM,
    _D.KUBERNETES: _P.ON_PREM,
    _D.RANCHER: _P.ON_PREM,
    _D.RKE2: _P.ON_PREM,
    _D.K3S: _P.ON_PREM,
    _D.MICROK8S: _P.ON_PREM,
    _D.CHARMED: _P.ON_PREM,
    _D.TANZU: _P.ON_PREM,
    _D.OPENSHIFT_ROSA: _P.ROSA,
    _D.OPENSHIFT_ARO: _P.ARO,
    _D.OPENSHIFT_DEDICATED: _P.OSD,
    _D.OPENSHIFT_IBM: _P.ROKS,
    _D.RANCHER_HOSTED: _P.AWS,
    _D.RANCHER_EKS: _P.AWS,
    _D.RANCHER_AKS: _P.AZURE,
    _D.RANCHER_GKE: _P.GCP,
    _D.TANZU_CLOUD: _P.AWS,
    _D.TANZU_AWS: _P.AWS,
    _D.TANZU_AZURE: _P.AZURE,
    _D.TANZU_GCP: _P.GCP,
    _D.CHARMED_AWS: _P.AWS,
    _D.CHARMED_AZURE: _P.AZURE,
    _D.CHARMED_GCP: _P.GCP,
    _D.MICROK8S_AWS: _P.AWS,
    _D.MICROK8S_AZURE: _P.AZURE,
    _D.MICROK8S_GCP: _P.GCP,
    _D.K3S_AWS: _P.AWS,
    _D.K3S_AZURE: _P.AZURE,
    _D.K3S_GCP: _P.GCP,
    _D.RKE2_AWS: _P.AWS,
    _D.RKE2_AZURE: _P.AZURE,
    _D.RKE2_GCP: _P.GCP,
    _D.EKS: _P.AWS,
    _D.AKS: _P.AZURE,
    _D.GKE: _P.GCP,
    _D.OKE: _P.OCI,
    _D.IKS: _P.IBM,
    _D.ACK: _P.ALIBABA,
    _D.TKE: _P.TENCENT,
    _D.CCE: _P.HUAWEI,
    _D.DOKS: _P.DIGITALOCEAN,
    _D.LKE: _P.LINODE,
    _D.VKE: _P.VULTR,
    _D.HETZNER_K8S: _P.HETZNER,
    _D.OVH_KUBERNETES: _P.OVH,
    _D.SCALEWAY_KAPSULE: _P.SCALEWAY,
})

ON_PREM_DISTRIBUTIONS = frozenset(
    d for d, provider in DISTRIBUTION_PROVIDERS.items() if provider is CloudProvider.ON_PREM
)


def distribution_provider(distribution: Distribution) -> CloudProvider:
    """Return the CloudProvider a distribution runs on."""
    return DISTRIBUTION_PROVIDERS[distribution]
