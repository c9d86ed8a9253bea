"""
Cloud alternatives for on-prem distributions.
Curated managed offerings per distribution, with a generic EKS/AKS/GKE/OKE fallback.
"""
from typing import Callable, Dict, List, Tuple

from infra_pricing.domain.cloud_alternative import CloudAlternative
from infra_pricing.domain.enums import CloudProvider, Distribution, ON_PREM_DISTRIBUTIONS

_P = CloudProvider
_D = Distribution

GENERIC_ALTERNATIVES: Tuple[CloudAlternative, ...] = (
    CloudAlternative(
        _P.AWS, "EKS", "Amazon Elastic Kubernetes Service",
        description="Fully managed Kubernetes service on AWS",
        documentation_url="https://aws.amazon.com/eks/",
        features=("Managed control plane", "Deep AWS integration", "Fargate serverless option"),
    ),
    CloudAlternative(
        _P.AZURE, "AKS", "Azure Kubernetes Service",
        description="Fully managed Kubernetes service on Azure",
        documentation_url="https://azure.microsoft.com/services/kubernetes-service/",
        features=("Free control plane", "Azure AD integration", "Virtual nodes"),
    ),
    CloudAlternative(
        _P.GCP, "GKE", "Google Kubernetes Engine",
        description="Fully managed Kubernetes service on Google Cloud",
        documentation_url="https://cloud.google.com/kubernetes-engine",
        features=("Autopilot mode", "GKE Enterprise", "Multi-cluster management"),
    ),
    CloudAlternative(
        _P.OCI, "OKE", "Oracle Container Engine for Kubernetes",
        description="Managed Kubernetes on Oracle Cloud",
        documentation_url="https://www.oracle.com/cloud/cloud-native/container-engine-kubernetes/",
        features=("Free control plane", "ARM instances available", "OCI integration"),
    ),
)

OPENSHIFT_ALTERNATIVES: Tuple[CloudAlternative, ...] = (
    CloudAlternative(
        _P.AWS, "ROSA", "Red Hat OpenShift Service on AWS",
        description="Managed OpenShift on AWS with joint Red Hat and AWS support",
        is_distribution_specific=True, source_distribution=_D.OPENSHIFT, is_recommended=True,
        documentation_url="https://www.redhat.com/en/technologies/cloud-computing/openshift/aws",
        features=("Native AWS integration", "Joint support from Red Hat and AWS", "PrivateLink support"),
        considerations=("Requires OpenShift subscription", "AWS account required"),
    ),
    CloudAlternative(
        _P.AZURE, "ARO", "Azure Red Hat OpenShift",
        description="Managed OpenShift on Azure with joint Red Hat and Microsoft support",
        is_distribution_specific=True, source_distribution=_D.OPENSHIFT, is_recommended=True,
        documentation_url="https://azure.microsoft.com/services/openshift/",
        features=("Native Azure integration", "Joint support", "Azure AD integration"),
        considerations=("Requires OpenShift subscription", "Azure account required"),
    ),
    CloudAlternative(
        _P.GCP, "OpenShift Dedicated", "OpenShift Dedicated on GCP",
        description="Red Hat managed OpenShift on Google Cloud",
        is_distribution_specific=True, source_distribution=_D.OPENSHIFT,
        documentation_url="https://www.redhat.com/en/technologies/cloud-computing/openshift/dedicated",
        features=("Fully managed by Red Hat", "GCP integration", "SLA guarantees"),
    ),
    CloudAlternative(
        _P.IBM, "ROKS", "Red Hat OpenShift on IBM Cloud",
        description="Managed OpenShift on IBM Cloud",
        is_distribution_specific=True, source_distribution=_D.OPENSHIFT,
        documentation_url="https://www.ibm.com/cloud/openshift",
        features=("IBM Cloud Pak integration", "Watson AI services", "Satellite support"),
    ),
)

RANCHER_ALTERNATIVES: Tuple[CloudAlternative, ...] = (
    CloudAlternative(
        _P.AWS, "EKS + Rancher", "Amazon EKS with Rancher",
        description="Use Rancher to manage EKS clusters",
        is_distribution_specific=True, source_distribution=_D.RANCHER, is_recommended=True,
        features=("Multi-cluster management", "Rancher UI on EKS", "SUSE support available"),
    ),
    CloudAlternative(
        _P.AZURE, "AKS + Rancher", "Azure AKS with Rancher",
        description="Use Rancher to manage AKS clusters",
        is_distribution_specific=True, source_distribution=_D.RANCHER, is_recommended=True,
        features=("Multi-cluster management", "Azure integration", "SUSE support available"),
    ),
    CloudAlternative(
        _P.GCP, "GKE + Rancher", "Google GKE with Rancher",
        description="Use Rancher to manage GKE clusters",
        is_distribution_specific=True, source_distribution=_D.RANCHER,
        features=("Multi-cluster management", "GCP integration", "Anthos compatibility"),
    ),
)

TANZU_ALTERNATIVES: Tuple[CloudAlternative, ...] = (
    CloudAlternative(
        _P.AWS, "Tanzu on AWS", "VMware Tanzu on AWS",
        description="Run Tanzu workloads on AWS with VMware Cloud",
        is_distribution_specific=True, source_distribution=_D.TANZU, is_recommended=True,
        features=("VMware Cloud integration", "vSphere compatibility", "Tanzu Mission Control"),
    ),
    CloudAlternative(
        _P.AZURE, "Tanzu on Azure", "VMware Tanzu on Azure VMware Solution",
        description="Run Tanzu on Azure VMware Solution",
        is_distribution_specific=True, source_distribution=_D.TANZU, is_recommended=True,
        features=("Azure VMware Solution", "Hybrid connectivity", "Azure services integration"),
    ),
    CloudAlternative(
        _P.GCP, "Tanzu on GCP", "VMware Tanzu on Google Cloud VMware Engine",
        description="Run Tanzu on Google Cloud VMware Engine",
        is_distribution_specific=True, source_distribution=_D.TANZU,
        features=("GCVE integration", "Google Cloud services", "VMware compatibility"),
    ),
)

# Low-cost clouds suited to lightweight distributions
LIGHTWEIGHT_ALTERNATIVES: Tuple[CloudAlternative, ...] = (
    CloudAlternative(
        _P.DIGITALOCEAN, "DOKS", "DigitalOcean Kubernetes",
        description="Simple, cost-effective managed Kubernetes",
        is_distribution_specific=True, source_distribution=_D.K3S, is_recommended=True,
        documentation_url="https://www.digitalocean.com/products/kubernetes",
        features=("Free control plane", "Simple pricing", "Developer-friendly"),
        considerations=("Fewer enterprise features than major clouds",),
    ),
    CloudAlternative(
        _P.LINODE, "LKE", "Linode Kubernetes Engine",
        description="Affordable managed Kubernetes on Akamai/Linode",
        is_distribution_specific=True, source_distribution=_D.K3S, is_recommended=True,
        features=("Free control plane", "Low egress costs", "Simple setup"),
    ),
    CloudAlternative(
        _P.HETZNER, "Hetzner K8s", "Hetzner Cloud Kubernetes",
        description="Very cost-effective Kubernetes in Europe",
        is_distribution_specific=True, source_distribution=_D.K3S,
        features=("Extremely low costs", "European data centers", "Good for dev/test"),
    ),
)


def generic_alternatives() -> List[CloudAlternative]:
    return list(GENERIC_ALTERNATIVES)


def _k3s_alternatives() -> List[CloudAlternative]:
    return list(LIGHTWEIGHT_ALTERNATIVES) + generic_alternatives()


def _microk8s_alternatives() -> List[CloudAlternative]:
    return [alt.tagged(_D.MICROK8S) for alt in _k3s_alternatives()]


def _rke2_alternatives() -> List[CloudAlternative]:
    return [
        alt.tagged(_D.RKE2, "RKE2-specific configurations may need adaptation")
        for alt in GENERIC_ALTERNATIVES
    ]


def _charmed_alternatives() -> List[CloudAlternative]:
    return [alt.tagged(_D.CHARMED) for alt in GENERIC_ALTERNATIVES]


_GENERATORS: Dict[Distribution, Callable[[], List[CloudAlternative]]] = {
    _D.OPENSHIFT: lambda: list(OPENSHIFT_ALTERNATIVES),
    _D.RANCHER: lambda: list(RANCHER_ALTERNATIVES),
    _D.TANZU: lambda: list(TANZU_ALTERNATIVES),
    _D.K3S: _k3s_alternatives,
    _D.MICROK8S: _microk8s_alternatives,
    _D.RKE2: _rke2_alternatives,
    _D.CHARMED: _charmed_alternatives,
    _D.KUBERNETES: generic_alternatives,
}


def alternatives_for(distribution: Distribution) -> List[CloudAlternative]:
    """Curated alternatives for a distribution, or the generic list when there is none."""
    generator = _GENERATORS.get(distribution, generic_alternatives)
    return generator()


def get_cloud_alternatives(distribution: Distribution) -> List[CloudAlternative]:
    """
    Distribution-specific alternatives first, then generic ones from providers not already listed.

    Generic entries come from the distribution's own list when it has them, so copies tagged
    with the source distribution and its considerations are kept. Lists made only of
    distribution-specific offerings are topped up from the shared generic catalog.

    Args:
        distribution: The on-prem or cloud distribution being replaced

    Returns:
        Alternatives with at most one generic entry per provider not already covered
    """
    curated = alternatives_for(distribution)
    specific = [alt for alt in curated if alt.is_distribution_specific]
    generic = [alt for alt in curated if not alt.is_distribution_specific] or generic_alternatives()
    present = {alt.provider for alt in specific}
    return specific + [alt for alt in generic if alt.provider not in present]


def is_on_prem_distribution(distribution: Distribution) -> bool:
    return distribution in ON_PREM_DISTRIBUTIONS
