"""
Pricing registry.
Holds one pricing strategy per cloud provider and one licensing strategy per distribution,
and resolves managed variants to a base strategy plus an override.
"""
import logging
import threading
from dataclasses import replace
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from infra_pricing.domain.enums import CloudProvider, Distribution, distribution_provider
from infra_pricing.domain.licensing_models import LicensingCost, LicensingInput
from infra_pricing.domain.pricing_models import LicensePricing, PricingModel, RegionInfo
from infra_pricing.pricing.licensing import (
    CharmedLicensing,
    DistributionLicensing,
    K3sLicensing,
    KubernetesLicensing,
    MANAGED_OPENSHIFT_WORKER_FEES,
    ManagedK8sLicensing,
    MicroK8sLicensing,
    OpenShiftLicensing,
    RancherLicensing,
    Rke2Licensing,
    TanzuLicensing,
    UnlicensedDistribution,
    base_distribution,
)
from infra_pricing.pricing.providers import CloudProviderPricing, build_provider_strategies


logger = logging.getLogger(__name__)

# Managed OpenShift pseudo-provider -> cloud whose rate card it runs on
MANAGED_OPENSHIFT_BASE_PROVIDERS: Mapping[CloudProvider, CloudProvider] = MappingProxyType({
    CloudProvider.ROSA: CloudProvider.AWS,
    CloudProvider.ARO: CloudProvider.AZURE,
    CloudProvider.OSD: CloudProvider.GCP,
    CloudProvider.ROKS: CloudProvider.IBM,
})

MANAGED_OPENSHIFT_DISTRIBUTIONS: Mapping[Distribution, CloudProvider] = MappingProxyType({
    Distribution.OPENSHIFT_ROSA: CloudProvider.ROSA,
    Distribution.OPENSHIFT_ARO: CloudProvider.ARO,
    Distribution.OPENSHIFT_DEDICATED: CloudProvider.OSD,
    Distribution.OPENSHIFT_IBM: CloudProvider.ROKS,
})


class PricingRegistryError(ValueError):
    """Raised when a provider cannot be resolved to a pricing strategy."""
    pass


class PricingRegistry:
    """
    Read-only dispatch tables for provider pricing and distribution licensing.

    Built once, then shared. Every lookup is a dictionary read, so concurrent callers
    need no locking.
    """

    def __init__(
        self,
        providers: Mapping[CloudProvider, CloudProviderPricing],
        licensing: Mapping[Distribution, DistributionLicensing],
        managed_openshift: Mapping[Distribution, DistributionLicensing],
        managed_kubernetes: Mapping[Distribution, DistributionLicensing],
    ):
        self._providers = MappingProxyType(dict(providers))
        self._licensing = MappingProxyType(dict(licensing))
        self._managed_openshift = MappingProxyType(dict(managed_openshift))
        self._managed_kubernetes = MappingProxyType(dict(managed_kubernetes))

    # Providers

    def providers(self) -> List[CloudProvider]:
        """Providers that can be priced, including managed OpenShift pseudo-providers."""
        return list(self._providers) + list(MANAGED_OPENSHIFT_BASE_PROVIDERS)

    def is_provider_supported(self, provider: Union[CloudProvider, str]) -> bool:
        try:
            provider = CloudProvider(provider)
        except ValueError:
            return False
        return provider in self._providers or provider in MANAGED_OPENSHIFT_BASE_PROVIDERS

    def get_provider(self, provider: Union[CloudProvider, str]) -> CloudProviderPricing:
        """
        Resolve the strategy that prices a provider.

        Managed OpenShift pseudo-providers resolve to their underlying cloud.

        Raises:
            PricingRegistryError: If the provider has no strategy and no fallback
        """
        resolved = self._coerce_provider(provider)
        strategy = self._providers.get(resolved)
        if strategy is None:
            base = MANAGED_OPENSHIFT_BASE_PROVIDERS.get(resolved)
            strategy = self._providers.get(base) if base else None
        if strategy is None:
            raise PricingRegistryError(f"No pricing strategy registered for provider: {resolved.value}")
        return strategy

    def get_pricing(
        self,
        provider: Union[CloudProvider, str],
        region: Optional[str] = None,
        ha_control_plane: bool = False,
    ) -> PricingModel:
        """
        Rate card for a provider in a region.

        Args:
            provider: Cloud provider or managed OpenShift pseudo-provider
            region: Region code; the provider's default region when omitted
            ha_control_plane: Price the paid uptime-SLA control plane

        Returns:
            PricingModel for the (provider, region) pair

        Raises:
            PricingRegistryError: If the provider cannot be resolved
        """
        resolved = self._coerce_provider(provider)
        strategy = self.get_provider(resolved)
        model = strategy.get_pricing(region, ha_control_plane=ha_control_plane)

        fee = MANAGED_OPENSHIFT_WORKER_FEES.get(resolved)
        if fee is not None and resolved not in self._providers:
            # Licence is folded into the per-worker service fee
            model = replace(
                model,
                provider=resolved,
                licenses=LicensePricing.zeroed(),
                compute=replace(model.compute, openshift_service_fee_per_worker_hour=fee),
            )
        return model

    def get_regions(self, provider: Union[CloudProvider, str]) -> List[RegionInfo]:
        return list(self.get_provider(provider).get_regions())

    def _coerce_provider(self, provider: Union[CloudProvider, str]) -> CloudProvider:
        if isinstance(provider, CloudProvider):
            return provider
        try:
            return CloudProvider(provider)
        except ValueError as error:
            raise PricingRegistryError(f"Unknown cloud provider: {provider}") from error

    # Distributions

    def distributions(self) -> List[Distribution]:
        return list(Distribution)

    def is_distribution_supported(self, distribution: Union[Distribution, str]) -> bool:
        try:
            Distribution(distribution)
        except ValueError:
            return False
        return True

    def get_licensing(self, distribution: Union[Distribution, str]) -> DistributionLicensing:
        """
        Resolve the licensing strategy for a distribution.

        Resolution order: direct match, cloud variant to its base distribution, managed
        OpenShift, then managed Kubernetes with no extra licence. Never raises: a name that
        is not a known distribution gets a zero-cost strategy and a warning.
        """
        try:
            resolved = Distribution(distribution)
        except ValueError:
            logger.warning("Unknown distribution '%s', licensing cost set to zero", distribution)
            return UnlicensedDistribution(str(distribution))

        strategy = self._licensing.get(resolved)
        if strategy is None:
            strategy = self._licensing.get(base_distribution(resolved))
        if strategy is None:
            strategy = self._managed_openshift.get(resolved)
        if strategy is None:
            strategy = self._managed_kubernetes.get(resolved)
        if strategy is None:
            strategy = ManagedK8sLicensing(resolved, distribution_provider(resolved))
        return strategy

    def calculate_licensing_cost(
        self,
        distribution: Union[Distribution, str],
        licensing_input: LicensingInput,
    ) -> LicensingCost:
        return self.get_licensing(distribution).calculate(licensing_input)


def build_default_registry() -> PricingRegistry:
    """Construct the registry with every built-in provider and distribution strategy."""
    licensing = {
        Distribution.OPENSHIFT: OpenShiftLicensing(),
        Distribution.KUBERNETES: KubernetesLicensing(),
        Distribution.RANCHER: RancherLicensing(),
        Distribution.RKE2: Rke2Licensing(),
        Distribution.K3S: K3sLicensing(),
        Distribution.MICROK8S: MicroK8sLicensing(),
        Distribution.CHARMED: CharmedLicensing(),
        Distribution.TANZU: TanzuLicensing(),
    }
    managed_openshift = {
        distribution: OpenShiftLicensing(managed=True, provider=provider)
        for distribution, provider in MANAGED_OPENSHIFT_DISTRIBUTIONS.items()
    }
    managed_kubernetes = {
        distribution: ManagedK8sLicensing(distribution, distribution_provider(distribution))
        for distribution in Distribution
        if distribution not in licensing
        and base_distribution(distribution) not in licensing
        and distribution not in managed_openshift
    }

    registry = PricingRegistry(
        providers=build_provider_strategies(),
        licensing=licensing,
        managed_openshift=managed_openshift,
        managed_kubernetes=managed_kubernetes,
    )
    logger.info(
        "Pricing registry built: %d providers, %d licensing strategies",
        len(registry.providers()),
        len(licensing) + len(managed_openshift) + len(managed_kubernetes),
    )
    return registry


_registry: Optional[PricingRegistry] = None
_registry_lock = threading.Lock()


def get_pricing_registry() -> PricingRegistry:
    """Get or create the process-wide default registry."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = build_default_registry()
    return _registry
