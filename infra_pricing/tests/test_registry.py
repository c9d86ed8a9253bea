"""
Tests for provider pricing strategies and the pricing registry.
"""

import pytest
from decimal import Decimal
from infra_pricing.core.config import config
from infra_pricing.domain.enums import CloudProvider, Distribution, SupportLevel
from infra_pricing.domain.licensing_models import LicensingInput
from infra_pricing.pricing.licensing import (
    ManagedK8sLicensing,
    OpenShiftLicensing,
    RancherLicensing,
    UnlicensedDistribution,
)
from infra_pricing.pricing.rate_tables import ON_PREM_REGION_DISPLAY_NAME
from infra_pricing.pricing.registry import PricingRegistryError


def test_default_region_used_when_omitted(registry):
    """Omitting the region prices the provider's default region."""
    pricing = registry.get_pricing(CloudProvider.AWS)
    assert pricing.region == 'us-east-1'
    assert pricing.region_display_name == 'US East (N. Virginia)'
    assert pricing.compute.cpu_per_hour == Decimal('0.048')


def test_provider_accepts_string_name(registry):
    pricing = registry.get_pricing('Azure', 'eastus')
    assert pricing.provider == CloudProvider.AZURE


def test_regional_multiplier_applied_to_compute_and_storage(registry):
    """eu-west-1 is priced 5% above the base region."""
    base = registry.get_pricing(CloudProvider.AWS, 'us-east-1')
    ireland = registry.get_pricing(CloudProvider.AWS, 'eu-west-1')

    assert ireland.compute.cpu_per_hour == base.compute.cpu_per_hour * Decimal('1.05')
    assert ireland.storage.ssd_per_gb_month == base.storage.ssd_per_gb_month * Decimal('1.05')
    assert ireland.compute.instance_type_prices['m5.xlarge'] == Decimal('0.192') * Decimal('1.05')
    # Network and service fees are not regional
    assert ireland.network == base.network
    assert ireland.compute.managed_control_plane_per_hour == base.compute.managed_control_plane_per_hour


def test_unlisted_region_uses_base_rates(registry):
    """Regions without a multiplier keep base rates and echo the code as display name."""
    pricing = registry.get_pricing(CloudProvider.AWS, 'xx-nowhere-1')
    assert pricing.compute.cpu_per_hour == Decimal('0.048')
    assert pricing.region_display_name == 'xx-nowhere-1'


def test_home_market_premium(registry):
    """Alibaba charges more outside its cn- regions."""
    home = registry.get_pricing(CloudProvider.ALIBABA, 'cn-hangzhou')
    abroad = registry.get_pricing(CloudProvider.ALIBABA, 'eu-central-1')
    assert abroad.compute.cpu_per_hour == home.compute.cpu_per_hour * Decimal('1.1')


def test_ha_control_plane_fee(registry):
    """AKS has a free control plane unless the uptime SLA is requested."""
    free = registry.get_pricing(CloudProvider.AZURE, 'eastus')
    paid = registry.get_pricing(CloudProvider.AZURE, 'eastus', ha_control_plane=True)
    assert free.compute.managed_control_plane_per_hour == 0
    assert paid.compute.managed_control_plane_per_hour == Decimal('0.10')


def test_managed_openshift_uses_underlying_cloud_with_worker_fee(registry):
    """ROSA prices on AWS rates, with the licence folded into the worker fee."""
    aws = registry.get_pricing(CloudProvider.AWS, 'us-east-1')
    rosa = registry.get_pricing(CloudProvider.ROSA, 'us-east-1')

    assert rosa.provider == CloudProvider.ROSA
    assert rosa.compute.cpu_per_hour == aws.compute.cpu_per_hour
    assert rosa.compute.openshift_service_fee_per_worker_hour == Decimal('0.171')
    assert rosa.licenses.openshift_per_node_year == 0


def test_aro_worker_fee(registry):
    aro = registry.get_pricing(CloudProvider.ARO, 'eastus')
    assert aro.compute.openshift_service_fee_per_worker_hour == Decimal('0.21')


def test_on_prem_pricing_model(registry):
    pricing = registry.get_pricing(CloudProvider.ON_PREM)
    assert pricing.region_display_name == ON_PREM_REGION_DISPLAY_NAME
    assert pricing.compute.cpu_per_hour == 0


def test_unknown_provider_raises(registry):
    with pytest.raises(PricingRegistryError):
        registry.get_pricing('NotACloud')


def test_provider_without_rate_card_raises(registry):
    """MANUAL is a valid provider name with nothing registered for it."""
    with pytest.raises(PricingRegistryError):
        registry.get_pricing(CloudProvider.MANUAL)
    assert not registry.is_provider_supported(CloudProvider.MANUAL)


def test_pricing_models_are_independent(registry):
    """Each query returns a fresh frozen model."""
    first = registry.get_pricing(CloudProvider.AWS, 'eu-west-1')
    second = registry.get_pricing(CloudProvider.AWS, 'eu-west-1')
    assert first == second
    with pytest.raises(AttributeError):
        first.region = 'us-east-1'


def test_regions_listed(registry):
    regions = registry.get_regions(CloudProvider.AWS)
    codes = [region.code for region in regions]
    assert 'us-east-1' in codes
    assert any(region.is_preferred for region in regions)


def test_providers_include_managed_openshift(registry):
    providers = registry.providers()
    assert CloudProvider.AWS in providers
    assert CloudProvider.ROSA in providers
    assert CloudProvider.MANUAL not in providers


def test_licensing_resolution(registry):
    """Direct, variant, managed OpenShift and managed Kubernetes lookups."""
    assert isinstance(registry.get_licensing(Distribution.OPENSHIFT), OpenShiftLicensing)
    assert isinstance(registry.get_licensing(Distribution.RANCHER_EKS), RancherLicensing)

    rosa = registry.get_licensing(Distribution.OPENSHIFT_ROSA)
    assert isinstance(rosa, OpenShiftLicensing)
    assert rosa.managed

    eks = registry.get_licensing(Distribution.EKS)
    assert isinstance(eks, ManagedK8sLicensing)
    assert eks.display_name == 'Amazon EKS'


def test_unknown_distribution_is_free(registry):
    """Unknown names never raise: zero cost, flagged in the basis."""
    strategy = registry.get_licensing('SomeNewDistro')
    assert isinstance(strategy, UnlicensedDistribution)
    assert strategy.annual_cost(10) == 0
    assert not registry.is_distribution_supported('SomeNewDistro')
    assert registry.is_distribution_supported('OpenShift')


def test_support_percent_of_spend(registry):
    pricing = registry.get_pricing(CloudProvider.AWS)
    assert pricing.support.get_support_cost(Decimal('1000'), SupportLevel.BUSINESS) == Decimal('100')
    assert pricing.support.get_support_cost(Decimal('1000'), SupportLevel.NONE) == 0


def test_calculate_monthly_cost_uses_730_hours(registry):
    pricing = registry.get_pricing(CloudProvider.GCP, 'us-central1')
    monthly = pricing.calculate_monthly_cost(4, 16, 100)
    expected = (
        (4 * Decimal('0.0335') + 16 * Decimal('0.0045')) * config.HOURS_PER_MONTH
        + 100 * Decimal('0.17')
        + Decimal('0.10') * config.HOURS_PER_MONTH
    )
    assert monthly == expected


def test_unknown_instance_type_estimated_from_vcpu_rate(registry):
    pricing = registry.get_pricing(CloudProvider.AWS)
    assert pricing.get_instance_price('m5.xlarge') == Decimal('0.192')
    assert pricing.get_instance_price('z9.mystery') == Decimal('0.048') * 4


def test_network_monthly_cost(registry):
    pricing = registry.get_pricing(CloudProvider.AWS)
    monthly = pricing.calculate_network_monthly(2, 500, public_ips=4)
    assert monthly == (
        2 * Decimal('0.0225') * 730 + 500 * Decimal('0.09') + 4 * Decimal('0.005') * 730
    )


def test_region_support_is_case_insensitive(registry):
    aws = registry.get_provider(CloudProvider.AWS)
    assert aws.is_region_supported('US-EAST-1')
    assert not aws.is_region_supported('mars-north-1')


def test_calculate_licensing_cost_for_cloud_variant(registry):
    """Rancher on EKS is licensed like self-managed Rancher."""
    cost = registry.calculate_licensing_cost(Distribution.RANCHER_EKS, LicensingInput(node_count=10))
    assert cost.base_license_cost == Decimal('10000')
