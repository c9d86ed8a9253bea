"""
Tests for distribution licensing strategies.
"""

import pytest
from decimal import Decimal
from infra_pricing.domain.enums import CloudProvider, Distribution, LicensingModel, SupportTier
from infra_pricing.domain.licensing_models import LicensingInput
from infra_pricing.domain.money import quantize_money
from infra_pricing.pricing.licensing import (
    CharmedEdition,
    CharmedLicensing,
    K3sLicensing,
    KubernetesLicensing,
    ManagedK8sLicensing,
    OpenShiftLicensing,
    RancherEdition,
    RancherLicensing,
    TanzuEdition,
    TanzuLicensing,
    base_distribution,
    has_license_cost,
    multi_year_discount,
)


def test_openshift_20_nodes_annual_and_monthly():
    """20 nodes at $2,500/node/year."""
    openshift = OpenShiftLicensing()
    assert openshift.annual_cost(20) == Decimal('50000')
    assert quantize_money(openshift.monthly_cost(20)) == Decimal('4166.67')

    cost = openshift.calculate(LicensingInput(node_count=20))
    assert cost.total_per_year == Decimal('50000')
    assert cost.licensing_model == LicensingModel.PER_NODE
    assert cost.basis == 'Per-node: $2,500/node/year'


def test_open_source_distributions_are_free():
    for strategy in (K3sLicensing(), KubernetesLicensing(), RancherLicensing(RancherEdition.COMMUNITY)):
        assert strategy.annual_cost(50) == 0


def test_tanzu_per_core_with_default_cores():
    """8 cores per node when cores are not supplied."""
    tanzu = TanzuLicensing()
    assert tanzu.annual_cost(2) == Decimal('24000')
    assert tanzu.annual_cost(2, core_count=10) == Decimal('15000')


def test_tanzu_contract_minimum_cores():
    """Quotes never go below 16 cores."""
    cost = TanzuLicensing().calculate(LicensingInput(node_count=1, total_cores=8))
    assert cost.base_license_cost == Decimal('24000')


def test_tanzu_edition_rates():
    assert TanzuLicensing(TanzuEdition.ENTERPRISE).license_cost_per_core_year() == Decimal('2500')


def test_multi_year_discount_table():
    assert multi_year_discount(1) == 0
    assert multi_year_discount(2) == Decimal('0.05')
    assert multi_year_discount(3) == Decimal('0.10')
    assert multi_year_discount(5) == Decimal('0.15')


def test_multi_year_discount_applied():
    cost = OpenShiftLicensing().calculate(LicensingInput(node_count=10, contract_years=3))
    assert cost.base_license_cost == Decimal('22500')
    assert cost.discount_percent == Decimal('10')


def test_premium_support_uplift():
    """Premium is 1.3x base; the uplift is reported as support cost."""
    cost = OpenShiftLicensing().calculate(LicensingInput(node_count=10, support_tier=SupportTier.PREMIUM))
    assert cost.base_license_cost == Decimal('25000')
    assert cost.support_cost == Decimal('7500')
    assert cost.total_per_year == Decimal('32500')


def test_enterprise_support_adds_tam_fee():
    cost = OpenShiftLicensing().calculate(
        LicensingInput(node_count=10, support_tier=SupportTier.ENTERPRISE)
    )
    assert cost.support_cost == Decimal('25000') * Decimal('0.5') + Decimal('50000')


def test_unknown_support_tier_has_no_uplift():
    cost = OpenShiftLicensing().calculate(
        LicensingInput(node_count=10, support_tier=SupportTier.COMMUNITY)
    )
    assert cost.support_cost == 0


def test_managed_openshift_worker_fee():
    """ROSA bills $0.171 per worker hour, licence included."""
    rosa = OpenShiftLicensing(managed=True, provider=CloudProvider.ROSA)
    cost = rosa.calculate(LicensingInput(node_count=12, master_nodes=3, infra_nodes=2))
    assert cost.base_license_cost == 7 * Decimal('0.171') * 8760
    assert cost.licensing_model == LicensingModel.USAGE_BASED
    assert rosa.display_name == 'OpenShift (ROSA)'


def test_managed_openshift_provider_alias():
    """Passing the underlying cloud resolves to its managed OpenShift offering."""
    aro = OpenShiftLicensing(managed=True, provider=CloudProvider.AZURE)
    assert aro.worker_node_fee_per_hour() == Decimal('0.21')


def test_kubernetes_third_party_support():
    cost = KubernetesLicensing().calculate(LicensingInput(node_count=4, support_tier=SupportTier.BASIC))
    assert cost.base_license_cost == 0
    assert cost.support_cost == Decimal('2000')


def test_managed_kubernetes_control_plane_fee():
    eks = ManagedK8sLicensing(Distribution.EKS, CloudProvider.AWS)
    aks = ManagedK8sLicensing(Distribution.AKS, CloudProvider.AZURE)
    assert eks.calculate(LicensingInput(node_count=3)).total_per_year == Decimal('0.10') * 8760
    assert aks.calculate(LicensingInput(node_count=3)).total_per_year == 0


def test_charmed_free_edition():
    assert CharmedLicensing(CharmedEdition.FREE).calculate(LicensingInput(node_count=5)).total_per_year == 0
    assert CharmedLicensing().annual_cost(5) == Decimal('2500')


def test_per_node_cost_reported():
    cost = RancherLicensing().calculate(LicensingInput(node_count=4))
    assert cost.per_node_per_year == Decimal('1000')


def test_variant_maps_to_base_distribution():
    assert base_distribution(Distribution.RANCHER_EKS) == Distribution.RANCHER
    assert base_distribution(Distribution.TANZU_GCP) == Distribution.TANZU
    assert base_distribution(Distribution.EKS) == Distribution.EKS


def test_has_license_cost():
    assert has_license_cost(Distribution.OPENSHIFT)
    assert has_license_cost(Distribution.TANZU_AWS)
    assert not has_license_cost(Distribution.K3S)
    assert not has_license_cost(Distribution.EKS)


def test_support_tiers_listed():
    tiers = OpenShiftLicensing().support_tiers()
    assert [tier.tier for tier in tiers] == [SupportTier.STANDARD, SupportTier.PREMIUM, SupportTier.ENTERPRISE]
    assert tiers[-1].includes_tam


@pytest.mark.parametrize('years', [1, 2, 3, 4])
def test_licensing_cost_monthly_is_twelfth_of_yearly(years):
    cost = OpenShiftLicensing().calculate(LicensingInput(node_count=7, contract_years=years))
    assert quantize_money(cost.total_per_month * 12) == quantize_money(cost.total_per_year)
