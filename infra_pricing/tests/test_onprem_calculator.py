"""
Tests for the on-premises cost calculator.
"""

import pytest
from decimal import Decimal
from infra_pricing.domain.enums import Distribution
from infra_pricing.domain.money import quantize_money
from infra_pricing.domain.onprem_models import HardwareCosts, LaborCosts, OnPremPricing
from infra_pricing.services.onprem_calculator import OnPremCostCalculator


@pytest.fixture
def calculator():
    """Calculator with default assumptions."""
    return OnPremCostCalculator()


def test_ten_servers_amortised_monthly(calculator):
    """10 x $15,000 over 4 years with 10% yearly maintenance is $4,375/month."""
    assert calculator.monthly_hardware_cost(10) == Decimal('4375')
    assert calculator.amortized_monthly(Decimal('150000')) == Decimal('4375')


def test_hardware_line_items(calculator):
    items = {item.description: item for item in calculator.hardware_line_items(40, 160, 1)}
    assert items['Servers'].quantity == 1
    assert items['CPU Cores'].total == Decimal('8000')
    assert items['RAM'].total == Decimal('2400')
    assert items['SSD Storage'].total == Decimal('200')
    assert items['Network Switches'].quantity == 1
    assert items['Load Balancers'].total == 0
    assert calculator.hardware_total_cost(40, 160, 1) == Decimal('30600')


def test_server_count_packs_cores(calculator):
    assert calculator.server_count(64) == 1
    assert calculator.server_count(65) == 2


def test_data_center_monthly(calculator):
    """Rack units, power scaled by PUE, and cooling as a share of power."""
    assert calculator.data_center_monthly(1) == Decimal('298.112')
    assert calculator.data_center_monthly(0) == 0


def test_labor_scales_with_nodes(calculator):
    """One engineer per 50 nodes, at least one of each role."""
    assert calculator.labor_monthly(10) == Decimal('30000')
    assert calculator.labor_monthly(100) == 2 * 12000 + 8000 + 10000
    assert calculator.labor_monthly(10, has_production=False) == Decimal('20000')


def test_labor_without_dba():
    pricing = OnPremPricing(labor=LaborCosts(include_dba=False))
    assert OnPremCostCalculator(pricing).labor_monthly(10) == Decimal('20000')


def test_license_monthly(calculator):
    assert quantize_money(calculator.license_monthly(Distribution.OPENSHIFT, 10)) == Decimal('2083.33')
    assert calculator.license_monthly(Distribution.K3S, 10) == 0
    # Cloud variants use the base distribution's rate
    assert calculator.license_monthly(Distribution.RANCHER_EKS, 12) == Decimal('1000')


def test_tanzu_license_uses_cores(calculator):
    assert calculator.license_monthly(Distribution.TANZU, 2, cores=16) == Decimal('2000')
    assert calculator.license_monthly(Distribution.TANZU, 2) == Decimal('2000')


def test_unknown_distribution_licence_is_zero(calculator):
    assert calculator.license_monthly('NotADistro', 10) == 0


def test_calculate_combines_categories(calculator):
    breakdown = calculator.calculate(Distribution.OPENSHIFT, 10, 40, 160, 1)
    assert breakdown.is_calculated
    assert breakdown.hardware_monthly == Decimal('892.5')
    assert breakdown.data_center_monthly == Decimal('298.112')
    assert breakdown.labor_monthly == Decimal('30000')
    assert breakdown.monthly_total == (
        breakdown.hardware_monthly + breakdown.data_center_monthly
        + breakdown.labor_monthly + breakdown.license_monthly
    )


def test_calculate_without_pricing(calculator):
    breakdown = calculator.calculate(Distribution.OPENSHIFT, 10, 40, 160, 1, include_pricing=False)
    assert not breakdown.is_calculated
    assert breakdown.to_dict() == {'is_calculated': False}


def test_custom_hardware_assumptions():
    pricing = OnPremPricing(hardware=HardwareCosts(server_cost=Decimal('20000')), hardware_refresh_years=5)
    calculator = OnPremCostCalculator(pricing)
    assert calculator.monthly_hardware_cost(6) == Decimal('120000') / 60 + Decimal('1000')


def test_refresh_years_must_be_positive():
    with pytest.raises(ValueError):
        OnPremPricing(hardware_refresh_years=0)


def test_pricing_from_dict():
    pricing = OnPremPricing.from_dict({
        'hardware': {'server_cost': 12000},
        'labor': {'include_dba': False},
        'hardware_refresh_years': 3,
    })
    assert pricing.hardware.server_cost == Decimal('12000')
    assert pricing.hardware.per_gb_ram == Decimal('15')
    assert pricing.labor.include_dba is False
    assert pricing.hardware_refresh_years == 3


def test_pricing_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        OnPremPricing.from_dict({'hardware': {'gold_plating': 1}})
