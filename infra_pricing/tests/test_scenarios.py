"""
End-to-end pricing scenarios.
Each scenario pins a headline figure that quotes are checked against.
"""

from decimal import Decimal
from infra_pricing.domain.enums import CloudProvider, CostCategory, Distribution
from infra_pricing.domain.licensing_models import LicensingInput
from infra_pricing.domain.mendix_models import (
    MendixDeploymentCategory,
    MendixDeploymentConfig,
    MendixPrivateCloudProvider,
)
from infra_pricing.domain.money import quantize_money
from infra_pricing.domain.outsystems_models import OutSystemsDeploymentConfig
from infra_pricing.pricing.licensing import OpenShiftLicensing
from infra_pricing.services.cost_aggregator import aggregate_costs
from infra_pricing.services.mendix_engine import MendixPricingEngine
from infra_pricing.services.onprem_calculator import OnPremCostCalculator
from infra_pricing.services.outsystems_engine import OutSystemsPricingEngine
from infra_pricing.services.pricing_settings import PricingSettings, format_cost, present_estimate


def test_mendix_sixty_kubernetes_environments():
    """Mendix on Kubernetes, 60 environments: $30,024 per year for environments."""
    config = MendixDeploymentConfig(
        category=MendixDeploymentCategory.PRIVATE_CLOUD,
        private_cloud_provider=MendixPrivateCloudProvider.GENERIC_K8S,
        number_of_environments=60,
    )
    result = MendixPricingEngine().calculate(config)
    assert result.environment_cost == Decimal('30024')
    assert format_cost(result.environment_cost) == '$30,024'


def test_ten_servers_on_prem():
    """10 servers at $15,000, 4-year refresh and 10% maintenance: $4,375 per month."""
    calculator = OnPremCostCalculator()
    monthly = calculator.monthly_hardware_cost(10)
    # 150,000 / 48 + 150,000 * 10% / 12
    assert monthly == Decimal('3125') + Decimal('1250')
    assert format_cost(monthly) == '$4,375'


def test_openshift_twenty_nodes():
    """OpenShift, 20 nodes at $2,500: $50,000 per year, $4,166.67 per month."""
    cost = OpenShiftLicensing().calculate(LicensingInput(node_count=20))
    assert cost.total_per_year == Decimal('50000')
    assert quantize_money(cost.total_per_month) == Decimal('4166.67')


def test_pricing_excluded_from_results():
    """With pricing excluded, costs read N/A."""
    breakdown = OnPremCostCalculator().calculate(
        Distribution.OPENSHIFT, 20, 160, 640, 2, include_pricing=False,
    )
    assert breakdown.to_dict() == {'is_calculated': False}

    estimate = aggregate_costs(CloudProvider.ON_PREM, 'On-Premises Data Center', {
        CostCategory.COMPUTE: Decimal('4375'),
    })
    data = present_estimate(estimate, PricingSettings(include_pricing_in_results=False))
    assert data['monthly_total'] == 'N/A'
    assert data['breakdown'][0]['monthly'] == 'N/A'


def test_pricing_excluded_over_api(client):
    response = client.post('/api/estimates/on-prem', json={
        'distribution': 'OpenShift',
        'environments': {'Prod': {'nodes': 20}},
        'include_pricing_in_results': False,
    })
    assert response.status_code == 200
    assert response.json()['estimate']['yearly_total'] == 'N/A'


def test_outsystems_320_aos():
    """OutSystems Standard, 320 AOs: two extra packs at $18,000."""
    result = OutSystemsPricingEngine().calculate(OutSystemsDeploymentConfig(total_aos=320))
    assert result.additional_ao_cost == Decimal('36000')
    assert format_cost(result.additional_ao_cost) == '$36,000'
