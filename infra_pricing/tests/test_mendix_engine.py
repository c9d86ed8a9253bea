"""
Tests for the Mendix pricing engine.
"""

import pytest
from decimal import Decimal
from infra_pricing.domain.discount import Discount, DiscountScope
from infra_pricing.domain.mendix_models import (
    MendixCloudType,
    MendixDeploymentCategory,
    MendixDeploymentConfig,
    MendixOtherDeployment,
    MendixPrivateCloudProvider,
    MendixResourcePackSize,
    MendixResourcePackTier,
)
from infra_pricing.services.mendix_engine import MendixPricingEngine, MendixPricingError


@pytest.fixture
def engine():
    """Engine with the default price list."""
    return MendixPricingEngine()


def k8s_config(environments, **overrides):
    values = dict(
        category=MendixDeploymentCategory.PRIVATE_CLOUD,
        private_cloud_provider=MendixPrivateCloudProvider.EKS,
        number_of_environments=environments,
        internal_users=0,
        apply_volume_discount=False,
    )
    values.update(overrides)
    return MendixDeploymentConfig(**values)


def test_k8s_sixty_environments(engine):
    """3 included, 47 @ $552, 10 @ $408."""
    assert engine.k8s_environment_cost(60) == Decimal('30024')

    result = engine.calculate(k8s_config(60))
    assert result.environment_cost == Decimal('30024')
    assert result.deployment_fee_cost == Decimal('6360')
    assert result.environment_details == '3 included + 47 @ $552/env + 10 @ $408/env'


def test_k8s_included_environments_cost_nothing(engine):
    result = engine.calculate(k8s_config(3))
    assert result.environment_cost == 0
    assert result.environment_details == '3 environments (3 included in base)'


def test_k8s_free_band(engine):
    details = engine.k8s_environment_details(160)
    assert details.endswith('10 free')
    assert engine.k8s_environment_cost(160) == engine.k8s_environment_cost(150)


def test_unsupported_k8s_provider_warns(engine):
    result = engine.calculate(k8s_config(3, private_cloud_provider=MendixPrivateCloudProvider.K3S))
    assert result.deployment_type_name.endswith('Manual Setup')
    assert result.warnings == ('K3s is not an officially supported Mendix platform',)


def test_mendix_on_azure_additional_environments(engine):
    result = engine.calculate(k8s_config(5, private_cloud_provider=MendixPrivateCloudProvider.AZURE))
    assert result.deployment_type_name == 'Mendix on Azure'
    assert result.deployment_fee_cost == Decimal('6612')
    assert result.environment_cost == Decimal('1444.80')
    assert result.total_cloud_tokens == 28


def test_saas_resource_packs(engine):
    config = MendixDeploymentConfig(
        category=MendixDeploymentCategory.CLOUD,
        resource_pack_tier=MendixResourcePackTier.STANDARD,
        resource_pack_size=MendixResourcePackSize.M,
        resource_pack_quantity=2,
        internal_users=0,
        apply_volume_discount=False,
    )
    result = engine.calculate(config)
    assert result.deployment_fee_cost == Decimal('4128')
    assert result.total_cloud_tokens == 80
    assert result.resource_pack_details.startswith('2x Standard M')


def test_saas_pack_not_offered_in_tier(engine):
    config = MendixDeploymentConfig(
        category=MendixDeploymentCategory.CLOUD,
        resource_pack_tier=MendixResourcePackTier.PREMIUM,
        resource_pack_size=MendixResourcePackSize.XS,
    )
    with pytest.raises(MendixPricingError):
        engine.calculate(config)


def test_saas_additional_storage_in_100gb_blocks(engine):
    config = MendixDeploymentConfig(
        category=MendixDeploymentCategory.CLOUD,
        additional_file_storage_gb=Decimal('150'),
        additional_database_storage_gb=Decimal('0.5'),
        internal_users=0,
        apply_volume_discount=False,
    )
    result = engine.calculate(config)
    assert result.storage_cost == 2 * Decimal('123') + Decimal('246')


def test_cloud_dedicated(engine):
    config = MendixDeploymentConfig(
        category=MendixDeploymentCategory.CLOUD,
        cloud_type=MendixCloudType.DEDICATED,
        internal_users=0,
        apply_volume_discount=False,
    )
    result = engine.calculate(config)
    assert result.deployment_fee_cost == Decimal('368100')
    assert result.total_per_year == Decimal('65400') + Decimal('368100')


def test_server_per_app(engine):
    config = MendixDeploymentConfig(
        category=MendixDeploymentCategory.OTHER,
        other_deployment=MendixOtherDeployment.SERVER,
        is_unlimited_apps=False,
        number_of_apps=3,
    )
    result = engine.calculate(config)
    assert result.deployment_fee_cost == Decimal('19836')


def test_sap_btp_unlimited(engine):
    config = MendixDeploymentConfig(
        category=MendixDeploymentCategory.OTHER,
        other_deployment=MendixOtherDeployment.SAP_BTP,
    )
    result = engine.calculate(config)
    assert result.deployment_type_name == 'Mendix on SAP BTP'
    assert result.deployment_fee_cost == Decimal('33060')


def test_user_licences_in_blocks(engine):
    assert engine.user_license_cost(250, 0) == 3 * Decimal('40800')
    assert engine.user_license_cost(0, 300_000) == 2 * Decimal('60000')
    assert engine.user_license_cost(0, 0) == 0


def test_volume_discount_on_platform_and_users(engine):
    config = k8s_config(3, internal_users=100, apply_volume_discount=True)
    result = engine.calculate(config)
    assert result.discount_amount == (Decimal('65400') + Decimal('40800')) * Decimal('10') / 100
    assert result.discount_percent == Decimal('10')
    assert result.discount_description == '10% discount on LicenseOnly (volume)'


def test_fixed_discount_capped_at_scope_subtotal(engine):
    """A $10,000 add-on discount cannot exceed the $6,360 deployment fee it applies to."""
    discount = Discount.fixed_amount(10_000, DiscountScope.ADD_ONS_ONLY)
    result = engine.calculate(k8s_config(3, discount=discount))
    assert result.add_ons_subtotal == Decimal('6360')
    assert result.discount_amount == Decimal('6360')
    assert result.discount_percent == 0
    assert result.total_per_year == Decimal('65400')


def test_negotiated_discount_replaces_volume_discount(engine):
    discount = Discount.percentage(25, DiscountScope.TOTAL, notes='renewal')
    result = engine.calculate(k8s_config(3, apply_volume_discount=True, discount=discount))
    assert result.discount_percent == Decimal('25')
    assert result.discount_amount == (Decimal('65400') + Decimal('6360')) * Decimal('25') / 100
    assert result.discount_description == '25% discount on Total (renewal)'


def test_genai_add_ons(engine):
    result = engine.calculate(k8s_config(
        3, genai_model_pack_size='M', include_genai_knowledge_base=True, include_customer_enablement=True,
    ))
    assert result.genai_cost == Decimal('3715.20') + Decimal('2476.80')
    assert result.total_cloud_tokens == 72 + 48
    assert result.services_cost == Decimal('45000')


def test_unknown_genai_pack_size(engine):
    with pytest.raises(MendixPricingError):
        engine.calculate(k8s_config(3, genai_model_pack_size='XXL'))


def test_negative_counts_rejected(engine):
    with pytest.raises(MendixPricingError):
        engine.calculate(k8s_config(-1))


def test_recommend_cheapest_fitting_pack(engine):
    pack = engine.recommend_resource_pack(MendixResourcePackTier.STANDARD, 3, 1, 15)
    assert pack.size == MendixResourcePackSize.M
    assert engine.recommend_resource_pack(MendixResourcePackTier.STANDARD, 1000, 1, 1) is None


def test_result_to_dict(engine):
    data = engine.calculate(k8s_config(60)).to_dict()
    assert data['category'] == 'PrivateCloud'
    assert data['environment_cost'] == 30024.0
    assert data['total_per_year'] == 65400.0 + 6360.0 + 30024.0
