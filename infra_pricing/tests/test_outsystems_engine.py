"""
Tests for the OutSystems pricing engine.
"""

import pytest
from decimal import Decimal
from infra_pricing.domain.discount import Discount, DiscountScope
from infra_pricing.domain.outsystems_models import (
    OutSystemsCloudProvider,
    OutSystemsDeployment,
    OutSystemsDeploymentConfig,
    OutSystemsEdition,
    OutSystemsPlatform,
    OutSystemsRegion,
    OutSystemsSupportTier,
)
from infra_pricing.services.outsystems_engine import OutSystemsPricingEngine, OutSystemsPricingError


@pytest.fixture
def engine():
    """Engine with the default price list."""
    return OutSystemsPricingEngine()


def test_standard_320_aos_needs_two_packs(engine):
    """170 AOs over the 150 included: two packs of 150."""
    assert engine.additional_ao_packs(320, 150) == 2

    result = engine.calculate(OutSystemsDeploymentConfig(total_aos=320))
    assert result.ao_pack_count == 2
    assert result.additional_ao_cost == Decimal('36000')
    assert result.total_per_year == Decimal('36300') + Decimal('36000')


def test_included_capacity_costs_only_edition(engine):
    result = engine.calculate(OutSystemsDeploymentConfig())
    assert result.total_per_year == Decimal('36300')
    assert len(result.line_items) == 1
    assert result.warnings == []


def test_enterprise_users(engine):
    config = OutSystemsDeploymentConfig(
        edition=OutSystemsEdition.ENTERPRISE,
        total_aos=450,
        internal_users=600,
        external_users=25_000,
    )
    result = engine.calculate(config)
    assert result.edition_cost == Decimal('72600')
    assert result.ao_pack_count == 0
    assert result.user_cost == Decimal('6000') + 3 * Decimal('12000')


def test_cloud_environments_and_add_ons(engine):
    config = OutSystemsDeploymentConfig(
        production_environments=2,
        non_production_environments=5,
        include_high_availability=True,
        include_disaster_recovery=True,
    )
    result = engine.calculate(config)
    assert result.deployment_cost == (
        Decimal('12000') + 2 * Decimal('6000') + Decimal('24000') + Decimal('18000')
    )


def test_self_managed_deployment(engine):
    config = OutSystemsDeploymentConfig(
        deployment=OutSystemsDeployment.SELF_MANAGED,
        production_environments=2,
        non_production_environments=2,
        front_end_servers=2,
    )
    result = engine.calculate(config)
    assert result.deployment_cost == Decimal('48000') + 4 * Decimal('9600') + 2 * Decimal('4800')


def test_self_managed_ha_is_warned_dr_billed_per_pack(engine):
    """Self-managed DR is an add-on per AO pack; HA stays cloud-only."""
    config = OutSystemsDeploymentConfig(
        deployment=OutSystemsDeployment.SELF_MANAGED,
        include_high_availability=True,
        include_disaster_recovery=True,
    )
    result = engine.calculate(config)
    assert result.deployment_cost == Decimal('48000') + 4 * Decimal('9600')
    assert result.add_on_costs == {'Disaster Recovery': Decimal('12100')}
    assert result.warnings == ['High Availability add-on is only available for OutSystems Cloud']


def test_front_end_servers_on_cloud_warn(engine):
    result = engine.calculate(OutSystemsDeploymentConfig(front_end_servers=3))
    assert result.deployment_cost == 0
    assert len(result.warnings) == 1


def test_support_percent_of_subtotal(engine):
    config = OutSystemsDeploymentConfig(total_aos=320, support_tier=OutSystemsSupportTier.PREMIUM)
    result = engine.calculate(config)
    assert result.support_percent == Decimal('15')
    assert result.support_cost == Decimal('72300') * Decimal('15') / 100
    assert result.total_per_year == result.license_subtotal + result.support_cost


def test_no_production_environment_rejected(engine):
    with pytest.raises(OutSystemsPricingError):
        engine.calculate(OutSystemsDeploymentConfig(production_environments=0))


def test_negative_aos_rejected(engine):
    with pytest.raises(OutSystemsPricingError):
        engine.calculate(OutSystemsDeploymentConfig(total_aos=-1))


def test_result_to_dict(engine):
    data = engine.calculate(OutSystemsDeploymentConfig(total_aos=320)).to_dict()
    assert data['additional_ao_cost'] == 36000.0
    assert data['total_per_month'] == 6025.0
    assert data['total_five_year'] == 361500.0
    assert data['deployment'] == 'Cloud'


# Platforms and users

def test_odc_platform_pricing(engine):
    """ODC: $30,250 base, $18,150 AO packs, $6,050 user packs (1,000 external users each)."""
    config = OutSystemsDeploymentConfig(
        platform=OutSystemsPlatform.ODC,
        total_aos=450,
        internal_users=250,
        external_users=1500,
    )
    result = engine.calculate(config)
    assert result.edition_cost == Decimal('30250')
    assert result.ao_pack_count == 2
    assert result.additional_ao_cost == 2 * Decimal('18150')
    assert result.user_cost == 2 * Decimal('6050') + 2 * Decimal('6050')
    assert result.deployment_cost == 0
    assert result.to_dict()['platform'] == 'ODC'


def test_odc_cannot_be_self_managed(engine):
    config = OutSystemsDeploymentConfig(
        platform=OutSystemsPlatform.ODC,
        deployment=OutSystemsDeployment.SELF_MANAGED,
    )
    with pytest.raises(OutSystemsPricingError):
        engine.calculate(config)


@pytest.mark.parametrize('platform', [OutSystemsPlatform.O11, OutSystemsPlatform.ODC])
def test_unlimited_users_scale_with_ao_packs(engine, platform):
    """Unlimited users: $60,500 per AO pack in use, whatever the user counts."""
    config = OutSystemsDeploymentConfig(
        platform=platform,
        total_aos=300,
        internal_users=5000,
        external_users=100_000,
        use_unlimited_users=True,
    )
    result = engine.calculate(config)
    assert result.total_ao_packs == 2
    assert result.used_unlimited_users
    assert result.user_cost == Decimal('121000')


def test_o11_internal_users_are_tiered(engine):
    """1,150 users, 100 included: 9 packs at $6,000 then 2 packs at $4,800."""
    result = engine.calculate(OutSystemsDeploymentConfig(internal_users=1150))
    assert result.user_cost == 9 * Decimal('6000') + 2 * Decimal('4800')


def test_o11_external_users_are_tiered(engine):
    """60,000 sessions: 5 packs in the first band, 1 in the second."""
    result = engine.calculate(OutSystemsDeploymentConfig(external_users=60_000))
    assert result.user_cost == 5 * Decimal('12000') + Decimal('9600')


# Add-ons

def test_o11_cloud_add_ons_per_ao_pack(engine):
    """450 AOs is 3 packs; Sentry replaces the HA charge."""
    config = OutSystemsDeploymentConfig(
        total_aos=450,
        include_24x7_premium_support=True,
        include_sentry=True,
        include_high_availability=True,
        non_production_environment_quantity=2,
        load_test_environment_quantity=1,
        environment_pack_quantity=1,
        log_streaming_quantity=2,
        database_replica_quantity=1,
    )
    result = engine.calculate(config)
    assert result.add_on_costs == {
        '24x7 Premium Support': Decimal('10890'),
        'Sentry (includes HA)': Decimal('72600'),
        'Non-production environment (x2)': Decimal('21780'),
        'Load test environment (x1)': Decimal('18150'),
        'Environment pack (x1)': Decimal('29040'),
        'Log streaming (x2)': Decimal('14520'),
        'Database replica (x1)': Decimal('96800'),
    }
    assert result.deployment_cost == 0
    assert result.warnings == ['Sentry already includes High Availability; the HA add-on is not billed']
    assert result.total_per_year == result.license_subtotal + result.add_ons_subtotal


def test_self_managed_skips_cloud_only_add_ons(engine):
    config = OutSystemsDeploymentConfig(
        deployment=OutSystemsDeployment.SELF_MANAGED,
        load_test_environment_quantity=1,
        log_streaming_quantity=1,
        database_replica_quantity=1,
        environment_pack_quantity=1,
    )
    result = engine.calculate(config)
    assert result.add_on_costs == {'Environment pack (x1)': Decimal('9680')}
    assert len(result.warnings) == 3


def test_odc_add_ons(engine):
    config = OutSystemsDeploymentConfig(
        platform=OutSystemsPlatform.ODC,
        total_aos=300,
        include_high_availability=True,
        include_private_gateway=True,
        non_production_environment_quantity=1,
        environment_pack_quantity=1,
    )
    result = engine.calculate(config)
    assert result.add_on_costs == {
        'High Availability': 2 * Decimal('12100'),
        'Non-production runtime (x1)': 2 * Decimal('3630'),
        'Private Gateway': 2 * Decimal('1210'),
    }
    assert result.warnings == ['Environment pack add-on is not offered on OutSystems Developer Cloud']


def test_appshield_tiered_per_user(engine):
    """1,000 users at $16.50, 9,000 at $12.10, the rest at $6.05."""
    assert engine.appshield_cost(1000) == Decimal('16500')
    assert engine.appshield_cost(10_500) == Decimal('16500') + Decimal('108900') + Decimal('3025')

    result = engine.calculate(OutSystemsDeploymentConfig(
        internal_users=100, external_users=1400, include_appshield=True,
    ))
    assert result.appshield_user_volume == 1500
    assert result.add_on_costs['AppShield'] == Decimal('16500') + 500 * Decimal('12.10')


def test_appshield_with_unlimited_users_uses_default_volume(engine):
    result = engine.calculate(OutSystemsDeploymentConfig(use_unlimited_users=True, include_appshield=True))
    assert result.appshield_user_volume == 10_000
    assert result.add_on_costs['AppShield'] == Decimal('125400')


# Services and infrastructure

def test_services_priced_by_region(engine):
    def services(region):
        return engine.calculate(OutSystemsDeploymentConfig(
            region=region, essential_success_plans=1, expert_days=3, public_sessions=2,
        ))

    americas = services(OutSystemsRegion.AMERICAS)
    assert americas.service_costs == {
        'Essential Success Plan (x1)': Decimal('30250'),
        'Public session (x2)': Decimal('1440'),
        'Expert day (x3)': Decimal('7920'),
    }
    assert services(OutSystemsRegion.AFRICA).services_subtotal < americas.services_subtotal


def test_self_managed_servers_on_aws(engine):
    """4 environments x 2 servers of m5.xlarge at $0.192 for 730 hours a month."""
    config = OutSystemsDeploymentConfig(
        deployment=OutSystemsDeployment.SELF_MANAGED,
        cloud_provider=OutSystemsCloudProvider.AWS,
        instance_type='m5.xlarge',
    )
    result = engine.calculate(config)
    assert result.vm_count == 8
    assert result.monthly_vm_cost == Decimal('0.192') * 730 * 8
    assert result.infrastructure_subtotal == result.monthly_vm_cost * 12
    assert 'm5.xlarge' in result.vm_details


def test_self_managed_servers_default_azure_size(engine):
    config = OutSystemsDeploymentConfig(
        deployment=OutSystemsDeployment.SELF_MANAGED,
        cloud_provider=OutSystemsCloudProvider.AZURE,
        servers_per_environment=1,
    )
    result = engine.calculate(config)
    assert result.monthly_vm_cost == Decimal('0.169') * 730 * 4


def test_unknown_instance_type_rejected(engine):
    config = OutSystemsDeploymentConfig(
        deployment=OutSystemsDeployment.SELF_MANAGED,
        cloud_provider=OutSystemsCloudProvider.AWS,
        instance_type='t2.nano',
    )
    with pytest.raises(OutSystemsPricingError):
        engine.calculate(config)


def test_cloud_deployment_has_no_server_cost(engine):
    result = engine.calculate(OutSystemsDeploymentConfig(cloud_provider=OutSystemsCloudProvider.AWS))
    assert result.infrastructure_subtotal == 0
    assert result.warnings == ['Cloud server costs apply only to self-managed O11 installs']


# Discounts

def test_fixed_discount_capped_at_license_subtotal(engine):
    discount = Discount.fixed_amount(100_000, DiscountScope.LICENSE_ONLY)
    result = engine.calculate(OutSystemsDeploymentConfig(discount=discount, expert_days=1))
    assert result.discount_amount == Decimal('36300')
    assert result.total_per_year == Decimal('2640')
    assert result.discount_description == '$100,000 discount on LicenseOnly'


def test_percentage_discount_on_services(engine):
    discount = Discount.percentage(10, DiscountScope.SERVICES_ONLY, notes='partner')
    result = engine.calculate(OutSystemsDeploymentConfig(discount=discount, premier_success_plans=1))
    assert result.discount_amount == Decimal('6050')
    assert result.discount_description == '10% discount on ServicesOnly (partner)'
    assert result.to_dict()['discount_amount'] == 6050.0


def test_discount_excludes_server_cost(engine):
    config = OutSystemsDeploymentConfig(
        deployment=OutSystemsDeployment.SELF_MANAGED,
        cloud_provider=OutSystemsCloudProvider.AWS,
        discount=Discount.percentage(100),
    )
    result = engine.calculate(config)
    assert result.total_per_year == result.infrastructure_subtotal
