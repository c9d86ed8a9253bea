"""
OutSystems pricing engine.
Covers O11 and ODC subscriptions, add-ons, services and self-managed cloud servers.
"""
import logging
from decimal import Decimal
from typing import Optional

from infra_pricing.core.config import config as app_config
from infra_pricing.domain.cost_models import CostLineItem
from infra_pricing.domain.money import ZERO, HUNDRED
from infra_pricing.domain.outsystems_models import (
    OutSystemsCloudProvider,
    OutSystemsDeployment,
    OutSystemsDeploymentConfig,
    OutSystemsInstanceType,
    OutSystemsPlatform,
    OutSystemsPricingResult,
    OutSystemsPricingSettings,
)
from infra_pricing.pricing.tiered import pack_count, tiered_cost, tiered_pack_cost


logger = logging.getLogger(__name__)

DEFAULT_INSTANCE_TYPES = {
    OutSystemsCloudProvider.AZURE: "F4s_v2",
    OutSystemsCloudProvider.AWS: "m5.xlarge",
}


class OutSystemsPricingError(Exception):
    """Raised when an OutSystems configuration cannot be priced."""
    pass


class OutSystemsPricingEngine:
    """Annual OutSystems cost from platform, capacity, deployment, add-on and service choices."""

    def __init__(self, settings: Optional[OutSystemsPricingSettings] = None):
        self.settings = settings or OutSystemsPricingSettings()

    def calculate(self, config: OutSystemsDeploymentConfig) -> OutSystemsPricingResult:
        """
        Price an OutSystems subscription for one year.

        Support is charged as a percentage of the licence subtotal. Add-ons that scale
        with capacity are billed per AO pack in use, and a discount never reduces the
        cloud server cost of a self-managed install.

        Args:
            config: Platform, edition, capacity, add-ons and services

        Returns:
            OutSystemsPricingResult with per-component annual costs and line items

        Raises:
            OutSystemsPricingError: If a count is negative, there is no production environment,
                ODC is asked for as self-managed or the cloud instance type is unknown
        """
        self._validate(config)
        s = self.settings

        result = OutSystemsPricingResult(
            edition=config.edition,
            deployment=config.deployment,
            platform=config.platform,
            region=config.region,
        )
        result.warnings = config.get_validation_warnings()
        result.total_ao_packs = self.total_ao_packs(config.total_aos)

        if config.platform == OutSystemsPlatform.ODC:
            self._price_odc_license(config, result)
        else:
            self._price_o11_license(config, result)
            if config.deployment == OutSystemsDeployment.SELF_MANAGED:
                result.deployment_cost = self._price_self_managed(config, result)
            else:
                result.deployment_cost = self._price_cloud(config, result)

        percent = s.support_percents[config.support_tier]
        result.support_percent = percent
        result.support_cost = result.license_subtotal * percent / HUNDRED
        if result.support_cost:
            result.line_items.append(CostLineItem(
                f"{config.support_tier.value} support ({percent}%)", Decimal(1), "subscription",
                result.support_cost,
            ))

        self._price_add_ons(config, result)
        self._price_appshield(config, result)
        self._price_services(config, result)
        self._price_cloud_servers(config, result)

        if config.discount is not None:
            result.discount_amount = config.discount.calculate(
                result.license_subtotal + result.support_cost,
                result.add_ons_subtotal,
                result.services_subtotal,
            )
            result.discount_description = config.discount.describe()

        logger.debug(
            "OutSystems %s %s/%s priced at %s/year",
            config.platform.value, config.edition.value, config.deployment.value, result.total_per_year,
        )
        return result

    def additional_ao_packs(self, total_aos: int, included_aos: int) -> int:
        """Packs needed for AOs beyond the edition allowance."""
        return pack_count(total_aos - included_aos, self.settings.ao_pack_size)

    def total_ao_packs(self, total_aos: int) -> int:
        """AO packs in use, never fewer than the one every subscription includes."""
        return max(1, pack_count(total_aos, self.settings.ao_pack_size))

    def _validate(self, config: OutSystemsDeploymentConfig) -> None:
        counts = {
            "total_aos": config.total_aos,
            "internal_users": config.internal_users,
            "external_users": config.external_users,
            "production_environments": config.production_environments,
            "non_production_environments": config.non_production_environments,
            "front_end_servers": config.front_end_servers,
            "non_production_environment_quantity": config.non_production_environment_quantity,
            "load_test_environment_quantity": config.load_test_environment_quantity,
            "environment_pack_quantity": config.environment_pack_quantity,
            "log_streaming_quantity": config.log_streaming_quantity,
            "database_replica_quantity": config.database_replica_quantity,
            "appshield_user_volume": config.appshield_user_volume or 0,
            "essential_success_plans": config.essential_success_plans,
            "premier_success_plans": config.premier_success_plans,
            "dedicated_group_sessions": config.dedicated_group_sessions,
            "public_sessions": config.public_sessions,
            "expert_days": config.expert_days,
            "servers_per_environment": config.servers_per_environment,
        }
        for name, value in counts.items():
            if value < 0:
                raise OutSystemsPricingError(f"{name} must not be negative (got: {value})")
        if config.production_environments < 1:
            raise OutSystemsPricingError("At least one production environment is required")
        if config.platform == OutSystemsPlatform.ODC and not config.is_cloud:
            raise OutSystemsPricingError("OutSystems Developer Cloud is only offered as a cloud service")

    # Licences

    def _price_o11_license(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> None:
        s = self.settings
        edition = s.edition(config.edition)

        result.edition_cost = edition.base_price_per_year
        result.line_items.append(CostLineItem(
            f"OutSystems {config.edition.value} edition", Decimal(1), "subscription",
            edition.base_price_per_year,
            notes=f"Includes {edition.included_aos} AOs and {edition.included_internal_users} internal users",
        ))

        result.ao_pack_count = self.additional_ao_packs(config.total_aos, edition.included_aos)
        result.additional_ao_cost = result.ao_pack_count * s.ao_pack_price
        if result.ao_pack_count:
            result.line_items.append(CostLineItem(
                f"Additional AO packs ({s.ao_pack_size} AOs)", Decimal(result.ao_pack_count), "packs",
                s.ao_pack_price,
            ))

        if config.use_unlimited_users:
            result.user_cost = self._price_unlimited_users(result)
            return

        internal = tiered_pack_cost(
            config.internal_users, edition.included_internal_users, s.o11_internal_user_tiers,
            s.internal_user_pack_size,
        )
        external = tiered_pack_cost(
            config.external_users, 0, s.o11_external_user_tiers, s.external_session_pack_size,
        )
        if internal:
            extra = config.internal_users - edition.included_internal_users
            result.line_items.append(CostLineItem(
                f"Internal users ({extra:,} beyond {edition.included_internal_users} included)",
                Decimal(1), "tiered packs", internal,
            ))
        if external:
            result.line_items.append(CostLineItem(
                f"External users ({config.external_users:,} sessions)", Decimal(1), "tiered packs", external,
            ))
        result.user_cost = internal + external

    def _price_odc_license(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> None:
        s = self.settings

        result.edition_cost = s.odc_base_price
        result.line_items.append(CostLineItem(
            "OutSystems Developer Cloud platform", Decimal(1), "subscription", s.odc_base_price,
            notes=f"Includes {s.odc_included_aos} AOs and {s.odc_included_internal_users} internal users",
        ))

        result.ao_pack_count = self.additional_ao_packs(config.total_aos, s.odc_included_aos)
        result.additional_ao_cost = result.ao_pack_count * s.odc_ao_pack_price
        if result.ao_pack_count:
            result.line_items.append(CostLineItem(
                f"Additional AO packs ({s.ao_pack_size} AOs)", Decimal(result.ao_pack_count), "packs",
                s.odc_ao_pack_price,
            ))

        if config.use_unlimited_users:
            result.user_cost = self._price_unlimited_users(result)
            return

        internal_packs = pack_count(config.internal_users - s.odc_included_internal_users, s.internal_user_pack_size)
        external_packs = pack_count(config.external_users, s.odc_external_user_pack_size)
        if internal_packs:
            result.line_items.append(CostLineItem(
                f"Internal user packs ({s.internal_user_pack_size} users)", Decimal(internal_packs), "packs",
                s.odc_internal_user_pack_price,
            ))
        if external_packs:
            result.line_items.append(CostLineItem(
                f"External user packs ({s.odc_external_user_pack_size:,} users)", Decimal(external_packs),
                "packs", s.odc_external_user_pack_price,
            ))
        result.user_cost = (
            internal_packs * s.odc_internal_user_pack_price + external_packs * s.odc_external_user_pack_price
        )

    def _price_unlimited_users(self, result: OutSystemsPricingResult) -> Decimal:
        # Flat fee per AO pack in use, replacing internal and external user packs
        s = self.settings
        result.used_unlimited_users = True
        item = CostLineItem(
            "Unlimited users", Decimal(result.total_ao_packs), "AO packs", s.unlimited_users_per_ao_pack,
        )
        result.line_items.append(item)
        return item.total

    # Deployment

    def _price_cloud(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> Decimal:
        s = self.settings
        extra_prod = max(0, config.production_environments - s.included_production_environments)
        extra_non_prod = max(0, config.non_production_environments - s.included_non_production_environments)

        items = []
        if extra_prod:
            items.append(CostLineItem(
                "Additional production environments", Decimal(extra_prod), "environments",
                s.additional_production_environment_price,
            ))
        if extra_non_prod:
            items.append(CostLineItem(
                "Additional non-production environments", Decimal(extra_non_prod), "environments",
                s.additional_non_production_environment_price,
            ))
        # Sentry includes HA
        if config.include_high_availability and not config.include_sentry:
            items.append(CostLineItem("High Availability", Decimal(1), "add-on", s.high_availability_price))
        if config.include_disaster_recovery:
            items.append(CostLineItem("Disaster Recovery", Decimal(1), "add-on", s.disaster_recovery_price))

        result.line_items.extend(items)
        return sum((item.total for item in items), ZERO)

    def _price_self_managed(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> Decimal:
        # Cloud-only options are reported as warnings and never billed here
        s = self.settings
        items = [
            CostLineItem("Self-managed platform", Decimal(1), "subscription", s.self_managed_base_price),
            CostLineItem(
                "Self-managed environments", Decimal(config.total_environments), "environments",
                s.self_managed_per_environment_price,
            ),
        ]
        if config.front_end_servers:
            items.append(CostLineItem(
                "Front-end servers", Decimal(config.front_end_servers), "servers",
                s.self_managed_per_front_end_price,
            ))
        result.line_items.extend(items)
        return sum((item.total for item in items), ZERO)

    # Add-ons

    def _add_on(
        self,
        result: OutSystemsPricingResult,
        name: str,
        quantity: int,
        unit: str,
        unit_price: Decimal,
    ) -> None:
        item = CostLineItem(name, Decimal(quantity), unit, unit_price)
        result.add_on_costs[name] = item.total
        result.line_items.append(item)

    def _price_add_ons(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> None:
        """Per-AO-pack and flat add-ons, skipping those the platform or deployment does not offer."""
        s = self.settings
        packs = result.total_ao_packs
        is_odc = config.platform == OutSystemsPlatform.ODC
        cloud = config.is_cloud

        if config.include_24x7_premium_support:
            self._add_on(result, "24x7 Premium Support", packs, "AO packs", s.support_24x7_premium_per_ao_pack)

        if config.include_sentry and cloud:
            self._add_on(result, "Sentry (includes HA)", packs, "AO packs", s.sentry_per_ao_pack)
        elif config.include_high_availability and is_odc:
            self._add_on(result, "High Availability", packs, "AO packs", s.odc_high_availability_per_ao_pack)

        if config.non_production_environment_quantity:
            name = "Non-production runtime" if is_odc else "Non-production environment"
            self._add_on(
                result, f"{name} (x{config.non_production_environment_quantity})",
                packs * config.non_production_environment_quantity, "AO packs",
                s.non_production_environment_per_ao_pack,
            )

        if is_odc:
            if config.include_private_gateway:
                self._add_on(result, "Private Gateway", packs, "AO packs", s.private_gateway_per_ao_pack)
            return

        if config.load_test_environment_quantity and cloud:
            self._add_on(
                result, f"Load test environment (x{config.load_test_environment_quantity})",
                packs * config.load_test_environment_quantity, "AO packs", s.load_test_environment_per_ao_pack,
            )
        if config.environment_pack_quantity:
            self._add_on(
                result, f"Environment pack (x{config.environment_pack_quantity})",
                packs * config.environment_pack_quantity, "AO packs", s.environment_pack_per_ao_pack,
            )
        if config.include_disaster_recovery and not cloud:
            self._add_on(
                result, "Disaster Recovery", packs, "AO packs", s.self_managed_disaster_recovery_per_ao_pack,
            )
        if config.log_streaming_quantity and cloud:
            self._add_on(
                result, f"Log streaming (x{config.log_streaming_quantity})",
                config.log_streaming_quantity, "add-ons", s.log_streaming_price,
            )
        if config.database_replica_quantity and cloud:
            self._add_on(
                result, f"Database replica (x{config.database_replica_quantity})",
                config.database_replica_quantity, "add-ons", s.database_replica_price,
            )

    def appshield_cost(self, user_volume: int) -> Decimal:
        """AppShield cost for a number of protected users, billed per user across volume bands."""
        return tiered_cost(user_volume, 0, self.settings.appshield_tiers)

    def _price_appshield(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> None:
        if not config.include_appshield:
            return
        if config.appshield_user_volume is not None:
            volume = config.appshield_user_volume
        elif config.use_unlimited_users:
            volume = self.settings.appshield_default_user_volume
        else:
            volume = config.internal_users + config.external_users

        result.appshield_user_volume = volume
        cost = self.appshield_cost(volume)
        result.add_on_costs["AppShield"] = cost
        result.line_items.append(CostLineItem(
            "AppShield", Decimal(1), "subscription", cost, notes=f"{volume:,} protected users",
        ))

    # Services

    def _price_services(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> None:
        prices = self.settings.services(config.region)
        services = [
            ("Essential Success Plan", config.essential_success_plans, "plans", prices.essential_success_plan),
            ("Premier Success Plan", config.premier_success_plans, "plans", prices.premier_success_plan),
            ("Dedicated group session", config.dedicated_group_sessions, "sessions", prices.dedicated_group_session),
            ("Public session", config.public_sessions, "sessions", prices.public_session),
            ("Expert day", config.expert_days, "days", prices.expert_day),
        ]
        for name, quantity, unit, unit_price in services:
            if not quantity:
                continue
            item = CostLineItem(
                f"{name} (x{quantity})", Decimal(quantity), unit, unit_price,
                notes=f"{config.region.value} pricing",
            )
            result.service_costs[item.description] = item.total
            result.line_items.append(item)

    # Infrastructure

    def _price_cloud_servers(self, config: OutSystemsDeploymentConfig, result: OutSystemsPricingResult) -> None:
        """Public cloud VMs for self-managed O11; nothing for Cloud, ODC or on-premises hardware."""
        if (
            config.platform != OutSystemsPlatform.O11
            or config.is_cloud
            or config.cloud_provider == OutSystemsCloudProvider.ON_PREMISES
        ):
            return

        instance = self.instance_type(config.cloud_provider, config.instance_type)
        servers = config.total_environments * config.servers_per_environment
        hours = app_config.HOURS_PER_MONTH

        result.vm_count = servers
        result.monthly_vm_cost = instance.hourly_rate * hours * servers
        result.vm_details = f"{servers}x {config.cloud_provider.value} {instance.describe()}"
        result.line_items.append(CostLineItem(
            result.vm_details, Decimal(servers * hours * app_config.MONTHS_PER_YEAR), "server-hours",
            instance.hourly_rate,
        ))

    def instance_type(self, provider: OutSystemsCloudProvider, name: Optional[str]) -> OutSystemsInstanceType:
        """
        Look up the VM size used for self-managed servers.

        Args:
            provider: Azure or AWS
            name: Instance type name, or None for the provider's recommended size

        Returns:
            The matching OutSystemsInstanceType

        Raises:
            OutSystemsPricingError: If the provider has no such instance type
        """
        name = name or DEFAULT_INSTANCE_TYPES.get(provider)
        instance = self.settings.instance_type(provider, name)
        if instance is None:
            raise OutSystemsPricingError(f"Unknown {provider.value} instance type: {name}")
        return instance
